from __future__ import annotations

"""
Go Tree Provider.

Bridges the tree-sitter Go grammar and the mutable declaration model.
Parsing builds a SyntaxTree whose nodes remember their byte spans;
serialization re-emits the original bytes for every untouched region and
renders only what the instrumentation core changed, so comments and
formatting outside the injected lines survive unchanged.
"""

import logging
from typing import Iterator, List, Optional, Tuple

import tree_sitter_go
from tree_sitter import Language, Node, Parser

from gotracer.domain.constants import GO_INDENT
from gotracer.domain.errors import ParseError, SerializationError, SynthesisError
from gotracer.domain.syntax_models import (
    Body,
    CallExpr,
    Decl,
    FieldGroup,
    FuncDecl,
    ImportDecl,
    ImportSpec,
    OpaqueDecl,
    RawExpr,
    RawStmt,
    SyntaxTree,
)

logger = logging.getLogger(__name__)

GO_LANGUAGE = Language(tree_sitter_go.language())

_FUNCTION_KINDS = ("function_declaration", "method_declaration")
_PARAMETER_KINDS = ("parameter_declaration", "variadic_parameter_declaration")

# Wrapper used to validate a single synthesized statement
_FRAGMENT_TEMPLATE = "package fragment\n\nfunc fragment() {{\n\t{stmt}\n}}\n"


def _new_parser() -> Parser:
    parser = Parser()
    parser.language = GO_LANGUAGE
    return parser


# -----------------------------------------------------------------------------
# PARSING
# -----------------------------------------------------------------------------

def parse_source(source: bytes, path: str) -> SyntaxTree:
    """
    Parse Go source bytes into a SyntaxTree.

    Args:
        source: Raw file content.
        path: Source identifier used in diagnostics.

    Returns:
        SyntaxTree: Declaration model backed by the concrete tree.

    Raises:
        ParseError: If the content is not UTF-8 or contains syntax errors.
    """
    try:
        source.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ParseError(path, f"not valid UTF-8 ({e.reason} at byte {e.start})") from e

    cst = _new_parser().parse(source)
    root = cst.root_node
    if root.has_error:
        bad = _first_error(root)
        row, col = bad.start_point if bad is not None else root.start_point
        raise ParseError(path, f"syntax error at line {row + 1}, column {col + 1}")

    header_end = 0
    decls: List[Decl] = []
    for child in root.named_children:
        if child.type == "package_clause":
            header_end = child.end_byte
        elif child.type == "comment":
            continue
        elif child.type == "import_declaration":
            decls.append(_build_import_decl(child))
        elif child.type in _FUNCTION_KINDS:
            decls.append(_build_func_decl(child))
        else:
            decls.append(OpaqueDecl(kind=child.type, start=child.start_byte, end=child.end_byte))

    logger.debug(f"Parsed {path}: {len(decls)} top-level declarations")
    return SyntaxTree(path=path, source=source, decls=decls, header_end=header_end, cst=cst)


def parse_call_fragment(text: str) -> CallExpr:
    """
    Re-parse a synthesized statement and return the call it holds.

    Accepts an expression statement or a deferred statement, with or
    without a closure around the call.

    Raises:
        SynthesisError: If the text is not exactly one valid call statement.
    """
    wrapped = _FRAGMENT_TEMPLATE.format(stmt=text).encode("utf-8")
    root = _new_parser().parse(wrapped).root_node
    if root.has_error:
        raise SynthesisError(text, "does not parse as Go")

    func = next((c for c in root.named_children if c.type == "function_declaration"), None)
    block = func.child_by_field_name("body") if func is not None else None
    statements = list(_statement_nodes(block)) if block is not None else []
    if len(statements) != 1:
        raise SynthesisError(text, f"expected one statement, found {len(statements)}")

    call, _ = _call_of(statements[0])
    if call is None:
        raise SynthesisError(text, f"'{statements[0].type}' is not a call statement")
    return call


# -----------------------------------------------------------------------------
# SERIALIZATION
# -----------------------------------------------------------------------------

def serialize_tree(tree: SyntaxTree) -> str:
    """
    Render a (possibly mutated) SyntaxTree back to Go source text.

    Raises:
        SerializationError: If the rendered bytes are not valid UTF-8.
    """
    src = tree.source
    nl = _newline(src)
    out: List[bytes] = [src[:tree.header_end]]
    cursor = tree.header_end

    for decl in tree.decls:
        if decl.start is None:
            separator = nl * 2 if cursor > 0 else b""
            out.append(separator + _render_decl(decl, src, nl))
            continue
        out.append(src[cursor:decl.start])
        out.append(_render_decl(decl, src, nl))
        cursor = decl.end

    out.append(src[cursor:])

    try:
        return b"".join(out).decode("utf-8")
    except UnicodeDecodeError as e:
        raise SerializationError(f"{tree.path}: rendered output is not UTF-8 ({e.reason})") from e


def _render_decl(decl: Decl, src: bytes, nl: bytes) -> bytes:
    if isinstance(decl, ImportDecl):
        return _render_import_decl(decl, src, nl)
    if isinstance(decl, FuncDecl):
        return _render_func_decl(decl, src, nl)
    return src[decl.start:decl.end]


def _render_import_decl(decl: ImportDecl, src: bytes, nl: bytes) -> bytes:
    if not decl.modified:
        return src[decl.start:decl.end]

    indent = GO_INDENT.encode("utf-8")
    if decl.start is None or not decl.parenthesized:
        lines = b"".join(indent + spec.render().encode("utf-8") + nl for spec in decl.specs)
        return b"import (" + nl + lines + b")"

    # Keep the original block and append the new specs before ')'
    head = src[decl.start:decl.rparen].rstrip(b" \t")
    if not head.endswith(b"\n"):
        head += nl
    added = b"".join(
        indent + spec.render().encode("utf-8") + nl
        for spec in decl.specs[decl.original_count:]
    )
    return head + added + src[decl.rparen:decl.end]


def _render_func_decl(decl: FuncDecl, src: bytes, nl: bytes) -> bytes:
    body = decl.body
    if body is None or all(stmt.start is not None for stmt in body.statements):
        return src[decl.start:decl.end]

    decl_indent = _line_indent(src, decl.start)
    indent = _body_indent(body, src, decl_indent)

    out: List[bytes] = [src[decl.start:body.lbrace_end]]
    cursor = body.lbrace_end
    pending_break = False

    for stmt in body.statements:
        if stmt.start is None:
            out.append(nl + indent + stmt.render().encode("utf-8"))
            pending_break = True
            continue
        gap = src[cursor:stmt.start]
        if pending_break and b"\n" not in gap:
            gap = nl + indent + gap.lstrip(b" \t")
        out.append(gap + src[stmt.start:stmt.end])
        cursor = stmt.end
        pending_break = False

    tail = src[cursor:decl.end]
    if pending_break:
        rest = tail.lstrip(b" \t")
        if not rest.startswith((b"\n", b"\r\n")):
            tail = nl + (decl_indent if rest.startswith(b"}") else indent) + rest
    out.append(tail)
    return b"".join(out)


def _newline(src: bytes) -> bytes:
    """Line terminator of the file, taken from its first line break."""
    first = src.find(b"\n")
    if first > 0 and src[first - 1:first] == b"\r":
        return b"\r\n"
    return b"\n"


def _line_indent(src: bytes, offset: int) -> bytes:
    line_start = src.rfind(b"\n", 0, offset) + 1
    prefix = src[line_start:offset]
    return prefix[:len(prefix) - len(prefix.lstrip(b" \t"))]


def _body_indent(body: Body, src: bytes, decl_indent: bytes) -> bytes:
    """
    Reuse the indentation of the first original statement on its own line.

    A statement at column 0 (typically a label) gives no indentation to
    reuse; the declaration indent plus one tab is used instead.
    """
    for stmt in body.statements:
        if stmt.start is None:
            continue
        line_start = src.rfind(b"\n", 0, stmt.start) + 1
        prefix = src[line_start:stmt.start]
        if line_start > body.lbrace_end and prefix and not prefix.strip():
            return prefix
        break
    return decl_indent + GO_INDENT.encode("utf-8")


# -----------------------------------------------------------------------------
# MODEL BUILDERS
# -----------------------------------------------------------------------------

def _build_import_decl(node: Node) -> ImportDecl:
    specs: List[ImportSpec] = []
    parenthesized = False
    rparen: Optional[int] = None

    for child in node.named_children:
        if child.type == "import_spec":
            specs.append(_build_import_spec(child))
        elif child.type == "import_spec_list":
            parenthesized = True
            rparen = child.end_byte - 1
            specs.extend(
                _build_import_spec(spec)
                for spec in child.named_children
                if spec.type == "import_spec"
            )

    return ImportDecl(
        specs=specs,
        parenthesized=parenthesized,
        start=node.start_byte,
        end=node.end_byte,
        rparen=rparen,
        original_count=len(specs),
    )


def _build_import_spec(node: Node) -> ImportSpec:
    name_node = node.child_by_field_name("name")
    path_node = node.child_by_field_name("path")
    path_text = _text(path_node) if path_node is not None else '""'
    return ImportSpec(
        path=path_text[1:-1],
        name=_text(name_node) if name_node is not None else None,
    )


def _build_func_decl(node: Node) -> FuncDecl:
    receiver = node.child_by_field_name("receiver")
    result = node.child_by_field_name("result")
    body_node = node.child_by_field_name("body")

    if result is None:
        results: List[FieldGroup] = []
    elif result.type == "parameter_list":
        results = _field_groups(result)
    else:
        results = [FieldGroup(names=[], type_text=_text(result))]

    return FuncDecl(
        name=_text(node.child_by_field_name("name")),
        params=_field_groups(node.child_by_field_name("parameters")),
        results=results,
        body=_build_body(body_node) if body_node is not None else None,
        start=node.start_byte,
        end=node.end_byte,
        receiver=_text(receiver) if receiver is not None else None,
        node=node,
        kind=node.type,
    )


def _field_groups(list_node: Optional[Node]) -> List[FieldGroup]:
    if list_node is None:
        return []
    groups: List[FieldGroup] = []
    for child in list_node.named_children:
        if child.type not in _PARAMETER_KINDS:
            continue
        type_node = child.child_by_field_name("type")
        groups.append(FieldGroup(
            names=[_text(n) for n in child.children_by_field_name("name")],
            type_text=_text(type_node) if type_node is not None else "",
            variadic=child.type == "variadic_parameter_declaration",
        ))
    return groups


def _build_body(block: Node) -> Body:
    statements = []
    for node in _statement_nodes(block):
        call, closure = _call_of(node)
        statements.append(RawStmt(
            kind=node.type,
            text=_text(node),
            start=node.start_byte,
            end=node.end_byte,
            call=call,
            closure=closure,
        ))
    return Body(statements=statements, lbrace_end=block.start_byte + 1, rbrace=block.end_byte - 1)


def _statement_nodes(block: Node) -> Iterator[Node]:
    """Yield the statements of a block, flattening the statement list node."""
    for child in block.named_children:
        if child.type == "statement_list":
            yield from (c for c in child.named_children if c.type != "comment")
        elif child.type != "comment":
            yield child


def _call_of(stmt: Node) -> Tuple[Optional[CallExpr], bool]:
    """Extract the call carried by an expression or defer statement."""
    if stmt.type not in ("expression_statement", "defer_statement"):
        return None, False

    expr = next((c for c in stmt.named_children if c.type != "comment"), None)
    if expr is None or expr.type != "call_expression":
        return None, False

    function = expr.child_by_field_name("function")
    if stmt.type == "defer_statement" and function is not None and function.type == "func_literal":
        inner_body = function.child_by_field_name("body")
        inner = list(_statement_nodes(inner_body)) if inner_body is not None else []
        if len(inner) == 1:
            call, _ = _call_of(inner[0])
            if call is not None:
                return call, True

    return _build_call(expr), False


def _build_call(node: Node) -> CallExpr:
    function = node.child_by_field_name("function")
    arguments = node.child_by_field_name("arguments")
    args = tuple(
        RawExpr(_text(arg))
        for arg in (arguments.named_children if arguments is not None else [])
        if arg.type != "comment"
    )
    return CallExpr(func=_text(function) if function is not None else "", args=args)


# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _text(node: Node) -> str:
    return node.text.decode("utf-8")


def _first_error(node: Node) -> Optional[Node]:
    """Locate the first ERROR or MISSING node in document order."""
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None

from __future__ import annotations

"""
Syntax Tree Domain Models.

Mutable declaration-level view of a Go source file, layered on top of the
immutable concrete tree produced by the parser. Parsed nodes remember their
byte span in the original source so untouched regions are re-emitted
verbatim; synthesized nodes carry no span and render themselves.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple, Union

from gotracer.domain.constants import BLANK_IDENTIFIER

# -----------------------------------------------------------------------------
# EXPRESSIONS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Ident:
    """Bare Go identifier."""
    name: str

    def render(self) -> str:
        return self.name


@dataclass(frozen=True)
class StringLit:
    """Go interpreted string literal built from an unquoted Python value."""
    value: str

    def render(self) -> str:
        return go_quote(self.value)


@dataclass(frozen=True)
class RawExpr:
    """Expression copied from parsed source, kept as text."""
    text: str

    def render(self) -> str:
        return self.text


Expr = Union[Ident, StringLit, RawExpr, "CallExpr"]


@dataclass(frozen=True)
class CallExpr:
    """
    Function call expression.

    Attributes:
        func: Callee as Go text (e.g. 'logrus.Infof').
        args: Ordered argument expressions.
    """
    func: str
    args: Tuple[Expr, ...] = ()

    def render(self) -> str:
        return f"{self.func}({', '.join(arg.render() for arg in self.args)})"


# -----------------------------------------------------------------------------
# STATEMENTS
# -----------------------------------------------------------------------------

@dataclass
class RawStmt:
    """
    Statement parsed from the original source.

    Attributes:
        kind: Grammar node kind (e.g. 'return_statement').
        text: Exact source text of the statement.
        start: Byte offset of the statement in the source.
        end: Byte offset just past the statement.
        call: Called expression when the statement is a call or a deferred call.
        closure: True when a deferred call is wrapped in a function literal.
    """
    kind: str
    text: str
    start: int
    end: int
    call: Optional[CallExpr] = None
    closure: bool = False

    def render(self) -> str:
        return self.text


@dataclass
class ExprStmt:
    """Synthesized expression statement."""
    call: CallExpr
    kind: str = "expression_statement"
    start: Optional[int] = None

    def render(self) -> str:
        return self.call.render()


@dataclass
class DeferStmt:
    """
    Synthesized deferred statement.

    With closure=True the call is wrapped in a function literal so its
    arguments are evaluated when the function exits, not when the defer
    is registered.
    """
    call: CallExpr
    closure: bool = False
    kind: str = "defer_statement"
    start: Optional[int] = None

    def render(self) -> str:
        if self.closure:
            return f"defer func() {{ {self.call.render()} }}()"
        return f"defer {self.call.render()}"


Statement = Union[RawStmt, ExprStmt, DeferStmt]

# -----------------------------------------------------------------------------
# DECLARATIONS
# -----------------------------------------------------------------------------

@dataclass
class FieldGroup:
    """
    One parameter or result group: names sharing a single type.

    An empty name list means the entry is unnamed (type only).
    """
    names: List[str]
    type_text: str
    variadic: bool = False


@dataclass
class Body:
    """
    Statement sequence of a function body.

    Attributes:
        statements: Ordered statements; synthesized ones have start=None.
        lbrace_end: Byte offset just past the opening brace.
        rbrace: Byte offset of the closing brace.
    """
    statements: List[Statement]
    lbrace_end: int
    rbrace: int


@dataclass
class FuncDecl:
    """
    Top-level function or method declaration.

    Attributes:
        name: Declared name.
        params: Ordered parameter groups.
        results: Ordered result groups (empty when the function returns nothing).
        body: Statement sequence, None for externally implemented functions.
        receiver: Receiver list text for methods.
        start: Byte offset of the declaration.
        end: Byte offset just past the declaration.
        node: Backing concrete syntax node.
    """
    name: str
    params: List[FieldGroup]
    results: List[FieldGroup]
    body: Optional[Body]
    start: int
    end: int
    receiver: Optional[str] = None
    node: Any = field(default=None, repr=False, compare=False)
    kind: str = "function_declaration"

    @property
    def param_names(self) -> List[str]:
        """Named, non-blank parameters in declaration order."""
        return _traceable_names(self.params)

    @property
    def result_names(self) -> List[str]:
        """Named, non-blank results in declaration order."""
        return _traceable_names(self.results)


@dataclass
class ImportSpec:
    """Single import: optional alias plus unquoted package path."""
    path: str
    name: Optional[str] = None

    def render(self) -> str:
        prefix = f"{self.name} " if self.name else ""
        return f"{prefix}{go_quote(self.path)}"


@dataclass
class ImportDecl:
    """
    Import declaration block.

    Attributes:
        specs: Ordered import specs, including appended ones.
        parenthesized: True for the 'import ( ... )' form.
        start: Byte offset of the declaration, None when synthesized.
        end: Byte offset just past the declaration.
        rparen: Byte offset of the closing parenthesis.
        original_count: Number of specs present in the parsed source.
    """
    specs: List[ImportSpec]
    parenthesized: bool = True
    start: Optional[int] = None
    end: Optional[int] = None
    rparen: Optional[int] = None
    original_count: int = 0
    kind: str = "import_declaration"

    @property
    def modified(self) -> bool:
        return self.start is None or len(self.specs) != self.original_count


@dataclass
class OpaqueDecl:
    """Any other top-level declaration (types, constants, variables)."""
    kind: str
    start: int
    end: int


Decl = Union[ImportDecl, FuncDecl, OpaqueDecl]


@dataclass
class SyntaxTree:
    """
    Root of a parsed Go source file.

    Attributes:
        path: Source file identifier.
        source: Original source bytes.
        decls: Ordered top-level declarations.
        header_end: Byte offset just past the package clause.
        cst: Backing concrete syntax tree.
    """
    path: str
    source: bytes
    decls: List[Decl]
    header_end: int = 0
    cst: Any = field(default=None, repr=False, compare=False)

    @property
    def imports(self) -> List[ImportDecl]:
        return [d for d in self.decls if isinstance(d, ImportDecl)]

    @property
    def functions(self) -> List[FuncDecl]:
        return [d for d in self.decls if isinstance(d, FuncDecl)]

    def func_at(self, start: int) -> Optional[FuncDecl]:
        """Return the function declaration starting at the given byte offset."""
        for decl in self.decls:
            if isinstance(decl, FuncDecl) and decl.start == start:
                return decl
        return None

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

_GO_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def go_quote(value: str) -> str:
    """Render a Python string as a Go interpreted string literal."""
    return '"' + "".join(_GO_ESCAPES.get(ch, ch) for ch in value) + '"'


def _traceable_names(groups: List[FieldGroup]) -> List[str]:
    return [
        name
        for group in groups
        for name in group.names
        if name != BLANK_IDENTIFIER
    ]

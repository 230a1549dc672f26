from __future__ import annotations

"""
Trace Statement Synthesizer.

Builds the entry and exit logging calls for a function from its qualified
name and its traceable parameter and result names. Calls are assembled from
typed expression nodes, then rendered and re-parsed through the tree
provider: a fragment that does not come back as a single valid call is an
internal defect and raises SynthesisError.
"""

import logging
from typing import List, Sequence

from gotracer.core.parsing.tree_provider import parse_call_fragment
from gotracer.domain.constants import VALUE_VERB
from gotracer.domain.errors import SynthesisError
from gotracer.domain.syntax_models import CallExpr, DeferStmt, ExprStmt, FuncDecl, Ident, StringLit
from gotracer.domain.trace_models import TracePair, TraceSettings

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def qualified_name(path: str, fn: FuncDecl) -> str:
    """Identify a function by its source path and declared name."""
    return f"{path}:{fn.name}"


def build_entry_call(name: str, params: Sequence[str], settings: TraceSettings) -> CallExpr:
    """
    Build the entry trace call.

    The message holds the call marker, the qualified name and one
    'param:%+v' field per parameter; the parameters follow as arguments.
    """
    fields = ", ".join(f"{param}:{VALUE_VERB}" for param in params)
    message = f"{escape_verbs(settings.call_marker)} {escape_verbs(name)}({fields})"
    return CallExpr(settings.logger_call, (StringLit(message),) + tuple(Ident(p) for p in params))


def build_exit_call(results: Sequence[str], settings: TraceSettings) -> CallExpr:
    """
    Build the exit trace call.

    One '%+v' placeholder per named result, so the placeholder count always
    equals the argument count.
    """
    message = escape_verbs(settings.return_marker)
    if results:
        message = f"{message} {', '.join(VALUE_VERB for _ in results)}"
    return CallExpr(settings.logger_call, (StringLit(message),) + tuple(Ident(r) for r in results))


def synthesize_traces(path: str, fn: FuncDecl, settings: TraceSettings) -> TracePair:
    """
    Synthesize and validate the trace pair of a function.

    Args:
        path: Source file identifier, embedded in the entry message.
        fn: Function declaration being instrumented.
        settings: Trace synthesis options.

    Returns:
        TracePair: Validated entry and exit calls.

    Raises:
        SynthesisError: If either rendered call is not valid Go.
    """
    entry = build_entry_call(qualified_name(path, fn), fn.param_names, settings)
    exit_call = build_exit_call(fn.result_names, settings)

    _validate(ExprStmt(entry).render(), entry)
    _validate(DeferStmt(exit_call).render(), exit_call)

    return TracePair(entry=entry, exit=exit_call)


def escape_verbs(text: str) -> str:
    """Double '%' so free text is never read as a formatting verb."""
    return text.replace("%", "%%")

# -----------------------------------------------------------------------------
# VALIDATION
# -----------------------------------------------------------------------------

def _validate(fragment: str, expected: CallExpr) -> None:
    parsed = parse_call_fragment(fragment)

    if parsed.func != expected.func:
        raise SynthesisError(fragment, f"callee parsed as {parsed.func!r}")

    rendered: List[str] = [arg.render() for arg in expected.args]
    reparsed: List[str] = [arg.render() for arg in parsed.args]
    if reparsed != rendered:
        raise SynthesisError(
            fragment,
            f"expected {len(rendered)} arguments, parsed {len(reparsed)}",
        )

    logger.debug(f"Synthesized fragment validated: {fragment}")

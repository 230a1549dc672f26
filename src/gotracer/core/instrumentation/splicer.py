from __future__ import annotations

"""
Body Splicer.

Prepends the trace pair to a function body: the entry call as an
expression statement, then the exit call as a deferred statement, then the
original statements. The deferred statement is registered before any
original statement can return, so it runs exactly once on every exit path.
"""

from gotracer.domain.syntax_models import Body, DeferStmt, ExprStmt, go_quote
from gotracer.domain.trace_models import TracePair


def splice_traces(body: Body, traces: TracePair, *, closure: bool = False) -> None:
    """
    Insert the trace statements at the front of the body.

    No duplicate check happens here: splicing an already traced body nests
    a second pair in front of the first.

    Args:
        body: Target statement sequence, mutated in place.
        traces: Entry and exit calls.
        closure: Wrap the deferred call in a function literal.
    """
    body.statements[0:0] = [
        ExprStmt(traces.entry),
        DeferStmt(traces.exit, closure=closure),
    ]


def is_instrumented(body: Body, call_marker: str) -> bool:
    """
    Detect a body that already opens with an entry trace.

    Looks at the first statement only: an expression statement whose call
    message starts with the call marker.
    """
    if not body.statements:
        return False
    first = body.statements[0]
    if first.kind != "expression_statement" or first.call is None or not first.call.args:
        return False
    message = first.call.args[0].render()
    opening = go_quote(call_marker.replace("%", "%%"))[:-1]
    return message.startswith(opening)

from __future__ import annotations

"""
Trace Instrumenter.

Visitor driven by the DeclarationWalker: every function and method
declaration gets a synthesized trace pair spliced into its body, and every
return statement is counted.
"""

import logging

from tree_sitter import Node

from gotracer.core.instrumentation.splicer import is_instrumented, splice_traces
from gotracer.core.instrumentation.synthesizer import synthesize_traces
from gotracer.core.instrumentation.walker import DeclarationWalker
from gotracer.domain.syntax_models import FuncDecl, SyntaxTree
from gotracer.domain.trace_models import InstrumentationReport, TraceSettings

logger = logging.getLogger(__name__)


class TraceInstrumenter:
    """
    Per-file instrumentation state.

    Attributes:
        changed: Set once any function declaration has been visited.
        functions: Bodies that received a trace pair.
        skipped: Visited declarations left untouched.
        returns_seen: Return statements encountered.
    """

    def __init__(self, tree: SyntaxTree, settings: TraceSettings) -> None:
        self.tree = tree
        self.settings = settings
        self.changed = False
        self.functions = 0
        self.skipped = 0
        self.returns_seen = 0

    # --- visitors ---

    def visit_function_declaration(self, node: Node) -> None:
        fn = self.tree.func_at(node.start_byte)
        if fn is not None:
            self._instrument(fn)

    visit_method_declaration = visit_function_declaration

    def visit_return_statement(self, node: Node) -> None:
        self.returns_seen += 1

    # --- internals ---

    def _instrument(self, fn: FuncDecl) -> None:
        self.changed = True

        if fn.body is None:
            logger.debug(f"{self.tree.path}:{fn.name} has no body, not traced")
            self.skipped += 1
            return

        if self.settings.skip_instrumented and is_instrumented(fn.body, self.settings.call_marker):
            logger.debug(f"{self.tree.path}:{fn.name} already traced, skipped")
            self.skipped += 1
            return

        traces = synthesize_traces(self.tree.path, fn, self.settings)
        closure = self.settings.capture_results_at_exit and bool(fn.result_names)
        splice_traces(fn.body, traces, closure=closure)
        self.functions += 1

    def report(self) -> InstrumentationReport:
        return InstrumentationReport(
            changed=self.changed,
            functions=self.functions,
            skipped=self.skipped,
            returns_seen=self.returns_seen,
        )


def instrument_tree(tree: SyntaxTree, settings: TraceSettings) -> InstrumentationReport:
    """
    Walk a syntax tree and splice traces into every function body.

    Args:
        tree: Parsed file, mutated in place.
        settings: Trace synthesis options.

    Returns:
        InstrumentationReport: Change flag and counters for the file.

    Raises:
        SynthesisError: If a synthesized trace is not valid Go.
    """
    instrumenter = TraceInstrumenter(tree, settings)
    DeclarationWalker(instrumenter).walk(tree.cst.root_node)
    report = instrumenter.report()
    logger.debug(
        f"{tree.path}: {report.functions} functions traced, "
        f"{report.skipped} skipped, {report.returns_seen} return statements"
    )
    return report

from __future__ import annotations

"""
Trace Domain Models.

Settings that shape the synthesized trace statements and the records the
instrumentation core hands back to the pipeline.
"""

from dataclasses import dataclass
from typing import Any, Dict

from gotracer.domain.constants import (
    CALL_MARKER,
    LOGGER_CALL,
    LOGGER_IMPORT_PATH,
    RETURN_MARKER,
)
from gotracer.domain.syntax_models import CallExpr


@dataclass(frozen=True)
class TraceSettings:
    """
    Immutable trace synthesis options.

    Attributes:
        import_path: Package ensured in every instrumented file.
        logger_call: printf-style function called by the traces.
        call_marker: Token opening every entry message.
        return_marker: Token opening every exit message.
        capture_results_at_exit: Wrap the exit call in a closure when the
            function has named results, so their final values are logged.
        skip_instrumented: Leave bodies that already start with an entry
            trace untouched.
    """
    import_path: str = LOGGER_IMPORT_PATH
    logger_call: str = LOGGER_CALL
    call_marker: str = CALL_MARKER
    return_marker: str = RETURN_MARKER
    capture_results_at_exit: bool = True
    skip_instrumented: bool = False

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "TraceSettings":
        """Build settings from a validated configuration dictionary."""
        return cls(
            import_path=cfg["logger_import_path"],
            logger_call=cfg["logger_call"],
            call_marker=cfg["call_marker"],
            return_marker=cfg["return_marker"],
            capture_results_at_exit=cfg["capture_results_at_exit"],
            skip_instrumented=cfg["skip_instrumented"],
        )


@dataclass(frozen=True)
class TracePair:
    """Entry and exit calls synthesized for one function."""
    entry: CallExpr
    exit: CallExpr


@dataclass(frozen=True)
class InstrumentationReport:
    """
    Result of walking one syntax tree.

    Attributes:
        changed: True iff at least one function declaration was visited.
        functions: Bodies that received a trace pair.
        skipped: Visited functions left untouched (no body, or already traced).
        returns_seen: Return statements encountered during the walk.
    """
    changed: bool
    functions: int
    skipped: int
    returns_seen: int

from __future__ import annotations

"""
Pipeline Domain Data Models.

Defines the result structures exchanged between the instrumentation
pipeline and the interface layer, plus the factory functions that build
them.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# -----------------------------------------------------------------------------
# PER-FILE MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FileError:
    """
    Failure recorded for a single source file.

    Attributes:
        path: Source file identifier.
        error: Descriptive exception or error message.
    """
    path: str
    error: str


@dataclass(frozen=True)
class FileReport:
    """
    Outcome of a successfully processed source file.

    Attributes:
        path: Source file identifier.
        functions: Number of function bodies that received traces.
        skipped: Number of visited functions left untouched.
        import_added: Whether the logging import had to be added.
        written: Whether the file on disk was replaced.
    """
    path: str
    functions: int
    skipped: int = 0
    import_added: bool = False
    written: bool = False

# -----------------------------------------------------------------------------
# RUN MODEL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class RunResult:
    """
    Aggregated result of an instrumentation run.

    Attributes:
        ok: False only when the run could not start.
        error: Descriptive message when ok is False.
        dry_run: Whether output went to stdout instead of the files.
        processed: Reports of the files processed successfully.
        errors: Per-file failures; they never stop the batch.
        summary: Execution statistics.
    """
    ok: bool
    error: str
    dry_run: bool
    processed: List[FileReport] = field(default_factory=list)
    errors: List[FileError] = field(default_factory=list)
    summary: Dict[str, Any] = field(default_factory=dict)

    @property
    def instrumented_functions(self) -> int:
        return sum(report.functions for report in self.processed)

# -----------------------------------------------------------------------------
# FACTORIES
# -----------------------------------------------------------------------------

def create_error_result(error: str, cfg: Optional[Dict[str, Any]] = None) -> RunResult:
    """Build the result of a run that failed before processing any file."""
    cfg = cfg or {}
    return RunResult(
        ok=False,
        error=error,
        dry_run=bool(cfg.get("dry_run", True)),
        summary={"paths": list(cfg.get("paths", []))},
    )


def create_success_result(
        cfg: Dict[str, Any],
        processed: List[FileReport],
        errors: List[FileError],
) -> RunResult:
    """Build the result of a completed run, computing its summary."""
    summary = {
        "paths": list(cfg.get("paths", [])),
        "dry_run": bool(cfg.get("dry_run", True)),
        "processed": len(processed),
        "errors": len(errors),
        "functions": sum(r.functions for r in processed),
        "imports_added": sum(1 for r in processed if r.import_added),
        "written": sum(1 for r in processed if r.written),
    }
    return RunResult(
        ok=True,
        error="",
        dry_run=summary["dry_run"],
        processed=list(processed),
        errors=list(errors),
        summary=summary,
    )

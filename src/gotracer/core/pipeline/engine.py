from __future__ import annotations

"""
Core orchestration pipeline.

Coordinates the instrumentation of every discovered source file:
1. Validates the configuration.
2. Discovers candidate files under each input root.
3. Per file: parse, walk and splice, ensure the logging import, serialize.
4. Emits the result to stdout (dry run) or back onto the file (live run).

Per-file failures are recorded and the batch continues; a SynthesisError is
an internal defect and stops the run.
"""

import logging
from typing import Any, Dict, List, Optional, TextIO

from gotracer.core.instrumentation.imports import ensure_import
from gotracer.core.instrumentation.instrumenter import instrument_tree
from gotracer.core.parsing.tree_provider import parse_source, serialize_tree
from gotracer.core.pipeline.components.filters import compile_patterns
from gotracer.core.pipeline.components.writer import emit_source
from gotracer.core.pipeline.stages.validator import validate_config
from gotracer.core.services.scanner import yield_source_files
from gotracer.domain.errors import GoTracerError, SynthesisError
from gotracer.domain.pipeline_models import (
    FileError,
    FileReport,
    RunResult,
    create_error_result,
    create_success_result,
)
from gotracer.domain.trace_models import TraceSettings
from gotracer.infra.fs import normalize_path, read_source

logger = logging.getLogger(__name__)


def run_pipeline(
        config: Optional[Dict[str, Any]],
        *,
        stream: Optional[TextIO] = None,
) -> RunResult:
    """
    Execute an instrumentation run over every configured path.

    Args:
        config: The configuration dictionary (raw or partial).
        stream: Dry-run destination, defaults to sys.stdout.

    Returns:
        RunResult: Per-file reports, failures and summary.

    Raises:
        SynthesisError: If a synthesized trace is not valid Go.
    """
    # -------------------------------------------------------------------------
    # 1) Config Normalization
    # -------------------------------------------------------------------------
    cfg, warnings = validate_config(config, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    paths = [normalize_path(p, ".") for p in cfg["paths"]]
    if not paths:
        msg = "No input paths provided."
        logger.error(msg)
        return create_error_result(msg, cfg)

    settings = TraceSettings.from_config(cfg)
    exclude_rx = compile_patterns(cfg["exclude_patterns"])
    dry_run = cfg["dry_run"]

    logger.info(f"paths::: {paths}")
    logger.debug(f"Mode: {'dry run' if dry_run else 'live'}, settings: {settings}")

    # -------------------------------------------------------------------------
    # 2) Sequential Per-File Processing
    # -------------------------------------------------------------------------
    processed: List[FileReport] = []
    errors: List[FileError] = []

    for candidate in yield_source_files(paths, cfg["extensions"], exclude_rx):
        file_path = candidate["file_path"]
        try:
            report = process_file(
                file_path,
                settings,
                dry_run=dry_run,
                atomic=cfg["atomic_write"],
                stream=stream,
            )
        except SynthesisError:
            logger.critical(f"Internal error while instrumenting {file_path}. Aborting run.")
            raise
        except (GoTracerError, OSError) as e:
            logger.error(f"Error found while parsing {file_path}: {e}")
            errors.append(FileError(path=file_path, error=str(e)))
            continue
        processed.append(report)

    result = create_success_result(cfg, processed, errors)
    logger.info(
        f"Run finished: {result.summary['processed']} files processed, "
        f"{result.summary['functions']} functions traced, "
        f"{result.summary['errors']} errors."
    )
    return result


def process_file(
        file_path: str,
        settings: TraceSettings,
        *,
        dry_run: bool,
        atomic: bool = True,
        stream: Optional[TextIO] = None,
) -> FileReport:
    """
    Instrument a single source file.

    Parsed -> Walked -> (DependencyEnsured) -> Serialized, then emitted.
    In live mode a file whose serialized text did not change is not
    rewritten.

    Raises:
        ParseError: If the file is not valid Go.
        SerializationError: If the mutated tree cannot be rendered.
        SynthesisError: If a synthesized trace is not valid Go.
        OSError: If the file cannot be read or written.
    """
    source = read_source(file_path)
    tree = parse_source(source, file_path)

    walk = instrument_tree(tree, settings)

    import_added = False
    if walk.changed:
        import_added = ensure_import(tree, settings.import_path)

    text = serialize_tree(tree)

    written = False
    if dry_run or text.encode("utf-8") != source:
        written = emit_source(file_path, text, dry_run=dry_run, atomic=atomic, stream=stream)
    else:
        logger.debug(f"{file_path} unchanged, not rewritten")

    return FileReport(
        path=file_path,
        functions=walk.functions,
        skipped=walk.skipped,
        import_added=import_added,
        written=written,
    )

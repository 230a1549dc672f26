from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration
resolution (defaults, optional JSON file, CLI overrides), pipeline
execution and exit code mapping. stdout belongs to the instrumented
sources; every diagnostic goes through logging to stderr.
"""

import json
import sys
from typing import Any, Dict, List, Optional

from gotracer.core.pipeline.engine import run_pipeline
from gotracer.core.pipeline.stages.validator import validate_config
from gotracer.domain.config import get_default_config, load_config
from gotracer.domain.errors import ConfigError, SynthesisError
from gotracer.domain.pipeline_models import RunResult
from gotracer.infra.logging import LoggingConfig, configure_logging, get_logger
from gotracer.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_INTERNAL_ERROR = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Per-file failures never change the exit code; they are logged one line
    per file.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (console on stderr)
    configure_logging(LoggingConfig.for_cli(debug=args.debug, log_file=args.log_file))

    logger.debug("CLI execution initiated. Resolving configuration...")

    # 3. Resolve base configuration (defaults vs JSON file)
    try:
        base_conf = load_config(args.config_file) if args.config_file else get_default_config()
    except ConfigError as e:
        logger.error(str(e))
        return EXIT_USAGE

    # 4. Merge command-line overrides and validate
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    if not clean_conf["paths"]:
        parser.print_usage(sys.stderr)
        logger.error("No paths to instrument: use --paths.")
        return EXIT_USAGE

    # 5. Pipeline execution phase
    try:
        result = run_pipeline(clean_conf)
    except KeyboardInterrupt:
        logger.warning("Interrupted. Files already rewritten keep their new content.")
        return EXIT_INTERRUPTED
    except SynthesisError as e:
        logger.critical(f"Internal synthesis failure: {e}", exc_info=True)
        return EXIT_INTERNAL_ERROR

    if not result.ok:
        logger.error(result.error)
        return EXIT_USAGE

    _log_summary(result)
    return EXIT_OK

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Perform a shallow merge of override values into the base configuration.

    Only known keys are merged.
    """
    out = dict(base)
    for k in get_default_config():
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# REPORTING
# -----------------------------------------------------------------------------

def _log_summary(result: RunResult) -> None:
    """Report the run statistics on the diagnostic channel."""
    summary = result.summary
    mode = "dry run" if result.dry_run else "live"
    logger.info(
        f"Summary ({mode}): {summary['processed']} processed, "
        f"{summary['written']} rewritten, {summary['imports_added']} imports added, "
        f"{summary['errors']} failed."
    )
    for err in result.errors:
        logger.info(f"  - failed: {err.path}: {err.error}")


if __name__ == "__main__":
    sys.exit(main())

from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema (help messages, argument types
and defaults) and translates the parsed namespace into configuration
overrides.
"""

import argparse
from typing import Any, Dict, List, Optional

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the gotracer CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="gotracer",
        description="Inject call/return trace logging into every Go function body.",
    )

    # --- Input Discovery ---
    p.add_argument(
        "--paths",
        nargs="+",
        default=None,
        metavar="PATH",
        help="Files or directories to instrument. A single value may hold "
             "several space-separated paths.",
    )
    p.add_argument(
        "--ext",
        dest="extensions",
        default=None,
        help="Comma-separated source extensions (default: .go).",
    )
    p.add_argument(
        "--exclude",
        dest="exclude_patterns",
        default=None,
        help="Comma-separated regexes of directory or file names to skip.",
    )

    # --- Output Mode ---
    p.add_argument(
        "--dry",
        dest="dry_run",
        nargs="?",
        const=True,
        default=None,
        type=_parse_bool,
        metavar="BOOL",
        help="Print instrumented sources instead of rewriting files "
             "(default: true; use --dry=false to rewrite in place).",
    )
    p.add_argument(
        "--no-atomic",
        action="store_true",
        help="Truncate and rewrite files in place instead of replacing them atomically.",
    )

    # --- Trace Synthesis ---
    p.add_argument(
        "--skip-instrumented",
        action="store_true",
        help="Leave functions that already start with an entry trace untouched.",
    )
    p.add_argument(
        "--no-capture-results",
        action="store_true",
        help="Defer the exit trace call directly, evaluating results at registration.",
    )

    # --- Configuration and Diagnostic Tools ---
    p.add_argument(
        "--config",
        dest="config_file",
        default=None,
        help="JSON file with configuration values.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the resolved configuration as JSON and exit.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write diagnostics to this rotating log file.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration dictionary.

    Only options the user actually set are present, so file and default
    values survive for everything else.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    if args.paths:
        overrides["paths"] = _split_paths(args.paths)
    if args.dry_run is not None:
        overrides["dry_run"] = args.dry_run

    if args.extensions:
        overrides["extensions"] = _split_csv(args.extensions)
    if args.exclude_patterns:
        overrides["exclude_patterns"] = _split_csv(args.exclude_patterns)

    if args.no_atomic:
        overrides["atomic_write"] = False
    if args.skip_instrumented:
        overrides["skip_instrumented"] = True
    if args.no_capture_results:
        overrides["capture_results_at_exit"] = False

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _parse_bool(value: str) -> bool:
    """Parse the value of a boolean flag ('--dry=false')."""
    s = value.strip().lower()
    if s in ("true", "1", "yes", "y", "on"):
        return True
    if s in ("false", "0", "no", "n", "off"):
        return False
    raise argparse.ArgumentTypeError(f"invalid boolean value: '{value}'")


def _split_paths(values: List[str]) -> List[str]:
    """Flatten path tokens, each of which may hold space-separated paths."""
    return [p for value in values for p in value.split()]


def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """
    Convert a comma-separated string into a list of sanitized strings.
    """
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]

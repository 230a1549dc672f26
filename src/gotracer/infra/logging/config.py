from __future__ import annotations

"""
Diagnostic Logging Settings.

gotracer keeps two output channels apart: stdout carries the instrumented Go
sources during a dry run, so every diagnostic (discovered files, per-file
parse failures, the run summary) is logged to stderr and, on request, to a
rotating file.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

# Level names accepted from the command line and configuration files
_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class LoggingConfig:
    """
    Sinks and formats for the tool's own diagnostics.

    Attributes:
        level: Minimum severity; DEBUG also reports per-function decisions
            (skipped bodies, validated fragments).
        console: Log to stderr; never stdout, which belongs to dry-run output.
        log_file: Optional rotating file receiving the same records.
        max_bytes: Size of a log file segment before rotation.
        backup_count: Rotated segments kept next to the log file.
        console_fmt: Terse stderr format, one line per file event.
        file_fmt: Timestamped format including the emitting module.
        datefmt: Timestamp format of file entries.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 2 * 1024 * 1024
    backup_count: int = 3

    console_fmt: str = "%(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def for_cli(cls, *, debug: bool, log_file: Optional[str] = None) -> "LoggingConfig":
        """Settings for a command-line run: stderr always on, DEBUG on request."""
        return cls(level="DEBUG" if debug else "INFO", console=True, log_file=log_file)

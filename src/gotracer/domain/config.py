from __future__ import annotations

"""
Configuration Domain Management.

Provides the default runtime configuration and the optional JSON file
source layered under command-line overrides. Nothing is persisted: each
run resolves its configuration from scratch.
"""

import json
import logging
import os
from typing import Any, Dict, List

from gotracer.domain.constants import (
    CALL_MARKER,
    GO_SOURCE_EXTENSIONS,
    LOGGER_CALL,
    LOGGER_IMPORT_PATH,
    RETURN_MARKER,
)
from gotracer.domain.errors import ConfigError

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
DEFAULT_EXCLUDE_PATTERNS: List[str] = [
    r"^(\.git|\.hg|\.svn|\.idea|\.vscode)$",
]


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.
    This dictionary drives the behavior of the pipeline.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Input discovery
        "paths": [],
        "extensions": list(GO_SOURCE_EXTENSIONS),
        "exclude_patterns": list(DEFAULT_EXCLUDE_PATTERNS),

        # Output mode
        "dry_run": True,
        "atomic_write": True,

        # Trace synthesis
        "logger_import_path": LOGGER_IMPORT_PATH,
        "logger_call": LOGGER_CALL,
        "call_marker": CALL_MARKER,
        "return_marker": RETURN_MARKER,
        "capture_results_at_exit": True,
        "skip_instrumented": False,
    }


# -----------------------------------------------------------------------------
# File Source
# -----------------------------------------------------------------------------
def load_config(config_file: str) -> Dict[str, Any]:
    """
    Load a JSON configuration file on top of the defaults.

    Unknown keys are dropped with a warning so a typo never reaches the
    pipeline silently.

    Args:
        config_file: Path to a JSON object file.

    Returns:
        Dict[str, Any]: Defaults updated with the file values.

    Raises:
        ConfigError: If the file is missing, unreadable or not a JSON object.
    """
    if not os.path.isfile(config_file):
        raise ConfigError(f"Configuration file not found: {config_file}")

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigError(f"Failed to load configuration '{config_file}': {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(
            f"Configuration '{config_file}' must hold a JSON object, "
            f"found {type(data).__name__}."
        )

    config = get_default_config()
    for key, value in data.items():
        if key not in config:
            logger.warning(f"Ignoring unknown configuration key '{key}' in {config_file}")
            continue
        config[key] = value

    logger.debug(f"Configuration loaded from {config_file}")
    return config

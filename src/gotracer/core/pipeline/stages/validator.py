from __future__ import annotations

"""
Configuration Validation Service.

Gatekeeper between raw configuration sources (JSON file, CLI overrides) and
the pipeline. Handles type coercion, default injection and the domain
checks on the trace synthesis options.
"""

import logging
import re
from typing import Any, Dict, List, Tuple

from gotracer.core.pipeline.components.filters import (
    default_exclude_patterns,
    default_extensions,
)
from gotracer.domain.config import get_default_config

logger = logging.getLogger(__name__)

# Callee accepted for the trace calls: 'Func' or 'pkg.Func'
_CALLEE_RX = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raises exceptions on type mismatch instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: A tuple containing the normalized
                                          configuration and a list of warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    # 1. Base Type Validation
    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    # 2. Schema Definition (Declarative mapping)
    string_fields = [
        "logger_import_path", "logger_call", "call_marker", "return_marker",
    ]

    bool_fields = [
        "dry_run", "atomic_write", "capture_results_at_exit", "skip_instrumented",
    ]

    list_fields_map = {
        "extensions": default_extensions(),
        "exclude_patterns": default_exclude_patterns(),
    }

    # 3. Field Processing & Normalization
    for field in string_fields:
        merged[field] = _as_str(
            merged.get(field), defaults[field], field, warnings, strict
        )

    for field in bool_fields:
        merged[field] = _as_bool(
            merged.get(field), defaults[field], field, warnings, strict
        )

    for field, fallback in list_fields_map.items():
        merged[field] = _as_list_str(
            merged.get(field), fallback, field, warnings, strict
        )

    merged["paths"] = _as_paths(merged.get("paths"), warnings, strict)

    # 4. Domain-Specific Normalization
    merged["extensions"] = _normalize_extensions(merged["extensions"], warnings, strict)
    merged["exclude_patterns"] = _check_patterns(merged["exclude_patterns"], warnings, strict)
    merged["logger_call"] = _check_callee(
        merged["logger_call"], defaults["logger_call"], warnings, strict
    )

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_list_str(value: Any, fallback: List[str], field: str, warnings: List[str], strict: bool) -> List[str]:
    """Ensure input is a list of sanitized strings, supporting CSV parsing."""
    if value is None:
        return list(fallback)

    if isinstance(value, str) and not strict:
        items = [x.strip() for x in value.split(",") if x.strip()]
        if items:
            warnings.append(f"Field '{field}' converted from CSV string to list.")
            return items
        return list(fallback)

    if isinstance(value, list):
        out: List[str] = []
        for i, item in enumerate(value):
            if isinstance(item, str):
                s = item.strip()
                if s:
                    out.append(s)
            else:
                msg = f"Invalid item in '{field}[{i}]': expected str."
                if strict:
                    raise TypeError(msg)
                warnings.append(f"{msg} Item discarded.")
        return out if out else list(fallback)

    msg = f"Invalid field '{field}': expected list[str], received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return list(fallback)


def _as_paths(value: Any, warnings: List[str], strict: bool) -> List[str]:
    """Accept a list of paths or a single space-separated string."""
    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    if isinstance(value, list):
        out: List[str] = []
        for i, item in enumerate(value):
            if isinstance(item, str):
                out.extend(item.split())
                continue
            msg = f"Invalid item in 'paths[{i}]': expected str."
            if strict:
                raise TypeError(msg)
            warnings.append(f"{msg} Item discarded.")
        return out

    msg = f"Invalid field 'paths': expected list[str], received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using no paths.")
    return []


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: DOMAIN NORMALIZATION
# -----------------------------------------------------------------------------

def _normalize_extensions(exts: List[str], warnings: List[str], strict: bool) -> List[str]:
    """Ensure all file extensions are prefixed with a dot."""
    out: List[str] = []
    for ext in exts:
        e = ext.strip()
        if not e:
            continue
        if not e.startswith("."):
            if strict:
                raise ValueError(f"Invalid extension '{ext}': must start with '.'.")
            warnings.append(f"Extension '{ext}' corrected to '.{e}'.")
            e = "." + e
        out.append(e)
    return out if out else default_extensions()


def _check_patterns(patterns: List[str], warnings: List[str], strict: bool) -> List[str]:
    """Drop exclusion patterns that are not valid regular expressions."""
    out: List[str] = []
    for p in patterns:
        try:
            re.compile(p)
        except re.error as e:
            msg = f"Invalid exclude pattern '{p}': {e}."
            if strict:
                raise ValueError(msg) from e
            warnings.append(f"{msg} Pattern discarded.")
            continue
        out.append(p)
    return out


def _check_callee(value: str, fallback: str, warnings: List[str], strict: bool) -> str:
    """The trace callee must be an identifier or a qualified identifier."""
    if _CALLEE_RX.match(value):
        return value
    msg = f"Invalid field 'logger_call': '{value}' is not a Go function name."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using '{fallback}'.")
    return fallback

from __future__ import annotations

"""
File Filtering Engine.

Regex-based exclusion of directory and file names plus extension matching
for source candidates.
"""

import re
from typing import List

from gotracer.domain.config import DEFAULT_EXCLUDE_PATTERNS
from gotracer.domain.constants import GO_SOURCE_EXTENSIONS

# -----------------------------------------------------------------------------
# CONFIGURATION DEFAULTS
# -----------------------------------------------------------------------------

def default_extensions() -> List[str]:
    """Get the default list of targeted file extensions."""
    return list(GO_SOURCE_EXTENSIONS)


def default_exclude_patterns() -> List[str]:
    """Get the exclusion patterns for VCS and editor metadata directories."""
    return list(DEFAULT_EXCLUDE_PATTERNS)

# -----------------------------------------------------------------------------
# PATTERN COMPILATION AND MATCHING
# -----------------------------------------------------------------------------

def compile_patterns(patterns: List[str]) -> List[re.Pattern]:
    """
    Transform raw regex strings into compiled Pattern objects.

    Malformed expressions are discarded; the validator already reported
    them as configuration warnings.

    Args:
        patterns: List of raw regex strings.

    Returns:
        List[re.Pattern]: Compiled regex objects.
    """
    compiled: List[re.Pattern] = []
    for p in patterns:
        try:
            compiled.append(re.compile(p))
        except re.error:
            continue
    return compiled


def matches_any(name: str, compiled_patterns: List[re.Pattern]) -> bool:
    """
    Verify if a string matches at least one compiled regex pattern.

    Args:
        name: Filename or directory name to evaluate.
        compiled_patterns: Pre-compiled regex objects.

    Returns:
        bool: True if any match is found, False otherwise.
    """
    return any(rx.search(name) for rx in compiled_patterns)


def has_source_extension(file_name: str, extensions: List[str]) -> bool:
    """Check the file name suffix against the candidate extensions."""
    return any(file_name.endswith(ext) for ext in extensions)

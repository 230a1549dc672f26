from __future__ import annotations

"""
Output Emission Component.

Routes the serialized source of a processed file either to a text stream
(dry run) or back onto the file itself (live run).
"""

import logging
import sys
from typing import Optional, TextIO

from gotracer.infra.fs import atomic_write_text, overwrite_text

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# FILE OUTPUT MANAGEMENT
# -----------------------------------------------------------------------------

def emit_source(
        file_path: str,
        text: str,
        *,
        dry_run: bool,
        atomic: bool = True,
        stream: Optional[TextIO] = None,
) -> bool:
    """
    Deliver the instrumented source.

    Args:
        file_path: Source file the text was produced from.
        text: Fully serialized source.
        dry_run: Print to the stream instead of touching the file.
        atomic: Replace the file via a temporary sibling and a rename.
        stream: Dry-run destination, defaults to sys.stdout.

    Returns:
        bool: True if the file on disk was replaced.

    Raises:
        OSError: If the file cannot be written.
    """
    if dry_run:
        out = stream if stream is not None else sys.stdout
        out.write(text)
        out.flush()
        return False

    if atomic:
        atomic_write_text(file_path, text)
    else:
        overwrite_text(file_path, text)
    logger.debug(f"Rewrote {file_path} ({'atomic' if atomic else 'in place'})")
    return True

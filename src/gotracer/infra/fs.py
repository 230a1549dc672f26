from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Reading of source files and the two rewrite strategies used in live mode:
an atomic temp-file-and-rename replacement and the plain
truncate-and-rewrite fallback.
"""

import os
import shutil
import tempfile
from typing import Optional

_TEMP_PREFIX = ".gotracer-"
_TEMP_SUFFIX = ".tmp"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Expand environment variables and user home shortcuts in a path.

    Relative paths stay relative: they identify the traced functions in the
    generated messages, so the user's spelling is preserved.

    Args:
        path: Raw input path string.
        fallback: Path to use when the input is empty.

    Returns:
        str: Expanded path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    return os.path.expandvars(os.path.expanduser(p))

# -----------------------------------------------------------------------------
# READ API
# -----------------------------------------------------------------------------

def read_source(file_path: str) -> bytes:
    """
    Read a source file as raw bytes.

    Byte offsets from the parser index into this buffer, so no decoding or
    newline translation happens here.

    Raises:
        OSError: If the file cannot be opened or read.
    """
    with open(file_path, "rb") as f:
        return f.read()

# -----------------------------------------------------------------------------
# WRITE API
# -----------------------------------------------------------------------------

def overwrite_text(file_path: str, text: str) -> None:
    """
    Truncate the file and write the new content in place.

    A failure midway leaves the file truncated or partially written.

    Raises:
        OSError: If the file cannot be opened or written.
    """
    with open(file_path, "w", encoding="utf-8", newline="") as f:
        f.write(text)


def atomic_write_text(file_path: str, text: str) -> None:
    """
    Replace the file content through a sibling temporary file.

    The temporary file inherits the permission bits of the target and is
    renamed over it only after the full content has been flushed, so
    readers see either the old or the new file, never a partial one.

    Raises:
        OSError: If the temporary file cannot be written or renamed.
    """
    directory = os.path.dirname(os.path.abspath(file_path))
    fd, tmp_path = tempfile.mkstemp(prefix=_TEMP_PREFIX, suffix=_TEMP_SUFFIX, dir=directory)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        if os.path.exists(file_path):
            shutil.copymode(file_path, tmp_path)
        os.replace(tmp_path, file_path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise

from __future__ import annotations

"""
Source Discovery Service.

Walks every input root recursively and yields the regular files whose name
carries a source extension, in sorted directory-traversal order.
"""

import logging
import os
import re
from typing import Dict, Iterator, List

from gotracer.core.pipeline.components.filters import has_source_extension, matches_any

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API (DISCOVERY SERVICES)
# ==============================================================================

def yield_source_files(
        roots: List[str],
        extensions: List[str],
        exclude_rx: List[re.Pattern],
) -> Iterator[Dict[str, str]]:
    """
    Traverse the input roots and yield candidate source files.

    Directories matching an exclusion pattern are pruned before descent.
    A root that is itself a file is yielded directly when its extension
    matches. Missing roots are reported and skipped.

    Args:
        roots: Files or directories to scan, as given by the user.
        extensions: Candidate file suffixes.
        exclude_rx: Compiled regex patterns for exclusion.

    Yields:
        Dict[str, str]: Metadata for each candidate:
                        - file_path: Path joined onto the root as given.
                        - root: Root the file was found under.
                        - file_name: Base filename.
    """
    for index, root in enumerate(roots):
        logger.info(f"Checking path: {root}")

        if os.path.isfile(root):
            file_name = os.path.basename(root)
            if has_source_extension(file_name, extensions):
                logger.info(f"Found {index}: {root}")
                yield {"file_path": root, "root": root, "file_name": file_name}
            continue

        if not os.path.isdir(root):
            logger.error(f"Path does not exist: {root}")
            continue

        for dirpath, dirs, files in os.walk(root):
            # In-place directory pruning
            dirs[:] = sorted(d for d in dirs if not matches_any(d, exclude_rx))
            files.sort()

            for file_name in files:
                if matches_any(file_name, exclude_rx):
                    continue
                if not has_source_extension(file_name, extensions):
                    continue

                file_path = os.path.join(dirpath, file_name)
                if not os.path.isfile(file_path):
                    continue

                logger.info(f"Found {index}: {file_path}")
                yield {"file_path": file_path, "root": root, "file_name": file_name}

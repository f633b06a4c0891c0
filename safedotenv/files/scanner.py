"""
Marker File Scanner

Walks a directory tree depth-first with an explicit stack and collects
files whose name equals the marker for the requested mode. Result order
follows the stack (LIFO) and is not lexical.
"""

import logging
import os
from typing import List

from ..core_crypto.errors import ScanError
from .file_crypto import Mode


logger = logging.getLogger(__name__)


def scan(root: str, mode: Mode) -> List[str]:
    """
    Collect marker files under ROOT.

    Symlinked directories are not descended into.

    Args:
        root: Directory to start from
        mode: Mode.ENCRYPT collects .env, Mode.DECRYPT collects .env-encrypted

    Returns:
        Paths of matching files, each joined onto ROOT

    Raises:
        ScanError: If any directory in the tree cannot be listed. The scan
            is abandoned since a partial candidate list would be wrong.
    """
    marker = mode.marker
    found: List[str] = []
    stack = [root]

    while stack:
        current = stack.pop()
        try:
            with os.scandir(current) as entries:
                for entry in entries:
                    if entry.is_dir(follow_symlinks=False):
                        stack.append(entry.path)
                    elif entry.name == marker and entry.is_file():
                        found.append(entry.path)
        except OSError as e:
            raise ScanError(current, e) from e

    logger.debug("Found %d %s file(s) under %s: %s", len(found), marker, root, found)
    return found

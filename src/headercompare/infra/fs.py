from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Path normalization, working directory creation and small listing helpers
shared by discovery and the engine.
"""

import os
from typing import Iterable, List, Optional

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)

# -----------------------------------------------------------------------------
# DIRECTORY API
# -----------------------------------------------------------------------------

def ensure_directories(paths: Iterable[str]) -> List[str]:
    """
    Create every directory in paths, parents included.

    Raises:
        OSError: If a directory cannot be created. Callers treat this as fatal.

    Returns:
        List[str]: The absolute paths created or already present.
    """
    created: List[str] = []
    for path in paths:
        os.makedirs(path, exist_ok=True)
        created.append(os.path.abspath(path))
    return created


def count_entries(path: str) -> int:
    """Number of top-level entries in a directory, 0 if it does not exist."""
    if not os.path.isdir(path):
        return 0
    return len(os.listdir(path))

from __future__ import annotations

"""
Input Discovery Service.

Lists the source files handed to the compiler and the compiled artifacts
handed to the header generator. Only direct children of the given
directory are considered.
"""

import logging
import os
import re
from typing import List, Pattern, Union

from headercompare.domain.errors import DiscoveryError
from headercompare.domain.naming import (
    DEFAULT_ARTIFACT_SUFFIX,
    DEFAULT_SOURCE_PATTERN,
    infer_binary_name,
    is_source_file,
)

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API
# ==============================================================================

def find_source_files(
        source_dir: str,
        pattern: Union[str, Pattern[str]] = DEFAULT_SOURCE_PATTERN,
) -> List[str]:
    """
    Collect source files whose name fully matches the naming pattern.

    Args:
        source_dir: Directory supplied by the surrounding harness.
        pattern: Regular expression applied to each file name.

    Returns:
        List[str]: Sorted paths of the matching files.

    Raises:
        DiscoveryError: If source_dir cannot be listed.
    """
    rx = re.compile(pattern) if isinstance(pattern, str) else pattern
    sources = [
        os.path.join(source_dir, name)
        for name in _list_dir(source_dir)
        if is_source_file(name, rx) and os.path.isfile(os.path.join(source_dir, name))
    ]
    logger.info(f"Found {len(sources)} source files in {source_dir}")
    return sources


def find_compiled_artifacts(classes_dir: str, suffix: str = DEFAULT_ARTIFACT_SUFFIX) -> List[str]:
    """Sorted paths of the files in classes_dir ending with suffix."""
    return [
        os.path.join(classes_dir, name)
        for name in _list_dir(classes_dir)
        if name.endswith(suffix)
    ]


def binary_names_for(artifacts: List[str], suffix: str = DEFAULT_ARTIFACT_SUFFIX) -> List[str]:
    """Map artifact paths to the binary names expected by the header generator."""
    return [infer_binary_name(os.path.basename(a), suffix) for a in artifacts]


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _list_dir(path: str) -> List[str]:
    try:
        return sorted(os.listdir(path))
    except OSError as e:
        raise DiscoveryError(f"Cannot list directory '{path}': {e}") from e

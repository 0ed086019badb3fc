from __future__ import annotations

"""
Naming Rules.

Pure helpers mapping file names to the identifiers the collaborator tools
expect. No filesystem access happens here.
"""

import re
from typing import Pattern, Union

DEFAULT_SOURCE_PATTERN = r"TestClass[0-9]+\.java"
DEFAULT_ARTIFACT_SUFFIX = ".class"
NESTED_TYPE_SEPARATOR = "$"


def infer_binary_name(file_name: str, suffix: str = DEFAULT_ARTIFACT_SUFFIX) -> str:
    """
    Infer the dotted binary name of a compiled artifact from its file name.

    Nested types are stored as 'Outer$Inner.class'; the generator expects
    'Outer.Inner'.

    Args:
        file_name: Base name of the artifact (no directory part).
        suffix: Artifact extension to strip.

    Returns:
        str: The binary name.
    """
    stem = file_name[:-len(suffix)] if suffix and file_name.endswith(suffix) else file_name
    return stem.replace(NESTED_TYPE_SEPARATOR, ".")


def is_source_file(name: str, pattern: Union[str, Pattern[str]] = DEFAULT_SOURCE_PATTERN) -> bool:
    """Return True if the whole file name matches the source naming pattern."""
    rx = re.compile(pattern) if isinstance(pattern, str) else pattern
    return rx.fullmatch(name) is not None

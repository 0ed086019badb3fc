from __future__ import annotations

"""
Directory Tree Comparator.

Walks two directory trees in lockstep and accumulates every difference into
a ComparisonResult. The first tree is the golden (trusted) reference, the
second is the candidate being validated. Nothing raised by the filesystem
escapes a traversal: unreadable entries are recorded and the walk goes on.
"""

import logging
import os
from pathlib import Path, PurePath
from typing import List, Optional, Set, TextIO, Union

from headercompare.domain.comparison_models import ComparisonResult

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

ROOT = PurePath()


class TreeComparator:
    """
    Byte-for-byte comparator of two directory trees.

    Args:
        stream: Text stream receiving diagnostics ('checking <path>' lines,
            error lines and the full contents of mismatching files). None
            disables diagnostics; errors are still logged.
        verbose: If False, only error lines are written to the stream.
    """

    def __init__(self, stream: Optional[TextIO] = None, *, verbose: bool = True):
        self._stream = stream
        self._verbose = verbose

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------
    def compare(self, golden: PathLike, candidate: PathLike) -> ComparisonResult:
        """
        Compare two directory trees.

        Args:
            golden: Root of the reference tree.
            candidate: Root of the tree to validate.

        Returns:
            ComparisonResult: Counters for this comparison only.
        """
        result = ComparisonResult()
        golden_root = Path(golden)
        candidate_root = Path(candidate)
        logger.debug(f"Comparing '{golden_root}' (golden) with '{candidate_root}'")
        self._compare_path(golden_root, candidate_root, ROOT, result)
        logger.debug(
            f"Comparison finished: {result.files_compared} files compared, "
            f"{result.errors} errors"
        )
        return result

    # -------------------------------------------------------------------------
    # Traversal
    # -------------------------------------------------------------------------
    def _compare_path(
            self,
            golden: Path,
            candidate: Path,
            rel: PurePath,
            result: ComparisonResult,
    ) -> None:
        g = golden / rel
        c = candidate / rel

        if os.path.isdir(g) and os.path.isdir(c):
            children: Set[str] = set()
            children.update(self._list_children(g, result))
            children.update(self._list_children(c, result))
            for name in sorted(children):
                self._compare_path(golden, candidate, rel / name, result)

        elif os.path.isfile(g) and os.path.isfile(c):
            self._emit(f"checking {rel.as_posix()}")
            result.files_compared += 1
            g_bytes = self._read(g, result)
            c_bytes = self._read(c, result)
            if g_bytes != c_bytes:
                self._emit(f"File: {g}\n{_decode(g_bytes)}")
                self._emit(f"File: {c}\n{_decode(c_bytes)}")
                self._error(result, f"Files differ: {g} {c}")

        elif os.path.exists(g) and not os.path.exists(c):
            self._error(result, f"Only in {golden}: {rel.as_posix()}")

        elif os.path.exists(c) and not os.path.exists(g):
            self._error(result, f"Only in {candidate}: {rel.as_posix()}")

        else:
            self._error(result, f"Files differ: {g} {c}")

    # -------------------------------------------------------------------------
    # Filesystem access
    # -------------------------------------------------------------------------
    def _list_children(self, directory: Path, result: ComparisonResult) -> List[str]:
        try:
            return os.listdir(directory)
        except OSError as e:
            self._error(result, f"error reading {directory}: {e}")
            return []

    def _read(self, path: Path, result: ComparisonResult) -> bytes:
        # An unreadable file compares as empty content.
        try:
            with open(path, "rb") as f:
                return f.read()
        except OSError as e:
            self._error(result, f"error reading {path}: {e}")
            return b""

    # -------------------------------------------------------------------------
    # Diagnostics
    # -------------------------------------------------------------------------
    def _error(self, result: ComparisonResult, message: str) -> None:
        result.record_error(message)
        logger.error(message)
        if self._stream is not None:
            print(message, file=self._stream)

    def _emit(self, line: str) -> None:
        if self._verbose and self._stream is not None:
            print(line, file=self._stream)


def compare_trees(
        golden: PathLike,
        candidate: PathLike,
        stream: Optional[TextIO] = None,
        *,
        verbose: bool = True,
) -> ComparisonResult:
    """Convenience wrapper around TreeComparator.compare."""
    return TreeComparator(stream, verbose=verbose).compare(golden, candidate)


def _decode(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")

from __future__ import annotations

"""
Unit tests for the directory tree comparator.

Verifies:
1. Identical trees produce no errors and count every file pair.
2. Entries present on one side only are reported once, as 'Only in'.
3. Content differences are reported once with both contents dumped.
4. Type mismatches and unreadable files are recorded without aborting.
"""

import builtins
import io
from pathlib import Path

import pytest

from headercompare.core.comparison import tree_comparator
from headercompare.core.comparison.tree_comparator import TreeComparator, compare_trees

HEADER = "#include <jni.h>\n/* Header for class TestClass1 */\n"


@pytest.fixture
def stream() -> io.StringIO:
    return io.StringIO()


def test_identical_trees_have_no_errors(make_tree, stream) -> None:
    """TC-01: Equal trees yield zero errors and count all regular files."""
    spec = {
        "TestClass1.h": HEADER,
        "TestClass2.h": "two\n",
        "nested": {"deeper": {"TestClass3.h": "three\n"}, "empty": {}},
    }
    golden = make_tree("golden", spec)
    candidate = make_tree("candidate", spec)

    result = TreeComparator(stream).compare(golden, candidate)

    assert result.ok
    assert result.errors == 0
    assert result.messages == []
    assert result.files_compared == 3
    output = stream.getvalue()
    assert "checking TestClass1.h" in output
    assert "checking nested/deeper/TestClass3.h" in output


def test_extra_file_in_candidate_reported_once(make_tree, stream) -> None:
    """TC-02: A file only in the candidate is one 'Only in' error, not compared."""
    golden = make_tree("golden", {"sub": {"A.h": "a"}})
    candidate = make_tree("candidate", {"sub": {"A.h": "a", "Extra.h": "x"}})

    result = TreeComparator(stream).compare(golden, candidate)

    assert result.errors == 1
    assert result.files_compared == 1
    assert result.messages == [f"Only in {candidate}: sub/Extra.h"]


def test_extra_file_in_golden_reported_once(make_tree, stream) -> None:
    golden = make_tree("golden", {"A.h": "a", "B.h": "b"})
    candidate = make_tree("candidate", {"A.h": "a"})

    result = compare_trees(golden, candidate, stream)

    assert result.errors == 1
    assert result.files_compared == 1
    assert result.messages == [f"Only in {golden}: B.h"]


def test_directory_on_one_side_is_not_descended(make_tree, stream) -> None:
    """A whole subtree missing on one side counts as a single error."""
    golden = make_tree("golden", {"A.h": "a", "pkg": {"X.h": "x", "Y.h": "y"}})
    candidate = make_tree("candidate", {"A.h": "a"})

    result = TreeComparator(stream).compare(golden, candidate)

    assert result.errors == 1
    assert result.messages == [f"Only in {golden}: pkg"]
    assert result.files_compared == 1


def test_single_byte_difference(make_tree, stream) -> None:
    """TC-03: One differing byte yields one 'Files differ' and both contents."""
    golden = make_tree("golden", {"TestClass1.h": "int f(int x);\n"})
    candidate = make_tree("candidate", {"TestClass1.h": "int f(int y);\n"})

    result = TreeComparator(stream).compare(golden, candidate)

    assert result.errors == 1
    assert result.files_compared == 1
    g = golden / "TestClass1.h"
    c = candidate / "TestClass1.h"
    assert result.messages == [f"Files differ: {g} {c}"]

    output = stream.getvalue()
    assert f"File: {g}\nint f(int x);\n" in output
    assert f"File: {c}\nint f(int y);\n" in output


def test_content_alone_decides_equality(make_tree, stream) -> None:
    """Files with equal bytes pass regardless of timestamps or directory order."""
    payload = bytes(range(256))
    golden = make_tree("golden", {"b.h": payload, "a.h": b""})
    candidate = make_tree("candidate", {"a.h": b"", "b.h": payload})
    (golden / "b.h").touch()

    result = TreeComparator(stream).compare(golden, candidate)

    assert result.errors == 0
    assert result.files_compared == 2


def test_type_mismatch_is_reported(make_tree, stream) -> None:
    """A directory on one side and a file on the other is a difference."""
    golden = make_tree("golden", {"thing": {"inner.h": "x"}})
    candidate = make_tree("candidate", {"thing": "not a directory"})

    result = TreeComparator(stream).compare(golden, candidate)

    assert result.errors == 1
    assert result.files_compared == 0
    assert result.messages == [f"Files differ: {golden / 'thing'} {candidate / 'thing'}"]


def test_missing_candidate_root(make_tree, tmp_path: Path, stream) -> None:
    golden = make_tree("golden", {"A.h": "a"})
    missing = tmp_path / "does-not-exist"

    result = TreeComparator(stream).compare(golden, missing)

    assert result.errors == 1
    assert result.messages[0].startswith(f"Only in {golden}:")


def test_unreadable_file_is_treated_as_empty(make_tree, stream, monkeypatch) -> None:
    """TC-04: A read failure is recorded and the walk continues."""
    golden = make_tree("golden", {"A.h": "content", "B.h": "b"})
    candidate = make_tree("candidate", {"A.h": "content", "B.h": "b"})
    broken = candidate / "A.h"

    def fake_open(path, *args, **kwargs):
        if Path(path) == broken:
            raise PermissionError(13, "Permission denied", str(path))
        return builtins.open(path, *args, **kwargs)

    monkeypatch.setattr(tree_comparator, "open", fake_open, raising=False)

    result = TreeComparator(stream).compare(golden, candidate)

    # Read error plus the resulting content mismatch; B.h is still compared.
    assert result.files_compared == 2
    assert result.errors == 2
    assert result.messages[0].startswith(f"error reading {broken}:")
    assert result.messages[1] == f"Files differ: {golden / 'A.h'} {broken}"


def test_unreadable_empty_counterpart_only_records_read_error(make_tree, stream, monkeypatch) -> None:
    golden = make_tree("golden", {"A.h": ""})
    candidate = make_tree("candidate", {"A.h": "unreadable"})
    broken = candidate / "A.h"

    def fake_open(path, *args, **kwargs):
        if Path(path) == broken:
            raise OSError(5, "Input/output error", str(path))
        return builtins.open(path, *args, **kwargs)

    monkeypatch.setattr(tree_comparator, "open", fake_open, raising=False)

    result = TreeComparator(stream).compare(golden, candidate)

    assert result.errors == 1
    assert "error reading" in result.messages[0]


def test_quiet_mode_keeps_errors_only(make_tree, stream) -> None:
    golden = make_tree("golden", {"A.h": "a", "B.h": "b"})
    candidate = make_tree("candidate", {"A.h": "a", "B.h": "B"})

    result = TreeComparator(stream, verbose=False).compare(golden, candidate)

    output = stream.getvalue()
    assert result.errors == 1
    assert "checking" not in output
    assert "File: " not in output
    assert "Files differ:" in output


def test_no_stream_still_counts(make_tree) -> None:
    golden = make_tree("golden", {"A.h": "a"})
    candidate = make_tree("candidate", {"A.h": "b"})

    result = TreeComparator().compare(golden, candidate)

    assert result.files_compared == 1
    assert result.errors == 1


def test_results_are_independent_per_run(make_tree, stream) -> None:
    golden = make_tree("golden", {"A.h": "a"})
    candidate = make_tree("candidate", {"A.h": "b"})
    comparator = TreeComparator(stream)

    first = comparator.compare(golden, candidate)
    second = comparator.compare(golden, candidate)

    assert first is not second
    assert first.errors == second.errors == 1
    assert first.files_compared == second.files_compared == 1

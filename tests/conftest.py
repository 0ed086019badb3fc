from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures for building directory trees and locating the fake
   collaborator tools used by integration and end-to-end tests.
"""

import os
import sys
from pathlib import Path
from typing import Callable, Dict, Union

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

FAKE_TOOLS_DIR = Path(__file__).resolve().parent / "fake_tools"

TreeSpec = Dict[str, Union[str, bytes, "TreeSpec"]]


def write_tree(root: Path, spec: TreeSpec) -> Path:
    """
    Materialize a nested dict as files and directories under root.

    str and bytes values become files, dict values become directories.
    """
    root.mkdir(parents=True, exist_ok=True)
    for name, value in spec.items():
        target = root / name
        if isinstance(value, dict):
            write_tree(target, value)
        elif isinstance(value, bytes):
            target.write_bytes(value)
        else:
            target.write_text(value, encoding="utf-8")
    return root


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[str, TreeSpec], Path]:
    """Return a factory creating a named tree under tmp_path."""

    def _make(name: str, spec: TreeSpec) -> Path:
        return write_tree(tmp_path / name, spec)

    return _make


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    """
    A source directory with three matching sources and two distractors.

    TestClass2 declares a nested type, so the fake compiler emits an extra
    'TestClass2$Inner' artifact and header for it.
    """
    return write_tree(tmp_path / "src", {
        "TestClass1.java": "class TestClass1 { native void m(); }\n",
        "TestClass2.java": "class TestClass2 { // nested: Inner\n}\n",
        "TestClass10.java": "class TestClass10 { native int f(int x); }\n",
        "Helper.java": "class Helper {}\n",
        "TestClassA.java": "class TestClassA {}\n",
    })


@pytest.fixture
def fake_compiler_cmd() -> list:
    return [sys.executable, str(FAKE_TOOLS_DIR / "fake_compiler.py")]


@pytest.fixture
def fake_generator_cmd() -> list:
    return [sys.executable, str(FAKE_TOOLS_DIR / "fake_generator.py")]

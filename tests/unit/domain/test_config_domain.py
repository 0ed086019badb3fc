from __future__ import annotations

"""
Unit tests for configuration loading and the typed run configuration.
"""

import json
import os
from pathlib import Path

import pytest

from headercompare.domain.config import (
    DEFAULT_CLASSES_DIR_NAME,
    RunConfig,
    get_default_config,
    load_config,
)
from headercompare.domain.errors import ConfigError


def test_defaults_describe_the_javac_javah_layout() -> None:
    cfg = get_default_config()

    assert cfg["source_pattern"] == r"TestClass[0-9]+\.java"
    assert cfg["artifact_suffix"] == ".class"
    assert cfg["classes_dir_name"] == "classes"
    assert cfg["compiler_headers_dir_name"] == "headers.javac"
    assert cfg["generator_headers_dir_name"] == "headers.javah"
    assert cfg["compiler_command"] == ["javac"]
    assert cfg["compiler_extra_args"] == ["-XDjavah:full"]
    assert cfg["generator_command"] == ["javah"]


def test_defaults_are_fresh_copies() -> None:
    first = get_default_config()
    first["compiler_command"].append("-verbose")

    assert get_default_config()["compiler_command"] == ["javac"]


def test_load_config_without_path_returns_defaults() -> None:
    assert load_config(None) == get_default_config()


def test_load_config_merges_known_keys(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "work_dir": "/tmp/work",
        "generator_command": ["my-javah", "-v"],
        "unknown_key": 1,
    }), encoding="utf-8")

    cfg = load_config(str(path))

    assert cfg["work_dir"] == "/tmp/work"
    assert cfg["generator_command"] == ["my-javah", "-v"]
    assert "unknown_key" not in cfg


def test_load_config_corrupt_file_falls_back(tmp_path: Path, caplog) -> None:
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")

    cfg = load_config(str(path))

    assert cfg == get_default_config()
    assert "Failed to load config" in caplog.text


def test_load_config_non_object_falls_back(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")

    assert load_config(str(path)) == get_default_config()


def test_run_config_paths(tmp_path: Path) -> None:
    cfg = get_default_config()
    cfg["work_dir"] = str(tmp_path)

    run_cfg = RunConfig.from_dict(cfg)

    assert run_cfg.classes_dir == os.path.join(str(tmp_path), DEFAULT_CLASSES_DIR_NAME)
    assert run_cfg.compiler_headers_dir.endswith("headers.javac")
    assert run_cfg.generator_headers_dir.endswith("headers.javah")
    assert run_cfg.compiler_command == ("javac",)


@pytest.mark.parametrize("content,match", [
    ("{not json", "Failed to load config"),
    ("[1, 2, 3]", "must contain a JSON object"),
    ('"javac"', "must contain a JSON object"),
])
def test_load_config_strict_rejects_unusable_file(tmp_path: Path, content: str, match: str) -> None:
    path = tmp_path / "config.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError, match=match):
        load_config(str(path), strict=True)


def test_load_config_strict_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_config(str(tmp_path / "absent.json"), strict=True)

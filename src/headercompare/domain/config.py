from __future__ import annotations

"""
Configuration Domain Management.

Holds the default run configuration, loads overrides from a JSON file and
exposes the typed, validated configuration consumed by the engine.
"""

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from headercompare.domain.errors import ConfigError
from headercompare.domain.naming import DEFAULT_ARTIFACT_SUFFIX, DEFAULT_SOURCE_PATTERN

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
DEFAULT_CLASSES_DIR_NAME = "classes"
DEFAULT_COMPILER_HEADERS_DIR_NAME = "headers.javac"
DEFAULT_GENERATOR_HEADERS_DIR_NAME = "headers.javah"

DEFAULT_COMPILER_COMMAND: List[str] = ["javac"]
DEFAULT_COMPILER_EXTRA_ARGS: List[str] = ["-XDjavah:full"]
DEFAULT_GENERATOR_COMMAND: List[str] = ["javah"]


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default run configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    base = os.getcwd()
    return {
        # IO Paths
        "source_dir": base,
        "work_dir": base,

        # Naming
        "source_pattern": DEFAULT_SOURCE_PATTERN,
        "artifact_suffix": DEFAULT_ARTIFACT_SUFFIX,

        # Working Layout
        "classes_dir_name": DEFAULT_CLASSES_DIR_NAME,
        "compiler_headers_dir_name": DEFAULT_COMPILER_HEADERS_DIR_NAME,
        "generator_headers_dir_name": DEFAULT_GENERATOR_HEADERS_DIR_NAME,

        # Collaborator Tools
        "compiler_command": list(DEFAULT_COMPILER_COMMAND),
        "compiler_extra_args": list(DEFAULT_COMPILER_EXTRA_ARGS),
        "generator_command": list(DEFAULT_GENERATOR_COMMAND),

        # Diagnostics
        "verbose_diagnostics": True,
    }


def load_config(path: Optional[str], *, strict: bool = False) -> Dict[str, Any]:
    """
    Load configuration from a JSON file, merged over the defaults.

    Without strict, a missing or corrupt file is not fatal: the defaults are
    returned and the problem is logged. The CLI loads a file the user named
    explicitly in strict mode.

    Args:
        path: JSON file to read. None returns the defaults.
        strict: Raise ConfigError instead of falling back to the defaults.

    Returns:
        Dict[str, Any]: Merged configuration.

    Raises:
        ConfigError: In strict mode, if the file is missing, unreadable or
            not a JSON object.
    """
    config = get_default_config()
    if not path:
        return config

    try:
        data = _read_json_object(path)
    except ConfigError as e:
        if strict:
            raise
        logger.warning(f"{e}. Using defaults.")
        return config

    config.update({k: v for k, v in data.items() if k in config})
    logger.debug(f"Configuration loaded from {path}")
    return config


def _read_json_object(path: str) -> Dict[str, Any]:
    if not os.path.exists(path):
        raise ConfigError(f"Config file not found at '{path}'")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigError(f"Failed to load config '{path}': {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config file '{path}' must contain a JSON object")
    return data


# -----------------------------------------------------------------------------
# Typed Configuration
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class RunConfig:
    """Immutable, validated view of a configuration dictionary."""
    source_dir: str
    work_dir: str
    source_pattern: str
    artifact_suffix: str
    classes_dir_name: str
    compiler_headers_dir_name: str
    generator_headers_dir_name: str
    compiler_command: Tuple[str, ...]
    compiler_extra_args: Tuple[str, ...]
    generator_command: Tuple[str, ...]
    verbose_diagnostics: bool = True

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "RunConfig":
        return cls(
            source_dir=config["source_dir"],
            work_dir=config["work_dir"],
            source_pattern=config["source_pattern"],
            artifact_suffix=config["artifact_suffix"],
            classes_dir_name=config["classes_dir_name"],
            compiler_headers_dir_name=config["compiler_headers_dir_name"],
            generator_headers_dir_name=config["generator_headers_dir_name"],
            compiler_command=tuple(config["compiler_command"]),
            compiler_extra_args=tuple(config["compiler_extra_args"]),
            generator_command=tuple(config["generator_command"]),
            verbose_diagnostics=bool(config.get("verbose_diagnostics", True)),
        )

    @property
    def classes_dir(self) -> str:
        return os.path.join(self.work_dir, self.classes_dir_name)

    @property
    def compiler_headers_dir(self) -> str:
        return os.path.join(self.work_dir, self.compiler_headers_dir_name)

    @property
    def generator_headers_dir(self) -> str:
        return os.path.join(self.work_dir, self.generator_headers_dir_name)

from __future__ import annotations

"""
Configuration Validation Service.

Ensures the configuration dictionary conforms to the expected schema before
any tool is run. Handles type coercion, path normalization, and default
value injection.
"""

import logging
import re
import shlex
from typing import Any, Dict, List, Tuple

from headercompare.domain.config import get_default_config
from headercompare.infra.fs import normalize_path

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raises exceptions on type mismatch instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: A tuple containing the normalized
                                          configuration and a list of warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    # 1. Base Type Validation
    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    # 2. Schema Definition
    string_fields = [
        "source_dir", "work_dir", "source_pattern", "artifact_suffix",
        "classes_dir_name", "compiler_headers_dir_name", "generator_headers_dir_name",
    ]
    bool_fields = ["verbose_diagnostics"]
    command_fields = ["compiler_command", "compiler_extra_args", "generator_command"]

    # 3. Field Processing & Normalization
    for field in string_fields:
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    for field in bool_fields:
        merged[field] = _as_bool(merged.get(field), defaults[field], field, warnings, strict)

    for field in command_fields:
        merged[field] = _as_command(merged.get(field), defaults[field], field, warnings, strict)

    # 4. Domain-Specific Normalization
    merged["source_dir"] = normalize_path(merged["source_dir"], defaults["source_dir"])
    merged["work_dir"] = normalize_path(merged["work_dir"], defaults["work_dir"])
    merged["source_pattern"] = _check_pattern(
        merged["source_pattern"], defaults["source_pattern"], warnings, strict
    )

    for field in ("compiler_command", "generator_command"):
        if not merged[field]:
            msg = f"Field '{field}' must name a command."
            if strict:
                raise ValueError(msg)
            warnings.append(f"{msg} Using default.")
            merged[field] = list(defaults[field])

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Validate boolean inputs, accepting common string representations."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        v = value.strip().lower()
        if v in ("true", "1", "yes", "on"):
            return True
        if v in ("false", "0", "no", "off"):
            return False

    msg = f"Invalid field '{field}': expected bool, received {value!r}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_command(
        value: Any,
        fallback: List[str],
        field: str,
        warnings: List[str],
        strict: bool,
) -> List[str]:
    """
    Normalize a command into an argument list.

    Strings are split with shell rules; lists and tuples must hold strings.
    """
    if value is None:
        return list(fallback)
    if isinstance(value, str):
        try:
            return shlex.split(value)
        except ValueError as e:
            msg = f"Invalid field '{field}': cannot parse {value!r}: {e}."
            if strict:
                raise ValueError(msg) from e
            warnings.append(f"{msg} Using fallback.")
            return list(fallback)
    if isinstance(value, (list, tuple)) and all(isinstance(x, str) for x in value):
        return [x for x in value if x.strip()]

    msg = f"Invalid field '{field}': expected str or list of str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return list(fallback)


def _check_pattern(value: str, fallback: str, warnings: List[str], strict: bool) -> str:
    """Reject source patterns that are not valid regular expressions."""
    try:
        re.compile(value)
        return value
    except re.error as e:
        msg = f"Invalid field 'source_pattern': {e}."
        if strict:
            raise ValueError(msg) from e
        warnings.append(f"{msg} Using fallback.")
        return fallback

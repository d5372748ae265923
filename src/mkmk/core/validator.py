from __future__ import annotations

"""
Build Configuration Validation.

Turns untrusted configuration values (JSON file, CLI overrides) into a
BuildConfig. Coerces loose types where it is safe, reports every correction
as a warning, and rejects settings that would make the generated rules
ambiguous.
"""

import logging
from typing import Any, Dict, List, Tuple

from mkmk.domain.config import BuildConfig, get_default_config
from mkmk.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)

_STRING_FIELDS = [
    "path_separator", "preamble", "compile_command", "link_command",
    "source_prefix", "object_prefix",
]
_EXTENSION_FIELDS = ["corpus_ext", "header_ext", "object_ext", "linked_ext"]
_INT_FIELDS = ["indent_width"]


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[BuildConfig, List[str]]:
    """
    Validate and normalize a raw configuration mapping.

    Missing keys take their defaults; unknown keys are dropped.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raise TypeError on type mismatch instead of coercing.

    Returns:
        Tuple[BuildConfig, List[str]]: The configuration and the list of warnings.

    Raises:
        ConfigurationError: If the values cannot describe a usable project.
        TypeError: In strict mode, on any type mismatch.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if config is None:
        config = {}
    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        config = {}

    merged: Dict[str, Any] = dict(defaults)
    for key, value in config.items():
        if key not in defaults:
            warnings.append(f"Unknown field '{key}' ignored.")
            continue
        merged[key] = value

    for field in _STRING_FIELDS:
        merged[field] = _as_str(merged[field], defaults[field], field, warnings, strict)
    for field in _EXTENSION_FIELDS:
        raw = _as_str(merged[field], defaults[field], field, warnings, strict)
        merged[field] = _normalize_extension(raw, field, warnings, strict)
    for field in _INT_FIELDS:
        merged[field] = _as_int(merged[field], defaults[field], field, warnings, strict)

    _check_consistency(merged, warnings)

    for w in warnings:
        logger.debug(f"Configuration warning: {w}")
    return BuildConfig(**merged), warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Accept strings as-is; empty strings are meaningful (e.g. no extension)."""
    if value is None:
        return fallback
    if isinstance(value, str):
        return value

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_int(value: Any, fallback: int, field: str, warnings: List[str], strict: bool) -> int:
    """Coerce non-negative integers, accepting numeric strings outside strict mode."""
    if isinstance(value, bool):
        value = str(value)
    if isinstance(value, int) and value >= 0:
        return value
    if value is None:
        return fallback

    if not strict and isinstance(value, str) and value.strip().isdigit():
        warnings.append(f"Field '{field}' converted from '{value}' to int.")
        return int(value.strip())

    msg = f"Invalid field '{field}': expected non-negative int, received {value!r}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: DOMAIN NORMALIZATION
# -----------------------------------------------------------------------------

def _normalize_extension(ext: str, field: str, warnings: List[str], strict: bool) -> str:
    """Ensure non-empty extensions start with a dot."""
    e = ext.strip()
    if e and not e.startswith("."):
        if strict:
            raise ValueError(f"Invalid extension '{ext}' for '{field}': must start with '.'.")
        warnings.append(f"Extension '{ext}' corrected to '.{e}'.")
        e = "." + e
    return e


def _check_consistency(cfg: Dict[str, Any], warnings: List[str]) -> None:
    if len(cfg["path_separator"]) != 1:
        raise ConfigurationError(
            f"path_separator must be a single character, got {cfg['path_separator']!r}"
        )
    if not cfg["corpus_ext"]:
        raise ConfigurationError("corpus_ext must not be empty: "
                                 "corpus files cannot be told apart from headers")
    if cfg["corpus_ext"] == cfg["header_ext"]:
        raise ConfigurationError(
            f"corpus_ext and header_ext are both '{cfg['corpus_ext']}': "
            "corpus files cannot be told apart from headers"
        )
    if cfg["object_ext"] == cfg["linked_ext"]:
        warnings.append(
            f"object_ext and linked_ext are both '{cfg['object_ext']}': "
            "object and executable targets of the same name will collide."
        )

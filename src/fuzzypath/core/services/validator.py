from __future__ import annotations

"""
Configuration Validation Service.

Gatekeeper between untrusted configuration sources (CLI flags, the JSON
file) and the search engine. Handles type coercion, bounds, and default
value injection so a bad value degrades to a warning instead of a crash.
"""

import logging
from typing import Any, Dict, List, Tuple

from fuzzypath.domain.config import get_default_config

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


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
        strict: If True, raises exceptions on invalid values instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and a
                                          list of warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    # Declarative schema: field -> minimum accepted value
    int_fields = {
        "max_results": 0,
        "branching_cap": 1,
        "max_workers": 1,
    }
    bool_fields = ["sort_results", "show_weights"]

    merged["start_path"] = _as_str(
        merged.get("start_path"), defaults["start_path"], "start_path", warnings, strict
    )

    for field, minimum in int_fields.items():
        merged[field] = _as_int(
            merged.get(field), defaults[field], minimum, field, warnings, strict
        )

    merged["timeout"] = _as_float(
        merged.get("timeout"), defaults["timeout"], "timeout", warnings, strict
    )

    for field in bool_fields:
        merged[field] = _as_bool(
            merged.get(field), defaults[field], field, warnings, strict
        )

    merged["log_level"] = _normalize_log_level(
        merged.get("log_level"), defaults["log_level"], warnings, strict
    )

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


def _as_int(
        value: Any,
        fallback: int,
        minimum: int,
        field: str,
        warnings: List[str],
        strict: bool,
) -> int:
    """Coerce numbers and numeric strings into bounded integers."""
    if value is None:
        return fallback

    result: Any = None
    if isinstance(value, bool):
        result = None
    elif isinstance(value, int):
        result = value
    elif not strict and isinstance(value, str) and value.strip().lstrip("-").isdigit():
        result = int(value.strip())
        warnings.append(f"Field '{field}' converted from '{value}' to {result}.")

    if result is None:
        msg = f"Invalid field '{field}': expected int, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback

    if result < minimum:
        msg = f"Field '{field}' must be >= {minimum}, received {result}."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Clamped.")
        return minimum

    return result


def _as_float(value: Any, fallback: float, field: str, warnings: List[str], strict: bool) -> float:
    """Coerce a non-negative number of seconds."""
    if value is None:
        return fallback

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        result = float(value)
    elif not strict and isinstance(value, str):
        try:
            result = float(value.strip())
        except ValueError:
            warnings.append(f"Invalid field '{field}': '{value}' is not a number. Using fallback.")
            return fallback
        warnings.append(f"Field '{field}' converted from '{value}' to {result}.")
    else:
        msg = f"Invalid field '{field}': expected float, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback

    if result < 0:
        msg = f"Field '{field}' cannot be negative, received {result}."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback

    return result


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: DOMAIN NORMALIZATION
# -----------------------------------------------------------------------------

def _normalize_log_level(value: Any, fallback: str, warnings: List[str], strict: bool) -> str:
    """Upper-case the level name and reject unknown ones."""
    level = str(value or "").strip().upper()
    if level == "WARN":
        level = "WARNING"
    if level in _LOG_LEVELS:
        return level

    msg = f"Unknown log level '{value}'."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using '{fallback}'.")
    return fallback

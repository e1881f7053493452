from __future__ import annotations

"""
Configuration Validation Service.

Ensures that configuration coming from files, the environment or the CLI
conforms to the expected schema. Handles type coercion, enum normalization
and default value injection.
"""

import logging
from typing import Any, Dict, List, Sequence, Tuple

from codevisualizer.domain.config import get_default_config
from codevisualizer.domain.layout_models import ColorTheme, LayoutMode, LayoutOptions

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
        strict: If True, raises exceptions on invalid values instead of
                falling back to defaults.

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

    string_fields = ["search_query", "branch", "github_token", "api_base_url"]

    int_fields = {
        "max_depth": 0,
        "request_timeout": 1,
        "max_workers": 1,
    }

    choice_fields = {
        "layout": [m.value for m in LayoutMode],
        "theme": [t.value for t in ColorTheme],
    }

    for field in string_fields:
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    for field, minimum in int_fields.items():
        merged[field] = _as_int(merged.get(field), defaults[field], minimum, field, warnings, strict)

    for field, choices in choice_fields.items():
        merged[field] = _as_choice(merged.get(field), defaults[field], choices, field, warnings, strict)

    unknown = sorted(set(merged) - set(defaults))
    for key in unknown:
        warnings.append(f"Unknown config key '{key}' ignored.")
        del merged[key]

    return merged, warnings


def layout_options_from_config(config: Dict[str, Any]) -> LayoutOptions:
    """Build LayoutOptions from a validated configuration."""
    return LayoutOptions(
        max_depth=config["max_depth"],
        mode=LayoutMode(config["layout"]),
        theme=ColorTheme(config["theme"]),
        search_query=config["search_query"],
    )


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate string inputs. Empty strings are legitimate values here."""
    if value is None:
        return fallback
    if isinstance(value, str):
        return value.strip()

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
    """Coerce numeric input to an int no lower than `minimum`."""
    if value is None:
        return fallback

    number = None
    if isinstance(value, int) and not isinstance(value, bool):
        number = value
    elif not strict and isinstance(value, str) and value.strip().lstrip("-").isdigit():
        number = int(value.strip())
        warnings.append(f"Field '{field}' converted from '{value}' to {number}.")

    if number is None:
        msg = f"Invalid field '{field}': expected int, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback

    if number < minimum:
        msg = f"Field '{field}' must be >= {minimum}, received {number}."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback

    return number


def _as_choice(
        value: Any,
        fallback: str,
        choices: Sequence[str],
        field: str,
        warnings: List[str],
        strict: bool,
) -> str:
    """Normalize an enum-like string against the allowed choices."""
    if value is None:
        return fallback

    if isinstance(value, str):
        normalized = value.strip().lower().replace("_", "-")
        if normalized in choices:
            return normalized

    msg = f"Invalid field '{field}': expected one of {list(choices)}, received {value!r}."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback

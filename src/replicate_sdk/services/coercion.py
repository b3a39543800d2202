"""Type coercion helpers for loosely-typed caller input."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

_FALSE_STRINGS = {"false", "0", "no", "off"}


def to_string(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def to_integer(value: Any) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def to_float(value: Any) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def to_boolean(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.lower() not in _FALSE_STRINGS
    if isinstance(value, (int, float)):
        return value != 0
    return bool(value)


def coerce_hash_values(value: Any) -> dict[str, Any]:
    """Recursively copy a mapping, descending into nested mappings and lists."""
    if not isinstance(value, Mapping):
        return {}
    out: dict[str, Any] = {}
    for k, v in value.items():
        if isinstance(v, Mapping):
            out[k] = coerce_hash_values(v)
        elif isinstance(v, (list, tuple)):
            out[k] = [coerce_hash_values(i) if isinstance(i, Mapping) else i for i in v]
        else:
            out[k] = v
    return out


def coerce_input_value(value: Any) -> Any:
    """
    Reduce a prediction input value to a JSON-compatible shape.

    Strings, numbers, booleans and None pass through; mappings and sequences
    are converted recursively; anything else (paths, enums, ...) becomes str.
    """
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, Mapping):
        return normalize_and_coerce_input(value)
    if isinstance(value, (list, tuple)):
        return [coerce_input_value(v) for v in value]
    return to_string(value)


def normalize_and_coerce_input(values: Mapping[Any, Any]) -> dict[str, Any]:
    return {str(k): coerce_input_value(v) for k, v in values.items()}

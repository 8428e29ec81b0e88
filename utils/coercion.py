"""Lenient conversions for loosely-typed backend values."""

from __future__ import annotations

import math
from typing import Any

_CURRENCY_PREFIXES = ("PHP", "₱", "$")


def coerce_price(value: Any) -> float:
    """Convert a price-like value to a non-negative float, ``0.0`` when unusable."""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return 0.0
    elif isinstance(value, str):
        text = value.strip().replace(",", "")
        for prefix in _CURRENCY_PREFIXES:
            if text.upper().startswith(prefix):
                text = text[len(prefix) :].strip()
                break
        try:
            number = float(text)
        except ValueError:
            return 0.0
    else:
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def coerce_int(value: Any, default: int = 0) -> int:
    """Convert ints, integral floats and digit strings to ``int``."""
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) and value.is_integer() else default
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return default
        return int(number) if math.isfinite(number) and number.is_integer() else default
    return default


def coerce_text(value: Any, default: str = "") -> str:
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return default


def first_defined(raw: dict[str, Any], keys: tuple[str, ...]) -> Any:
    """Return the value of the first key present in ``raw`` with a non-None value."""
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return None


def coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)

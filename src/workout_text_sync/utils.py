"""Utility functions."""
import math
import re
from typing import Any, Optional

_NON_NUMERIC_RE = re.compile(r"[^\d.]")


def to_int(value: Any, default: Optional[int] = None) -> Optional[int]:
    """Convert value to int, returning default if conversion fails."""
    if value is None or isinstance(value, bool):
        return default
    try:
        if isinstance(value, float):
            if not math.isfinite(value):
                return default
            return int(value)
        return int(str(value).strip())
    except (TypeError, ValueError):
        return default


def to_float(value: Any, default: Optional[float] = None) -> Optional[float]:
    """Convert value to a finite float, returning default if conversion fails."""
    if value is None or isinstance(value, bool):
        return default
    try:
        result = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(result):
        return default
    return result


def format_number(value: float) -> str:
    """Format a number the way it is written in workout text: 40, 42.5, 0.8."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def number_from_text(text: Optional[str]) -> float:
    """Pull the numeric part out of a raw value like '10km' ('' -> 0)."""
    digits = _NON_NUMERIC_RE.sub("", text or "")
    return to_float(digits, 0.0)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up."""
    return int(math.floor(value + 0.5))

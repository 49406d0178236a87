# cv_analyzer/app/services/scoring/convert.py
# Total conversions: every failure mode maps to a default, nothing raises.
from __future__ import annotations
import math
from typing import Any


def to_number(val: Any, default: float = 0.0) -> float:
    """Coerce a loosely-typed JSON value to a finite float.

    bool -> 1.0/0.0, int/float pass through, str is stripped and parsed
    ("" -> 0.0), anything else -> default. Non-finite results -> default.
    """
    if isinstance(val, bool):
        return 1.0 if val else 0.0
    if isinstance(val, str):
        val = val.strip()
        if not val:
            return 0.0
    elif not isinstance(val, (int, float)):
        return default
    try:
        num = float(val)
    except (ValueError, OverflowError):
        return default
    return num if math.isfinite(num) else default


def text_or(val: Any, default: str) -> str:
    """Return val as text when it is truthy, else default."""
    if not val:
        return default
    return val if isinstance(val, str) else str(val)

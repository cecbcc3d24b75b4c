"""
Tolerant coercion helpers for loosely-typed catalog and persisted data.

Every numeric-as-string read in the engine goes through ``to_number`` and
every free-text read through ``to_trimmed_string``; nothing here raises.
"""

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

SIZE_SEPARATOR = "x"
NOT_APPLICABLE = "N/A"

_NULL_TOKENS = {"", "none", "nan", "null", "undefined"}


def to_number(value: Any, fallback: float = 0.0) -> float:
    """Parse ``value`` as a finite float, returning ``fallback`` otherwise."""
    if value is None or isinstance(value, bool):
        return fallback
    if isinstance(value, (int, float, Decimal)):
        number = float(value)
        return number if math.isfinite(number) else fallback
    try:
        s = str(value).strip().replace(",", "")
        if s.lower() in _NULL_TOKENS:
            return fallback
        number = float(s)
    except (ValueError, TypeError, AttributeError):
        return fallback
    return number if math.isfinite(number) else fallback


def to_optional_number(value: Any) -> float | None:
    """Like ``to_number`` but returns None when nothing parses."""
    number = to_number(value, fallback=math.nan)
    return None if math.isnan(number) else number


def to_trimmed_string(value: Any, default: str = "") -> str:
    """Render ``value`` as a stripped string; None becomes ``default``."""
    if value is None:
        return default
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def round_half_up(value: float, places: int = 2) -> float:
    """Round half away from zero to ``places`` decimals."""
    if not math.isfinite(value):
        return 0.0
    quantum = Decimal(1).scaleb(-places)
    try:
        return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))
    except InvalidOperation:
        return 0.0


def format_number(value: float) -> str:
    """Transport string for quantities and percents (no trailing ``.0``)."""
    if not math.isfinite(value):
        return "0"
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def format_amount(value: float, places: int = 2) -> str:
    """Transport string for monetary values, rounded half-up."""
    return f"{round_half_up(value, places):.{places}f}"


def size_label(length: str, width: str, thickness: str) -> str:
    """Build the ``"L x W x T"`` label used for custom geometry."""
    return f" {SIZE_SEPARATOR} ".join((length, width, thickness))


def split_size(size: Any) -> tuple[str, str, str]:
    """Split a size label into trimmed (length, width, thickness), padding with "0"."""
    parts = [p.strip() for p in to_trimmed_string(size).split(SIZE_SEPARATOR)]
    parts = [p or "0" for p in parts[:3]]
    while len(parts) < 3:
        parts.append("0")
    return parts[0], parts[1], parts[2]


def is_positive_number(value: Any) -> bool:
    """True when ``value`` parses to a finite number greater than zero."""
    number = to_optional_number(value)
    return number is not None and number > 0

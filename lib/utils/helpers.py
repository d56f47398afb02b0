"""General helper utilities."""

import math
from datetime import datetime, timezone
from typing import Any, Optional, Union

# Largest integer a JSON number round-trips exactly as a double.
MAX_SAFE_INTEGER = 2**53 - 1

Number = Union[int, float]


def _utcnow_iso(now: Optional[datetime] = None) -> str:
    """UTC timestamp such as ``2024-05-01T12:30:45.123Z``."""
    now = now or datetime.now(timezone.utc)
    return (
        now.astimezone(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


def _locale_time_string(now: Optional[datetime] = None) -> str:
    """Local wall-clock time as ``M/D/YYYY, h:mm:ss AM``."""
    now = now or datetime.now()
    hour = now.hour % 12 or 12
    meridiem = "AM" if now.hour < 12 else "PM"
    return (
        f"{now.month}/{now.day}/{now.year}, "
        f"{hour}:{now.minute:02d}:{now.second:02d} {meridiem}"
    )


def _is_missing_val(v: Any) -> bool:
    """Treat ``None`` and the empty string as missing; ``0`` is present."""
    if v is None:
        return True
    if isinstance(v, str) and v == "":
        return True
    return False


def _js_number(value: Number) -> Optional[Number]:
    """Normalise ``value`` the way a JSON number would serialise.

    Integral floats inside the safe-integer range collapse to ``int``.
    Integers outside that range become floats, and anything too large for a
    double becomes ``None``.
    """
    if isinstance(value, int) and abs(value) > MAX_SAFE_INTEGER:
        try:
            value = float(value)
        except OverflowError:
            return None
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        if value.is_integer() and abs(value) <= MAX_SAFE_INTEGER:
            return int(value)
    return value

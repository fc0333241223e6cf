import math
from decimal import InvalidOperation


def to_finite_float(value: object) -> float | None:
    """Convert numeric-like values to finite float; return None for NaN/inf/invalid."""
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, InvalidOperation):
        return None
    return number if math.isfinite(number) else None


def to_int(value: object, default: int = 0) -> int:
    """Convert numeric-like values to int, falling back to ``default``."""
    number = to_finite_float(value)
    if number is None:
        return default
    return int(number)


def parse_win_loss(value: object) -> tuple[int, int]:
    """
    Split a "W-L" record string into (won, lost).

    Missing or malformed parts count as 0: "12-4" -> (12, 4), "7" -> (7, 0).
    """
    if not isinstance(value, str) or not value.strip():
        return 0, 0
    parts = value.split("-")
    won = to_int(parts[0].strip())
    lost = to_int(parts[1].strip()) if len(parts) > 1 else 0
    return won, lost

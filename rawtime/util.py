"""Utility constants and helpers for rawtime.

Field ranges and rounding bounds shared by the encoding and value modules.
"""

# Inclusive bounds for every field, most significant first.
# The day bound is the widest any month allows; the calendar narrows it.
FIELD_RANGES: dict[str, tuple[int, int]] = {
    "year": (1, 9999),
    "month": (1, 12),
    "day": (1, 31),
    "hour": (0, 23),
    "minute": (0, 59),
    "second": (0, 59),
    "millisecond": (0, 999),
}

FIELD_NAMES: tuple[str, ...] = tuple(FIELD_RANGES)

# Rounding intervals are clamped to this range (minutes)
MIN_ROUNDING_INTERVAL = 1
MAX_ROUNDING_INTERVAL = 60


def clamp(value: int, low: int, high: int) -> int:
    return min(max(value, low), high)

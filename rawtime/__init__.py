from .calendar import (
    CivilCalendar,
    Clock,
    FormatRules,
    GregorianCalendar,
    SystemClock,
)
from .core import RawTime, Rounding
from .errors import ArgumentError, FormatError, RangeError, RawTimeError

__all__ = [
    "RawTime",
    "Rounding",
    "CivilCalendar",
    "GregorianCalendar",
    "FormatRules",
    "Clock",
    "SystemClock",
    "RawTimeError",
    "RangeError",
    "FormatError",
    "ArgumentError",
]

"""The RawTime value type.

A RawTime is an immutable civil timestamp (year down to millisecond) with no
timezone, locale, or clock attached. Calendar math is delegated to the
class-level ``calendar`` adapter; comparisons run on a bit-packed key.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from functools import cached_property
from typing import Any, ClassVar, Literal, TypeAlias

from dateutil.relativedelta import weekday
from typing_extensions import Self

from rawtime import encoding
from rawtime.calendar import (
    CivilCalendar,
    Clock,
    FormatRules,
    GregorianCalendar,
    SystemClock,
    datetime_to_fields,
    fields_to_datetime,
)
from rawtime.encoding import Fields, Precision
from rawtime.errors import RangeError
from rawtime.util import (
    FIELD_NAMES,
    FIELD_RANGES,
    MAX_ROUNDING_INTERVAL,
    MIN_ROUNDING_INTERVAL,
    clamp,
)

Rounding: TypeAlias = Literal["math", "floor", "ceiling"]

_ROUNDINGS: tuple[Rounding, ...] = ("math", "floor", "ceiling")


@dataclass(frozen=True, eq=False)
class RawTime:
    """Immutable civil date and time with millisecond precision.

    Every field is validated on construction, including the day against the
    month length reported by ``calendar``. Transformations return new
    instances of the same class.

    Equality and ordering use the fast key from ``rawtime.encoding``, which
    orders exactly like the ``fields`` tuple. Comparing against anything that
    is not a RawTime returns NotImplemented, so ``value == None`` is False.

    To run on another calendar, subclass and rebind ``calendar``::

        class FiscalTime(RawTime):
            calendar = FiscalCalendar()
    """

    calendar: ClassVar[CivilCalendar[Any]] = GregorianCalendar()

    year: int = 1
    month: int = 1
    day: int = 1
    hour: int = 0
    minute: int = 0
    second: int = 0
    millisecond: int = 0

    def __post_init__(self) -> None:
        for field in dataclasses.fields(self):
            value = getattr(self, field.name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(
                    f"{field.name} must be an int, got {type(value).__name__!r}: {value!r}"
                )

            low, high = FIELD_RANGES[field.name]
            if field.name == "day":
                high = self.calendar.days_in_month(self.year, self.month)
            if not low <= value <= high:
                if field.name == "day":
                    raise RangeError(
                        "day",
                        value,
                        low,
                        high,
                        reason=f"{self.year:04d}-{self.month:02d} has {high} days",
                    )
                raise RangeError(field.name, value, low, high)

    # ------------------------------------------------------------------
    # Named constructors
    # ------------------------------------------------------------------

    @classmethod
    def default(cls) -> Self:
        """0001-01-01 00:00:00.000"""
        return cls()

    @classmethod
    def from_date(cls, year: int, month: int, day: int) -> Self:
        """Midnight of the given date."""
        return cls(year, month, day)

    @classmethod
    def from_datetime(cls, value: datetime | date) -> Self:
        """Copy the civil fields of a ``datetime`` or ``date``.

        Microseconds are truncated to milliseconds. Any tzinfo is dropped
        without conversion: the wall-clock fields are taken as they are.
        """
        if not isinstance(value, datetime):
            return cls(value.year, value.month, value.day)
        return cls(*datetime_to_fields(value))

    @classmethod
    def now(cls, clock: Clock | None = None) -> Self:
        """Current wall-clock time, read from ``clock`` (default: this machine)."""
        clock = clock if clock is not None else SystemClock()
        return cls.from_datetime(clock.now())

    def to_datetime(self) -> datetime:
        """Gregorian ``datetime`` with the same fields.

        Raises:
            RangeError: If the bound calendar allows a day Gregorian lacks
        """
        return fields_to_datetime(self.fields)

    @property
    def fields(self) -> Fields:
        """``(year, month, day, hour, minute, second, millisecond)``"""
        return (
            self.year,
            self.month,
            self.day,
            self.hour,
            self.minute,
            self.second,
            self.millisecond,
        )

    # ------------------------------------------------------------------
    # Positional integer encoding
    # ------------------------------------------------------------------

    def encode(self, precision: Precision = "millisecond") -> int:
        """Encode positionally as a decimal integer, ``yyyyMMddHHmmssfff``.

        Coarser precisions drop trailing fields: ``"day"`` gives
        ``yyyyMMdd``, ``"minute"`` gives ``yyyyMMddHHmm`` and ``"second"``
        gives ``yyyyMMddHHmmss``. Not comparable with the fast key.
        """
        return encoding.encode(self.fields, precision)

    def encode_day(self) -> int:
        return self.encode("day")

    def encode_minute(self) -> int:
        return self.encode("minute")

    def encode_second(self) -> int:
        return self.encode("second")

    def encode_full(self) -> int:
        return self.encode("millisecond")

    @classmethod
    def from_raw(cls, raw: int, precision: Precision = "millisecond") -> Self:
        """Decode an integer produced by ``encode`` at the same precision.

        Missing lower fields become zero. Every decoded fragment is
        validated like a normal construction.

        Raises:
            RangeError: If ``raw`` is negative or any fragment is out of range
        """
        return cls(*encoding.decode(raw, precision))

    @classmethod
    def from_raw_day(cls, raw: int) -> Self:
        return cls.from_raw(raw, "day")

    @classmethod
    def from_raw_minute(cls, raw: int) -> Self:
        return cls.from_raw(raw, "minute")

    @classmethod
    def from_raw_second(cls, raw: int) -> Self:
        return cls.from_raw(raw, "second")

    # ------------------------------------------------------------------
    # Truncation and projection
    # ------------------------------------------------------------------

    def _project(self, **changes: int) -> Self:
        """Copy with ``changes`` applied, without asking the calendar.

        Only for results that are valid whenever ``self`` is: the same date,
        or the date fields reset to 0001-01-01.
        """
        values = dict(zip(FIELD_NAMES, self.fields))
        values.update(changes)
        projected = object.__new__(type(self))
        for name, value in values.items():
            object.__setattr__(projected, name, value)
        return projected

    def date(self) -> Self:
        """Same day at midnight."""
        return self._project(hour=0, minute=0, second=0, millisecond=0)

    def time_of_day(self) -> Self:
        """Time of day on 0001-01-01."""
        return self._project(year=1, month=1, day=1)

    def time_of_day_seconds(self) -> Self:
        """Time of day on 0001-01-01, truncated to the second."""
        return self._project(year=1, month=1, day=1, millisecond=0)

    def time_of_day_minutes(self) -> Self:
        """Time of day on 0001-01-01, truncated to the minute."""
        return self._project(year=1, month=1, day=1, second=0, millisecond=0)

    # ------------------------------------------------------------------
    # Rounding
    # ------------------------------------------------------------------

    def round_minute(self, interval: int, rounding: Rounding = "math") -> Self:
        """Round the minute to a multiple of ``interval``.

        ``interval`` is clamped to 1..60. A minute already on a multiple is
        returned unchanged. Otherwise, with ``r = minute % interval``:

        - ``"math"``: ``m = minute + interval // 2``, then ``m - m % interval``.
          Nearest multiple; an exact half (even intervals only) goes up.
        - ``"floor"``: ``minute - r``
        - ``"ceiling"``: ``minute + interval - r``

        The shift is applied with ``add_minutes``, so it can carry into the
        hour, day, month or year. Seconds and milliseconds are untouched.

        Raises:
            ValueError: If ``rounding`` is not a known policy
            RangeError: If the shift leaves the supported years
        """
        if rounding not in _ROUNDINGS:
            valid = ", ".join(_ROUNDINGS)
            raise ValueError(f"Invalid rounding: '{rounding}'\nValid roundings: {valid}")

        interval = clamp(interval, MIN_ROUNDING_INTERVAL, MAX_ROUNDING_INTERVAL)
        remainder = self.minute % interval
        if remainder == 0:
            return self

        if rounding == "math":
            rounded = self.minute + interval // 2
            rounded -= rounded % interval
        elif rounding == "floor":
            rounded = self.minute - remainder
        else:
            rounded = self.minute + interval - remainder

        return self.add_minutes(rounded - self.minute)

    # ------------------------------------------------------------------
    # Arithmetic (delegated to the calendar)
    # ------------------------------------------------------------------

    def _instant(self) -> Any:
        return self.calendar.to_instant(self.fields)

    def _from_calendar(self, instant: Any) -> Self:
        return type(self)(*self.calendar.from_instant(instant))

    def add_years(self, years: int) -> Self:
        return self._from_calendar(self.calendar.add_years(self._instant(), years))

    def add_months(self, months: int) -> Self:
        return self._from_calendar(self.calendar.add_months(self._instant(), months))

    def add_days(self, days: int) -> Self:
        return self._from_calendar(self.calendar.add_days(self._instant(), days))

    def add_hours(self, hours: int) -> Self:
        return self._from_calendar(self.calendar.add_hours(self._instant(), hours))

    def add_minutes(self, minutes: int) -> Self:
        return self._from_calendar(self.calendar.add_minutes(self._instant(), minutes))

    def add_seconds(self, seconds: int) -> Self:
        return self._from_calendar(self.calendar.add_seconds(self._instant(), seconds))

    def add_milliseconds(self, milliseconds: int) -> Self:
        return self._from_calendar(
            self.calendar.add_milliseconds(self._instant(), milliseconds)
        )

    @staticmethod
    def difference(left: RawTime, right: RawTime) -> timedelta:
        """Elapsed time ``left - right``, computed by ``left``'s calendar."""
        calendar = left.calendar
        return calendar.difference(left._instant(), calendar.to_instant(right.fields))

    def __sub__(self, other: object) -> timedelta:
        if not isinstance(other, RawTime):
            return NotImplemented
        return RawTime.difference(self, other)

    @staticmethod
    def earliest(left: RawTime, right: RawTime) -> RawTime:
        """The lesser of two values; ``left`` on a tie."""
        return left if left <= right else right

    @staticmethod
    def latest(left: RawTime, right: RawTime) -> RawTime:
        """The greater of two values; ``left`` on a tie."""
        return left if left >= right else right

    # ------------------------------------------------------------------
    # Calendar queries
    # ------------------------------------------------------------------

    def day_of_week(self) -> weekday:
        """dateutil weekday constant, ``MO`` through ``SU``."""
        return self.calendar.day_of_week(self._instant())

    def day_of_year(self) -> int:
        return self.calendar.day_of_year(self._instant())

    def minute_of_day(self) -> int:
        return self.hour * 60 + self.minute

    def second_of_day(self) -> int:
        return self.minute_of_day() * 60 + self.second

    # ------------------------------------------------------------------
    # Text conversion
    # ------------------------------------------------------------------

    def to_string(self, fmt: str | None = None) -> str:
        """Render with a strftime pattern, or ``YYYY-MM-DD HH:MM:SS.fff``."""
        return self.calendar.format(self._instant(), fmt)

    def __str__(self) -> str:
        return self.to_string()

    @classmethod
    def parse(cls, text: str, rules: FormatRules | None = None) -> Self:
        """Parse text through the calendar.

        Raises:
            ArgumentError: If ``text`` is None, empty, or blank
            FormatError: If the text matches no recognized pattern
            RangeError: If the parsed value cannot be represented
        """
        return cls(*cls.calendar.from_instant(cls.calendar.parse(text, rules)))

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    @cached_property
    def _key(self) -> int:
        return encoding.fast_key(self.fields)

    def compare(self, other: RawTime) -> int:
        """-1, 0 or 1 as this value is before, equal to, or after ``other``.

        Raises:
            TypeError: If ``other`` is not a RawTime
        """
        if not isinstance(other, RawTime):
            raise TypeError(
                f"Cannot compare RawTime with {type(other).__name__!r}: {other!r}"
            )
        return (self._key > other._key) - (self._key < other._key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RawTime):
            return NotImplemented
        return self._key == other._key

    def __hash__(self) -> int:
        return hash(self.fields)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, RawTime):
            return NotImplemented
        return self._key < other._key

    def __le__(self, other: object) -> bool:
        if not isinstance(other, RawTime):
            return NotImplemented
        return self._key <= other._key

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, RawTime):
            return NotImplemented
        return self._key > other._key

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, RawTime):
            return NotImplemented
        return self._key >= other._key

"""Civil calendar adapters.

RawTime never does calendar math itself. Leap years, month lengths, carry
propagation, weekday lookups and text conversion are delegated to a
CivilCalendar. Each calendar picks its own "instant" type and converts to and
from RawTime's seven fields with ``to_instant`` and ``from_instant``.

The default GregorianCalendar works on naive ``datetime`` instants and is
backed by the standard library datetime and python-dateutil's relativedelta
and parser.
"""

import calendar as _stdlib_calendar
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Generic, TypeVar

from dateutil import parser as _dateutil_parser
from dateutil.relativedelta import FR, MO, SA, SU, TH, TU, WE, relativedelta, weekday
from typing_extensions import override

from rawtime.encoding import Fields
from rawtime.errors import ArgumentError, FormatError, RangeError
from rawtime.util import FIELD_RANGES

logger = logging.getLogger(__name__)

# Default rendering precision: 2024-02-29 23:58:00.000
DEFAULT_TIMESPEC = "milliseconds"

# Indexed by datetime.weekday() (Monday == 0)
_WEEKDAYS: tuple[weekday, ...] = (MO, TU, WE, TH, FR, SA, SU)

Instant = TypeVar("Instant")


def fields_to_datetime(fields: Fields) -> datetime:
    """Build a naive ``datetime`` from the seven fields.

    Raises:
        RangeError: If the fields name a day the Gregorian calendar lacks
    """
    year, month, day, hour, minute, second, millisecond = fields
    try:
        return datetime(year, month, day, hour, minute, second, millisecond * 1000)
    except ValueError as exc:
        logger.debug("%r is not a Gregorian date/time: %s", fields, exc)
        raise RangeError(
            "day",
            day,
            1,
            _stdlib_calendar.monthrange(year, month)[1],
            reason=f"{year:04d}-{month:02d} has no day {day} in the Gregorian calendar",
        ) from exc


def datetime_to_fields(value: datetime) -> Fields:
    """The seven fields of ``value``; microseconds truncate to milliseconds."""
    return (
        value.year,
        value.month,
        value.day,
        value.hour,
        value.minute,
        value.second,
        value.microsecond // 1000,
    )


@dataclass(frozen=True)
class FormatRules:
    """Rules for turning text into a date/time.

    Attributes:
        formats: Explicit strptime patterns tried in order. When empty, the
            text goes through dateutil's free-form parser instead.
        dayfirst: Read ambiguous ``01/02/2024`` as 1 February
        yearfirst: Read ambiguous ``24/01/02`` with the year first
        fuzzy: Ignore unknown tokens around the date/time
    """

    formats: tuple[str, ...] = ()
    dayfirst: bool = False
    yearfirst: bool = False
    fuzzy: bool = False


class CivilCalendar(ABC, Generic[Instant]):
    """Calendar capability consumed by RawTime.

    Every value that ``days_in_month`` admits must survive ``to_instant``,
    since RawTime converts through it before each delegated operation.
    """

    @abstractmethod
    def to_instant(self, fields: Fields) -> Instant:
        pass

    @abstractmethod
    def from_instant(self, instant: Instant) -> Fields:
        pass

    @abstractmethod
    def days_in_month(self, year: int, month: int) -> int:
        pass

    @abstractmethod
    def add_years(self, instant: Instant, years: int) -> Instant:
        pass

    @abstractmethod
    def add_months(self, instant: Instant, months: int) -> Instant:
        pass

    @abstractmethod
    def add_days(self, instant: Instant, days: int) -> Instant:
        pass

    @abstractmethod
    def add_hours(self, instant: Instant, hours: int) -> Instant:
        pass

    @abstractmethod
    def add_minutes(self, instant: Instant, minutes: int) -> Instant:
        pass

    @abstractmethod
    def add_seconds(self, instant: Instant, seconds: int) -> Instant:
        pass

    @abstractmethod
    def add_milliseconds(self, instant: Instant, milliseconds: int) -> Instant:
        pass

    @abstractmethod
    def difference(self, left: Instant, right: Instant) -> timedelta:
        """Elapsed duration ``left - right``."""
        pass

    @abstractmethod
    def day_of_week(self, instant: Instant) -> weekday:
        pass

    @abstractmethod
    def day_of_year(self, instant: Instant) -> int:
        pass

    @abstractmethod
    def format(self, instant: Instant, fmt: str | None = None) -> str:
        pass

    @abstractmethod
    def parse(self, text: str, rules: FormatRules | None = None) -> Instant:
        pass


class GregorianCalendar(CivilCalendar[datetime]):
    """Proleptic Gregorian calendar over years 1..9999."""

    @override
    def to_instant(self, fields: Fields) -> datetime:
        return fields_to_datetime(fields)

    @override
    def from_instant(self, instant: datetime) -> Fields:
        return datetime_to_fields(instant)

    @override
    def days_in_month(self, year: int, month: int) -> int:
        return _stdlib_calendar.monthrange(year, month)[1]

    def _shift(
        self,
        instant: datetime,
        delta_type: type[timedelta] | type[relativedelta],
        **amount: int,
    ) -> datetime:
        """Add ``delta_type(**amount)``, surfacing overflow as a RangeError."""
        try:
            return instant + delta_type(**amount)
        except (OverflowError, ValueError) as exc:
            low, high = FIELD_RANGES["year"]
            (unit, value), = amount.items()
            logger.debug("Adding %d %s to %s failed: %s", value, unit, instant, exc)
            raise RangeError(
                "year",
                None,
                low,
                high,
                reason=f"adding {value} {unit} to {instant} leaves years {low}..{high}",
            ) from exc

    @override
    def add_years(self, instant: datetime, years: int) -> datetime:
        # relativedelta clamps Feb 29 to Feb 28 in non-leap years
        return self._shift(instant, relativedelta, years=years)

    @override
    def add_months(self, instant: datetime, months: int) -> datetime:
        # relativedelta clamps the day to the target month's length
        return self._shift(instant, relativedelta, months=months)

    @override
    def add_days(self, instant: datetime, days: int) -> datetime:
        return self._shift(instant, timedelta, days=days)

    @override
    def add_hours(self, instant: datetime, hours: int) -> datetime:
        return self._shift(instant, timedelta, hours=hours)

    @override
    def add_minutes(self, instant: datetime, minutes: int) -> datetime:
        return self._shift(instant, timedelta, minutes=minutes)

    @override
    def add_seconds(self, instant: datetime, seconds: int) -> datetime:
        return self._shift(instant, timedelta, seconds=seconds)

    @override
    def add_milliseconds(self, instant: datetime, milliseconds: int) -> datetime:
        return self._shift(instant, timedelta, milliseconds=milliseconds)

    @override
    def difference(self, left: datetime, right: datetime) -> timedelta:
        return left - right

    @override
    def day_of_week(self, instant: datetime) -> weekday:
        return _WEEKDAYS[instant.weekday()]

    @override
    def day_of_year(self, instant: datetime) -> int:
        return instant.timetuple().tm_yday

    @override
    def format(self, instant: datetime, fmt: str | None = None) -> str:
        """Render ``instant`` with a strftime pattern.

        With no pattern the result looks like ``2024-02-29 23:58:00.000``.
        """
        if fmt is None:
            return instant.isoformat(sep=" ", timespec=DEFAULT_TIMESPEC)
        return instant.strftime(fmt)

    @override
    def parse(self, text: str, rules: FormatRules | None = None) -> datetime:
        """Turn text into a naive datetime.

        Explicit ``rules.formats`` are tried in order with strptime; without
        them dateutil's parser handles the text. Timezone designators are
        ignored.

        Raises:
            ArgumentError: If ``text`` is None, empty, or blank
            FormatError: If the text matches no recognized pattern
        """
        if text is None or not text.strip():
            raise ArgumentError("text")
        rules = rules or FormatRules()

        if rules.formats:
            for fmt in rules.formats:
                try:
                    return datetime.strptime(text, fmt)
                except ValueError:
                    continue
            logger.debug("No format in %r matched %r", rules.formats, text)
            raise FormatError(text, rules.formats)

        try:
            return _dateutil_parser.parse(
                text,
                dayfirst=rules.dayfirst,
                yearfirst=rules.yearfirst,
                fuzzy=rules.fuzzy,
                ignoretz=True,
            )
        except (_dateutil_parser.ParserError, ValueError, OverflowError) as exc:
            logger.debug("dateutil could not parse %r: %s", text, exc)
            raise FormatError(text) from exc


class Clock(ABC):
    """Source of the current wall-clock reading."""

    @abstractmethod
    def now(self) -> datetime:
        pass


class SystemClock(Clock):
    """Local wall clock of this machine."""

    @override
    def now(self) -> datetime:
        return datetime.now()

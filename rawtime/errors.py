"""Error hierarchy for rawtime.

Every failure is raised synchronously at the point of violation. The concrete
errors also derive from ValueError so callers that only know the standard
library can still catch them.
"""

from collections.abc import Sequence


class RawTimeError(Exception):
    """Base class for all rawtime errors."""


class RangeError(RawTimeError, ValueError):
    """Raised when a field falls outside its valid range.

    ``value`` is None when no single field value is to blame, as when an
    addition carries the year past the supported range.
    """

    def __init__(
        self,
        field: str,
        value: int | None,
        low: int | None = None,
        high: int | None = None,
        reason: str | None = None,
    ) -> None:
        self.field = field
        self.value = value
        self.low = low
        self.high = high
        self.reason = reason

        if reason is not None:
            message = f"{field} out of range ({reason})"
        elif low is not None and high is not None:
            message = f"{field} must be between {low} and {high}"
        else:
            message = f"{field} out of range"
        if value is not None:
            message += f", got {value}"
        super().__init__(message)


class FormatError(RawTimeError, ValueError):
    """Raised when text does not match any recognized date/time pattern."""

    def __init__(self, text: str, formats: Sequence[str] = ()) -> None:
        self.text = text
        self.formats = tuple(formats)

        if self.formats:
            tried = ", ".join(repr(f) for f in self.formats)
            message = f"Cannot parse {text!r}: no match for formats {tried}"
        else:
            message = f"Cannot parse {text!r} as a date/time"
        super().__init__(message)


class ArgumentError(RawTimeError, ValueError):
    """Raised when a required textual argument is absent or empty."""

    def __init__(self, argument: str) -> None:
        self.argument = argument
        super().__init__(f"{argument} must be a non-empty string")

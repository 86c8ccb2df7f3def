"""Integer encodings for RawTime fields.

Two independent schemes live here and must never be mixed:

- Positional decimal encoding (``yyyyMMddHHmmssfff`` and its truncated
  prefixes). Human readable, sortable, and the only integer format meant
  for persistence or interchange.
- Fast key: fields packed most-significant-first into disjoint bit ranges.
  Only used for equality and ordering; it has no decoder.

All functions work on the seven-tuple
``(year, month, day, hour, minute, second, millisecond)`` and perform no
range validation of their own. Validation is the caller's job.
"""

from collections.abc import Sequence
from typing import Literal, TypeAlias

from rawtime.errors import RangeError
from rawtime.util import FIELD_NAMES, FIELD_RANGES

Fields: TypeAlias = tuple[int, int, int, int, int, int, int]

Precision: TypeAlias = Literal["day", "minute", "second", "millisecond"]

# Decimal radix used to append each field after year
_DECIMAL_RADIX = (100, 100, 100, 100, 100, 1000)

# Number of leading fields covered by each precision
_FIELD_COUNTS: dict[Precision, int] = {
    "day": 3,
    "minute": 5,
    "second": 6,
    "millisecond": 7,
}

# Factor that lifts a truncated encoding to full yyyyMMddHHmmssfff scale
SCALES: dict[Precision, int] = {
    "day": 1_000_000_000,
    "minute": 100_000,
    "second": 1_000,
    "millisecond": 1,
}

# Bits reserved for each field after year, in packing order
_BIT_WIDTHS = (4, 6, 5, 6, 6, 10)


def _check_precision(precision: str) -> int:
    if precision not in _FIELD_COUNTS:
        valid = ", ".join(_FIELD_COUNTS)
        raise ValueError(f"Invalid precision: '{precision}'\nValid precisions: {valid}")
    return _FIELD_COUNTS[precision]


def encode(fields: Sequence[int], precision: Precision = "millisecond") -> int:
    """Pack fields positionally into a decimal integer.

    ``precision`` selects the last field kept:

    - ``"day"``: ``yyyyMMdd``
    - ``"minute"``: ``yyyyMMddHHmm``
    - ``"second"``: ``yyyyMMddHHmmss``
    - ``"millisecond"``: ``yyyyMMddHHmmssfff``
    """
    count = _check_precision(precision)
    encoded = fields[0]
    for value, radix in zip(fields[1:count], _DECIMAL_RADIX):
        encoded = encoded * radix + value
    return encoded


def decode(raw: int, precision: Precision = "millisecond") -> Fields:
    """Split a positional decimal integer back into its seven fields.

    Encodings truncated at ``precision`` are first multiplied up to full
    scale, so the missing lower fields come back as zero. Fragments are
    returned as-is; an out-of-range fragment (month 13, say) is left for
    the caller's validation to reject.

    Raises:
        RangeError: If ``raw`` is negative
    """
    _check_precision(precision)
    if raw < 0:
        raise RangeError("raw", raw, reason="encoded value must not be negative")

    raw *= SCALES[precision]
    parts: list[int] = []
    for radix in reversed(_DECIMAL_RADIX):
        raw, fragment = divmod(raw, radix)
        parts.append(fragment)
    parts.append(raw)
    parts.reverse()
    return tuple(parts)  # type: ignore[return-value]


def fast_key(fields: Sequence[int]) -> int:
    """Pack fields into disjoint bit ranges for fast comparisons.

    Each field gets at least as many bits as its maximum value needs, and
    the fields go in most-significant first, so integer order equals
    lexicographic field order. Not convertible to or from ``encode``.
    """
    encoded = fields[0]
    for value, width in zip(fields[1:], _BIT_WIDTHS):
        encoded = (encoded << width) | value
    return encoded


def _verify_layout() -> int:
    """Check every field fits its bit width and the key stays in 63 bits.

    Returns the total number of bits a key can occupy.
    """
    total = FIELD_RANGES["year"][1].bit_length()
    for name, width in zip(FIELD_NAMES[1:], _BIT_WIDTHS):
        needed = FIELD_RANGES[name][1].bit_length()
        if needed > width:
            raise RuntimeError(
                f"Fast key layout broken: {name} needs {needed} bits, has {width}"
            )
        total += width
    if total > 63:
        raise RuntimeError(f"Fast key layout needs {total} bits, exceeds 63")
    return total


KEY_BITS = _verify_layout()

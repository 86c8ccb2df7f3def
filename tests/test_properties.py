"""Hypothesis property-based tests.

Properties that must hold for every valid RawTime, verified by random
generation.
"""

from datetime import timedelta

from hypothesis import given, settings
from hypothesis import strategies as st

from rawtime import RangeError, RawTime
from rawtime.encoding import fast_key

# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

# Naive datetimes cover exactly the valid RawTime date range and month lengths
_raw_times = st.builds(
    RawTime.from_datetime,
    st.datetimes(),
)

_intervals = st.integers(min_value=1, max_value=60)


# ---------------------------------------------------------------------------
# Positional encoding
# ---------------------------------------------------------------------------


@given(value=_raw_times)
@settings(max_examples=200)
def test_full_encoding_round_trip(value):
    """from_raw(encode_full(x)) == x"""
    assert RawTime.from_raw(value.encode_full()) == value


@given(value=_raw_times)
@settings(max_examples=200)
def test_truncated_encodings_zero_fill(value):
    """Decoding a truncated encoding zeroes exactly the dropped fields."""
    assert RawTime.from_raw_day(value.encode_day()) == value.date()
    assert RawTime.from_raw_minute(value.encode_minute()) == value.date().add_minutes(
        value.minute_of_day()
    )
    assert RawTime.from_raw_second(value.encode_second()) == value.add_milliseconds(
        -value.millisecond
    )


@given(a=_raw_times, b=_raw_times)
@settings(max_examples=300)
def test_encodings_are_strictly_increasing(a, b):
    """Every positional encoding preserves the field order."""
    if a.fields < b.fields:
        assert a.encode_full() < b.encode_full()
        assert a.encode_second() <= b.encode_second()
        assert a.encode_minute() <= b.encode_minute()
        assert a.encode_day() <= b.encode_day()
    if a.fields[:3] < b.fields[:3]:
        assert a.encode_day() < b.encode_day()
    if a.fields[:5] < b.fields[:5]:
        assert a.encode_minute() < b.encode_minute()
    if a.fields[:6] < b.fields[:6]:
        assert a.encode_second() < b.encode_second()


# ---------------------------------------------------------------------------
# Fast key ordering
# ---------------------------------------------------------------------------


@given(a=_raw_times, b=_raw_times)
@settings(max_examples=300)
def test_fast_key_order_matches_field_order(a, b):
    """fast_key(a) < fast_key(b) <=> a.fields < b.fields"""
    assert (fast_key(a.fields) < fast_key(b.fields)) == (a.fields < b.fields)
    assert (a == b) == (a.fields == b.fields)
    assert (a < b) == (a.fields < b.fields)
    assert a.compare(b) == (a.fields > b.fields) - (a.fields < b.fields)


@given(a=_raw_times, b=_raw_times)
@settings(max_examples=100)
def test_earliest_latest_bound_both(a, b):
    """earliest(a, b) <= a, b <= latest(a, b)"""
    low = RawTime.earliest(a, b)
    high = RawTime.latest(a, b)

    assert low <= a and low <= b
    assert a <= high and b <= high


@given(value=_raw_times)
@settings(max_examples=100)
def test_fast_key_keeps_sign_bit_clear(value):
    """Keys always fit in a signed 64-bit integer."""
    assert 0 < fast_key(value.fields) < 2**63


# ---------------------------------------------------------------------------
# Rounding
# ---------------------------------------------------------------------------


@given(value=_raw_times, interval=_intervals)
@settings(max_examples=200)
def test_rounding_lands_on_a_multiple(value, interval):
    """Every policy shifts the minute onto a multiple counted from this hour.

    Intervals that do not divide 60 can overshoot the hour, so the multiple
    is checked on ``minute + shift`` rather than on the resulting minute.
    """
    for rounding in ("math", "floor", "ceiling"):
        try:
            rounded = value.round_minute(interval, rounding)
        except RangeError:
            # Only possible when ceiling/math carries past year 9999
            assert value.year == 9999
            continue
        shift = (rounded - value) // timedelta(minutes=1)
        assert (value.minute + shift) % interval == 0
        assert rounded.second == value.second
        assert rounded.millisecond == value.millisecond


@given(value=_raw_times, interval=_intervals)
@settings(max_examples=200)
def test_floor_and_ceiling_bracket_the_value(value, interval):
    """floor <= value <= ceiling, and they differ by at most one interval."""
    floor = value.round_minute(interval, "floor")
    assert floor <= value

    if value.year == 9999 and value.month == 12 and value.day == 31 and value.hour == 23:
        return
    ceiling = value.round_minute(interval, "ceiling")
    assert value <= ceiling
    assert (ceiling - floor).total_seconds() <= interval * 60

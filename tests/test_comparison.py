"""Tests for equality, hashing and ordering."""

import pytest

from rawtime import RawTime


def test_equal_when_all_fields_match():
    """Test value equality."""
    assert RawTime(2024, 1, 2, 3, 4, 5, 6) == RawTime(2024, 1, 2, 3, 4, 5, 6)
    assert RawTime(2024, 1, 2, 3, 4, 5, 6) != RawTime(2024, 1, 2, 3, 4, 5, 7)


def test_hash_consistent_with_equality():
    """Test that equal values hash alike and deduplicate in sets."""
    a = RawTime(2024, 1, 2, 3, 4, 5, 6)
    b = RawTime.from_raw(a.encode_full())

    assert a is not b
    assert hash(a) == hash(b)
    assert len({a, b, RawTime(2024, 1, 2)}) == 2


def test_none_is_never_equal():
    """Test that a missing operand compares unequal to any value."""
    value = RawTime()

    assert value != None  # noqa: E711
    assert not (value == None)  # noqa: E711
    assert None != value  # noqa: E711


def test_other_types_are_never_equal():
    """Test that encoded integers and datetimes do not equal a RawTime."""
    value = RawTime(2024, 1, 1)

    assert value != value.encode_full()
    assert value != value.to_datetime()


def test_ordering_against_other_types_is_unsupported():
    """Test that ordering a RawTime against a non-RawTime is a TypeError."""
    with pytest.raises(TypeError):
        RawTime(2024, 1, 1) < 5  # type: ignore[operator]

    with pytest.raises(TypeError):
        RawTime(2024, 1, 1) >= None  # type: ignore[operator]


def test_relational_operators():
    """Test <, <=, >, >= on adjacent values."""
    early = RawTime(2024, 1, 1, 23, 59, 59, 999)
    late = RawTime(2024, 1, 2)

    assert early < late
    assert early <= late
    assert late > early
    assert late >= early
    assert early <= RawTime(2024, 1, 1, 23, 59, 59, 999)
    assert early >= RawTime(2024, 1, 1, 23, 59, 59, 999)
    assert not early < RawTime(2024, 1, 1, 23, 59, 59, 999)


def test_compare_is_three_way():
    """Test that compare() returns -1, 0 or 1."""
    early = RawTime(2024, 1, 1)
    late = RawTime(2024, 1, 1, 0, 0, 0, 1)

    assert early.compare(late) == -1
    assert late.compare(early) == 1
    assert early.compare(RawTime(2024, 1, 1)) == 0


@pytest.mark.parametrize("other", [None, 5, "2024-01-01", (2024, 1, 1, 0, 0, 0, 0)])
def test_compare_rejects_other_types(other):
    """Test that compare() raises TypeError for anything but a RawTime."""
    with pytest.raises(TypeError, match="Cannot compare RawTime"):
        RawTime(2024, 1, 1).compare(other)  # type: ignore[arg-type]


def test_sorted_matches_field_tuples():
    """Test that sorting values sorts them like their field tuples."""
    values = [
        RawTime(2024, 12, 1),
        RawTime(2024, 1, 31, 23),
        RawTime(2023, 12, 31, 23, 59, 59, 999),
        RawTime(2024, 1, 31, 22, 59, 59, 999),
        RawTime(1, 1, 1),
        RawTime(9999, 12, 31, 23, 59, 59, 999),
    ]

    assert [v.fields for v in sorted(values)] == sorted(v.fields for v in values)


def test_subclass_values_compare_with_base_values():
    """Test that subclasses share the same ordering and equality."""

    class Stamp(RawTime):
        pass

    assert Stamp(2024, 1, 1) == RawTime(2024, 1, 1)
    assert Stamp(2024, 1, 1) < RawTime(2024, 1, 2)

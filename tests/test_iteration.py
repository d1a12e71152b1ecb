"""Tests for DateRange.by and DateRange.iterate."""

from datetime import datetime, timedelta

import pytest
from dateutil.relativedelta import relativedelta

from calrange import DateRange, InvalidStepError


def at(hour: int, minute: int = 0) -> datetime:
    return datetime(2025, 1, 1, hour, minute)


def collect(rng: DateRange, step) -> list[datetime]:
    seen: list[datetime] = []
    rng.by(step, seen.append)
    return seen


# --- Unit keyword steps ---


def test_by_hour_includes_both_boundaries():
    """Scenario: stepping [00:00, 10:00] by hour yields 11 instants."""
    instants = collect(DateRange(at(0), at(10)), "hour")

    assert len(instants) == 11
    assert instants[0] == at(0)
    assert instants[-1] == at(10)
    assert instants == [at(h) for h in range(11)]


def test_by_unit_stops_before_leaving_range():
    instants = collect(DateRange(at(0), at(2, 30)), "hour")
    assert instants == [at(0), at(1), at(2)]


def test_by_unit_accepts_plural_and_case():
    rng = DateRange(at(0), at(3))
    assert collect(rng, "Hours") == collect(rng, "hour")


def test_by_month_advances_from_previous_instant():
    """Each step adds one month to the last instant, so a clamped day sticks."""
    rng = DateRange(datetime(2025, 1, 31), datetime(2025, 4, 30))
    instants = collect(rng, "month")

    assert instants == [
        datetime(2025, 1, 31),
        datetime(2025, 2, 28),
        datetime(2025, 3, 28),
        datetime(2025, 4, 28),
    ]


def test_by_year_from_leap_day():
    rng = DateRange(datetime(2024, 2, 29), datetime(2026, 3, 1))
    assert collect(rng, "year") == [
        datetime(2024, 2, 29),
        datetime(2025, 2, 28),
        datetime(2026, 2, 28),
    ]


def test_by_week():
    rng = DateRange(datetime(2025, 1, 1), datetime(2025, 1, 31))
    instants = collect(rng, "week")
    assert len(instants) == 5
    assert instants[-1] == datetime(2025, 1, 29)


def test_by_unit_on_zero_length_range_yields_start():
    assert collect(DateRange(at(5), at(5)), "day") == [at(5)]


def test_by_unknown_unit_raises():
    with pytest.raises(InvalidStepError, match="Unknown unit 'fortnight'"):
        collect(DateRange(at(0), at(1)), "fortnight")


# --- Duration steps ---


def test_by_timedelta_rounds_step_count():
    """10h / 3h rounds to 3 steps, i.e. 4 instants."""
    instants = collect(DateRange(at(0), at(10)), timedelta(hours=3))
    assert instants == [at(0), at(3), at(6), at(9)]


def test_by_timedelta_may_overshoot_end():
    """10h / 4h = 2.5 rounds half up to 3, so the last instant passes end."""
    instants = collect(DateRange(at(0), at(10)), timedelta(hours=4))
    assert instants[-1] == at(12)
    assert len(instants) == 4


def test_by_range_uses_its_length():
    step = DateRange(datetime(2030, 6, 1, 0), datetime(2030, 6, 1, 5))
    instants = collect(DateRange(at(0), at(10)), step)
    assert instants == [at(0), at(5), at(10)]


def test_by_milliseconds():
    instants = collect(DateRange(at(0), at(2)), 3_600_000)
    assert instants == [at(0), at(1), at(2)]


def test_by_zero_step_is_a_no_op():
    """A zero-length step yields nothing instead of looping forever."""
    rng = DateRange(at(0), at(10))
    assert collect(rng, timedelta(0)) == []
    assert collect(rng, DateRange(at(0), at(0))) == []


def test_by_negative_step_raises():
    with pytest.raises(InvalidStepError, match="must not be negative"):
        collect(DateRange(at(0), at(10)), timedelta(hours=-1))


def test_by_relativedelta_raises_type_error():
    with pytest.raises(TypeError, match="no fixed length"):
        collect(DateRange(at(0), at(10)), relativedelta(months=1))


def test_by_unsupported_step_raises_type_error():
    with pytest.raises(TypeError, match="Step must be"):
        collect(DateRange(at(0), at(10)), [1, 2])


# --- Return value and laziness ---


def test_by_returns_self_for_chaining():
    rng = DateRange(at(0), at(2))
    seen: list[datetime] = []
    assert rng.by("hour", seen.append).by("hour", seen.append) is rng
    assert len(seen) == 6


def test_iterate_is_lazy_and_restartable():
    rng = DateRange(at(0), at(3))
    first = rng.iterate("hour")
    assert next(first) == at(0)
    assert list(rng.iterate("hour")) == [at(0), at(1), at(2), at(3)]
    assert list(first) == [at(1), at(2), at(3)]


def test_iterate_validates_eagerly():
    """Bad steps fail when iterate is called, not on first next()."""
    with pytest.raises(InvalidStepError):
        DateRange(at(0), at(3)).iterate("eon")

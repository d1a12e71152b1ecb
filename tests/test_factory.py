"""Tests for the daterange/span/within convenience constructors."""

from datetime import datetime

import pytest

from calrange import TICK, DateRange, InvalidStepError, daterange, span, within


def test_daterange_builds_closed_range():
    rng = daterange("2025-01-01", datetime(2025, 1, 31))
    assert rng == DateRange(datetime(2025, 1, 1), datetime(2025, 1, 31))


def test_span_day():
    rng = span(datetime(2025, 3, 9, 15, 45), "day")
    assert rng.start == datetime(2025, 3, 9)
    assert rng.end == datetime(2025, 3, 10) - TICK


def test_span_week_starts_monday():
    # Wednesday, January 8th 2025
    rng = span("2025-01-08 12:00", "week")
    assert rng.start == datetime(2025, 1, 6)
    assert rng.end == datetime(2025, 1, 13) - TICK


def test_span_month_contains_every_day_of_month():
    february = span(datetime(2025, 2, 10), "months")
    days: list[datetime] = []
    february.by("day", days.append)
    assert len(days) == 28


def test_span_unknown_unit():
    with pytest.raises(InvalidStepError):
        span(datetime(2025, 2, 10), "decade")


def test_within():
    rng = daterange("2025-01-01", "2025-01-31")
    assert within(datetime(2025, 1, 15), rng)
    assert within("2025-01-01", rng)
    assert within(datetime(2025, 1, 31), rng)
    assert not within(datetime(2025, 2, 1), rng)


def test_spans_of_adjacent_days_do_not_overlap():
    today = span(datetime(2025, 1, 1), "day")
    tomorrow = span(datetime(2025, 1, 2), "day")
    assert not today.overlaps(tomorrow)
    assert tomorrow.start - today.end == TICK

"""Convenience constructors for DateRange.

Example:
    >>> from calrange import daterange, span, within
    >>>
    >>> q1 = daterange("2025-01-01", "2025-03-31")
    >>> january = span(datetime(2025, 1, 15, 12, 30), "month")
    >>> within(datetime(2025, 1, 20), january)
    True
"""

import logging
from datetime import datetime
from typing import Any

from calrange.daterange import DateRange
from calrange.units import InstantLike, end_of, normalize_unit, start_of, to_instant

logger = logging.getLogger(__name__)


def daterange(start: InstantLike, end: InstantLike) -> DateRange:
    """Return the closed range [start, end].

    Endpoints may be datetimes, dates, date strings, or epoch milliseconds.
    """
    return DateRange(start, end)


def span(instant: InstantLike, unit: str) -> DateRange:
    """Return the calendar unit containing an instant.

    Args:
        instant: Any point inside the wanted unit
        unit: 'year', 'quarter', 'month', 'week', 'day', 'hour', 'minute',
              'second' or 'millisecond' (plurals and any case accepted)

    Example:
        >>> february = span(datetime(2025, 2, 10, 8, 0), "month")
        >>> february.start, february.end.day
        (datetime.datetime(2025, 2, 1, 0, 0), 28)
    """
    moment: datetime = to_instant(instant)
    unit = normalize_unit(unit)
    rng = DateRange(start_of(moment, unit), end_of(moment, unit))
    logger.debug("Spanned %s of %s: %r", unit, moment.isoformat(), rng)
    return rng


def within(instant: Any, rng: DateRange) -> bool:
    """True if instant falls inside rng, boundaries included."""
    return rng.contains(to_instant(instant))

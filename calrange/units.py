"""Calendar units, instant coercion, and millisecond constants.

Duration constants are expressed in milliseconds, the resolution every range
operation works in. Calendar-aware arithmetic (months, years) goes through
python-dateutil's relativedelta so that adding a month to January 31st lands
on the last day of February instead of overflowing.
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Literal, TypeAlias

from dateutil.parser import parse as parse_datetime
from dateutil.relativedelta import relativedelta

from calrange.errors import InvalidStepError

# Duration constants (all values in milliseconds)
MILLISECOND = 1
SECOND = 1000
MINUTE = 60_000
HOUR = 3_600_000
DAY = 86_400_000
WEEK = 604_800_000

TICK = timedelta(milliseconds=1)

Unit: TypeAlias = Literal[
    "year",
    "quarter",
    "month",
    "week",
    "day",
    "hour",
    "minute",
    "second",
    "millisecond",
]

UNITS: tuple[Unit, ...] = (
    "year",
    "quarter",
    "month",
    "week",
    "day",
    "hour",
    "minute",
    "second",
    "millisecond",
)

InstantLike: TypeAlias = datetime | date | str | int | float


def normalize_unit(name: str) -> Unit:
    """Map 'Days', 'day', 'DAY' and friends to the canonical singular keyword."""
    key = name.strip().lower()
    if key in UNITS:
        return key  # type: ignore[return-value]
    singular = key.removesuffix("s")
    if singular in UNITS:
        return singular  # type: ignore[return-value]

    valid = ", ".join(UNITS)
    raise InvalidStepError(f"Unknown unit '{name}'. Valid units: {valid}")


def unit_delta(unit: str, amount: int = 1) -> relativedelta:
    """Return a relativedelta spanning `amount` calendar units."""
    unit = normalize_unit(unit)
    if unit == "quarter":
        return relativedelta(months=3 * amount)
    if unit == "millisecond":
        return relativedelta(microseconds=1000 * amount)
    return relativedelta(**{f"{unit}s": amount})


def shift(instant: datetime, unit: str, amount: int = 1) -> datetime:
    """Move an instant forward (or backward) by whole calendar units."""
    return instant + unit_delta(unit, amount)


def start_of(instant: datetime, unit: str) -> datetime:
    """Truncate an instant to the first tick of the unit containing it."""
    unit = normalize_unit(unit)
    if unit == "millisecond":
        return instant.replace(microsecond=instant.microsecond // 1000 * 1000)

    midnight = {"hour": 0, "minute": 0, "second": 0, "microsecond": 0}
    if unit == "second":
        return instant.replace(microsecond=0)
    if unit == "minute":
        return instant.replace(second=0, microsecond=0)
    if unit == "hour":
        return instant.replace(minute=0, second=0, microsecond=0)
    if unit == "day":
        return instant.replace(**midnight)
    if unit == "week":
        # ISO weeks: Monday is the first day
        return instant.replace(**midnight) - timedelta(days=instant.weekday())
    if unit == "month":
        return instant.replace(day=1, **midnight)
    if unit == "quarter":
        month = (instant.month - 1) // 3 * 3 + 1
        return instant.replace(month=month, day=1, **midnight)
    return instant.replace(month=1, day=1, **midnight)


def end_of(instant: datetime, unit: str) -> datetime:
    """Return the last tick of the unit containing an instant."""
    return shift(start_of(instant, unit), unit) - TICK


def to_instant(value: Any) -> datetime:
    """Convert a supported value into a datetime.

    Accepts:
    - datetime: Returned as-is (naive or aware, no zone conversion)
    - date: Midnight at the start of that day
    - str: Parsed with dateutil (ISO 8601 and common human formats)
    - int/float: Unix epoch milliseconds, UTC

    Raises:
        TypeError: If value is an unsupported type
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, str):
        return parse_datetime(value)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value / SECOND, tz=timezone.utc)
    raise TypeError(
        f"Range endpoint must be datetime, date, str, or epoch milliseconds.\n"
        f"Got {type(value).__name__!r}: {value!r}\n"
        f"Examples:\n"
        f"  daterange(datetime(2025, 1, 1), datetime(2025, 1, 31))\n"
        f"  daterange('2025-01-01', '2025-01-31')\n"
        f"  daterange(date(2025, 1, 1), date(2025, 1, 31))"
    )


def to_milliseconds(delta: timedelta) -> float:
    """Express an exact timedelta in milliseconds."""
    return delta / TICK

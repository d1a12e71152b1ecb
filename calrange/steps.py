"""Step and chunk-size arguments resolved into tagged variants.

`DateRange.by` and `DateRange.chunk` accept several shapes of argument (unit
keywords, timedeltas, relativedeltas, other ranges, raw milliseconds). They
are resolved once here so the range algorithms only ever see one of a few
small dataclasses.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any, Literal, TypeAlias

from dateutil.relativedelta import relativedelta

from calrange.errors import InvalidStepError
from calrange.units import (
    TICK,
    Unit,
    normalize_unit,
    shift,
    start_of,
    to_milliseconds,
    unit_delta,
)

if TYPE_CHECKING:
    from calrange.daterange import DateRange

Delta: TypeAlias = timedelta | relativedelta


@dataclass(frozen=True)
class UnitStep:
    """Advance by one calendar unit at a time."""

    unit: Unit


@dataclass(frozen=True)
class DurationStep:
    """Advance by a fixed number of elapsed milliseconds."""

    milliseconds: float


Step: TypeAlias = UnitStep | DurationStep


def _range_type() -> "type[DateRange]":
    # Import at runtime to avoid circular dependency
    from calrange.daterange import DateRange

    return DateRange


def resolve_step(step: Any) -> Step:
    """Resolve the argument of `DateRange.by` into a UnitStep or DurationStep.

    Raises:
        InvalidStepError: If the unit is unknown or the magnitude is negative
        TypeError: If step is an unsupported type
    """
    if isinstance(step, str):
        return UnitStep(normalize_unit(step))

    if isinstance(step, _range_type()):
        milliseconds = step.value_of()
    elif isinstance(step, timedelta):
        milliseconds = to_milliseconds(step)
    elif isinstance(step, (int, float)) and not isinstance(step, bool):
        milliseconds = float(step)
    elif isinstance(step, relativedelta):
        raise TypeError(
            f"Cannot step by a relativedelta: it has no fixed length.\n"
            f"Got: {step!r}\n"
            f"Hint: Use a unit keyword for calendar steps: rng.by('month', cb)\n"
            f"      Use a timedelta for fixed steps: rng.by(timedelta(hours=6), cb)"
        )
    else:
        raise TypeError(
            f"Step must be a unit keyword, timedelta, DateRange, or milliseconds.\n"
            f"Got {type(step).__name__!r}: {step!r}"
        )

    if milliseconds < 0:
        raise InvalidStepError(f"Step must not be negative, got {milliseconds}ms")
    return DurationStep(milliseconds)


def _to_delta(value: Any, role: str) -> Delta:
    if isinstance(value, (timedelta, relativedelta)):
        return value
    if isinstance(value, _range_type()):
        return value.duration
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return timedelta(milliseconds=value)
    raise TypeError(
        f"Chunk {role} must be a timedelta, relativedelta, DateRange, unit keyword, "
        f"or milliseconds.\n"
        f"Got {type(value).__name__!r}: {value!r}"
    )


@dataclass(frozen=True)
class ChunkPlan:
    """How to cut a range: a chunk size plus an optional first-chunk boundary.

    Attributes:
        duration: Size of every chunk after the first
        boundary: None (first chunk is `duration` long), a delta (first chunk
            is that long), or a unit keyword (first chunk ends at the end of
            that calendar unit)
    """

    duration: Delta
    boundary: Delta | Unit | None = None

    @property
    def boundary_kind(self) -> Literal["none", "delta", "unit"]:
        if self.boundary is None:
            return "none"
        if isinstance(self.boundary, str):
            return "unit"
        return "delta"

    def ends(self, begin: datetime) -> Iterator[datetime]:
        """Yield the end of every chunk for a range starting at begin, forever.

        Each end is the previous end plus duration. With a unit boundary the
        ends are instead counted from the start of the next unit, so every
        end is the last tick of a calendar unit (Jan 31, Feb 28, Mar 31).

        Raises:
            InvalidStepError: If the duration is under one tick or the boundary
                is negative
        """
        if begin + self.duration < begin + TICK:
            raise InvalidStepError(
                f"Chunk duration must be at least one millisecond, "
                f"got {self.duration!r}.\n"
                f"A shorter duration never reaches the end of the range."
            )

        kind = self.boundary_kind
        if kind == "unit":
            # Start of the next unit; every end is one tick before a unit start
            anchor = shift(start_of(begin, self.boundary), self.boundary)  # type: ignore[arg-type]
            n = 0
            while True:
                yield anchor + self.duration * n - TICK
                n += 1

        if kind == "delta":
            chunk_end = begin + self.boundary  # type: ignore[operator]
            if chunk_end < begin:
                raise InvalidStepError(
                    f"Chunk boundary must not be negative, got {self.boundary!r}"
                )
        else:
            chunk_end = begin + self.duration

        while True:
            yield chunk_end
            chunk_end = chunk_end + self.duration


def resolve_chunking(duration: Any, boundary: Any = None) -> ChunkPlan:
    """Resolve `DateRange.chunk` arguments into a ChunkPlan.

    A duration string starting with 'into' (e.g. 'intoMonth', 'into day')
    means one chunk per calendar unit, aligned to that unit's boundaries.
    Any other string is taken as one unit of that name.
    """
    if isinstance(duration, str):
        key = duration.strip()
        if key.lower().startswith("into"):
            unit = normalize_unit(key[4:])
            return ChunkPlan(duration=unit_delta(unit), boundary=unit)
        duration = unit_delta(key)
    else:
        duration = _to_delta(duration, "duration")

    if boundary is None:
        return ChunkPlan(duration=duration)
    if isinstance(boundary, str):
        return ChunkPlan(duration=duration, boundary=normalize_unit(boundary))
    return ChunkPlan(duration=duration, boundary=_to_delta(boundary, "boundary"))

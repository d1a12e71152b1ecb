"""The DateRange value type and its interval algebra.

A DateRange is the closed span [start, end] between two datetimes. Ranges are
immutable; every operation that produces a range (intersect, subtract, chunk)
returns new DateRange objects.

Boundary rules differ by operation and are load-bearing:
- contains(instant) is closed at both ends
- contains(range) is open: the other range must sit strictly inside
- ranges that only touch (a.end == b.start) do not intersect
"""

import logging
import math
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from typing_extensions import override

from calrange.errors import InvalidIntervalError
from calrange.formatting import (
    DEFAULT_FORMAT,
    DirectiveSource,
    FormatConfig,
    Template,
    render,
)
from calrange.steps import DurationStep, UnitStep, resolve_chunking, resolve_step
from calrange.units import TICK, shift, to_instant, to_milliseconds

logger = logging.getLogger(__name__)


@dataclass(frozen=True, repr=False)
class DateRange:
    """Closed span [start, end] between two datetimes.

    Note: <, <=, > and >= compare lengths while == compares endpoints, so two
    different ranges of equal length are <= and >= each other but not ==.
    """

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        # Frozen dataclass: coerce inputs in place of the raw arguments
        object.__setattr__(self, "start", to_instant(self.start))
        object.__setattr__(self, "end", to_instant(self.end))
        if self.start > self.end:
            raise InvalidIntervalError(
                f"DateRange start ({self.start.isoformat()}) must be <= "
                f"end ({self.end.isoformat()})"
            )

    @override
    def __repr__(self) -> str:
        return f"DateRange({self.start.isoformat()} → {self.end.isoformat()})"

    @override
    def __str__(self) -> str:
        """Human-friendly rendering using the default directives."""
        return self.format()

    # --- Magnitude ---

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def value_of(self) -> float:
        """Length of the range in milliseconds."""
        return to_milliseconds(self.duration)

    def __float__(self) -> float:
        return self.value_of()

    def _magnitude(self, other: Any) -> float | None:
        if isinstance(other, DateRange):
            return other.value_of()
        if isinstance(other, timedelta):
            return to_milliseconds(other)
        if isinstance(other, (int, float)) and not isinstance(other, bool):
            return float(other)
        return None

    def __lt__(self, other: Any) -> bool:
        magnitude = self._magnitude(other)
        if magnitude is None:
            return NotImplemented
        return self.value_of() < magnitude

    def __le__(self, other: Any) -> bool:
        magnitude = self._magnitude(other)
        if magnitude is None:
            return NotImplemented
        return self.value_of() <= magnitude

    def __gt__(self, other: Any) -> bool:
        magnitude = self._magnitude(other)
        if magnitude is None:
            return NotImplemented
        return self.value_of() > magnitude

    def __ge__(self, other: Any) -> bool:
        magnitude = self._magnitude(other)
        if magnitude is None:
            return NotImplemented
        return self.value_of() >= magnitude

    def __truediv__(self, other: Any) -> float:
        magnitude = self._magnitude(other)
        if magnitude is None:
            return NotImplemented
        return self.value_of() / magnitude

    def to_datetimes(self) -> tuple[datetime, datetime]:
        return self.start, self.end

    def is_same(self, other: "DateRange") -> bool:
        """True if both endpoints are equal instants."""
        return self.start == other.start and self.end == other.end

    # --- Algebra ---

    def contains(self, other: "DateRange | datetime | Any") -> bool:
        """Test whether an instant or another range lies within this range.

        An instant is contained when start <= instant <= end. A range is
        contained only when it sits strictly inside: touching either boundary
        does not count.
        """
        if isinstance(other, DateRange):
            return self._contains_range(other)
        return self._contains_instant(to_instant(other))

    def __contains__(self, other: "DateRange | datetime | Any") -> bool:
        return self.contains(other)

    def _contains_instant(self, instant: datetime) -> bool:
        return self.start <= instant <= self.end

    def _contains_range(self, other: "DateRange") -> bool:
        return self.start < other.start and self.end > other.end

    def overlaps(self, other: "DateRange") -> bool:
        return self.intersect(other) is not None

    def intersect(self, other: "DateRange") -> "DateRange | None":
        """Return the shared sub-range, or None when the ranges are disjoint.

        Ranges that merely touch, and zero-length ranges, have no intersection.
        """
        start, end = self.start, self.end
        if start <= other.start < end < other.end:
            return DateRange(other.start, end)
        if other.start < start < other.end <= end:
            return DateRange(start, other.end)
        if other.start < start < end < other.end:
            return self
        if start <= other.start < other.end <= end:
            return other
        return None

    def __and__(self, other: "DateRange") -> "DateRange | None":
        return self.intersect(other)

    def subtract(self, other: "DateRange") -> list["DateRange"]:
        """Remove the part of this range covered by other.

        Returns the remaining pieces in order: [], [self], one piece, or a head
        and a tail when other sits strictly inside this range. The pieces keep
        the shared boundary instants, so they abut other rather than leaving a
        one-tick gap.
        """
        if self.intersect(other) is None:
            return [self]

        start, end = self.start, self.end
        if other.start <= start < end <= other.end:
            return []
        if other.start <= start < other.end < end:
            return [DateRange(other.end, end)]
        if start < other.start < end <= other.end:
            return [DateRange(start, other.start)]
        if start < other.start < other.end < end:
            return [DateRange(start, other.start), DateRange(other.end, end)]

        # Every intersecting configuration is covered above
        raise AssertionError(
            f"Unhandled subtract configuration: {self!r} - {other!r}"
        )

    def __sub__(self, other: "DateRange") -> list["DateRange"]:
        return self.subtract(other)

    # --- Iteration ---

    def iterate(self, step: Any) -> Iterator[datetime]:
        """Yield instants across the range.

        A unit keyword ('day', 'hours', ...) yields start, start + 1 unit, ...
        for as long as the instant stays inside the closed range. A timedelta,
        DateRange, or millisecond count yields start + i * step for i from 0 to
        round(length / step) inclusive; the last instant may overshoot end.
        A zero-length step yields nothing.

        Raises:
            InvalidStepError: If the unit is unknown or the step is negative
            TypeError: If step is an unsupported type
        """
        resolved = resolve_step(step)

        def by_unit(step: UnitStep) -> Iterator[datetime]:
            cursor = self.start
            while self._contains_instant(cursor):
                yield cursor
                cursor = shift(cursor, step.unit)

        def by_duration(step: DurationStep) -> Iterator[datetime]:
            if step.milliseconds == 0:
                return
            # Round half up
            steps = math.floor(self.value_of() / step.milliseconds + 0.5)
            for i in range(steps + 1):
                yield self.start + timedelta(milliseconds=step.milliseconds * i)

        if isinstance(resolved, UnitStep):
            return by_unit(resolved)
        return by_duration(resolved)

    def by(self, step: Any, callback: Callable[[datetime], Any]) -> "DateRange":
        """Invoke callback for every instant produced by iterate(step).

        Returns self so calls can be chained.
        """
        count = 0
        for instant in self.iterate(step):
            callback(instant)
            count += 1
        logger.debug("Stepped %r by %r: %d instants", self, step, count)
        return self

    def chunk(self, duration: Any, boundary: Any = None) -> list["DateRange"]:
        """Split the range into contiguous chunks.

        Args:
            duration: Chunk size as a timedelta, relativedelta, DateRange,
                milliseconds, or unit keyword. 'intoDay', 'intoMonth' and so on
                produce one chunk per calendar unit, aligned to the unit.
            boundary: Where the first chunk ends. A delta makes the first chunk
                that long; a unit keyword ends it at the end of the unit
                containing start. Defaults to one duration.

        Each chunk ends one tick before the next begins. The final chunk ends
        exactly at end and may be shorter than duration.

        Raises:
            InvalidStepError: If duration is shorter than one millisecond, or
                boundary is negative
        """
        plan = resolve_chunking(duration, boundary)
        ends = plan.ends(self.start)

        chunks: list[DateRange] = []
        begin = self.start
        chunk_end = next(ends)
        while chunk_end < self.end:
            chunks.append(DateRange(begin, chunk_end))
            begin = chunk_end + TICK
            chunk_end = next(ends)

        if begin <= self.end:
            chunks.append(DateRange(begin, self.end))

        logger.debug("Chunked %r into %d pieces", self, len(chunks))
        return chunks

    # --- Formatting ---

    def _format(self, template: Template, config: FormatConfig = DEFAULT_FORMAT) -> str:
        return render(self.start, self.end, template, config.separator)

    def format(
        self,
        directives: DirectiveSource | None = None,
        config: FormatConfig | None = None,
    ) -> str:
        """Render the range using the first directive whose key matches.

        Args:
            directives: Ordered mapping of key -> template, or a sequence of
                Directive objects. Defaults to the config's directives.
            config: Separator, default directives and fallback template.
                Defaults to DEFAULT_FORMAT.

        Example:
            >>> rng = daterange("2025-01-06 09:00", "2025-01-06 17:00")
            >>> rng.format()
            'Jan 06, 2025 09:00 AM - 05:00 PM'
            >>> rng.format({"%Y%m%d": ("%d %b %H:%M", "%H:%M")})
            '06 Jan 09:00 - 17:00'
        """
        config = DEFAULT_FORMAT if config is None else config
        rule = config.match(self.start, self.end, directives)
        return self._format(rule.template, config)

"""Directive-based rendering of a range's two endpoints.

A directive pairs a match key with a strftime template. The key is a chain of
strftime tokens separated by '!'. Tokens alternate between "must render the
same for both endpoints" and "must render differently", starting with "same".
For example '%Y!%m' matches ranges whose endpoints share a year but not a
month. The first matching directive in order wins.

Formatting defaults are an immutable FormatConfig value. Pass a different one
per call instead of mutating shared state:

    >>> from dataclasses import replace
    >>> compact = replace(DEFAULT_FORMAT, separator="/")
    >>> rng.format(config=compact)
"""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import TypeAlias

Template: TypeAlias = str | tuple[str, str]

DEFAULT_KEY = "__default__"
TOKEN_SEPARATOR = "!"


@dataclass(frozen=True)
class Directive:
    key: str
    template: Template

    @property
    def is_fallback(self) -> bool:
        return self.key == DEFAULT_KEY

    def matches(self, start: datetime, end: datetime) -> bool:
        """True if every token in the key has the expected same/differ outcome."""
        if self.is_fallback:
            return True

        expect_equal = True
        for token in self.key.split(TOKEN_SEPARATOR):
            if (start.strftime(token) == end.strftime(token)) != expect_equal:
                return False
            expect_equal = not expect_equal
        return True


def render(start: datetime, end: datetime, template: Template, separator: str) -> str:
    """Format both endpoints with one template, or a (start, end) template pair."""
    if isinstance(template, str):
        start_fmt = end_fmt = template
    else:
        start_fmt, end_fmt = template
    return f"{start.strftime(start_fmt)}{separator}{end.strftime(end_fmt)}"


DirectiveSource: TypeAlias = Mapping[str, Template] | Iterable[Directive]


def to_directives(source: DirectiveSource) -> tuple[Directive, ...]:
    """Normalize a key->template mapping or a directive sequence, keeping order."""
    if isinstance(source, Mapping):
        return tuple(Directive(key, template) for key, template in source.items())

    directives = tuple(source)
    for item in directives:
        if not isinstance(item, Directive):
            raise TypeError(
                f"Directives must be a mapping of key -> template or Directive objects.\n"
                f"Got {type(item).__name__!r}: {item!r}\n"
                f"Example: rng.format({{'%Y!%m': ('%b %d', '%b %d, %Y')}})"
            )
    return directives


@dataclass(frozen=True)
class FormatConfig:
    """Separator, ordered directives, and the fallback template.

    Attributes:
        separator: Text placed between the formatted start and end
        directives: Rules tried in order when no per-call directives are given
        default: Template used when no directive matches
    """

    separator: str = " - "
    directives: tuple[Directive, ...] = field(default_factory=tuple)
    default: Template = "%I:%M %p"

    def rules(self, directives: DirectiveSource | None = None) -> tuple[Directive, ...]:
        """Return the directives to walk, ending in a fallback if none was given."""
        rules = self.directives if directives is None else to_directives(directives)
        if any(rule.is_fallback for rule in rules):
            return rules
        return (*rules, Directive(DEFAULT_KEY, self.default))

    def match(
        self,
        start: datetime,
        end: datetime,
        directives: DirectiveSource | None = None,
    ) -> Directive:
        """Return the first directive whose key matches the two endpoints."""
        for rule in self.rules(directives):
            if rule.matches(start, end):
                return rule
        # rules() always contains a fallback and a fallback always matches
        raise AssertionError("directive list has no fallback")


DEFAULT_DIRECTIVES: Sequence[Directive] = (
    # Same day, different time: "Jan 06, 2025 09:00 AM - 05:00 PM"
    Directive("%Y%m%d!%H%M", ("%b %d, %Y %I:%M %p", "%I:%M %p")),
    # Same month: "Jan 06 - 10, 2025"
    Directive("%Y%m!%d", ("%b %d", "%d, %Y")),
    # Same year: "Jan 06 - Mar 10, 2025"
    Directive("%Y!%m", ("%b %d", "%b %d, %Y")),
    # Different years: "Dec 30, 2024 - Jan 02, 2025"
    Directive("!%Y", "%b %d, %Y"),
)

DEFAULT_FORMAT = FormatConfig(directives=tuple(DEFAULT_DIRECTIVES))

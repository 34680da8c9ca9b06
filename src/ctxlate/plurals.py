"""Count-range selection for plural templates.

A plural entry is an ordered sequence of ``(min, max, template)`` ranges.
Bounds are inclusive and ``None`` means unbounded. Selection is strictly
first-match in stored order: a later range is never preferred, even when it
is narrower.

Example:
    ranges = (
        PluralRange(0, 0, "no commits"),
        PluralRange(1, 1, "one commit"),
        PluralRange(2, None, "%n commits"),
    )
    select_range(ranges, 0)   # "no commits"
    select_range(ranges, 12)  # "%n commits"
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

Bound = int | float | None


@dataclass(frozen=True)
class PluralRange:
    """One ``(min, max, template)`` range of a plural entry."""

    min: Bound
    max: Bound
    template: str

    def matches(self, count: int | float) -> bool:
        """Check whether ``count`` lies within the inclusive bounds."""
        return (self.min is None or count >= self.min) and (
            self.max is None or count <= self.max
        )

    def to_list(self) -> list:
        """Convert to the ``[min, max, template]`` wire form."""
        return [self.min, self.max, self.template]

    @classmethod
    def from_sequence(cls, triplet: Sequence) -> "PluralRange":
        """Create from a ``[min, max, template]`` triplet."""
        low, high, template = triplet
        return cls(min=low, max=high, template=template)


def select_range(
    ranges: Sequence[PluralRange],
    count: int | float | None,
) -> str | None:
    """Pick the template of the first range admitting ``count``.

    Args:
        ranges: Ranges in stored order.
        count: The count; ``None`` never selects anything.

    Returns:
        Selected template, or None if no range matches.
    """
    if count is None:
        return None
    for plural_range in ranges:
        if plural_range.matches(count):
            return plural_range.template
    return None

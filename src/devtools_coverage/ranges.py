"""Reduction of nested hit-count ranges into disjoint used ranges.

The browser reports coverage as ranges that nest and overlap: a function
range with a hit count, block ranges inside it with their own counts, and
so on. ``convert_to_disjoint_ranges`` flattens them with a sweep line so
every character offset is attributed to the innermost range covering it.

Example:
    >>> convert_to_disjoint_ranges([CoverageRange(0, 10, 1), CoverageRange(3, 6, 0)])
    [TextRange(start=0, end=3), TextRange(start=6, end=10)]
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, NamedTuple


if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


@dataclass(frozen=True)
class CoverageRange:
    """A half-open range of source text with a hit count.

    Attributes:
        start: Offset of the first character in the range.
        end: Offset one past the last character in the range.
        count: Number of times the range executed. CSS rule usage is
            encoded as 1 (used) or 0 (unused).
    """

    start: int
    end: int
    count: int

    @property
    def width(self) -> int:
        """Return the number of characters covered by this range."""
        return self.end - self.start

    @classmethod
    def from_protocol(cls, data: Mapping[str, Any]) -> CoverageRange:
        """Build a range from a protocol ``CoverageRange`` object.

        Args:
            data: Mapping with ``startOffset``, ``endOffset`` and ``count`` keys.

        Returns:
            The equivalent CoverageRange.
        """
        return cls(start=data['startOffset'], end=data['endOffset'], count=data['count'])


@dataclass(frozen=True)
class TextRange:
    """A half-open range of source text that was used.

    Attributes:
        start: Offset of the first used character.
        end: Offset one past the last used character.
    """

    start: int
    end: int

    def to_dict(self) -> dict[str, int]:
        """Return the range as a ``{'start': ..., 'end': ...}`` dict."""
        return {'start': self.start, 'end': self.end}


class _Point(NamedTuple):
    offset: int
    is_start: bool
    range: CoverageRange


def _sort_key(point: _Point) -> tuple[int, int, int]:
    # End points go first at equal offsets. Wider ranges open first and
    # narrower ranges close first, so the points form balanced parentheses.
    if point.is_start:
        return (point.offset, 1, -point.range.width)
    return (point.offset, 0, point.range.width)


def convert_to_disjoint_ranges(ranges: Iterable[CoverageRange]) -> list[TextRange]:
    """Merge nested hit-count ranges into sorted, disjoint used ranges.

    Ranges with ``end <= start`` are ignored. Output ranges one character
    wide or narrower are dropped.

    Args:
        ranges: Ranges as reported by the browser, in any order.

    Returns:
        Ranges whose innermost hit count is positive, sorted by start offset.
    """
    points: list[_Point] = []
    for coverage_range in ranges:
        if coverage_range.end <= coverage_range.start:
            continue
        points.append(_Point(coverage_range.start, True, coverage_range))
        points.append(_Point(coverage_range.end, False, coverage_range))
    points.sort(key=_sort_key)

    hit_count_stack: list[int] = []
    results: list[TextRange] = []
    last_offset = 0
    for point in points:
        if hit_count_stack and last_offset < point.offset and hit_count_stack[-1] > 0:
            if results and results[-1].end == last_offset:
                results[-1] = TextRange(results[-1].start, point.offset)
            else:
                results.append(TextRange(last_offset, point.offset))
        last_offset = point.offset
        if point.is_start:
            hit_count_stack.append(point.range.count)
        else:
            hit_count_stack.pop()

    return [result for result in results if result.end - result.start > 1]

"""CoverageEntry, one report line per covered script or stylesheet."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from devtools_coverage.ranges import TextRange


@dataclass(frozen=True)
class CoverageEntry:
    """Used ranges of one source file.

    Attributes:
        url: URL of the script or stylesheet.
        ranges: Disjoint used ranges, sorted by start offset.
        text: Full source text the offsets refer to.
        raw_script_coverage: The browser's per-script coverage result, kept
            only when the JS collector is asked for it.
    """

    url: str
    ranges: list[TextRange] = field(default_factory=list)
    text: str = ''
    raw_script_coverage: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the entry as plain JSON-serializable data."""
        data: dict[str, Any] = {
            'url': self.url,
            'ranges': [r.to_dict() for r in self.ranges],
            'text': self.text,
        }
        if self.raw_script_coverage is not None:
            data['rawScriptCoverage'] = self.raw_script_coverage
        return data

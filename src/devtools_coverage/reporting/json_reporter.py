"""JSON reporter for collected coverage entries.

Produces the raw entries as machine-readable JSON so they can be handed to
external tools that compute statistics or convert to other formats.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from devtools_coverage.collectors.results import CoverageEntry


class JsonReporter:
    """Reporter that writes coverage entries as JSON.

    JSON structure:
        {
            "entries": [
                {
                    "url": "https://example.com/app.js",
                    "ranges": [{"start": 0, "end": 42}],
                    "text": "..."
                },
                ...
            ]
        }
    """

    def to_json(self, entries: Iterable[CoverageEntry]) -> str:
        """Convert coverage entries to a JSON string.

        Args:
            entries: Entries returned by a collector's stop call.

        Returns:
            Pretty-printed JSON string.
        """
        return json.dumps(self._build_report_data(entries), indent=2)

    def write_report(self, entries: Iterable[CoverageEntry], output_path: Path) -> None:
        """Write coverage entries to a JSON file.

        Args:
            entries: Entries returned by a collector's stop call.
            output_path: Path to the output JSON file.
        """
        output_path.write_text(self.to_json(entries))

    def _build_report_data(self, entries: Iterable[CoverageEntry]) -> dict[str, Any]:
        return {'entries': [entry.to_dict() for entry in entries]}

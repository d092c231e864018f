"""Export of collected coverage entries."""

from __future__ import annotations

from devtools_coverage.reporting.json_reporter import JsonReporter


__all__ = ['JsonReporter']

"""Coverage collectors for the DevTools protocol.

Exports:
    JSCoverage: JavaScript coverage from the Profiler domain
    CSSCoverage: CSS coverage from rule usage tracking
    CoverageEntry: Used ranges of one script or stylesheet
    SourceRegistry: Per-session map of source ids to URL and text
"""

from __future__ import annotations

from devtools_coverage.collectors.css import CSSCoverage
from devtools_coverage.collectors.js import JSCoverage
from devtools_coverage.collectors.registry import SourceRegistry
from devtools_coverage.collectors.results import CoverageEntry


__all__ = ['CSSCoverage', 'CoverageEntry', 'JSCoverage', 'SourceRegistry']

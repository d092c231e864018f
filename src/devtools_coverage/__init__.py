"""devtools-coverage: JavaScript and CSS usage coverage over the DevTools protocol.

Attach a Coverage object to a DevTools session, start collecting, drive the
page, then stop to get the used character ranges of every script and
stylesheet the page loaded.

Example:
    Collect JavaScript coverage for a page load::

        coverage = Coverage(session)
        await coverage.start_js_coverage()
        await session.send('Page.navigate', {'url': 'https://example.com'})
        for entry in await coverage.stop_js_coverage():
            print(entry.url, entry.ranges)
"""

from __future__ import annotations

from devtools_coverage.collectors import CoverageEntry, CSSCoverage, JSCoverage
from devtools_coverage.config import CoverageConfig, CSSCoverageOptions, JSCoverageOptions, load_config
from devtools_coverage.coverage import Coverage
from devtools_coverage.errors import CoverageError, InvalidStateError, ProtocolError
from devtools_coverage.ranges import CoverageRange, TextRange, convert_to_disjoint_ranges


__version__ = '0.1.0'
__all__ = [
    'CSSCoverage',
    'CSSCoverageOptions',
    'Coverage',
    'CoverageConfig',
    'CoverageEntry',
    'CoverageError',
    'CoverageRange',
    'InvalidStateError',
    'JSCoverage',
    'JSCoverageOptions',
    'ProtocolError',
    'TextRange',
    '__version__',
    'convert_to_disjoint_ranges',
    'load_config',
]

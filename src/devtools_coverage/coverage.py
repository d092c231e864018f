"""Coverage facade owning one JavaScript and one CSS collector.

Example:
    Measure how much of a page's code runs during load::

        coverage = Coverage(session)
        await asyncio.gather(coverage.start_js_coverage(), coverage.start_css_coverage())
        await session.send('Page.navigate', {'url': 'https://example.com'})
        js_entries, css_entries = await asyncio.gather(
            coverage.stop_js_coverage(),
            coverage.stop_css_coverage(),
        )
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from devtools_coverage.collectors.css import CSSCoverage
from devtools_coverage.collectors.js import JSCoverage
from devtools_coverage.config import CoverageConfig, merge_options


if TYPE_CHECKING:
    from devtools_coverage.collectors.results import CoverageEntry
    from devtools_coverage.config import CSSCoverageOptions, JSCoverageOptions
    from devtools_coverage.protocol.session import DevToolsSession


class Coverage:
    """Starts and stops JavaScript and CSS coverage for one page.

    The two collectors are independent and can run at the same time.

    Attributes:
        config: Default options used when a start call does not pass any.
    """

    def __init__(self, session: DevToolsSession, config: CoverageConfig | None = None) -> None:
        """Create the facade.

        Args:
            session: DevTools session of the page to measure.
            config: Default collector options, e.g. from ``load_config``.
        """
        self.config = config or CoverageConfig()
        self._js_coverage = JSCoverage(session)
        self._css_coverage = CSSCoverage(session)

    async def start_js_coverage(self, options: JSCoverageOptions | None = None, **overrides: Any) -> None:
        """Start JavaScript coverage.

        Args:
            options: Options replacing ``config.js`` for this session.
            **overrides: Individual option fields, e.g. ``report_anonymous_scripts=True``.
        """
        await self._js_coverage.start(merge_options(options or self.config.js, **overrides))

    async def stop_js_coverage(self) -> list[CoverageEntry]:
        """Stop JavaScript coverage and return one entry per script.

        Anonymous scripts are only reported when ``report_anonymous_scripts``
        was set.
        """
        return await self._js_coverage.stop()

    async def start_css_coverage(self, options: CSSCoverageOptions | None = None, **overrides: Any) -> None:
        """Start CSS coverage.

        Args:
            options: Options replacing ``config.css`` for this session.
            **overrides: Individual option fields, e.g. ``reset_on_navigation=False``.
        """
        await self._css_coverage.start(merge_options(options or self.config.css, **overrides))

    async def stop_css_coverage(self) -> list[CoverageEntry]:
        """Stop CSS coverage and return one entry per stylesheet.

        Stylesheets without a source URL, such as inline style tags, are
        never reported.
        """
        return await self._css_coverage.stop()

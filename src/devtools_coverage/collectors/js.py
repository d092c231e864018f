"""JSCoverage: JavaScript coverage through the Profiler and Debugger domains.

While collecting, every parsed script's source is fetched and remembered.
On stop, the browser's precise (per-function, block-level) coverage is
taken and each script's nested function and block ranges are reduced to
disjoint used ranges.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from devtools_coverage.collectors.base import SourceCollector, send_all
from devtools_coverage.collectors.results import CoverageEntry
from devtools_coverage.config import JSCoverageOptions
from devtools_coverage.protocol.events import ScriptParsed
from devtools_coverage.protocol.session import add_event_listener
from devtools_coverage.ranges import CoverageRange, convert_to_disjoint_ranges


if TYPE_CHECKING:
    from devtools_coverage.protocol.session import DevToolsSession


ANONYMOUS_SCRIPT_URL_PREFIX = 'debugger://VM'


class JSCoverage(SourceCollector):
    """Collects JavaScript coverage for a single page session."""

    name = 'JSCoverage'

    def __init__(self, session: DevToolsSession) -> None:
        """Create an idle JavaScript coverage collector.

        Args:
            session: DevTools session of the page to measure.
        """
        super().__init__(session)
        self._report_anonymous_scripts = False
        self._include_raw_script_coverage = False
        self._ignored_script_urls: frozenset[str] = frozenset()

    async def start(self, options: JSCoverageOptions | None = None) -> None:
        """Start collecting JavaScript coverage.

        Args:
            options: Collection options, defaults to ``JSCoverageOptions()``.

        Raises:
            InvalidStateError: If coverage is already being collected.
            ProtocolError: If the browser rejects an enabling command.
        """
        self._ensure_idle()
        options = options or JSCoverageOptions()
        self._reset_on_navigation = options.reset_on_navigation
        self._report_anonymous_scripts = options.report_anonymous_scripts
        self._include_raw_script_coverage = options.include_raw_script_coverage
        self._ignored_script_urls = options.ignored_script_urls
        send = self._session.send
        await self._begin(
            [add_event_listener(self._session, ScriptParsed, self._on_script_parsed)],
            send('Profiler.enable'),
            send(
                'Profiler.startPreciseCoverage',
                {'callCount': self._include_raw_script_coverage, 'detailed': True},
            ),
            send('Debugger.enable'),
            send('Debugger.setSkipAllPauses', {'skip': True}),
        )

    def _on_script_parsed(self, event: ScriptParsed) -> None:
        if event.url in self._ignored_script_urls:
            return
        if not event.url and not self._report_anonymous_scripts:
            return
        self._fetch_source(event.script_id, event.url, self._get_script_source(event.script_id))

    async def _get_script_source(self, script_id: str) -> str:
        response = await self._session.send('Debugger.getScriptSource', {'scriptId': script_id})
        return response['scriptSource']

    def _resolve_url(self, script_id: str) -> str | None:
        url = self._registry.url(script_id)
        if not url and self._report_anonymous_scripts:
            url = f'{ANONYMOUS_SCRIPT_URL_PREFIX}{script_id}'
        return url

    async def stop(self) -> list[CoverageEntry]:
        """Stop collecting and return coverage for every known script.

        Scripts whose URL or source text is unknown are left out.

        Returns:
            One CoverageEntry per script, in the order the browser reports them.

        Raises:
            InvalidStateError: If coverage is not being collected.
            ProtocolError: If the browser rejects a command.
        """
        self._ensure_enabled()
        self._enabled = False
        send = self._session.send
        try:
            profile_response, *_ = await send_all(
                send('Profiler.takePreciseCoverage'),
                send('Profiler.stopPreciseCoverage'),
                send('Profiler.disable'),
                send('Debugger.disable'),
            )
        finally:
            self._end()

        coverage: list[CoverageEntry] = []
        for script_coverage in profile_response.get('result', []):
            entry = self._build_entry(script_coverage)
            if entry is not None:
                coverage.append(entry)
        self._registry.clear()
        return coverage

    def _build_entry(self, script_coverage: dict[str, Any]) -> CoverageEntry | None:
        script_id = script_coverage['scriptId']
        url = self._resolve_url(script_id)
        text = self._registry.text(script_id)
        if url is None or text is None:
            return None
        flattened = [
            CoverageRange.from_protocol(coverage_range)
            for function in script_coverage.get('functions', [])
            for coverage_range in function.get('ranges', [])
        ]
        return CoverageEntry(
            url=url,
            ranges=convert_to_disjoint_ranges(flattened),
            text=text,
            raw_script_coverage=script_coverage if self._include_raw_script_coverage else None,
        )

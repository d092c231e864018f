"""CSSCoverage: stylesheet coverage through CSS rule usage tracking."""

from __future__ import annotations

from typing import Any

from devtools_coverage.collectors.base import SourceCollector, send_all
from devtools_coverage.collectors.results import CoverageEntry
from devtools_coverage.config import CSSCoverageOptions
from devtools_coverage.protocol.events import StyleSheetAdded
from devtools_coverage.protocol.session import add_event_listener
from devtools_coverage.ranges import CoverageRange, convert_to_disjoint_ranges


def group_rule_usage(rule_usage: list[dict[str, Any]]) -> dict[str, list[CoverageRange]]:
    """Group per-rule usage records by stylesheet id.

    Args:
        rule_usage: ``ruleUsage`` list from ``CSS.stopRuleUsageTracking``.

    Returns:
        Stylesheet ids mapped to ranges with count 1 for used rules and 0
        for unused ones.
    """
    grouped: dict[str, list[CoverageRange]] = {}
    for rule in rule_usage:
        grouped.setdefault(rule['styleSheetId'], []).append(
            CoverageRange(start=rule['startOffset'], end=rule['endOffset'], count=1 if rule['used'] else 0)
        )
    return grouped


class CSSCoverage(SourceCollector):
    """Collects CSS coverage for a single page session.

    Only stylesheets with a source URL are reported; inline ``<style>``
    tags and constructed stylesheets are skipped.
    """

    name = 'CSSCoverage'

    async def start(self, options: CSSCoverageOptions | None = None) -> None:
        """Start collecting CSS coverage.

        Args:
            options: Collection options, defaults to ``CSSCoverageOptions()``.

        Raises:
            InvalidStateError: If coverage is already being collected.
            ProtocolError: If the browser rejects an enabling command.
        """
        self._ensure_idle()
        options = options or CSSCoverageOptions()
        self._reset_on_navigation = options.reset_on_navigation
        send = self._session.send
        await self._begin(
            [add_event_listener(self._session, StyleSheetAdded, self._on_style_sheet_added)],
            send('DOM.enable'),
            send('CSS.enable'),
            send('CSS.startRuleUsageTracking'),
        )

    def _on_style_sheet_added(self, event: StyleSheetAdded) -> None:
        if not event.source_url:
            return
        self._fetch_source(
            event.style_sheet_id,
            event.source_url,
            self._get_style_sheet_text(event.style_sheet_id),
        )

    async def _get_style_sheet_text(self, style_sheet_id: str) -> str:
        response = await self._session.send('CSS.getStyleSheetText', {'styleSheetId': style_sheet_id})
        return response['text']

    async def stop(self) -> list[CoverageEntry]:
        """Stop collecting and return coverage for every known stylesheet.

        Stylesheets with no used rules are still reported, with no ranges.

        Returns:
            One CoverageEntry per stylesheet, in the order they were added.

        Raises:
            InvalidStateError: If coverage is not being collected.
            ProtocolError: If the browser rejects a command.
        """
        self._ensure_enabled()
        self._enabled = False
        send = self._session.send
        try:
            rule_tracking_response = await send('CSS.stopRuleUsageTracking')
            await send_all(send('CSS.disable'), send('DOM.disable'))
        finally:
            self._end()

        usage_by_sheet = group_rule_usage(rule_tracking_response.get('ruleUsage', []))
        coverage: list[CoverageEntry] = []
        for style_sheet_id in self._registry:
            url = self._registry.url(style_sheet_id)
            text = self._registry.text(style_sheet_id)
            if url is None or text is None:
                continue
            ranges = convert_to_disjoint_ranges(usage_by_sheet.get(style_sheet_id, []))
            coverage.append(CoverageEntry(url=url, ranges=ranges, text=text))
        self._registry.clear()
        return coverage

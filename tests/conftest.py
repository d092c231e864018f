"""Shared pytest configuration and fixtures for devtools-coverage tests."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from pyee import EventEmitter
import pytest

from devtools_coverage.errors import ProtocolError


# Register markers for test categories
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line('markers', 'small: Fast, isolated unit tests (< 100ms)')
    config.addinivalue_line('markers', 'medium: Integration tests with real resources (< 10s)')
    config.addinivalue_line('markers', 'large: End-to-end system tests (< 60s)')


# Auto-mark tests based on directory
def pytest_collection_modifyitems(
    config: pytest.Config,  # noqa: ARG001
    items: list[pytest.Item],
) -> None:
    """Automatically apply markers based on test directory."""
    for item in items:
        # Get the path parts from the item's path
        item_path = Path(str(item.fspath))
        path_parts = item_path.parts

        if 'small' in path_parts:
            item.add_marker(pytest.mark.small)
        elif 'medium' in path_parts:
            item.add_marker(pytest.mark.medium)
        elif 'large' in path_parts:
            item.add_marker(pytest.mark.large)


class FakeSession(EventEmitter):
    """In-memory DevTools session.

    Records every command, serves script and stylesheet sources from dicts,
    and returns canned coverage results. Sources listed in ``gates`` are
    only served once their event is set.
    """

    def __init__(self) -> None:
        super().__init__()
        self.sent: list[tuple[str, dict[str, Any] | None]] = []
        self.script_sources: dict[str, str] = {}
        self.style_sheet_texts: dict[str, str] = {}
        self.precise_coverage: list[dict[str, Any]] = []
        self.rule_usage: list[dict[str, Any]] = []
        self.failures: dict[str, Exception] = {}
        self.gates: dict[str, asyncio.Event] = {}

    @property
    def methods(self) -> list[str]:
        return [method for method, _ in self.sent]

    async def send(self, method: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        self.sent.append((method, params))
        if method in self.failures:
            raise self.failures[method]
        if method == 'Debugger.getScriptSource':
            script_id = params['scriptId']
            await self._wait_for_gate(script_id)
            if script_id not in self.script_sources:
                raise ProtocolError('No script for id: ' + script_id, method=method)
            return {'scriptSource': self.script_sources[script_id]}
        if method == 'CSS.getStyleSheetText':
            style_sheet_id = params['styleSheetId']
            await self._wait_for_gate(style_sheet_id)
            if style_sheet_id not in self.style_sheet_texts:
                raise ProtocolError('No style sheet with given id found', method=method)
            return {'text': self.style_sheet_texts[style_sheet_id]}
        if method == 'Profiler.takePreciseCoverage':
            return {'result': self.precise_coverage, 'timestamp': 1.0}
        if method == 'CSS.stopRuleUsageTracking':
            return {'ruleUsage': self.rule_usage}
        return {}

    async def _wait_for_gate(self, source_id: str) -> None:
        gate = self.gates.get(source_id)
        if gate is not None:
            await gate.wait()

    def parse_script(self, script_id: str, url: str = '') -> None:
        self.emit('Debugger.scriptParsed', {'scriptId': script_id, 'url': url, 'startLine': 0})

    def add_style_sheet(self, style_sheet_id: str, source_url: str = '') -> None:
        self.emit('CSS.styleSheetAdded', {'header': {'styleSheetId': style_sheet_id, 'sourceURL': source_url}})

    def clear_execution_contexts(self) -> None:
        self.emit('Runtime.executionContextsCleared', {})

    def listener_count(self, event: str) -> int:
        return len(self.listeners(event))


async def settle() -> None:
    """Let pending source fetches run to completion."""
    for _ in range(10):
        await asyncio.sleep(0)


@pytest.fixture
def session() -> FakeSession:
    """A fresh fake DevTools session."""
    return FakeSession()


@pytest.fixture
def flush():
    """Coroutine function that lets background fetches finish."""
    return settle

"""Tests for concurrent protocol command helper."""

from __future__ import annotations

import asyncio

import pytest

from devtools_coverage.collectors.base import send_all
from devtools_coverage.errors import ProtocolError


class TestSendAll:
    """Awaiting protocol commands together."""

    def test_returns_results_in_argument_order(self, session):
        session.precise_coverage = [{'scriptId': '1', 'functions': []}]

        async def scenario():
            return await send_all(
                session.send('Profiler.takePreciseCoverage'),
                session.send('Profiler.disable'),
            )

        take, disable = asyncio.run(scenario())

        assert take['result'] == [{'scriptId': '1', 'functions': []}]
        assert disable == {}

    def test_failure_is_raised_after_all_commands_are_sent(self, session):
        session.failures['Profiler.enable'] = ProtocolError('Target closed')

        async def scenario():
            await send_all(session.send('Profiler.enable'), session.send('Debugger.enable'))

        with pytest.raises(ProtocolError, match='Target closed'):
            asyncio.run(scenario())
        assert session.methods == ['Profiler.enable', 'Debugger.enable']

"""Shared lifecycle for the JavaScript and CSS coverage collectors.

A collector is either idle or collecting. While collecting it listens to
protocol events, fetches the text of every interesting source in a
background task, and records it in its SourceRegistry. Subclasses supply
the protocol commands that enable and disable instrumentation and the
conversion of the browser's usage data into CoverageEntry objects.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from devtools_coverage.collectors.registry import SourceRegistry
from devtools_coverage.errors import InvalidStateError, is_stale_resource_error
from devtools_coverage.protocol.events import ExecutionContextsCleared
from devtools_coverage.protocol.session import add_event_listener, remove_event_listeners


if TYPE_CHECKING:
    from collections.abc import Awaitable, Coroutine

    from devtools_coverage.protocol.session import DevToolsSession, EventListener


logger = logging.getLogger(__name__)


async def send_all(*commands: Awaitable[dict[str, Any]]) -> list[dict[str, Any]]:
    """Await protocol commands concurrently and return their results in order.

    If any command fails, the first failure is raised after every command
    has settled, so no command is left running unobserved.
    """
    results = await asyncio.gather(*commands, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return list(results)


class SourceCollector:
    """Base class holding the collecting state and the source registry.

    Attributes:
        name: Human-readable collector name used in errors and logs.
    """

    name = 'Coverage'

    def __init__(self, session: DevToolsSession) -> None:
        """Create an idle collector bound to a session.

        Args:
            session: DevTools session of the page to measure.
        """
        self._session = session
        self._enabled = False
        self._reset_on_navigation = True
        self._registry = SourceRegistry()
        self._listeners: list[EventListener] = []
        self._pending_fetches: set[asyncio.Task[None]] = set()

    @property
    def enabled(self) -> bool:
        """Return True while the collector is collecting."""
        return self._enabled

    def _ensure_idle(self) -> None:
        if self._enabled:
            msg = f'{self.name} is already enabled'
            raise InvalidStateError(msg)

    def _ensure_enabled(self) -> None:
        if not self._enabled:
            msg = f'{self.name} is not enabled'
            raise InvalidStateError(msg)

    async def _begin(self, listeners: list[EventListener], *commands: Awaitable[dict[str, Any]]) -> None:
        """Enter the collecting state and run the enabling commands.

        On failure the listeners are removed and the collector goes back to
        idle before the error propagates.
        """
        self._enabled = True
        self._registry.clear()
        self._listeners = [
            *listeners,
            add_event_listener(self._session, ExecutionContextsCleared, self._on_execution_contexts_cleared),
        ]
        try:
            await send_all(*commands)
        except BaseException:
            self._enabled = False
            remove_event_listeners(self._session, self._listeners)
            raise
        logger.debug('%s started', self.name)

    def _end(self) -> None:
        # Fetches still in flight belong to the stopped session.
        self._registry.advance()
        remove_event_listeners(self._session, self._listeners)
        logger.debug('%s stopped with %d registered sources', self.name, len(self._registry))

    def _on_execution_contexts_cleared(self, event: ExecutionContextsCleared) -> None:  # noqa: ARG002
        if not self._reset_on_navigation:
            return
        logger.debug('%s reset after execution contexts were cleared', self.name)
        self._registry.clear()

    def _fetch_source(self, source_id: str, url: str, command: Coroutine[Any, Any, str]) -> None:
        """Fetch a source's text in the background and record it when done."""
        task = asyncio.ensure_future(self._record_source(self._registry.generation, source_id, url, command))
        self._pending_fetches.add(task)
        task.add_done_callback(self._pending_fetches.discard)

    async def _record_source(
        self,
        generation: int,
        source_id: str,
        url: str,
        command: Coroutine[Any, Any, str],
    ) -> None:
        try:
            text = await command
        except Exception as exc:
            if is_stale_resource_error(exc):
                logger.debug('%s could not fetch source %s: %s', self.name, source_id, exc)
            else:
                logger.warning('%s failed to fetch source %s', self.name, source_id, exc_info=True)
            return
        if not self._registry.record(generation, source_id, url, text):
            logger.debug('%s dropped source %s fetched before a reset or stop', self.name, source_id)

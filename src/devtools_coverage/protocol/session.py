"""The DevTools session interface and typed event subscriptions.

The collectors never own a transport. They talk to any object that can
send protocol commands and register event handlers the way a ``pyee``
event emitter does.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, TypeVar, runtime_checkable


if TYPE_CHECKING:
    from collections.abc import Callable

    from devtools_coverage.protocol.events import CoverageEvent


EventT = TypeVar('EventT', bound='CoverageEvent')


@runtime_checkable
class DevToolsSession(Protocol):
    """Protocol for a DevTools session attached to a single page target.

    Implementations must raise ``devtools_coverage.errors.ProtocolError``
    when a command fails.
    """

    async def send(self, method: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """Send a protocol command and return its result."""
        ...

    def on(self, event: str, f: Callable[..., Any]) -> Any:
        """Register a handler for a protocol event."""
        ...

    def remove_listener(self, event: str, f: Callable[..., Any]) -> None:
        """Unregister a handler previously registered with ``on``."""
        ...


@dataclass(frozen=True)
class EventListener:
    """A registered handler, kept so it can be removed later.

    Attributes:
        event: Protocol event name the handler is registered under.
        handler: The callable actually registered on the session.
    """

    event: str
    handler: Callable[[dict[str, Any]], None]


def add_event_listener(
    session: DevToolsSession,
    event_type: type[EventT],
    handler: Callable[[EventT], None],
) -> EventListener:
    """Subscribe ``handler`` to typed events of ``event_type``.

    Args:
        session: Session to subscribe on.
        event_type: One of the event dataclasses in ``protocol.events``.
        handler: Called with the parsed event for every emission.

    Returns:
        The listener, to be passed to ``remove_event_listeners``.
    """

    def _dispatch(params: dict[str, Any] | None = None) -> None:
        handler(event_type.from_params(params or {}))

    session.on(event_type.method, _dispatch)
    return EventListener(event=event_type.method, handler=_dispatch)


def remove_event_listeners(session: DevToolsSession, listeners: list[EventListener]) -> None:
    """Unsubscribe every listener and empty the list."""
    for listener in listeners:
        session.remove_listener(listener.event, listener.handler)
    listeners.clear()

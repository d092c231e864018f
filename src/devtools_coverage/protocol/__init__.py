"""DevTools protocol boundary: session interface and typed events."""

from __future__ import annotations

from devtools_coverage.protocol.events import (
    CoverageEvent,
    ExecutionContextsCleared,
    ScriptParsed,
    StyleSheetAdded,
)
from devtools_coverage.protocol.session import (
    DevToolsSession,
    EventListener,
    add_event_listener,
    remove_event_listeners,
)


__all__ = [
    'CoverageEvent',
    'DevToolsSession',
    'EventListener',
    'ExecutionContextsCleared',
    'ScriptParsed',
    'StyleSheetAdded',
    'add_event_listener',
    'remove_event_listeners',
]

"""Tests for typed event subscription on a DevTools session."""

from __future__ import annotations

from devtools_coverage.protocol.events import ExecutionContextsCleared, ScriptParsed
from devtools_coverage.protocol.session import DevToolsSession, add_event_listener, remove_event_listeners


class TestDevToolsSessionProtocol:
    """The fake session satisfies the structural protocol."""

    def test_fake_session_is_a_devtools_session(self, session):
        assert isinstance(session, DevToolsSession)


class TestAddEventListener:
    """Subscribing handlers to typed events."""

    def test_handler_receives_parsed_event(self, session):
        received = []
        add_event_listener(session, ScriptParsed, received.append)

        session.parse_script('9', 'https://example.com/a.js')

        assert received == [ScriptParsed(script_id='9', url='https://example.com/a.js')]

    def test_listener_records_event_name(self, session):
        listener = add_event_listener(session, ExecutionContextsCleared, lambda event: None)

        assert listener.event == 'Runtime.executionContextsCleared'
        assert session.listener_count('Runtime.executionContextsCleared') == 1

    def test_handler_only_sees_its_event_type(self, session):
        received = []
        add_event_listener(session, ExecutionContextsCleared, received.append)

        session.parse_script('9', 'https://example.com/a.js')
        session.clear_execution_contexts()

        assert received == [ExecutionContextsCleared()]


class TestRemoveEventListeners:
    """Tearing down subscriptions."""

    def test_removes_all_listeners_and_empties_list(self, session):
        received = []
        listeners = [
            add_event_listener(session, ScriptParsed, received.append),
            add_event_listener(session, ExecutionContextsCleared, received.append),
        ]

        remove_event_listeners(session, listeners)
        session.parse_script('9', 'https://example.com/a.js')
        session.clear_execution_contexts()

        assert listeners == []
        assert received == []
        assert session.listener_count('Debugger.scriptParsed') == 0

"""Typed protocol events consumed by the coverage collectors.

Each event the collectors listen to is a frozen dataclass that knows its
protocol method name and how to build itself from the raw event params.
``CoverageEvent`` is the closed union of all of them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar


if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True)
class ScriptParsed:
    """``Debugger.scriptParsed``: the engine compiled a script.

    Attributes:
        script_id: Protocol script id, valid until the next navigation.
        url: Script URL, empty for anonymous scripts (eval, new Function).
    """

    method: ClassVar[str] = 'Debugger.scriptParsed'

    script_id: str
    url: str = ''

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> ScriptParsed:
        """Build the event from raw protocol params."""
        return cls(script_id=params['scriptId'], url=params.get('url') or '')


@dataclass(frozen=True)
class StyleSheetAdded:
    """``CSS.styleSheetAdded``: a stylesheet was attached to the document.

    Attributes:
        style_sheet_id: Protocol stylesheet id, valid until the next navigation.
        source_url: Stylesheet URL, empty for inline and constructed sheets.
    """

    method: ClassVar[str] = 'CSS.styleSheetAdded'

    style_sheet_id: str
    source_url: str = ''

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> StyleSheetAdded:
        """Build the event from raw protocol params."""
        header = params['header']
        return cls(style_sheet_id=header['styleSheetId'], source_url=header.get('sourceURL') or '')


@dataclass(frozen=True)
class ExecutionContextsCleared:
    """``Runtime.executionContextsCleared``: the page navigated or reloaded."""

    method: ClassVar[str] = 'Runtime.executionContextsCleared'

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> ExecutionContextsCleared:  # noqa: ARG003
        """Build the event from raw protocol params."""
        return cls()


CoverageEvent = ScriptParsed | StyleSheetAdded | ExecutionContextsCleared

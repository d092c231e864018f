"""SourceRegistry for remembering the URL and text of parsed sources.

Protocol ids for scripts and stylesheets are only meaningful within one
navigation segment, so the registry is a short-lived mapping that is
cleared on every reset. A generation counter lets callers detect that a
reset happened while they were waiting on the browser.

Example:
    >>> registry = SourceRegistry()
    >>> generation = registry.generation
    >>> registry.record(generation, '17', 'https://example.com/app.js', 'main()')
    True
    >>> registry.url('17'), registry.text('17')
    ('https://example.com/app.js', 'main()')
"""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Iterator


class SourceRegistry:
    """Maps protocol source ids to their URL and text.

    Attributes:
        generation: Incremented on every clear.
    """

    def __init__(self) -> None:
        """Create an empty registry."""
        self.generation = 0
        self._urls: dict[str, str] = {}
        self._texts: dict[str, str] = {}

    def __len__(self) -> int:
        """Return the number of registered sources."""
        return len(self._urls)

    def __contains__(self, source_id: str) -> bool:
        """Return True if the source id has been recorded."""
        return source_id in self._urls

    def __iter__(self) -> Iterator[str]:
        """Iterate over recorded source ids in registration order."""
        return iter(list(self._urls))

    def clear(self) -> None:
        """Forget every source and start a new generation."""
        self._urls.clear()
        self._texts.clear()
        self.advance()

    def advance(self) -> None:
        """Start a new generation, keeping the sources recorded so far."""
        self.generation += 1

    def record(self, generation: int, source_id: str, url: str, text: str) -> bool:
        """Record a source fetched during ``generation``.

        Args:
            generation: Value of ``generation`` when the fetch began.
            source_id: Protocol id of the script or stylesheet.
            url: URL of the source, empty for anonymous scripts.
            text: Full source text.

        Returns:
            False if the registry was cleared since ``generation``, in which
            case nothing is recorded.
        """
        if generation != self.generation:
            return False
        self._urls[source_id] = url
        self._texts[source_id] = text
        return True

    def url(self, source_id: str) -> str | None:
        """Return the URL recorded for a source id, or None if unknown."""
        return self._urls.get(source_id)

    def text(self, source_id: str) -> str | None:
        """Return the text recorded for a source id, or None if unknown."""
        return self._texts.get(source_id)

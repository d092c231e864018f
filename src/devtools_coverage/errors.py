"""Exceptions raised by devtools-coverage.

Only two kinds of failure ever reach a caller: misuse of a collector's
start/stop lifecycle (InvalidStateError) and failed protocol commands
(ProtocolError). Failures while fetching source text are handled inside
the collectors and never propagate.
"""

from __future__ import annotations


STALE_RESOURCE_MESSAGES = (
    'No script for id',
    'No style sheet with given id',
    'No resource with given identifier found',
    'Target closed',
    'Session closed',
)


class CoverageError(Exception):
    """Base class for every error raised by this package."""


class InvalidStateError(CoverageError):
    """A collector was started twice or stopped while idle."""


class ProtocolError(CoverageError):
    """A DevTools protocol command failed.

    Attributes:
        method: The protocol method that failed, if known.
        original_message: The error message reported by the browser.
    """

    def __init__(self, original_message: str, method: str | None = None) -> None:
        """Create a protocol error.

        Args:
            original_message: Message from the protocol error response.
            method: Name of the command that failed.
        """
        self.method = method
        self.original_message = original_message
        if method:
            super().__init__(f'Protocol error ({method}): {original_message}')
        else:
            super().__init__(f'Protocol error: {original_message}')


def is_stale_resource_error(error: BaseException) -> bool:
    """Return True if the error means the requested resource is gone.

    This is the usual outcome of fetching a script or stylesheet after the
    page has navigated away or the target was closed.
    """
    if not isinstance(error, ProtocolError):
        return False
    return any(message in error.original_message for message in STALE_RESOURCE_MESSAGES)

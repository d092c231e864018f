"""Root pytest configuration for devtools-coverage.

Doctests collected from the source tree are marked here; tests/conftest.py
handles markers and fixtures for the test suite itself.
"""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config,  # noqa: ARG001
    items: list[pytest.Item],
) -> None:
    """Mark doctests from source modules as small tests."""
    for item in items:
        if any(marker.name in ('small', 'medium', 'large') for marker in item.iter_markers()):
            continue
        if 'src' in Path(str(item.fspath)).parts:
            item.add_marker(pytest.mark.small)

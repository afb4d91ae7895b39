"""TUI test fixtures.

Test Pattern:
    1. Build a TreeProjection over the mocked query service
    2. Use async with app.run_test() as pilot to get a pilot instance
    3. Let the expansion workers finish before asserting
    4. Query for widgets and assert on their state
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from rewind.timeline import (
    RepositoryNode,
    TimelineSources,
    TreeProjection,
    WorkspaceFolder,
)


@pytest.fixture
def make_projection(
    timeline_sources: TimelineSources,
) -> Callable[..., TreeProjection]:
    """Factory building a projection with one repository per folder name."""

    def _make(*names: str) -> TreeProjection:
        return TreeProjection(
            [
                RepositoryNode(
                    WorkspaceFolder(name=name, path=Path("/src") / name),
                    timeline_sources,
                )
                for name in names
            ]
        )

    return _make

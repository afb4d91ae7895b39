"""VcsQueryService protocol definition.

This protocol defines the read-only query interface the timeline nodes
consume. Any object exposing it can back the tree; tests substitute an
``AsyncMock`` and the application uses :class:`GitQueryService`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from rewind.git.repository import CommitRecord


@runtime_checkable
class VcsQueryService(Protocol):
    """Read-only version-control query service.

    Both methods raise :class:`~rewind.exceptions.VersionControlError` on
    repository, path, or commit errors.
    """

    async def log(
        self,
        path: Path | str,
        max_count: int | None = None,
    ) -> list[CommitRecord]:
        """Return the commit log for *path*, newest first, merges included."""
        ...

    async def show(
        self,
        path: Path | str,
        commit_sha: str,
        first_parent_only: bool = True,
    ) -> str:
        """Return the raw unified diff of *commit_sha* in *path*."""
        ...

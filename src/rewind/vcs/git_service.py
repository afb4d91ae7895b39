"""Git-backed implementation of the version-control query service."""

from __future__ import annotations

from pathlib import Path

from rewind.git.repository import AsyncGitRepository, CommitRecord


class GitQueryService:
    """Answer log/show queries by opening the repository per call.

    No repository handle is pooled: each query opens a fresh
    :class:`AsyncGitRepository` in a worker thread, so concurrent
    expansions share no state and the event loop never touches disk.
    """

    async def log(
        self,
        path: Path | str,
        max_count: int | None = None,
    ) -> list[CommitRecord]:
        repo = await AsyncGitRepository.open(path)
        return await repo.log(max_count)

    async def show(
        self,
        path: Path | str,
        commit_sha: str,
        first_parent_only: bool = True,
    ) -> str:
        repo = await AsyncGitRepository.open(path)
        return await repo.show(commit_sha, first_parent_only)

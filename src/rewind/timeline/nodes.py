"""Timeline tree nodes: repositories, commits, and changed files.

Each node knows how to present itself and how to produce its children.
Children are fetched on first expansion and then kept for the node's
lifetime; :meth:`invalidate` is the only way to fetch them again.

The hierarchy is one-directional: a node owns the children it created
and holds no reference back to its parent.
"""

from __future__ import annotations

import asyncio
import posixpath
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

from rewind.diff.parser import FileChange
from rewind.git.repository import CommitRecord
from rewind.logging import bind_context, get_logger
from rewind.timeline.models import (
    COMMIT_ICON,
    STATUS_ICONS,
    ExpandState,
    ExpansionState,
    FileStatus,
    Presentation,
    TimelineSources,
    WorkspaceFolder,
)

logger = get_logger(__name__)

__all__ = [
    "CommitNode",
    "FileNode",
    "RepositoryNode",
    "TreeNode",
    "classify_status",
    "UNKNOWN_FILE_LABEL",
]

#: Label used when a file change has no target path (deleted files)
UNKNOWN_FILE_LABEL = "Unknown"


@runtime_checkable
class TreeNode(Protocol):
    """Anything the timeline can present and expand.

    ``load()`` may return the children directly (leaves do) or an
    awaitable resolving to them.
    """

    def load(self) -> Sequence[TreeNode] | Awaitable[Sequence[TreeNode]]: ...

    def present(self) -> Presentation: ...


def classify_status(additions: int, deletions: int) -> FileStatus:
    """Classify a file change from its line counts.

    Additions without deletions is ADDED, additions with deletions is
    MODIFIED, and everything else is REMOVED. That fallback includes
    zero/zero changes such as pure renames and binary files.
    """
    if additions > 0 and deletions == 0:
        return FileStatus.ADDED
    if additions > 0 and deletions > 0:
        return FileStatus.MODIFIED
    return FileStatus.REMOVED


class FileNode:
    """Leaf node for one file changed by a commit."""

    def __init__(self, change: FileChange) -> None:
        self._change = change
        path = change.to_path or ""
        directory, name = posixpath.split(path)
        self._label = name or UNKNOWN_FILE_LABEL
        self._description = directory if name else ""

    @property
    def change(self) -> FileChange:
        return self._change

    @property
    def path(self) -> str | None:
        """Path after the change, None for deleted files."""
        return self._change.to_path

    @property
    def additions(self) -> int:
        return self._change.additions

    @property
    def deletions(self) -> int:
        return self._change.deletions

    @property
    def status(self) -> FileStatus:
        return classify_status(self._change.additions, self._change.deletions)

    @property
    def state(self) -> ExpansionState:
        return ExpansionState.LEAF

    def load(self) -> list[TreeNode]:
        return []

    def present(self) -> Presentation:
        return Presentation(
            label=self._label,
            description=self._description,
            icon=STATUS_ICONS[self.status],
            expand_state=ExpandState.LEAF,
        )

    def __repr__(self) -> str:
        return f"FileNode({self._change.to_path!r}, {self.status.value})"


class _ExpandableNode(ABC):
    """Shared expansion bookkeeping for nodes with children.

    The first ``load()`` starts one task; callers arriving while it runs
    await the same task, and callers arriving after it succeeds get the
    cached children. A failed fetch leaves the node unexpanded so a later
    expansion asks again. Waiters are shielded: cancelling one caller
    does not cancel the fetch other callers are waiting on.

    Each fetch runs in a task of its own, so logging context bound inside
    ``_fetch_children`` tags the git queries it makes and nothing else.
    """

    def __init__(self) -> None:
        self._children: tuple[TreeNode, ...] | None = None
        self._pending: asyncio.Future[list[TreeNode]] | None = None

    @property
    def state(self) -> ExpansionState:
        if self._children is not None:
            return ExpansionState.EXPANDED
        if self._pending is not None:
            return ExpansionState.EXPANDING
        return ExpansionState.UNEXPANDED

    async def load(self) -> list[TreeNode]:
        if self._children is not None:
            return list(self._children)

        if self._pending is None:
            task = asyncio.ensure_future(self._fetch_children())
            task.add_done_callback(self._settle)
            self._pending = task

        children = await asyncio.shield(self._pending)
        return list(children)

    def invalidate(self) -> None:
        """Forget cached children; the next ``load()`` fetches again.

        A fetch still in flight is detached: its callers get its result,
        but it no longer populates this node's cache.
        """
        self._children = None
        self._pending = None

    def _settle(self, task: asyncio.Future[list[TreeNode]]) -> None:
        if self._pending is not task:
            return
        self._pending = None
        if not task.cancelled() and task.exception() is None:
            self._children = tuple(task.result())

    @abstractmethod
    async def _fetch_children(self) -> list[TreeNode]:
        """Fetch this node's children from the query service."""


class CommitNode(_ExpandableNode):
    """Node for one commit; expands into the files its diff touches."""

    def __init__(
        self,
        repo_path: Path,
        record: CommitRecord,
        sources: TimelineSources,
    ) -> None:
        super().__init__()
        self._repo_path = repo_path
        self._record = record
        self._sources = sources

    @property
    def repo_path(self) -> Path:
        return self._repo_path

    @property
    def record(self) -> CommitRecord:
        return self._record

    @property
    def sha(self) -> str:
        return self._record.sha

    @property
    def message(self) -> str:
        return self._record.message

    def present(self) -> Presentation:
        return Presentation(
            label=self._record.message,
            icon=COMMIT_ICON,
            expand_state=ExpandState.COLLAPSED,
        )

    async def _fetch_children(self) -> list[TreeNode]:
        bind_context(
            repository=self._repo_path.name, commit=self._record.short_sha
        )
        raw_diff = await self._sources.query_service.show(
            self._repo_path, self._record.sha, first_parent_only=True
        )
        changes = self._sources.diff_parser.parse(raw_diff)
        logger.debug("commit_expanded", files=len(changes))
        return [FileNode(change) for change in changes]

    def __repr__(self) -> str:
        return f"CommitNode({self._record.short_sha}, {self._record.message!r})"


class RepositoryNode(_ExpandableNode):
    """Node for one workspace folder; expands into its commit log."""

    def __init__(self, folder: WorkspaceFolder, sources: TimelineSources) -> None:
        super().__init__()
        self._folder = folder
        self._sources = sources

    @property
    def folder(self) -> WorkspaceFolder:
        return self._folder

    @property
    def name(self) -> str:
        return self._folder.name

    @property
    def path(self) -> Path:
        return self._folder.path

    def present(self) -> Presentation:
        return Presentation(
            label=self._folder.name,
            expand_state=ExpandState.COLLAPSED,
        )

    async def _fetch_children(self) -> list[TreeNode]:
        bind_context(repository=self._folder.name)
        records = await self._sources.query_service.log(
            self._folder.path, max_count=self._sources.max_commits
        )
        logger.debug("repository_expanded", commits=len(records))
        return [
            CommitNode(self._folder.path, record, self._sources)
            for record in records
        ]

    def __repr__(self) -> str:
        return f"RepositoryNode({self._folder.name!r})"

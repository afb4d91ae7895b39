"""Lazy repository / commit / file tree.

Usage:
    ```python
    from rewind.timeline import WorkspaceFolder, create_projection

    projection = create_projection([WorkspaceFolder.from_path(".")])
    commits = await projection.resolve_children(None)
    files = await projection.resolve_children(commits[0])
    ```
"""

from __future__ import annotations

from rewind.timeline.models import (
    ExpandState,
    ExpansionState,
    FileStatus,
    IconRef,
    Presentation,
    TimelineSources,
    WorkspaceFolder,
)
from rewind.timeline.nodes import (
    CommitNode,
    FileNode,
    RepositoryNode,
    TreeNode,
    classify_status,
)
from rewind.timeline.projection import TreeProjection, create_projection

__all__ = [
    "CommitNode",
    "ExpandState",
    "ExpansionState",
    "FileNode",
    "FileStatus",
    "IconRef",
    "Presentation",
    "RepositoryNode",
    "TimelineSources",
    "TreeNode",
    "TreeProjection",
    "WorkspaceFolder",
    "classify_status",
    "create_projection",
]

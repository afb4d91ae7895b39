"""Root controller of the timeline tree.

:class:`TreeProjection` is what a display layer talks to. It answers two
questions: how to draw a node (:meth:`~TreeProjection.resolve_label`) and
what a node's children are (:meth:`~TreeProjection.resolve_children`).
Passing ``None`` to the latter asks for the top level of the tree.

Example:
    ```python
    projection = create_projection([WorkspaceFolder.from_path(".")])
    roots = await projection.resolve_children(None)
    for node in roots:
        print(projection.resolve_label(node).label)
    ```
"""

from __future__ import annotations

import inspect
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from rewind.diff.parser import UnifiedDiffParser
from rewind.timeline.models import Presentation, TimelineSources, WorkspaceFolder
from rewind.timeline.nodes import RepositoryNode, TreeNode
from rewind.vcs.factory import create_query_service

if TYPE_CHECKING:
    from rewind.config import RewindConfig
    from rewind.diff.parser import DiffParser
    from rewind.vcs.protocol import VcsQueryService

__all__ = [
    "TreeProjection",
    "create_projection",
]


class TreeProjection:
    """Two-entry-point tree contract over a fixed list of repositories.

    The repository list is captured at construction and never changes.
    With exactly one repository (and ``elide_single_repository`` on), the
    top level is that repository's commits rather than the repository
    itself.

    Errors from node expansion propagate to the caller unchanged; one
    failing node does not affect its siblings.
    """

    def __init__(
        self,
        repositories: Sequence[RepositoryNode],
        *,
        elide_single_repository: bool = True,
    ) -> None:
        self._repositories = tuple(repositories)
        self._elide_single_repository = elide_single_repository

    @property
    def repositories(self) -> tuple[RepositoryNode, ...]:
        return self._repositories

    def resolve_label(self, node: TreeNode) -> Presentation:
        """Return the display projection of *node*."""
        return node.present()

    async def resolve_children(self, node: TreeNode | None = None) -> list[TreeNode]:
        """Return the children of *node*, or the top level when *node* is None.

        Raises:
            VersionControlError: If fetching the children failed.
        """
        if node is None:
            return await self._root_nodes()

        children = node.load()
        if inspect.isawaitable(children):
            children = await children
        return list(children)

    async def _root_nodes(self) -> list[TreeNode]:
        if self._elide_single_repository and len(self._repositories) == 1:
            return await self._repositories[0].load()
        return list(self._repositories)


def create_projection(
    folders: Iterable[WorkspaceFolder],
    *,
    query_service: VcsQueryService | None = None,
    diff_parser: DiffParser | None = None,
    config: RewindConfig | None = None,
) -> TreeProjection:
    """Build a projection with one RepositoryNode per workspace folder.

    Args:
        folders: Workspace folders, in display order.
        query_service: Log/show backend. Defaults to the backend named
            in configuration (git).
        diff_parser: Diff parser. Defaults to UnifiedDiffParser.
        config: Settings for commit limits and single-repository elision.

    Returns:
        A new TreeProjection. Nothing is fetched until children are requested.
    """
    max_commits: int | None = None
    elide = True
    backend = "git"
    if config is not None:
        max_commits = config.timeline.max_commits
        elide = config.timeline.elide_single_repository
        backend = config.vcs.backend

    sources = TimelineSources(
        query_service=query_service or create_query_service(backend),
        diff_parser=diff_parser or UnifiedDiffParser(),
        max_commits=max_commits,
    )
    repositories = [RepositoryNode(folder, sources) for folder in folders]
    return TreeProjection(repositories, elide_single_repository=elide)

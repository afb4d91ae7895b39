"""Tests for the TimelineTree widget using Textual pilot testing."""

from __future__ import annotations

from collections.abc import Callable
from unittest.mock import AsyncMock

import pytest
from textual.app import App, ComposeResult
from textual.pilot import Pilot

from rewind.exceptions import VersionControlError
from rewind.timeline import CommitNode, FileNode, TreeProjection
from rewind.tui import RewindApp
from rewind.tui.widgets import TimelineTree


class TimelineTreeTestApp(App[None]):
    """Test app hosting a single TimelineTree.

    Records every ExpansionFailed message that reaches the app.
    """

    def __init__(self, projection: TreeProjection) -> None:
        super().__init__()
        self._projection = projection
        self.failures: list[TimelineTree.ExpansionFailed] = []

    def compose(self) -> ComposeResult:
        yield TimelineTree(self._projection, id="timeline")

    def on_mount(self) -> None:
        self.query_one(TimelineTree).focus()

    def on_timeline_tree_expansion_failed(
        self, event: TimelineTree.ExpansionFailed
    ) -> None:
        self.failures.append(event)


async def settle(pilot: Pilot[None]) -> None:
    """Wait until expansion workers have finished and the UI caught up."""
    await pilot.pause()
    await pilot.app.workers.wait_for_complete()
    await pilot.pause()


def labels(node) -> list[str]:
    return [str(child.label) for child in node.children]


class TestTimelineTreeRoot:
    """Tests for top-level resolution on mount."""

    @pytest.mark.asyncio
    async def test_single_repository_shows_commits(
        self, make_projection: Callable[..., TreeProjection]
    ) -> None:
        app = TimelineTreeTestApp(make_projection("api"))

        async with app.run_test() as pilot:
            await settle(pilot)
            tree = app.query_one(TimelineTree)

            assert tree.show_root is False
            assert labels(tree.root) == ["● Second commit", "● First commit"]
            assert all(isinstance(n.data, CommitNode) for n in tree.root.children)
            assert all(n.allow_expand for n in tree.root.children)

    @pytest.mark.asyncio
    async def test_multiple_repositories_show_folder_rows(
        self,
        make_projection: Callable[..., TreeProjection],
        mock_query_service: AsyncMock,
    ) -> None:
        app = TimelineTreeTestApp(make_projection("api", "web"))

        async with app.run_test() as pilot:
            await settle(pilot)
            tree = app.query_one(TimelineTree)

            assert labels(tree.root) == ["▸ api", "▸ web"]
            mock_query_service.log.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_root_failure_renders_error_leaf(
        self,
        make_projection: Callable[..., TreeProjection],
        mock_query_service: AsyncMock,
    ) -> None:
        mock_query_service.log.side_effect = VersionControlError(
            "Not a git repository: /src/api", operation="repo_check"
        )
        app = TimelineTreeTestApp(make_projection("api"))

        async with app.run_test() as pilot:
            await settle(pilot)
            tree = app.query_one(TimelineTree)

            assert labels(tree.root) == ["✗ Not a git repository: /src/api"]
            assert len(app.failures) == 1
            assert app.failures[0].node is tree.root


class TestTimelineTreeExpansion:
    """Tests for lazy expansion of commit nodes."""

    @pytest.mark.asyncio
    async def test_expanding_commit_lists_files(
        self,
        make_projection: Callable[..., TreeProjection],
        mock_query_service: AsyncMock,
    ) -> None:
        app = TimelineTreeTestApp(make_projection("api"))

        async with app.run_test() as pilot:
            await settle(pilot)
            tree = app.query_one(TimelineTree)
            commit = tree.root.children[0]
            mock_query_service.show.assert_not_awaited()

            commit.expand()
            await settle(pilot)

            assert labels(commit) == ["+ a.ts  src"]
            (leaf,) = commit.children
            assert isinstance(leaf.data, FileNode)
            assert leaf.allow_expand is False

    @pytest.mark.asyncio
    async def test_expanding_again_does_not_refetch(
        self,
        make_projection: Callable[..., TreeProjection],
        mock_query_service: AsyncMock,
    ) -> None:
        app = TimelineTreeTestApp(make_projection("api"))

        async with app.run_test() as pilot:
            await settle(pilot)
            commit = app.query_one(TimelineTree).root.children[0]

            commit.expand()
            await settle(pilot)
            commit.collapse()
            commit.expand()
            await settle(pilot)

            assert mock_query_service.show.await_count == 1
            assert labels(commit) == ["+ a.ts  src"]

    @pytest.mark.asyncio
    async def test_failed_expansion_shows_error_and_can_retry(
        self,
        make_projection: Callable[..., TreeProjection],
        mock_query_service: AsyncMock,
    ) -> None:
        original = mock_query_service.show.return_value
        mock_query_service.show.side_effect = [
            VersionControlError("git show failed", operation="show"),
            original,
        ]
        app = TimelineTreeTestApp(make_projection("api"))

        async with app.run_test() as pilot:
            await settle(pilot)
            commit = app.query_one(TimelineTree).root.children[0]

            commit.expand()
            await settle(pilot)

            assert labels(commit) == ["✗ git show failed"]
            assert [f.error.message for f in app.failures] == ["git show failed"]

            commit.collapse()
            commit.expand()
            await settle(pilot)

            assert labels(commit) == ["+ a.ts  src"]

    @pytest.mark.asyncio
    async def test_sibling_commits_unaffected_by_failure(
        self,
        make_projection: Callable[..., TreeProjection],
        mock_query_service: AsyncMock,
    ) -> None:
        original = mock_query_service.show.return_value

        async def show(path, sha, first_parent_only=True):
            if sha == "1" * 40:
                raise VersionControlError("boom", operation="show")
            return original

        mock_query_service.show.side_effect = show
        app = TimelineTreeTestApp(make_projection("api"))

        async with app.run_test() as pilot:
            await settle(pilot)
            newest, oldest = app.query_one(TimelineTree).root.children

            newest.expand()
            oldest.expand()
            await settle(pilot)

            assert labels(newest) == ["✗ boom"]
            assert labels(oldest) == ["+ a.ts  src"]

    @pytest.mark.asyncio
    async def test_reload_binding_refetches_highlighted_node(
        self,
        make_projection: Callable[..., TreeProjection],
        mock_query_service: AsyncMock,
    ) -> None:
        app = TimelineTreeTestApp(make_projection("api"))

        async with app.run_test() as pilot:
            await settle(pilot)
            tree = app.query_one(TimelineTree)
            commit = tree.root.children[0]
            commit.expand()
            await settle(pilot)

            tree.move_cursor(commit)
            await pilot.press("r")
            await settle(pilot)

            assert mock_query_service.show.await_count == 2
            assert labels(commit) == ["+ a.ts  src"]


class TestRewindApp:
    """Tests for the full application shell."""

    @pytest.mark.asyncio
    async def test_app_hosts_focused_timeline(
        self, make_projection: Callable[..., TreeProjection]
    ) -> None:
        app = RewindApp(make_projection("api"), sub_title="api")

        async with app.run_test() as pilot:
            await settle(pilot)
            tree = app.query_one("#timeline", TimelineTree)

            assert app.sub_title == "api"
            assert tree.has_focus
            assert labels(tree.root) == ["● Second commit", "● First commit"]

    @pytest.mark.asyncio
    async def test_expansion_failure_is_notified(
        self,
        make_projection: Callable[..., TreeProjection],
        mock_query_service: AsyncMock,
    ) -> None:
        mock_query_service.log.side_effect = VersionControlError("no repo")
        app = RewindApp(make_projection("api"))

        async with app.run_test() as pilot:
            await settle(pilot)

            assert [n.message for n in app._notifications] == ["no repo"]

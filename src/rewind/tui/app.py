"""Rewind TUI application.

This module provides the RewindApp class, the entry point for the Rewind
terminal user interface built with Textual.
"""

from __future__ import annotations

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from rewind.timeline.projection import TreeProjection
from rewind.tui.widgets.timeline_tree import TimelineTree


class RewindApp(App[None]):
    """Full-screen timeline browser."""

    TITLE = "Rewind"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
    ]

    DEFAULT_CSS = """
    TimelineTree {
        height: 1fr;
        padding: 0 1;
    }
    """

    def __init__(
        self,
        projection: TreeProjection,
        *,
        sub_title: str | None = None,
    ) -> None:
        super().__init__()
        self._projection = projection
        if sub_title:
            self.sub_title = sub_title

    def compose(self) -> ComposeResult:
        yield Header()
        yield TimelineTree(self._projection, id="timeline")
        yield Footer()

    def on_mount(self) -> None:
        self.query_one(TimelineTree).focus()

    def on_timeline_tree_expansion_failed(
        self, event: TimelineTree.ExpansionFailed
    ) -> None:
        self.notify(event.error.message, title="git", severity="error")

"""TimelineTree widget: the timeline projection rendered as a Textual Tree.

Children are requested from the projection the first time a node is
expanded, in a worker so git never blocks the event loop. A failed
expansion renders as a single error leaf under the failing node and can
be retried by collapsing and expanding again.
"""

from __future__ import annotations

from rich.text import Text
from textual import work
from textual.binding import Binding
from textual.message import Message
from textual.widgets import Tree
from textual.widgets.tree import TreeNode as UINode

from rewind.exceptions import VersionControlError
from rewind.logging import get_logger
from rewind.timeline.models import ExpandState
from rewind.timeline.nodes import TreeNode
from rewind.timeline.projection import TreeProjection
from rewind.tui.rendering import render_presentation

logger = get_logger(__name__)

_LOADING_LABEL = Text("loading\u2026", style="dim italic")


class TimelineTree(Tree[TreeNode | None]):
    """Tree widget backed by a :class:`TreeProjection`.

    Posts ``ExpansionFailed`` when a node's children could not be fetched.
    """

    BINDINGS = [
        Binding("r", "reload_node", "Reload"),
    ]

    class ExpansionFailed(Message):
        """Posted when fetching a node's children raised VersionControlError."""

        def __init__(
            self,
            node: UINode[TreeNode | None],
            error: VersionControlError,
        ) -> None:
            self.node = node
            self.error = error
            super().__init__()

    def __init__(
        self,
        projection: TreeProjection,
        *,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__("timeline", data=None, name=name, id=id, classes=classes)
        self.show_root = False
        self._projection = projection
        self._loaded: set[int] = set()

    @property
    def projection(self) -> TreeProjection:
        return self._projection

    def on_mount(self) -> None:
        self.root.expand()
        self._request_children(self.root)

    def on_tree_node_expanded(self, event: Tree.NodeExpanded[TreeNode | None]) -> None:
        node = event.node
        if node is self.root or node.data is None:
            return
        self._request_children(node)

    def action_reload_node(self) -> None:
        """Drop the highlighted node's cached children and fetch them again."""
        node = self.cursor_node
        if node is None or node.data is None:
            return
        invalidate = getattr(node.data, "invalidate", None)
        if invalidate is None:
            return
        invalidate()
        self._loaded.discard(node.id)
        node.remove_children()
        if node.is_expanded:
            self._request_children(node)

    def _request_children(self, node: UINode[TreeNode | None]) -> None:
        if node.id in self._loaded:
            return
        self._loaded.add(node.id)
        if node is not self.root:
            node.add_leaf(_LOADING_LABEL, data=None)
        self._load_children(node)

    @work(group="expansion")
    async def _load_children(self, node: UINode[TreeNode | None]) -> None:
        try:
            children = await self._projection.resolve_children(node.data)
        except VersionControlError as e:
            logger.warning(
                "expansion_failed",
                node=str(node.label),
                operation=e.operation,
                error=e.message,
            )
            # Allow a retry on the next expansion
            self._loaded.discard(node.id)
            node.remove_children()
            node.add_leaf(Text(f"\u2717 {e.message}", style="red1"), data=None)
            self.post_message(self.ExpansionFailed(node, e))
            return

        node.remove_children()
        for child in children:
            presentation = self._projection.resolve_label(child)
            label = render_presentation(presentation)
            if presentation.expand_state is ExpandState.COLLAPSED:
                node.add(label, data=child, allow_expand=True)
            else:
                node.add_leaf(label, data=child)

from __future__ import annotations

from pathlib import Path

import click

from rewind.cli.common import cli_error_handler, folders_argument, resolve_folders
from rewind.cli.context import ExitCode, async_command, get_cli_context
from rewind.exceptions import VersionControlError
from rewind.logging import get_logger
from rewind.timeline.models import ExpandState
from rewind.timeline.nodes import TreeNode
from rewind.timeline.projection import TreeProjection, create_projection
from rewind.tui.rendering import plain_presentation

logger = get_logger(__name__)

_INDENT = "  "


class _TreePrinter:
    """Depth-first walk of a projection, echoing one line per node."""

    def __init__(self, projection: TreeProjection, depth: int) -> None:
        self._projection = projection
        self._depth = depth
        self.failures = 0

    async def print_roots(self) -> None:
        roots = await self._expand(None, level=0)
        if roots is None:
            return
        for node in roots:
            await self._print_node(node, level=0)

    async def _print_node(self, node: TreeNode, level: int) -> None:
        presentation = self._projection.resolve_label(node)
        click.echo(f"{_INDENT * level}{plain_presentation(presentation)}")

        if presentation.expand_state is not ExpandState.COLLAPSED:
            return
        if level + 1 >= self._depth:
            return

        children = await self._expand(node, level=level + 1)
        for child in children or []:
            await self._print_node(child, level=level + 1)

    async def _expand(
        self, node: TreeNode | None, level: int
    ) -> list[TreeNode] | None:
        try:
            return await self._projection.resolve_children(node)
        except VersionControlError as e:
            self.failures += 1
            logger.debug("tree_expansion_failed", error=e.message)
            click.echo(f"{_INDENT * level}\u2717 {e.message}")
            return None


@click.command()
@folders_argument
@click.option(
    "-d",
    "--depth",
    type=click.IntRange(min=1),
    default=2,
    show_default=True,
    help="Number of tree levels to print.",
)
@click.pass_context
@cli_error_handler()
@async_command
async def tree(ctx: click.Context, folders: tuple[Path, ...], depth: int) -> None:
    """Print the commit timeline of one or more repositories.

    With a single folder the commits are the top level; with several
    folders each repository gets its own top-level entry.

    Examples:
        rewind tree
        rewind tree --depth 1 ~/src/api ~/src/web
    """
    cli_ctx = get_cli_context(ctx)
    projection = create_projection(resolve_folders(folders), config=cli_ctx.config)

    printer = _TreePrinter(projection, depth)
    await printer.print_roots()

    if printer.failures:
        ctx.exit(ExitCode.PARTIAL)

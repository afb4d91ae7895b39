from __future__ import annotations

from pathlib import Path

import click

from rewind.cli.common import cli_error_handler, folders_argument, resolve_folders
from rewind.cli.context import get_cli_context
from rewind.timeline.projection import create_projection


@click.command()
@folders_argument
@click.pass_context
def view(ctx: click.Context, folders: tuple[Path, ...]) -> None:
    """Browse the commit timeline interactively.

    Opens a tree of repositories, commits, and changed files. Nodes load
    when first expanded; press r to reload the highlighted node.

    Examples:
        rewind view
        rewind view ~/src/api ~/src/web
    """
    from rewind.tui.app import RewindApp
    from rewind.tui.logging_handler import configure_tui_logging

    cli_ctx = get_cli_context(ctx)
    workspace = resolve_folders(folders)
    projection = create_projection(workspace, config=cli_ctx.config)

    sub_title = ", ".join(folder.name for folder in workspace)
    configure_tui_logging()
    with cli_error_handler():
        RewindApp(projection, sub_title=sub_title).run()

"""Helpers shared by the view and tree commands."""

from __future__ import annotations

import contextlib
from collections.abc import Generator, Sequence
from pathlib import Path

import click

from rewind.cli.context import ExitCode
from rewind.cli.output import format_error
from rewind.exceptions import RewindError, VersionControlError
from rewind.timeline.models import WorkspaceFolder

__all__ = [
    "cli_error_handler",
    "folders_argument",
    "resolve_folders",
]

folders_argument = click.argument(
    "folders",
    nargs=-1,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)


@contextlib.contextmanager
def cli_error_handler() -> Generator[None, None, None]:
    """Context manager for common CLI error handling.

    - KeyboardInterrupt: exit with code 130
    - VersionControlError: format error with operation and path
    - RewindError: format error with message

    Anything else propagates with its traceback. Async commands take it as
    a decorator outside @async_command, because asyncio.run raises
    KeyboardInterrupt itself rather than inside the coroutine.

    Example:
        >>> with cli_error_handler():
        >>>     RewindApp(projection).run()
    """
    try:
        yield
    except KeyboardInterrupt:
        click.echo("\n\nInterrupted by user.", err=True)
        raise SystemExit(ExitCode.INTERRUPTED) from None
    except VersionControlError as e:
        details = []
        if e.operation:
            details.append(f"Operation: {e.operation}")
        if e.path is not None:
            details.append(f"Path: {e.path}")
        click.echo(format_error(e.message, details=details), err=True)
        raise SystemExit(ExitCode.FAILURE) from e
    except RewindError as e:
        click.echo(format_error(e.message), err=True)
        raise SystemExit(ExitCode.FAILURE) from e


def resolve_folders(paths: Sequence[Path]) -> list[WorkspaceFolder]:
    """Turn command-line paths into workspace folders, defaulting to cwd.

    Duplicate paths are dropped so each folder yields one repository node.
    """
    if not paths:
        paths = [Path.cwd()]

    folders: list[WorkspaceFolder] = []
    seen: set[Path] = set()
    for path in paths:
        folder = WorkspaceFolder.from_path(path)
        if folder.path in seen:
            continue
        seen.add(folder.path)
        folders.append(folder)
    return folders

"""CLI context and utilities for Rewind.

Exit codes, the typed context object stored on click's ``ctx.obj``, and
the bridge from click's synchronous commands to async code.
"""

from __future__ import annotations

import asyncio
import functools
from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import Any, TypeVar

from rewind.config import RewindConfig

__all__ = [
    "ExitCode",
    "CLIContext",
    "async_command",
    "get_cli_context",
]


class ExitCode(IntEnum):
    """Standard exit codes for the Rewind CLI.

    - 0 for success
    - 1 for failure
    - 2 for partial success (some nodes could not be expanded)
    - 130 for keyboard interrupt (128 + SIGINT=2)
    """

    SUCCESS = 0
    FAILURE = 1
    PARTIAL = 2
    INTERRUPTED = 130


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Type-safe CLI context containing global options and configuration.

    Attributes:
        config: Loaded Rewind configuration.
        config_path: Path to config file (if specified via --config).
        verbosity: Verbosity level (0=default, 1=INFO, 2+=DEBUG).
        quiet: Suppress non-essential output.
    """

    config: RewindConfig
    config_path: Path | None = None
    verbosity: int = 0
    quiet: bool = False


def get_cli_context(ctx: Any) -> CLIContext:
    """Fetch the CLIContext stored by the root command."""
    cli_ctx: CLIContext = ctx.obj["cli_ctx"]
    return cli_ctx


F = TypeVar("F", bound=Callable[..., Any])


def async_command(f: F) -> F:
    """Decorator to run async Click commands with asyncio.run().

    Example:
        >>> @cli.command()
        >>> @async_command
        >>> async def tree(ctx: click.Context) -> None:
        >>>     await walk(projection)
    """

    @functools.wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        return asyncio.run(f(*args, **kwargs))

    return wrapper  # type: ignore[return-value]

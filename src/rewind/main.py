"""CLI entry point for Rewind.

This module defines the Click-based command-line interface for Rewind.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from dotenv import load_dotenv

from rewind import __version__
from rewind.cli.commands import tree, view
from rewind.cli.context import CLIContext, ExitCode
from rewind.cli.output import format_error
from rewind.config import load_config
from rewind.exceptions import ConfigError
from rewind.logging import configure_logging

_VERBOSITY_LEVELS = {
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="rewind")
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(exists=False, path_type=str),
    default=None,
    help="Path to config file (overrides ./rewind.yaml).",
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (-v for INFO, -vv for DEBUG).",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    default=False,
    help="Suppress non-essential output (ERROR level only).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_file: str | None,
    verbose: int,
    quiet: bool,
) -> None:
    """Rewind - browse git history as a repository / commit / file tree."""
    ctx.ensure_object(dict)

    # REWIND_* variables from ./.env feed the settings sources below
    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)

    config_path = Path(config_file) if config_file else None
    try:
        config = load_config(config_path)
    except ConfigError as e:
        # Can't use logging yet, just output error
        details = []
        if e.field:
            details.append(f"Field: {e.field}")
        if e.value is not None:
            details.append(f"Value: {e.value}")
        click.echo(
            format_error(
                e.message,
                details=details,
                suggestion=(
                    "Fix the value in the config file or in the matching "
                    "REWIND_* environment variable."
                ),
            ),
            err=True,
        )
        ctx.exit(ExitCode.FAILURE)

    ctx.obj["cli_ctx"] = CLIContext(
        config=config,
        config_path=config_path,
        verbosity=verbose,
        quiet=quiet,
    )

    # Priority: quiet > verbose > config
    if quiet:
        level = logging.ERROR
    elif verbose > 0:
        level = logging.INFO if verbose == 1 else logging.DEBUG
    else:
        level = _VERBOSITY_LEVELS.get(config.verbosity, logging.WARNING)

    configure_logging(level=level)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(view)
cli.add_command(tree)

if __name__ == "__main__":
    cli()

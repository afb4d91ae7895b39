"""Route log records away from stderr while the TUI owns the terminal.

Anything written to stderr during a Textual session lands on top of the
rendered screen. Records are sent to Textual's log instead, which is
visible through ``textual console``.
"""

from __future__ import annotations

import logging

from textual.logging import TextualHandler

from rewind.logging import configure_logging

__all__ = ["configure_tui_logging"]


def configure_tui_logging(level: int | None = None) -> None:
    """Reconfigure logging for TUI mode.

    Replaces the stderr handler with a TextualHandler and drops colours,
    since the Textual console shows plain text.

    Args:
        level: Log level. Defaults to the root logger's current level.
    """
    if level is None:
        level = logging.getLogger().level
    configure_logging(level=level, handler=TextualHandler(), colors=False)

"""Rewind CLI commands."""

from __future__ import annotations

from rewind.cli.commands.tree import tree
from rewind.cli.commands.view import view

__all__ = ["tree", "view"]

"""Rewind TUI widgets."""

from __future__ import annotations

from rewind.tui.widgets.timeline_tree import TimelineTree

__all__ = ["TimelineTree"]

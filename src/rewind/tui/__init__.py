"""Rewind terminal user interface (Textual)."""

from __future__ import annotations

from rewind.tui.app import RewindApp

__all__ = ["RewindApp"]

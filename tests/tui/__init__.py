"""Dedicated TUI tests for the Rewind application.

This package contains test modules for the Textual TUI components using
the Textual pilot testing framework.
"""

from __future__ import annotations

"""Diff parsing package."""

from __future__ import annotations

from rewind.diff.parser import DiffParser, FileChange, UnifiedDiffParser

__all__ = [
    "DiffParser",
    "FileChange",
    "UnifiedDiffParser",
]

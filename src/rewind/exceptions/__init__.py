"""Rewind exception hierarchy.

All exceptions can be imported from this package:
    from rewind.exceptions import ConfigError, VersionControlError
"""

from __future__ import annotations

from rewind.exceptions.base import RewindError
from rewind.exceptions.config import ConfigError
from rewind.exceptions.vcs import (
    CommitNotFoundError,
    GitNotFoundError,
    NotARepositoryError,
    VersionControlError,
)

__all__ = [
    "CommitNotFoundError",
    "ConfigError",
    "GitNotFoundError",
    "NotARepositoryError",
    "RewindError",
    "VersionControlError",
]

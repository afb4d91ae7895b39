"""VCS abstraction layer.

Provides the :class:`VcsQueryService` protocol consumed by the timeline
nodes, its git implementation, and a factory selecting the backend.
"""

from __future__ import annotations

from rewind.vcs.factory import create_query_service
from rewind.vcs.git_service import GitQueryService
from rewind.vcs.protocol import VcsQueryService

__all__ = [
    "GitQueryService",
    "VcsQueryService",
    "create_query_service",
]

"""VCS backend factory.

Returns the :class:`~rewind.vcs.protocol.VcsQueryService` implementation
named by configuration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rewind.vcs.protocol import VcsQueryService


def create_query_service(backend: str = "git") -> VcsQueryService:
    """Create a VcsQueryService for *backend*.

    Args:
        backend: Backend name. Only ``"git"`` is available.

    Returns:
        A :class:`VcsQueryService` implementation.

    Raises:
        ValueError: If *backend* is unknown.
    """
    if backend == "git":
        from rewind.vcs.git_service import GitQueryService

        return GitQueryService()

    msg = f"Unknown VCS backend: {backend!r}"
    raise ValueError(msg)

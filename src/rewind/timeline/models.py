"""Value types shared by the timeline nodes and the display layer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rewind.diff.parser import DiffParser
    from rewind.vcs.protocol import VcsQueryService

__all__ = [
    "ExpandState",
    "ExpansionState",
    "FileStatus",
    "IconRef",
    "Presentation",
    "TimelineSources",
    "WorkspaceFolder",
    "COMMIT_ICON",
    "STATUS_ICONS",
]


class ExpandState(str, Enum):
    """Whether the display layer should offer an expand control."""

    LEAF = "leaf"
    COLLAPSED = "collapsed"


class ExpansionState(str, Enum):
    """Lifecycle of a node's children."""

    UNEXPANDED = "unexpanded"
    EXPANDING = "expanding"
    EXPANDED = "expanded"
    LEAF = "leaf"


class FileStatus(str, Enum):
    """Change classification of a file within a commit."""

    ADDED = "added"
    MODIFIED = "modified"
    REMOVED = "removed"


@dataclass(frozen=True, slots=True)
class IconRef:
    """Named icon plus optional theme color.

    Attributes:
        name: Icon identifier (e.g., "diff-added", "git-commit").
        color: Color name, or None for the theme default.
    """

    name: str
    color: str | None = None


COMMIT_ICON = IconRef("git-commit")

STATUS_ICONS: dict[FileStatus, IconRef] = {
    FileStatus.ADDED: IconRef("diff-added", "green"),
    FileStatus.MODIFIED: IconRef("diff-modified", "yellow"),
    FileStatus.REMOVED: IconRef("diff-removed", "red"),
}


@dataclass(frozen=True, slots=True)
class Presentation:
    """Display projection of a node.

    Attributes:
        label: Primary text.
        description: Secondary, dimmed text. None when absent.
        icon: Icon to render, None for the display layer's default.
        expand_state: LEAF or COLLAPSED.
    """

    label: str
    description: str | None = None
    icon: IconRef | None = None
    expand_state: ExpandState = ExpandState.LEAF


@dataclass(frozen=True, slots=True)
class WorkspaceFolder:
    """An open workspace folder: display name and filesystem path."""

    name: str
    path: Path

    @classmethod
    def from_path(cls, path: Path | str) -> WorkspaceFolder:
        """Build a folder named after the last path component."""
        resolved = Path(path).expanduser().resolve()
        return cls(name=resolved.name or str(resolved), path=resolved)


@dataclass(frozen=True, slots=True)
class TimelineSources:
    """Collaborators handed down from repository to commit nodes.

    Attributes:
        query_service: Answers log and show queries.
        diff_parser: Turns raw diff text into file changes.
        max_commits: Optional cap on commits listed per repository.
    """

    query_service: VcsQueryService
    diff_parser: DiffParser
    max_commits: int | None = None

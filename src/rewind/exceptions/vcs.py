from __future__ import annotations

from pathlib import Path

from rewind.exceptions.base import RewindError


class VersionControlError(RewindError):
    """Exception for version-control query failures.

    Raised when the query service cannot produce a commit log or a commit
    diff: the repository is missing or inaccessible, a revision does not
    exist, or the underlying git command failed. It propagates unchanged
    through node expansion to whoever asked for the children.

    Attributes:
        message: Human-readable error message.
        operation: Query that failed (e.g., "log", "show").
        path: Repository path the query ran against.
    """

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        path: Path | str | None = None,
    ) -> None:
        """Initialize the VersionControlError.

        Args:
            message: Human-readable error message.
            operation: Query that failed.
            path: Repository path the query ran against.
        """
        self.operation = operation
        self.path = path
        super().__init__(message)


class GitNotFoundError(VersionControlError):
    """Exception raised when the git CLI is not installed or not in PATH."""

    def __init__(
        self,
        message: str = "Git CLI not found",
        path: Path | str | None = None,
    ) -> None:
        super().__init__(message, operation="git_check", path=path)


class NotARepositoryError(VersionControlError):
    """Exception raised when a workspace folder is not inside a git repository.

    Attributes:
        message: Human-readable error message.
        path: Directory that is not a repository (or does not exist).
    """

    def __init__(
        self,
        message: str,
        path: Path | str | None = None,
    ) -> None:
        super().__init__(message, operation="repo_check", path=path)


class CommitNotFoundError(VersionControlError):
    """Exception raised when a commit SHA does not resolve in the repository.

    Attributes:
        message: Human-readable error message.
        sha: The revision that could not be resolved.
    """

    def __init__(
        self,
        message: str,
        sha: str,
        path: Path | str | None = None,
    ) -> None:
        self.sha = sha
        super().__init__(message, operation="show", path=path)

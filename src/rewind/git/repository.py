"""GitPython-based read-only repository queries for Rewind.

This module answers the two questions the timeline tree asks of a
repository: "what is the commit log?" and "what did this commit change?".
Nothing here writes to the repository.

Key features:
- Uses GitPython's Repo class for all operations
- Provides both sync and async APIs (async via asyncio.to_thread)
- Converts GitPython failures into the VersionControlError hierarchy

Example:
    ```python
    from rewind.git import AsyncGitRepository

    repo = AsyncGitRepository("/path/to/repo")
    commits = await repo.log()
    diff_text = await repo.show(commits[0].sha)
    ```
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path

from git import GitCommandError, InvalidGitRepositoryError, NoSuchPathError, Repo
from git.exc import GitCommandNotFound

from rewind.exceptions import (
    CommitNotFoundError,
    GitNotFoundError,
    NotARepositoryError,
    VersionControlError,
)
from rewind.logging import get_logger

logger = get_logger(__name__)

__all__ = [
    "AsyncGitRepository",
    "CommitRecord",
    "GitRepository",
]

# =============================================================================
# Constants
# =============================================================================

#: Arguments for `git show` producing a bare first-parent unified diff.
#: The explicit prefixes keep output stable under diff.noprefix / diff.mnemonicPrefix.
SHOW_DIFF_ARGS: tuple[str, ...] = (
    "--format=",
    "-p",
    "--first-parent",
    "--diff-merges=first-parent",
    "--no-color",
    "--no-ext-diff",
    "--src-prefix=a/",
    "--dst-prefix=b/",
)

#: Config override so non-ASCII paths are printed verbatim instead of as
#: octal escapes. Paths with tabs, quotes or newlines are still quoted.
QUOTEPATH_OFF = "core.quotepath=false"

#: stderr fragments git prints when a revision cannot be resolved
UNKNOWN_REVISION_PATTERNS: tuple[str, ...] = (
    "unknown revision",
    "bad object",
    "bad revision",
    "ambiguous argument",
    "invalid object name",
)


# =============================================================================
# Value Objects (Return Types)
# =============================================================================


@dataclass(frozen=True, slots=True)
class CommitRecord:
    """Single commit log entry.

    Attributes:
        sha: Full 40-character SHA.
        short_sha: Abbreviated SHA (7 chars).
        message: First line of commit message.
        author: Author name.
        email: Author email.
        date: ISO 8601 authored date.
        parents: SHAs of the parent commits, first parent first.
    """

    sha: str
    short_sha: str
    message: str
    author: str
    email: str
    date: str
    parents: tuple[str, ...] = ()

    @property
    def is_merge(self) -> bool:
        """True when the commit has more than one parent."""
        return len(self.parents) > 1


# =============================================================================
# Helper Functions
# =============================================================================


def _validate_revision(sha: str) -> None:
    """Reject revisions git would read as an option or an empty argument.

    Raises:
        ValueError: If the revision is empty or looks like a flag.
    """
    if not sha or sha.isspace():
        raise ValueError("Commit SHA cannot be empty")
    if sha.startswith("-"):
        raise ValueError(f"Invalid commit SHA: {sha}")


def _convert_git_error(
    exc: GitCommandError,
    operation: str,
    path: Path,
    sha: str | None = None,
) -> VersionControlError:
    """Convert a GitPython command failure into a Rewind exception.

    Args:
        exc: GitPython exception.
        operation: Name of the query that failed.
        path: Repository path.
        sha: Revision involved, if any.

    Returns:
        Appropriate VersionControlError subclass.
    """
    stderr = str(exc.stderr or exc.stdout or str(exc))
    stderr_lower = stderr.lower()

    if sha is not None and any(p in stderr_lower for p in UNKNOWN_REVISION_PATTERNS):
        return CommitNotFoundError(
            f"Commit {sha} not found in {path}: {stderr.strip()}",
            sha=sha,
            path=path,
        )

    if "not a git repository" in stderr_lower:
        return NotARepositoryError(f"Not a git repository: {path}", path=path)

    return VersionControlError(
        f"git {operation} failed in {path}: {stderr.strip()}",
        operation=operation,
        path=path,
    )


# =============================================================================
# Main Class: GitRepository
# =============================================================================


class GitRepository:
    """GitPython-based read-only repository queries.

    Thread-safe for the queries it exposes: only stores the path and the
    Repo instance, and every query shells out to a fresh git process.

    Example:
        ```python
        repo = GitRepository("/path/to/repo")
        for record in repo.log(max_count=20):
            print(record.short_sha, record.message)
        ```
    """

    def __init__(self, path: Path | str) -> None:
        """Initialize GitRepository.

        Parent directories are searched, so a folder nested inside a
        working tree resolves to the enclosing repository.

        Args:
            path: Path inside the git repository.

        Raises:
            GitNotFoundError: If git is not installed.
            NotARepositoryError: If path is missing or not inside a repository.
        """
        self._path = Path(path)

        try:
            self._repo = Repo(self._path, search_parent_directories=True)
        except GitCommandNotFound as e:
            raise GitNotFoundError(
                "Git CLI not found. Please install git.", path=path
            ) from e
        except NoSuchPathError as e:
            raise NotARepositoryError(
                f"Path does not exist: {path}",
                path=path,
            ) from e
        except InvalidGitRepositoryError as e:
            raise NotARepositoryError(
                f"Not a git repository: {path}",
                path=path,
            ) from e

    @property
    def path(self) -> Path:
        """Path the repository was opened from."""
        return self._path

    @property
    def repo(self) -> Repo:
        """Underlying GitPython Repo instance."""
        return self._repo

    def log(self, max_count: int | None = None) -> list[CommitRecord]:
        """Get the commit history reachable from HEAD, newest first.

        Merge commits are included.

        Args:
            max_count: Maximum number of commits to return. None means all.

        Returns:
            List of CommitRecord, empty for a repository without commits.

        Raises:
            VersionControlError: If git fails to produce the log.
        """
        if not self._repo.head.is_valid():
            return []

        kwargs: dict[str, int] = {}
        if max_count is not None:
            kwargs["max_count"] = max_count

        commits: list[CommitRecord] = []

        try:
            for commit in self._repo.iter_commits(**kwargs):
                # Handle bytes vs str message
                msg = commit.message
                if isinstance(msg, bytes):
                    msg = msg.decode("utf-8", errors="replace")
                first_line = msg.split("\n")[0]

                author_name = commit.author.name
                if author_name is None:
                    author_name = "Unknown"

                commits.append(
                    CommitRecord(
                        sha=commit.hexsha,
                        short_sha=commit.hexsha[:7],
                        message=first_line,
                        author=author_name,
                        email=commit.author.email or "",
                        date=commit.authored_datetime.isoformat(),
                        parents=tuple(parent.hexsha for parent in commit.parents),
                    )
                )
        except GitCommandError as e:
            raise _convert_git_error(e, "log", self._path) from e
        except ValueError:
            # HEAD points at an unborn branch
            return []

        logger.debug("commit_log_loaded", path=str(self._path), count=len(commits))
        return commits

    def show(self, sha: str, first_parent_only: bool = True) -> str:
        """Get the raw unified diff introduced by a commit.

        Args:
            sha: Commit SHA (full or abbreviated).
            first_parent_only: Diff merge commits against their first parent
                only. Without it git prints a combined diff for merges.

        Returns:
            Unified diff text with ``a/`` and ``b/`` path prefixes, without
            the commit header.

        Raises:
            CommitNotFoundError: If the SHA does not resolve.
            VersionControlError: If git fails for any other reason.
            ValueError: If the SHA is empty or looks like an option.
        """
        _validate_revision(sha)

        args = list(SHOW_DIFF_ARGS)
        if not first_parent_only:
            args = [
                arg
                for arg in args
                if arg not in ("--first-parent", "--diff-merges=first-parent")
            ]

        try:
            output = str(self._repo.git(c=QUOTEPATH_OFF).show(*args, sha))
        except GitCommandError as e:
            raise _convert_git_error(e, "show", self._path, sha=sha) from e

        logger.debug("commit_diff_loaded", path=str(self._path), sha=sha[:7])
        return output


# =============================================================================
# Async Wrapper
# =============================================================================


class AsyncGitRepository:
    """Async wrapper for GitRepository.

    Delegates all queries to a synchronous GitRepository running in a
    thread pool, so the Textual event loop stays responsive while git runs.

    Example:
        ```python
        repo = AsyncGitRepository("/path/to/repo")
        commits = await repo.log()
        ```
    """

    def __init__(self, path: Path | str | GitRepository) -> None:
        """Initialize AsyncGitRepository.

        Args:
            path: Path inside the git repository, or an already opened
                GitRepository to wrap.

        Raises:
            GitNotFoundError: If git is not installed.
            NotARepositoryError: If path is not a git repository.
        """
        if isinstance(path, GitRepository):
            self._sync = path
        else:
            self._sync = GitRepository(path)

    @classmethod
    async def open(cls, path: Path | str) -> AsyncGitRepository:
        """Open a repository without blocking the event loop.

        Repository discovery walks parent directories and reads git config,
        so it runs in a worker thread like the queries themselves.

        Raises:
            GitNotFoundError: If git is not installed.
            NotARepositoryError: If path is not a git repository.
        """
        return cls(await asyncio.to_thread(GitRepository, path))

    @property
    def path(self) -> Path:
        """Path the repository was opened from."""
        return self._sync.path

    async def log(self, max_count: int | None = None) -> list[CommitRecord]:
        """Get the commit history reachable from HEAD, newest first."""
        return await asyncio.to_thread(self._sync.log, max_count)

    async def show(self, sha: str, first_parent_only: bool = True) -> str:
        """Get the raw unified diff introduced by a commit."""
        return await asyncio.to_thread(self._sync.show, sha, first_parent_only)

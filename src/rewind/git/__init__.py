"""Git access package using GitPython.

Read-only queries over a working tree: the commit log and the
first-parent diff of a single commit.

Usage:
    ```python
    from rewind.git import AsyncGitRepository

    repo = AsyncGitRepository("/path/to/repo")
    commits = await repo.log()
    diff_text = await repo.show(commits[0].sha)
    ```
"""

from __future__ import annotations

from rewind.git.repository import (
    AsyncGitRepository,
    CommitRecord,
    GitRepository,
)

__all__ = [
    "AsyncGitRepository",
    "CommitRecord",
    "GitRepository",
]

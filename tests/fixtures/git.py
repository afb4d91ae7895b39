"""Temporary git repositories built with GitPython.

Provides:
- commit_file: helper writing a file and committing it
- temp_git_repo: repository with two linear commits
- merge_git_repo: repository whose HEAD is a --no-ff merge commit
- non_git_dir: plain directory outside any repository
"""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest
from git import Repo


def commit_file(repo: Repo, relative_path: str, content: str, message: str) -> str:
    """Write *content* to *relative_path*, stage it, commit, and return the SHA."""
    target = Path(repo.working_dir) / relative_path
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content)
    repo.index.add([relative_path])
    return repo.index.commit(message).hexsha


def _init_repo(path: Path) -> Repo:
    path.mkdir()
    repo = Repo.init(path)
    with repo.config_writer() as writer:
        writer.set_value("user", "email", "test@example.com")
        writer.set_value("user", "name", "Test User")
        writer.set_value("commit", "gpgsign", "false")
    return repo


@pytest.fixture
def temp_git_repo(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a repository with two commits.

    History (newest first):
        "Add greeting module" - adds src/greet.py, edits README.md
        "Initial commit"      - adds README.md
    """
    repo_path = tmp_path / "repo"
    repo = _init_repo(repo_path)

    commit_file(repo, "README.md", "# Test Repo\n", "Initial commit")

    (repo_path / "README.md").write_text("# Test Repo\n\nGreets people.\n")
    (repo_path / "src").mkdir()
    (repo_path / "src" / "greet.py").write_text("def greet():\n    return 'hi'\n")
    repo.index.add(["README.md", "src/greet.py"])
    repo.index.commit("Add greeting module")

    yield repo_path


@pytest.fixture
def merge_git_repo(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a repository whose HEAD merges a feature branch.

    The feature branch adds feature.txt; the mainline adds mainline.txt
    after the branch point. HEAD is the merge, first parent = mainline.
    """
    repo_path = tmp_path / "merge-repo"
    repo = _init_repo(repo_path)

    commit_file(repo, "README.md", "# Merge Repo\n", "Initial commit")
    mainline = repo.active_branch.name

    repo.git.checkout("-b", "feature")
    commit_file(repo, "feature.txt", "feature work\n", "Add feature")

    repo.git.checkout(mainline)
    commit_file(repo, "mainline.txt", "mainline work\n", "Add mainline change")

    repo.git.merge("feature", "--no-ff", "--no-edit", "-m", "Merge feature")

    yield repo_path


@pytest.fixture
def non_git_dir(tmp_path: Path) -> Path:
    """Create a temporary directory that is not a git repository."""
    dir_path = tmp_path / "not_a_repo"
    dir_path.mkdir()
    return dir_path

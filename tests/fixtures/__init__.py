"""Shared test fixtures for the Rewind test suite.

Available Fixtures
==================

Query service mocks (from tests/fixtures/vcs.py)
------------------------------------------------

    make_commit_record: Factory building CommitRecord values from a SHA
        character and a message.
    mock_query_service: AsyncMock spec'd on GitQueryService. ``log`` returns
        two commits, ``show`` returns a one-file "added" diff.
    timeline_sources: TimelineSources wired to mock_query_service and the
        real UnifiedDiffParser.

Git repositories (from tests/fixtures/git.py)
---------------------------------------------

    temp_git_repo: Two-commit repository built with GitPython.
    merge_git_repo: Repository whose HEAD is a --no-ff merge commit.
    non_git_dir: Directory outside any repository.

Example:
    >>> @pytest.mark.asyncio
    ... async def test_expand(timeline_sources, make_commit_record):
    ...     node = CommitNode(Path("."), make_commit_record("a", "msg"), timeline_sources)
    ...     files = await node.load()
"""

from __future__ import annotations

"""Shared test fixtures.

Repositories are built directly in a dulwich ``MemoryRepo`` so no test needs
network access or a git binary.
"""

from collections.abc import Callable, Sequence
from datetime import datetime, timezone

import pytest
from dulwich.objects import Blob, Commit, Tree
from dulwich.repo import BaseRepo, MemoryRepo

from git_narrator.git.domain.value_objects import RepositoryHandle

TEST_REPO_URL = "https://example.com/acme/widgets.git"
TEST_BRANCH = "main"

# (author name, message, committer time)
CommitSpec = tuple[str, str, datetime]


def add_history(repo: BaseRepo, commits: Sequence[CommitSpec]) -> bytes:
    """Write a linear history, oldest commit first, onto TEST_BRANCH and return its head."""
    parents: list[bytes] = []
    head = b""
    for index, (author, message, when) in enumerate(commits):
        blob = Blob.from_string(f"revision {index}\n".encode())
        tree = Tree()
        tree.add(b"README", 0o100644, blob.id)

        commit = Commit()
        commit.tree = tree.id
        commit.parents = parents
        identity = f"{author} <{author.lower().replace(' ', '.')}@example.com>".encode()
        commit.author = commit.committer = identity
        commit.author_time = commit.commit_time = int(when.timestamp())
        commit.author_timezone = commit.commit_timezone = 0
        commit.encoding = b"UTF-8"
        commit.message = message.encode()

        repo.object_store.add_object(blob)
        repo.object_store.add_object(tree)
        repo.object_store.add_object(commit)
        parents = [commit.id]
        head = commit.id

    repo.refs[f"refs/heads/{TEST_BRANCH}".encode()] = head
    return head


def build_memory_repo(commits: Sequence[CommitSpec]) -> tuple[MemoryRepo, bytes]:
    """Create a linear in-memory history and return (repo, head sha)."""
    repo = MemoryRepo()
    return repo, add_history(repo, commits)


@pytest.fixture()
def make_handle() -> Callable[[Sequence[CommitSpec]], RepositoryHandle]:
    """Factory fixture returning a RepositoryHandle over an in-memory history."""

    def factory(commits: Sequence[CommitSpec]) -> RepositoryHandle:
        repo, head = build_memory_repo(commits)
        return RepositoryHandle(repo=repo, repo_url=TEST_REPO_URL, branch=TEST_BRANCH, head=head)

    return factory


def utc(*args: int) -> datetime:
    """Shorthand for a UTC datetime."""
    return datetime(*args, tzinfo=timezone.utc)

"""Repository interfaces for Git operations."""

from abc import ABC, abstractmethod
from collections.abc import Iterator

from git_narrator.core.context import ExecutionContext
from git_narrator.git.domain.entities import CommitRecord
from git_narrator.git.domain.value_objects import DateWindow, RepositoryHandle


class GitRepository(ABC):
    """Interface for Git repository operations."""

    @abstractmethod
    async def fetch_branch(
        self, ctx: ExecutionContext, repo_url: str, branch: str
    ) -> RepositoryHandle:
        """
        Fetch a single branch of a remote repository into memory.

        Args:
            ctx: Execution context bounding the fetch
            repo_url: URL (or local path) of the remote repository
            branch: Name of the branch to fetch

        Returns:
            Handle to the in-memory repository

        Raises:
            FetchFailedError: If the repository or branch cannot be fetched
            FetchCancelledError: If the context finishes before the fetch
        """
        ...

    @abstractmethod
    def iter_commits(
        self, handle: RepositoryHandle, window: DateWindow
    ) -> Iterator[CommitRecord]:
        """
        Yield commits whose committer time falls inside the window.

        Args:
            handle: Repository returned by fetch_branch
            window: Inclusive committer-time window

        Returns:
            Iterator of commits, newest first
        """
        ...

"""Git service for coordinating Git operations."""

from git_narrator.core.context import ExecutionContext
from git_narrator.core.exceptions import InvalidArgumentError
from git_narrator.git.domain.value_objects import DateWindow, RepositoryHandle
from git_narrator.git.repositories.interfaces import GitRepository
from git_narrator.git.services.corpus_builder import CommitCorpusBuilder


class GitService:
    """Service for Git operations."""

    def __init__(
        self,
        git_repository: GitRepository,
        corpus_builder: CommitCorpusBuilder | None = None,
    ) -> None:
        """
        Initialize GitService.

        Args:
            git_repository: Repository implementation for Git operations
            corpus_builder: Corpus builder, defaults to one over git_repository
        """
        self._git_repository = git_repository
        self._corpus_builder = corpus_builder or CommitCorpusBuilder(git_repository)

    async def acquire(
        self, ctx: ExecutionContext, repo_url: str, branch: str
    ) -> RepositoryHandle:
        """
        Fetch one branch of a remote repository into memory.

        Args:
            ctx: Execution context bounding the fetch
            repo_url: URL of the remote repository
            branch: Name of the branch

        Returns:
            Handle to the in-memory repository; close it when done

        Raises:
            InvalidArgumentError: If repo_url or branch is empty
            FetchFailedError: If the fetch fails
            FetchCancelledError: If the context finishes first
        """
        if not repo_url.strip():
            raise InvalidArgumentError("Repository URL cannot be empty")
        if not branch.strip():
            raise InvalidArgumentError("Branch name cannot be empty")
        return await self._git_repository.fetch_branch(ctx, repo_url, branch)

    def collect_corpus(
        self,
        ctx: ExecutionContext,
        handle: RepositoryHandle,
        window: DateWindow,
        author_filter: str = "",
    ) -> str:
        """
        Build the commit-message corpus for a window.

        Args:
            ctx: Execution context
            handle: Fetched repository
            window: Inclusive committer-time window
            author_filter: Case-insensitive author substring, empty for all

        Returns:
            Concatenated commit messages, empty when nothing matched
        """
        return self._corpus_builder.collect(ctx, handle, window, author_filter)

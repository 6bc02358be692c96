"""Assembly of the commit-message corpus fed to the summarizer."""

import logging

from git_narrator.core.context import ExecutionContext
from git_narrator.core.exceptions import CollectionCancelledError, CollectionFailedError
from git_narrator.git.domain.value_objects import DateWindow, RepositoryHandle
from git_narrator.git.repositories.interfaces import GitRepository
from git_narrator.git.services.author_filter_service import AuthorFilterService

logger = logging.getLogger(__name__)


class CommitCorpusBuilder:
    """Walks a fetched branch and concatenates the surviving commit messages."""

    def __init__(
        self,
        git_repository: GitRepository,
        author_filter_service: AuthorFilterService | None = None,
    ) -> None:
        """
        Initialize CommitCorpusBuilder.

        Args:
            git_repository: Repository implementation used for the walk
            author_filter_service: Bot and author filtering rules
        """
        self._git_repository = git_repository
        self._author_filter_service = author_filter_service or AuthorFilterService()

    def collect(
        self,
        ctx: ExecutionContext,
        handle: RepositoryHandle,
        window: DateWindow,
        author_filter: str = "",
    ) -> str:
        """
        Concatenate the messages of every commit that passes the filters.

        Messages are joined with no separator, in walk order (newest first).

        Args:
            ctx: Execution context, checked before every commit
            handle: Fetched repository
            window: Inclusive committer-time window
            author_filter: Case-insensitive author substring, empty for all

        Returns:
            The corpus, or an empty string when no commit survives

        Raises:
            CollectionCancelledError: If the context finishes during the walk
            CollectionFailedError: If the history cannot be walked
        """
        parts: list[str] = []
        skipped = 0
        try:
            for commit in self._git_repository.iter_commits(handle, window):
                err = ctx.err()
                if err is not None:
                    raise CollectionCancelledError(
                        f"Commit walk cancelled after {len(parts)} commit(s): {err}"
                    ) from err

                if not self._author_filter_service.should_keep(commit.author, author_filter):
                    skipped += 1
                    continue
                parts.append(commit.message)
        except CollectionCancelledError:
            raise
        except Exception as e:
            raise CollectionFailedError(f"Error iterating commits: {e}") from e

        logger.info("Collected %d commit(s), skipped %d", len(parts), skipped)
        return "".join(parts)

"""Concrete implementation of Git repository operations using dulwich."""

import asyncio
import logging
import math
from collections.abc import Iterator
from datetime import datetime, timedelta, timezone

from dulwich.client import get_transport_and_path
from dulwich.objects import Commit
from dulwich.repo import MemoryRepo
from dulwich.walk import ORDER_DATE

from git_narrator.core.context import ContextCancelledError, ExecutionContext
from git_narrator.core.exceptions import FetchCancelledError, FetchFailedError
from git_narrator.git.domain.entities import CommitRecord
from git_narrator.git.domain.value_objects import DateWindow, RepositoryHandle
from git_narrator.git.repositories.interfaces import GitRepository

logger = logging.getLogger(__name__)


class BranchNotFoundError(LookupError):
    """The remote does not advertise the requested branch."""


class DulwichGitRepository(GitRepository):
    """Git operations over an in-memory dulwich object store.

    Nothing is checked out and nothing is written to disk: each fetch
    creates a fresh ``MemoryRepo`` owned by the returned handle.
    """

    async def fetch_branch(
        self, ctx: ExecutionContext, repo_url: str, branch: str
    ) -> RepositoryHandle:
        """
        Fetch a single branch of a remote repository into memory.

        The blocking fetch runs in a worker thread and is raced against the
        context. The pack and progress callbacks abort the transfer in that
        thread once the context is done, and the partial pack is dropped.

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
        logger.info("Analyzing repository: %s", repo_url)
        logger.info("Cloning branch: %s", branch)
        try:
            return await ctx.race(
                asyncio.to_thread(self._fetch_into_memory, ctx, repo_url, branch)
            )
        except ContextCancelledError as e:
            raise FetchCancelledError(
                f"Fetch of branch '{branch}' from {repo_url} was cancelled: {e}"
            ) from e

    def iter_commits(
        self, handle: RepositoryHandle, window: DateWindow
    ) -> Iterator[CommitRecord]:
        """
        Yield commits whose committer time falls inside the window.

        The walker applies the inclusive range itself through ``since`` and
        ``until``.

        Args:
            handle: Repository returned by fetch_branch
            window: Inclusive committer-time window

        Returns:
            Iterator of commits, newest first

        Raises:
            ValueError: If the handle has been closed
        """
        if handle.repo is None:
            raise ValueError(f"Repository handle for {handle.repo_url} is closed")
        walker = handle.repo.get_walker(
            include=[handle.head],
            order=ORDER_DATE,
            since=math.ceil(window.start.timestamp()),
            until=math.floor(window.end.timestamp()),
        )
        for entry in walker:
            yield self._to_commit_record(entry.commit)

    @staticmethod
    def _fetch_into_memory(
        ctx: ExecutionContext, repo_url: str, branch: str
    ) -> RepositoryHandle:
        """Run the blocking single-branch fetch. Called in a worker thread.

        Every pack chunk is checked against the context before it is stored,
        so a finished context stops the transfer itself and the incomplete
        pack is discarded.
        """
        ref = f"refs/heads/{branch}".encode()
        repo = MemoryRepo()
        wanted: dict[bytes, bytes] = {}

        def determine_wants(refs: dict[bytes, bytes], depth: int | None = None) -> list[bytes]:
            sha = refs.get(ref)
            if sha is None:
                raise BranchNotFoundError(f"Branch '{branch}' not found in {repo_url}")
            wanted[ref] = sha
            return [sha]

        def check_context() -> None:
            err = ctx.err()
            if err is not None:
                raise err

        pack_file, commit_pack, abort_pack = repo.object_store.add_pack()

        def pack_data(chunk: bytes) -> int:
            check_context()
            return pack_file.write(chunk)

        def progress(message: bytes) -> None:
            check_context()
            logger.debug("%s", message.decode("utf-8", errors="replace").strip())

        try:
            client, path = get_transport_and_path(repo_url)
            check_context()
            client.fetch_pack(
                path,
                determine_wants,
                repo.get_graph_walker(),
                pack_data,
                progress=progress,
            )
            check_context()
            commit_pack()
        except ContextCancelledError:
            abort_pack()
            raise
        except Exception as e:
            abort_pack()
            err = ctx.err()
            if err is not None:
                raise err from e
            raise FetchFailedError(
                f"Failed to fetch branch '{branch}' from {repo_url}: {e}"
            ) from e

        head = wanted[ref]
        repo.refs[ref] = head
        return RepositoryHandle(repo=repo, repo_url=repo_url, branch=branch, head=head)

    @staticmethod
    def _to_commit_record(commit: Commit) -> CommitRecord:
        """Convert a dulwich commit into a CommitRecord."""
        author, _, _ = commit.author.decode("utf-8", errors="replace").partition(" <")
        committer_tz = timezone(timedelta(seconds=commit.commit_timezone))
        return CommitRecord(
            hash=commit.id.decode("ascii"),
            author=author.strip(),
            date=datetime.fromtimestamp(commit.commit_time, tz=committer_tz),
            message=commit.message.decode("utf-8", errors="replace"),
        )

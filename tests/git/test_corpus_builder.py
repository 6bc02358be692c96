"""Tests for ``CommitCorpusBuilder`` over in-memory histories."""

from collections.abc import Callable, Sequence

import pytest

from git_narrator.core.context import ExecutionContext
from git_narrator.core.exceptions import CollectionCancelledError, CollectionFailedError
from git_narrator.git.domain.value_objects import DateWindow, RepositoryHandle
from git_narrator.git.repositories.implementations import DulwichGitRepository
from git_narrator.git.services.corpus_builder import CommitCorpusBuilder
from tests.conftest import CommitSpec, utc

HandleFactory = Callable[[Sequence[CommitSpec]], RepositoryHandle]

WINDOW = DateWindow(start=utc(2023, 1, 1), end=utc(2023, 6, 1))


@pytest.fixture()
def builder() -> CommitCorpusBuilder:
    return CommitCorpusBuilder(DulwichGitRepository())


class TestFiltering:
    def test_bot_commits_are_excluded(
        self, builder: CommitCorpusBuilder, make_handle: HandleFactory
    ) -> None:
        handle = make_handle(
            [
                ("dependabot[bot]", "Bump lodash from 4.17.20 to 4.17.21\n", utc(2023, 2, 1)),
                ("Jane Doe", "Add export to CSV\n", utc(2023, 3, 1)),
            ]
        )
        corpus = builder.collect(ExecutionContext(), handle, WINDOW, "")
        assert corpus == "Add export to CSV\n"

    def test_author_filter_is_case_insensitive_substring(
        self, builder: CommitCorpusBuilder, make_handle: HandleFactory
    ) -> None:
        handle = make_handle(
            [
                ("Jane Doe", "Fix login redirect\n", utc(2023, 2, 1)),
                ("John Smith", "Refactor billing\n", utc(2023, 3, 1)),
            ]
        )
        corpus = builder.collect(ExecutionContext(), handle, WINDOW, "jane")
        assert corpus == "Fix login redirect\n"

    def test_commits_outside_window_are_skipped(
        self, builder: CommitCorpusBuilder, make_handle: HandleFactory
    ) -> None:
        handle = make_handle(
            [
                ("Jane Doe", "Too early\n", utc(2022, 12, 31, 23, 59, 59)),
                ("Jane Doe", "Inside\n", utc(2023, 3, 1)),
                ("Jane Doe", "Too late\n", utc(2023, 6, 1, 0, 0, 1)),
            ]
        )
        corpus = builder.collect(ExecutionContext(), handle, WINDOW)
        assert corpus == "Inside\n"

    def test_window_bounds_are_inclusive(
        self, builder: CommitCorpusBuilder, make_handle: HandleFactory
    ) -> None:
        handle = make_handle(
            [
                ("Jane Doe", "At start\n", utc(2023, 1, 1)),
                ("Jane Doe", "At end\n", utc(2023, 6, 1)),
            ]
        )
        corpus = builder.collect(ExecutionContext(), handle, WINDOW)
        assert "At start\n" in corpus
        assert "At end\n" in corpus

    def test_reversed_window_yields_empty_corpus(
        self, builder: CommitCorpusBuilder, make_handle: HandleFactory
    ) -> None:
        handle = make_handle([("Jane Doe", "Inside\n", utc(2023, 3, 1))])
        reversed_window = DateWindow(start=utc(2023, 6, 1), end=utc(2023, 1, 1))
        assert builder.collect(ExecutionContext(), handle, reversed_window) == ""


class TestCorpusShape:
    def test_messages_concatenated_newest_first_without_separator(
        self, builder: CommitCorpusBuilder, make_handle: HandleFactory
    ) -> None:
        handle = make_handle(
            [
                ("Jane Doe", "first", utc(2023, 2, 1)),
                ("Jane Doe", "second", utc(2023, 3, 1)),
                ("Jane Doe", "third", utc(2023, 4, 1)),
            ]
        )
        corpus = builder.collect(ExecutionContext(), handle, WINDOW)
        assert corpus == "thirdsecondfirst"

    def test_no_surviving_commits_gives_empty_string(
        self, builder: CommitCorpusBuilder, make_handle: HandleFactory
    ) -> None:
        handle = make_handle([("kodiakhq[bot]", "Merge #12\n", utc(2023, 2, 1))])
        assert builder.collect(ExecutionContext(), handle, WINDOW) == ""

    def test_repeated_collection_is_identical(
        self, builder: CommitCorpusBuilder, make_handle: HandleFactory
    ) -> None:
        handle = make_handle(
            [
                ("Jane Doe", "a\n", utc(2023, 2, 1)),
                ("John Smith", "b\n", utc(2023, 2, 1, 12)),
                ("Jane Doe", "c\n", utc(2023, 5, 1)),
            ]
        )
        first = builder.collect(ExecutionContext(), handle, WINDOW)
        second = builder.collect(ExecutionContext(), handle, WINDOW)
        assert first == second


class TestCollectionFailures:
    def test_cancelled_context_raises_instead_of_partial_corpus(
        self, builder: CommitCorpusBuilder, make_handle: HandleFactory
    ) -> None:
        handle = make_handle([("Jane Doe", "Inside\n", utc(2023, 3, 1))])
        ctx = ExecutionContext()
        ctx.cancel()
        with pytest.raises(CollectionCancelledError):
            builder.collect(ctx, handle, WINDOW)

    def test_walk_errors_are_wrapped(
        self, builder: CommitCorpusBuilder, make_handle: HandleFactory
    ) -> None:
        handle = make_handle([("Jane Doe", "Inside\n", utc(2023, 3, 1))])
        broken = RepositoryHandle(
            repo=handle.repo, repo_url=handle.repo_url, branch=handle.branch, head=b"0" * 40
        )
        with pytest.raises(CollectionFailedError):
            builder.collect(ExecutionContext(), broken, WINDOW)

"""Tests for ``AuthorFilterService``."""

import pytest

from git_narrator.git.services.author_filter_service import AuthorFilterService


@pytest.fixture()
def service() -> AuthorFilterService:
    return AuthorFilterService()


class TestBotExclusion:
    @pytest.mark.parametrize("author", ["dependabot[bot]", "kodiakhq[bot]", "acme dependabot[bot]"])
    def test_bot_authors_are_detected(self, service: AuthorFilterService, author: str) -> None:
        assert service.is_bot_author(author) is True

    @pytest.mark.parametrize("author", ["Jane Doe", "dependabot", "renovate-bot"])
    def test_humans_and_unlisted_names_are_not_bots(
        self, service: AuthorFilterService, author: str
    ) -> None:
        assert service.is_bot_author(author) is False

    def test_bot_excluded_even_when_filter_matches(self, service: AuthorFilterService) -> None:
        assert service.should_keep("dependabot[bot]", "dependabot") is False


class TestAuthorMatch:
    def test_empty_filter_keeps_everyone(self, service: AuthorFilterService) -> None:
        assert service.matches_author("Jane Doe", "") is True

    @pytest.mark.parametrize("author_filter", ["jane", "JANE", "doe", "e D"])
    def test_case_insensitive_substring(
        self, service: AuthorFilterService, author_filter: str
    ) -> None:
        assert service.matches_author("Jane Doe", author_filter) is True

    def test_non_matching_author(self, service: AuthorFilterService) -> None:
        assert service.should_keep("John Smith", "jane") is False

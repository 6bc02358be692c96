"""Service for filtering commits by author."""


class AuthorFilterService:
    """Service for deciding which commit authors make it into a corpus."""

    # Automation accounts whose commits are never summarized
    BOT_AUTHOR_MARKERS: tuple[str, ...] = (
        "dependabot[bot]",
        "kodiakhq[bot]",
    )

    def is_bot_author(self, author: str) -> bool:
        """
        Check if an author display name belongs to an automation account.

        Args:
            author: Author display name

        Returns:
            True if the name contains one of the bot markers
        """
        return any(marker in author for marker in self.BOT_AUTHOR_MARKERS)

    def matches_author(self, author: str, author_filter: str) -> bool:
        """
        Check if an author display name matches the requested author.

        Args:
            author: Author display name
            author_filter: Case-insensitive substring; empty matches everyone

        Returns:
            True if the author should be kept
        """
        if not author_filter:
            return True
        return author_filter.lower() in author.lower()

    def should_keep(self, author: str, author_filter: str) -> bool:
        """Bot exclusion first, then the optional author filter."""
        if self.is_bot_author(author):
            return False
        return self.matches_author(author, author_filter)

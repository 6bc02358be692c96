"""Value objects for Summarization domain."""

from dataclasses import dataclass

from git_narrator.core.exceptions import ValidationFailedError

NO_COMMITS_MESSAGE = "No commits found in the specified date range."


@dataclass(frozen=True)
class SummaryRequest:
    """Input of one history summarization.

    Attributes:
        repo_url: URL of the remote repository
        branch: Branch to analyze
        start_date: Natural-language start date
        end_date: Natural-language end date, empty for today
        author: Case-insensitive author substring. Required for summarization
                runs; a corpus-only run may leave it empty to keep every author
        api_key: Credentials for the summarization backend
        model: Model identifier, backend default if None
        provider: Backend name, process default if None
    """

    repo_url: str
    branch: str
    start_date: str
    end_date: str = ""
    author: str = ""
    api_key: str = ""
    model: str | None = None
    provider: str | None = None

    def validate(self, for_summary: bool = True) -> None:
        """
        Check that every required field is present.

        Args:
            for_summary: Whether the fields only summarization needs
                         (author, api_key) are required. Runs that stop
                         before summarization pass False.

        Raises:
            ValidationFailedError: Listing every missing field
        """
        required = {
            "repo_url": self.repo_url,
            "branch": self.branch,
            "start_date": self.start_date,
        }
        if for_summary:
            required["author"] = self.author
            required["api_key"] = self.api_key

        missing = tuple(name for name, value in required.items() if not value.strip())
        if missing:
            raise ValidationFailedError(
                f"Missing required field(s): {', '.join(missing)}", missing_fields=missing
            )


@dataclass(frozen=True)
class NarrativeResult:
    """Output of one history summarization.

    Attributes:
        text: The narrative, or NO_COMMITS_MESSAGE
        empty_range: True when no commit matched and no summary was generated
    """

    text: str
    empty_range: bool = False

    @classmethod
    def no_commits(cls) -> "NarrativeResult":
        return cls(text=NO_COMMITS_MESSAGE, empty_range=True)

    def __str__(self) -> str:
        return self.text

"""Error taxonomy for the history summarization pipeline."""

from enum import Enum


class ErrorKind(str, Enum):
    """Kind of failure reported by a pipeline step."""

    VALIDATION_FAILED = "validation_failed"
    INVALID_DATE = "invalid_date"
    INVALID_ARGUMENT = "invalid_argument"
    FETCH_FAILED = "fetch_failed"
    FETCH_CANCELLED = "fetch_cancelled"
    COLLECTION_FAILED = "collection_failed"
    COLLECTION_CANCELLED = "collection_cancelled"
    SUMMARIZATION_FAILED = "summarization_failed"
    SUMMARIZATION_CANCELLED = "summarization_cancelled"


class GitNarratorError(Exception):
    """Base class for every error raised by git-narrator components."""

    kind: ErrorKind


class ValidationFailedError(GitNarratorError):
    """A required request field is missing or malformed."""

    kind = ErrorKind.VALIDATION_FAILED

    def __init__(self, message: str, missing_fields: tuple[str, ...] = ()) -> None:
        self.missing_fields = missing_fields
        super().__init__(message)


class InvalidDateError(GitNarratorError):
    """A date string could not be resolved to a concrete instant."""

    kind = ErrorKind.INVALID_DATE


class InvalidArgumentError(GitNarratorError):
    """A component received an empty or illegal value."""

    kind = ErrorKind.INVALID_ARGUMENT


class FetchFailedError(GitNarratorError):
    """The remote repository could not be fetched."""

    kind = ErrorKind.FETCH_FAILED


class FetchCancelledError(GitNarratorError):
    """The repository fetch was cancelled or ran past its deadline."""

    kind = ErrorKind.FETCH_CANCELLED


class CollectionFailedError(GitNarratorError):
    """Walking the commit history failed."""

    kind = ErrorKind.COLLECTION_FAILED


class CollectionCancelledError(GitNarratorError):
    """The commit walk was cancelled before it completed."""

    kind = ErrorKind.COLLECTION_CANCELLED


class SummarizationFailedError(GitNarratorError):
    """The streaming summarization call failed.

    Attributes:
        partial_text: Text received before the failure. Diagnostic only,
            never a finished narrative.
    """

    kind = ErrorKind.SUMMARIZATION_FAILED

    def __init__(self, message: str, partial_text: str = "") -> None:
        self.partial_text = partial_text
        super().__init__(message)


class SummarizationCancelledError(SummarizationFailedError):
    """The stream was cancelled; ``partial_text`` holds what had arrived."""

    kind = ErrorKind.SUMMARIZATION_CANCELLED

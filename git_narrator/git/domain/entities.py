"""Git domain entities."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class CommitRecord:
    """Commit entity as seen by the history walk.

    Attributes:
        hash: Hex sha of the commit
        author: Author display name, without the email address
        date: Committer timestamp
        message: Raw commit message
    """

    hash: str
    author: str
    date: datetime
    message: str

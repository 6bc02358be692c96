"""Value objects for Git domain."""

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dulwich.repo import MemoryRepo


@dataclass(frozen=True)
class DateWindow:
    """Inclusive committer-time window of a history walk.

    ``start <= end`` is not enforced; a reversed window selects no commits.
    """

    start: datetime
    end: datetime


@dataclass
class RepositoryHandle:
    """A single fetched branch held entirely in memory.

    The handle belongs to one pipeline invocation. Use it as a context
    manager so it lets go of the object store when the invocation ends;
    a closed handle has no repository.
    """

    repo: "MemoryRepo | None"
    repo_url: str
    branch: str
    head: bytes

    @property
    def closed(self) -> bool:
        return self.repo is None

    def close(self) -> None:
        """Close the object store and drop the handle's reference to it."""
        if self.repo is not None:
            self.repo.object_store.close()
            self.repo = None

    def __enter__(self) -> "RepositoryHandle":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

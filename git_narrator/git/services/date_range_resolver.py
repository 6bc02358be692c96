"""Resolution of free-form date strings into a commit window."""

import logging
from datetime import datetime, tzinfo
from zoneinfo import ZoneInfo

import dateparser
from tzlocal import get_localzone

from git_narrator.core.exceptions import InvalidDateError
from git_narrator.git.domain.value_objects import DateWindow

logger = logging.getLogger(__name__)


class DateRangeResolver:
    """Turns natural-language start/end strings into a timezone-aware DateWindow.

    The reference time and default timezone are fixed when the resolver is
    constructed, so a resolver built with an explicit ``current_time`` gives
    deterministic results.
    """

    def __init__(
        self,
        current_time: datetime | None = None,
        timezone: tzinfo | str | None = None,
    ) -> None:
        """
        Initialize DateRangeResolver.

        Args:
            current_time: Reference instant for relative phrases and for the
                          default end date. Defaults to now. A naive value is
                          read in the resolver timezone.
            timezone: Default timezone, as a tzinfo or IANA name. Defaults to
                      the local system timezone.
        """
        if isinstance(timezone, str):
            timezone = ZoneInfo(timezone)
        self._timezone: tzinfo = timezone or get_localzone()

        if current_time is None:
            current_time = datetime.now(self._timezone)
        elif current_time.tzinfo is None:
            current_time = current_time.replace(tzinfo=self._timezone)
        self._current_time = current_time.astimezone(self._timezone)

    @property
    def timezone(self) -> tzinfo:
        return self._timezone

    @property
    def current_time(self) -> datetime:
        return self._current_time

    def resolve(self, start_date: str, end_date: str = "") -> DateWindow:
        """
        Resolve a start and optional end date string into a DateWindow.

        Args:
            start_date: Required date expression ("2023-01-01", "last monday",
                        "3 weeks ago", "March 2024", ...)
            end_date: Optional date expression. Empty means today at midnight
                      in the resolver timezone.

        Returns:
            DateWindow with timezone-aware bounds. ``start`` may be later than
            ``end``; such a window selects no commits.

        Raises:
            InvalidDateError: If a date string is empty or cannot be parsed
        """
        if not start_date.strip():
            raise InvalidDateError("Start date cannot be empty")

        start = self._parse(start_date, "start")
        if end_date.strip():
            end = self._parse(end_date, "end")
        else:
            end = self._current_time.replace(hour=0, minute=0, second=0, microsecond=0)

        logger.info("Date range: %s - %s", start.strftime("%Y-%m-%d"), end.strftime("%Y-%m-%d"))
        return DateWindow(start=start, end=end)

    def _parse(self, value: str, label: str) -> datetime:
        """Parse one date expression relative to the configured reference time."""
        parsed = dateparser.parse(
            value,
            settings={
                "RELATIVE_BASE": self._current_time.replace(tzinfo=None),
                "TIMEZONE": str(self._timezone),
                "RETURN_AS_TIMEZONE_AWARE": True,
            },
        )
        if parsed is None or parsed.replace(tzinfo=None) == datetime.min:
            raise InvalidDateError(f"Invalid {label} date: could not parse date '{value}'")
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=self._timezone)
        return parsed

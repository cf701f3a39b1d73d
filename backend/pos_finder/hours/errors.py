from __future__ import annotations

from typing import Optional


class HoursError(Exception):
    """Base for every error the opening-hours core raises or passes through."""

    http_status: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(HoursError):
    """Caller-supplied query parameters are malformed."""

    http_status = 400


class InvalidDay(ValidationError):
    def __init__(self, day):
        super().__init__(f"Invalid day of the week: {day}")
        self.day = day


class InvalidTime(ValidationError):
    def __init__(self, time):
        super().__init__(f"Invalid time format: {time}")
        self.time = time


class MalformedHours(HoursError):
    """Upstream feed carried an hours string that cannot be normalized."""

    def __init__(self, hours: str, reason: str, entry_id: Optional[str] = None):
        self.hours = hours
        self.reason = reason
        self.entry_id = entry_id
        super().__init__(self._render())

    def _render(self) -> str:
        prefix = f"entry {self.entry_id}: " if self.entry_id is not None else ""
        return f"{prefix}malformed hours {self.hours!r} ({self.reason})"

    def for_entry(self, entry_id: str) -> "MalformedHours":
        return MalformedHours(self.hours, self.reason, entry_id=entry_id)


class MalformedEntry(HoursError):
    """A feed entry is missing required fields or has the wrong shape."""

    def __init__(self, entry_id: Optional[str], reason: str):
        super().__init__(f"entry {entry_id}: {reason}")
        self.entry_id = entry_id
        self.reason = reason


class StorageUnavailable(HoursError):
    pass


class FeedUnavailable(HoursError):
    pass

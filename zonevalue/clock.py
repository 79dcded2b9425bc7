"""Clock abstraction supplying the default instant for zone queries."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional, Protocol


class Clock(Protocol):
    """Anything that can report the current instant as an aware UTC datetime."""

    def now(self) -> datetime: ...


class SystemClock:
    """Default clock backed by the real system time."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """Clock pinned to a chosen instant; moves only when told to."""

    def __init__(self, instant: datetime):
        self._instant = as_instant(instant)

    def now(self) -> datetime:
        return self._instant

    def set(self, instant: datetime) -> None:
        self._instant = as_instant(instant)

    def advance(self, delta: timedelta) -> datetime:
        self._instant = self._instant + delta
        return self._instant


def as_instant(value: datetime) -> datetime:
    """Normalize a datetime to aware UTC; naive values are read as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


_clock: Optional[Clock] = None


def get_clock() -> Clock:
    global _clock
    if _clock is None:
        _clock = SystemClock()
    return _clock


def set_clock(clock: Optional[Clock]) -> None:
    """Install a process-wide clock; None restores the system clock."""
    global _clock
    _clock = clock

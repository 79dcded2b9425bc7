"""
Time zone values.

A ``TimeZone`` is an immutable, hashable value naming a geopolitical region
("America/Los_Angeles") or a fixed offset from GMT. Every value is backed by a
registry handle in one of two forms:

- frozen: an independent snapshot owned by the value alone;
- live: no handle of its own; every read goes to the autoupdating handle of
  the currently installed registry, which follows the system zone.

All live values are equal to each other and to nothing else, and share one
hash. Frozen values compare by identifier and rule data.
"""

import datetime
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Union

from .clock import as_instant, get_clock
from .constants import AUTOUPDATING_HASH
from .errors import TimeZoneError, TimeZoneNotFoundError
from .registry import NameStyle, ZoneHandle, get_registry, load_zone_info

__all__ = [
    "NameStyle",
    "TimeZone",
    "TimeZoneError",
    "TimeZoneNotFoundError",
    "validate_identifier",
]


@dataclass(frozen=True)
class _Frozen:
    handle: ZoneHandle


@dataclass(frozen=True)
class _Live:
    """The registry's autoupdating handle, looked up at every read."""


_Backing = Union[_Frozen, _Live]


def _instant(at: Optional[datetime.datetime]) -> datetime.datetime:
    if at is None:
        return get_clock().now()
    return as_instant(at)


class TimeZone:
    """A geopolitical time zone or fixed GMT offset."""

    __slots__ = ("_backing",)

    def __init__(self, identifier: str):
        """
        Initialize with a zone identifier.

        Args:
            identifier: tz database identifier (e.g., "America/New_York")

        Raises:
            TimeZoneNotFoundError: If the registry does not know the identifier
        """
        handle = get_registry().lookup_identifier(identifier)
        if handle is None:
            raise TimeZoneNotFoundError(f"Unknown time zone identifier '{identifier}'")
        self._backing: _Backing = _Frozen(handle)

    @classmethod
    def _adopt(cls, backing: _Backing) -> "TimeZone":
        value = object.__new__(cls)
        value._backing = backing
        return value

    # Construction

    @classmethod
    def current(cls) -> "TimeZone":
        """The system zone as of now; later system changes are not reflected."""
        registry = get_registry()
        return cls._adopt(_Frozen(registry.clone(registry.autoupdating_zone())))

    @classmethod
    def autoupdating_current(cls) -> "TimeZone":
        """The system zone, following every later change to it.

        The autoupdating value only compares equal to itself.
        """
        return cls._adopt(_Live())

    @classmethod
    def from_identifier(cls, identifier: str) -> "TimeZone":
        return cls(identifier)

    @classmethod
    def from_offset_seconds(cls, seconds: int) -> "TimeZone":
        """
        Create a zone at a constant offset from GMT.

        These zones never observe daylight saving time. Their identifier and
        abbreviation do NOT follow the POSIX minutes-west convention.

        Args:
            seconds: Offset east of GMT, at most 18 hours either way

        Raises:
            TimeZoneNotFoundError: If the offset cannot be represented
        """
        handle = get_registry().lookup_offset(seconds)
        if handle is None:
            raise TimeZoneNotFoundError(f"No fixed-offset zone for {seconds!r} seconds")
        return cls._adopt(_Frozen(handle))

    @classmethod
    def from_abbreviation(cls, abbreviation: str) -> "TimeZone":
        """
        Create a zone from an abbreviation such as "GMT".

        The abbreviation is resolved to an identifier through the abbreviation
        table. Abbreviations are not standardized ("EST" is Eastern Time in
        both the United States and Australia), so prefer identifiers except for
        unique cases like "GMT" or "UTC".

        Raises:
            TimeZoneNotFoundError: If the table has no usable mapping
        """
        handle = get_registry().lookup_abbreviation(abbreviation)
        if handle is None:
            raise TimeZoneNotFoundError(f"Unknown time zone abbreviation '{abbreviation}'")
        return cls._adopt(_Frozen(handle))

    @classmethod
    def from_handle(cls, handle: ZoneHandle) -> "TimeZone":
        """Wrap a registry handle.

        The registry's autoupdating handle yields a live value that keeps
        reading whichever registry is installed; any other handle is cloned so later changes to it cannot leak in.
        """
        registry = get_registry()
        if registry.is_autoupdating(handle):
            return cls._adopt(_Live())
        return cls._adopt(_Frozen(registry.clone(handle)))

    @property
    def _handle(self) -> ZoneHandle:
        if isinstance(self._backing, _Live):
            return get_registry().autoupdating_zone()
        return self._backing.handle

    def to_handle(self) -> ZoneHandle:
        """Return the backing handle itself. Callers must not modify it."""
        return self._handle

    # Queries

    @property
    def is_live(self) -> bool:
        return isinstance(self._backing, _Live)

    @property
    def identifier(self) -> str:
        """The geopolitical region identifier, not a display name."""
        return self._handle.identifier

    @property
    def tzinfo(self) -> datetime.tzinfo:
        return self._handle.tzinfo

    def offset_seconds(self, at: Optional[datetime.datetime] = None) -> int:
        """Seconds east of GMT at `at` (default: now)."""
        return get_registry().offset_seconds(self._handle, _instant(at))

    def abbreviation(self, at: Optional[datetime.datetime] = None) -> Optional[str]:
        """
        Abbreviation in effect at `at` (default: now).

        It changes with daylight saving time: "America/New_York" reads "EDT"
        in summer and "EST" otherwise.
        """
        return get_registry().abbreviation(self._handle, _instant(at))

    def is_daylight_saving_time(self, at: Optional[datetime.datetime] = None) -> bool:
        return get_registry().is_dst(self._handle, _instant(at))

    def daylight_saving_offset(
        self, at: Optional[datetime.datetime] = None
    ) -> datetime.timedelta:
        return get_registry().dst_offset(self._handle, _instant(at))

    def next_daylight_transition_after(
        self, at: datetime.datetime
    ) -> Optional[datetime.datetime]:
        """
        Next daylight saving transition strictly after `at`.

        Depending on the zone this may be a change of its GMT offset rather
        than of daylight saving time.

        Returns:
            Aware UTC datetime, or None if the zone does not observe daylight
            saving time as of `at`
        """
        return get_registry().next_transition(self._handle, as_instant(at))

    @property
    def next_daylight_transition(self) -> Optional[datetime.datetime]:
        return self.next_daylight_transition_after(get_clock().now())

    def localized_name(
        self, style: NameStyle, locale: Optional[str] = None
    ) -> Optional[str]:
        """Display name such as "Pacific Time", or None if the locale is unknown."""
        return get_registry().localized_name(self._handle, style, locale)

    def make_aware(self, dt: datetime.datetime) -> datetime.datetime:
        """
        Make a datetime object timezone-aware using this zone.

        Args:
            dt: datetime object (naive or aware)

        Returns:
            Timezone-aware datetime object; aware inputs are returned unchanged
        """
        if dt.tzinfo is not None:
            return dt
        return dt.replace(tzinfo=self.tzinfo)

    # Registry-wide state, not per value

    @staticmethod
    def known_identifiers() -> list[str]:
        return get_registry().known_identifiers()

    @staticmethod
    def abbreviation_table() -> dict[str, str]:
        """Copy of the process-wide abbreviation -> identifier table."""
        return get_registry().abbreviation_table()

    @staticmethod
    def set_abbreviation_table(table: Mapping[str, str]) -> None:
        """Replace the process-wide table.

        This changes shared state for every caller. Read-modify-write sequences
        racing with other threads need the caller's own locking.
        """
        get_registry().set_abbreviation_table(table)

    @staticmethod
    def data_version() -> str:
        return get_registry().data_version()

    # Value semantics

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeZone):
            return NotImplemented
        if self.is_live or other.is_live:
            return self.is_live == other.is_live
        return self._handle == other._handle

    def __hash__(self) -> int:
        if self.is_live:
            return AUTOUPDATING_HASH
        return hash(self._handle)

    def __copy__(self) -> "TimeZone":
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> "TimeZone":
        return self

    def __reduce__(self) -> tuple[Any, tuple[Any, ...]]:
        if self.is_live:
            return (TimeZone.autoupdating_current, ())
        handle = self._handle
        if handle.fixed_offset is not None:
            return (TimeZone.from_offset_seconds, (handle.fixed_offset,))
        return (TimeZone, (handle.identifier,))

    def __str__(self) -> str:
        return self.identifier

    def __repr__(self) -> str:
        if self.is_live:
            return f"TimeZone.autoupdating_current() ('{self.identifier}')"
        return f"TimeZone('{self.identifier}')"


def validate_identifier(identifier: str) -> bool:
    """
    Validate that a zone identifier is known.

    Args:
        identifier: Zone identifier to validate

    Returns:
        True if valid, False otherwise
    """
    return load_zone_info(identifier) is not None


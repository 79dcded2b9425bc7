"""
Zone registry: the mutable store of zone objects behind TimeZone values.

The registry owns every zone handle it hands out, the process-wide
abbreviation table, and one shared "autoupdating" handle that tracks the
system zone. Rule data comes from ``zoneinfo`` (with the ``tzdata`` package as
fallback database), system zone detection from ``tzlocal`` and localized
names from ``babel``.

Handle state is an immutable ``ZoneState`` record. The registry swaps the
state of its autoupdating handle with a single attribute assignment, and every
query reads the state exactly once, so a reader never sees half of a system
zone change.
"""

import math
import threading
import zoneinfo
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone, tzinfo
from enum import Enum
from pathlib import Path
from typing import Optional

import tzdata
import tzlocal
from babel import UnknownLocaleError
from babel.dates import get_timezone_gmt, get_timezone_name

from .abbreviation_store import AbbreviationStore
from .clock import as_instant
from .constants import (
    DEFAULT_ABBREVIATIONS,
    DEFAULT_LOCALE,
    DEFAULT_SYSTEM_ZONE,
    GMT_IDENTIFIER,
    MAX_FIXED_OFFSET_SECONDS,
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
    TRANSITION_SEARCH_DAYS,
    TZDATA_ZI_FILE,
)
from .errors import TimeZoneNotFoundError
from .logger import get_module_logger

logger = get_module_logger("registry")


class NameStyle(Enum):
    """Localized name styles as (Babel width, Babel zone variant)."""

    STANDARD = ("long", "standard")
    SHORT_STANDARD = ("short", "standard")
    DAYLIGHT_SAVING = ("long", "daylight")
    SHORT_DAYLIGHT_SAVING = ("short", "daylight")
    GENERIC = ("long", "generic")
    SHORT_GENERIC = ("short", "generic")

    @property
    def width(self) -> str:
        return self.value[0]

    @property
    def zone_variant(self) -> str:
        return self.value[1]


@dataclass(frozen=True)
class ZoneState:
    """Structural content of a zone: identifier plus rule data.

    Rule-based zones are keyed by their tz database identifier, so two states
    with the same identifier and no fixed offset share rule data. The tzinfo
    object itself is not compared.
    """

    identifier: str
    tzinfo: tzinfo = field(compare=False)
    fixed_offset: Optional[int] = None


class ZoneHandle:
    """Registry-provided zone object.

    Only the registry changes a handle's state, and only for its shared
    autoupdating handle. Receivers of a handle must treat it as read-only.
    """

    __slots__ = ("_state",)

    def __init__(self, state: ZoneState):
        self._state = state

    @property
    def state(self) -> ZoneState:
        return self._state

    @property
    def identifier(self) -> str:
        return self._state.identifier

    @property
    def tzinfo(self) -> tzinfo:
        return self._state.tzinfo

    @property
    def fixed_offset(self) -> Optional[int]:
        return self._state.fixed_offset

    def _replace_state(self, state: ZoneState) -> None:
        self._state = state

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ZoneHandle):
            return NotImplemented
        return self._state == other._state

    def __hash__(self) -> int:
        return hash(self._state)

    def __repr__(self) -> str:
        return f"ZoneHandle({self._state.identifier!r})"


def load_zone_info(identifier: str) -> Optional[zoneinfo.ZoneInfo]:
    """Return the ZoneInfo for a tz database key, or None if it is unknown."""
    if not isinstance(identifier, str) or not identifier.strip():
        return None
    try:
        return zoneinfo.ZoneInfo(identifier)
    except (ValueError, KeyError, OSError):
        return None


def fixed_offset_names(seconds: int) -> tuple[str, str]:
    """Return (identifier, abbreviation) for a fixed offset east of GMT.

    Identifiers read "GMT+0530" (seconds appended when present) and
    abbreviations "GMT+5:30". Zero is plain "GMT" for both.
    """
    if seconds == 0:
        return GMT_IDENTIFIER, GMT_IDENTIFIER
    sign = "+" if seconds > 0 else "-"
    hours, remainder = divmod(abs(seconds), SECONDS_PER_HOUR)
    minutes, secs = divmod(remainder, SECONDS_PER_MINUTE)

    identifier = f"{GMT_IDENTIFIER}{sign}{hours:02d}{minutes:02d}"
    abbreviation = f"{GMT_IDENTIFIER}{sign}{hours}"
    if secs:
        identifier += f"{secs:02d}"
        abbreviation += f":{minutes:02d}:{secs:02d}"
    elif minutes:
        abbreviation += f":{minutes:02d}"
    return identifier, abbreviation


def _read_tzdata_zi_version(path: Path) -> Optional[str]:
    try:
        with open(path, encoding="utf-8") as f:
            first_line = f.readline().strip()
    except (OSError, UnicodeDecodeError):
        return None
    prefix = "# version "
    if first_line.startswith(prefix):
        return first_line[len(prefix) :].strip() or None
    return None


class ZoneRegistry:
    """Authoritative set of known zones, their rule data and the abbreviation table."""

    def __init__(
        self,
        system_zone: Optional[str] = None,
        abbreviations: Optional[Mapping[str, str]] = None,
        default_locale: str = DEFAULT_LOCALE,
        abbreviation_store: Optional[AbbreviationStore] = None,
    ):
        """
        Args:
            system_zone: Identifier to report as the system zone instead of
                detecting it with tzlocal.
            abbreviations: Initial abbreviation table; the built-in table when None.
            default_locale: Babel locale used when localized_name() gets none.
            abbreviation_store: Where set_abbreviation_table() persists
                replacements; nothing is written when None.

        Raises:
            TimeZoneNotFoundError: If system_zone is not a known identifier
        """
        self._lock = threading.Lock()
        if system_zone is not None and load_zone_info(system_zone) is None:
            raise TimeZoneNotFoundError(f"Unknown system zone '{system_zone}'")
        self._system_zone_override = system_zone
        self._pinned_zone: Optional[str] = None
        self._abbreviations: dict[str, str] = dict(
            DEFAULT_ABBREVIATIONS if abbreviations is None else abbreviations
        )
        self.default_locale = default_locale
        self._abbreviation_store = abbreviation_store
        self._autoupdating = ZoneHandle(self._named_state(self._detect_system_zone()))
        logger.info(
            f"Zone registry ready (system zone: {self._autoupdating.identifier}, "
            f"{len(self._abbreviations)} abbreviations)"
        )

    # Lookup

    def _named_state(self, identifier: str) -> ZoneState:
        zone = load_zone_info(identifier)
        if zone is None:
            raise TimeZoneNotFoundError(f"Unknown time zone identifier '{identifier}'")
        return ZoneState(identifier, zone)

    def lookup_identifier(self, identifier: str) -> Optional[ZoneHandle]:
        zone = load_zone_info(identifier)
        if zone is None:
            logger.debug(f"No zone for identifier {identifier!r}")
            return None
        return ZoneHandle(ZoneState(identifier, zone))

    def lookup_offset(self, seconds: int) -> Optional[ZoneHandle]:
        if isinstance(seconds, bool) or not isinstance(seconds, int):
            logger.debug(f"Rejected non-integer offset {seconds!r}")
            return None
        if abs(seconds) > MAX_FIXED_OFFSET_SECONDS:
            logger.debug(f"Rejected out-of-range offset {seconds}")
            return None
        identifier, abbreviation = fixed_offset_names(seconds)
        zone = timezone(timedelta(seconds=seconds), abbreviation)
        return ZoneHandle(ZoneState(identifier, zone, seconds))

    def lookup_abbreviation(self, abbreviation: str) -> Optional[ZoneHandle]:
        with self._lock:
            identifier = self._abbreviations.get(abbreviation)
        if identifier is None:
            logger.debug(f"No abbreviation mapping for {abbreviation!r}")
            return None
        return self.lookup_identifier(identifier)

    def known_identifiers(self) -> list[str]:
        return sorted(zoneinfo.available_timezones())

    # Abbreviation table

    def abbreviation_table(self) -> dict[str, str]:
        with self._lock:
            return dict(self._abbreviations)

    def set_abbreviation_table(self, table: Mapping[str, str]) -> None:
        replacement = {str(abbr): str(identifier) for abbr, identifier in table.items()}
        with self._lock:
            self._abbreviations = replacement
        logger.info(f"Abbreviation table replaced ({len(replacement)} entries)")
        if self._abbreviation_store is not None:
            self._abbreviation_store.save(replacement)

    def data_version(self) -> str:
        # zoneinfo prefers the system database over the tzdata package
        for root in zoneinfo.TZPATH:
            version = _read_tzdata_zi_version(Path(root) / TZDATA_ZI_FILE)
            if version:
                return version
        return tzdata.IANA_VERSION

    # System zone

    def _detect_system_zone(self) -> str:
        if self._pinned_zone is not None:
            return self._pinned_zone
        if self._system_zone_override is not None:
            return self._system_zone_override
        try:
            name = tzlocal.get_localzone_name()
        except (LookupError, ValueError, OSError) as e:
            logger.warning(
                f"Could not detect system zone, using {DEFAULT_SYSTEM_ZONE}: {e}"
            )
            return DEFAULT_SYSTEM_ZONE
        if name is None or load_zone_info(name) is None:
            logger.warning(
                f"System zone {name!r} is not a known identifier, using {DEFAULT_SYSTEM_ZONE}"
            )
            return DEFAULT_SYSTEM_ZONE
        return name

    def system_zone(self) -> ZoneHandle:
        """Return an independent handle for the system zone as it is right now."""
        return self.clone(self._autoupdating)

    def autoupdating_zone(self) -> ZoneHandle:
        return self._autoupdating

    def is_autoupdating(self, handle: ZoneHandle) -> bool:
        return handle is self._autoupdating

    def clone(self, handle: ZoneHandle) -> ZoneHandle:
        return ZoneHandle(handle.state)

    def set_system_zone(self, identifier: str) -> None:
        """Pin the system zone; autoupdating values observe the change."""
        state = self._named_state(identifier)
        with self._lock:
            previous = self._autoupdating.identifier
            self._pinned_zone = identifier
            self._autoupdating._replace_state(state)
        logger.info(f"System zone set: {previous} -> {identifier}")

    def reset_system_zone(self) -> str:
        """Forget any pinned zone and re-detect the system zone."""
        with self._lock:
            self._pinned_zone = None
            state = self._named_state(self._detect_system_zone())
            previous = self._autoupdating.identifier
            self._autoupdating._replace_state(state)
        if previous != state.identifier:
            logger.info(f"System zone changed: {previous} -> {state.identifier}")
        return state.identifier

    # Per-handle queries

    def _local(self, state: ZoneState, at: datetime) -> datetime:
        return as_instant(at).astimezone(state.tzinfo)

    def offset_seconds(self, handle: ZoneHandle, at: datetime) -> int:
        local = self._local(handle.state, at)
        offset = local.utcoffset()
        return int(offset.total_seconds()) if offset is not None else 0

    def abbreviation(self, handle: ZoneHandle, at: datetime) -> Optional[str]:
        return self._local(handle.state, at).tzname() or None

    def is_dst(self, handle: ZoneHandle, at: datetime) -> bool:
        return bool(self._local(handle.state, at).dst())

    def dst_offset(self, handle: ZoneHandle, at: datetime) -> timedelta:
        return self._local(handle.state, at).dst() or timedelta(0)

    def next_transition(self, handle: ZoneHandle, after: datetime) -> Optional[datetime]:
        """Return the first instant after `after` where the UTC offset or DST flag changes.

        Scans forward a day at a time, then bisects down to the second. Returns
        None for fixed-offset zones and when nothing changes within the
        search horizon.
        """
        state = handle.state
        if state.fixed_offset is not None:
            return None
        zone = state.tzinfo

        def signature(timestamp: int) -> tuple[Optional[timedelta], Optional[timedelta]]:
            local = datetime.fromtimestamp(timestamp, tz=zone)
            return local.utcoffset(), local.dst()

        start = math.floor(as_instant(after).timestamp())
        try:
            initial = signature(start)
            low = start
            for day in range(1, TRANSITION_SEARCH_DAYS + 1):
                high = start + day * SECONDS_PER_DAY
                if signature(high) != initial:
                    break
                low = high
            else:
                return None
            while high - low > 1:
                middle = (low + high) // 2
                if signature(middle) == initial:
                    low = middle
                else:
                    high = middle
        except (OverflowError, ValueError, OSError) as e:
            logger.debug(f"Transition search for {state.identifier} out of range: {e}")
            return None
        return datetime.fromtimestamp(high, tz=timezone.utc)

    def localized_name(
        self, handle: ZoneHandle, style: NameStyle, locale: Optional[str] = None
    ) -> Optional[str]:
        state = handle.state
        locale = locale or self.default_locale
        try:
            if state.fixed_offset is not None:
                reference = datetime(2000, 1, 1, tzinfo=state.tzinfo)
                return get_timezone_gmt(reference, width=style.width, locale=locale)
            return get_timezone_name(
                state.tzinfo,
                width=style.width,
                zone_variant=style.zone_variant,
                locale=locale,
            )
        except (UnknownLocaleError, ValueError, LookupError) as e:
            logger.debug(f"No localized name for {state.identifier} in {locale}: {e}")
            return None


_registry: Optional[ZoneRegistry] = None
_registry_lock = threading.Lock()


def _build_default_registry() -> ZoneRegistry:
    from .config import (
        get_abbreviation_file,
        get_default_locale,
        get_system_zone_override,
    )

    abbreviations = None
    store = None
    path = get_abbreviation_file()
    if path is not None:
        store = AbbreviationStore(path)
        stored = store.load()
        if stored:
            abbreviations = stored
        else:
            logger.warning("Abbreviation file is empty, using built-in table")
    return ZoneRegistry(
        system_zone=get_system_zone_override(),
        abbreviations=abbreviations,
        default_locale=get_default_locale(),
        abbreviation_store=store,
    )


def get_registry() -> ZoneRegistry:
    """Return the process-wide registry, creating it from config on first use."""
    global _registry
    with _registry_lock:
        if _registry is None:
            _registry = _build_default_registry()
        return _registry


def set_registry(registry: Optional[ZoneRegistry]) -> None:
    """Install a process-wide registry; None rebuilds the default on next use."""
    global _registry
    with _registry_lock:
        _registry = registry

"""
zonevalue

Immutable, hashable time zone values over a mutable zone registry, including
an autoupdating value that follows the system zone.
"""

import logging

from .abbreviation_store import AbbreviationStore
from .clock import Clock, FixedClock, SystemClock, get_clock, set_clock
from .config import ConfigValidationError, get_config
from .errors import TimeZoneError, TimeZoneNotFoundError
from .logger import get_module_logger
from .registry import NameStyle, ZoneHandle, ZoneRegistry, get_registry, set_registry
from .time_zone import TimeZone, validate_identifier

__all__ = [
    "AbbreviationStore",
    "Clock",
    "ConfigValidationError",
    "FixedClock",
    "NameStyle",
    "SystemClock",
    "TimeZone",
    "TimeZoneError",
    "TimeZoneNotFoundError",
    "ZoneHandle",
    "ZoneRegistry",
    "get_clock",
    "get_config",
    "get_registry",
    "set_clock",
    "set_registry",
    "validate_identifier",
]

__version__ = "0.1.0"

logger: logging.Logger = get_module_logger("main")
logger.debug(f"zonevalue {__version__} loaded")

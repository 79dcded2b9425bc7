"""Exceptions raised by zone construction."""


class TimeZoneError(Exception):
    """Raised when time zone operations fail."""

    pass


class TimeZoneNotFoundError(TimeZoneError, LookupError):
    """Raised when the registry has no zone for an identifier, abbreviation or offset."""

    pass

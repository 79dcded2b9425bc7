"""Shared constants used across the package."""

# Time-related constants
SECONDS_PER_HOUR = 3600
SECONDS_PER_MINUTE = 60
SECONDS_PER_DAY = 86400

# Fixed-offset zones
MAX_FIXED_OFFSET_SECONDS = 18 * SECONDS_PER_HOUR
GMT_IDENTIFIER = "GMT"

# Transition search
TRANSITION_SEARCH_DAYS = 400

# Hash shared by every autoupdating value
AUTOUPDATING_HASH = 1

# Default values
DEFAULT_SYSTEM_ZONE = "UTC"
DEFAULT_LOCALE = "en_US"
DEFAULT_LOG_LEVEL = "INFO"

# Configuration field names
CONFIG_SYSTEM_ZONE = "system_zone"
CONFIG_DEFAULT_LOCALE = "default_locale"
CONFIG_ABBREVIATION_FILE = "abbreviation_file"
CONFIG_LOG_LEVEL = "log_level"
CONFIG_LOG_DIR = "log_dir"

# Environment variables backing each configuration field
ENV_SYSTEM_ZONE = "ZONEVALUE_SYSTEM_ZONE"
ENV_DEFAULT_LOCALE = "ZONEVALUE_LOCALE"
ENV_ABBREVIATION_FILE = "ZONEVALUE_ABBREVIATION_FILE"
ENV_LOG_LEVEL = "ZONEVALUE_LOG_LEVEL"
ENV_LOG_DIR = "ZONEVALUE_LOG_DIR"

# File names
LOG_FILE_PREFIX = "zonevalue_"
TZDATA_ZI_FILE = "tzdata.zi"

# Logging
LOGGER_NAME = "zonevalue"
LOG_DATE_FORMAT = "%Y%m%d_%H%M%S"
LOG_MESSAGE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

# Classic abbreviation -> identifier dictionary. Several abbreviations are
# ambiguous worldwide ("EST", "IST", "CST"); each maps to one region only.
DEFAULT_ABBREVIATIONS: dict[str, str] = {
    "ADT": "America/Halifax",
    "AKDT": "America/Juneau",
    "AKST": "America/Juneau",
    "ART": "America/Argentina/Buenos_Aires",
    "AST": "America/Halifax",
    "BDT": "Asia/Dhaka",
    "BRST": "America/Sao_Paulo",
    "BRT": "America/Sao_Paulo",
    "BST": "Europe/London",
    "CAT": "Africa/Harare",
    "CDT": "America/Chicago",
    "CEST": "Europe/Paris",
    "CET": "Europe/Paris",
    "CLST": "America/Santiago",
    "CLT": "America/Santiago",
    "COT": "America/Bogota",
    "CST": "America/Chicago",
    "EAT": "Africa/Addis_Ababa",
    "EDT": "America/New_York",
    "EEST": "Europe/Athens",
    "EET": "Europe/Athens",
    "EST": "America/New_York",
    "GMT": "GMT",
    "GST": "Asia/Dubai",
    "HKT": "Asia/Hong_Kong",
    "HST": "Pacific/Honolulu",
    "ICT": "Asia/Bangkok",
    "IRST": "Asia/Tehran",
    "IST": "Asia/Kolkata",
    "JST": "Asia/Tokyo",
    "KST": "Asia/Seoul",
    "MDT": "America/Denver",
    "MSD": "Europe/Moscow",
    "MSK": "Europe/Moscow",
    "MST": "America/Phoenix",
    "NZDT": "Pacific/Auckland",
    "NZST": "Pacific/Auckland",
    "PDT": "America/Los_Angeles",
    "PET": "America/Lima",
    "PHT": "Asia/Manila",
    "PKT": "Asia/Karachi",
    "PST": "America/Los_Angeles",
    "SGT": "Asia/Singapore",
    "UTC": "UTC",
    "WAT": "Africa/Lagos",
    "WEST": "Europe/Lisbon",
    "WET": "Europe/Lisbon",
    "WIT": "Asia/Jakarta",
}

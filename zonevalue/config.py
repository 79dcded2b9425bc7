"""Configuration management helpers for the package."""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Optional

from babel import Locale, UnknownLocaleError

from .constants import (
    CONFIG_ABBREVIATION_FILE,
    CONFIG_DEFAULT_LOCALE,
    CONFIG_LOG_DIR,
    CONFIG_LOG_LEVEL,
    CONFIG_SYSTEM_ZONE,
    DEFAULT_LOCALE,
    DEFAULT_LOG_LEVEL,
    ENV_ABBREVIATION_FILE,
    ENV_DEFAULT_LOCALE,
    ENV_LOG_DIR,
    ENV_LOG_LEVEL,
    ENV_SYSTEM_ZONE,
    LOG_LEVELS,
)
from .logger import get_module_logger
from .time_zone import validate_identifier


class ConfigValidationError(Exception):
    pass


DEFAULT_CONFIG: dict[str, str] = {
    CONFIG_SYSTEM_ZONE: "",
    CONFIG_DEFAULT_LOCALE: DEFAULT_LOCALE,
    CONFIG_ABBREVIATION_FILE: "",
    CONFIG_LOG_LEVEL: DEFAULT_LOG_LEVEL,
    CONFIG_LOG_DIR: "",
}

ENV_VARS: dict[str, str] = {
    CONFIG_SYSTEM_ZONE: ENV_SYSTEM_ZONE,
    CONFIG_DEFAULT_LOCALE: ENV_DEFAULT_LOCALE,
    CONFIG_ABBREVIATION_FILE: ENV_ABBREVIATION_FILE,
    CONFIG_LOG_LEVEL: ENV_LOG_LEVEL,
    CONFIG_LOG_DIR: ENV_LOG_DIR,
}

logger = get_module_logger("config")


def validate_config(config: Mapping[str, object]) -> dict[str, str]:
    system_zone = str(config.get(CONFIG_SYSTEM_ZONE, "") or "").strip()
    if system_zone and not validate_identifier(system_zone):
        raise ConfigValidationError(f"Invalid system zone: {system_zone}")

    locale = str(config.get(CONFIG_DEFAULT_LOCALE, "") or DEFAULT_LOCALE).strip()
    try:
        Locale.parse(locale)
    except (ValueError, TypeError, UnknownLocaleError) as e:
        raise ConfigValidationError(f"Invalid locale '{locale}': {e}")

    level = str(config.get(CONFIG_LOG_LEVEL, "") or DEFAULT_LOG_LEVEL).strip().upper()
    if level not in LOG_LEVELS:
        raise ConfigValidationError(
            f"Log level must be one of {', '.join(LOG_LEVELS)}, got '{level}'"
        )

    return {
        CONFIG_SYSTEM_ZONE: system_zone,
        CONFIG_DEFAULT_LOCALE: locale,
        CONFIG_ABBREVIATION_FILE: str(
            config.get(CONFIG_ABBREVIATION_FILE, "") or ""
        ).strip(),
        CONFIG_LOG_LEVEL: level,
        CONFIG_LOG_DIR: str(config.get(CONFIG_LOG_DIR, "") or "").strip(),
    }


def get_config(environ: Optional[Mapping[str, str]] = None) -> dict[str, str]:
    if environ is None:
        environ = os.environ
    merged = DEFAULT_CONFIG.copy()
    for field, env_var in ENV_VARS.items():
        value = environ.get(env_var)
        if value is not None and value.strip():
            merged[field] = value.strip()
    logger.debug(f"Resolved config: {merged}")

    try:
        return validate_config(merged)
    except ConfigValidationError as e:
        logger.warning(f"Ignoring invalid configuration, using defaults: {e}")
        return DEFAULT_CONFIG.copy()


def get_system_zone_override() -> Optional[str]:
    return get_config()[CONFIG_SYSTEM_ZONE] or None


def get_default_locale() -> str:
    return get_config()[CONFIG_DEFAULT_LOCALE]


def get_abbreviation_file() -> Optional[Path]:
    path = get_config()[CONFIG_ABBREVIATION_FILE]
    return Path(path) if path else None

"""
Unit tests for the configuration system.
"""

import pytest

from zonevalue.config import (
    DEFAULT_CONFIG,
    ConfigValidationError,
    get_abbreviation_file,
    get_config,
    get_default_locale,
    get_system_zone_override,
    validate_config,
)


class TestConfig:
    """Test configuration management functions."""

    @pytest.mark.unit
    def test_get_config_empty_environment(self) -> None:
        assert get_config(environ={}) == DEFAULT_CONFIG.copy()

    @pytest.mark.unit
    def test_get_config_reads_environment(self) -> None:
        config = get_config(
            environ={
                "ZONEVALUE_SYSTEM_ZONE": "Europe/Berlin",
                "ZONEVALUE_LOCALE": "de_DE",
                "ZONEVALUE_ABBREVIATION_FILE": "/tmp/abbr.json",
                "ZONEVALUE_LOG_LEVEL": "debug",
                "ZONEVALUE_LOG_DIR": "/tmp/logs",
            }
        )
        assert config == {
            "system_zone": "Europe/Berlin",
            "default_locale": "de_DE",
            "abbreviation_file": "/tmp/abbr.json",
            "log_level": "DEBUG",
            "log_dir": "/tmp/logs",
        }

    @pytest.mark.unit
    def test_blank_values_use_defaults(self) -> None:
        config = get_config(environ={"ZONEVALUE_LOCALE": "   ", "ZONEVALUE_LOG_LEVEL": ""})
        assert config["default_locale"] == DEFAULT_CONFIG["default_locale"]
        assert config["log_level"] == DEFAULT_CONFIG["log_level"]

    @pytest.mark.unit
    def test_invalid_environment_falls_back_to_defaults(self) -> None:
        config = get_config(environ={"ZONEVALUE_SYSTEM_ZONE": "Invalid/Timezone"})
        assert config == DEFAULT_CONFIG.copy()

    @pytest.mark.unit
    def test_accessors_read_os_environ(self, clean_env: pytest.MonkeyPatch) -> None:
        assert get_system_zone_override() is None
        assert get_abbreviation_file() is None
        assert get_default_locale() == "en_US"

        clean_env.setenv("ZONEVALUE_SYSTEM_ZONE", "Asia/Seoul")
        clean_env.setenv("ZONEVALUE_ABBREVIATION_FILE", "abbr.json")
        clean_env.setenv("ZONEVALUE_LOCALE", "ja_JP")

        assert get_system_zone_override() == "Asia/Seoul"
        assert get_abbreviation_file() is not None
        assert get_abbreviation_file().name == "abbr.json"
        assert get_default_locale() == "ja_JP"


class TestValidateConfig:
    """Test validate_config error reporting."""

    @pytest.mark.unit
    def test_invalid_system_zone(self) -> None:
        with pytest.raises(ConfigValidationError) as exc_info:
            validate_config({"system_zone": "Invalid/Timezone"})
        assert "Invalid system zone" in str(exc_info.value)

    @pytest.mark.unit
    @pytest.mark.parametrize("locale", ["xx_YY", "not a locale!"])
    def test_invalid_locale(self, locale: str) -> None:
        with pytest.raises(ConfigValidationError) as exc_info:
            validate_config({"default_locale": locale})
        assert "Invalid locale" in str(exc_info.value)

    @pytest.mark.unit
    def test_invalid_log_level(self) -> None:
        with pytest.raises(ConfigValidationError) as exc_info:
            validate_config({"log_level": "LOUD"})
        assert "Log level must be one of" in str(exc_info.value)

    @pytest.mark.unit
    def test_normalizes_values(self) -> None:
        validated = validate_config(
            {"system_zone": " UTC ", "log_level": "warning", "log_dir": None}
        )
        assert validated["system_zone"] == "UTC"
        assert validated["log_level"] == "WARNING"
        assert validated["log_dir"] == ""
        assert validated["default_locale"] == "en_US"

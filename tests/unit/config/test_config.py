"""Unit tests for configuration dataclasses and key utilities."""

from pathlib import Path

import pytest

from noticon.config.config import DEFAULT_ICON_PATH, Config
from noticon.config.utils import (
    coerce_value,
    get_all_config_keys,
    get_config_diff,
    get_config_value,
    parse_config_key,
    set_config_value,
    validate_config_key,
)
from noticon.domain.entities import SearchPath


class TestConfig:
    """Tests for Config defaults and validation."""

    def test_defaults(self) -> None:
        """Test default values."""
        config = Config.default()
        assert config.icon.icon_path == DEFAULT_ICON_PATH
        assert config.icon.max_icon_size == 32
        assert config.surface.conversion == "png"
        assert config.system.log_level == "WARNING"
        assert config.system.log_file is None

    def test_default_validates(self) -> None:
        """Test the default configuration is valid."""
        Config.default().validate()

    def test_negative_size_rejected(self) -> None:
        """Test a negative icon size fails validation."""
        config = Config.default()
        config.icon.max_icon_size = -1
        with pytest.raises(ValueError, match="max_icon_size"):
            config.validate()

    def test_bool_size_rejected(self) -> None:
        """Test a boolean is not accepted as an icon size."""
        config = Config.default()
        config.icon.max_icon_size = True
        with pytest.raises(ValueError, match="integer"):
            config.validate()

    def test_unknown_conversion_rejected(self) -> None:
        """Test only known conversion routes are accepted."""
        config = Config.default()
        config.surface.conversion = "gdk"
        with pytest.raises(ValueError, match="conversion"):
            config.validate()

    def test_invalid_log_level_rejected(self) -> None:
        """Test an unknown log level fails validation."""
        config = Config.default()
        config.system.log_level = "LOUD"
        with pytest.raises(ValueError, match="log_level"):
            config.validate()

    def test_icon_settings(self) -> None:
        """Test the icon section is snapshotted into pipeline settings."""
        config = Config.default()
        config.icon.icon_path = "/a:/b"
        config.icon.max_icon_size = 48

        settings = config.icon_settings()

        assert settings.search_path == SearchPath("/a:/b")
        assert settings.max_icon_size == 48


class TestConfigKeys:
    """Tests for dot-notation key helpers."""

    def test_parse_config_key(self) -> None:
        """Test a key splits into section and field."""
        assert parse_config_key("surface.conversion") == ("surface", "conversion")

    @pytest.mark.parametrize("key", ["icon", "audio.device", ""])
    def test_parse_invalid_key(self, key: str) -> None:
        """Test malformed keys and unknown sections are rejected."""
        with pytest.raises(ValueError):
            parse_config_key(key)

    def test_validate_config_key(self) -> None:
        """Test known keys validate and unknown fields do not."""
        assert validate_config_key("icon.max_icon_size") is True
        assert validate_config_key("icon.colour") is False

    def test_all_keys(self) -> None:
        """Test every field of every section is listed."""
        assert get_all_config_keys() == [
            "icon.icon_path",
            "icon.max_icon_size",
            "surface.conversion",
            "system.log_file",
            "system.log_level",
        ]

    def test_get_config_value(self) -> None:
        """Test values are read by dot-notation key."""
        assert get_config_value(Config.default(), "icon.max_icon_size") == 32

    def test_set_config_value_coerces(self) -> None:
        """Test values are coerced to the field's type."""
        config_dict: dict = {}
        set_config_value(config_dict, "icon.max_icon_size", "48")
        set_config_value(config_dict, "system.log_file", "/tmp/noticon.log")
        assert config_dict == {
            "icon": {"max_icon_size": 48},
            "system": {"log_file": Path("/tmp/noticon.log")},
        }

    def test_set_config_value_rejects_bad_int(self) -> None:
        """Test non-numeric sizes are rejected."""
        with pytest.raises(ValueError, match="integer"):
            set_config_value({}, "icon.max_icon_size", "big")


class TestCoerceValue:
    """Tests for string coercion."""

    @pytest.mark.parametrize("value", ["none", "null", ""])
    def test_optional_none(self, value: str) -> None:
        """Test optional fields accept none-like strings."""
        assert coerce_value(value, Path | None) is None

    def test_plain_string_keeps_none_text(self) -> None:
        """Test non-optional strings are taken literally."""
        assert coerce_value("none", str) == "none"


def test_config_diff_only_contains_changes() -> None:
    """Test the diff holds only non-default values, with paths as strings."""
    config = Config.default()
    config.icon.max_icon_size = 64
    config.system.log_file = Path("/tmp/noticon.log")

    assert get_config_diff(config, Config.default()) == {
        "icon": {"max_icon_size": 64},
        "system": {"log_file": "/tmp/noticon.log"},
    }

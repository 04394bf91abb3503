"""Dot-notation access to configuration fields ("icon.max_icon_size")."""

import types
import typing
from dataclasses import fields
from pathlib import Path
from typing import Any

from noticon.config.config import Config, IconConfig, SurfaceConfig, SystemConfig

# Section name -> dataclass holding that section's fields
CONFIG_SECTIONS = {
    "icon": IconConfig,
    "surface": SurfaceConfig,
    "system": SystemConfig,
}

NONE_WORDS = ("none", "null", "")


def parse_config_key(key: str) -> tuple[str, str]:
    """Split a key into its section and field names.

    Raises:
        ValueError: If the key has no dot or names an unknown section

    Examples:
        >>> parse_config_key("icon.icon_path")
        ('icon', 'icon_path')
    """
    section, dot, name = key.partition(".")
    if not dot:
        raise ValueError(f"Config key '{key}' must look like 'section.field', e.g. 'icon.icon_path'")
    if section not in CONFIG_SECTIONS:
        raise ValueError(
            f"Unknown config section '{section}' (expected one of {', '.join(CONFIG_SECTIONS)})"
        )
    return section, name


def get_field_type(section: str, name: str) -> Any:
    """Return the annotated type of ``section.name``, or None if there is no such field."""
    section_class = CONFIG_SECTIONS.get(section)
    if section_class is None:
        return None
    return next((f.type for f in fields(section_class) if f.name == name), None)


def validate_config_key(key: str) -> bool:
    """Tell whether a key names an existing field.

    Examples:
        >>> validate_config_key("surface.conversion")
        True
        >>> validate_config_key("icon.colour")
        False
    """
    try:
        return get_field_type(*parse_config_key(key)) is not None
    except ValueError:
        return False


def get_all_config_keys() -> list[str]:
    """All valid keys, sorted."""
    return sorted(
        f"{section}.{f.name}"
        for section, section_class in CONFIG_SECTIONS.items()
        for f in fields(section_class)
    )


def get_config_value(config: Config, key: str) -> Any:
    """Read the value a key points at.

    Raises:
        ValueError: If the key does not name a field
    """
    section, name = parse_config_key(key)
    if get_field_type(section, name) is None:
        raise ValueError(f"Section '{section}' has no field '{name}'")
    return getattr(getattr(config, section), name)


def set_config_value(overrides: dict[str, Any], key: str, value: str) -> None:
    """Store ``value``, coerced to the field's type, under its section in ``overrides``.

    Raises:
        ValueError: If the key does not name a field or the value does not fit its type

    Examples:
        >>> overrides = {}
        >>> set_config_value(overrides, "icon.max_icon_size", "48")
        >>> overrides
        {'icon': {'max_icon_size': 48}}
    """
    section, name = parse_config_key(key)
    field_type = get_field_type(section, name)
    if field_type is None:
        raise ValueError(f"Section '{section}' has no field '{name}'")
    overrides.setdefault(section, {})[name] = coerce_value(value, field_type)


def _optional_inner(target_type: Any) -> Any:
    """Return ``T`` for ``T | None`` / ``Optional[T]``, otherwise None."""
    origin = typing.get_origin(target_type)
    if origin is not typing.Union and origin is not types.UnionType:
        return None
    return next((t for t in typing.get_args(target_type) if t is not type(None)), None)


def coerce_value(value: str, target_type: Any) -> Any:
    """Convert command-line or environment text to a config field's type.

    Optional fields map ``none``, ``null`` and the empty string to None.

    Raises:
        ValueError: If an integer field gets non-numeric text
    """
    inner = _optional_inner(target_type)
    if inner is not None:
        if value.lower() in NONE_WORDS:
            return None
        target_type = inner

    if target_type is int:
        try:
            return int(value)
        except ValueError as e:
            raise ValueError(f"'{value}' is not an integer") from e
    if target_type is Path:
        return Path(value)
    return value


def get_config_diff(config: Config, defaults: Config) -> dict[str, Any]:
    """Collect the fields whose value differs from ``defaults``, grouped by section.

    Paths are written as strings so the result can go straight to YAML.

    Examples:
        >>> config = Config.default()
        >>> config.icon.max_icon_size = 64
        >>> get_config_diff(config, Config.default())
        {'icon': {'max_icon_size': 64}}
    """
    diff: dict[str, Any] = {}
    for section in CONFIG_SECTIONS:
        current, default = getattr(config, section), getattr(defaults, section)
        changed = {
            f.name: str(value) if isinstance(value, Path) else value
            for f in fields(current)
            if (value := getattr(current, f.name)) != getattr(default, f.name)
        }
        if changed:
            diff[section] = changed
    return diff

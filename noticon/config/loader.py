"""Layered configuration loading: defaults, YAML file, CLI overrides, environment."""

import os
from dataclasses import asdict
from pathlib import Path
from typing import Any, Optional

from noticon.adapters.config.yaml_adapter import YAMLConfigRepository
from noticon.config.config import Config, IconConfig, SurfaceConfig, SystemConfig
from noticon.config.utils import CONFIG_SECTIONS, coerce_value, get_config_diff, get_field_type
from noticon.domain.exceptions import ConfigError

ENV_PREFIX = "NOTICON_"
DEFAULT_CONFIG_FILE = Path.home() / ".config" / "noticon" / "config.yaml"


class ConfigLoader:
    """Builds a Config from its layers; each later layer wins over the earlier ones."""

    def __init__(self, config_file: Optional[Path] = None) -> None:
        self.config_file = config_file or DEFAULT_CONFIG_FILE
        self.repo = YAMLConfigRepository(self.config_file)

    def load(self, cli_overrides: Optional[dict[str, Any]] = None) -> Config:
        """Load and validate the configuration.

        Args:
            cli_overrides: Section-keyed values taken from command-line options

        Returns:
            Config: The merged configuration

        Raises:
            ConfigError: If the file is unreadable or any layer holds invalid values
        """
        config = Config.default()
        for layer in (self.repo.load(), cli_overrides, self._load_from_env()):
            if layer:
                config = self.merge(config, layer)

        try:
            config.validate()
        except ValueError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e
        return config

    def save(self, config: Config, minimal: bool = True) -> None:
        """Write ``config`` to the file, only the non-default values when ``minimal``."""
        if minimal:
            self.repo.save(get_config_diff(config, Config.default()))
        else:
            self.repo.save(self.config_to_dict(config))

    def exists(self) -> bool:
        return self.repo.exists()

    def create_default(self) -> None:
        self.repo.create_default_config()

    def merge(self, base: Config, overrides: dict[str, Any]) -> Config:
        """Return a new Config with ``overrides`` laid over ``base``.

        Raises:
            ConfigError: If the overrides name unknown sections or fields
        """
        merged = self.config_to_dict(base)
        for section, values in overrides.items():
            if isinstance(values, dict) and section in merged:
                merged[section] = {**merged[section], **values}
            else:
                merged[section] = values
        return self.dict_to_config(merged)

    @staticmethod
    def config_to_dict(config: Config) -> dict[str, Any]:
        """Flatten a Config into plain data that YAML can store."""
        log_file = config.system.log_file
        return {
            "icon": asdict(config.icon),
            "surface": asdict(config.surface),
            "system": {**asdict(config.system), "log_file": str(log_file) if log_file else None},
        }

    @staticmethod
    def dict_to_config(config_dict: dict[str, Any]) -> Config:
        """Build a Config from section-keyed data.

        Raises:
            ConfigError: If a section is unknown, not a mapping, or holds unknown fields
        """
        unknown = sorted(set(config_dict) - set(CONFIG_SECTIONS))
        if unknown:
            raise ConfigError(f"Unknown config sections: {', '.join(unknown)}")
        for section, values in config_dict.items():
            if not isinstance(values, dict):
                raise ConfigError(f"Config section '{section}' must be a mapping")

        system = dict(config_dict.get("system", {}))
        if system.get("log_file") is not None:
            system["log_file"] = Path(system["log_file"])

        try:
            return Config(
                icon=IconConfig(**config_dict.get("icon", {})),
                surface=SurfaceConfig(**config_dict.get("surface", {})),
                system=SystemConfig(**system),
            )
        except TypeError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e

    def _load_from_env(self) -> dict[str, Any]:
        """Collect ``NOTICON_<SECTION>__<FIELD>`` variables, e.g. ``NOTICON_ICON__MAX_ICON_SIZE=48``.

        Variables that do not name a field are ignored.

        Raises:
            ConfigError: If a value does not fit its field's type
        """
        overrides: dict[str, Any] = {}
        for name, value in os.environ.items():
            if not name.startswith(ENV_PREFIX):
                continue
            section, sep, option = name[len(ENV_PREFIX) :].lower().partition("__")
            field_type = get_field_type(section, option) if sep else None
            if field_type is None:
                continue
            try:
                overrides.setdefault(section, {})[option] = coerce_value(value, field_type)
            except ValueError as e:
                raise ConfigError(f"Invalid value for {name}: {e}") from e
        return overrides

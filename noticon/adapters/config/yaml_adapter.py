"""Config file storage in YAML."""

from pathlib import Path
from typing import Any

import yaml

from noticon.domain.exceptions import ConfigError
from noticon.domain.ports import IConfigRepository

DEFAULT_FILE_HEADER = """\
# noticon configuration
#
# Only values that differ from the defaults are kept here.
#   noticon config list --all            show every key and its value
#   noticon config set <key> <value>     e.g. noticon config set icon.max_icon_size 48
#
# icon.icon_path lists directories, separated by ':', searched in order
# for <name>.svg, <name>.png and <name>.xpm.

"""


class YAMLConfigRepository(IConfigRepository):
    """Reads and writes the section-keyed config mapping as a YAML file."""

    def __init__(self, config_file: Path) -> None:
        self.config_file = config_file

    def load(self) -> dict[str, Any]:
        """Return the file's mapping, or an empty one when the file is missing or empty.

        Raises:
            ConfigError: If the file cannot be read or parsed, or is not a mapping
        """
        if not self.config_file.exists():
            return {}
        try:
            with self.config_file.open() as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse YAML config: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load config from {self.config_file}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {self.config_file} must contain a mapping")
        return data

    def save(self, config: dict[str, Any]) -> None:
        """Replace the file with ``config``.

        Raises:
            ConfigError: If the file cannot be written
        """
        self._write(yaml.safe_dump(config, default_flow_style=False, sort_keys=False, indent=2))

    def exists(self) -> bool:
        return self.config_file.exists()

    def create_default_config(self) -> None:
        """Write a file holding only a commented header."""
        self._write(DEFAULT_FILE_HEADER)

    def _write(self, text: str) -> None:
        try:
            self.config_file.parent.mkdir(parents=True, exist_ok=True)
            self.config_file.write_text(text)
        except OSError as e:
            raise ConfigError(f"Failed to write config to {self.config_file}: {e}") from e

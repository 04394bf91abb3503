"""Configuration management for noticon."""

from dataclasses import dataclass, field
from pathlib import Path

from noticon.domain.entities import IconSettings, SearchPath

DEFAULT_ICON_PATH = "/usr/share/icons/gnome/16x16/status/:/usr/share/icons/gnome/16x16/devices/"


@dataclass
class IconConfig:
    """Configuration for icon lookup and sizing."""

    icon_path: str = DEFAULT_ICON_PATH  # Colon-separated directories searched for icon names
    max_icon_size: int = 32  # Largest icon side in pixels (0 for unlimited)


@dataclass
class SurfaceConfig:
    """Configuration for surface conversion."""

    conversion: str = "png"  # Conversion route: png (encode/decode), direct (pixel copy)


@dataclass
class SystemConfig:
    """Logging defaults, used when no logging flag is given on the command line."""

    log_level: str = "WARNING"  # Log level: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: Path | None = None  # Also log to this file (None for stderr only)


@dataclass
class Config:
    """Main configuration container."""

    icon: IconConfig = field(default_factory=IconConfig)
    surface: SurfaceConfig = field(default_factory=SurfaceConfig)
    system: SystemConfig = field(default_factory=SystemConfig)

    @classmethod
    def default(cls) -> "Config":
        """Create a configuration with all default values."""
        return cls()

    def validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If any configuration value is invalid
        """
        if not isinstance(self.icon.icon_path, str):
            raise ValueError(f"icon_path must be a string, got {self.icon.icon_path!r}")

        if not isinstance(self.icon.max_icon_size, int) or isinstance(self.icon.max_icon_size, bool):
            raise ValueError(f"max_icon_size must be an integer, got {self.icon.max_icon_size!r}")
        if self.icon.max_icon_size < 0:
            raise ValueError(f"max_icon_size must be >= 0, got {self.icon.max_icon_size}")

        valid_conversions = {"png", "direct"}
        if self.surface.conversion not in valid_conversions:
            raise ValueError(
                f"Invalid conversion: {self.surface.conversion}. "
                f"Must be one of {valid_conversions}"
            )

        valid_log_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.system.log_level.upper() not in valid_log_levels:
            raise ValueError(
                f"Invalid log_level: {self.system.log_level}. Must be one of {valid_log_levels}"
            )

    def icon_settings(self) -> IconSettings:
        """Snapshot the icon section as the immutable settings the pipeline consumes."""
        return IconSettings(
            search_path=SearchPath(self.icon.icon_path),
            max_icon_size=self.icon.max_icon_size,
        )

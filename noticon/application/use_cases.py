"""Application use cases for noticon."""

import logging
from typing import Any, Protocol

import cairo

from noticon.application.factories import create_locator, create_pipeline
from noticon.config.config import Config
from noticon.domain.entities import IconIdentifier, IconSettings, RawImage, SearchPath
from noticon.domain.ports import RenderSurface
from noticon.domain.services import IconLocator

logger = logging.getLogger(__name__)


class NotificationLike(Protocol):
    """What the pipeline needs from a notification object."""

    raw_icon: RawImage | None
    icon: str | None


def resolve_notification_icon(
    identifier: IconIdentifier,
    search_path: SearchPath | str,
    max_dimension: int,
    conversion: str = "png",
) -> RenderSurface | None:
    """Resolve an icon identifier to a size-bounded cairo surface.

    Args:
        identifier: Inline raw image, icon path/URI/name, or None
        search_path: Directories searched for bare icon names
        max_dimension: Largest allowed icon side (0 = unlimited)
        conversion: Surface conversion route ("png" or "direct")

    Returns:
        Optional[RenderSurface]: Surface, or None when no icon is available
    """
    if isinstance(search_path, str):
        search_path = SearchPath(search_path)

    settings = IconSettings(search_path=search_path, max_icon_size=max_dimension)
    return create_pipeline(settings, conversion=conversion).resolve(identifier)


def icon_for_notification(
    notification: NotificationLike,
    settings: IconSettings,
    conversion: str = "png",
) -> RenderSurface | None:
    """Resolve the icon of a notification, preferring inline pixel data over the icon text.

    Args:
        notification: Object exposing ``raw_icon`` and ``icon``
        settings: Search path and size limit
        conversion: Surface conversion route

    Returns:
        Optional[RenderSurface]: Surface, or None when the notification has no usable icon
    """
    raw_icon = getattr(notification, "raw_icon", None)
    identifier: IconIdentifier = (
        raw_icon if raw_icon is not None else getattr(notification, "icon", None)
    )
    return create_pipeline(settings, conversion=conversion).resolve(identifier)


class ResolveIcon:
    """Use case for resolving a single icon with the configured settings."""

    def __init__(self, config: Config) -> None:
        """Initialize the use case.

        Args:
            config: Application configuration
        """
        self.config = config

    def execute(self, identifier: IconIdentifier) -> dict[str, Any]:
        """Resolve an icon and describe the result.

        Args:
            identifier: Icon path, URI, name or raw image

        Returns:
            dict: Result with ``found``, ``kind`` and, when found, surface details
        """
        settings = self.config.icon_settings()
        pipeline = create_pipeline(settings, conversion=self.config.surface.conversion)

        parsed = pipeline.locator.classify(identifier)
        logger.info("Resolving %s icon: %r", type(parsed).__name__, identifier)

        surface = pipeline.resolve(identifier)
        results: dict[str, Any] = {
            "found": surface is not None,
            "kind": type(parsed).__name__,
            "surface": surface,
        }
        if surface is not None:
            results.update(
                width=surface.get_width(),
                height=surface.get_height(),
                format=_format_name(surface.get_format()),
                stride=surface.get_stride(),
            )
        return results


class SearchIcon:
    """Use case for listing the candidate files for a bare icon name."""

    def __init__(self, config: Config, locator: IconLocator | None = None) -> None:
        """Initialize the use case.

        Args:
            config: Application configuration
            locator: Icon locator (created from defaults if None)
        """
        self.config = config
        self.locator = locator or create_locator()
        self.filesystem = self.locator.filesystem

    def execute(self, name: str) -> list[dict[str, Any]]:
        """List candidate paths in trial order.

        Args:
            name: Bare icon name

        Returns:
            list[dict]: One entry per candidate with ``path`` and ``readable``
        """
        search_path = self.config.icon_settings().search_path
        return [
            {"path": candidate, "readable": self.filesystem.is_readable(candidate)}
            for candidate in self.locator.iter_candidates(name, search_path)
        ]


def _format_name(surface_format: int) -> str:
    names = {
        cairo.FORMAT_ARGB32: "ARGB32",
        cairo.FORMAT_RGB24: "RGB24",
    }
    return names.get(surface_format, str(surface_format))

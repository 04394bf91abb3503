"""Core domain services for resolving notification icons."""

import logging
from collections.abc import Iterator

from noticon.domain.entities import (
    SUFFIXES,
    FileIcon,
    IconIdentifier,
    IconSettings,
    NamedIcon,
    NoIcon,
    ParsedIcon,
    PixelBuffer,
    RawIcon,
    RawImage,
    SearchPath,
)
from noticon.domain.exceptions import DecodeFailed, SurfaceError, UriResolutionFailed
from noticon.domain.ports import (
    IIconFileSystem,
    IPixelDecoder,
    IScaler,
    ISurfaceProducer,
    RenderSurface,
)

logger = logging.getLogger(__name__)

FILE_URI_PREFIX = "file://"


class IconLocator:
    """Service that turns an icon identifier into a decoded pixel buffer.

    Identifiers are classified once into a ``ParsedIcon`` variant; bare names are
    looked up in each search path directory with each known suffix, in order.
    """

    def __init__(self, decoder: IPixelDecoder, filesystem: IIconFileSystem) -> None:
        """Initialize the icon locator.

        Args:
            decoder: Pixel decoder used for files and inline data
            filesystem: Filesystem queries (readability, URI mapping)
        """
        self.decoder = decoder
        self.filesystem = filesystem

    def classify(self, identifier: IconIdentifier) -> ParsedIcon:
        """Classify an icon identifier.

        Args:
            identifier: Inline raw image, icon text, or None

        Returns:
            ParsedIcon: The variant the rest of the pipeline works with
        """
        if isinstance(identifier, RawImage):
            return RawIcon(identifier)
        if not identifier:
            return NoIcon()

        text = identifier
        if text.startswith(FILE_URI_PREFIX):
            try:
                text = self.filesystem.uri_to_path(text)
            except UriResolutionFailed as e:
                logger.debug("Treating %r as an icon name: %s", identifier, e)

        if text.startswith(("/", "~")):
            return FileIcon(text)
        return NamedIcon(text)

    def resolve(self, identifier: IconIdentifier, search_path: SearchPath) -> PixelBuffer | None:
        """Resolve an icon identifier to a pixel buffer.

        Args:
            identifier: Inline raw image, icon text, or None
            search_path: Directories searched for bare icon names

        Returns:
            Optional[PixelBuffer]: Decoded icon, or None if there is none or it cannot be loaded
        """
        parsed = self.classify(identifier)

        if isinstance(parsed, NoIcon):
            return None
        if isinstance(parsed, RawIcon):
            image = parsed.image
            if image.width <= 0 or image.height <= 0:
                logger.debug("Ignoring empty raw icon (%dx%d)", image.width, image.height)
                return None
            return self.decoder.decode_raw(image)
        if isinstance(parsed, FileIcon):
            try:
                return self.decoder.decode_file(parsed.path)
            except DecodeFailed as e:
                logger.debug("Could not load icon file %s: %s", parsed.path, e)
                return None
        return self.search(parsed.name, search_path)

    def search(self, name: str, search_path: SearchPath) -> PixelBuffer | None:
        """Look up a bare icon name in the search path.

        The first candidate that is readable and decodes wins. Candidates that are
        readable but fail to decode are skipped.

        Args:
            name: Bare icon name (no suffix)
            search_path: Directories to search, in order

        Returns:
            Optional[PixelBuffer]: Decoded icon, or None if no candidate worked
        """
        for candidate in self.iter_candidates(name, search_path):
            if not self.filesystem.is_readable(candidate):
                continue
            try:
                buffer = self.decoder.decode_file(candidate)
            except DecodeFailed as e:
                logger.debug("Skipping undecodable icon candidate %s: %s", candidate, e)
                continue
            logger.debug("Found icon '%s' at %s", name, candidate)
            return buffer

        logger.warning("No icon found in path: '%s'", name)
        return None

    @staticmethod
    def iter_candidates(name: str, search_path: SearchPath) -> Iterator[str]:
        """Yield the candidate file paths for a bare name in trial order.

        Args:
            name: Bare icon name
            search_path: Directories to search

        Yields:
            str: ``directory/name.suffix`` for each directory and suffix
        """
        for directory in search_path.directories():
            for suffix in SUFFIXES:
                yield f"{directory}/{name}{suffix}"


class IconPipeline:
    """Core service that orchestrates the locate → scale → surface pipeline."""

    def __init__(
        self,
        locator: IconLocator,
        scaler: IScaler,
        surface_producer: ISurfaceProducer,
        settings: IconSettings | None = None,
    ) -> None:
        """Initialize the icon pipeline.

        Args:
            locator: Icon locator
            scaler: Scaler bounding the icon size
            surface_producer: Converter to the rendering backend's surface type
            settings: Search path and size limit (uses defaults if None)
        """
        self.locator = locator
        self.scaler = scaler
        self.surface_producer = surface_producer
        self.settings = settings or IconSettings()

    def resolve(self, identifier: IconIdentifier) -> RenderSurface | None:
        """Resolve an icon identifier all the way to a render surface.

        Args:
            identifier: Inline raw image, icon text, or None

        Returns:
            Optional[RenderSurface]: Surface ready for painting, or None if no icon is available
        """
        buffer = self.locator.resolve(identifier, self.settings.search_path)
        if buffer is None:
            return None

        scaled = self.scaler.scale_to_limit(buffer, self.settings.max_icon_size)
        if scaled is not buffer:
            logger.debug(
                "Scaled icon from %dx%d to %dx%d (max_icon_size=%d)",
                buffer.width,
                buffer.height,
                scaled.width,
                scaled.height,
                self.settings.max_icon_size,
            )

        try:
            return self.surface_producer.to_surface(scaled)
        except SurfaceError as e:
            logger.warning("Failed to create icon surface: %s", e)
            return None

"""Port interfaces (contracts) for the noticon icon resolution pipeline.

These interfaces define the boundaries between the domain core and infrastructure adapters,
following the hexagonal architecture pattern.
"""

from abc import ABC, abstractmethod
from typing import Any

from noticon.domain.entities import PixelBuffer, RawImage

# Backend-specific renderable image (a cairo.ImageSurface for the shipped adapters)
RenderSurface = Any


class IIconFileSystem(ABC):
    """Port for the read-only filesystem queries the icon locator needs."""

    @abstractmethod
    def is_readable(self, path: str) -> bool:
        """Check whether a path names a file the process can read right now.

        Args:
            path: Filesystem path

        Returns:
            bool: True if the file exists and is readable
        """
        ...

    @abstractmethod
    def uri_to_path(self, uri: str) -> str:
        """Map a local file URI to a filesystem path.

        Args:
            uri: URI starting with ``file://``

        Returns:
            str: Absolute local path

        Raises:
            UriResolutionFailed: If the URI does not describe a local file
        """
        ...


class IPixelDecoder(ABC):
    """Port for turning image files and inline pixel data into pixel buffers."""

    @abstractmethod
    def decode_file(self, path: str) -> PixelBuffer:
        """Load and decode an image file.

        Args:
            path: Path to the image (``~`` is expanded)

        Returns:
            PixelBuffer: Decoded RGB or RGBA pixels

        Raises:
            DecodeFailed: If the file is missing, unreadable, corrupt or unsupported
        """
        ...

    @abstractmethod
    def decode_raw(self, raw_image: RawImage) -> PixelBuffer:
        """Build a pixel buffer from inline pixel data.

        Args:
            raw_image: Caller-owned raw image

        Returns:
            PixelBuffer: Buffer owning a packed copy of the pixels
        """
        ...


class IScaler(ABC):
    """Port for bounding the size of a pixel buffer."""

    @abstractmethod
    def scale_to_limit(self, buffer: PixelBuffer, max_dimension: int) -> PixelBuffer:
        """Resize a buffer so its larger side does not exceed ``max_dimension``.

        Args:
            buffer: Buffer to scale
            max_dimension: Largest allowed side in pixels (0 = unlimited)

        Returns:
            PixelBuffer: Scaled buffer, or the input itself when no scaling is needed
        """
        ...


class ISurfaceProducer(ABC):
    """Port for converting pixel buffers into the rendering backend's surface type."""

    @abstractmethod
    def to_surface(self, buffer: PixelBuffer) -> RenderSurface:
        """Convert a pixel buffer into a render surface.

        Args:
            buffer: Buffer to convert

        Returns:
            RenderSurface: Surface with the buffer's dimensions and pixels

        Raises:
            SurfaceError: If the backend rejects the data
        """
        ...


class IConfigRepository(ABC):
    """Port for loading and persisting configuration."""

    @abstractmethod
    def load(self) -> dict[str, Any]:
        """Load configuration from storage.

        Returns:
            dict: Configuration dictionary

        Raises:
            ConfigError: If loading fails
        """
        ...

    @abstractmethod
    def save(self, config: dict[str, Any]) -> None:
        """Save configuration to storage.

        Args:
            config: Configuration dictionary to save

        Raises:
            ConfigError: If saving fails
        """
        ...

    @abstractmethod
    def exists(self) -> bool:
        """Check if configuration exists in storage.

        Returns:
            bool: True if configuration exists
        """
        ...

"""Core domain entities for the noticon icon resolution pipeline."""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Union

# Per-directory trial order for bare icon names
SUFFIXES: tuple[str, ...] = (".svg", ".png", ".xpm")


@dataclass(frozen=True)
class RawImage:
    """Pixel data delivered inline with a notification (e.g. the image-data hint)."""

    width: int  # Width in pixels
    height: int  # Height in pixels
    rowstride: int  # Bytes between the start of two consecutive rows
    bits_per_sample: int  # Bits per colour sample (8 in practice)
    has_alpha: bool  # Whether each pixel carries an alpha sample
    data: bytes  # Row-major pixel data, at least rowstride * (height - 1) + last row

    @property
    def channels(self) -> int:
        """Number of samples per pixel."""
        return 4 if self.has_alpha else 3


@dataclass(frozen=True)
class PixelBuffer:
    """Decoded, uncompressed 8-bit RGB or RGBA raster with tightly packed rows."""

    width: int
    height: int
    channels: int  # 3 (RGB) or 4 (RGBA)
    data: bytes

    def __post_init__(self) -> None:
        """Validate the buffer layout."""
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Invalid dimensions: {self.width}x{self.height}")
        if self.channels not in (3, 4):
            raise ValueError(f"channels must be 3 or 4, got {self.channels}")
        expected = self.width * self.height * self.channels
        if len(self.data) != expected:
            raise ValueError(
                f"Pixel data length mismatch: expected {expected} bytes, got {len(self.data)}"
            )

    @property
    def has_alpha(self) -> bool:
        """Whether the buffer carries an alpha channel."""
        return self.channels == 4

    @property
    def mode(self) -> str:
        """Pixel layout name ("RGB" or "RGBA")."""
        return "RGBA" if self.has_alpha else "RGB"

    @property
    def stride(self) -> int:
        """Bytes per row."""
        return self.width * self.channels


@dataclass(frozen=True)
class SearchPath:
    """Ordered, colon-delimited list of directories searched for bare icon names."""

    value: str = ""

    def directories(self) -> Iterator[str]:
        """Yield the directories in order, splitting lazily.

        Empty segments (e.g. from a trailing colon) are yielded as empty strings,
        the same way ``str.split(":")`` would produce them.
        """
        start = 0
        while True:
            end = self.value.find(":", start)
            if end == -1:
                yield self.value[start:]
                return
            yield self.value[start:end]
            start = end + 1

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class IconSettings:
    """Immutable settings consumed by the icon pipeline."""

    search_path: SearchPath = SearchPath()
    max_icon_size: int = 0  # Largest allowed side in pixels (0 = unlimited)

    def __post_init__(self) -> None:
        """Validate icon settings."""
        if self.max_icon_size < 0:
            raise ValueError(f"max_icon_size must be >= 0, got {self.max_icon_size}")


@dataclass(frozen=True)
class NoIcon:
    """The notification did not specify an icon."""


@dataclass(frozen=True)
class RawIcon:
    """The icon was delivered as inline pixel data."""

    image: RawImage


@dataclass(frozen=True)
class FileIcon:
    """The icon is a direct filesystem path (absolute or ``~``-relative)."""

    path: str


@dataclass(frozen=True)
class NamedIcon:
    """The icon is a bare name to be searched for in the search path."""

    name: str


# Result of classifying an icon identifier once on entry to the locator
ParsedIcon = Union[NoIcon, RawIcon, FileIcon, NamedIcon]

# What callers may hand to the locator
IconIdentifier = Union[RawImage, str, None]

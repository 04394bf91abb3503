"""Shared fixtures for noticon tests."""

from collections.abc import Callable
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from noticon.adapters.fs.paths import uri_to_path
from noticon.domain.entities import PixelBuffer, RawImage
from noticon.domain.exceptions import DecodeFailed
from noticon.domain.ports import IIconFileSystem, IPixelDecoder

SVG_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}">
  <rect x="0" y="0" width="{width}" height="{height}" fill="#3366cc" fill-opacity="0.5"/>
</svg>
"""

XPM_CONTENT = """/* XPM */
static char * bell_xpm[] = {
"4 2 2 1",
"a c None",
"b c #FF0000",
"bbab",
"abba"};
"""


class RecordingFileSystem(IIconFileSystem):
    """Filesystem double that answers from a fixed set and records every query."""

    def __init__(self, readable: set[str] | None = None) -> None:
        self.readable = readable or set()
        self.checked: list[str] = []

    def is_readable(self, path: str) -> bool:
        self.checked.append(path)
        return path in self.readable

    def uri_to_path(self, uri: str) -> str:
        return uri_to_path(uri)


class RecordingDecoder(IPixelDecoder):
    """Decoder double that succeeds only for known paths and records every attempt."""

    def __init__(self, decodable: set[str] | None = None) -> None:
        self.decodable = decodable or set()
        self.decoded: list[str] = []
        self.raw_decoded: list[RawImage] = []

    def decode_file(self, path: str) -> PixelBuffer:
        self.decoded.append(path)
        if path not in self.decodable:
            raise DecodeFailed(f"cannot decode {path}")
        return PixelBuffer(width=2, height=1, channels=3, data=bytes(6))

    def decode_raw(self, raw_image: RawImage) -> PixelBuffer:
        self.raw_decoded.append(raw_image)
        return PixelBuffer(
            width=raw_image.width,
            height=raw_image.height,
            channels=raw_image.channels,
            data=bytes(raw_image.width * raw_image.height * raw_image.channels),
        )


@pytest.fixture
def write_png() -> Callable[..., Path]:
    """Write a solid-colour PNG and return its path."""

    def _write(
        path: Path,
        size: tuple[int, int] = (40, 20),
        mode: str = "RGBA",
        color: tuple[int, ...] = (200, 40, 10, 255),
    ) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        with Image.new(mode, size, color[: len(mode)]) as image:
            image.save(path, format="PNG")
        return path

    return _write


@pytest.fixture
def write_svg() -> Callable[..., Path]:
    """Write a simple SVG icon and return its path."""

    def _write(path: Path, width: int = 24, height: int = 16) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(SVG_TEMPLATE.format(width=width, height=height))
        return path

    return _write


@pytest.fixture
def write_xpm() -> Callable[[Path], Path]:
    """Write a 4x2 XPM icon with one transparent colour and return its path."""

    def _write(path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(XPM_CONTENT)
        return path

    return _write


@pytest.fixture
def gradient_buffer() -> Callable[..., PixelBuffer]:
    """Create a PixelBuffer with varied colours and (optionally) varied alpha."""

    def _make(width: int = 16, height: int = 8, channels: int = 4, seed: int = 7) -> PixelBuffer:
        rng = np.random.default_rng(seed)
        pixels = rng.integers(0, 256, size=(height, width, channels), dtype=np.uint8)
        if channels == 4:
            # Make sure the edge cases of premultiplication are present
            pixels[0, 0, 3] = 0
            pixels[0, 1, 3] = 255
            pixels[0, 2, 3] = 128
        return PixelBuffer(width=width, height=height, channels=channels, data=pixels.tobytes())

    return _make


@pytest.fixture
def recording_filesystem() -> type[RecordingFileSystem]:
    """Factory for filesystem doubles."""
    return RecordingFileSystem


@pytest.fixture
def recording_decoder() -> type[RecordingDecoder]:
    """Factory for decoder doubles."""
    return RecordingDecoder

"""Pixel decoder adapter backed by Pillow, with cairosvg for SVG icons."""

import io
import logging

import cairosvg
import numpy as np
from PIL import Image

from noticon.adapters.fs.paths import expand_path, extension_of
from noticon.adapters.imaging import buffer_from_image
from noticon.domain.entities import PixelBuffer, RawImage
from noticon.domain.exceptions import DecodeFailed
from noticon.domain.ports import IPixelDecoder

logger = logging.getLogger(__name__)


class PillowDecoder(IPixelDecoder):
    """Decodes icon files (PNG, XPM, SVG, and anything else Pillow reads) and inline pixel data."""

    SVG_EXTENSIONS = {"svg", "svgz"}

    def decode_file(self, path: str) -> PixelBuffer:
        """Load and decode an image file.

        SVG files are rasterised at their intrinsic size. For multi-frame
        formats only the first frame is used.

        Args:
            path: Path to the image (``~`` is expanded)

        Returns:
            PixelBuffer: RGBA if the source carries transparency, RGB otherwise

        Raises:
            DecodeFailed: If the file is missing, unreadable, corrupt or unsupported
        """
        resolved = expand_path(path)

        try:
            if extension_of(resolved).lower() in self.SVG_EXTENSIONS:
                buffer = self._decode_svg(resolved)
            else:
                buffer = self._decode_raster(resolved)
        except Exception as e:
            raise DecodeFailed(f"Failed to load image '{path}': {e}") from e

        logger.debug(
            "Decoded %s (%dx%d, %d channels)", path, buffer.width, buffer.height, buffer.channels
        )
        return buffer

    def decode_raw(self, raw_image: RawImage) -> PixelBuffer:
        """Build a pixel buffer from inline RGB/RGBA pixel data.

        Row padding (``rowstride`` beyond ``width * channels``) is dropped. A final
        row shorter than ``rowstride`` is accepted. 16-bit samples are reduced to
        their most significant byte.

        Args:
            raw_image: Caller-owned raw image

        Returns:
            PixelBuffer: Buffer owning a packed copy of the pixels
        """
        width, height = raw_image.width, raw_image.height
        channels = raw_image.channels
        bytes_per_sample = 2 if raw_image.bits_per_sample == 16 else 1
        row_bytes = width * channels * bytes_per_sample

        total = raw_image.rowstride * height
        data = raw_image.data
        if len(data) < total:
            # Some senders omit the padding after the last row
            data = data + bytes(total - len(data))

        rows = np.frombuffer(data, dtype=np.uint8, count=total).reshape(
            height, raw_image.rowstride
        )
        pixels = rows[:, :row_bytes]

        if bytes_per_sample == 2:
            samples = np.ascontiguousarray(pixels).view(np.dtype("=u2"))
            pixels = (samples >> 8).astype(np.uint8)

        return PixelBuffer(
            width=width,
            height=height,
            channels=channels,
            data=pixels.tobytes(),
        )

    def _decode_raster(self, path: str) -> PixelBuffer:
        with Image.open(path) as image:
            image.load()
            return buffer_from_image(image)

    def _decode_svg(self, path: str) -> PixelBuffer:
        png_bytes = cairosvg.svg2png(url=path)
        with io.BytesIO(png_bytes) as stream, Image.open(stream) as image:
            image.load()
            return buffer_from_image(image)

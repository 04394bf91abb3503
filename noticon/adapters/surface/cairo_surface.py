"""Surface producers that turn pixel buffers into cairo image surfaces."""

import io

import cairo
import numpy as np

from noticon.adapters.imaging import image_from_buffer
from noticon.domain.entities import PixelBuffer
from noticon.domain.exceptions import SurfaceError
from noticon.domain.ports import ISurfaceProducer


class PngSurfaceProducer(ISurfaceProducer):
    """Converts a buffer by encoding it as PNG and importing it with cairo's PNG reader.

    Going through PNG keeps the conversion independent of any windowing toolkit:
    cairo applies its own channel order and alpha premultiplication on import.
    """

    def to_surface(self, buffer: PixelBuffer) -> cairo.ImageSurface:
        """Convert a pixel buffer into a cairo image surface.

        Args:
            buffer: Buffer to convert

        Returns:
            cairo.ImageSurface: ARGB32 for RGBA buffers, RGB24 for RGB buffers

        Raises:
            SurfaceError: If encoding or importing fails
        """
        if buffer.width == 0 or buffer.height == 0:
            # PNG cannot hold an empty image
            return _empty_surface(buffer)

        try:
            with image_from_buffer(buffer) as image, io.BytesIO() as stream:
                image.save(stream, format="PNG")
                stream.seek(0)
                return cairo.ImageSurface.create_from_png(stream)
        except Exception as e:
            raise SurfaceError(
                f"Failed to convert {buffer.width}x{buffer.height} {buffer.mode} buffer "
                f"to a surface: {e}"
            ) from e


class DirectSurfaceProducer(ISurfaceProducer):
    """Converts a buffer by writing its pixels straight into a cairo image surface.

    Produces the same bytes as ``PngSurfaceProducer``: native-endian 32-bit pixels,
    colour premultiplied by alpha with cairo's rounding, and 0xff in the unused
    byte of RGB24 pixels.
    """

    def to_surface(self, buffer: PixelBuffer) -> cairo.ImageSurface:
        """Convert a pixel buffer into a cairo image surface.

        Args:
            buffer: Buffer to convert

        Returns:
            cairo.ImageSurface: ARGB32 for RGBA buffers, RGB24 for RGB buffers

        Raises:
            SurfaceError: If cairo cannot allocate the surface
        """
        surface = _empty_surface(buffer)
        if buffer.width == 0 or buffer.height == 0:
            return surface

        pixels = np.frombuffer(buffer.data, dtype=np.uint8).reshape(
            buffer.height, buffer.width, buffer.channels
        )
        packed = self._pack_argb(pixels)

        surface.flush()
        target = np.ndarray(
            shape=(buffer.height, surface.get_stride() // 4),
            dtype=np.uint32,
            buffer=surface.get_data(),
        )
        target[:, : buffer.width] = packed
        surface.mark_dirty()
        return surface

    @staticmethod
    def _pack_argb(pixels: np.ndarray) -> np.ndarray:
        channels = pixels.astype(np.uint32)
        red, green, blue = channels[..., 0], channels[..., 1], channels[..., 2]

        if pixels.shape[-1] == 4:
            alpha = channels[..., 3]
            red = _premultiply(red, alpha)
            green = _premultiply(green, alpha)
            blue = _premultiply(blue, alpha)
        else:
            alpha = np.full_like(red, 0xFF)

        return (alpha << 24) | (red << 16) | (green << 8) | blue


def _empty_surface(buffer: PixelBuffer) -> cairo.ImageSurface:
    surface_format = cairo.FORMAT_ARGB32 if buffer.has_alpha else cairo.FORMAT_RGB24
    try:
        return cairo.ImageSurface(surface_format, buffer.width, buffer.height)
    except cairo.Error as e:
        raise SurfaceError(f"Failed to allocate {buffer.width}x{buffer.height} surface: {e}") from e


def _premultiply(color: np.ndarray, alpha: np.ndarray) -> np.ndarray:
    # Same rounding as cairo's PNG reader: (a * c) / 255, rounded
    temp = alpha * color + 0x80
    return (temp + (temp >> 8)) >> 8

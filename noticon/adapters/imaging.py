"""Conversions between Pillow images and domain pixel buffers."""

import numpy as np
from PIL import Image

from noticon.domain.entities import PixelBuffer

# Modes that carry an alpha band
ALPHA_MODES = {"RGBA", "RGBa", "LA", "La", "PA"}

# Greyscale modes with more than 8 bits per sample (e.g. 16-bit PNGs)
WIDE_GREY_MODES = {"I", "I;16", "I;16B", "I;16L", "I;16N"}


def has_alpha(image: Image.Image) -> bool:
    """Check whether a Pillow image carries transparency (alpha band or palette key)."""
    return image.mode in ALPHA_MODES or "transparency" in image.info


def narrow_grey(image: Image.Image) -> Image.Image:
    """Reduce a 16-bit greyscale image to 8 bits by keeping the high byte of each sample.

    Pillow's own conversion clips every sample above 255 instead of rescaling.
    A single transparent grey level (PNG ``tRNS``) becomes an alpha band.

    Returns:
        Image.Image: "L" image, or "LA" when a transparent level was set
    """
    samples = np.asarray(image).astype(np.int64)
    grey = Image.fromarray((np.clip(samples, 0, 0xFFFF) >> 8).astype(np.uint8))

    transparency = image.info.get("transparency")
    if isinstance(transparency, int):
        alpha = np.where(samples == transparency, 0, 255).astype(np.uint8)
        grey.putalpha(Image.fromarray(alpha))
    return grey


def buffer_from_image(image: Image.Image) -> PixelBuffer:
    """Copy a Pillow image into a packed RGB or RGBA pixel buffer.

    Images in any other mode are converted first, keeping transparency when present.
    """
    if image.mode in WIDE_GREY_MODES:
        image = narrow_grey(image)

    target_mode = "RGBA" if has_alpha(image) else "RGB"
    if image.mode != target_mode:
        image = image.convert(target_mode)

    width, height = image.size
    return PixelBuffer(
        width=width,
        height=height,
        channels=len(target_mode),
        data=image.tobytes(),
    )


def image_from_buffer(buffer: PixelBuffer) -> Image.Image:
    """Create a Pillow image holding a copy of the buffer's pixels."""
    size = (buffer.width, buffer.height)
    if buffer.width == 0 or buffer.height == 0:
        return Image.new(buffer.mode, size)
    return Image.frombytes(buffer.mode, size, buffer.data)

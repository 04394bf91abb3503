"""Scaler adapter that bounds icon size with Pillow's bilinear filter."""

from PIL import Image

from noticon.adapters.imaging import buffer_from_image, image_from_buffer
from noticon.domain.entities import PixelBuffer
from noticon.domain.ports import IScaler


def scaled_size(width: int, height: int, max_dimension: int) -> tuple[int, int] | None:
    """Compute the aspect-preserving size that fits ``max_dimension``.

    Args:
        width: Current width
        height: Current height
        max_dimension: Largest allowed side (0 = unlimited)

    Returns:
        Optional[tuple[int, int]]: New (width, height), or None if no scaling is needed

    Examples:
        >>> scaled_size(200, 100, 64)
        (64, 32)
        >>> scaled_size(30, 90, 64)
        (21, 64)
        >>> scaled_size(48, 48, 64) is None
        True
    """
    if max_dimension <= 0 or width <= 0 or height <= 0:
        return None
    if max(width, height) <= max_dimension:
        return None

    if width >= height:
        new_width, new_height = max_dimension, (max_dimension * height) // width
    else:
        new_width, new_height = (max_dimension * width) // height, max_dimension

    # Extreme aspect ratios would otherwise collapse a side to zero
    return max(new_width, 1), max(new_height, 1)


class PillowScaler(IScaler):
    """Scales pixel buffers down to a maximum side length, preserving aspect ratio."""

    def __init__(self, resample: Image.Resampling = Image.Resampling.BILINEAR) -> None:
        """Initialize the scaler.

        Args:
            resample: Pillow resampling filter (must not be NEAREST)
        """
        if resample == Image.Resampling.NEAREST:
            raise ValueError("Nearest-neighbour resampling is not supported for icons")
        self.resample = resample

    def scale_to_limit(self, buffer: PixelBuffer, max_dimension: int) -> PixelBuffer:
        """Resize a buffer so its larger side does not exceed ``max_dimension``.

        Args:
            buffer: Buffer to scale
            max_dimension: Largest allowed side in pixels (0 = unlimited)

        Returns:
            PixelBuffer: Scaled buffer, or the input itself when no scaling is needed
        """
        size = scaled_size(buffer.width, buffer.height, max_dimension)
        if size is None:
            return buffer

        with image_from_buffer(buffer) as image:
            if buffer.has_alpha:
                # Resample premultiplied so transparent pixels don't bleed colour
                with image.convert("RGBa") as premultiplied:
                    with premultiplied.resize(size, self.resample) as resized:
                        return buffer_from_image(resized)
            with image.resize(size, self.resample) as resized:
                return buffer_from_image(resized)

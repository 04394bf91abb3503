"""Pixel buffer scaling adapters."""

from noticon.adapters.scaling.pillow_scaler import PillowScaler, scaled_size

__all__ = [
    "PillowScaler",
    "scaled_size",
]

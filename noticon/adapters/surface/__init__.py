"""Render surface adapters."""

from noticon.adapters.surface.cairo_surface import DirectSurfaceProducer, PngSurfaceProducer

__all__ = [
    "DirectSurfaceProducer",
    "PngSurfaceProducer",
]

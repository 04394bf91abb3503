"""Pixel decoding adapters."""

from noticon.adapters.decoding.pillow_decoder import PillowDecoder

__all__ = [
    "PillowDecoder",
]

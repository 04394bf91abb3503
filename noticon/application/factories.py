"""Factories for creating adapters with dependency injection."""

from noticon.adapters.decoding.pillow_decoder import PillowDecoder
from noticon.adapters.fs.local_filesystem import LocalFileSystem
from noticon.adapters.scaling.pillow_scaler import PillowScaler
from noticon.adapters.surface.cairo_surface import DirectSurfaceProducer, PngSurfaceProducer
from noticon.domain.entities import IconSettings
from noticon.domain.ports import IIconFileSystem, IPixelDecoder, IScaler, ISurfaceProducer
from noticon.domain.services import IconLocator, IconPipeline


def create_decoder() -> IPixelDecoder:
    """Create the pixel decoder adapter."""
    return PillowDecoder()


def create_filesystem() -> IIconFileSystem:
    """Create the filesystem adapter used for icon lookups."""
    return LocalFileSystem()


def create_scaler() -> IScaler:
    """Create the scaler adapter."""
    return PillowScaler()


def create_surface_producer(conversion: str = "png") -> ISurfaceProducer:
    """Create a surface producer for the requested conversion route.

    Args:
        conversion: "png" (encode/re-import through cairo) or "direct" (pixel copy)

    Returns:
        ISurfaceProducer: Surface producer adapter

    Raises:
        ValueError: If the conversion route is unknown
    """
    if conversion == "png":
        return PngSurfaceProducer()
    if conversion == "direct":
        return DirectSurfaceProducer()
    raise ValueError(f"Unknown surface conversion: {conversion}")


def create_locator() -> IconLocator:
    """Create an icon locator wired to the local filesystem."""
    return IconLocator(decoder=create_decoder(), filesystem=create_filesystem())


def create_pipeline(settings: IconSettings, conversion: str = "png") -> IconPipeline:
    """Create a complete icon pipeline.

    Args:
        settings: Search path and size limit
        conversion: Surface conversion route

    Returns:
        IconPipeline: Ready-to-use pipeline
    """
    return IconPipeline(
        locator=create_locator(),
        scaler=create_scaler(),
        surface_producer=create_surface_producer(conversion),
        settings=settings,
    )

"""Domain exceptions for the noticon icon resolution pipeline."""


class NoticonError(Exception):
    """Base exception for all noticon errors."""

    pass


class DecodeFailed(NoticonError):
    """Exception raised when an image file or stream cannot be decoded."""

    pass


class SurfaceError(DecodeFailed):
    """Exception raised when a pixel buffer cannot be turned into a render surface."""

    pass


class UriResolutionFailed(NoticonError):
    """Exception raised when a file URI cannot be mapped to a local path."""

    pass


class ConfigError(NoticonError):
    """Exception raised when configuration loading/saving fails."""

    pass

"""Exceptions raised by the carving engine and its I/O helpers."""


class SeamCarvingError(ValueError):
    """Base class for all seam carving failures."""


class InvalidRequestError(SeamCarvingError):
    """The requested number of columns cannot be removed from the image."""


class DegenerateGridError(SeamCarvingError):
    """The image (or energy grid) has zero height or zero width."""


class ImageFormatError(SeamCarvingError):
    """The source image is not an 8-bit RGB raster."""

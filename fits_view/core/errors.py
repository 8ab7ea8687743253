"""Exceptions raised by the display engine."""

from typing import Optional


class FitsViewError(Exception):
    """Base class for all fits_view errors."""


class BufferAllocationError(FitsViewError):
    """A pixel or scaled buffer could not be allocated.

    The operation that raised it is aborted and the previously committed
    buffers are left untouched.
    """

    def __init__(self, message: str, original_error: Optional[BaseException] = None):
        super().__init__(message)
        self.original_error = original_error


class InvalidCutRangeError(FitsViewError, ValueError):
    """Cut levels are unusable for the loaded image."""

    def __init__(self, low: float, high: float, image_min: float, image_max: float,
                 reason: str):
        super().__init__(
            f"Invalid cut range [{low:g}, {high:g}] for data range "
            f"[{image_min:g}, {image_max:g}]: {reason}"
        )
        self.low = low
        self.high = high
        self.image_min = image_min
        self.image_max = image_max
        self.reason = reason


class UnknownPaletteError(FitsViewError, ValueError):
    """The requested palette variant is not registered."""

    def __init__(self, variant: str, available=()):
        message = f"Unknown palette variant: {variant!r}"
        if available:
            message += f" (available: {', '.join(available)})"
        super().__init__(message)
        self.variant = variant


class FitsLoadError(FitsViewError):
    """A FITS file could not be turned into a pixel buffer."""

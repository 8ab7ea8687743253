"""Pixel buffer handed from the loader to the display engine."""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from fits_view.core.errors import BufferAllocationError, FitsLoadError


@dataclass(frozen=True)
class PixelBuffer:
    """Read-only 2-D image in double precision, row-major.

    Attributes:
        data: Array of shape (height, width), dtype float64, not writeable.
        width: Number of columns (NAXIS1).
        height: Number of rows (NAXIS2).
        min: Smallest finite pixel value.
        max: Largest finite pixel value.
        source: Optional file the pixels came from.
    """

    data: np.ndarray
    width: int
    height: int
    min: float
    max: float
    source: Optional[str] = None

    @property
    def npix(self) -> int:
        """Return the number of pixels (width * height)."""
        return self.width * self.height

    @property
    def shape(self) -> tuple:
        """Return (height, width), the numpy shape of the pixel array."""
        return (self.height, self.width)

    def finite_values(self) -> np.ndarray:
        """Return the finite pixel values as a flat array.

        Returns:
            1-D float64 array; the read-only flattened image itself when no
            NaN/inf is present, otherwise a filtered copy.
        """
        flat = self.data.ravel()
        finite = np.isfinite(flat)
        if finite.all():
            return flat
        return flat[finite]

    @classmethod
    def from_array(cls, array, source: Optional[str] = None) -> "PixelBuffer":
        """Build a buffer from any 2-D array-like, computing min/max once.

        Args:
            array: 2-D array-like of numbers
            source: Optional originating filename

        Returns:
            PixelBuffer owning a float64 copy of the data.

        Raises:
            FitsLoadError: If the array is not 2-D, is empty, or has no finite pixels.
            BufferAllocationError: If the float64 copy cannot be allocated.
        """
        try:
            data = np.array(array, dtype=np.float64, order='C', copy=True)
        except MemoryError as exc:
            raise BufferAllocationError(
                "Not enough memory for the pixel buffer", original_error=exc
            ) from exc

        if data.ndim != 2:
            raise FitsLoadError(f"Expected a 2-D image, got {data.ndim} dimension(s)")
        if data.size == 0:
            raise FitsLoadError("Image has no pixels")

        finite = data[np.isfinite(data)]
        if finite.size == 0:
            raise FitsLoadError("Image has no finite pixel values")

        data.flags.writeable = False
        height, width = data.shape
        return cls(
            data=data,
            width=int(width),
            height=int(height),
            min=float(finite.min()),
            max=float(finite.max()),
            source=source,
        )

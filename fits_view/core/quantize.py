"""Quantization of raw pixel values into 8-bit palette indices."""

import numpy as np

from fits_view.core.cuts import CutLevels
from fits_view.core.errors import BufferAllocationError

PALETTE_MAX_INDEX = 255


def round_half_away(values: np.ndarray) -> np.ndarray:
    """Round non-negative values to the nearest integer, ties going up.

    Args:
        values: Non-negative float array

    Returns:
        Float array of rounded values
    """
    floor = np.floor(values)
    return np.where(values - floor >= 0.5, floor + 1.0, floor)


def quantize_image(data: np.ndarray, cuts: CutLevels) -> np.ndarray:
    """
    Map raw pixel values through the cut window onto indices 0-255.

    Pixels at or below ``cuts.low`` become 0, pixels at or above
    ``cuts.high`` become 255, the rest are scaled linearly and rounded half
    away from zero. NaN pixels become 0; infinities clamp like any
    other out-of-window value.

    Args:
        data: Raw pixel array (any shape, any real dtype)
        cuts: Cut levels with low < high

    Returns:
        New uint8 array with the shape of ``data``

    Raises:
        BufferAllocationError: If the output or a temporary buffer cannot be
            allocated; nothing is returned in that case.
    """
    low, high = float(cuts.low), float(cuts.high)
    span = high - low

    try:
        values = np.asarray(data, dtype=np.float64)
        scaled = np.zeros(values.shape, dtype=np.uint8)

        inside = (values > low) & (values < high)
        t = (values[inside] - low) / span * PALETTE_MAX_INDEX
        scaled[inside] = np.clip(round_half_away(t), 0, PALETTE_MAX_INDEX).astype(np.uint8)
        scaled[values >= high] = PALETTE_MAX_INDEX
    except MemoryError as exc:
        raise BufferAllocationError(
            f"Not enough memory to quantize {np.size(data)} pixels", original_error=exc
        ) from exc

    return scaled

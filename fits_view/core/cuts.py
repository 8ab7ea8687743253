"""Display cut levels derived from robust image statistics."""

import math
from dataclasses import dataclass, replace
from typing import Optional

from fits_view.core.errors import InvalidCutRangeError
from fits_view.core.statistics import RobustEstimate

DEFAULT_LOW_SIGMA = 2.0
DEFAULT_HIGH_SIGMA = 5.0


@dataclass(frozen=True)
class SigmaMultipliers:
    """How many sigmas below/above the median the cuts are placed.

    The defaults are asymmetric: sky-dominated frames have a faint
    background and a sparse bright tail, so the high cut sits farther out.
    Values that are not finite and positive are replaced by the defaults.
    """

    low: float = DEFAULT_LOW_SIGMA
    high: float = DEFAULT_HIGH_SIGMA

    def __post_init__(self):
        low = float(self.low) if _is_positive(self.low) else DEFAULT_LOW_SIGMA
        high = float(self.high) if _is_positive(self.high) else DEFAULT_HIGH_SIGMA
        object.__setattr__(self, 'low', low)
        object.__setattr__(self, 'high', high)

    def updated(self, low: Optional[float] = None,
                high: Optional[float] = None) -> "SigmaMultipliers":
        """Return a copy with new multipliers; non-positive values are ignored.

        Args:
            low: New low multiplier, or None to keep the current one
            high: New high multiplier, or None to keep the current one

        Returns:
            A new SigmaMultipliers instance
        """
        changes = {}
        if low is not None and _is_positive(low):
            changes['low'] = float(low)
        if high is not None and _is_positive(high):
            changes['high'] = float(high)
        return replace(self, **changes)


@dataclass(frozen=True)
class CutLevels:
    """Low/high raw values bounding the displayed range."""

    low: float
    high: float

    @property
    def width(self) -> float:
        """Return high - low."""
        return self.high - self.low

    def as_tuple(self) -> tuple:
        """Return (low, high)."""
        return (self.low, self.high)


def _is_positive(value) -> bool:
    try:
        value = float(value)
    except (TypeError, ValueError):
        return False
    return math.isfinite(value) and value > 0.0


def compute_cuts(estimate: RobustEstimate,
                 multipliers: SigmaMultipliers = SigmaMultipliers()) -> Optional[CutLevels]:
    """
    Turn a robust estimate into unclamped cut levels.

    Args:
        estimate: Output of robust_sigma
        multipliers: Sigma multipliers for the low and high cut

    Returns:
        CutLevels(median - low*sigma, median + high*sigma), or None when the
        estimate is degenerate so the caller can fall back to the full range.
    """
    if not estimate.valid:
        return None
    return CutLevels(
        low=estimate.median - multipliers.low * estimate.sigma,
        high=estimate.median + multipliers.high * estimate.sigma,
    )


def validate_cuts(low: float, high: float, image_min: float, image_max: float) -> CutLevels:
    """
    Check requested cuts against the image range and clamp them into it.

    Args:
        low: Requested low cut
        high: Requested high cut
        image_min: Smallest pixel value of the image
        image_max: Largest pixel value of the image

    Returns:
        CutLevels with image_min <= low < high <= image_max

    Raises:
        InvalidCutRangeError: If the cuts are not finite, low >= high, the
            window lies entirely outside the data range, or it has zero
            width after clamping.
    """
    low = float(low)
    high = float(high)

    if not (math.isfinite(low) and math.isfinite(high)):
        raise InvalidCutRangeError(low, high, image_min, image_max, "cuts must be finite")
    if low >= high:
        raise InvalidCutRangeError(low, high, image_min, image_max,
                                   "low cut must be below high cut")
    if low >= image_max:
        raise InvalidCutRangeError(low, high, image_min, image_max,
                                   "low cut is above the image maximum")
    if high <= image_min:
        raise InvalidCutRangeError(low, high, image_min, image_max,
                                   "high cut is below the image minimum")

    clamped = CutLevels(low=max(low, image_min), high=min(high, image_max))
    if clamped.low >= clamped.high:
        raise InvalidCutRangeError(low, high, image_min, image_max,
                                   "cut window has zero width within the data range")
    return clamped

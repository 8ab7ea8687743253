"""Outlier-resistant location and scale estimates for pixel samples.

Astronomical frames are dominated by sky background with a heavy bright
tail (stars, cosmic rays, hot pixels). The estimators here use the median
for location and Tukey's biweight midvariance, seeded by the median
absolute deviation, for scale.
"""

from dataclasses import dataclass

import numpy as np

# Below this a scale estimate is treated as zero.
EPSILON = 1.0e-20

# MAD of a unit Gaussian.
MAD_TO_SIGMA = 0.6745

# Mean absolute deviation of a unit Gaussian, rounded.
MEAN_AD_TO_SIGMA = 0.8

# Biweight tuning constant, in units of the scaled MAD.
BIWEIGHT_C = 6.0

MIN_INLIERS = 3


@dataclass(frozen=True)
class RobustEstimate:
    """Result of :func:`robust_sigma`.

    Attributes:
        median: Sample median.
        sigma: Biweight sigma, 0.0 when the estimate is degenerate.
        valid: False when the spread could not be estimated.
        n_inliers: Points that survived the biweight cut.
    """

    median: float
    sigma: float
    valid: bool
    n_inliers: int = 0

    @property
    def degenerate(self) -> bool:
        """Return True if no usable sigma was produced."""
        return not self.valid


def median(values: np.ndarray) -> float:
    """
    Median of a non-empty sample.

    Middle element of the sorted sample, or the mean of the two central
    elements for an even count.

    Args:
        values: 1-D array-like of numbers

    Returns:
        The median as a float
    """
    ordered = np.sort(np.asarray(values, dtype=np.float64).ravel())
    n = ordered.size
    if n == 0:
        raise ValueError("median of an empty sample")
    half = n // 2
    if n % 2 == 1:
        return float(ordered[half])
    return float((ordered[half - 1] + ordered[half]) / 2.0)


def robust_sigma(sample: np.ndarray) -> RobustEstimate:
    """
    Estimate median and biweight sigma of a sample.

    Steps:
    1. median of the sample
    2. MAD, scaled by 1/0.6745; if that is below 1e-20, the mean absolute
       deviation scaled by 1/0.8 is used instead
    3. u2 = (d / (6 * scale))**2 per point, inliers have u2 <= 1
    4. sigma**2 = n_in * sum(d**2 (1-u2)**4) / (D * (D - 1)),
       D = sum((1-u2)(1-5 u2)) over the inliers

    The caller's array is never modified.

    Args:
        sample: Non-empty 1-D array of finite values

    Returns:
        RobustEstimate; ``valid`` is False with ``sigma == 0`` when the
        distribution is degenerate (zero spread, fewer than three inliers,
        or a non-positive variance).
    """
    values = np.asarray(sample, dtype=np.float64).ravel()
    if values.size == 0:
        raise ValueError("robust_sigma needs a non-empty sample")

    med = median(values)
    deviations = values - med
    abs_dev = np.abs(deviations)

    scale = median(abs_dev) / MAD_TO_SIGMA
    if scale < EPSILON:
        scale = float(abs_dev.mean()) / MEAN_AD_TO_SIGMA
        if scale < EPSILON:
            return RobustEstimate(median=med, sigma=0.0, valid=False)

    u2 = (deviations / (BIWEIGHT_C * scale)) ** 2
    inliers = u2 <= 1.0
    n_in = int(np.count_nonzero(inliers))
    if n_in < MIN_INLIERS:
        return RobustEstimate(median=med, sigma=0.0, valid=False, n_inliers=n_in)

    d_in = deviations[inliers]
    w = 1.0 - u2[inliers]
    numerator = np.sum(d_in ** 2 * w ** 4)
    denominator = np.sum(w * (1.0 - 5.0 * u2[inliers]))

    norm = float(denominator * (denominator - 1.0))
    if norm == 0.0:
        return RobustEstimate(median=med, sigma=0.0, valid=False, n_inliers=n_in)

    variance = n_in * float(numerator) / norm
    if not np.isfinite(variance) or variance <= 0.0:
        return RobustEstimate(median=med, sigma=0.0, valid=False, n_inliers=n_in)

    return RobustEstimate(median=med, sigma=float(np.sqrt(variance)), valid=True,
                          n_inliers=n_in)

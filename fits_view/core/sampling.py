"""Random sub-sampling of large pixel populations."""

from typing import Optional, Union

import numpy as np

SeedLike = Union[None, int, np.random.Generator]


def make_rng(seed: SeedLike = None) -> np.random.Generator:
    """Return a numpy Generator for the given seed.

    Args:
        seed: None for fresh OS entropy, an int for a reproducible stream,
              or an existing Generator which is returned as-is.
    """
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(seed)


def random_sample(population: np.ndarray, size: int,
                  rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """
    Draw ``size`` values uniformly from ``population``, with replacement.

    Indices are drawn from [0, N-1]. The result always has exactly ``size``
    elements, so a small population is over-sampled.

    Args:
        population: 1-D array of values (must not be empty)
        size: Number of values to draw
        rng: Random generator; a fresh unseeded one is used if None

    Returns:
        New float64 array of length ``size``
    """
    population = np.asarray(population, dtype=np.float64).ravel()
    if population.size == 0:
        raise ValueError("Cannot sample from an empty population")
    if size < 0:
        raise ValueError(f"Sample size must be non-negative, got {size}")

    rng = make_rng(rng)
    indices = rng.integers(0, population.size, size=size)
    return population[indices]

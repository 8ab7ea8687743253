"""Tests for sampling module."""

import pytest
import numpy as np

from fits_view.core.sampling import make_rng, random_sample


class TestRandomSample:
    """Tests for random_sample function."""

    def test_oversamples_small_population(self):
        """Test that M > N still yields exactly M values from the population."""
        population = np.array([1.0, 2.0, 3.0, 4.0, 5.0])
        result = random_sample(population, 10, rng=np.random.default_rng(0))

        assert len(result) == 10
        assert set(result).issubset(set(population))

    def test_returns_requested_size(self, sky_image):
        """Test sampling a large population."""
        result = random_sample(sky_image.ravel(), 1000, rng=np.random.default_rng(1))
        assert result.shape == (1000,)

    def test_never_reads_past_the_end(self):
        """Test that the last index is reachable but nothing beyond it."""
        population = np.array([0.0, 1.0])
        result = random_sample(population, 5000, rng=np.random.default_rng(3))

        assert set(np.unique(result)) == {0.0, 1.0}

    def test_seeded_is_reproducible(self, sky_image):
        """Test that the same seed gives the same sample."""
        a = random_sample(sky_image.ravel(), 100, rng=np.random.default_rng(5))
        b = random_sample(sky_image.ravel(), 100, rng=np.random.default_rng(5))
        np.testing.assert_array_equal(a, b)

    def test_does_not_modify_population(self):
        """Test that the input is left untouched."""
        population = np.array([3.0, 1.0, 2.0])
        random_sample(population, 10, rng=np.random.default_rng(0))
        np.testing.assert_array_equal(population, [3.0, 1.0, 2.0])

    def test_zero_size(self):
        """Test that a zero-size request returns an empty array."""
        result = random_sample(np.array([1.0, 2.0]), 0)
        assert result.size == 0

    def test_empty_population_raises(self):
        """Test that sampling an empty population is rejected."""
        with pytest.raises(ValueError):
            random_sample(np.array([]), 10)

    def test_negative_size_raises(self):
        """Test that a negative size is rejected."""
        with pytest.raises(ValueError):
            random_sample(np.array([1.0]), -1)


class TestMakeRng:
    """Tests for make_rng function."""

    def test_passes_generator_through(self):
        """Test that an existing Generator is reused."""
        gen = np.random.default_rng(0)
        assert make_rng(gen) is gen

    def test_int_seed(self):
        """Test that integer seeds are deterministic."""
        assert make_rng(9).integers(0, 1000) == make_rng(9).integers(0, 1000)

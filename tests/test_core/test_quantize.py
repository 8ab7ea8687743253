"""Tests for quantization module."""

import pytest
import numpy as np
from unittest.mock import patch

from fits_view.core.cuts import CutLevels
from fits_view.core.errors import BufferAllocationError
from fits_view.core.quantize import quantize_image, round_half_away


class TestRoundHalfAway:
    """Tests for round_half_away function."""

    def test_ties_round_up(self):
        """Test that .5 rounds away from zero rather than to even."""
        result = round_half_away(np.array([0.5, 1.5, 2.5, 254.5]))
        np.testing.assert_array_equal(result, [1.0, 2.0, 3.0, 255.0])

    def test_non_ties(self):
        """Test ordinary rounding."""
        result = round_half_away(np.array([0.49, 0.51, 3.2, 3.8]))
        np.testing.assert_array_equal(result, [0.0, 1.0, 3.0, 4.0])


class TestQuantizeImage:
    """Tests for quantize_image function."""

    def test_output_is_uint8(self, sky_image):
        """Test output dtype and shape."""
        result = quantize_image(sky_image, CutLevels(960.0, 1100.0))
        assert result.dtype == np.uint8
        assert result.shape == sky_image.shape

    def test_endpoints(self):
        """Test that low maps to 0 and high maps to 255."""
        result = quantize_image(np.array([10.0, 20.0]), CutLevels(10.0, 20.0))
        assert result.tolist() == [0, 255]

    def test_clamps_outside_window(self):
        """Test that values beyond the cuts saturate."""
        result = quantize_image(np.array([-1e9, 9.0, 21.0, 1e9]), CutLevels(10.0, 20.0))
        assert result.tolist() == [0, 0, 255, 255]

    def test_linear_mapping(self):
        """Test the scaled values inside the window."""
        data = np.array([0.0, 0.5, 1.0, 2.0, 4.0])
        result = quantize_image(data, CutLevels(0.0, 4.0))
        # 255 * [0, .125, .25, .5, 1] = [0, 31.875, 63.75, 127.5, 255]
        assert result.tolist() == [0, 32, 64, 128, 255]

    def test_monotonic(self):
        """Test that larger input never gives a smaller index."""
        data = np.linspace(-10.0, 110.0, 10001)
        result = quantize_image(data, CutLevels(0.0, 100.0))
        assert np.all(np.diff(result.astype(int)) >= 0)

    def test_idempotent(self, sky_with_stars):
        """Test that repeated quantization is byte-identical."""
        cuts = CutLevels(950.0, 1200.0)
        first = quantize_image(sky_with_stars, cuts)
        second = quantize_image(sky_with_stars, cuts)
        assert first.tobytes() == second.tobytes()

    def test_does_not_modify_input(self, gradient_image):
        """Test that the raw pixels are left alone."""
        original = gradient_image.copy()
        quantize_image(gradient_image, CutLevels(2.0, 15.0))
        np.testing.assert_array_equal(gradient_image, original)

    def test_non_finite_pixels(self):
        """Test NaN maps to 0 and infinities clamp."""
        data = np.array([np.nan, -np.inf, np.inf, 5.0])
        result = quantize_image(data, CutLevels(0.0, 10.0))
        assert result.tolist() == [0, 0, 255, 128]

    def test_allocation_failure(self, gradient_image):
        """Test that a MemoryError is reported as BufferAllocationError."""
        with patch('fits_view.core.quantize.np.zeros', side_effect=MemoryError):
            with pytest.raises(BufferAllocationError) as exc_info:
                quantize_image(gradient_image, CutLevels(0.0, 19.0))
        assert isinstance(exc_info.value.original_error, MemoryError)

"""Tests for image export module."""

import pytest
import numpy as np
import cv2

from fits_view.core.palettes import generate_palette
from fits_view.io.export import render_rgb, save_png


@pytest.fixture
def scaled():
    """2x3 index image."""
    return np.array([[0, 128, 255], [10, 20, 30]], dtype=np.uint8)


class TestRenderRgb:
    """Tests for render_rgb function."""

    def test_grayscale_lookup(self, scaled):
        """Test grayscale indices become equal RGB levels."""
        rgb = render_rgb(scaled, generate_palette('grayscale'))
        assert rgb.shape == (2, 3, 3)
        assert rgb.dtype == np.uint8
        assert tuple(rgb[0, 1]) == (128, 128, 128)

    def test_negative_lookup(self, scaled):
        """Test the inverted palette."""
        rgb = render_rgb(scaled, generate_palette('negative'))
        assert tuple(rgb[0, 0]) == (255, 255, 255)
        assert tuple(rgb[0, 2]) == (0, 0, 0)

    def test_raw_color_array(self, scaled):
        """Test a plain (256, 3) array works as palette."""
        colors = np.zeros((256, 3), dtype=np.uint8)
        colors[:, 0] = 200
        rgb = render_rgb(scaled, colors)
        assert np.all(rgb[..., 0] == 200)


class TestSavePng:
    """Tests for save_png function."""

    def test_writes_file(self, scaled, temp_output_dir):
        """Test a PNG is written with the image size."""
        path = save_png(temp_output_dir / "out.png", scaled, generate_palette('grayscale'))
        img = cv2.imread(str(path), cv2.IMREAD_COLOR)
        assert img.shape == (2, 3, 3)

    def test_lower_origin_flips_rows(self, scaled, temp_output_dir):
        """Test FITS row 0 ends up at the bottom of the PNG."""
        path = save_png(temp_output_dir / "out.png", scaled, generate_palette('grayscale'))
        img = cv2.imread(str(path), cv2.IMREAD_GRAYSCALE)
        np.testing.assert_array_equal(img, scaled[::-1])

    def test_upper_origin(self, scaled, temp_output_dir):
        """Test array order is kept with origin='upper'."""
        path = save_png(temp_output_dir / "out.png", scaled, generate_palette('grayscale'),
                        origin='upper')
        img = cv2.imread(str(path), cv2.IMREAD_GRAYSCALE)
        np.testing.assert_array_equal(img, scaled)

    def test_channel_order(self, temp_output_dir):
        """Test RGB palette colors are stored correctly despite BGR I/O."""
        colors = np.zeros((256, 3), dtype=np.uint8)
        colors[:, 0] = 255  # pure red
        path = save_png(temp_output_dir / "red.png", np.zeros((2, 2), dtype=np.uint8), colors)
        img = cv2.imread(str(path), cv2.IMREAD_COLOR)
        assert tuple(img[0, 0]) == (0, 0, 255)

    def test_creates_parent_directories(self, scaled, temp_output_dir):
        """Test that parent directories are created."""
        path = temp_output_dir / "a" / "b" / "out.png"
        save_png(path, scaled, generate_palette('negative'))
        assert path.exists()

    def test_bad_origin(self, scaled, temp_output_dir):
        """Test an unknown origin is rejected."""
        with pytest.raises(ValueError):
            save_png(temp_output_dir / "out.png", scaled, generate_palette('grayscale'),
                     origin='middle')

"""Shared pytest fixtures for FITS View tests."""

import pytest
import numpy as np
from pathlib import Path
import tempfile

from astropy.io import fits


# =============================================================================
# Image Fixtures
# =============================================================================

SKY_LEVEL = 1000.0
SKY_SIGMA = 20.0


@pytest.fixture
def rng():
    """Seeded random generator for reproducible test data."""
    return np.random.default_rng(42)


@pytest.fixture
def sky_image(rng):
    """256x256 Gaussian sky background (mean 1000, sigma 20)."""
    return rng.normal(SKY_LEVEL, SKY_SIGMA, size=(256, 256))


@pytest.fixture
def sky_with_stars(sky_image, rng):
    """Sky background with bright point sources and a few hot pixels."""
    img = sky_image.copy()
    h, w = img.shape
    ys = rng.integers(0, h, size=40)
    xs = rng.integers(0, w, size=40)
    img[ys, xs] += rng.uniform(5000, 50000, size=40)
    # Cold bad column
    img[:, 10] = 0.0
    return img


@pytest.fixture
def gradient_image():
    """Small 4x5 image with values 0..19 in row-major order."""
    return np.arange(20, dtype=np.float64).reshape(4, 5)


@pytest.fixture
def constant_image():
    """Image where every pixel has the same value."""
    return np.full((32, 32), 7.5)


# =============================================================================
# File System Fixtures
# =============================================================================

@pytest.fixture
def temp_output_dir():
    """Create temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_fits_file(temp_output_dir, sky_with_stars):
    """Write the star field to a primary-HDU FITS file."""
    path = temp_output_dir / "field.fits"
    fits.PrimaryHDU(data=sky_with_stars.astype(np.float32)).writeto(path)
    return path


@pytest.fixture
def temp_constant_fits(temp_output_dir, constant_image):
    """FITS file holding a constant image."""
    path = temp_output_dir / "flat.fits"
    fits.PrimaryHDU(data=constant_image).writeto(path)
    return path


# =============================================================================
# Configuration Fixtures
# =============================================================================

@pytest.fixture
def sample_config():
    """Sample configuration dictionary."""
    return {
        'cuts': {
            'low_sigma': 3.0,
            'high_sigma': 8.0,
        },
        'sampling': {
            'max_sample_length': 5000,
            'seed': 7,
        },
        'palette': 'grayscale',
    }


@pytest.fixture
def temp_config_file(temp_output_dir, sample_config):
    """Create a temporary config YAML file."""
    import yaml
    config_path = temp_output_dir / "config.yaml"
    with open(config_path, 'w') as f:
        yaml.dump(sample_config, f)
    return config_path


@pytest.fixture(scope="session", autouse=True)
def status_logger():
    """Create the shared logger once so its handler is bound to the session stdout."""
    from fits_view.core.logging_utils import get_logger
    return get_logger()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep FITSVIEW_* variables from the caller's shell out of the tests."""
    for var in ('FITSVIEW_LOW_SIGMA', 'FITSVIEW_HIGH_SIGMA', 'FITSVIEW_MAX_SAMPLE_LENGTH',
                'FITSVIEW_SEED', 'FITSVIEW_PALETTE', 'FITSVIEW_OUTPUT_FOLDER'):
        monkeypatch.delenv(var, raising=False)


# =============================================================================
# Skip Markers
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "benchmark: mark test as a performance benchmark"
    )

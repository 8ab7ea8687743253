"""
FITS View

Automatic display cuts and 8-bit scaling for astronomical FITS images:
robust (biweight) background statistics, sigma-based cut levels, and
quantization onto a 256-entry palette.
"""

__version__ = "0.1.0"
__author__ = "FITS View Contributors"

__all__ = [
    "DisplayEngine",
    "load_fits",
    "robust_sigma",
    "quantize_image",
    "generate_palette",
]


def __getattr__(name):
    """Lazy import for heavy modules to speed up CLI startup."""
    if name == "DisplayEngine":
        from fits_view.core.engine import DisplayEngine
        return DisplayEngine
    elif name == "load_fits":
        from fits_view.core.image_loader import load_fits
        return load_fits
    elif name == "robust_sigma":
        from fits_view.core.statistics import robust_sigma
        return robust_sigma
    elif name == "quantize_image":
        from fits_view.core.quantize import quantize_image
        return quantize_image
    elif name == "generate_palette":
        from fits_view.core.palettes import generate_palette
        return generate_palette
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

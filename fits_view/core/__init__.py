"""Core cut-level estimation and scaling."""

from fits_view.core.buffers import PixelBuffer
from fits_view.core.sampling import random_sample
from fits_view.core.statistics import RobustEstimate, median, robust_sigma
from fits_view.core.cuts import CutLevels, SigmaMultipliers, compute_cuts, validate_cuts
from fits_view.core.quantize import quantize_image
from fits_view.core.palettes import Palette, generate_palette, register_palette
from fits_view.core.image_loader import load_fits, get_fits_files
from fits_view.core.engine import DisplayEngine, DisplayFrame, EngineState

__all__ = [
    "PixelBuffer",
    "random_sample",
    "RobustEstimate",
    "median",
    "robust_sigma",
    "CutLevels",
    "SigmaMultipliers",
    "compute_cuts",
    "validate_cuts",
    "quantize_image",
    "Palette",
    "generate_palette",
    "register_palette",
    "load_fits",
    "get_fits_files",
    "DisplayEngine",
    "DisplayFrame",
    "EngineState",
]

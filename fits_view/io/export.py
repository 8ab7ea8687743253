"""Palette application and image export."""

from pathlib import Path
from typing import Union

import cv2
import numpy as np

from fits_view.core.palettes import Palette

ORIGINS = ('lower', 'upper')


def render_rgb(scaled: np.ndarray, palette: Union[Palette, np.ndarray]) -> np.ndarray:
    """
    Look up every index of a scaled image in a palette.

    Args:
        scaled: uint8 index image of shape (height, width)
        palette: Palette or (256, 3) uint8 array

    Returns:
        RGB image (uint8, shape (height, width, 3))
    """
    colors = palette.colors if isinstance(palette, Palette) else np.asarray(palette, dtype=np.uint8)
    return colors[np.asarray(scaled, dtype=np.uint8)]


def save_png(output_path: Path, scaled: np.ndarray, palette: Union[Palette, np.ndarray],
             origin: str = 'lower') -> Path:
    """
    Save a scaled image as PNG through its palette.

    FITS row 0 is the bottom of the image, so with ``origin='lower'`` rows
    are flipped before writing.

    Args:
        output_path: Path to output PNG file
        scaled: uint8 index image of shape (height, width)
        palette: Palette or (256, 3) uint8 array
        origin: 'lower' (FITS convention) or 'upper' (array order)

    Returns:
        The written path
    """
    if origin not in ORIGINS:
        raise ValueError(f"origin must be one of {ORIGINS}, got {origin!r}")

    rgb = render_rgb(scaled, palette)
    if origin == 'lower':
        rgb = rgb[::-1]

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    # OpenCV expects BGR channel order
    bgr = cv2.cvtColor(np.ascontiguousarray(rgb), cv2.COLOR_RGB2BGR)
    if not cv2.imwrite(str(output_path), bgr):
        raise OSError(f"Could not write image to {output_path}")
    return output_path

"""I/O utilities for rendered images and cut metadata."""

from fits_view.io.export import render_rgb, save_png
from fits_view.io.metadata import (
    frame_metadata,
    save_cut_metadata,
    load_cut_metadata,
)

__all__ = [
    "render_rgb",
    "save_png",
    "frame_metadata",
    "save_cut_metadata",
    "load_cut_metadata",
]

"""256-entry color tables for 8-bit indexed display."""

from dataclasses import dataclass
from typing import Callable, Dict, List

import numpy as np
from matplotlib import colormaps

from fits_view.core.errors import UnknownPaletteError

PALETTE_LENGTH = 256

_STEP = 255.0 / (PALETTE_LENGTH - 1)

_GENERATORS: Dict[str, Callable[[], np.ndarray]] = {}

_ALIASES = {
    'bw': 'grayscale',
    'gray': 'grayscale',
    'negbw': 'negative',
    'inverted': 'negative',
}


@dataclass(frozen=True)
class Palette:
    """A named color table.

    Attributes:
        name: Canonical variant name.
        colors: uint8 array of shape (256, 3), one RGB triple per index.
    """

    name: str
    colors: np.ndarray

    def __len__(self) -> int:
        return len(self.colors)

    def __getitem__(self, index: int) -> tuple:
        r, g, b = self.colors[index]
        return (int(r), int(g), int(b))


def register_palette(name: str):
    """Register a palette generator under ``name``.

    The decorated function takes no arguments and returns 256 RGB triples
    as an array-like of shape (256, 3) with values in 0-255.

    Example:
        @register_palette('green')
        def _green():
            ...
    """
    def decorator(func: Callable[[], np.ndarray]) -> Callable[[], np.ndarray]:
        _GENERATORS[name] = func
        return func
    return decorator


def available_palettes() -> List[str]:
    """Return the sorted canonical names of all registered variants."""
    return sorted(_GENERATORS)


def resolve_palette_name(variant: str) -> str:
    """Map a variant name or alias onto its canonical name.

    Raises:
        UnknownPaletteError: If the variant is not registered.
    """
    key = str(variant).strip().lower()
    key = _ALIASES.get(key, key)
    if key not in _GENERATORS:
        raise UnknownPaletteError(str(variant), available_palettes())
    return key


def generate_palette(variant: str) -> Palette:
    """
    Generate the color table for a palette variant.

    Args:
        variant: Registered name or alias (e.g. 'grayscale', 'negbw', 'heat')

    Returns:
        Palette with a fresh (256, 3) uint8 color array

    Raises:
        UnknownPaletteError: If the variant is not registered.
    """
    name = resolve_palette_name(variant)
    colors = np.asarray(_GENERATORS[name](), dtype=np.uint8)
    if colors.shape != (PALETTE_LENGTH, 3):
        raise ValueError(
            f"Palette generator {name!r} returned shape {colors.shape}, "
            f"expected ({PALETTE_LENGTH}, 3)"
        )
    colors.flags.writeable = False
    return Palette(name=name, colors=colors)


def _gray_levels(levels: np.ndarray) -> np.ndarray:
    levels = np.clip(levels, 0, 255).astype(np.uint8)
    return np.stack([levels, levels, levels], axis=1)


def _from_colormap(cmap_name: str) -> np.ndarray:
    cmap = colormaps[cmap_name]
    rgba = cmap(np.linspace(0.0, 1.0, PALETTE_LENGTH))
    return np.rint(rgba[:, :3] * 255).astype(np.uint8)


@register_palette('grayscale')
def _grayscale() -> np.ndarray:
    indices = np.arange(PALETTE_LENGTH)
    return _gray_levels(np.trunc(indices * _STEP))


@register_palette('negative')
def _negative() -> np.ndarray:
    indices = np.arange(PALETTE_LENGTH)
    return _gray_levels(np.trunc(255 - indices * _STEP))


@register_palette('heat')
def _heat() -> np.ndarray:
    return _from_colormap('afmhot')


@register_palette('false-color')
def _false_color() -> np.ndarray:
    return _from_colormap('jet')

"""Display engine: load, autoscale, rescale and palette state for one image.

State machine::

    UNLOADED --load--> LOADED --rescale/autoscale--> CUT
        ^                 |                           |
        +---failed load---+-------- new load ---------+

Committed state lives in an immutable :class:`DisplayFrame` that is replaced
wholesale on every successful load or rescale, so a renderer can take a
consistent :meth:`DisplayEngine.snapshot` at any time without locking.
"""

from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

import numpy as np

from fits_view.core.buffers import PixelBuffer
from fits_view.core.cuts import CutLevels, SigmaMultipliers, compute_cuts, validate_cuts
from fits_view.core.errors import FitsViewError
from fits_view.core.image_loader import load_fits
from fits_view.core.logging_utils import StatusLogger, get_logger
from fits_view.core.palettes import Palette, generate_palette
from fits_view.core.quantize import quantize_image
from fits_view.core.sampling import SeedLike, make_rng, random_sample
from fits_view.core.statistics import RobustEstimate, robust_sigma

DEFAULT_MAX_SAMPLE_LENGTH = 10000
DEFAULT_PALETTE = 'negative'


class EngineState(Enum):
    UNLOADED = "unloaded"
    LOADED = "loaded"
    CUT = "cut"


@dataclass(frozen=True)
class DisplayFrame:
    """Everything a renderer needs to draw the current image.

    Attributes:
        pixels: The loaded image.
        cuts: Committed cut levels; (min, max) right after a load.
        scaled: uint8 index image of shape (height, width), None until the
            first successful rescale.
        palette: Active color table.
        estimate: Robust estimate from the last autoscale, if any.
    """

    pixels: PixelBuffer
    cuts: CutLevels
    scaled: Optional[np.ndarray] = None
    palette: Optional[Palette] = None
    estimate: Optional[RobustEstimate] = None


class DisplayEngine:
    """Cut-level estimation and 8-bit scaling for a single displayed image.

    Observers may be attached through ``on_cuts_changed(low, high)``,
    ``on_palette_changed(name)`` and ``on_error(exc)``; all are optional.
    """

    def __init__(self, sigma_multipliers: Optional[SigmaMultipliers] = None,
                 max_sample_length: int = DEFAULT_MAX_SAMPLE_LENGTH,
                 palette: str = DEFAULT_PALETTE,
                 seed: SeedLike = None,
                 logger: Optional[StatusLogger] = None) -> None:
        """Initialize an engine in the UNLOADED state.

        Args:
            sigma_multipliers: Cut placement in sigmas (default 2.0 / 5.0)
            max_sample_length: Pixels drawn for statistics; 0 uses every pixel
            palette: Initial palette variant
            seed: Seed or Generator for the sampler
            logger: StatusLogger to report to (default: shared logger)

        Raises:
            UnknownPaletteError: If ``palette`` is not registered.
        """
        self._logger = logger or get_logger()
        self._multipliers = SigmaMultipliers()
        if sigma_multipliers is not None:
            self.set_cut_sigma(sigma_multipliers.low, sigma_multipliers.high)
        self._max_sample_length = DEFAULT_MAX_SAMPLE_LENGTH
        self.set_max_sample_length(max_sample_length)
        self._rng = make_rng(seed)
        self._palette = generate_palette(palette)
        self._frame: Optional[DisplayFrame] = None

        self.on_cuts_changed: Optional[Callable[[float, float], None]] = None
        self.on_palette_changed: Optional[Callable[[str], None]] = None
        self.on_error: Optional[Callable[[FitsViewError], None]] = None

    @classmethod
    def from_config(cls, cfg, seed: SeedLike = None,
                    logger: Optional[StatusLogger] = None) -> "DisplayEngine":
        """Build an engine from a :class:`fits_view.config.Config`.

        Values may be strings (from environment variables). Unusable sigma
        multipliers or sample lengths are ignored with a warning.

        Args:
            cfg: Config instance
            seed: Overrides ``sampling.seed`` when not None
            logger: StatusLogger to report to
        """
        if seed is None:
            seed = cfg.get('sampling.seed')
            if seed is not None:
                seed = int(seed)

        engine = cls(palette=cfg.get('palette', DEFAULT_PALETTE), seed=seed, logger=logger)
        engine.set_cut_sigma(_as_float(cfg.get('cuts.low_sigma')),
                             _as_float(cfg.get('cuts.high_sigma')))

        max_sample = cfg.get('sampling.max_sample_length', DEFAULT_MAX_SAMPLE_LENGTH)
        try:
            engine.set_max_sample_length(int(max_sample))
        except (TypeError, ValueError):
            engine._logger.warning(f"Ignoring invalid max_sample_length: {max_sample!r}")
        return engine

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def state(self) -> EngineState:
        frame = self._frame
        if frame is None:
            return EngineState.UNLOADED
        if frame.scaled is None:
            return EngineState.LOADED
        return EngineState.CUT

    @property
    def is_loaded(self) -> bool:
        return self._frame is not None

    @property
    def pixels(self) -> Optional[PixelBuffer]:
        return self._frame.pixels if self._frame else None

    @property
    def filename(self) -> Optional[str]:
        return self._frame.pixels.source if self._frame else None

    @property
    def image_min(self) -> Optional[float]:
        return self._frame.pixels.min if self._frame else None

    @property
    def image_max(self) -> Optional[float]:
        return self._frame.pixels.max if self._frame else None

    @property
    def cuts(self) -> Optional[CutLevels]:
        return self._frame.cuts if self._frame else None

    @property
    def scaled(self) -> Optional[np.ndarray]:
        return self._frame.scaled if self._frame else None

    @property
    def last_estimate(self) -> Optional[RobustEstimate]:
        return self._frame.estimate if self._frame else None

    @property
    def palette(self) -> Palette:
        return self._palette

    @property
    def palette_name(self) -> str:
        return self._palette.name

    @property
    def sigma_multipliers(self) -> SigmaMultipliers:
        return self._multipliers

    @property
    def max_sample_length(self) -> int:
        return self._max_sample_length

    def snapshot(self) -> Optional[DisplayFrame]:
        """Return the committed frame with the active palette, or None if unloaded."""
        frame = self._frame
        palette = self._palette
        if frame is None:
            return None
        return replace(frame, palette=palette)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def set_cut_sigma(self, low: Optional[float], high: Optional[float]) -> SigmaMultipliers:
        """Set the sigma multipliers used by :meth:`autoscale`.

        Non-positive or non-numeric values are ignored, keeping the current
        multiplier.

        Returns:
            The multipliers now in effect
        """
        updated = self._multipliers.updated(low, high)
        if low is not None and updated.low != _as_float(low):
            self._logger.warning(f"Ignoring invalid low cut sigma: {low!r}")
        if high is not None and updated.high != _as_float(high):
            self._logger.warning(f"Ignoring invalid high cut sigma: {high!r}")
        self._multipliers = updated
        return updated

    def set_max_sample_length(self, nelem: int) -> None:
        """Set how many pixels are drawn for statistics; 0 disables sampling."""
        nelem = int(nelem)
        if nelem < 0:
            self._logger.warning(f"Ignoring negative max sample length: {nelem}")
            return
        self._max_sample_length = nelem

    def set_palette(self, variant: str) -> Palette:
        """Switch the active palette; scaled indices are not recomputed.

        Raises:
            UnknownPaletteError: If the variant is not registered; the active
                palette is kept.
        """
        try:
            palette = generate_palette(variant)
        except FitsViewError as exc:
            self._report(exc)
            raise
        self._palette = palette
        if self.on_palette_changed is not None:
            self.on_palette_changed(palette.name)
        return palette

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self, file_path: Path, autoscale: bool = True,
             hdu: Optional[int] = None) -> PixelBuffer:
        """Load a FITS file and optionally autoscale it.

        The engine is UNLOADED while reading; a failed read leaves it there.

        Args:
            file_path: FITS file to display
            autoscale: Compute data-driven cuts and scale right away
            hdu: HDU index to read (default: first image HDU)

        Returns:
            The loaded PixelBuffer

        Raises:
            FitsLoadError, BufferAllocationError: If the file cannot be loaded.
        """
        self._frame = None
        try:
            pixels = load_fits(Path(file_path), hdu=hdu)
        except FitsViewError as exc:
            self._report(exc)
            raise
        return self.load_pixels(pixels, autoscale=autoscale)

    def load_pixels(self, pixels, autoscale: bool = True,
                    source: Optional[str] = None) -> PixelBuffer:
        """Load an in-memory image (PixelBuffer or 2-D array-like).

        A failed autoscale does not fail the load: the error goes to the
        logger and ``on_error``, and the engine stays LOADED with the
        (min, max) cuts and no scaled image.

        Args:
            pixels: PixelBuffer, or any 2-D array-like of numbers
            autoscale: Compute data-driven cuts and scale right away
            source: Filename to record when ``pixels`` is a raw array

        Returns:
            The loaded PixelBuffer

        Raises:
            FitsLoadError, BufferAllocationError: If ``pixels`` is not a
                usable image; the engine is left UNLOADED.
        """
        self._frame = None
        if not isinstance(pixels, PixelBuffer):
            try:
                pixels = PixelBuffer.from_array(pixels, source=source)
            except FitsViewError as exc:
                self._report(exc)
                raise

        self._frame = DisplayFrame(pixels=pixels,
                                   cuts=CutLevels(low=pixels.min, high=pixels.max))
        self._logger.success(
            f"Loaded {pixels.source or 'image'} ({pixels.width}x{pixels.height}, "
            f"min={pixels.min:g}, max={pixels.max:g})"
        )

        if autoscale:
            try:
                self.autoscale()
            except FitsViewError:
                self._logger.warning(f"{pixels.source or 'image'} loaded but left unscaled")
        return pixels

    # ------------------------------------------------------------------
    # Scaling
    # ------------------------------------------------------------------

    def estimate(self) -> Optional[RobustEstimate]:
        """Compute the robust estimate for the loaded image without committing.

        Returns:
            RobustEstimate, or None when no image is loaded
        """
        frame = self._frame
        if frame is None:
            return None

        population = frame.pixels.finite_values()
        if self._max_sample_length > 0:
            sample = random_sample(population, self._max_sample_length, rng=self._rng)
        else:
            sample = population
        return robust_sigma(sample)

    def autoscale(self) -> Optional[RobustEstimate]:
        """Derive cuts from image statistics and rescale.

        A degenerate distribution falls back to the full (min, max) range.
        Does nothing when no image is loaded.

        Returns:
            The estimate the cuts were derived from, or None if unloaded

        Raises:
            InvalidCutRangeError: If not even the full range is displayable
                (constant image).
            BufferAllocationError: If the scaled buffer cannot be allocated.
        """
        frame = self._frame
        if frame is None:
            return None

        estimate = self.estimate()
        cuts = compute_cuts(estimate, self._multipliers)
        if cuts is None:
            self._logger.warning(
                "Pixel distribution is degenerate, using full data range "
                f"[{frame.pixels.min:g}, {frame.pixels.max:g}]"
            )
            cuts = CutLevels(low=frame.pixels.min, high=frame.pixels.max)
        else:
            self._logger.info(
                f"Autoscale: median={estimate.median:g}, sigma={estimate.sigma:g}, "
                f"cuts=[{cuts.low:g}, {cuts.high:g}]"
            )

        self._commit(frame, cuts.low, cuts.high, estimate)
        return estimate

    def rescale(self, low: float, high: float) -> Optional[CutLevels]:
        """Apply manual cut levels.

        The cuts are validated and clamped to the data range, the whole
        image is quantized, and only then is the new frame swapped in.
        Does nothing when no image is loaded.

        Returns:
            The committed (clamped) CutLevels, or None if unloaded

        Raises:
            InvalidCutRangeError: If the cuts are unusable; nothing changes.
            BufferAllocationError: If the scaled buffer cannot be allocated;
                nothing changes.
        """
        frame = self._frame
        if frame is None:
            return None
        return self._commit(frame, low, high, frame.estimate)

    def _commit(self, frame: DisplayFrame, low: float, high: float,
                estimate: Optional[RobustEstimate]) -> CutLevels:
        try:
            cuts = validate_cuts(low, high, frame.pixels.min, frame.pixels.max)
            scaled = quantize_image(frame.pixels.data, cuts)
        except FitsViewError as exc:
            self._report(exc)
            raise

        scaled.flags.writeable = False
        self._frame = replace(frame, cuts=cuts, scaled=scaled, estimate=estimate)

        if self.on_cuts_changed is not None:
            self.on_cuts_changed(cuts.low, cuts.high)
        return cuts

    def _report(self, exc: FitsViewError) -> None:
        self._logger.error(str(exc))
        if self.on_error is not None:
            self.on_error(exc)


def _as_float(value) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return float('nan')

"""CLI for rendering a FITS image to PNG."""

import click
from pathlib import Path
from typing import Optional

from fits_view.config import load_config


@click.command()
@click.argument('fits_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--output', '-o', type=click.Path(dir_okay=False, path_type=Path),
              help='Output PNG file (default: <output folder>/<name>.png)')
@click.option('--low', type=float, default=None, help='Manual low cut (requires --high)')
@click.option('--high', type=float, default=None, help='Manual high cut (requires --low)')
@click.option('--low-sigma', type=float, default=None,
              help='Low cut in sigmas below the median (default 2.0)')
@click.option('--high-sigma', type=float, default=None,
              help='High cut in sigmas above the median (default 5.0)')
@click.option('--max-sample', type=int, default=None,
              help='Pixels sampled for statistics, 0 uses all pixels')
@click.option('--seed', type=int, default=None, help='Random seed for pixel sampling')
@click.option('--palette', '-p', type=str, default=None,
              help='Palette variant: grayscale, negative, heat, false-color')
@click.option('--hdu', type=int, default=None, help='HDU index (default: first image HDU)')
@click.option('--origin', type=click.Choice(['lower', 'upper']), default='lower',
              help='Put FITS row 0 at the bottom (lower) or top (upper)')
@click.option('--no-metadata', is_flag=True, help='Do not write the JSON sidecar')
@click.option('--config', type=click.Path(exists=True, path_type=Path),
              help='Path to config file')
def main(fits_file: Path, output: Optional[Path], low: Optional[float], high: Optional[float],
         low_sigma: Optional[float], high_sigma: Optional[float], max_sample: Optional[int],
         seed: Optional[int], palette: Optional[str], hdu: Optional[int], origin: str,
         no_metadata: bool, config: Optional[Path]):
    """
    Render a FITS image to an 8-bit PNG.

    Cut levels are computed automatically from robust image statistics
    (median - low_sigma*sigma, median + high_sigma*sigma) unless both
    --low and --high are given.
    """
    if (low is None) != (high is None):
        raise click.UsageError("--low and --high must be given together")

    cfg = load_config(config)

    # Lazy import to speed up CLI startup
    from fits_view.core.engine import DisplayEngine
    from fits_view.core.errors import FitsViewError
    from fits_view.io.export import save_png
    from fits_view.io.metadata import frame_metadata, save_cut_metadata

    errors = []
    try:
        engine = DisplayEngine.from_config(cfg, seed=seed)
        engine.on_error = errors.append
        engine.set_cut_sigma(low_sigma, high_sigma)
        if max_sample is not None:
            engine.set_max_sample_length(max_sample)
        if palette is not None:
            engine.set_palette(palette)

        manual = low is not None
        engine.load(fits_file, autoscale=not manual,
                    hdu=hdu if hdu is not None else cfg.get('image.hdu'))
        if manual:
            engine.rescale(low, high)
    except FitsViewError as e:
        raise click.ClickException(str(e))

    frame = engine.snapshot()
    if frame.scaled is None:
        reason = errors[-1] if errors else "no usable cut levels"
        raise click.ClickException(f"{fits_file.name} cannot be scaled: {reason}")

    output_path = output or Path(cfg.get('output.folder')) / f"{fits_file.stem}.png"
    save_png(output_path, frame.scaled, frame.palette, origin=origin)
    click.echo(f"[OK] Saved {output_path} (cuts: {frame.cuts.low:g} .. {frame.cuts.high:g})")

    if not no_metadata and cfg.get('output.save_metadata', True):
        metadata_path = output_path.with_suffix('.json')
        save_cut_metadata(frame_metadata(frame, engine.sigma_multipliers), metadata_path)
        click.echo(f"[OK] Saved {metadata_path}")


if __name__ == '__main__':
    main()

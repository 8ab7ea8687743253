"""CLI for reporting autoscale statistics of FITS images."""

import sys

import click
from pathlib import Path
from typing import List, Optional, Tuple

from fits_view.config import load_config


def collect_fits_files(paths: Tuple[Path, ...], extensions) -> List[Path]:
    """Expand directories into the FITS files they contain.

    Args:
        paths: Files and/or directories from the command line
        extensions: File extensions accepted inside directories

    Returns:
        Files in command-line order, each directory's files sorted
    """
    from fits_view.core.image_loader import get_fits_files

    if isinstance(extensions, str):
        extensions = [extensions]
    files = []
    for path in paths:
        if path.is_dir():
            files.extend(get_fits_files(path, set(extensions) if extensions else None))
        else:
            files.append(path)
    return files


@click.command()
@click.argument('fits_paths', nargs=-1, required=True,
                type=click.Path(exists=True, path_type=Path))
@click.option('--low-sigma', type=float, default=None,
              help='Low cut in sigmas below the median (default 2.0)')
@click.option('--high-sigma', type=float, default=None,
              help='High cut in sigmas above the median (default 5.0)')
@click.option('--max-sample', type=int, default=None,
              help='Pixels sampled for statistics, 0 uses all pixels')
@click.option('--seed', type=int, default=None, help='Random seed for pixel sampling')
@click.option('--config', type=click.Path(exists=True, path_type=Path),
              help='Path to config file')
def main(fits_paths: Tuple[Path, ...], low_sigma: Optional[float], high_sigma: Optional[float],
         max_sample: Optional[int], seed: Optional[int], config: Optional[Path]):
    """
    Print median, robust sigma and autoscale cuts for FITS images.

    Directories are searched for files with the configured extensions
    (image.extensions). Nothing is written to disk. Exits with status 1 if
    any file fails to load or cannot be scaled.
    """
    cfg = load_config(config)

    # Lazy import to speed up CLI startup
    from fits_view.core.engine import DisplayEngine, EngineState
    from fits_view.core.errors import FitsViewError
    from fits_view.core.logging_utils import get_logger

    logger = get_logger(verbose=False)
    try:
        engine = DisplayEngine.from_config(cfg, seed=seed, logger=logger)
    except FitsViewError as e:
        raise click.ClickException(str(e))
    engine.set_cut_sigma(low_sigma, high_sigma)
    if max_sample is not None:
        engine.set_max_sample_length(max_sample)

    fits_files = collect_fits_files(fits_paths, cfg.get('image.extensions'))
    if not fits_files:
        raise click.ClickException("No FITS files found")

    failures = 0
    for i, fits_file in enumerate(fits_files, 1):
        logger.progress(i, len(fits_files), fits_file.name)
        try:
            engine.load(fits_file, autoscale=True, hdu=cfg.get('image.hdu'))
        except FitsViewError as e:
            click.echo(f"{fits_file.name}: error: {e}", err=True)
            failures += 1
            continue

        if engine.state is not EngineState.CUT:
            click.echo(f"{fits_file.name}: error: image cannot be scaled "
                       f"(min={engine.image_min:.6g}, max={engine.image_max:.6g})", err=True)
            failures += 1
            continue

        estimate = engine.last_estimate
        cuts = engine.cuts
        status = "ok" if estimate.valid else "degenerate, full range"
        click.echo(
            f"{fits_file.name}: median={estimate.median:.6g} sigma={estimate.sigma:.6g} "
            f"low={cuts.low:.6g} high={cuts.high:.6g} ({status})"
        )

    if failures:
        sys.exit(1)


if __name__ == '__main__':
    main()

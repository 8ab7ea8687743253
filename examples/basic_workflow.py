#!/usr/bin/env python3
"""
Example workflow: Load -> Autoscale -> Rescale -> Export

This script demonstrates how to use the fits-view package programmatically
to compute display cuts for a folder of FITS images and save PNG previews.
"""

from pathlib import Path

from fits_view.config import load_config
from fits_view.core.engine import DisplayEngine, EngineState
from fits_view.core.errors import FitsViewError
from fits_view.core.image_loader import get_fits_files
from fits_view.io.export import save_png
from fits_view.io.metadata import frame_metadata, save_cut_metadata


def main():
    """Render every FITS file in a folder."""

    # Configuration
    cfg = load_config()
    fits_folder = Path("data/frames")
    output_folder = Path(cfg.get("output.folder"))
    extensions = set(cfg.get("image.extensions"))

    print("=" * 60)
    print("FITS View Workflow")
    print("=" * 60)

    engine = DisplayEngine.from_config(cfg, seed=0)

    for fits_file in get_fits_files(fits_folder, extensions):
        print(f"\n{fits_file.name}")
        print("-" * 60)
        try:
            # Step 1: load and autoscale
            engine.load(fits_file)
            if engine.state is not EngineState.CUT:
                print(f"Skipping {fits_file.name}: constant image")
                continue

            # Step 2: widen the high cut a little for bright targets
            cuts = engine.cuts
            engine.rescale(cuts.low, cuts.high + 0.5 * (cuts.high - cuts.low))
        except FitsViewError as e:
            print(f"Skipping {fits_file.name}: {e}")
            continue

        # Step 3: export the preview and its cut metadata
        frame = engine.snapshot()
        png_path = save_png(output_folder / f"{fits_file.stem}.png", frame.scaled, frame.palette)
        save_cut_metadata(frame_metadata(frame, engine.sigma_multipliers),
                          png_path.with_suffix(".json"))

    print("\n" + "=" * 60)
    print("Workflow complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()

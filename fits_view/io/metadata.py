"""Metadata handling utilities."""

from datetime import datetime
from pathlib import Path
from typing import Dict, Optional
import json

from fits_view.core.engine import DisplayFrame
from fits_view.core.cuts import SigmaMultipliers


def frame_metadata(frame: DisplayFrame,
                   multipliers: Optional[SigmaMultipliers] = None) -> Dict:
    """
    Describe a display frame as a JSON-serializable dictionary.

    Args:
        frame: Snapshot from DisplayEngine.snapshot()
        multipliers: Sigma multipliers used for autoscaling, if any

    Returns:
        Metadata dictionary
    """
    pixels = frame.pixels
    estimate = frame.estimate
    return {
        'source': pixels.source,
        'width': pixels.width,
        'height': pixels.height,
        'image_min': pixels.min,
        'image_max': pixels.max,
        'cuts': {'low': frame.cuts.low, 'high': frame.cuts.high},
        'estimate': None if estimate is None else {
            'median': estimate.median,
            'sigma': estimate.sigma,
            'valid': estimate.valid,
            'n_inliers': estimate.n_inliers,
        },
        'sigma_multipliers': None if multipliers is None else {
            'low': multipliers.low,
            'high': multipliers.high,
        },
        'palette': frame.palette.name if frame.palette is not None else None,
        'created': datetime.now().isoformat(),
    }


def save_cut_metadata(metadata: Dict, output_path: Path) -> None:
    """
    Save metadata to JSON file.

    Args:
        metadata: Metadata dictionary to save
        output_path: Path to output JSON file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(metadata, f, indent=2, ensure_ascii=False)
        f.write('\n')


def load_cut_metadata(metadata_path: Path) -> Optional[Dict]:
    """
    Load metadata from JSON file.

    Args:
        metadata_path: Path to metadata JSON file

    Returns:
        Loaded metadata dictionary, or None if the file does not exist
    """
    metadata_path = Path(metadata_path)
    if not metadata_path.exists():
        return None

    with open(metadata_path, 'r', encoding='utf-8') as f:
        return json.load(f)

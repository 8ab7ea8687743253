"""FITS loading into pixel buffers."""

from pathlib import Path
from typing import List, Optional

import numpy as np
from astropy.io import fits

from fits_view.core.buffers import PixelBuffer
from fits_view.core.errors import BufferAllocationError, FitsLoadError

# Supported FITS extensions
FITS_EXTENSIONS = {'.fits', '.fit', '.fts'}


def _select_image_hdu(hdul: fits.HDUList, hdu: Optional[int]):
    if hdu is not None:
        try:
            return hdul[hdu]
        except (IndexError, KeyError) as exc:
            raise FitsLoadError(f"HDU {hdu} not found ({len(hdul)} HDUs in file)") from exc

    # Compressed images and many pipelines keep the pixels in an extension
    for candidate in hdul:
        if candidate.is_image and candidate.data is not None and candidate.data.ndim >= 2:
            return candidate
    raise FitsLoadError("No image HDU with at least two axes found")


def load_fits(file_path: Path, hdu: Optional[int] = None) -> PixelBuffer:
    """
    Load a 2-D FITS image as a double-precision pixel buffer.

    Only the first two axes are used: for a cube the first plane is taken.
    BSCALE/BZERO are applied by astropy.

    Args:
        file_path: Path to the FITS file
        hdu: HDU index to read; by default the first HDU holding image data

    Returns:
        PixelBuffer with min/max computed over the finite pixels

    Raises:
        FitsLoadError: If the file is missing, unreadable, or has no 2-D image.
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FitsLoadError(f"File not found: {file_path}")

    try:
        with fits.open(file_path, mode='readonly', memmap=False) as hdul:
            image_hdu = _select_image_hdu(hdul, hdu)
            data = image_hdu.data
            if data is None:
                raise FitsLoadError(f"HDU {hdu} of {file_path.name} holds no data")
            data = np.asarray(data)
            while data.ndim > 2:
                data = data[0]
            return PixelBuffer.from_array(data, source=str(file_path))
    except (FitsLoadError, BufferAllocationError):
        raise
    except MemoryError as exc:
        raise BufferAllocationError(
            f"Not enough memory to read {file_path.name}", original_error=exc
        ) from exc
    except (OSError, ValueError, TypeError) as exc:
        raise FitsLoadError(f"Error reading FITS file {file_path}: {exc}") from exc


def get_fits_files(folder: Path, extensions: Optional[set] = None) -> List[Path]:
    """
    Get all FITS files from folder, excluding hidden files.

    Args:
        folder: Directory to search
        extensions: Set of file extensions to accept (default: FITS_EXTENSIONS)

    Returns:
        Sorted list of FITS file paths
    """
    if extensions is None:
        extensions = FITS_EXTENSIONS
    extensions = {ext.lower() for ext in extensions}

    files = []
    for item in Path(folder).iterdir():
        if item.name.startswith('.'):
            continue
        if item.is_file() and item.suffix.lower() in extensions:
            files.append(item)

    return sorted(files)

"""
Data Input/Output for SlicSeg volumes and scribbles.

Volumes can be read from and written to numpy (.npy), TIFF stacks and HDF5
files. User scribbles drawn on an RGB image (red for foreground, blue for
background) are converted to the 0/127/255 seed label convention.
"""

import logging
from pathlib import Path
from typing import Union, Tuple, Optional

import numpy as np

from .labels import FOREGROUND_LABEL, BACKGROUND_LABEL, validate_labels

logger = logging.getLogger(__name__)


def load_volume(file_path: Union[str, Path]) -> np.ndarray:
    """
    Load a 3D volume from file.

    Args:
        file_path: Path to a .npy, .tif/.tiff or .h5/.hdf5 file

    Returns:
        3D numpy array
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    logger.info(f"Loading volume from {file_path}")
    suffix = file_path.suffix.lower()
    if suffix in ['.tif', '.tiff']:
        data = _load_tiff_stack(file_path)
    elif suffix in ['.h5', '.hdf5']:
        data = _load_hdf5(file_path)
    elif suffix == '.npy':
        data = np.load(file_path)
    else:
        raise ValueError(f"Unsupported file format: {file_path.suffix}")

    if data.ndim == 2:
        data = data[:, :, np.newaxis]
    elif data.ndim != 3:
        raise ValueError(f"Expected 2D or 3D data, got {data.ndim}D")

    logger.info(f"Loaded volume with shape {data.shape}")
    return data


def _load_tiff_stack(file_path: Path) -> np.ndarray:
    """Load TIFF stack; tifffile stores pages first, so move them to the last axis."""
    import tifffile
    data = tifffile.imread(file_path)
    if data.ndim == 3:
        data = np.moveaxis(data, 0, -1)
    return data


def _load_hdf5(file_path: Path) -> np.ndarray:
    """Load data from HDF5 file."""
    import h5py

    with h5py.File(file_path, 'r') as f:
        for name in ['data', 'image', 'volume', 'segmentation']:
            if name in f:
                return f[name][:]

        keys = list(f.keys())
        if keys:
            return f[keys[0]][:]
        raise ValueError("No datasets found in HDF5 file")


def save_volume(data: np.ndarray, file_path: Union[str, Path], format: str = 'auto') -> None:
    """
    Save a volume to file.

    Args:
        data: 3D array to save
        file_path: Output file path
        format: Output format ('tiff', 'hdf5', 'numpy', or 'auto')
    """
    file_path = Path(file_path)
    if format == 'auto':
        format = _determine_format_from_extension(file_path)

    logger.info(f"Saving volume with shape {data.shape} to {file_path} (format: {format})")
    file_path.parent.mkdir(parents=True, exist_ok=True)

    if format == 'tiff':
        import tifffile
        tifffile.imwrite(file_path, np.moveaxis(data, -1, 0))
    elif format == 'hdf5':
        import h5py
        with h5py.File(file_path, 'w') as f:
            f.create_dataset('data', data=data, compression='gzip')
    elif format == 'numpy':
        np.save(file_path, data)
    else:
        raise ValueError(f"Unsupported format: {format}")


def _determine_format_from_extension(file_path: Path) -> str:
    """Determine save format from file extension."""
    ext = file_path.suffix.lower()

    if ext in ['.tif', '.tiff']:
        return 'tiff'
    elif ext in ['.h5', '.hdf5']:
        return 'hdf5'
    return 'numpy'


def scribble_rgb_to_labels(rgb: np.ndarray) -> np.ndarray:
    """
    Convert an RGB scribble image to seed labels.

    Pure red pixels (255, 0, 0) become foreground (127) and pure blue pixels
    (0, 0, 255) become background (255); everything else is unlabelled.
    """
    rgb = np.asarray(rgb)
    if rgb.ndim != 3 or rgb.shape[2] < 3:
        raise ValueError(f"Expected an RGB image, got shape {rgb.shape}")
    r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]
    labels = np.zeros(rgb.shape[:2], dtype=np.uint8)
    labels[(r == 255) & (g == 0) & (b == 0)] = FOREGROUND_LABEL
    labels[(r == 0) & (g == 0) & (b == 255)] = BACKGROUND_LABEL
    return labels


def load_scribble_image(file_path: Union[str, Path]) -> np.ndarray:
    """Load an RGB scribble image (e.g. PNG) as a 2D seed label slice."""
    from PIL import Image

    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    with Image.open(file_path) as img:
        rgb = np.array(img.convert('RGB'))
    labels = scribble_rgb_to_labels(rgb)
    logger.info(f"Loaded scribbles from {file_path}: "
                f"{np.count_nonzero(labels == FOREGROUND_LABEL)} foreground, "
                f"{np.count_nonzero(labels == BACKGROUND_LABEL)} background pixels")
    return labels


def load_seed_slice(file_path: Union[str, Path],
                    expected_shape: Optional[Tuple[int, int]] = None) -> np.ndarray:
    """
    Load a seed label slice from an RGB scribble image or a .npy label array.
    """
    file_path = Path(file_path)
    if file_path.suffix.lower() == '.npy':
        labels = np.load(file_path).astype(np.uint8)
        validate_labels(labels)
    else:
        labels = load_scribble_image(file_path)

    if expected_shape is not None and labels.shape != tuple(expected_shape):
        raise ValueError(f"Seed slice shape {labels.shape} does not match slice shape {tuple(expected_shape)}")
    return labels

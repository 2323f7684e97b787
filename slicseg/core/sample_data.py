"""
Synthetic volumes and scribbles for demos and tests.
"""

import logging
from pathlib import Path
from typing import Tuple, Union

import numpy as np

from .labels import FOREGROUND_LABEL, BACKGROUND_LABEL

logger = logging.getLogger(__name__)


def create_sample_volume(shape: Tuple[int, int, int] = (100, 100, 40),
                         center: Tuple[float, float] = (50, 50),
                         radius: float = 15,
                         radius_change: float = 0.0,
                         foreground: float = 200,
                         background: float = 60,
                         noise: float = 3.0,
                         seed: int = 42) -> np.ndarray:
    """
    Create a volume containing a bright tube along the last axis.

    The tube radius changes linearly by ``radius_change`` pixels per slice away
    from the middle slice, so propagation has to follow a changing shape.

    Returns:
        uint8 volume of the given shape
    """
    rng = np.random.default_rng(seed)
    height, width, depth = shape
    rows, cols = np.mgrid[0:height, 0:width]
    dist = np.sqrt((rows - center[0]) ** 2 + (cols - center[1]) ** 2)

    data = np.full(shape, background, dtype=np.float64)
    for k in range(depth):
        r = max(radius + radius_change * abs(k - depth // 2), 1)
        data[:, :, k][dist < r] = foreground

    data += rng.normal(0, noise, shape)
    return np.clip(data, 0, 255).astype(np.uint8)


def create_sample_seeds(slice_shape: Tuple[int, int] = (100, 100),
                        center: Tuple[int, int] = (50, 50),
                        square: int = 10,
                        ring_width: int = 2) -> np.ndarray:
    """
    Scribbles for one slice: a foreground square at ``center`` and a
    background ring along the slice border.
    """
    labels = np.zeros(slice_shape, dtype=np.uint8)
    labels[:ring_width, :] = BACKGROUND_LABEL
    labels[-ring_width:, :] = BACKGROUND_LABEL
    labels[:, :ring_width] = BACKGROUND_LABEL
    labels[:, -ring_width:] = BACKGROUND_LABEL
    r0 = center[0] - square // 2
    c0 = center[1] - square // 2
    labels[r0:r0 + square, c0:c0 + square] = FOREGROUND_LABEL
    return labels


def create_sample_data(output_dir: Union[str, Path] = "test_data") -> Tuple[Path, Path]:
    """Write a sample volume and its start-slice scribbles as .npy files."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    volume = create_sample_volume(radius_change=0.2)
    seeds = create_sample_seeds(volume.shape[:2])

    volume_file = output_dir / "sample_volume.npy"
    seeds_file = output_dir / "sample_seeds.npy"
    np.save(volume_file, volume)
    np.save(seeds_file, seeds)

    logger.info(f"Sample data created: {volume_file} {volume.shape}, seeds {seeds_file}")
    return volume_file, seeds_file

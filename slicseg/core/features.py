"""
Per-pixel feature extraction for the slice classifiers.

Each pixel of a 2D slice is described by its intensity and a small bank of
smoothed, gradient and texture responses. The feature matrix has one row per
pixel in row-major order and a fixed number of columns.
"""

import logging
from typing import Callable, List

import numpy as np
from scipy import ndimage
from skimage import filters

logger = logging.getLogger(__name__)

FeatureExtractor = Callable[[np.ndarray], np.ndarray]

FEATURE_NAMES: List[str] = [
    'intensity',
    'gaussian_1',
    'gaussian_2',
    'gradient_magnitude_1',
    'laplacian_of_gaussian_1.5',
    'local_mean_5',
    'local_std_5',
]


def validate_slice(image: np.ndarray) -> None:
    """Validate a 2D slice before feature extraction."""
    if image is None:
        raise ValueError("slice cannot be None")
    if not isinstance(image, np.ndarray):
        raise ValueError(f"slice must be numpy array, got {type(image)}")
    if image.ndim != 2:
        raise ValueError(f"slice must be 2D, got {image.ndim}D")
    if image.size == 0:
        raise ValueError("slice cannot be empty")


def image_to_feature_matrix(image: np.ndarray) -> np.ndarray:
    """
    Compute the feature matrix of a 2D slice.

    Args:
        image: 2D intensity slice

    Returns:
        Array of shape (H * W, len(FEATURE_NAMES))
    """
    validate_slice(image)
    img = image.astype(np.float64)

    local_mean = ndimage.uniform_filter(img, size=5)
    local_sq_mean = ndimage.uniform_filter(img ** 2, size=5)
    local_std = np.sqrt(np.maximum(local_sq_mean - local_mean ** 2, 0))

    responses = [
        img,
        filters.gaussian(img, sigma=1, preserve_range=True),
        filters.gaussian(img, sigma=2, preserve_range=True),
        ndimage.gaussian_gradient_magnitude(img, sigma=1),
        ndimage.gaussian_laplace(img, sigma=1.5),
        local_mean,
        local_std,
    ]
    return np.stack([r.ravel() for r in responses], axis=1)

"""
Binary morphology on 2D masks with disk-shaped structuring elements.

Erosion treats pixels outside the image as foreground and dilation treats them
as background, so objects touching the slice border are not eaten away by the
border itself.
"""

import numpy as np
from scipy import ndimage
from skimage import morphology


def disk(radius: int) -> np.ndarray:
    """Disk structuring element; radius 0 is a single pixel."""
    if radius < 0:
        raise ValueError(f"radius must be >= 0, got {radius}")
    return morphology.disk(int(radius)).astype(bool)


def erode(mask: np.ndarray, radius: int) -> np.ndarray:
    mask = np.asarray(mask) > 0
    if radius == 0:
        return mask.copy()
    return ndimage.binary_erosion(mask, structure=disk(radius), border_value=1)


def dilate(mask: np.ndarray, radius: int) -> np.ndarray:
    mask = np.asarray(mask) > 0
    if radius == 0:
        return mask.copy()
    return ndimage.binary_dilation(mask, structure=disk(radius), border_value=0)


def open_mask(mask: np.ndarray, radius: int) -> np.ndarray:
    """Opening: erosion followed by dilation."""
    return dilate(erode(mask, radius), radius)


def close_mask(mask: np.ndarray, radius: int) -> np.ndarray:
    """Closing: dilation followed by erosion."""
    return erode(dilate(mask, radius), radius)


def skeletonize(mask: np.ndarray) -> np.ndarray:
    """Morphological skeleton of a binary mask."""
    mask = np.asarray(mask) > 0
    if not mask.any():
        return mask.copy()
    return morphology.skeletonize(mask)


def distance_to_labels(labels: np.ndarray) -> np.ndarray:
    """
    Euclidean distance from every pixel to the nearest nonzero pixel.

    Returns an all-infinite map when there are no nonzero pixels.
    """
    labels = np.asarray(labels)
    if not np.any(labels):
        return np.full(labels.shape, np.inf)
    return ndimage.distance_transform_edt(labels == 0)


def erosion_depth(mask: np.ndarray) -> np.ndarray:
    """
    Discrete depth of every mask pixel below the mask boundary.

    The mask is eroded repeatedly with a radius-1 disk; each pixel is stamped
    with the iteration at which it disappears. Pixels outside the mask are 0.
    The image border counts as background here, so the loop always terminates.
    """
    current = np.asarray(mask) > 0
    depth = np.zeros(current.shape, dtype=np.int32)
    footprint = disk(1)
    iteration = 0
    while current.any():
        iteration += 1
        eroded = ndimage.binary_erosion(current, structure=footprint, border_value=0)
        depth[current & ~eroded] = iteration
        current = eroded
    return depth

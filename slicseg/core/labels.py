"""
Seed and training labels derived from segmentations.

Label images use three values: 0 (unlabelled), 127 (foreground) and 255
(background). Hard seed labels constrain the max-flow solver; training labels
are the pixels fed to the classifier when it is updated on a new slice.
"""

import logging
from typing import NamedTuple, Tuple

import numpy as np

from . import morphology

logger = logging.getLogger(__name__)

UNLABELED = 0
FOREGROUND_LABEL = 127
BACKGROUND_LABEL = 255
VALID_LABELS = (UNLABELED, FOREGROUND_LABEL, BACKGROUND_LABEL)


class ROI(NamedTuple):
    """Inclusive 1-based bounding box (h0, h1, w0, w1) of a region in a slice."""
    h0: int
    h1: int
    w0: int
    w1: int

    @property
    def slices(self) -> Tuple[slice, slice]:
        """Python slices selecting the ROI from a 2D array."""
        return slice(self.h0 - 1, self.h1), slice(self.w0 - 1, self.w1)

    @property
    def shape(self) -> Tuple[int, int]:
        return self.h1 - self.h0 + 1, self.w1 - self.w0 + 1

    def crop(self, image: np.ndarray) -> np.ndarray:
        return image[self.slices]

    def paste(self, roi_data: np.ndarray, full_shape: Tuple[int, int], dtype=None) -> np.ndarray:
        """Place ROI data into a zero-initialised array of the full slice shape."""
        full = np.zeros(full_shape, dtype=dtype if dtype is not None else roi_data.dtype)
        full[self.slices] = roi_data
        return full


def get_segmentation_roi(seg_label: np.ndarray, margin: int = 25) -> ROI:
    """
    Bounding box of the nonzero pixels of a segmentation, grown by a margin.

    Args:
        seg_label: 2D segmentation
        margin: Number of pixels added on every side before clamping

    Returns:
        ROI clamped to the slice bounds
    """
    rows, cols = np.nonzero(np.asarray(seg_label) > 0)
    if rows.size == 0:
        raise ValueError("Cannot compute an ROI for an empty segmentation")
    height, width = seg_label.shape
    h0 = max(1, int(rows.min()) + 1 - margin)
    h1 = min(height, int(rows.max()) + 1 + margin)
    w0 = max(1, int(cols.min()) + 1 - margin)
    w1 = min(width, int(cols.max()) + 1 + margin)
    return ROI(h0, h1, w0, w1)


def get_seed_labels(seg_mask: np.ndarray, fgr: int, bgr: int,
                    min_eroded_pixels: int = 100) -> Tuple[np.ndarray, np.ndarray]:
    """
    Generate hard seeds and training labels from a prior segmentation.

    Foreground pixels are the skeleton of the mask eroded by ``fgr``, or the
    skeleton of the whole mask when fewer than ``min_eroded_pixels`` survive the
    erosion. The seed labels mark everything outside the ``bgr`` dilation as
    background; the training labels only mark the one-pixel ring between the
    ``bgr`` and ``bgr + 1`` dilations.

    Args:
        seg_mask: 2D binary segmentation
        fgr: Erosion radius for foreground seeds
        bgr: Dilation radius for background seeds

    Returns:
        Tuple (seed_label, train_label) of uint8 label images
    """
    seg_mask = np.asarray(seg_mask) > 0

    fg_mask = morphology.erode(seg_mask, fgr)
    if np.count_nonzero(fg_mask) < min_eroded_pixels:
        fg_mask = morphology.skeletonize(seg_mask)
    else:
        fg_mask = morphology.skeletonize(fg_mask)

    fg_dilate1 = morphology.dilate(seg_mask, bgr)
    fg_dilate2 = morphology.dilate(seg_mask, bgr + 1)

    train_label = np.zeros(seg_mask.shape, dtype=np.uint8)
    train_label[fg_mask] = FOREGROUND_LABEL
    train_label[fg_dilate2 & ~fg_dilate1] = BACKGROUND_LABEL

    seed_label = np.zeros(seg_mask.shape, dtype=np.uint8)
    seed_label[fg_mask] = FOREGROUND_LABEL
    seed_label[~fg_dilate1] = BACKGROUND_LABEL

    return seed_label, train_label


def add_border_background(label: np.ndarray, step: int = 5, offset: int = 5) -> np.ndarray:
    """
    Return a copy of a start-slice label image with sparse background points
    along the border, every ``step`` pixels on the rows and columns ``offset``
    pixels in from each edge.
    """
    label = np.array(label, dtype=np.uint8, copy=True)
    height, width = label.shape
    if height <= 2 * offset or width <= 2 * offset:
        return label
    rows = np.arange(offset - 1, height - offset, step)
    cols = np.arange(offset - 1, width - offset, step)
    label[rows, offset - 1] = BACKGROUND_LABEL
    label[rows, width - offset - 1] = BACKGROUND_LABEL
    label[offset - 1, cols] = BACKGROUND_LABEL
    label[height - offset - 1, cols] = BACKGROUND_LABEL
    return label


def validate_labels(label: np.ndarray) -> None:
    """Raise ValueError if a label image uses values other than 0, 127 and 255."""
    invalid = np.setdiff1d(np.unique(label), VALID_LABELS)
    if invalid.size:
        raise ValueError(f"Label images may only contain {VALID_LABELS}, found {invalid.tolist()}")


def segmentation_to_labels(seg_mask: np.ndarray) -> np.ndarray:
    """Convert a binary segmentation to hard labels: inside 127, outside 255."""
    seg_mask = np.asarray(seg_mask) > 0
    return np.where(seg_mask, FOREGROUND_LABEL, BACKGROUND_LABEL).astype(np.uint8)

"""
Single-slice segmentation by min-cut/max-flow (PyMaxflow).

The energy combines a unary term from the foreground probability with an
8-neighbour contrast-sensitive pairwise term. Pixels labelled 127/255 are
hard constraints tied to the source/sink with infinite capacity.
"""

import logging
from typing import Callable

import numpy as np

from . import morphology
from .labels import FOREGROUND_LABEL, BACKGROUND_LABEL

logger = logging.getLogger(__name__)

INFINITE_CAPACITY = 1e9
PROBABILITY_EPS = 1e-6

# (row offset, column offset) of the forward half of the 8-neighbourhood
_NEIGHBOUR_OFFSETS = ((0, 1), (1, 0), (1, 1), (1, -1))

EnergyMinimizer = Callable[[np.ndarray, np.ndarray, np.ndarray, float, float], np.ndarray]


def interactive_maxflow(image: np.ndarray, seed_label: np.ndarray, probability: np.ndarray,
                        lambda_val: float, sigma: float) -> np.ndarray:
    """
    Minimise the unary + pairwise energy of one slice.

    Args:
        image: 2D intensity slice
        seed_label: Hard labels (0 free, 127 foreground, 255 background)
        probability: Foreground probability prior in [0, 1]
        lambda_val: Weight of the pairwise term relative to the unary term
        sigma: Intensity-difference sensitivity of the pairwise term

    Returns:
        uint8 mask with 1 for foreground
    """
    import maxflow

    if lambda_val <= 0:
        raise ValueError(f"lambda must be > 0, got {lambda_val}")
    if sigma <= 0:
        raise ValueError(f"sigma must be > 0, got {sigma}")

    image = np.asarray(image, dtype=np.float64)
    seed_label = np.asarray(seed_label)
    if image.shape != seed_label.shape or image.shape != np.shape(probability):
        raise ValueError("image, seed_label and probability must have the same shape")

    h, w = image.shape
    g = maxflow.Graph[float]()
    nodeids = g.add_grid_nodes((h, w))

    # n-links
    padded = np.pad(image, 1, mode='edge')
    for dr, dc in _NEIGHBOUR_OFFSETS:
        neighbour = padded[1 + dr:1 + dr + h, 1 + dc:1 + dc + w]
        distance = np.hypot(dr, dc)
        weights = lambda_val * np.exp(-((image - neighbour) ** 2) / (2 * sigma ** 2)) / distance
        structure = np.zeros((3, 3))
        structure[1 + dr, 1 + dc] = 1
        g.add_grid_edges(nodeids, weights=weights, structure=structure, symmetric=True)

    # t-links: a node left on the source side pays its sink capacity
    p = np.clip(np.asarray(probability, dtype=np.float64), PROBABILITY_EPS, 1 - PROBABILITY_EPS)
    source_caps = -np.log(1 - p)
    sink_caps = -np.log(p)

    foreground = seed_label == FOREGROUND_LABEL
    background = seed_label == BACKGROUND_LABEL
    source_caps[foreground] = INFINITE_CAPACITY
    sink_caps[foreground] = 0
    source_caps[background] = 0
    sink_caps[background] = INFINITE_CAPACITY

    g.add_grid_tedges(nodeids, source_caps, sink_caps)

    flow = g.maxflow()
    logger.debug(f"Max-flow on {h}x{w} slice, flow {flow:.3f}")

    # get_grid_segments is True for nodes on the sink (background) side
    return (~g.get_grid_segments(nodeids)).astype(np.uint8)


def clean_segmentation(seg: np.ndarray, radius: int = 2) -> np.ndarray:
    """Close then open a binary mask with a disk."""
    cleaned = morphology.close_mask(seg, radius)
    cleaned = morphology.open_mask(cleaned, radius)
    return cleaned.astype(np.uint8)


def get_single_slice_segmentation(seed_label: np.ndarray, image: np.ndarray, probability: np.ndarray,
                                  lambda_val: float, sigma: float,
                                  minimizer: EnergyMinimizer = interactive_maxflow,
                                  clean_radius: int = 2) -> np.ndarray:
    """Run the energy minimiser on one slice and clean the resulting mask."""
    seg = minimizer(image, seed_label, probability, lambda_val, sigma)
    return clean_segmentation(seg, clean_radius)

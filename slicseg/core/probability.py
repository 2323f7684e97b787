"""
Probability map refinement using shape and connectivity priors.

The classifier output for a slice is adjusted before it is handed to the
max-flow solver:

- during propagation, the previous slice's mask acts as a shape prior that
  damps confident predictions outside it and boosts weak ones inside it;
- on the start slice, high probabilities must be reachable from the user's
  foreground scribbles through plausible-intensity territory.
"""

import logging

import numpy as np
from scipy import ndimage

from . import morphology
from .labels import FOREGROUND_LABEL

logger = logging.getLogger(__name__)


def process_using_shape_prior(p0: np.ndarray, last_seg: np.ndarray,
                              outside_threshold: float = 0.5,
                              outside_damping: float = 0.4,
                              inside_threshold: float = 0.8,
                              inside_boost: float = 0.2) -> np.ndarray:
    """
    Adjust a probability map with the previous slice's segmentation.

    Args:
        p0: Raw foreground probability, same shape as ``last_seg``
        last_seg: Binary segmentation of the neighbouring slice
        outside_threshold: Outside the prior, probabilities above this are damped
        outside_damping: Factor applied to damped probabilities
        inside_threshold: Inside the prior, probabilities below this are boosted
        inside_boost: Boost at the deepest point of the prior

    Returns:
        Refined probability map in [0, 1]
    """
    p0 = np.asarray(p0, dtype=np.float64)
    dis = morphology.erosion_depth(last_seg)
    maxdis = int(dis.max())

    p = p0.copy()
    outside = (dis == 0) & (p0 > outside_threshold)
    p[outside] = outside_damping * p0[outside]
    if maxdis > 0:
        inside = (dis > 0) & (p0 < inside_threshold)
        p[inside] = p0[inside] + inside_boost * dis[inside] / maxdis
    return np.clip(p, 0.0, 1.0)


def process_using_connectivity(seed_label: np.ndarray, p0: np.ndarray, image: np.ndarray,
                               threshold: float = 0.5,
                               close_radius: int = 3,
                               lower_std: float = 3.0,
                               upper_std: float = 2.0,
                               damping: float = 0.4) -> np.ndarray:
    """
    Suppress probability in regions not connected to the foreground scribbles.

    A pixel is reachable when it is a foreground seed, or when it is
    8-connected to a seed through pixels that lie in the closed
    ``p0 >= threshold`` mask and whose intensity lies strictly between
    ``mean - lower_std * std`` and ``mean + upper_std * std`` of the seed
    intensities (sample standard deviation). Seeds get probability 1 and
    unreachable pixels are damped.

    Args:
        seed_label: Label image of the slice (127 marks foreground)
        p0: Raw foreground probability
        image: Intensity slice

    Returns:
        Refined probability map in [0, 1]
    """
    p0 = np.asarray(p0, dtype=np.float64)
    image = np.asarray(image, dtype=np.float64)
    seeds = np.asarray(seed_label) == FOREGROUND_LABEL

    p = p0.copy()
    if not seeds.any():
        logger.warning("No foreground seeds for connectivity processing, damping whole slice")
        return np.clip(p * damping, 0.0, 1.0)

    p_mask = morphology.close_mask(p0 >= threshold, close_radius)

    fg = image[seeds]
    fg_mean = fg.mean()
    fg_std = fg.std(ddof=1) if fg.size > 1 else 0.0
    fg_min = fg_mean - lower_std * fg_std
    fg_max = fg_mean + upper_std * fg_std
    logger.debug(f"Seed intensity band ({fg_min:.2f}, {fg_max:.2f})")

    admissible = p_mask & (image > fg_min) & (image < fg_max)

    # Region growing from the seeds through admissible pixels, as connected
    # components of (admissible | seeds) that contain a seed.
    components, _ = ndimage.label(admissible | seeds, structure=np.ones((3, 3), dtype=bool))
    seeded_components = np.unique(components[seeds])
    reached = np.isin(components, seeded_components) & (components > 0)

    p[seeds] = 1.0
    p[~reached] = p[~reached] * damping
    return np.clip(p, 0.0, 1.0)

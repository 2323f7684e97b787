"""
Core functionality for SlicSeg.

This package contains the building blocks of the propagation engine: volume
storage, feature extraction, the online classifier, morphology, seed label
generation, probability refinement, max-flow segmentation, configuration and
data I/O.
"""

from typing import Dict

from .config import SlicSegConfig, setup_logging
from .volume import ImageVolume
from .exceptions import (
    SlicSegError, ConfigurationError, RangeError, MissingSeedError,
    InsufficientTrainingDataError, SliceProcessingError
)
from .labels import ROI, get_segmentation_roi, get_seed_labels
from .probability import process_using_shape_prior, process_using_connectivity
from .graph_cut import interactive_maxflow, get_single_slice_segmentation
from .features import image_to_feature_matrix
from .classifier import OnlineRandomForest
from .data_io import load_volume, save_volume, load_scribble_image, load_seed_slice

__all__ = [
    'SlicSegConfig', 'setup_logging', 'ImageVolume',
    'SlicSegError', 'ConfigurationError', 'RangeError', 'MissingSeedError',
    'InsufficientTrainingDataError', 'SliceProcessingError',
    'ROI', 'get_segmentation_roi', 'get_seed_labels',
    'process_using_shape_prior', 'process_using_connectivity',
    'interactive_maxflow', 'get_single_slice_segmentation',
    'image_to_feature_matrix', 'OnlineRandomForest',
    'load_volume', 'save_volume', 'load_scribble_image', 'load_seed_slice',
    'check_dependencies', 'check_all_dependencies'
]


def check_dependencies(required: list) -> Dict[str, bool]:
    """Check if required dependencies are available.

    Args:
        required: List of module names to check

    Returns:
        Dictionary mapping module names to availability status
    """
    availability = {}
    for module in required:
        try:
            __import__(module)
            availability[module] = True
        except ImportError:
            availability[module] = False
    return availability


def check_all_dependencies() -> Dict[str, Dict[str, bool]]:
    """
    Check dependencies grouped by category.

    Returns:
        Dictionary with 'required' and 'io' dependency status
    """
    required_deps = ['numpy', 'scipy', 'skimage', 'sklearn', 'maxflow']
    io_deps = ['tifffile', 'h5py', 'PIL', 'yaml']

    return {
        'required': check_dependencies(required_deps),
        'io': check_dependencies(io_deps)
    }

"""
Propagation pipeline for SlicSeg.

Exposes the slice-propagation controller and its result types.
"""

from .slicseg_algorithm import (
    SlicSegAlgorithm, Direction, DirectionState, SliceResult, create_default_algorithm
)

__all__ = ['SlicSegAlgorithm', 'Direction', 'DirectionState', 'SliceResult', 'create_default_algorithm']

"""
Exception types raised by the SlicSeg segmentation engine.

Configuration problems are detected before any slice is processed; failures of
a collaborator (feature extraction, classifier, max-flow, morphology) while a
slice is being processed are reported as a SliceProcessingError that names the
slice and the stage.
"""

from typing import Optional


class SlicSegError(Exception):
    """Base class for all SlicSeg errors."""


class ConfigurationError(SlicSegError, ValueError):
    """Missing or invalid inputs or parameters (start index, seeds, ranges)."""


class RangeError(ConfigurationError):
    """Slice range outside the volume extent or not bracketing the start slice."""


class MissingSeedError(SlicSegError):
    """The start slice has no foreground scribbles."""


class InsufficientTrainingDataError(SlicSegError):
    """No labelled pixels are available to train a classifier."""


class SliceProcessingError(SlicSegError):
    """A collaborator failed while a slice was being segmented."""

    def __init__(self, slice_index: int, stage: str, message: Optional[str] = None):
        self.slice_index = slice_index
        self.stage = stage
        if message is None:
            message = f"Segmentation of slice {slice_index} failed during {stage}"
        super().__init__(message)

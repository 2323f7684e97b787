"""
Slice-addressable 3D image container.

Slice numbers are 1-based, matching the numbering shown to users; the
orientation is the numpy axis perpendicular to the slices.
"""

import logging
from typing import Tuple

import numpy as np

logger = logging.getLogger(__name__)


class ImageVolume:
    """Container for a 3D image that reads and writes 2D slices along an axis."""

    def __init__(self, data: np.ndarray, dtype=None):
        """
        Initialize image volume.

        Args:
            data: 3D numpy array containing the image data
            dtype: Optional dtype to convert the data to
        """
        data = np.asarray(data)
        if data.ndim != 3:
            raise ValueError(f"Expected 3D data, got {data.ndim}D")
        if dtype is not None:
            data = data.astype(dtype)
        self.data = data

    @classmethod
    def zeros(cls, shape: Tuple[int, int, int], dtype=np.uint8) -> "ImageVolume":
        """Create an empty volume of the given shape."""
        return cls(np.zeros(shape, dtype=dtype))

    @property
    def shape(self) -> Tuple[int, int, int]:
        """Get the shape of the data."""
        return self.data.shape

    @property
    def dtype(self):
        return self.data.dtype

    def get_max_slice_number(self, orientation: int) -> int:
        """Number of slices along the orientation axis."""
        _check_orientation(orientation)
        return self.data.shape[orientation]

    def get_slice_size(self, orientation: int) -> Tuple[int, int]:
        """Shape of a 2D slice perpendicular to the orientation axis."""
        _check_orientation(orientation)
        return tuple(s for axis, s in enumerate(self.data.shape) if axis != orientation)

    def _index(self, slice_number: int, orientation: int) -> tuple:
        max_slice = self.get_max_slice_number(orientation)
        if not 1 <= slice_number <= max_slice:
            raise IndexError(f"Slice {slice_number} out of range [1, {max_slice}] for axis {orientation}")
        index = [slice(None)] * 3
        index[orientation] = slice_number - 1
        return tuple(index)

    def get_2d_slice(self, slice_number: int, orientation: int) -> np.ndarray:
        """Get a copy of a 2D slice."""
        return self.data[self._index(slice_number, orientation)].copy()

    def replace_slice(self, slice_data: np.ndarray, slice_number: int, orientation: int) -> None:
        """Overwrite a 2D slice."""
        slice_data = np.asarray(slice_data)
        expected = self.get_slice_size(orientation)
        if slice_data.shape != expected:
            raise ValueError(f"Slice shape {slice_data.shape} does not match {expected}")
        self.data[self._index(slice_number, orientation)] = slice_data

    def set_pixel_value(self, row: int, col: int, slice_number: int, orientation: int, value) -> None:
        """Set one pixel, addressed by 1-based in-slice row/column and slice number."""
        index = list(self._index(slice_number, orientation))
        in_plane = [axis for axis in range(3) if axis != orientation]
        index[in_plane[0]] = row - 1
        index[in_plane[1]] = col - 1
        self.data[tuple(index)] = value


def _check_orientation(orientation: int) -> None:
    if orientation not in (0, 1, 2):
        raise ValueError(f"Orientation must be 0, 1, or 2, got {orientation}")

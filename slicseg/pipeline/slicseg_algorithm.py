"""
Slic-Seg propagation engine.

Segments a structure in a 3D volume from scribbles drawn on a single slice
(Wang et al., "Slic-Seg: A Minimally Interactive Segmentation of the Placenta
from Sparse and Motion-Corrupted Fetal MRI in Multiple Views").

To run the algorithm:
    - create a SlicSegAlgorithm
    - set ``volume_image`` to a 3D array
    - set ``start_index`` (1-based slice number) and the scribbles of that
      slice through ``set_seed_slice``, ``seed_image`` or ``add_seeds``
    - call ``start_slice_segmentation()`` to segment the start slice
    - optionally set ``slice_range`` to (first, last) slice numbers
    - call ``segmentation_propagate()`` to propagate to the neighbouring slices

Two classifiers are kept, one per propagation direction, so that each adapts
to the anatomy it walks through without being disturbed by the other.
"""

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Any, Iterator, List, NamedTuple, Optional, Tuple, Union

import numpy as np

from ..core.classifier import OnlineRandomForest, PixelClassifier
from ..core.config import SlicSegConfig
from ..core.exceptions import (
    SlicSegError, ConfigurationError, RangeError, MissingSeedError,
    InsufficientTrainingDataError, SliceProcessingError
)
from ..core.features import image_to_feature_matrix, FeatureExtractor
from ..core.graph_cut import interactive_maxflow, get_single_slice_segmentation, EnergyMinimizer
from ..core.labels import (
    FOREGROUND_LABEL, BACKGROUND_LABEL, get_seed_labels, get_segmentation_roi,
    add_border_background, validate_labels, segmentation_to_labels
)
from ..core.morphology import distance_to_labels
from ..core.probability import process_using_shape_prior, process_using_connectivity
from ..core.volume import ImageVolume

logger = logging.getLogger(__name__)


class Direction(Enum):
    """Propagation direction away from the start slice."""
    BACKWARD = 'backward'
    FORWARD = 'forward'


@dataclass
class DirectionState:
    """Classifier and bookkeeping owned by one propagation direction."""
    direction: Direction
    classifier: PixelClassifier
    n_updates: int = 0
    last_slice: Optional[int] = None


class SliceResult(NamedTuple):
    """Outcome of segmenting one slice, passed to progress callbacks.

    Attributes:
        slice_index: 1-based slice number
        direction: Propagation direction, None for the start slice
        segmentation: Full-size binary segmentation of the slice
        probability: Full-size foreground probability of the slice
        skipped: True if the prior was too small and the slice was left empty
    """
    slice_index: int
    direction: Optional[Direction]
    segmentation: np.ndarray
    probability: np.ndarray
    skipped: bool = False


ProgressCallback = Callable[[SliceResult], None]
ClassifierFactory = Callable[[], PixelClassifier]


class SlicSegAlgorithm:
    """Interactive slice-by-slice segmentation with two directional classifiers."""

    def __init__(self, config: Optional[SlicSegConfig] = None,
                 classifier_factory: Optional[ClassifierFactory] = None,
                 feature_extractor: Optional[FeatureExtractor] = None,
                 energy_minimizer: Optional[EnergyMinimizer] = None):
        """
        Initialize the algorithm.

        Args:
            config: Configuration object (creates default if None)
            classifier_factory: Creates one classifier per direction
            feature_extractor: Maps a 2D slice to a per-pixel feature matrix
            energy_minimizer: Max-flow style solver for single slices
        """
        self.config = config if config is not None else SlicSegConfig()

        algorithm = self.config.get_section('algorithm')
        self._orientation = algorithm['orientation']
        self._lambda_val = float(algorithm['lambda'])
        self._sigma = float(algorithm['sigma'])
        self._inner_dis = int(algorithm['inner_dis'])
        self._outer_dis = int(algorithm['outer_dis'])
        self._start_index: Optional[int] = None
        self._slice_range: Optional[Tuple[int, int]] = None

        self._propagation = self.config.get_section('propagation')
        self._connectivity = self.config.get_section('connectivity')
        self._seeds = self.config.get_section('seeds')

        self._classifier_factory = classifier_factory or self._default_classifier_factory
        self._feature_extractor = feature_extractor or image_to_feature_matrix
        self._energy_minimizer = energy_minimizer or interactive_maxflow

        self._volume: Optional[ImageVolume] = None
        self._seed: Optional[ImageVolume] = None
        self._seg: Optional[ImageVolume] = None
        self._probability: Optional[ImageVolume] = None
        self._directions: Dict[Direction, DirectionState] = {}
        self._start_done = False

        self._progress_callbacks: List[ProgressCallback] = []
        self._cancel_event = threading.Event()
        self.processing_history: List[Dict[str, Any]] = []

    def _default_classifier_factory(self) -> PixelClassifier:
        return OnlineRandomForest(**self.config.get_section('classifier'))

    # ------------------------------------------------------------------
    # Inputs and parameters
    # ------------------------------------------------------------------

    @property
    def volume_image(self) -> Optional[np.ndarray]:
        """3D input volume."""
        return None if self._volume is None else self._volume.data

    @volume_image.setter
    def volume_image(self, volume: Optional[Union[np.ndarray, ImageVolume]]) -> None:
        if volume is None:
            self._volume = None
        elif isinstance(volume, ImageVolume):
            self._volume = volume
        else:
            try:
                self._volume = ImageVolume(volume)
            except ValueError as e:
                raise ConfigurationError(str(e)) from e
        self._directions = {}
        self.reset_seed_points()
        self.reset_segmentation_result()
        if self._volume is not None:
            logger.info(f"Volume set with shape {self._volume.shape}")

    @property
    def seed_image(self) -> Optional[np.ndarray]:
        """3D seed label volume (0 unlabelled, 127 foreground, 255 background)."""
        return None if self._seed is None else self._seed.data

    @seed_image.setter
    def seed_image(self, seeds: np.ndarray) -> None:
        self._require_volume()
        seeds = np.asarray(seeds)
        if seeds.shape != self._volume.shape:
            raise ConfigurationError(f"Seed image shape {seeds.shape} does not match volume {self._volume.shape}")
        try:
            validate_labels(seeds)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e
        self._seed = ImageVolume(seeds, dtype=np.uint8)

    @property
    def orientation(self) -> int:
        """Numpy axis perpendicular to the slices."""
        return self._orientation

    @orientation.setter
    def orientation(self, orientation: int) -> None:
        if orientation not in (0, 1, 2):
            raise ConfigurationError(f"orientation must be 0, 1 or 2, got {orientation}")
        self._orientation = orientation
        self._directions = {}
        self.reset_seed_points()
        self.reset_segmentation_result()

    @property
    def start_index(self) -> Optional[int]:
        return self._start_index

    @start_index.setter
    def start_index(self, index: Optional[int]) -> None:
        self._start_index = None if index is None else int(index)

    @property
    def slice_range(self) -> Optional[Tuple[int, int]]:
        """(first, last) slice numbers of the propagation; None for the whole axis."""
        return self._slice_range

    @slice_range.setter
    def slice_range(self, slice_range: Optional[Tuple[int, int]]) -> None:
        if slice_range is None:
            self._slice_range = None
            return
        if len(slice_range) != 2:
            raise ConfigurationError(f"slice_range must contain two slice numbers, got {slice_range}")
        low, high = int(slice_range[0]), int(slice_range[1])
        if low > high:
            raise ConfigurationError(f"slice_range minimum {low} is greater than maximum {high}")
        self._slice_range = (low, high)

    @property
    def lambda_val(self) -> float:
        return self._lambda_val

    @lambda_val.setter
    def lambda_val(self, value: float) -> None:
        if value <= 0:
            raise ConfigurationError(f"lambda must be > 0, got {value}")
        self._lambda_val = float(value)
        self.reset_segmentation_result()

    @property
    def sigma(self) -> float:
        return self._sigma

    @sigma.setter
    def sigma(self, value: float) -> None:
        if value <= 0:
            raise ConfigurationError(f"sigma must be > 0, got {value}")
        self._sigma = float(value)
        self.reset_segmentation_result()

    @property
    def inner_dis(self) -> int:
        return self._inner_dis

    @inner_dis.setter
    def inner_dis(self, value: int) -> None:
        if value < 0:
            raise ConfigurationError(f"inner_dis must be >= 0, got {value}")
        self._inner_dis = int(value)
        self.reset_segmentation_result()

    @property
    def outer_dis(self) -> int:
        return self._outer_dis

    @outer_dis.setter
    def outer_dis(self, value: int) -> None:
        if value < 0:
            raise ConfigurationError(f"outer_dis must be >= 0, got {value}")
        self._outer_dis = int(value)
        self.reset_segmentation_result()

    # ------------------------------------------------------------------
    # Outputs
    # ------------------------------------------------------------------

    @property
    def seg_image(self) -> Optional[np.ndarray]:
        """3D binary segmentation result."""
        return None if self._seg is None else self._seg.data

    @property
    def probability_image(self) -> Optional[np.ndarray]:
        """3D foreground probability."""
        return None if self._probability is None else self._probability.data

    def direction_state(self, direction: Direction) -> Optional[DirectionState]:
        return self._directions.get(direction)

    # ------------------------------------------------------------------
    # Progress and cancellation
    # ------------------------------------------------------------------

    def add_progress_callback(self, callback: ProgressCallback) -> None:
        """Register a callable invoked with a SliceResult after each slice."""
        self._progress_callbacks.append(callback)

    def remove_progress_callback(self, callback: ProgressCallback) -> None:
        self._progress_callbacks.remove(callback)

    def cancel(self) -> None:
        """Stop a running propagation at the next slice boundary."""
        logger.info("Cancellation requested")
        self._cancel_event.set()

    # ------------------------------------------------------------------
    # Seeds
    # ------------------------------------------------------------------

    def get_seed_slice(self, index: int) -> np.ndarray:
        self._require_volume()
        self._check_slice_number(index)
        return self._seed.get_2d_slice(index, self._orientation)

    def set_seed_slice(self, index: int, labels: np.ndarray) -> None:
        """Replace the scribbles of one slice."""
        self._require_volume()
        self._check_slice_number(index)
        labels = np.asarray(labels)
        try:
            validate_labels(labels)
            self._seed.replace_slice(labels.astype(np.uint8), index, self._orientation)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

    def add_seeds(self, points, is_foreground: bool) -> None:
        """
        Paint square brush strokes into the seed image.

        Args:
            points: (row, col, slice) triples with 1-based coordinates, or a flat
                sequence of them
            is_foreground: Paint foreground (127) if True, background (255) otherwise
        """
        self._require_volume()
        points = np.asarray(points, dtype=int).reshape(-1, 3)
        label = FOREGROUND_LABEL if is_foreground else BACKGROUND_LABEL
        radius = self._seeds['brush_radius']
        height, width = self._seed.get_slice_size(self._orientation)

        for row, col, index in points:
            self._check_slice_number(index)
            for r in range(max(1, row - radius), min(height, row + radius) + 1):
                for c in range(max(1, col - radius), min(width, col + radius) + 1):
                    self._seed.set_pixel_value(r, c, index, self._orientation, label)

        logger.debug(f"Added {len(points)} {'foreground' if is_foreground else 'background'} seed strokes")

    # ------------------------------------------------------------------
    # Resets
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Drop the volume, classifiers, seeds and results."""
        self._directions = {}
        self.volume_image = None

    def reset_segmentation_result(self) -> None:
        """Delete the current segmentation and probability volumes."""
        self._start_done = False
        if self._volume is None:
            self._seg = None
            self._probability = None
            return
        self._seg = ImageVolume.zeros(self._volume.shape, dtype=np.uint8)
        self._probability = ImageVolume.zeros(self._volume.shape, dtype=np.float64)

    def reset_seed_points(self) -> None:
        """Delete the current seed points."""
        if self._volume is None:
            self._seed = None
            return
        self._seed = ImageVolume.zeros(self._volume.shape, dtype=np.uint8)

    # ------------------------------------------------------------------
    # Segmentation
    # ------------------------------------------------------------------

    def run_segmentation(self, parallel: Optional[bool] = None) -> None:
        """Segment the start slice and propagate to the slice range."""
        self._require_volume()
        if self._start_index is not None:
            self._check_slice_range()
        self.start_slice_segmentation()
        self.segmentation_propagate(parallel=parallel)

    def start_slice_segmentation(self) -> SliceResult:
        """
        Segment the slice given by ``start_index`` from its scribbles.

        Both directional classifiers are created afresh and trained on the same
        scribbles.

        Returns:
            SliceResult of the start slice
        """
        self._require_volume()
        if self._start_index is None:
            logger.error("start_index is not set")
            raise ConfigurationError("start_index must be set before calling start_slice_segmentation()")
        max_slice = self._volume.get_max_slice_number(self._orientation)
        if not 1 <= self._start_index <= max_slice:
            message = f"start_index {self._start_index} is outside [1, {max_slice}] for orientation {self._orientation}"
            logger.error(message)
            raise ConfigurationError(message)

        start_time = time.time()
        index = self._start_index
        self._cancel_event.clear()
        logger.info(f"Segmenting start slice {index}")

        seed_labels = self._get_start_seed_labels()
        volume_slice = self._volume.get_2d_slice(index, self._orientation)

        self._directions = {
            direction: DirectionState(direction, self._classifier_factory())
            for direction in (Direction.BACKWARD, Direction.FORWARD)
        }
        trained = [self._train(state, seed_labels, volume_slice, index) for state in self._directions.values()]
        if not all(trained):
            logger.error(f"No labelled pixels on start slice {index}")
            raise InsufficientTrainingDataError("Please add more scribbles to create an appropriate training set")
        for state in self._directions.values():
            state.last_slice = index

        state = self._directions[Direction.FORWARD]
        with self._stage(index, 'prediction'):
            p0 = self._predict(state, volume_slice)
        with self._stage(index, 'connectivity processing'):
            probability_slice = process_using_connectivity(
                seed_labels, p0, volume_slice,
                threshold=self._connectivity['threshold'],
                close_radius=self._connectivity['close_radius'],
                lower_std=self._connectivity['lower_std'],
                upper_std=self._connectivity['upper_std'],
                damping=self._connectivity['damping']
            )
        with self._stage(index, 'energy minimization'):
            segmentation_slice = self._segment(seed_labels, volume_slice, probability_slice)

        self._start_done = True
        result = self._update_results(index, segmentation_slice, probability_slice, None)

        duration = time.time() - start_time
        self.processing_history.append({
            'step': 'start_slice_segmentation',
            'duration': duration,
            'parameters': self._parameters(),
            'result': {'slice': index, 'foreground_pixels': int(segmentation_slice.sum())}
        })
        logger.info(f"Start slice {index} segmented: {int(segmentation_slice.sum())} foreground pixels, "
                    f"duration {duration:.2f}s")
        return result

    def segmentation_propagate(self, parallel: Optional[bool] = None) -> Dict[Direction, int]:
        """
        Propagate the start slice segmentation in both directions.

        Args:
            parallel: Run the two directions on separate threads; defaults to
                the processing.parallel.enabled configuration value

        Returns:
            Number of slices processed per direction
        """
        min_slice, max_slice = self._get_propagation_bounds()
        if parallel is None:
            parallel = bool(self.config.get('processing.parallel.enabled', False))

        start_time = time.time()
        self._cancel_event.clear()
        logger.info(f"Propagating from slice {self._start_index} over [{min_slice}, {max_slice}]"
                    f"{' in parallel' if parallel else ''}")

        directions = (Direction.BACKWARD, Direction.FORWARD)
        if parallel:
            with ThreadPoolExecutor(max_workers=2, thread_name_prefix='slicseg') as executor:
                futures = {direction: executor.submit(self._run_direction, direction) for direction in directions}
                counts = {direction: future.result() for direction, future in futures.items()}
        else:
            counts = {direction: self._run_direction(direction) for direction in directions}

        duration = time.time() - start_time
        self.processing_history.append({
            'step': 'segmentation_propagate',
            'duration': duration,
            'parameters': {'slice_range': [min_slice, max_slice], 'parallel': parallel},
            'result': {direction.value: count for direction, count in counts.items()}
        })
        logger.info(f"Propagation completed: {counts[Direction.BACKWARD]} backward, "
                    f"{counts[Direction.FORWARD]} forward slices, duration {duration:.2f}s")
        return counts

    def iter_propagation(self, direction: Direction) -> Iterator[SliceResult]:
        """
        Lazily propagate in one direction, yielding one SliceResult per slice.

        Each slice uses the previously yielded slice (initially the start slice)
        as its prior. Iteration stops early if ``cancel()`` is called.
        """
        min_slice, max_slice = self._get_propagation_bounds()
        if direction is Direction.BACKWARD:
            indices = range(self._start_index - 1, min_slice - 1, -1)
        else:
            indices = range(self._start_index + 1, max_slice + 1)

        prior = self._start_index
        for current in indices:
            if self._cancel_event.is_set():
                logger.info(f"{direction.value} propagation cancelled before slice {current}")
                return
            yield self.propagate_and_train(current, prior, direction)
            prior = current

    def _run_direction(self, direction: Direction) -> int:
        processed = 0
        skipped = []
        for result in self.iter_propagation(direction):
            processed += 1
            if result.skipped:
                skipped.append(result.slice_index)
        if skipped:
            logger.warning(f"{direction.value} propagation left {len(skipped)} slices empty "
                           f"(prior too small): {skipped}")
        return processed

    def propagate_and_train(self, current_index: int, prior_index: int, direction: Direction) -> SliceResult:
        """
        Segment one slice using its already-segmented neighbour as prior and
        update the direction's classifier with the new segmentation.

        Args:
            current_index: Slice to segment
            prior_index: Neighbouring slice whose segmentation is the prior
            direction: Direction whose classifier is used and retrained

        Returns:
            SliceResult of the current slice
        """
        state = self._directions.get(direction)
        if state is None:
            logger.error(f"No {direction.value} classifier, start slice not segmented")
            raise ConfigurationError("start_slice_segmentation() must be run before propagation")

        current_slice = self._volume.get_2d_slice(current_index, self._orientation)
        prior_seg = self._seg.get_2d_slice(prior_index, self._orientation)
        slice_shape = prior_seg.shape

        if np.count_nonzero(prior_seg) <= self._propagation['min_prior_pixels']:
            logger.debug(f"Slice {current_index}: prior slice {prior_index} too small, leaving it empty")
            return self._update_results(current_index, np.zeros(slice_shape, dtype=np.uint8),
                                        np.zeros(slice_shape), direction, skipped=True)

        roi = get_segmentation_roi(prior_seg, self._propagation['roi_margin'])
        roi_current = roi.crop(current_slice)
        roi_prior = roi.crop(prior_seg)

        with self._stage(current_index, 'prediction'):
            roi_p0 = self._predict(state, roi_current)
        with self._stage(current_index, 'shape prior'):
            roi_probability = process_using_shape_prior(
                roi_p0, roi_prior,
                outside_threshold=self._propagation['outside_threshold'],
                outside_damping=self._propagation['outside_damping'],
                inside_threshold=self._propagation['inside_threshold'],
                inside_boost=self._propagation['inside_boost']
            )
        with self._stage(current_index, 'seed labels'):
            prior_seed_label, _ = get_seed_labels(roi_prior, self._inner_dis, self._outer_dis,
                                                  self._propagation['min_eroded_pixels'])
        with self._stage(current_index, 'energy minimization'):
            roi_seg = self._segment(prior_seed_label, roi_current, roi_probability)
        with self._stage(current_index, 'training labels'):
            _, current_train_label = get_seed_labels(roi_seg, self._inner_dis, self._outer_dis,
                                                     self._propagation['min_eroded_pixels'])
        self._train(state, current_train_label, roi_current, current_index)
        state.last_slice = current_index

        segmentation_slice = roi.paste(roi_seg, slice_shape, dtype=np.uint8)
        probability_slice = roi.paste(roi_probability, slice_shape, dtype=np.float64)
        logger.debug(f"Slice {current_index} ({direction.value}): ROI {tuple(roi)}, "
                     f"{int(roi_seg.sum())} foreground pixels")
        return self._update_results(current_index, segmentation_slice, probability_slice, direction)

    def refine(self, slice_index: int) -> np.ndarray:
        """
        Re-segment one slice after the user edited its scribbles.

        Away from the scribbles the current segmentation is used as hard labels,
        then max-flow is re-run with the stored probability map. The classifiers
        are not retrained.

        Returns:
            The refined segmentation slice
        """
        self._require_volume()
        self._check_slice_number(slice_index)

        image_slice = self._volume.get_2d_slice(slice_index, self._orientation)
        seed_slice = self._seed.get_2d_slice(slice_index, self._orientation)
        probability_slice = self._probability.get_2d_slice(slice_index, self._orientation)
        init_labels = segmentation_to_labels(self._seg.get_2d_slice(slice_index, self._orientation))

        far = distance_to_labels(seed_slice) > self._seeds['refine_radius']
        seed_slice[far] = init_labels[far]

        with self._stage(slice_index, 'energy minimization'):
            segmentation_slice = self._segment(seed_slice, image_slice, probability_slice)
        self._seg.replace_slice(segmentation_slice, slice_index, self._orientation)

        self.processing_history.append({
            'step': 'refine',
            'parameters': {'slice': slice_index},
            'result': {'foreground_pixels': int(segmentation_slice.sum())}
        })
        logger.info(f"Refined slice {slice_index}: {int(segmentation_slice.sum())} foreground pixels")
        return segmentation_slice

    def get_status(self) -> Dict[str, Any]:
        """Get current algorithm status."""
        return {
            'volume_loaded': self._volume is not None,
            'volume_shape': None if self._volume is None else self._volume.shape,
            'start_slice_segmented': self._start_done,
            'classifier_updates': {d.value: s.n_updates for d, s in self._directions.items()},
            'processing_steps_completed': len(self.processing_history),
            'parameters': self._parameters()
        }

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @contextmanager
    def _stage(self, slice_index: int, stage: str):
        """Report collaborator failures as SliceProcessingError."""
        try:
            yield
        except SlicSegError:
            raise
        except Exception as e:
            logger.error(f"Slice {slice_index}: {stage} failed: {e}")
            raise SliceProcessingError(slice_index, stage) from e

    def _require_volume(self) -> None:
        if self._volume is None:
            logger.error("No volume loaded")
            raise ConfigurationError("volume_image must be set first")

    def _check_slice_number(self, index: int) -> None:
        max_slice = self._volume.get_max_slice_number(self._orientation)
        if not 1 <= index <= max_slice:
            message = f"Slice {index} is outside [1, {max_slice}] for orientation {self._orientation}"
            logger.error(message)
            raise ConfigurationError(message)

    def _get_start_seed_labels(self) -> np.ndarray:
        label = self._seed.get_2d_slice(self._start_index, self._orientation)
        if not np.any(label == FOREGROUND_LABEL):
            logger.error(f"No foreground scribbles on start slice {self._start_index}")
            raise MissingSeedError(f"Scribbles for foreground should be provided on slice {self._start_index}")
        return add_border_background(label, self._seeds['border_step'], self._seeds['border_offset'])

    def _check_slice_range(self) -> Tuple[int, int]:
        """Resolve ``slice_range`` against the volume and the start slice."""
        max_slice_index = self._volume.get_max_slice_number(self._orientation)
        if self._slice_range is None:
            return 1, max_slice_index
        min_slice, max_slice = self._slice_range
        if min_slice < 1 or max_slice > max_slice_index:
            message = (f"Slice range [{min_slice}, {max_slice}] is out of range [1, {max_slice_index}] "
                       f"for orientation {self._orientation}")
            logger.error(message)
            raise RangeError(message)
        if not min_slice <= self._start_index <= max_slice:
            message = f"Slice range [{min_slice}, {max_slice}] does not contain start slice {self._start_index}"
            logger.error(message)
            raise RangeError(message)
        return min_slice, max_slice

    def _get_propagation_bounds(self) -> Tuple[int, int]:
        if not self._start_done:
            logger.error("Propagation requested before the start slice was segmented")
            raise ConfigurationError("start_slice_segmentation() must complete before propagation")
        return self._check_slice_range()

    def _train(self, state: DirectionState, train_label: np.ndarray, image: np.ndarray, slice_index: int) -> bool:
        """Update a direction's classifier with the labelled pixels of a slice."""
        flat_label = np.asarray(train_label).ravel()
        foreground = flat_label == FOREGROUND_LABEL
        background = flat_label == BACKGROUND_LABEL
        n_fg, n_bg = int(foreground.sum()), int(background.sum())
        if n_fg + n_bg == 0:
            return False

        with self._stage(slice_index, 'feature extraction'):
            features = self._feature_extractor(image)
        training_set = np.vstack([features[foreground], features[background]])
        training_label = np.concatenate([np.ones(n_fg), np.zeros(n_bg)])
        with self._stage(slice_index, 'training'):
            state.classifier.train(training_set, training_label)
        state.n_updates += 1
        logger.debug(f"{state.direction.value} classifier trained on slice {slice_index}: "
                     f"{n_fg} foreground, {n_bg} background samples")
        return True

    def _predict(self, state: DirectionState, image: np.ndarray) -> np.ndarray:
        features = self._feature_extractor(image)
        probability = np.asarray(state.classifier.predict(features), dtype=np.float64)
        return probability.reshape(image.shape)

    def _segment(self, seed_label: np.ndarray, image: np.ndarray, probability: np.ndarray) -> np.ndarray:
        return get_single_slice_segmentation(
            seed_label, image, probability, self._lambda_val, self._sigma,
            minimizer=self._energy_minimizer,
            clean_radius=self._propagation['clean_radius']
        )

    def _update_results(self, index: int, segmentation_slice: np.ndarray, probability_slice: np.ndarray,
                        direction: Optional[Direction], skipped: bool = False) -> SliceResult:
        self._seg.replace_slice(segmentation_slice, index, self._orientation)
        self._probability.replace_slice(probability_slice, index, self._orientation)
        result = SliceResult(index, direction, segmentation_slice, probability_slice, skipped)
        for callback in list(self._progress_callbacks):
            callback(result)
        return result

    def _parameters(self) -> Dict[str, Any]:
        return {
            'lambda': self._lambda_val,
            'sigma': self._sigma,
            'inner_dis': self._inner_dis,
            'outer_dis': self._outer_dis,
            'orientation': self._orientation,
            'start_index': self._start_index,
            'slice_range': self._slice_range
        }


def create_default_algorithm(config_path: Optional[Union[str, Path]] = None) -> SlicSegAlgorithm:
    """
    Create a SlicSegAlgorithm with default or file-based configuration.

    Args:
        config_path: Optional path to configuration file

    Returns:
        Configured SlicSegAlgorithm instance
    """
    config = SlicSegConfig(config_path) if config_path else SlicSegConfig()
    return SlicSegAlgorithm(config=config)

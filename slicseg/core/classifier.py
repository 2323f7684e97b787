"""
Online pixel classifier used by the propagation engine.

scikit-learn forests are batch learners, so online behaviour is obtained by
keeping a bounded reservoir of training samples: every update appends the new
samples, subsamples the reservoir back to its capacity, and refits the forest.
Recent slices therefore keep influencing the model while older evidence is
gradually diluted.
"""

import logging
from typing import Optional, Protocol

import numpy as np
from sklearn.ensemble import RandomForestClassifier

logger = logging.getLogger(__name__)


class PixelClassifier(Protocol):
    """Contract of the classifiers driven by the propagation controller."""

    def train(self, features: np.ndarray, labels: np.ndarray) -> None:
        ...

    def predict(self, features: np.ndarray) -> np.ndarray:
        ...


class OnlineRandomForest:
    """Random forest that can be retrained incrementally on new samples."""

    def __init__(self, n_estimators: int = 20, max_depth: Optional[int] = 8,
                 min_samples_leaf: int = 20, max_samples: int = 20000,
                 random_state: Optional[int] = 0):
        """
        Initialize online random forest.

        Args:
            n_estimators: Number of trees
            max_depth: Maximum tree depth
            min_samples_leaf: Minimum number of samples in a leaf
            max_samples: Capacity of the training sample reservoir
            random_state: Seed for tree construction and reservoir subsampling
        """
        self.n_estimators = n_estimators
        self.max_depth = max_depth
        self.min_samples_leaf = min_samples_leaf
        self.max_samples = max_samples
        self.random_state = random_state

        self._rng = np.random.default_rng(random_state)
        self._features: Optional[np.ndarray] = None
        self._labels: Optional[np.ndarray] = None
        self._forest: Optional[RandomForestClassifier] = None
        self.n_updates = 0

    @property
    def is_trained(self) -> bool:
        return self._labels is not None

    @property
    def n_samples(self) -> int:
        return 0 if self._labels is None else int(self._labels.size)

    def train(self, features: np.ndarray, labels: np.ndarray) -> None:
        """
        Add labelled samples and refit.

        Args:
            features: (N, F) feature matrix
            labels: (N,) binary labels, 1 for foreground
        """
        features = np.asarray(features, dtype=np.float64)
        labels = np.asarray(labels).astype(np.int64).ravel()
        if features.ndim != 2 or features.shape[0] != labels.size:
            raise ValueError(f"features {features.shape} and labels {labels.shape} do not match")
        if labels.size == 0:
            raise ValueError("Cannot train on an empty sample set")

        if self._features is None:
            self._features, self._labels = features, labels
        else:
            self._features = np.vstack([self._features, features])
            self._labels = np.concatenate([self._labels, labels])

        if self._labels.size > self.max_samples:
            keep = np.sort(self._rng.choice(self._labels.size, self.max_samples, replace=False))
            self._features = self._features[keep]
            self._labels = self._labels[keep]

        self._forest = None
        if np.unique(self._labels).size > 1:
            self._forest = RandomForestClassifier(
                n_estimators=self.n_estimators,
                max_depth=self.max_depth,
                min_samples_leaf=self.min_samples_leaf,
                random_state=self.random_state,
                n_jobs=1
            )
            self._forest.fit(self._features, self._labels)

        self.n_updates += 1
        logger.debug(f"Forest update {self.n_updates}: {labels.size} new samples, "
                     f"{self._labels.size} in reservoir")

    def predict(self, features: np.ndarray) -> np.ndarray:
        """Foreground probability for each row of the feature matrix."""
        if not self.is_trained:
            raise RuntimeError("Classifier has not been trained")
        features = np.asarray(features, dtype=np.float64)

        if self._forest is None:
            # Only one class seen so far
            return np.full(features.shape[0], float(self._labels[0]))

        proba = self._forest.predict_proba(features)
        classes = list(self._forest.classes_)
        return proba[:, classes.index(1)]

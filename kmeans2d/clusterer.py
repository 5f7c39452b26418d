import numbers
from collections.abc import Mapping
from dataclasses import dataclass
from typing import NamedTuple, Tuple

import numpy as np
import pandas as pd
from sklearn.exceptions import NotFittedError

from kmeans2d.errors import (
    EmptyDataset,
    InsufficientPoints,
    InvalidArgument,
    InvalidCentroid,
)
from kmeans2d.metrics import compute_all_metrics
from kmeans2d.plotter import print_visualization


DEFAULT_MAX_ITERATIONS = 100


class Point(NamedTuple):
    x: float
    y: float


@dataclass(frozen=True, eq=False)
class KMeansResult:
    """
    Snapshot of one successful ``fit`` call.

    ``centroids[i]`` is the mean of ``clusters[i]`` (or the carried-forward
    centroid when that cluster ended up empty), and ``labels[j]`` is the
    cluster index of the j-th input point.
    """
    centroids: Tuple[Point, ...]
    clusters: Tuple[Tuple[Point, ...], ...]
    labels: np.ndarray
    n_iter: int
    converged: bool


class NumpyRandomSource:
    """Uniform index source backed by an unseeded numpy Generator."""

    def __init__(self):
        self._rng = np.random.default_rng()

    def next_index(self, n):
        return int(self._rng.integers(0, n))


class SequenceRandomSource:
    """
    Replays a fixed sequence of indices.

    Meant for tests that need a known initialization; raises once the
    sequence is used up.
    """

    def __init__(self, indices):
        self._indices = iter(list(indices))

    def next_index(self, n):
        try:
            return next(self._indices)
        except StopIteration:
            raise RuntimeError("SequenceRandomSource ran out of indices") from None


def _as_pair(point):
    if isinstance(point, Mapping):
        x, y = point["x"], point["y"]
    elif hasattr(point, "x") and hasattr(point, "y"):
        x, y = point.x, point.y
    else:
        x, y = point
    if isinstance(x, (str, bytes)) or isinstance(y, (str, bytes)):
        raise TypeError("Point coordinates must be real numbers, not text.")
    return x, y


def _to_points(X):
    return tuple(Point(float(x), float(y)) for x, y in X)


class KMeansClusterer:
    """
    Lloyd's k-means over two-dimensional points.

    Each iteration assigns every point to its nearest centroid (ties go to the
    lowest centroid index) and moves every centroid to the mean of its
    cluster. Iteration stops once the recomputed centroids are exactly equal
    to the current ones, or after ``max_iterations`` cycles.
    """

    def __init__(self, n_clusters, max_iterations=DEFAULT_MAX_ITERATIONS, random_source=None):
        if (
            isinstance(n_clusters, bool)
            or not isinstance(n_clusters, numbers.Integral)
            or n_clusters <= 0
        ):
            raise InvalidArgument(
                "The number of clusters (k) must be a positive integer."
            )
        self.n_clusters = int(n_clusters)
        self.max_iterations = max_iterations
        self.random_source = random_source if random_source is not None else NumpyRandomSource()

        self.centroids_ = ()
        self.clusters_ = ()
        self.labels_ = None
        self.n_iter_ = 0
        self.converged_ = False
        self.X_ = None
        self.result_ = None

    # ── input handling ────────────────────────────────────────────────────────

    def _validate_input(self, points):
        if points is None:
            raise EmptyDataset("The dataset cannot be empty.")

        try:
            if isinstance(points, pd.DataFrame):
                if {"x", "y"}.issubset(points.columns):
                    frame = points[["x", "y"]]
                else:
                    frame = points.iloc[:, :2]
                if not all(pd.api.types.is_numeric_dtype(dt) for dt in frame.dtypes):
                    raise TypeError("DataFrame coordinate columns must be numeric.")
                X = frame.to_numpy(dtype=float)
            elif isinstance(points, np.ndarray):
                if points.dtype.kind in "USO":
                    X = np.array([_as_pair(p) for p in points], dtype=float)
                else:
                    X = points.astype(float)
            else:
                X = np.array([_as_pair(p) for p in points], dtype=float)
        except (TypeError, ValueError, KeyError) as exc:
            raise InvalidArgument(
                "Points must be (x, y) pairs, mappings with 'x'/'y' keys "
                "or objects with x/y attributes."
            ) from exc

        if X.ndim == 0:
            raise InvalidArgument("Points must be given as a sequence.")
        if len(X) == 0:
            raise EmptyDataset("The dataset cannot be empty.")
        if X.ndim != 2 or X.shape[1] != 2:
            raise InvalidArgument(
                f"Points must be two-dimensional, got array of shape {X.shape}."
            )
        return X

    def _centroid_array(self, centroids):
        if centroids is None:
            self._check_is_fitted()
            return np.array(self.centroids_, dtype=float)
        C = self._validate_input(centroids)
        if len(C) != self.n_clusters:
            raise InvalidArgument(
                f"Expected {self.n_clusters} centroids, got {len(C)}."
            )
        return C

    def _check_is_fitted(self):
        if self.result_ is None:
            raise NotFittedError(
                "This KMeansClusterer instance is not fitted yet. "
                "Call 'fit' with appropriate arguments first."
            )

    # ── algorithm steps ───────────────────────────────────────────────────────

    @staticmethod
    def distance(p1, p2):
        """Euclidean distance between two points."""
        (x1, y1), (x2, y2) = _as_pair(p1), _as_pair(p2)
        return float(np.sqrt((x1 - x2) ** 2 + (y1 - y2) ** 2))

    def _choose_indices(self, n):
        chosen = []
        seen = set()
        while len(chosen) < self.n_clusters:
            idx = int(self.random_source.next_index(n))
            if not 0 <= idx < n:
                raise ValueError(f"Random source returned index {idx} outside [0, {n}).")
            if idx not in seen:
                seen.add(idx)
                chosen.append(idx)
        return chosen

    def _nearest(self, X, C):
        # argmin keeps the first minimum, so ties resolve to the lowest index
        dists = np.sqrt(((X[:, np.newaxis, :] - C[np.newaxis, :, :]) ** 2).sum(axis=2))
        return np.argmin(dists, axis=1)

    def _update(self, X, labels, previous):
        # empty clusters keep their previous centroid so indices stay aligned
        new = previous.copy()
        for i in range(self.n_clusters):
            members = X[labels == i]
            if len(members):
                new[i] = members.mean(axis=0)
        return new

    def _group(self, X, labels):
        clusters = [[] for _ in range(self.n_clusters)]
        for point, label in zip(_to_points(X), labels):
            clusters[label].append(point)
        return clusters

    def initialize_centroids(self, points):
        """Pick ``n_clusters`` distinct input points at random."""
        X = self._validate_input(points)
        if len(X) < self.n_clusters:
            raise InsufficientPoints(
                "The number of points must be greater than or equal to the number of clusters (k)."
            )
        return list(_to_points(X[self._choose_indices(len(X))]))

    def assign_clusters(self, points, centroids=None):
        """
        Partition ``points`` by nearest centroid.

        Uses the fitted centroids unless ``centroids`` is given. Always
        returns ``n_clusters`` lists, some of which may be empty.
        """
        X = self._validate_input(points)
        C = self._centroid_array(centroids)
        return self._group(X, self._nearest(X, C))

    def update_centroids(self, clusters, previous=None):
        """
        Mean of each cluster; an empty cluster keeps ``previous[i]``.

        ``previous`` defaults to the fitted centroids.
        """
        prev = self._centroid_array(previous)
        if len(clusters) != self.n_clusters:
            raise InvalidArgument(
                f"Expected {self.n_clusters} clusters, got {len(clusters)}."
            )
        sizes = [len(cluster) for cluster in clusters]
        members = [p for cluster in clusters for p in cluster]
        if not members:
            return list(_to_points(prev))
        X = self._validate_input(members)
        labels = np.repeat(np.arange(self.n_clusters), sizes)
        return list(_to_points(self._update(X, labels, prev)))

    # ── main loop ─────────────────────────────────────────────────────────────

    def fit(self, points):
        X = self._validate_input(points)
        if len(X) < self.n_clusters:
            raise InsufficientPoints(
                "The number of points must be greater than or equal to the number of clusters (k)."
            )

        centroids = X[self._choose_indices(len(X))]
        labels = None
        n_iter = 0
        converged = False

        for _ in range(self.max_iterations):
            labels = self._nearest(X, centroids)
            candidates = self._update(X, labels, centroids)
            n_iter += 1

            if not np.isfinite(candidates).all():
                raise InvalidCentroid("Invalid centroids detected. Calculation failed.")

            if np.array_equal(candidates, centroids):
                converged = True
                break

            centroids = candidates

        # max_iterations < 1 never enters the loop
        if labels is None:
            labels = self._nearest(X, centroids)

        labels = labels.copy()
        labels.setflags(write=False)
        result = KMeansResult(
            centroids=_to_points(centroids),
            clusters=tuple(tuple(c) for c in self._group(X, labels)),
            labels=labels,
            n_iter=n_iter,
            converged=converged,
        )

        self.X_ = X
        self.labels_ = labels
        self.centroids_ = result.centroids
        self.clusters_ = result.clusters
        self.n_iter_ = n_iter
        self.converged_ = converged
        self.result_ = result
        return result

    def predict(self, points):
        """
        Nearest fitted centroid index for each point.

        When ``fit`` stopped at ``max_iterations`` without converging,
        ``labels_`` is the assignment made before the last centroid update,
        so predicting on the training points can differ from ``labels_``.
        After convergence the two agree.
        """
        X = self._validate_input(points)
        return self._nearest(X, self._centroid_array(None))

    # ── readers ───────────────────────────────────────────────────────────────

    def get_centroids(self):
        return list(self.centroids_)

    def get_clusters(self):
        return [list(cluster) for cluster in self.clusters_]

    def get_labels(self):
        return self.labels_

    def get_metrics(self):
        self._check_is_fitted()
        return compute_all_metrics(
            self.X_, self.labels_, np.array(self.centroids_, dtype=float)
        )

    def visualize(self, **kwargs):
        self._check_is_fitted()
        print_visualization(self.centroids_, self.clusters_, **kwargs)

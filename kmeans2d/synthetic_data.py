# synthetic_data.py

import numpy as np
from sklearn.datasets import make_blobs, make_moons, make_circles

from kmeans2d.clusterer import Point


def _as_points(X):
    return [Point(float(x), float(y)) for x, y in X]


def generate_blobs(n_samples=300, centers=3, cluster_std=0.6, random_state=42):
    """Isotropic Gaussian blobs in the plane, as a list of Points."""
    X, _ = make_blobs(
        n_samples=n_samples,
        centers=centers,
        n_features=2,
        cluster_std=cluster_std,
        random_state=random_state
    )
    return _as_points(X)


def generate_challenging_dataset(random_state=42):
    """
    Combine several cluster shapes and noise:
      - Dense small blob
      - Wide diffuse blob
      - Two-moon nonlinear clusters
      - Concentric circles
      - Uniform background noise
    Returns a list of Points.
    """
    rs = np.random.RandomState(random_state)

    X1, _ = make_blobs(
        n_samples=150,
        centers=[[0, 0]],
        cluster_std=0.2,
        random_state=rs
    )

    X2, _ = make_blobs(
        n_samples=150,
        centers=[[5, 5]],
        cluster_std=1.5,
        random_state=rs.randint(0, 10**6)
    )

    X3, _ = make_moons(
        n_samples=100,
        noise=0.05,
        random_state=rs.randint(0, 10**6)
    )
    # scale & shift to avoid overlap
    X3 = X3 * [2.5, 1.0] + [5, -3]

    X4, _ = make_circles(
        n_samples=100,
        factor=0.5,
        noise=0.05,
        random_state=rs.randint(0, 10**6)
    )
    X4 = X4 * [3.0, 3.0] + [10, -5]

    Xn = rs.uniform(low=[-5, -8], high=[15, 8], size=(50, 2))

    return _as_points(np.vstack([X1, X2, X3, X4, Xn]))

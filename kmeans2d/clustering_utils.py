# clustering_utils.py
import numpy as np
import pandas as pd

from kmeans2d.clusterer import KMeansClusterer, DEFAULT_MAX_ITERATIONS


def clusters_to_frame(clusters) -> pd.DataFrame:
    """
    Flatten clusters into one row per point.

    Columns: ['x', 'y', 'label'], rows grouped by cluster in cluster order.
    """
    rows = [
        (float(p[0]), float(p[1]), label)
        for label, cluster in enumerate(clusters)
        for p in cluster
    ]
    df = pd.DataFrame(rows, columns=["x", "y", "label"])
    return df.astype({"label": int})


def centroids_to_frame(centroids) -> pd.DataFrame:
    """One row per centroid with columns ['label', 'x', 'y']."""
    df = pd.DataFrame(
        [(i, float(c[0]), float(c[1])) for i, c in enumerate(centroids)],
        columns=["label", "x", "y"],
    )
    return df.astype({"label": int})


def assign_clusters(points, n_clusters, **kwargs) -> np.ndarray:
    """
    Fit a fresh KMeansClusterer on ``points`` and return one label per point.

    Extra kwargs go to the KMeansClusterer constructor.
    """
    km = KMeansClusterer(n_clusters=n_clusters, **kwargs)
    return np.asarray(km.fit(points).labels)


def run_and_report(
    name: str,
    points,
    n_clusters: int,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    visualize: bool = True,
):
    """
    Fit, print a short report and return (clusterer, metrics).
    """
    print(f"\n\n=== {name.upper()} ===")
    km = KMeansClusterer(n_clusters=n_clusters, max_iterations=max_iterations)
    result = km.fit(points)

    status = "converged" if result.converged else "stopped at the iteration cap"
    print(f"{status} after {result.n_iter} iteration(s)")
    print("Centroids:\n", centroids_to_frame(result.centroids).to_string(index=False))

    metrics = km.get_metrics()
    print(f"Inertia: {metrics['inertia']:.4f}")
    print(f"Silhouette: {metrics['silhouette']:.4f}")
    print(f"Population: {metrics['population']}")

    if visualize:
        km.visualize()
    return km, metrics

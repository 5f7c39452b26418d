import numpy as np
from sklearn.metrics import (
    silhouette_score,
    calinski_harabasz_score,
    davies_bouldin_score,
)


def _distinct_labels(labels, n_samples):
    n_labels = len(set(labels))
    # sklearn scores are defined for 2 <= n_labels <= n_samples - 1
    return 1 < n_labels < n_samples


def compute_silhouette(X, labels):
    if _distinct_labels(labels, len(X)):
        return float(silhouette_score(X, labels))
    return np.nan


def compute_calinski_harabasz(X, labels):
    if _distinct_labels(labels, len(X)):
        return float(calinski_harabasz_score(X, labels))
    return np.nan


def compute_davies_bouldin(X, labels):
    if _distinct_labels(labels, len(X)):
        return float(davies_bouldin_score(X, labels))
    return np.nan


def cluster_population_distribution(labels, n_clusters=None):
    """
    Points per cluster, as {cluster_id: count}.

    When ``n_clusters`` is given, empty clusters show up with a zero count.
    """
    if n_clusters is None:
        unique, counts = np.unique(labels, return_counts=True)
        return {int(u): int(c) for u, c in zip(unique, counts)}
    counts = np.bincount(np.asarray(labels, dtype=int), minlength=n_clusters)
    return {idx: int(c) for idx, c in enumerate(counts)}


def average_distance_to_centroids(X, labels, centroids):
    if centroids is None:
        return {}
    distances = {}
    for idx, center in enumerate(centroids):
        pts = X[labels == idx]
        if len(pts) > 0:
            distances[idx] = float(np.mean(np.linalg.norm(pts - center, axis=1)))
        else:
            distances[idx] = np.nan
    return distances


def compute_wcss_per_cluster(X, labels, centroids):
    """
    Returns dict {cluster_id: within-cluster sum of squares}.
    """
    wcss = {}
    for idx, c in enumerate(centroids):
        pts = X[labels == idx]
        wcss[idx] = float(np.sum((pts - c)**2)) if len(pts) else 0.0
    return wcss


def compute_inertia(X, labels, centroids):
    """Total within-cluster sum of squares."""
    return float(sum(compute_wcss_per_cluster(X, labels, centroids).values()))


def compute_unbalanced_factor(labels):
    """
    Ratio of largest cluster size to smallest non-empty cluster size.
    """
    labels = np.asarray(labels)
    unique, counts = np.unique(labels[labels >= 0], return_counts=True)
    if len(counts) < 2:
        return float('nan')
    return float(counts.max() / counts.min())


def compute_all_metrics(X, labels, centroids=None):
    n_clusters = len(centroids) if centroids is not None else None
    metrics = {
        "silhouette": compute_silhouette(X, labels),
        "calinski_harabasz": compute_calinski_harabasz(X, labels),
        "davies_bouldin": compute_davies_bouldin(X, labels),
        "population": cluster_population_distribution(labels, n_clusters),
        "avg_distance": average_distance_to_centroids(X, labels, centroids),
        "unbalanced_factor": compute_unbalanced_factor(labels),
    }
    if centroids is not None:
        metrics["inertia"] = compute_inertia(X, labels, centroids)
        metrics["wcss"] = compute_wcss_per_cluster(X, labels, centroids)
    return metrics

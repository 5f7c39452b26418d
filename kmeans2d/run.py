# run.py

import matplotlib.pyplot as plt

from kmeans2d.clustering_utils import run_and_report, clusters_to_frame
from kmeans2d.plotter import plot_clusters
from kmeans2d.synthetic_data import generate_blobs, generate_challenging_dataset


def main():
    # 1) Small, well separated dataset: the ASCII grid stays readable
    points = generate_blobs(n_samples=30, centers=3, cluster_std=0.8, random_state=42)
    km, _ = run_and_report(name="kmeans_blobs", points=points, n_clusters=3)

    ax = plot_clusters(
        km.get_centroids(), km.get_clusters(),
        title="KMeans (k=3)",
        savepath="kmeans_blobs.png"
    )
    plt.close(ax.figure)
    clusters_to_frame(km.get_clusters()).to_csv("kmeans_blobs_labels.csv", index=False)

    # 2) Mixed shapes with noise, no ASCII grid
    challenging = generate_challenging_dataset(random_state=123)
    km, _ = run_and_report(
        name="kmeans_challenging",
        points=challenging,
        n_clusters=4,
        visualize=False
    )
    ax = plot_clusters(
        km.get_centroids(), km.get_clusters(),
        title="KMeans (k=4)",
        savepath="kmeans_challenging.png"
    )
    plt.close(ax.figure)


if __name__ == "__main__":
    main()

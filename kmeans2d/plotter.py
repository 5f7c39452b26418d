import math

import numpy as np
import matplotlib.pyplot as plt


BLANK_CELL = " "
CENTROID_MARKER = "⦿"

DEFAULT_PALETTE = [
    "#0072B2", "#E69F00", "#009E73",
    "#D55E00", "#CC79A7", "#56B4E9",
    "#F0E442", "#000000",
]


def _round_half_up(value):
    return int(math.floor(value + 0.5))


def _bounds(centroids, clusters):
    xs = [c[0] for c in centroids] + [p[0] for cluster in clusters for p in cluster]
    ys = [c[1] for c in centroids] + [p[1] for cluster in clusters for p in cluster]
    if not xs:
        raise ValueError("Nothing to draw: no centroids and no cluster members.")
    return (
        int(math.floor(min(xs))),
        int(math.floor(min(ys))),
        int(math.ceil(max(xs))),
        int(math.ceil(max(ys))),
    )


def render_ascii_grid(centroids, clusters, blank=BLANK_CELL, marker=CENTROID_MARKER):
    """
    Draw clusters and centroids on a character grid.

    Cluster ``i`` is drawn with the letter ``chr(ord('A') + i)``; centroids
    are drawn last with ``marker`` so they win over any member symbol at
    the same cell. Coordinates are rounded half-up; row 0 is the smallest y.
    Returns the rows as strings.
    """
    min_x, min_y, max_x, max_y = _bounds(centroids, clusters)
    width = max_x - min_x + 1
    height = max_y - min_y + 1
    grid = [[blank] * width for _ in range(height)]

    def _put(point, symbol):
        col = _round_half_up(point[0]) - min_x
        row = _round_half_up(point[1]) - min_y
        if 0 <= col < width and 0 <= row < height:
            grid[row][col] = symbol

    for idx, cluster in enumerate(clusters):
        symbol = chr(ord("A") + idx)
        for point in cluster:
            _put(point, symbol)

    for centroid in centroids:
        _put(centroid, marker)

    return ["".join(row) for row in grid]


def print_visualization(centroids, clusters, blank=BLANK_CELL, marker=CENTROID_MARKER):
    rows = render_ascii_grid(centroids, clusters, blank=blank, marker=marker)
    print("Visualization (ASCII Art):")
    for row in rows:
        print(row)


def plot_clusters(
    centroids,
    clusters,
    title=None,
    savepath=None,
    ax=None,
    palette=None,
    point_size=20,
):
    """
    Scatter plot of each cluster in its own colour, centroids as black crosses.

    Returns the Axes; the figure is written to ``savepath`` when given.
    """
    if palette is None:
        palette = DEFAULT_PALETTE
    if ax is None:
        fig, ax = plt.subplots(figsize=(6, 6))
    else:
        fig = ax.figure

    for idx, cluster in enumerate(clusters):
        if not len(cluster):
            continue
        pts = np.asarray(cluster, dtype=float)
        ax.scatter(
            pts[:, 0], pts[:, 1],
            s=point_size,
            color=palette[idx % len(palette)],
            label=chr(ord("A") + idx),
            alpha=0.7,
        )

    if len(centroids):
        cents = np.asarray(centroids, dtype=float)
        ax.scatter(cents[:, 0], cents[:, 1], marker="x", s=point_size * 4,
                   color="black", label="centroids")

    if title:
        ax.set_title(title)
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.legend(loc="best", fontsize="small")

    if savepath:
        fig.tight_layout()
        fig.savefig(savepath)
    return ax

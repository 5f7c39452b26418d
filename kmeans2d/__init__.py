from kmeans2d.clusterer import (
    KMeansClusterer,
    KMeansResult,
    NumpyRandomSource,
    Point,
    SequenceRandomSource,
)
from kmeans2d.errors import (
    EmptyDataset,
    InsufficientPoints,
    InvalidArgument,
    InvalidCentroid,
    KMeansError,
)

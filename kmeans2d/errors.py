class KMeansError(Exception):
    """Base class for every failure raised by the clustering engine."""


class InvalidArgument(KMeansError, ValueError):
    """Raised when the cluster count or the input layout is not usable."""


class EmptyDataset(KMeansError, ValueError):
    """Raised when ``fit`` receives no points at all."""


class InsufficientPoints(KMeansError, ValueError):
    """Raised when there are fewer points than clusters."""


class InvalidCentroid(KMeansError, ArithmeticError):
    """Raised when an update step produces a NaN or infinite coordinate."""

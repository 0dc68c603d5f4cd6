"""
kpartition: k-means partitioning with silhouette-based choice of k.

This package partitions points into k groups with Lloyd's algorithm
(k-means++ seeding, empty-group recovery) and recommends the number of
groups by comparing mean silhouette scores over a range of k.

Example usage:
    >>> import numpy as np
    >>> from kpartition import KMeans, SilhouetteEstimator, as_points
    >>>
    >>> points = as_points(np.random.randn(300, 3))
    >>>
    >>> # One partition
    >>> partition = KMeans(random_state=0).partition(points, k=4)
    >>> partition.sizes
    >>>
    >>> # Best k in [2, 8]
    >>> scores, best_k, best_score = SilhouetteEstimator(random_state=0).estimate(points, 8)
"""

__version__ = '0.1.0'

# Import main algorithms
from .algorithms.kmeans import KMeans
from .algorithms.silhouette import SilhouetteEstimator, estimate_k

# Points
from .points import VectorPoint, RFMPoint, as_points, rfm_points

# Import visualization
from .visualization import (
    plot_partition,
    plot_scores,
    PartitionPlotter
)

# Convenience imports
from .base import (
    Point,
    Partitioner,
    IterationObserver,
    Group,
    Partition,
    IterationRecord,
    ScoreEntry,
    EstimateResult,
    KPartitionError,
    InvalidConfiguration,
    DegenerateInput,
    ComputationFailure
)

__all__ = [
    # Algorithms
    'KMeans',
    'SilhouetteEstimator',
    'estimate_k',

    # Points
    'Point',
    'VectorPoint',
    'RFMPoint',
    'as_points',
    'rfm_points',

    # Core data structures
    'Partitioner',
    'IterationObserver',
    'Group',
    'Partition',
    'IterationRecord',
    'ScoreEntry',
    'EstimateResult',

    # Errors
    'KPartitionError',
    'InvalidConfiguration',
    'DegenerateInput',
    'ComputationFailure',

    # Visualization
    'plot_partition',
    'plot_scores',
    'PartitionPlotter',

    # Version
    '__version__'
]

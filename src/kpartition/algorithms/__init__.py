"""Partitioning and k-selection algorithms."""

from .kmeans import KMeans
from .silhouette import SilhouetteEstimator, estimate_k

__all__ = [
    'KMeans',
    'SilhouetteEstimator',
    'estimate_k'
]

"""Initialization strategies for the partitioning engine."""

from .kmeans_plusplus import KMeansPlusPlusInit

__all__ = [
    'KMeansPlusPlusInit'
]

"""Visualization utilities for partitions and silhouette scores."""

from .plot_partition import (
    plot_partition,
    plot_scores,
    PartitionPlotter
)

__all__ = [
    'plot_partition',
    'plot_scores',
    'PartitionPlotter'
]

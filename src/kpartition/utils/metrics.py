"""
Partition quality metrics.

The silhouette index compares, for every point, the mean distance to its own
group (cohesion, a) with the mean distance to the closest other group
(separation, b): s = (b - a) / max(a, b), in [-1, 1]. Distances are whatever
the points' `distance` returns (squared Euclidean for the bundled types).
"""

from typing import Dict
import torch
from torch import Tensor

from ..base.data_structures import Partition, average_distance


def silhouette_values(partition: Partition) -> Tensor:
    """Per-point silhouette index.

    Args:
        partition: Partition with at least 2 groups

    Returns:
        (n,) tensor of s(p), ordered group by group, members in group order
    """
    values = []
    for gi, group in enumerate(partition):
        for point in group.members:
            a = average_distance(point, group.members)
            _, b = partition.second_nearest(point, gi)
            denom = max(a, b)
            if denom == 0.0:
                # Every distance involved is zero
                values.append(0.0)
            else:
                values.append((b - a) / denom)
    return torch.tensor(values, dtype=torch.float64)


def silhouette_score(partition: Partition) -> float:
    """Mean silhouette index over every point of the partition."""
    values = silhouette_values(partition)
    if values.numel() == 0:
        return 0.0
    return values.mean().item()


def inertia(partition: Partition) -> float:
    """Sum of squared distances from every point to its group centroid."""
    return partition.inertia()


def group_summary(partition: Partition) -> Dict[str, Tensor]:
    """Sizes, centroids and mean member distance to centroid per group."""
    spreads = []
    for group in partition:
        if len(group) == 0:
            spreads.append(0.0)
        else:
            spreads.append(sum(m.distance(group.center) for m in group.members) / len(group))
    return {
        'sizes': torch.tensor(partition.sizes, dtype=torch.long),
        'centers': partition.centers,
        'spread': torch.tensor(spreads, dtype=torch.float64)
    }

"""
K-means++ initialization strategy.

Selects initial centroids from the input points, spreading them out by
sampling each new centroid with probability proportional to its squared
distance from the centroids already chosen.
"""

from typing import Optional, Sequence
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy, Point
from ..base.exceptions import InvalidConfiguration


class KMeansPlusPlusInit(InitializationStrategy):
    """K-means++ initialization with a deterministic first centroid.

    Algorithm:
    1. First centroid is the point at index n // 2 (not a random point, so
       runs over the same data always start from the same place)
    2. For each remaining centroid:
       - Compute each point's distance to its nearest chosen centroid
       - Draw u * sum(distances) and take the first point, in input order,
         whose running sum reaches the draw
    """

    def initialize(self, points: Sequence[Point], n_clusters: int,
                   generator: Optional[torch.Generator] = None) -> Tensor:
        """Initialize centroids using K-means++.

        Args:
            points: Sequence of n points
            n_clusters: Number of centroids
            generator: Random source for the weighted draws

        Returns:
            (n_clusters, d) tensor of centroids copied from the chosen points
        """
        n_points = len(points)
        if n_clusters > n_points:
            raise InvalidConfiguration(
                f"Cannot create {n_clusters} clusters from {n_points} points")

        first_idx = n_points // 2
        centers = [points[first_idx].coordinates.clone()]

        # Distance from every point to its nearest chosen centroid
        distances = torch.tensor([p.distance(centers[0]) for p in points],
                                 dtype=torch.float64)

        for _ in range(1, n_clusters):
            target = torch.rand(1, generator=generator, dtype=torch.float64).item() * distances.sum().item()
            cumulative = torch.cumsum(distances, dim=0)

            # First index whose running sum reaches the target
            reached = torch.nonzero(cumulative >= target)
            next_idx = int(reached[0].item()) if len(reached) > 0 else n_points - 1

            centers.append(points[next_idx].coordinates.clone())

            new_distances = torch.tensor([p.distance(centers[-1]) for p in points],
                                         dtype=torch.float64)
            distances = torch.minimum(distances, new_distances)

        return torch.stack(centers)

"""
Core data structures for kpartition.

This module provides the group and partition containers the partitioning
engine works on, plus the records the quality estimator returns.
"""

from typing import Optional, List, Tuple, Dict, Any, Sequence
import torch
from torch import Tensor
from dataclasses import dataclass, field

from .interfaces import Point
from .exceptions import InvalidConfiguration


def average_distance(point: Point, members: Sequence[Point]) -> float:
    """Mean distance from `point` to every member of `members`.

    The point itself contributes a zero distance when it is a member.
    An empty member set has an average distance of 0.
    """
    if len(members) == 0:
        return 0.0
    total = 0.0
    for member in members:
        total += point.distance(member.coordinates)
    return total / len(members)


@dataclass
class Group:
    """One partition cell: a centroid and the points currently assigned to it."""

    center: Tensor  # (d,) centroid
    members: List[Point] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.members)

    def append(self, point: Point) -> None:
        self.members.append(point)

    def remove(self, point: Point) -> None:
        """Remove `point` by identity (equal-valued points are distinct members)."""
        for i, member in enumerate(self.members):
            if member is point:
                del self.members[i]
                return
        raise ValueError("point is not a member of this group")

    def recenter(self) -> None:
        """Move the centroid to the component-wise mean of the members.

        An empty group keeps its current centroid.
        """
        if len(self.members) == 0:
            return
        coords = torch.stack([m.coordinates for m in self.members])
        self.center = coords.mean(dim=0).to(self.center.dtype)


@dataclass
class IterationRecord:
    """Summary of one Lloyd iteration."""
    iteration: int
    n_changed: int
    n_recovered: int
    objective: float


class Partition:
    """Fixed-size ordered sequence of k groups.

    Groups are indexed 0..k-1. The partition is owned by a single
    partitioning run; the points it holds are shared and read-only.
    """

    def __init__(self, centers: Tensor):
        """
        Args:
            centers: (k, d) tensor of initial centroids
        """
        if centers.dim() != 2 or centers.shape[0] == 0:
            raise InvalidConfiguration(
                f"Expected (k, d) centers with k >= 1, got shape {tuple(centers.shape)}")
        self.groups: List[Group] = [Group(center=c.clone()) for c in centers]

        # Filled in by the partitioner
        self.n_iter = 0
        self.history: List[IterationRecord] = []
        self.metadata: Dict[str, Any] = {}

    def __len__(self) -> int:
        return len(self.groups)

    def __getitem__(self, index: int) -> Group:
        return self.groups[index]

    def __iter__(self):
        return iter(self.groups)

    @property
    def n_clusters(self) -> int:
        return len(self.groups)

    @property
    def centers(self) -> Tensor:
        """(k, d) tensor of current centroids."""
        return torch.stack([g.center for g in self.groups])

    @property
    def sizes(self) -> List[int]:
        return [len(g) for g in self.groups]

    @property
    def n_points(self) -> int:
        return sum(self.sizes)

    def reset(self) -> None:
        """Clear every group's members, leaving centroids untouched."""
        for group in self.groups:
            group.members = []

    def append(self, index: int, point: Point) -> None:
        self.groups[index].append(point)

    def nearest(self, point: Point) -> int:
        """Index of the group whose centroid is closest to `point`.

        Ties go to the lowest index.
        """
        distances = torch.tensor([point.distance(g.center) for g in self.groups],
                                 dtype=torch.float64)
        return int(torch.argmin(distances).item())

    def second_nearest(self, point: Point, exclude: int) -> Tuple[int, float]:
        """Nearest group to `point` other than group `exclude`.

        Distance here is the mean distance to that group's members, which is
        the separation term of the silhouette index. Empty groups are skipped.

        Returns:
            (index, average distance) of the closest foreign group, or
            (-1, 0.0) if every other group is empty

        Raises:
            InvalidConfiguration: If the partition has fewer than 2 groups
        """
        if len(self.groups) < 2:
            raise InvalidConfiguration(
                f"second_nearest needs at least 2 groups, partition has {len(self.groups)}")

        best_index = -1
        best_distance = 0.0
        for i, group in enumerate(self.groups):
            if i == exclude or len(group) == 0:
                continue
            d = average_distance(point, group.members)
            if best_index < 0 or d < best_distance:
                best_index = i
                best_distance = d
        return best_index, best_distance

    def recenter(self) -> None:
        """Recompute every centroid from its current members."""
        for group in self.groups:
            group.recenter()

    def average_distance(self, point: Point, index: int) -> float:
        """Mean distance from `point` to the members of group `index`."""
        return average_distance(point, self.groups[index].members)

    def inertia(self) -> float:
        """Sum of squared distances from every member to its centroid."""
        total = 0.0
        for group in self.groups:
            for member in group.members:
                total += member.distance(group.center)
        return total

    def labels(self, points: Sequence[Point]) -> Tensor:
        """(n,) tensor with the group index of each point, -1 if unassigned.

        Membership is matched by identity, not by coordinate equality.
        """
        index_of = {}
        for gi, group in enumerate(self.groups):
            for member in group.members:
                index_of[id(member)] = gi
        return torch.tensor([index_of.get(id(p), -1) for p in points], dtype=torch.long)

    def __repr__(self) -> str:
        return f"Partition(n_clusters={self.n_clusters}, sizes={self.sizes}, n_iter={self.n_iter})"


@dataclass(frozen=True)
class ScoreEntry:
    """Silhouette score of the partition computed for one candidate k."""
    k: int
    partition: Partition
    score: float


@dataclass(frozen=True)
class EstimateResult:
    """Outcome of a best-k estimate.

    `scores` holds one entry per candidate k in ascending k order.
    """
    scores: Tuple[ScoreEntry, ...]
    best_k: int
    best_score: float

    def __iter__(self):
        # Allows `scores, best_k, best_score = estimator.estimate(...)`
        return iter((list(self.scores), self.best_k, self.best_score))

    @property
    def best(self) -> Optional[ScoreEntry]:
        for entry in self.scores:
            if entry.k == self.best_k:
                return entry
        return None

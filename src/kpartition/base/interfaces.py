"""
Core interfaces for kpartition.

This module defines the abstract base classes that points, partitioners,
initializers, convergence criteria and observers implement, so the engine
never depends on a concrete point type.
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any, Sequence, TYPE_CHECKING
import torch
from torch import Tensor

if TYPE_CHECKING:
    from .data_structures import Partition


class Point(ABC):
    """Abstract base class for anything that can be clustered.

    A point exposes a fixed-length coordinate vector and a distance to an
    arbitrary coordinate vector of the same length. The engine only reads
    coordinates and calls distance; it never copies or mutates points.
    """

    @property
    @abstractmethod
    def coordinates(self) -> Tensor:
        """(d,) tensor of coordinates."""
        pass

    @abstractmethod
    def distance(self, coordinates: Tensor) -> float:
        """Squared Euclidean distance from this point to `coordinates`."""
        pass

    @property
    def dimension(self) -> int:
        """Number of coordinates."""
        return self.coordinates.shape[0]


class Partitioner(ABC):
    """Abstract base class for algorithms that split points into k groups."""

    @abstractmethod
    def partition(self, points: Sequence[Point], k: int,
                  generator: Optional[torch.Generator] = None) -> 'Partition':
        """Partition points into k groups.

        Args:
            points: Sequence of points sharing one dimension
            k: Number of groups
            generator: Optional random source overriding the partitioner's own

        Returns:
            Partition with exactly k non-empty groups
        """
        pass


class InitializationStrategy(ABC):
    """Abstract base class for centroid initialization strategies."""

    @abstractmethod
    def initialize(self, points: Sequence[Point], n_clusters: int,
                   generator: Optional[torch.Generator] = None) -> Tensor:
        """Choose initial centroids.

        Args:
            points: Sequence of points
            n_clusters: Number of centroids to choose
            generator: Random source

        Returns:
            (n_clusters, d) tensor of initial centroids
        """
        pass


class ConvergenceCriterion(ABC):
    """Abstract base class for convergence checking."""

    def __init__(self):
        self.history = []

    @abstractmethod
    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if the algorithm should stop.

        Args:
            current_state: Dictionary containing current algorithm state

        Returns:
            True if converged, False otherwise
        """
        pass

    def reset(self):
        """Reset convergence history."""
        self.history = []


class IterationObserver(ABC):
    """Side channel notified after every Lloyd iteration.

    Observers must not mutate the partition they receive.
    """

    @abstractmethod
    def on_iteration(self, partition: 'Partition', iteration: int) -> None:
        pass

"""
K-means partitioning.

Lloyd's algorithm over opaque points, seeded with k-means++ and with
empty-group recovery.
"""

from typing import Optional, List, Sequence, Tuple, Union
import time
import warnings
import torch

from ..base.clustering_base import BasePartitioner
from ..base.interfaces import (
    Point, InitializationStrategy, ConvergenceCriterion, IterationObserver
)
from ..base.data_structures import Partition, IterationRecord
from ..base.exceptions import DegenerateInput, InvalidConfiguration
from ..initialization.kmeans_plusplus import KMeansPlusPlusInit
from ..utils.convergence import ChangeInAssignments, MaxIterations, CombinedCriterion
from ..utils.validation import check_points, check_n_clusters, check_delta_threshold


class KMeans(BasePartitioner):
    """K-means partitioner.

    Partitions points into k groups by alternating nearest-centroid
    assignment and centroid recomputation until fewer than
    `delta_threshold` of the points change group, or `max_iter` iterations
    have run.

    Parameters
    ----------
    delta_threshold : float, default=0.01
        Stop once the fraction of points that changed group in an iteration
        is below this value. Must lie in (0, 1).
    max_iter : int, default=96
        Hard cap on Lloyd iterations
    patience : int, default=1
        Consecutive iterations that must stay below `delta_threshold`
        before stopping
    init : str or InitializationStrategy, default='k-means++'
        Centroid initialization
    observer : IterationObserver, optional
        Notified with (partition, iteration) after every iteration
    max_recovery_attempts : int, optional
        Random draws allowed when looking for a donor point for an empty
        group. Defaults to max(100, 10 * n_points).
    verbose : int, default=0
        Verbosity level
    random_state : int or torch.Generator, optional
        Random source for seeding and recovery

    Notes
    -----
    Each call to `partition` builds its own state, so a single instance can
    be shared by concurrent callers. With an int `random_state` every call
    starts from the same seed and is reproducible.
    """

    def __init__(self,
                 delta_threshold: float = 0.01,
                 max_iter: int = 96,
                 init: Union[str, InitializationStrategy] = 'k-means++',
                 observer: Optional[IterationObserver] = None,
                 max_recovery_attempts: Optional[int] = None,
                 patience: int = 1,
                 verbose: int = 0,
                 random_state: Optional[Union[int, torch.Generator]] = None):
        """Initialize K-means partitioner."""
        super().__init__(
            max_iter=max_iter,
            verbose=verbose,
            random_state=random_state
        )
        self.delta_threshold = delta_threshold
        self.init = init
        self.observer = observer
        self.max_recovery_attempts = max_recovery_attempts
        self.patience = patience
        self._validate_params()

    def _validate_params(self) -> None:
        super()._validate_params()
        check_delta_threshold(self.delta_threshold)
        if isinstance(self.init, str) and self.init != 'k-means++':
            raise ValueError(f"Unknown init method: {self.init}")
        if self.patience < 1:
            raise InvalidConfiguration(f"patience must be positive, got {self.patience}")
        if self.max_recovery_attempts is not None and self.max_recovery_attempts < 0:
            raise InvalidConfiguration(
                f"max_recovery_attempts must be non-negative, got {self.max_recovery_attempts}")

    def _create_components(self) -> Tuple[InitializationStrategy, ConvergenceCriterion]:
        """Fresh initializer and stopping rule for one run."""
        if isinstance(self.init, str):
            initializer = KMeansPlusPlusInit()
        else:
            initializer = self.init

        criterion = CombinedCriterion([
            ChangeInAssignments(min_change_fraction=self.delta_threshold,
                                patience=self.patience),
            MaxIterations(max_iter=self.max_iter)
        ])
        return initializer, criterion

    def partition(self, points: Sequence[Point], k: int,
                  generator: Optional[torch.Generator] = None) -> Partition:
        """Partition points into k groups.

        Parameters
        ----------
        points : sequence of Point
            Points sharing one dimension; never modified
        k : int
            Number of groups, 1 <= k <= len(points)
        generator : torch.Generator, optional
            Random source for this call, overriding `random_state`

        Returns
        -------
        partition : Partition
            k non-empty groups covering every point exactly once, with
            `n_iter` and per-iteration `history` filled in

        Raises
        ------
        InvalidConfiguration
            If k is outside [1, len(points)] or the points are inconsistent
        DegenerateInput
            If an empty group cannot be repopulated
        """
        points = check_points(points)
        n_points = len(points)
        check_n_clusters(k, n_points)

        generator = self._get_generator(generator)
        initializer, criterion = self._create_components()

        if self.verbose:
            print(f"Initializing {k} clusters...")

        start_time = time.time()
        partition = Partition(initializer.initialize(points, k, generator))

        # Group index of every point in the previous iteration
        labels = [-1] * n_points
        converged = False

        for iteration in range(self.max_iter):
            iter_start_time = time.time()

            # Assignment step
            partition.reset()
            n_changed = 0
            for i, point in enumerate(points):
                gi = partition.nearest(point)
                partition.append(gi, point)
                if labels[i] != gi:
                    labels[i] = gi
                    n_changed += 1

            n_recovered = self._recover_empty_groups(partition, points, labels, generator)
            if n_recovered > 0:
                # Forces at least one more iteration after a forced move
                n_changed = n_points

            # Update step
            if n_changed > 0:
                partition.recenter()

            objective = partition.inertia()
            partition.history.append(IterationRecord(
                iteration=iteration,
                n_changed=n_changed,
                n_recovered=n_recovered,
                objective=objective
            ))
            partition.n_iter = iteration + 1

            if self.observer is not None:
                self.observer.on_iteration(partition, iteration)

            stop = criterion.check({
                'iteration': iteration,
                'n_changed': n_changed,
                'n_points': n_points
            })
            converged = n_changed / n_points < self.delta_threshold

            iter_time = time.time() - iter_start_time
            if self.verbose >= 2 or (self.verbose >= 1 and iteration % 10 == 0):
                print(f"Iteration {iteration:3d}: changed = {n_changed:5d}/{n_points} "
                      f"objective = {objective:.6f} ({iter_time:.3f}s)")

            if stop:
                if self.verbose and converged:
                    print(f"Converged at iteration {iteration}")
                break

        total_time = time.time() - start_time
        partition.metadata['converged'] = converged
        partition.metadata['fit_time'] = total_time

        if self.verbose:
            if not converged:
                warnings.warn(f"Failed to converge after {self.max_iter} iterations")
            print(f"Total partitioning time: {total_time:.3f}s")

        return partition

    def _recover_empty_groups(self, partition: Partition, points: List[Point],
                              labels: List[int], generator: torch.Generator) -> int:
        """Move a random point into every empty group.

        Donors are drawn uniformly until one belongs to a group with more
        than one member, so no group is emptied to fill another.

        Returns:
            Number of groups that were repopulated
        """
        n_points = len(points)
        if self.max_recovery_attempts is None:
            budget = max(100, 10 * n_points)
        else:
            budget = self.max_recovery_attempts

        n_recovered = 0
        for gi, group in enumerate(partition):
            if len(group) > 0:
                continue

            donor_idx = -1
            for _ in range(budget):
                ri = int(torch.randint(n_points, (1,), generator=generator).item())
                if len(partition[labels[ri]]) > 1:
                    donor_idx = ri
                    break

            if donor_idx < 0:
                raise DegenerateInput(
                    f"Could not repopulate empty group {gi} of {len(partition)} after "
                    f"{budget} attempts; the data may not support this many groups")

            point = points[donor_idx]
            partition[labels[donor_idx]].remove(point)
            partition.append(gi, point)
            labels[donor_idx] = gi
            n_recovered += 1

            if self.verbose >= 2:
                warnings.warn(f"Group {gi} became empty and was repopulated")

        return n_recovered

    def fit_predict(self, points: Sequence[Point], k: int) -> torch.Tensor:
        """Partition points and return the group index of each one.

        Returns
        -------
        labels : Tensor of shape (n_points,)
        """
        points = list(points)
        return self.partition(points, k).labels(points)

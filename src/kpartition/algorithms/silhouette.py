"""
Silhouette analysis for choosing the number of groups.

Runs a partitioner once for every candidate k in [2, k_max], scores each
partition with the mean silhouette index and recommends the best k.
"""

from typing import Optional, List, Sequence, Union
from concurrent.futures import ThreadPoolExecutor, wait, FIRST_EXCEPTION
import time
import torch

from ..base.interfaces import Point, Partitioner
from ..base.data_structures import ScoreEntry, EstimateResult
from ..base.exceptions import KPartitionError, ComputationFailure
from ..utils.metrics import silhouette_score
from ..utils.validation import (
    check_points, check_k_max, check_n_clusters, check_random_state
)
from .kmeans import KMeans


class SilhouetteEstimator:
    """Estimate the best number of groups with silhouette analysis.

    Parameters
    ----------
    partitioner : Partitioner, optional
        Algorithm run for every candidate k. Defaults to KMeans().
    n_jobs : int, optional
        Worker threads; defaults to one per candidate k
    random_state : int or torch.Generator, optional
        If given, one seed per candidate k is drawn from it before the
        workers start and handed to the partitioner, so results do not
        depend on scheduling. If None the partitioner's own random source
        is used.
    verbose : int, default=0
        Verbosity level

    Notes
    -----
    Workers are threads. Points are arbitrary caller objects and need not be
    picklable, so processes are not used; the silhouette loops run Python
    code under the GIL, so the speedup over a serial run is small.

    Examples
    --------
    >>> from kpartition import SilhouetteEstimator, as_points
    >>> points = as_points([[0, 0], [0, 1], [10, 10], [10, 11]])
    >>> scores, best_k, best_score = SilhouetteEstimator(random_state=0).estimate(points, 3)
    """

    def __init__(self,
                 partitioner: Optional[Partitioner] = None,
                 n_jobs: Optional[int] = None,
                 random_state: Optional[Union[int, torch.Generator]] = None,
                 verbose: int = 0):
        if n_jobs is not None and n_jobs < 1:
            raise ValueError(f"n_jobs must be positive, got {n_jobs}")

        self.partitioner = partitioner if partitioner is not None else KMeans()
        self.n_jobs = n_jobs
        self.random_state = random_state
        self.verbose = verbose

    def score(self, points: Sequence[Point], k: int,
              generator: Optional[torch.Generator] = None) -> ScoreEntry:
        """Partition points into k groups and compute the mean silhouette.

        Errors from the partitioner propagate unchanged.
        """
        partition = self.partitioner.partition(points, k, generator=generator)
        return ScoreEntry(k=k, partition=partition, score=silhouette_score(partition))

    def scores(self, points: Sequence[Point], k_max: int) -> List[ScoreEntry]:
        """Score every k in [2, k_max] concurrently.

        Returns:
            Entries ordered by k (index k - 2), whatever the completion order

        Raises:
            InvalidConfiguration: If k_max < 2, k_max exceeds the number of
                points or the points are invalid; raised before any worker starts
            KPartitionError: The first error raised by any worker; remaining
                results are discarded
        """
        check_k_max(k_max)
        points = check_points(points)
        check_n_clusters(k_max, len(points))

        ks = list(range(2, k_max + 1))
        generators = self._spawn_generators(len(ks))
        results: List[Optional[ScoreEntry]] = [None] * len(ks)

        def run(index: int) -> None:
            k = ks[index]
            start_time = time.time()
            try:
                entry = self.score(points, k, generator=generators[index])
            except KPartitionError:
                raise
            except Exception as exc:
                raise ComputationFailure(f"Scoring k={k} failed: {exc}", k=k) from exc
            # Disjoint index per worker, no lock needed
            results[index] = entry
            if self.verbose:
                print(f"k={k:2d}: silhouette = {entry.score:.6f} "
                      f"({entry.partition.n_iter} iterations, {time.time() - start_time:.3f}s)")

        max_workers = self.n_jobs if self.n_jobs is not None else len(ks)
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = [executor.submit(run, i) for i in range(len(ks))]
            done, not_done = wait(futures, return_when=FIRST_EXCEPTION)
            for future in not_done:
                future.cancel()

            # Surface the failure that happened first in k order among finished ones
            for future in futures:
                if future in done and future.exception() is not None:
                    raise future.exception()

        return results

    def estimate(self, points: Sequence[Point], k_max: int) -> EstimateResult:
        """Recommend the k in [2, k_max] with the highest mean silhouette.

        Ties go to the lowest k.

        Returns:
            EstimateResult(scores, best_k, best_score); unpacks as a 3-tuple
        """
        entries = self.scores(points, k_max)

        best = None
        for entry in entries:
            if best is None or entry.score > best.score:
                best = entry

        if self.verbose:
            print(f"Best k = {best.k} (silhouette = {best.score:.6f})")

        return EstimateResult(scores=tuple(entries), best_k=best.k, best_score=best.score)

    def _spawn_generators(self, n: int) -> List[Optional[torch.Generator]]:
        """One independent generator per candidate k, or Nones."""
        if self.random_state is None:
            return [None] * n

        parent = check_random_state(self.random_state)
        seeds = torch.randint(0, 2 ** 62, (n,), generator=parent).tolist()
        generators = []
        for seed in seeds:
            g = torch.Generator()
            g.manual_seed(int(seed))
            generators.append(g)
        return generators


def estimate_k(points: Sequence[Point], k_max: int,
               partitioner: Optional[Partitioner] = None,
               n_jobs: Optional[int] = None,
               random_state: Optional[Union[int, torch.Generator]] = None,
               verbose: int = 0) -> EstimateResult:
    """Functional shortcut for SilhouetteEstimator(...).estimate(points, k_max)."""
    estimator = SilhouetteEstimator(
        partitioner=partitioner,
        n_jobs=n_jobs,
        random_state=random_state,
        verbose=verbose
    )
    return estimator.estimate(points, k_max)

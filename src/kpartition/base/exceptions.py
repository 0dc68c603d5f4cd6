"""
Exception hierarchy for kpartition.

All errors raised on purpose by the package derive from KPartitionError, so
callers can catch the whole family at once or pick a specific kind.
"""

from typing import Optional


class KPartitionError(Exception):
    """Base class for all kpartition errors."""


class InvalidConfiguration(KPartitionError, ValueError):
    """A parameter is outside its valid range.

    Raised before any work is attempted, e.g. k outside [1, n_points],
    k_max < 2 or delta_threshold outside (0, 1).
    """


class DegenerateInput(KPartitionError, RuntimeError):
    """The data cannot support the requested number of groups.

    Raised when empty-group recovery cannot find a donor point within its
    attempt budget.
    """


class ComputationFailure(KPartitionError, RuntimeError):
    """A worker failed while partitioning or scoring one candidate k."""

    def __init__(self, message: str, k: Optional[int] = None):
        super().__init__(message)
        self.k = k

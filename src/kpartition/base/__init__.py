"""Base classes and data structures for kpartition."""

from .interfaces import (
    Point,
    Partitioner,
    InitializationStrategy,
    ConvergenceCriterion,
    IterationObserver
)

from .data_structures import (
    Group,
    Partition,
    IterationRecord,
    ScoreEntry,
    EstimateResult,
    average_distance
)

from .exceptions import (
    KPartitionError,
    InvalidConfiguration,
    DegenerateInput,
    ComputationFailure
)

__all__ = [
    # Interfaces
    'Point',
    'Partitioner',
    'InitializationStrategy',
    'ConvergenceCriterion',
    'IterationObserver',

    # Data structures
    'Group',
    'Partition',
    'IterationRecord',
    'ScoreEntry',
    'EstimateResult',
    'average_distance',

    # Errors
    'KPartitionError',
    'InvalidConfiguration',
    'DegenerateInput',
    'ComputationFailure'
]

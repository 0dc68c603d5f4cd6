"""Utility functions for kpartition algorithms."""

from .convergence import (
    ChangeInAssignments,
    CombinedCriterion,
    MaxIterations
)

from .metrics import (
    silhouette_values,
    silhouette_score,
    inertia,
    group_summary
)

from .validation import (
    validate_data,
    check_points,
    check_n_clusters,
    check_k_max,
    check_delta_threshold,
    check_random_state
)

__all__ = [
    # Convergence
    'ChangeInAssignments',
    'CombinedCriterion',
    'MaxIterations',

    # Metrics
    'silhouette_values',
    'silhouette_score',
    'inertia',
    'group_summary',

    # Validation
    'validate_data',
    'check_points',
    'check_n_clusters',
    'check_k_max',
    'check_delta_threshold',
    'check_random_state'
]

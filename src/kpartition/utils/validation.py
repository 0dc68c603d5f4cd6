"""
Input validation utilities.

Provides functions for validating points and parameters before clustering.
Range errors raise InvalidConfiguration (a ValueError), wrong types raise
TypeError.
"""

from typing import Optional, Union, Sequence, List
import numbers
import torch
from torch import Tensor
import numpy as np

from ..base.exceptions import InvalidConfiguration


def validate_data(X: Union[Tensor, np.ndarray, list],
                  dtype: torch.dtype = torch.float64,
                  ensure_finite: bool = True,
                  ensure_min_samples: int = 1) -> Tensor:
    """Validate and convert array-like input to a 2D tensor.

    Args:
        X: Input data (tensor, numpy array, or list)
        dtype: Target data type
        ensure_finite: Whether to check for inf/nan
        ensure_min_samples: Minimum number of samples required

    Returns:
        Validated (n, d) tensor

    Raises:
        InvalidConfiguration: If validation fails
    """
    # Convert to tensor
    if isinstance(X, Tensor):
        X = X.detach().to(dtype=dtype)
    elif isinstance(X, np.ndarray):
        X = torch.from_numpy(X).to(dtype=dtype)
    elif isinstance(X, list):
        X = torch.tensor(X, dtype=dtype)
    else:
        raise TypeError(f"Cannot convert {type(X)} to tensor")

    if X.dim() == 1:
        X = X.unsqueeze(1)
    elif X.dim() != 2:
        raise InvalidConfiguration(f"Expected 2D array, got {X.dim()}D")

    n_samples = X.shape[0]
    if n_samples < ensure_min_samples:
        raise InvalidConfiguration(f"Found {n_samples} samples, but need at least "
                                   f"{ensure_min_samples}")

    if ensure_finite:
        if torch.isnan(X).any():
            raise InvalidConfiguration("Input contains NaN values")
        if torch.isinf(X).any():
            raise InvalidConfiguration("Input contains infinite values")

    return X


def check_points(points: Sequence) -> List:
    """Validate a point collection.

    Every point must expose coordinates of the same dimension.

    Returns:
        The points as a list (the points themselves are not copied)

    Raises:
        InvalidConfiguration: If the collection is empty or dimensions differ
    """
    points = list(points)
    if len(points) == 0:
        raise InvalidConfiguration("Cannot partition an empty point set")

    dimension = points[0].dimension
    for i, point in enumerate(points):
        if point.dimension != dimension:
            raise InvalidConfiguration(
                f"Point {i} has dimension {point.dimension}, expected {dimension}")
    return points


def check_n_clusters(n_clusters: int, n_samples: int) -> None:
    """Validate number of clusters.

    Args:
        n_clusters: Number of clusters
        n_samples: Number of samples

    Raises:
        InvalidConfiguration: If outside [1, n_samples]
    """
    if not isinstance(n_clusters, numbers.Integral) or isinstance(n_clusters, bool):
        raise TypeError(f"n_clusters must be int, got {type(n_clusters)}")

    if n_clusters <= 0:
        raise InvalidConfiguration(f"n_clusters must be positive, got {n_clusters}")

    if n_clusters > n_samples:
        raise InvalidConfiguration(f"n_clusters ({n_clusters}) cannot be larger than "
                                   f"n_samples ({n_samples})")


def check_k_max(k_max: int) -> None:
    """Validate the upper bound of the candidate k range [2, k_max]."""
    if not isinstance(k_max, numbers.Integral) or isinstance(k_max, bool):
        raise TypeError(f"k_max must be int, got {type(k_max)}")

    if k_max < 2:
        raise InvalidConfiguration(f"k_max must be at least 2, got {k_max}")


def check_delta_threshold(delta_threshold: float) -> None:
    """Validate the changed-fraction convergence threshold."""
    if not isinstance(delta_threshold, numbers.Real):
        raise TypeError(f"delta_threshold must be a number, got {type(delta_threshold)}")

    if not 0.0 < delta_threshold < 1.0:
        raise InvalidConfiguration(
            f"delta_threshold is out of bounds (must be >0.0 and <1.0), got {delta_threshold}")


def check_random_state(random_state: Optional[Union[int, torch.Generator]]) -> torch.Generator:
    """Create generator from random state.

    Args:
        random_state: Seed, generator, or None for a non-deterministic seed

    Returns:
        Generator
    """
    if random_state is None:
        generator = torch.Generator()
        generator.seed()
        return generator
    elif isinstance(random_state, torch.Generator):
        return random_state
    elif isinstance(random_state, numbers.Integral) and not isinstance(random_state, bool):
        generator = torch.Generator()
        generator.manual_seed(int(random_state))
        return generator
    else:
        raise TypeError(f"random_state must be int or Generator, got {type(random_state)}")

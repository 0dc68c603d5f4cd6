"""
Tensor-backed points.

VectorPoint is the generic point type: a coordinate tensor with squared
Euclidean distance. `as_points` turns array-like data into a list of them.
"""

from typing import Optional, List, Union, Any
import numpy as np
import torch
from torch import Tensor

from ..base.interfaces import Point
from ..utils.validation import validate_data

DEFAULT_DTYPE = torch.float64


class VectorPoint(Point):
    """Point holding its coordinates as a 1D tensor.

    Parameters
    ----------
    coordinates : array-like of shape (d,)
        Point coordinates
    payload : any, optional
        Caller data carried along with the point (record id, row, ...)
    """

    __slots__ = ('_coordinates', 'payload')

    def __init__(self, coordinates: Union[Tensor, np.ndarray, list],
                 payload: Any = None):
        if isinstance(coordinates, Tensor):
            coords = coordinates.detach().to(DEFAULT_DTYPE)
        else:
            coords = torch.as_tensor(np.asarray(coordinates, dtype=np.float64))
        if coords.dim() != 1:
            raise ValueError(f"Expected 1D coordinates, got {coords.dim()}D")
        self._coordinates = coords
        self.payload = payload

    @property
    def coordinates(self) -> Tensor:
        return self._coordinates

    def distance(self, coordinates: Tensor) -> float:
        diff = self._coordinates - coordinates.to(self._coordinates.dtype)
        return float(torch.dot(diff, diff))

    def __repr__(self) -> str:
        coords = ', '.join(f'{v:.3g}' for v in self._coordinates.tolist())
        return f"VectorPoint([{coords}])"


def as_points(X: Union[Tensor, np.ndarray, list],
              payloads: Optional[List[Any]] = None) -> List[VectorPoint]:
    """Convert an (n, d) array-like into a list of VectorPoints.

    Args:
        X: (n, d) data (tensor, numpy array, or nested list)
        payloads: Optional per-row caller data

    Returns:
        List of n VectorPoints, in row order
    """
    X = validate_data(X, dtype=DEFAULT_DTYPE)
    if payloads is not None and len(payloads) != X.shape[0]:
        raise ValueError(f"Expected {X.shape[0]} payloads, got {len(payloads)}")

    points = []
    for i in range(X.shape[0]):
        payload = None if payloads is None else payloads[i]
        points.append(VectorPoint(X[i], payload=payload))
    return points

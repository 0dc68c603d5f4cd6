"""
RFM customer points.

Recency / Frequency / Monetary records are the classic input of customer
segmentation. Values are expected to be binned or scaled by the caller
before clustering.
"""

from dataclasses import dataclass
from typing import Iterable, List, Mapping
import torch
from torch import Tensor

from ..base.interfaces import Point
from .vector import DEFAULT_DTYPE


@dataclass(frozen=True, eq=False)
class RFMPoint(Point):
    """One customer described by recency, frequency and monetary scores."""
    user_id: int
    recency: float
    frequency: float
    monetary: float

    @property
    def coordinates(self) -> Tensor:
        return torch.tensor([self.recency, self.frequency, self.monetary],
                            dtype=DEFAULT_DTYPE)

    @property
    def dimension(self) -> int:
        return 3

    def distance(self, coordinates: Tensor) -> float:
        c = coordinates.tolist()
        return ((self.recency - c[0]) ** 2
                + (self.frequency - c[1]) ** 2
                + (self.monetary - c[2]) ** 2)


def rfm_points(records: Iterable[Mapping]) -> List[RFMPoint]:
    """Build RFMPoints from mappings with user_id/recency/frequency/monetary keys."""
    return [
        RFMPoint(
            user_id=int(r['user_id']),
            recency=float(r['recency']),
            frequency=float(r['frequency']),
            monetary=float(r['monetary'])
        )
        for r in records
    ]

"""Concrete point types."""

from .vector import VectorPoint, as_points
from .rfm import RFMPoint, rfm_points

__all__ = [
    'VectorPoint',
    'as_points',
    'RFMPoint',
    'rfm_points'
]

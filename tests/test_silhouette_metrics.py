# tests/test_silhouette_metrics.py
"""
Silhouette index on hand-built partitions: closed-form values, the [-1, 1]
bound, the 0/0 special case and the inertia helper.
"""

from __future__ import annotations

import pytest
import torch

from kpartition import KMeans, Partition, as_points
from kpartition.utils.metrics import (
    silhouette_values, silhouette_score, inertia, group_summary
)
from data_gen import make_blobs


def _partition_from_groups(groups):
    centers = torch.stack([
        torch.stack([p.coordinates for p in g]).mean(dim=0) for g in groups
    ])
    part = Partition(centers)
    for gi, g in enumerate(groups):
        for p in g:
            part.append(gi, p)
    return part


def test_closed_form_values():
    a0, a1, b0 = as_points([[0.0], [1.0], [3.0]])
    part = _partition_from_groups([[a0, a1], [b0]])

    values = silhouette_values(part)

    # a0: a = (0 + 1) / 2 = 0.5, b = 9         -> (9 - 0.5) / 9
    # a1: a = (1 + 0) / 2 = 0.5, b = 4         -> (4 - 0.5) / 4
    # b0: a = 0 (singleton),     b = (9 + 4)/2 -> 1
    expected = torch.tensor([8.5 / 9, 3.5 / 4, 1.0], dtype=torch.float64)
    assert torch.allclose(values, expected)
    assert silhouette_score(part) == pytest.approx(expected.mean().item())


def test_coincident_groups_score_zero():
    p, q = as_points([[2.0, 2.0], [2.0, 2.0]])
    part = _partition_from_groups([[p], [q]])
    assert silhouette_values(part).tolist() == [0.0, 0.0]


def test_values_within_bounds():
    points, _ = make_blobs([[0, 0], [1, 1], [2, 0]], n_per=20, noise=0.8, seed=5)
    part = KMeans(random_state=0).partition(points, 4)
    values = silhouette_values(part)
    assert values.numel() == len(points)
    assert (values >= -1.0).all() and (values <= 1.0).all()


def test_well_separated_scores_near_one():
    points, _ = make_blobs([[0, 0], [50, 50]], n_per=20, noise=0.1, seed=0)
    part = KMeans(random_state=0).partition(points, 2)
    assert silhouette_score(part) > 0.99


def test_inertia_and_summary():
    a0, a1, b0 = as_points([[0.0], [2.0], [5.0]])
    part = _partition_from_groups([[a0, a1], [b0]])

    assert inertia(part) == pytest.approx(2.0)

    summary = group_summary(part)
    assert summary["sizes"].tolist() == [2, 1]
    assert summary["spread"].tolist() == pytest.approx([1.0, 0.0])
    assert summary["centers"].shape == (2, 1)

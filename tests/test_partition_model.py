# tests/test_partition_model.py
"""
Point/partition model: reset, nearest, second_nearest, recenter, average_distance.
"""

from __future__ import annotations

import pytest
import torch

from kpartition import Partition, InvalidConfiguration, as_points
from kpartition.base import average_distance


def _partition(centers):
    return Partition(torch.tensor(centers, dtype=torch.float64))


def test_nearest_picks_closest_centroid():
    part = _partition([[0.0, 0.0], [10.0, 0.0], [0.0, 10.0]])
    (p,) = as_points([[9.0, 1.0]])
    assert part.nearest(p) == 1


def test_nearest_breaks_ties_by_lowest_index():
    part = _partition([[-1.0, 0.0], [1.0, 0.0], [-1.0, 0.0]])
    (p,) = as_points([[0.0, 0.0]])
    assert part.nearest(p) == 0


def test_nearest_resolves_large_nearly_equal_distances():
    # squared distances 1e8 and 1e8 - 2 differ below float32 resolution
    part = _partition([[0.0], [1e-4]])
    (p,) = as_points([[1e4]])
    assert part.nearest(p) == 1


def test_reset_keeps_centroids():
    part = _partition([[0.0, 0.0], [5.0, 5.0]])
    points = as_points([[0.0, 1.0], [5.0, 4.0]])
    part.append(0, points[0])
    part.append(1, points[1])
    before = part.centers.clone()

    part.reset()

    assert part.sizes == [0, 0]
    assert torch.equal(part.centers, before)


def test_recenter_uses_member_mean_and_skips_empty_groups():
    part = _partition([[0.0, 0.0], [7.0, 7.0]])
    for p in as_points([[1.0, 2.0], [3.0, 4.0]]):
        part.append(0, p)

    part.recenter()

    assert torch.allclose(part[0].center, torch.tensor([2.0, 3.0], dtype=torch.float64))
    assert torch.allclose(part[1].center, torch.tensor([7.0, 7.0], dtype=torch.float64))


def test_average_distance_includes_self():
    points = as_points([[0.0, 0.0], [2.0, 0.0]])
    # squared distances: 0 to itself, 4 to the other
    assert average_distance(points[0], points) == pytest.approx(2.0)


def test_average_distance_empty_is_zero():
    (p,) = as_points([[1.0, 1.0]])
    assert average_distance(p, []) == 0.0


def test_second_nearest_uses_mean_member_distance():
    part = _partition([[0.0], [3.0], [100.0]])
    a, b1, b2, c = as_points([[0.0], [2.0], [4.0], [5.0]])
    part.append(0, a)
    part.append(1, b1)
    part.append(1, b2)
    part.append(2, c)

    index, distance = part.second_nearest(a, 0)

    # group 1: (4 + 16) / 2 = 10, group 2: 25
    assert index == 1
    assert distance == pytest.approx(10.0)


def test_second_nearest_requires_two_groups():
    part = _partition([[0.0, 0.0]])
    (p,) = as_points([[0.0, 0.0]])
    part.append(0, p)
    with pytest.raises(InvalidConfiguration):
        part.second_nearest(p, 0)


def test_group_remove_is_by_identity():
    twins = as_points([[1.0, 1.0], [1.0, 1.0]])
    part = _partition([[1.0, 1.0]])
    part.append(0, twins[0])
    part.append(0, twins[1])

    part[0].remove(twins[1])

    assert len(part[0]) == 1
    assert part[0].members[0] is twins[0]


def test_labels_and_inertia():
    points = as_points([[0.0], [1.0], [10.0]])
    part = _partition([[0.5], [10.0]])
    part.append(0, points[0])
    part.append(0, points[1])
    part.append(1, points[2])

    assert part.labels(points).tolist() == [0, 0, 1]
    assert part.inertia() == pytest.approx(0.5)


def test_partition_rejects_bad_centers():
    with pytest.raises(InvalidConfiguration):
        Partition(torch.zeros(0, 2))

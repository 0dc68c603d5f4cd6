import numpy as np
import pytest
import torch

from kpartition import (
    KMeans, IterationObserver, InvalidConfiguration, DegenerateInput, as_points
)
from data_gen import make_blobs, make_two_values


def test_kmeans_fits_simple_blobs():
    points, y = make_blobs([[0.0, 0.0], [3.0, 3.0]], n_per=100, noise=0.3, seed=0)

    km = KMeans(random_state=0)
    part = km.partition(points, 2)

    labels = part.labels(points).numpy()
    assert len(labels) == len(points)
    # Labels match ground truth up to a swap
    agreement = max(np.mean(labels == y), np.mean(labels == 1 - y))
    assert agreement > 0.95
    assert part.centers.shape == (2, 2)


def test_every_point_in_exactly_one_group():
    points, _ = make_blobs([[0, 0], [5, 0], [0, 5], [5, 5]], n_per=15, noise=1.0, seed=3)
    part = KMeans(random_state=1).partition(points, 4)

    seen = [id(m) for g in part for m in g.members]
    assert sorted(seen) == sorted(id(p) for p in points)
    assert all(size > 0 for size in part.sizes)


@pytest.mark.parametrize("k", [0, 7])
def test_k_out_of_range(k):
    points = as_points(np.zeros((6, 2)))
    with pytest.raises(InvalidConfiguration):
        KMeans(random_state=0).partition(points, k)


@pytest.mark.parametrize("delta", [0.0, 1.0])
def test_delta_threshold_bounds(delta):
    with pytest.raises(InvalidConfiguration):
        KMeans(delta_threshold=delta)


def test_unknown_init():
    with pytest.raises(ValueError):
        KMeans(init="random")


def test_iteration_cap_respected():
    # Two values, three groups: recovery forces another iteration every time
    points, _ = make_two_values(n_per=10)
    part = KMeans(max_iter=5, random_state=0).partition(points, 3)
    assert part.n_iter == 5
    assert len(part.history) == 5
    assert part.metadata["converged"] is False


def test_degenerate_input_when_recovery_budget_exhausted():
    points, _ = make_two_values(n_per=10)
    km = KMeans(max_recovery_attempts=0, random_state=0)
    with pytest.raises(DegenerateInput):
        km.partition(points, 3)


def test_observer_sees_every_iteration():
    class Recorder(IterationObserver):
        def __init__(self):
            self.calls = []

        def on_iteration(self, partition, iteration):
            self.calls.append((iteration, list(partition.sizes)))

    recorder = Recorder()
    points, _ = make_blobs([[0, 0], [10, 10]], n_per=10, noise=0.1, seed=0)
    part = KMeans(observer=recorder, random_state=0).partition(points, 2)

    assert [c[0] for c in recorder.calls] == list(range(part.n_iter))
    assert sum(recorder.calls[-1][1]) == len(points)


def test_explicit_generator_overrides_random_state():
    points, _ = make_blobs([[0, 0], [4, 0], [0, 4]], n_per=20, noise=1.5, seed=2)
    km = KMeans(random_state=None)
    p1 = km.partition(points, 3, generator=torch.Generator().manual_seed(3))
    p2 = km.partition(points, 3, generator=torch.Generator().manual_seed(3))
    assert torch.equal(p1.labels(points), p2.labels(points))


def test_get_and_set_params():
    km = KMeans(delta_threshold=0.05, random_state=4)
    params = km.get_params()
    assert params["delta_threshold"] == 0.05
    assert params["max_iter"] == 96
    assert params["random_state"] == 4

    km.set_params(max_iter=10)
    assert km.max_iter == 10
    with pytest.raises(ValueError):
        km.set_params(n_clusters=3)


def test_set_params_validates_and_keeps_previous_values():
    km = KMeans(delta_threshold=0.05, max_iter=20)

    with pytest.raises(InvalidConfiguration):
        km.set_params(delta_threshold=2.0)
    with pytest.raises(InvalidConfiguration):
        km.set_params(max_iter=0)
    with pytest.raises(InvalidConfiguration):
        km.set_params(max_iter=5, patience=0)
    with pytest.raises(ValueError):
        km.set_params(init="random")

    assert km.delta_threshold == 0.05
    assert km.max_iter == 20
    assert km.patience == 1
    assert km.init == "k-means++"


def test_patience_requires_consecutive_stable_iterations():
    points, _ = make_blobs([[0, 0], [6, 0], [0, 6]], n_per=40, noise=0.8, seed=2)

    # With this threshold an iteration only counts as stable when nothing moves
    eager = KMeans(delta_threshold=0.001, random_state=0).partition(points, 3)
    patient = KMeans(delta_threshold=0.001, patience=2, random_state=0).partition(points, 3)

    assert eager.metadata["converged"]
    assert patient.n_iter == eager.n_iter + 1
    assert [r.n_changed for r in patient.history[-2:]] == [0, 0]
    assert torch.equal(patient.labels(points), eager.labels(points))


def test_fit_predict_returns_labels():
    points, _ = make_blobs([[0, 0], [10, 10]], n_per=5, noise=0.1, seed=0)
    labels = KMeans(random_state=0).fit_predict(points, 2)
    assert labels.shape == (10,)
    assert set(labels.tolist()) == {0, 1}


def test_verbose_output(capsys):
    points, _ = make_blobs([[0, 0], [10, 10]], n_per=5, noise=0.1, seed=0)
    KMeans(verbose=2, random_state=0).partition(points, 2)
    out = capsys.readouterr().out
    assert "Initializing 2 clusters" in out
    assert "Iteration   0" in out

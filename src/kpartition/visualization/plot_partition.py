"""
Partition visualization utilities.

Scatter plots of groups and centroids, the silhouette-versus-k curve, and an
iteration observer that saves a snapshot of the partition after every Lloyd
iteration.
"""

from typing import Optional, Tuple, List, Sequence
from pathlib import Path
import matplotlib
import matplotlib.pyplot as plt
import numpy as np

from ..base.interfaces import IterationObserver
from ..base.data_structures import Partition, ScoreEntry


def _group_colors(n_groups: int) -> List:
    cmap = matplotlib.colormaps['tab10' if n_groups <= 10 else 'tab20']
    return [cmap(i % cmap.N) for i in range(n_groups)]


def plot_partition(partition: Partition,
                   ax: Optional[plt.Axes] = None,
                   dims: Tuple[int, ...] = (0, 1),
                   labels: Optional[Sequence[str]] = None,
                   point_size: int = 30,
                   center_size: int = 200,
                   alpha: float = 0.7,
                   title: Optional[str] = None) -> plt.Axes:
    """Scatter plot of every group and its centroid.

    Args:
        partition: Partition to draw
        ax: Matplotlib axes (created if None; 3D when len(dims) == 3)
        dims: Coordinate indices to plot (2 or 3 of them)
        labels: Axis labels, one per plotted dimension
        point_size: Size of member markers
        center_size: Size of centroid markers
        alpha: Point transparency
        title: Plot title

    Returns:
        Matplotlib axes
    """
    if len(dims) not in (2, 3):
        raise ValueError(f"Can only plot 2 or 3 dimensions, got {len(dims)}")
    is_3d = len(dims) == 3

    if ax is None:
        fig = plt.figure(figsize=(8, 6))
        ax = fig.add_subplot(111, projection='3d' if is_3d else None)

    colors = _group_colors(len(partition))
    dims = list(dims)

    for gi, group in enumerate(partition):
        if len(group) == 0:
            continue
        coords = np.stack([m.coordinates.detach().cpu().numpy() for m in group.members])
        ax.scatter(*[coords[:, d] for d in dims],
                   color=colors[gi],
                   s=point_size,
                   alpha=alpha,
                   edgecolors='black',
                   linewidth=0.5,
                   label=f'Group {gi} ({len(group)})')

    centers = partition.centers.detach().cpu().numpy()
    ax.scatter(*[centers[:, d] for d in dims],
               c='black',
               marker='X',
               s=center_size,
               edgecolors='white',
               linewidth=2,
               label='Centroids',
               zorder=10)

    if labels is None:
        labels = [f'Feature {d}' for d in dims]
    ax.set_xlabel(labels[0])
    ax.set_ylabel(labels[1])
    if is_3d:
        ax.set_zlabel(labels[2])

    if title:
        ax.set_title(title)
    ax.legend()

    return ax


def plot_scores(scores: Sequence[ScoreEntry],
                ax: Optional[plt.Axes] = None,
                best_k: Optional[int] = None,
                title: Optional[str] = 'Silhouette score by k') -> plt.Axes:
    """Line plot of the mean silhouette score against k."""
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 5))

    ks = [entry.k for entry in scores]
    values = [entry.score for entry in scores]
    ax.plot(ks, values, marker='o', color='#1e9fff')

    if best_k is not None:
        for k, value in zip(ks, values):
            if k == best_k:
                ax.scatter([k], [value], s=150, color='#ff5722', zorder=10,
                           label=f'best k = {k}')
        ax.legend()

    ax.set_xticks(ks)
    ax.set_xlabel('k')
    ax.set_ylabel('Mean silhouette')
    if title:
        ax.set_title(title)
    ax.grid(True, alpha=0.3)

    return ax


class PartitionPlotter(IterationObserver):
    """Saves one image of the partition per Lloyd iteration.

    Files are written as `<prefix>_k<k>_<iteration>.png` in `output_dir`.
    """

    def __init__(self, output_dir, dims: Tuple[int, ...] = (0, 1),
                 prefix: str = 'partition', dpi: int = 80):
        self.output_dir = Path(output_dir)
        self.dims = dims
        self.prefix = prefix
        self.dpi = dpi
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def on_iteration(self, partition: Partition, iteration: int) -> None:
        is_3d = len(self.dims) == 3
        fig = plt.figure(figsize=(8, 6))
        try:
            ax = fig.add_subplot(111, projection='3d' if is_3d else None)
            plot_partition(partition, ax=ax, dims=self.dims,
                           title=f'k = {len(partition)}, iteration {iteration}')
            path = self.output_dir / f'{self.prefix}_k{len(partition)}_{iteration:03d}.png'
            fig.savefig(path, dpi=self.dpi)
        finally:
            plt.close(fig)

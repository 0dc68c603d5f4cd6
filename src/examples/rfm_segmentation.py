"""
Demo of silhouette-based customer segmentation.

This example shows how to:
1. Build RFM points from (already binned) customer records
2. Let the silhouette estimator pick the number of segments
3. Plot the silhouette curve and the chosen partition
"""

import numpy as np
import matplotlib.pyplot as plt

# Add parent directory to path for imports
import sys
sys.path.append('..')

from kpartition import KMeans, SilhouetteEstimator, RFMPoint, plot_partition, plot_scores


def generate_customers(n_per_segment=60, seed=42):
    """Synthetic customers in three RFM segments, scores on a 1-5 scale."""
    rng = np.random.default_rng(seed)
    segments = [
        (4.5, 4.0, 4.2),   # recent, frequent, high spend
        (2.0, 2.5, 2.0),   # lapsing
        (1.0, 1.0, 3.5),   # old but big spenders
    ]
    customers = []
    user_id = 0
    for r, f, m in segments:
        values = np.array([r, f, m]) + 0.35 * rng.standard_normal((n_per_segment, 3))
        for row in np.clip(values, 1.0, 5.0):
            customers.append(RFMPoint(user_id=user_id, recency=row[0],
                                      frequency=row[1], monetary=row[2]))
            user_id += 1
    return customers


def main():
    customers = generate_customers()

    estimator = SilhouetteEstimator(
        partitioner=KMeans(delta_threshold=0.01),
        random_state=0,
        verbose=1
    )
    result = estimator.estimate(customers, k_max=7)

    print(f"\nRecommended number of segments: {result.best_k}")
    for group_index, group in enumerate(result.best.partition):
        center = ', '.join(f'{v:.2f}' for v in group.center.tolist())
        print(f"  segment {group_index}: {len(group):3d} customers, centroid R/F/M = ({center})")

    fig = plt.figure(figsize=(14, 6))
    ax1 = fig.add_subplot(121)
    plot_scores(result.scores, ax=ax1, best_k=result.best_k)
    ax2 = fig.add_subplot(122, projection='3d')
    plot_partition(result.best.partition, ax=ax2, dims=(0, 1, 2),
                   labels=['Recency', 'Frequency', 'Monetary'],
                   title=f'k = {result.best_k}')
    plt.tight_layout()
    plt.show()


if __name__ == '__main__':
    main()

"""
Mean update strategy for centroid-based clustering.
"""

from torch import Tensor

from ..base.interfaces import ParameterUpdater
from ..base.data_structures import ClusterState


class MeanUpdater(ParameterUpdater):
    """Recomputes every centroid as the mean of its assigned points."""

    def update(self, points: Tensor, assignments: Tensor,
               n_clusters: int, **kwargs) -> ClusterState:
        """Compute fresh centroids.

        Args:
            points: (n, d) tensor of all data points
            assignments: (n,) hard assignments covering every id in [0, K)
            n_clusters: Number of clusters K

        Returns:
            ClusterState with (K, d) means and (K,) counts

        Raises:
            ValueError: If some cluster has no assigned point
        """
        n_points, dimension = points.shape
        if assignments.shape != (n_points,):
            raise ValueError(f"Expected ({n_points},) assignments, got {tuple(assignments.shape)}")

        labels = assignments.long()
        counts = labels.bincount(minlength=n_clusters)
        if (counts == 0).any():
            raise ValueError(f"Clusters {(counts == 0).nonzero().flatten().tolist()} "
                             f"have no assigned points")

        sums = points.new_zeros(n_clusters, dimension)
        sums.index_add_(0, labels, points)
        means = sums / counts.unsqueeze(1).to(points.dtype)

        return ClusterState(
            means=means,
            n_clusters=n_clusters,
            dimension=dimension,
            counts=counts
        )

"""
Hard assignment strategy for K-means.

Assigns each point to its nearest centroid, refusing any reassignment that
would leave a cluster without members.
"""

from typing import Optional, Tuple, Dict, Any
import torch
from torch import Tensor

from ..base.interfaces import AssignmentStrategy, DistanceMetric
from ..distances.euclidean import EuclideanDistance


class HardAssignment(AssignmentStrategy):
    """Hard (discrete) assignment to nearest centroid.

    Ties go to the lowest cluster id (``torch.argmin`` returns the first
    minimal index).
    """

    def __init__(self, metric: Optional[DistanceMetric] = None):
        super().__init__()
        self.metric = metric if metric is not None else EuclideanDistance()

    def nearest(self, points: Tensor, centers: Tensor) -> Tuple[Tensor, Tensor]:
        """Return (labels, distance matrix) for points against centers."""
        distances = self.metric.pairwise(points, centers)
        return torch.argmin(distances, dim=1), distances

    def compute_assignments(self, points: Tensor,
                            centers: Tensor,
                            current: Tensor,
                            **kwargs) -> Tuple[Tensor, Dict[str, Any]]:
        """Assign each point to its nearest centroid.

        Args:
            points: (n, d) data points
            centers: (K, d) centroids
            current: (n,) current assignment

        Returns:
            assignments: (n,) cluster indices
            info: {'changed', 'n_changed', 'distances'}
        """
        candidate, distances = self.nearest(points, centers)
        n_changed = int((candidate != current).sum().item())
        return candidate, {
            'changed': n_changed > 0,
            'n_changed': n_changed,
            'distances': distances,
        }


class NonEmptyHardAssignment(HardAssignment):
    """Nearest-centroid assignment that never empties a cluster.

    If nothing moves, the current assignment is returned as-is. If something
    moves and every cluster id still has a member, the candidate is
    returned. If the candidate would empty a cluster it is discarded: the
    current assignment comes back with ``changed=False`` and
    ``rejected_empty=True``, which stops the Lloyd loop the same way
    convergence does.
    """

    def compute_assignments(self, points: Tensor,
                            centers: Tensor,
                            current: Tensor,
                            **kwargs) -> Tuple[Tensor, Dict[str, Any]]:
        candidate, info = super().compute_assignments(points, centers, current)
        info['rejected_empty'] = False
        info['empty_clusters'] = []

        if not info['changed']:
            return current, info

        n_clusters = centers.shape[0]
        counts = torch.bincount(candidate, minlength=n_clusters)
        empty = torch.where(counts == 0)[0].tolist()
        if empty:
            info['changed'] = False
            info['rejected_empty'] = True
            info['empty_clusters'] = empty
            return current, info

        return candidate, info

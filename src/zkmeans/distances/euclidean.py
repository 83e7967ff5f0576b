"""
Euclidean distance metric for clustering.
"""

import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric


class EuclideanDistance(DistanceMetric):
    """Euclidean distance metric.

    Computes sqrt(sum_d (x_d - c_d)^2) between every point and every center.
    Differences are formed explicitly rather than through the
    ||x||^2 - 2 x.c + ||c||^2 expansion, so equal points give exactly equal
    distances and ties resolve predictably.
    """

    def __init__(self, squared: bool = False):
        """
        Args:
            squared: If True, return squared distances.
                    If False (default), return actual Euclidean distances.
        """
        self.squared = squared

    def pairwise(self, points: Tensor, centers: Tensor) -> Tensor:
        """Compute distances from points to cluster centers.

        Args:
            points: (n, d) tensor of points
            centers: (K, d) tensor of centers

        Returns:
            (n, K) tensor of distances
        """
        if points.dim() != 2 or centers.dim() != 2:
            raise ValueError("Expected 2D points and centers")
        if points.shape[1] != centers.shape[1]:
            raise ValueError(f"Dimension mismatch: points {points.shape[1]}, "
                             f"centers {centers.shape[1]}")

        diff = points.unsqueeze(1) - centers.unsqueeze(0)  # (n, K, d)
        squared_distances = torch.sum(diff * diff, dim=2)

        if self.squared:
            return squared_distances
        else:
            return torch.sqrt(squared_distances)

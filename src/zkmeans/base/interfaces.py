"""
Core interfaces for the zkmeans clustering engine.

This module defines the abstract base classes each pipeline stage
implements, so the orchestrator can sequence them without knowing their
internals.
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple, Dict, Any
import torch
from torch import Tensor


class Normalizer(ABC):
    """Abstract base class for per-feature rescaling of a dataset."""

    @abstractmethod
    def fit(self, points: Tensor) -> 'Normalizer':
        """Learn per-column statistics from (n, d) points."""
        pass

    @abstractmethod
    def transform(self, points: Tensor) -> Tensor:
        """Return a rescaled copy of (n, d) points using fitted statistics."""
        pass

    def fit_transform(self, points: Tensor) -> Tensor:
        """Fit on points and return their rescaled copy."""
        return self.fit(points).transform(points)


class InitializationStrategy(ABC):
    """Abstract base class for initial partition strategies."""

    @abstractmethod
    def initialize(self, n_points: int, n_clusters: int,
                   device: Optional[torch.device] = None,
                   **kwargs) -> Tensor:
        """Produce the starting assignment.

        Args:
            n_points: Number of instances N
            n_clusters: Number of clusters K
            device: Device for the returned tensor

        Returns:
            (n,) int64 tensor of cluster ids covering every id in [0, K)
        """
        pass


class DistanceMetric(ABC):
    """Abstract base class for point-to-centroid distances."""

    @abstractmethod
    def pairwise(self, points: Tensor, centers: Tensor) -> Tensor:
        """Compute distances from every point to every center.

        Args:
            points: (n, d) tensor of points
            centers: (K, d) tensor of centers

        Returns:
            (n, K) tensor of distances
        """
        pass


class AssignmentStrategy(ABC):
    """Abstract base class for point-to-cluster assignment strategies."""

    @abstractmethod
    def compute_assignments(self, points: Tensor,
                            centers: Tensor,
                            current: Tensor,
                            **kwargs) -> Tuple[Tensor, Dict[str, Any]]:
        """Compute the next assignment.

        Args:
            points: (n, d) tensor of data points
            centers: (K, d) tensor of current centroids
            current: (n,) tensor holding the current assignment

        Returns:
            Tuple of (assignments, aux_info). ``aux_info['changed']`` tells
            whether the returned assignment differs from ``current``.
        """
        pass


class ParameterUpdater(ABC):
    """Abstract base class for centroid update strategies."""

    @abstractmethod
    def update(self, points: Tensor, assignments: Tensor,
               n_clusters: int, **kwargs):
        """Recompute cluster parameters from points and a hard assignment.

        Returns:
            A fresh ClusterState
        """
        pass


class ConvergenceCriterion(ABC):
    """Abstract base class for convergence checking."""

    def __init__(self):
        self.history = []

    @abstractmethod
    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if algorithm has converged.

        Args:
            current_state: Dictionary containing current algorithm state

        Returns:
            True if converged, False otherwise
        """
        pass

    def reset(self):
        """Reset convergence history."""
        self.history = []


class ClusteringObjective(ABC):
    """Abstract base class for clustering objective functions."""

    @abstractmethod
    def compute(self, points: Tensor, centers: Tensor,
                assignments: Tensor) -> Tensor:
        """Compute objective function value.

        Args:
            points: (n, d) tensor of data points
            centers: (K, d) tensor of centroids
            assignments: (n,) hard cluster assignments

        Returns:
            Scalar objective value
        """
        pass

    @property
    @abstractmethod
    def minimize(self) -> bool:
        """Whether to minimize (True) or maximize (False) this objective."""
        pass

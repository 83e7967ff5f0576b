"""
Core data structures for the zkmeans clustering engine.

This module provides the containers passed between pipeline stages:
the validated dataset, centroid state, hard assignments, and per-iteration
snapshots recorded by the orchestrator.
"""

from typing import Optional, List, Dict, Any
from enum import Enum
import torch
from torch import Tensor
from dataclasses import dataclass, field


class TerminationReason(Enum):
    """Why the iterate-until-stable loop stopped."""

    CONVERGED = 'converged'
    ABORTED = 'aborted'      # next step would have emptied a cluster
    EXHAUSTED = 'exhausted'  # iteration cap reached


@dataclass(frozen=True)
class Dataset:
    """Validated clustering input: N instances of dimension D, plus K."""

    instances: Tensor  # (N, D)
    n_clusters: int

    def __post_init__(self):
        assert self.instances.dim() == 2

    @property
    def n_points(self) -> int:
        return self.instances.shape[0]

    @property
    def dimension(self) -> int:
        return self.instances.shape[1]

    def to_lists(self) -> List[List[float]]:
        """Instances as nested Python lists, in input order."""
        return self.instances.tolist()


@dataclass
class ClusterState:
    """Centroids of all clusters at a given iteration."""

    means: Tensor  # (K, d) cluster centroids
    n_clusters: int
    dimension: int

    counts: Optional[Tensor] = None  # (K,) members per cluster

    def __post_init__(self):
        """Validate dimensions."""
        assert self.means.shape == (self.n_clusters, self.dimension)
        if self.counts is not None:
            assert self.counts.shape == (self.n_clusters,)


class AssignmentMatrix:
    """Hard cluster assignment: instance index -> cluster id.

    Wraps an (n,) integer tensor and offers the occupancy queries the
    assignment and update steps need.
    """

    def __init__(self, assignments: Tensor, n_clusters: int):
        """
        Args:
            assignments: (n,) hard assignments
            n_clusters: Number of clusters K
        """
        self.n_clusters = n_clusters
        self._validate_and_store(assignments)

    def _validate_and_store(self, assignments: Tensor):
        assert assignments.dim() == 1
        if assignments.numel() > 0:
            assert assignments.max() < self.n_clusters
            assert assignments.min() >= 0
        self._hard_assignments = assignments.long()

    @property
    def n_points(self) -> int:
        """Number of data points."""
        return self._hard_assignments.shape[0]

    def get_hard(self) -> Tensor:
        return self._hard_assignments

    def get_cluster_indices(self, cluster_idx: int) -> Tensor:
        """Get indices of points assigned to a specific cluster."""
        return torch.where(self._hard_assignments == cluster_idx)[0]

    def count_per_cluster(self) -> Tensor:
        """Count points per cluster."""
        return torch.bincount(self._hard_assignments, minlength=self.n_clusters)

    def empty_clusters(self) -> List[int]:
        """Ids in [0, K) that have no member."""
        counts = self.count_per_cluster()
        return torch.where(counts == 0)[0].tolist()

    def covers_all_clusters(self) -> bool:
        return bool((self.count_per_cluster() > 0).all())

    def n_changed(self, other: 'AssignmentMatrix') -> int:
        """Number of instances whose id differs from ``other``."""
        return int((self._hard_assignments != other.get_hard()).sum().item())

    def __repr__(self) -> str:
        return f"AssignmentMatrix(n_points={self.n_points}, n_clusters={self.n_clusters})"


@dataclass
class AlgorithmState:
    """Snapshot of the algorithm at a given iteration.

    Used for convergence checking, diagnostics and debugging.
    """
    iteration: int
    cluster_state: ClusterState
    assignments: AssignmentMatrix
    objective_value: float

    n_changed: int = 0
    converged: bool = False
    metadata: Dict[str, Any] = field(default_factory=dict)

"""
Random partition initialization.

Seeds every cluster with one instance, then scatters the rest uniformly.
"""

from typing import Optional
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy
from ..utils.validation import check_n_clusters


class RandomPartitionInit(InitializationStrategy):
    """Random initial partition with guaranteed coverage.

    Instance i goes to cluster i for i < K, so no cluster starts empty.
    Every remaining instance gets an id drawn uniformly from [0, K).
    """

    def __init__(self, generator: Optional[torch.Generator] = None):
        """
        Args:
            generator: Source of randomness. None creates an entropy-seeded
                generator on first use.
        """
        self.generator = generator

    def initialize(self, n_points: int, n_clusters: int,
                   device: Optional[torch.device] = None,
                   **kwargs) -> Tensor:
        """Build the initial assignment.

        Args:
            n_points: Number of instances N
            n_clusters: Number of clusters K

        Returns:
            (n,) int64 tensor of cluster ids
        """
        check_n_clusters(n_clusters, n_points)

        if self.generator is None:
            self.generator = torch.Generator()
            self.generator.seed()

        seeded = torch.arange(n_clusters, dtype=torch.long)
        # Generator lives on CPU; draw there and move afterwards
        rest = torch.randint(0, n_clusters, (n_points - n_clusters,),
                             generator=self.generator, dtype=torch.long)
        assignments = torch.cat([seeded, rest])

        if device is not None:
            assignments = assignments.to(device)
        return assignments

"""
Initialization from a previous or custom partition.

Useful for warm starts and for reproducing a run from a known starting point.
"""

from typing import Optional, Sequence, Union
import numpy as np
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy
from ..base.data_structures import AssignmentMatrix
from ..exceptions import InvalidConfiguration
from ..utils.validation import check_n_clusters


class FromAssignmentInit(InitializationStrategy):
    """Initialize from a fixed assignment.

    Accepts either:
    - A tensor, array or sequence of N cluster ids
    - An AssignmentMatrix from a previous run
    """

    def __init__(self, initial_assignment: Union[Tensor, np.ndarray, Sequence[int], AssignmentMatrix]):
        """
        Args:
            initial_assignment: Starting partition to use
        """
        self.initial_assignment = initial_assignment

    def _as_tensor(self) -> Tensor:
        initial = self.initial_assignment
        if isinstance(initial, AssignmentMatrix):
            return initial.get_hard().clone()
        if isinstance(initial, Tensor):
            if initial.is_floating_point():
                raise InvalidConfiguration("Initial assignment must contain integer cluster ids")
            return initial.detach().clone().long()
        if isinstance(initial, np.ndarray):
            if not np.issubdtype(initial.dtype, np.integer):
                raise InvalidConfiguration("Initial assignment must contain integer cluster ids")
            return torch.from_numpy(initial.astype(np.int64))
        if isinstance(initial, (list, tuple)):
            if not all(isinstance(v, (int, np.integer)) and not isinstance(v, bool) for v in initial):
                raise InvalidConfiguration("Initial assignment must contain integer cluster ids")
            return torch.tensor(list(initial), dtype=torch.long)
        raise TypeError(f"Unknown initial_assignment type: {type(initial)}")

    def initialize(self, n_points: int, n_clusters: int,
                   device: Optional[torch.device] = None,
                   **kwargs) -> Tensor:
        """Validate and return the stored assignment.

        Raises:
            InvalidConfiguration: If the assignment has the wrong length,
                uses ids outside [0, K), or leaves a cluster empty
        """
        check_n_clusters(n_clusters, n_points)
        assignments = self._as_tensor()

        if assignments.dim() != 1 or assignments.shape[0] != n_points:
            raise InvalidConfiguration(f"Initial assignment has shape {tuple(assignments.shape)}, "
                                       f"but data has {n_points} instances")

        if (assignments < 0).any() or (assignments >= n_clusters).any():
            raise InvalidConfiguration(f"Initial assignment uses ids outside [0, {n_clusters})")

        empty = AssignmentMatrix(assignments, n_clusters).empty_clusters()
        if empty:
            raise InvalidConfiguration(f"Initial assignment leaves clusters {empty} empty")

        if device is not None:
            assignments = assignments.to(device)
        return assignments

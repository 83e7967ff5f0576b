"""
Convergence criteria for the Lloyd iteration.

The loop is stable once an assignment step leaves every instance where it
was. A rejected step (one that would have emptied a cluster) also leaves
every instance in place, so it stops the loop the same way.
"""

from typing import Dict, Any
from torch import Tensor

from ..base.interfaces import ConvergenceCriterion


class ChangeInAssignments(ConvergenceCriterion):
    """Convergence based on the number of instances that change clusters."""

    def __init__(self, max_changed: int = 0, patience: int = 1):
        """
        Args:
            max_changed: Largest number of moved instances still counted as stable
            patience: Number of stable iterations required before declaring convergence
        """
        super().__init__()
        if max_changed < 0:
            raise ValueError(f"max_changed must be non-negative, got {max_changed}")
        if patience < 1:
            raise ValueError(f"patience must be at least 1, got {patience}")
        self.max_changed = max_changed
        self.patience = patience
        self._prev_assignments = None
        self._stable_count = 0

    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if assignments have stabilized.

        The first call only records the baseline assignment.
        """
        assignments = current_state['assignments']

        if isinstance(assignments, Tensor):
            current_assignments = assignments
        else:
            # AssignmentMatrix object
            current_assignments = assignments.get_hard()

        if self._prev_assignments is None:
            self._prev_assignments = current_assignments.clone()
            return False

        n_changed = int((current_assignments != self._prev_assignments).sum().item())
        n_total = len(current_assignments)

        self.history.append({
            'iteration': current_state.get('iteration', len(self.history)),
            'n_changed': n_changed,
            'change_fraction': n_changed / n_total if n_total else 0.0
        })

        if n_changed <= self.max_changed:
            self._stable_count += 1
            converged = self._stable_count >= self.patience
        else:
            self._stable_count = 0
            converged = False

        self._prev_assignments = current_assignments.clone()

        return converged

    def reset(self):
        super().reset()
        self._prev_assignments = None
        self._stable_count = 0

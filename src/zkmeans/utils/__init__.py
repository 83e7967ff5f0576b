"""Utility functions for zkmeans."""

from .convergence import ChangeInAssignments

from .validation import (
    validate_data,
    check_n_clusters,
    check_random_state,
    MIN_CLUSTERS
)

__all__ = [
    # Convergence criteria
    'ChangeInAssignments',

    # Validation
    'validate_data',
    'check_n_clusters',
    'check_random_state',
    'MIN_CLUSTERS'
]

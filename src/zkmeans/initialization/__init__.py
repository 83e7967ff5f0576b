"""Initialization strategies for the initial partition."""

from .random import RandomPartitionInit
from .from_previous import FromAssignmentInit

__all__ = [
    'RandomPartitionInit',
    'FromAssignmentInit'
]

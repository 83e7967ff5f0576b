"""Assignment strategies for K-means."""

from .hard import HardAssignment, NonEmptyHardAssignment

__all__ = [
    'HardAssignment',
    'NonEmptyHardAssignment'
]

"""
zkmeans: Lloyd's K-Means over normalized features.

Partitions N feature vectors into K non-empty clusters. Features are
rescaled per column, every cluster is seeded with one instance, and the
assign/update loop never lets a cluster go empty.

Example usage:
    >>> from zkmeans import KMeans
    >>>
    >>> X = [[1.0, 1.0], [1.1, 1.0], [9.0, 9.0], [9.1, 9.0]]
    >>> model = KMeans(n_clusters=2, init=[0, 1, 0, 1])
    >>> model.fit_predict(X).tolist()
    [0, 0, 1, 1]
    >>> model.termination_reason_
    <TerminationReason.CONVERGED: 'converged'>
"""

__version__ = '0.1.0'

from .algorithms.kmeans import KMeans, kmeans
from .normalization import ZScoreNormalizer
from .initialization import RandomPartitionInit, FromAssignmentInit

from .base import (
    Dataset,
    ClusterState,
    AssignmentMatrix,
    TerminationReason
)

from .exceptions import ZKMeansError, InvalidConfiguration, MalformedInput

from .io import parse_dataset, load_dataset, encode_clustering

__all__ = [
    # Algorithm
    'KMeans',
    'kmeans',

    # Components
    'ZScoreNormalizer',
    'RandomPartitionInit',
    'FromAssignmentInit',

    # Core data structures
    'Dataset',
    'ClusterState',
    'AssignmentMatrix',
    'TerminationReason',

    # Errors
    'ZKMeansError',
    'InvalidConfiguration',
    'MalformedInput',

    # JSON boundary
    'parse_dataset',
    'load_dataset',
    'encode_clustering',

    # Version
    '__version__'
]

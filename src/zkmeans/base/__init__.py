"""Base classes and interfaces for the zkmeans clustering engine."""

from .interfaces import (
    Normalizer,
    InitializationStrategy,
    DistanceMetric,
    AssignmentStrategy,
    ParameterUpdater,
    ConvergenceCriterion,
    ClusteringObjective
)

from .data_structures import (
    Dataset,
    ClusterState,
    AssignmentMatrix,
    AlgorithmState,
    TerminationReason
)

from .clustering_base import BaseClusteringAlgorithm

__all__ = [
    # Interfaces
    'Normalizer',
    'InitializationStrategy',
    'DistanceMetric',
    'AssignmentStrategy',
    'ParameterUpdater',
    'ConvergenceCriterion',
    'ClusteringObjective',

    # Data structures
    'Dataset',
    'ClusterState',
    'AssignmentMatrix',
    'AlgorithmState',
    'TerminationReason',

    # Base algorithm
    'BaseClusteringAlgorithm'
]

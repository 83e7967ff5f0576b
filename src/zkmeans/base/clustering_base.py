"""
Base class for Lloyd-style clustering algorithms.

Provides the algorithmic skeleton: normalize, build an initial partition,
then alternate centroid updates and assignment steps until the assignment
stops changing or the iteration cap is reached.
"""

from abc import abstractmethod
from typing import Optional, Dict, Any, List, Union
import torch
from torch import Tensor
import time
import warnings

from .interfaces import (
    Normalizer, AssignmentStrategy, ParameterUpdater,
    InitializationStrategy, ConvergenceCriterion, ClusteringObjective
)
from .data_structures import (
    ClusterState, AssignmentMatrix, AlgorithmState, TerminationReason
)
from ..utils.validation import validate_data, check_n_clusters


class BaseClusteringAlgorithm:
    """Base class implementing the alternating optimization loop.

    Subclasses need to specify:
    - Normalizer
    - Initialization strategy
    - Assignment strategy
    - Parameter update strategy
    - Convergence criterion
    - Objective function

    The loop runs at most ``n_points * MAX_ITER_FACTOR`` iterations. Whatever
    stops it, the last valid assignment is the result; ``termination_reason_``
    records which terminal state was reached.
    """

    MAX_ITER_FACTOR = 10

    def __init__(self,
                 n_clusters: int,
                 verbose: int = 0,
                 random_state: Optional[Union[int, torch.Generator]] = None,
                 device: Optional[torch.device] = None):
        """
        Args:
            n_clusters: Number of clusters K
            verbose: Verbosity level (0=silent, 1=progress, 2=detailed)
            random_state: Seed or generator for the initial partition
            device: Torch device (None for auto-detect)
        """
        self.n_clusters = n_clusters
        self.verbose = verbose
        self.random_state = random_state

        if device is None:
            self.device = torch.device('cuda' if torch.cuda.is_available() else 'cpu')
        else:
            self.device = device

        # These will be set by subclasses
        self.normalizer: Optional[Normalizer] = None
        self.assignment_strategy: Optional[AssignmentStrategy] = None
        self.update_strategy: Optional[ParameterUpdater] = None
        self.initialization_strategy: Optional[InitializationStrategy] = None
        self.convergence_criterion: Optional[ConvergenceCriterion] = None
        self.objective: Optional[ClusteringObjective] = None

        # Algorithm state
        self.fitted_ = False
        self.n_iter_ = 0
        self.history_: List[AlgorithmState] = []
        self.labels_: Optional[Tensor] = None
        self.cluster_state_: Optional[ClusterState] = None
        self.termination_reason_: Optional[TerminationReason] = None
        self._inertia: Optional[float] = None

    @abstractmethod
    def _create_components(self) -> None:
        """Create algorithm-specific components.

        Subclasses must implement this to instantiate:
        - self.normalizer
        - self.initialization_strategy
        - self.assignment_strategy
        - self.update_strategy
        - self.convergence_criterion
        - self.objective
        """
        pass

    def fit(self, X: Tensor, y: Optional[Tensor] = None) -> 'BaseClusteringAlgorithm':
        """Fit the clustering model.

        Args:
            X: (n, d) data
            y: Ignored (for sklearn compatibility)

        Returns:
            Self
        """
        return self._fit(X)

    def fit_predict(self, X: Tensor, y: Optional[Tensor] = None) -> Tensor:
        """Fit and return the final assignment.

        Args:
            X: (n, d) data
            y: Ignored

        Returns:
            (n,) tensor of cluster ids aligned to the rows of X
        """
        self._fit(X)
        return self.labels_

    def predict(self, X: Tensor) -> Tensor:
        """Assign new data to the nearest fitted centroid.

        New points are normalized with the statistics learned during fit.
        No occupancy constraint applies here.

        Args:
            X: (n, d) data

        Returns:
            (n,) tensor of cluster ids
        """
        if not self.fitted_:
            raise RuntimeError("Model must be fitted before calling predict")

        X = self._validate_data(X)
        X_norm = self.normalizer.transform(X)
        labels, _ = self.assignment_strategy.nearest(X_norm, self.cluster_state_.means)
        return labels

    def _fit(self, X: Tensor) -> 'BaseClusteringAlgorithm':
        """Internal fit method implementing the alternating optimization."""
        # Validate before any computation
        X = self._validate_data(X)
        n_points, dimension = X.shape
        check_n_clusters(self.n_clusters, n_points)

        self._create_components()

        if self.verbose:
            print(f"Initializing {self.n_clusters} clusters over {n_points} instances...")

        start_time = time.time()
        X_norm = self.normalizer.fit_transform(X)
        assignments = self.initialization_strategy.initialize(
            n_points, self.n_clusters, device=X_norm.device
        )

        max_iter = n_points * self.MAX_ITER_FACTOR
        self.n_iter_ = 0
        self.history_ = []
        self.termination_reason_ = TerminationReason.EXHAUSTED
        self.convergence_criterion.reset()
        self.convergence_criterion.check({'iteration': 0, 'assignments': assignments})

        # Main optimization loop
        for iteration in range(max_iter):
            iter_start_time = time.time()

            # Update step
            cluster_state = self.update_strategy.update(
                X_norm, assignments, self.n_clusters
            )

            # Assignment step
            assignments, aux_info = self.assignment_strategy.compute_assignments(
                X_norm, cluster_state.means, assignments
            )
            self.n_iter_ = iteration + 1

            converged = self.convergence_criterion.check({
                'iteration': self.n_iter_,
                'assignments': assignments,
                'cluster_state': cluster_state
            })

            objective_value = self.objective.compute(
                X_norm, cluster_state.means, assignments
            )
            n_changed = aux_info.get('n_changed', 0) if aux_info.get('changed', True) else 0

            self.history_.append(AlgorithmState(
                iteration=iteration,
                cluster_state=cluster_state,
                assignments=AssignmentMatrix(assignments, self.n_clusters),
                objective_value=objective_value.item(),
                n_changed=n_changed,
                converged=converged,
                metadata={'rejected_empty': aux_info.get('rejected_empty', False)}
            ))

            # Logging
            iter_time = time.time() - iter_start_time
            if self.verbose >= 2:
                obj_direction = "↓" if self.objective.minimize else "↑"
                print(f"Iteration {iteration:3d}: objective = {objective_value.item():.6f} "
                      f"{obj_direction} changed = {n_changed} ({iter_time:.3f}s)")

            if converged:
                if aux_info.get('rejected_empty', False):
                    self.termination_reason_ = TerminationReason.ABORTED
                    if self.verbose:
                        print(f"Stopped at iteration {iteration}: reassignment would empty "
                              f"clusters {aux_info.get('empty_clusters', [])}")
                else:
                    self.termination_reason_ = TerminationReason.CONVERGED
                    if self.verbose:
                        print(f"Converged at iteration {iteration}")
                break

        total_time = time.time() - start_time

        if self.verbose:
            if self.termination_reason_ is TerminationReason.EXHAUSTED:
                warnings.warn(f"Failed to converge after {max_iter} iterations")
            print(f"Total fitting time: {total_time:.3f}s")

        self.labels_ = assignments
        self.cluster_state_ = self.update_strategy.update(X_norm, assignments, self.n_clusters)
        self._inertia = self.objective.compute(
            X_norm, self.cluster_state_.means, assignments
        ).item()
        self.fitted_ = True
        return self

    def _validate_data(self, X: Tensor) -> Tensor:
        """Validate and prepare input data."""
        return validate_data(X, dtype=torch.float64, device=self.device)

    @property
    def cluster_centers_(self) -> Tensor:
        """Centroids in normalized feature space."""
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")
        return self.cluster_state_.means

    @property
    def inertia_(self) -> float:
        """Objective value of the final assignment."""
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")
        return self._inertia

    @property
    def normalizer_(self) -> Normalizer:
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")
        return self.normalizer

    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        """Get parameters (sklearn compatibility)."""
        return {
            'n_clusters': self.n_clusters,
            'verbose': self.verbose,
            'random_state': self.random_state,
            'device': self.device
        }

    def set_params(self, **params) -> 'BaseClusteringAlgorithm':
        """Set parameters (sklearn compatibility)."""
        valid = self.get_params()
        for key, value in params.items():
            if key not in valid:
                raise ValueError(f"Invalid parameter '{key}' for {type(self).__name__}")
            setattr(self, key, value)
        return self

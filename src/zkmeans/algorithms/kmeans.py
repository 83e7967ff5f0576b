"""
K-means clustering algorithm.

Lloyd's K-means over normalized features, assembled from the modular
components in this package.
"""

from typing import Optional, List, Sequence, Union
import numpy as np
import torch
from torch import Tensor

from ..base.clustering_base import BaseClusteringAlgorithm
from ..base.interfaces import ClusteringObjective
from ..normalization.zscore import ZScoreNormalizer
from ..assignments.hard import NonEmptyHardAssignment
from ..initialization.random import RandomPartitionInit
from ..initialization.from_previous import FromAssignmentInit
from ..utils.convergence import ChangeInAssignments
from ..utils.validation import check_random_state
from ..updates.mean import MeanUpdater
from ..exceptions import InvalidConfiguration


class KMeansObjective(ClusteringObjective):
    """K-means objective: sum of squared distances to assigned centroids."""

    def compute(self, points: Tensor, centers: Tensor,
                assignments: Tensor) -> Tensor:
        """Compute within-cluster sum of squares."""
        diff = points - centers[assignments]
        return torch.sum(diff * diff)

    @property
    def minimize(self) -> bool:
        return True


class KMeans(BaseClusteringAlgorithm):
    """K-means clustering algorithm.

    Partitions data into K non-empty clusters. Features are normalized per
    column, every cluster is seeded with one instance, and the Lloyd loop
    refuses any reassignment that would empty a cluster.

    Parameters
    ----------
    n_clusters : int
        Number of clusters, at least 2 and at most the number of instances
    init : 'random' or array-like of shape (n_samples,), default='random'
        Initial partition:
        - 'random' : instance i in cluster i for i < K, the rest uniform
        - array of cluster ids : use as the starting partition
    spread : {'variance', 'std'}, default='variance'
        Column divisor used by the normalizer
    verbose : int, default=0
        Verbosity level
    random_state : int or torch.Generator, optional
        Seed or generator for the random partition. None draws a fresh
        seed from the operating system on every fit.
    device : torch.device, optional
        Device for computation (CPU/GPU)

    Attributes
    ----------
    cluster_centers_ : Tensor of shape (n_clusters, n_features)
        Cluster centroids in normalized space
    labels_ : Tensor of shape (n_samples,)
        Cluster assignments for training data
    inertia_ : float
        Sum of squared normalized distances to assigned centroids
    n_iter_ : int
        Number of iterations run
    termination_reason_ : TerminationReason
        CONVERGED, ABORTED (empty-cluster dead end) or EXHAUSTED
    """

    def __init__(self,
                 n_clusters: int,
                 init: Union[str, Tensor, np.ndarray, Sequence[int]] = 'random',
                 spread: str = 'variance',
                 verbose: int = 0,
                 random_state: Optional[Union[int, torch.Generator]] = None,
                 device: Optional[torch.device] = None):
        """Initialize K-means algorithm."""
        super().__init__(
            n_clusters=n_clusters,
            verbose=verbose,
            random_state=random_state,
            device=device
        )
        self.init = init
        self.spread = spread

    def _create_components(self) -> None:
        """Create K-means specific components."""
        self.normalizer = ZScoreNormalizer(spread=self.spread)

        # Assignment strategy
        self.assignment_strategy = NonEmptyHardAssignment()

        # Update strategy
        self.update_strategy = MeanUpdater()

        # Initialization
        if isinstance(self.init, str):
            if self.init == 'random':
                generator = check_random_state(self.random_state)
                self.initialization_strategy = RandomPartitionInit(generator)
            else:
                raise InvalidConfiguration(f"Unknown init method: {self.init}")
        else:
            # Custom initial partition provided
            self.initialization_strategy = FromAssignmentInit(self.init)

        # Convergence criterion
        self.convergence_criterion = ChangeInAssignments(max_changed=0)

        # Objective
        self.objective = KMeansObjective()

    def fit(self, X: Tensor, y: Optional[Tensor] = None) -> 'KMeans':
        """Fit K-means clustering.

        Parameters
        ----------
        X : array-like of shape (n_samples, n_features)
            Training data
        y : Ignored
            Not used, present for API consistency

        Returns
        -------
        self : KMeans
            Fitted estimator
        """
        super().fit(X, y)
        return self

    def fit_predict(self, X: Tensor, y: Optional[Tensor] = None) -> Tensor:
        """Fit and return labels.

        Parameters
        ----------
        X : array-like of shape (n_samples, n_features)
            Training data
        y : Ignored
            Not used

        Returns
        -------
        labels : Tensor of shape (n_samples,)
            Cluster labels
        """
        self.fit(X, y)
        return self.labels_

    def score(self, X: Tensor, y: Optional[Tensor] = None) -> float:
        """Opposite of the value of X on the K-means objective.

        Parameters
        ----------
        X : array-like of shape (n_samples, n_features)
            New data
        y : Ignored
            Not used

        Returns
        -------
        score : float
            Negative of sum of squared normalized distances to centers
        """
        labels = self.predict(X)
        X_norm = self.normalizer.transform(self._validate_data(X))
        return -self.objective.compute(X_norm, self.cluster_centers_, labels).item()

    def get_params(self, deep: bool = True):
        params = super().get_params(deep)
        params.update({'init': self.init, 'spread': self.spread})
        return params

    def __repr__(self) -> str:
        return f"KMeans(n_clusters={self.n_clusters}, spread='{self.spread}')"


def kmeans(instances, n_clusters: int,
           random_state: Optional[Union[int, torch.Generator]] = None,
           spread: str = 'variance') -> List[int]:
    """Cluster instances and return one cluster id per instance as a list."""
    model = KMeans(n_clusters=n_clusters, spread=spread,
                   random_state=random_state, device=torch.device('cpu'))
    return model.fit_predict(instances).tolist()

"""
Input validation utilities.

Provides the checks that run before any clustering work: conversion of
user data to tensors, shape and finiteness checks, the cluster-count check,
and random state handling.
"""

from typing import Optional, Union, Sequence
import torch
from torch import Tensor
import numpy as np

from ..exceptions import InvalidConfiguration, MalformedInput

MIN_CLUSTERS = 2


def _check_rectangular(rows: Sequence) -> None:
    """Reject empty and ragged nested sequences before tensor conversion."""
    if len(rows) == 0:
        raise MalformedInput("Dataset contains no instances")

    widths = set()
    for i, row in enumerate(rows):
        if isinstance(row, (str, bytes)) or not hasattr(row, '__len__'):
            raise MalformedInput(f"Instance {i} is not a sequence of numbers")
        widths.add(len(row))

    if len(widths) > 1:
        raise MalformedInput(f"Instances have inconsistent dimensions: {sorted(widths)}")


def validate_data(X: Union[Tensor, np.ndarray, list, tuple],
                  dtype: torch.dtype = torch.float64,
                  device: Optional[torch.device] = None,
                  ensure_finite: bool = True,
                  ensure_min_samples: int = 1,
                  ensure_min_features: int = 1) -> Tensor:
    """Validate and convert input data to a 2D tensor.

    Always returns a new tensor; the caller's data is never aliased.

    Args:
        X: Input data (tensor, numpy array, or nested sequences)
        dtype: Target data type
        device: Target device
        ensure_finite: Whether to check for inf/nan
        ensure_min_samples: Minimum number of samples required
        ensure_min_features: Minimum number of features required

    Returns:
        Validated (n, d) tensor

    Raises:
        MalformedInput: If validation fails
    """
    if isinstance(X, Tensor):
        X = X.detach().to(dtype=dtype, device=device).clone()
    elif isinstance(X, np.ndarray):
        if X.dtype == object:
            _check_rectangular(X)
        try:
            X = torch.from_numpy(np.array(X, dtype=np.float64)).to(dtype=dtype, device=device)
        except (TypeError, ValueError) as e:
            raise MalformedInput(f"Could not convert instances to numbers: {e}") from e
    elif isinstance(X, (list, tuple)):
        _check_rectangular(X)
        try:
            X = torch.tensor(X, dtype=dtype, device=device)
        except (TypeError, ValueError) as e:
            raise MalformedInput(f"Could not convert instances to numbers: {e}") from e
    else:
        raise TypeError(f"Cannot convert {type(X)} to tensor")

    if X.dim() != 2:
        raise MalformedInput(f"Expected 2D data, got {X.dim()}D")

    n_samples, n_features = X.shape

    if n_samples < ensure_min_samples:
        raise MalformedInput(f"Found {n_samples} samples, but need at least "
                             f"{ensure_min_samples}")

    if n_features < ensure_min_features:
        raise MalformedInput(f"Found {n_features} features, but need at least "
                             f"{ensure_min_features}")

    if ensure_finite:
        if torch.isnan(X).any():
            raise MalformedInput("Input contains NaN values")
        if torch.isinf(X).any():
            raise MalformedInput("Input contains infinite values")

    return X


def check_n_clusters(n_clusters: int, n_samples: int) -> None:
    """Validate number of clusters.

    Args:
        n_clusters: Number of clusters
        n_samples: Number of samples

    Raises:
        TypeError: If n_clusters is not an int
        InvalidConfiguration: If n_clusters < 2 or n_clusters > n_samples
    """
    if isinstance(n_clusters, bool) or not isinstance(n_clusters, (int, np.integer)):
        raise TypeError(f"n_clusters must be int, got {type(n_clusters)}")

    if n_clusters < MIN_CLUSTERS:
        raise InvalidConfiguration(f"n_clusters must be at least {MIN_CLUSTERS}, "
                                   f"got {n_clusters}")

    if n_clusters > n_samples:
        raise InvalidConfiguration(f"n_clusters ({n_clusters}) cannot be larger than "
                                   f"n_samples ({n_samples})")


def check_random_state(random_state: Optional[Union[int, torch.Generator]]) -> torch.Generator:
    """Create a generator from a random state.

    Args:
        random_state: None for an entropy-seeded generator, an int seed,
            or an existing generator (returned as-is)

    Returns:
        torch.Generator
    """
    if random_state is None:
        generator = torch.Generator()
        generator.seed()
        return generator
    elif isinstance(random_state, torch.Generator):
        return random_state
    elif isinstance(random_state, (int, np.integer)) and not isinstance(random_state, bool):
        generator = torch.Generator()
        generator.manual_seed(int(random_state))
        return generator
    else:
        raise TypeError(f"random_state must be int or Generator, got {type(random_state)}")

# tests/test_validation.py
"""
Input validation and data structures

Covers:
- validate_data converts list / tuple / numpy / tensor to float64 copies
- MalformedInput for empty, ragged, zero-width, non-numeric, non-finite data
- check_n_clusters: TypeError for non-int, InvalidConfiguration for K < 2 or K > N
- check_random_state handling of None / int / Generator
- AssignmentMatrix occupancy helpers
"""

from __future__ import annotations

import dataclasses

import numpy as np
import pytest
import torch

from zkmeans.utils.validation import validate_data, check_n_clusters, check_random_state
from zkmeans.base.data_structures import AssignmentMatrix, ClusterState, Dataset
from zkmeans.exceptions import InvalidConfiguration, MalformedInput, ZKMeansError


@pytest.mark.parametrize("X", [
    [[1.0, 2.0], [3.0, 4.0]],
    ((1, 2), (3, 4)),
    np.array([[1.0, 2.0], [3.0, 4.0]], dtype=np.float32),
    torch.tensor([[1, 2], [3, 4]]),
])
def test_validate_data_converts(X, torch_device):
    out = validate_data(X, device=torch_device)
    assert isinstance(out, torch.Tensor)
    assert out.dtype == torch.float64
    assert out.shape == (2, 2)
    assert out.tolist() == [[1.0, 2.0], [3.0, 4.0]]


def test_validate_data_copies_tensor_input():
    X = torch.tensor([[1.0, 2.0]], dtype=torch.float64)
    out = validate_data(X)
    out[0, 0] = 99.0
    assert X[0, 0].item() == 1.0


@pytest.mark.parametrize("X", [
    [],
    [[1.0, 2.0], [3.0]],
    [[]],
    [[1.0, "a"]],
    [[1.0, float("nan")]],
    [[1.0, float("inf")]],
    [1.0, 2.0],
    np.zeros((0, 3)),
    np.zeros((2, 0)),
    np.zeros((2, 2, 2)),
])
def test_validate_data_rejects_malformed(X):
    with pytest.raises(MalformedInput):
        validate_data(X)


def test_malformed_input_is_a_value_error():
    with pytest.raises(ValueError):
        validate_data([[1.0], [1.0, 2.0]])
    assert issubclass(MalformedInput, ZKMeansError)
    assert issubclass(InvalidConfiguration, ZKMeansError)


def test_validate_data_rejects_unknown_type():
    with pytest.raises(TypeError):
        validate_data("1,2,3")


@pytest.mark.parametrize("k,n", [(2, 2), (3, 10), (10, 10), (np.int64(4), 5)])
def test_check_n_clusters_accepts(k, n):
    check_n_clusters(k, n)


@pytest.mark.parametrize("k,n", [(1, 5), (0, 5), (-3, 5), (3, 2), (11, 10)])
def test_check_n_clusters_rejects(k, n):
    with pytest.raises(InvalidConfiguration):
        check_n_clusters(k, n)


@pytest.mark.parametrize("k", [2.0, "2", True, None])
def test_check_n_clusters_type(k):
    with pytest.raises(TypeError):
        check_n_clusters(k, 5)


def test_check_random_state():
    g = torch.Generator()
    assert check_random_state(g) is g

    a = torch.randint(0, 100, (10,), generator=check_random_state(5))
    b = torch.randint(0, 100, (10,), generator=check_random_state(5))
    assert torch.equal(a, b)

    assert isinstance(check_random_state(None), torch.Generator)

    with pytest.raises(TypeError):
        check_random_state(1.5)


def test_assignment_matrix_helpers():
    a = AssignmentMatrix(torch.tensor([0, 2, 2, 0]), 3)
    assert a.n_points == 4
    assert a.count_per_cluster().tolist() == [2, 0, 2]
    assert a.empty_clusters() == [1]
    assert not a.covers_all_clusters()
    assert a.get_cluster_indices(2).tolist() == [1, 2]

    b = AssignmentMatrix(torch.tensor([0, 1, 2, 0]), 3)
    assert b.covers_all_clusters()
    assert a.n_changed(b) == 1


def test_dataset_shape_properties():
    ds = Dataset(instances=torch.zeros(5, 3, dtype=torch.float64), n_clusters=2)
    assert ds.n_points == 5
    assert ds.dimension == 3
    assert ds.to_lists()[0] == [0.0, 0.0, 0.0]


def test_cluster_state_holds_centroids_and_counts():
    state = ClusterState(means=torch.zeros(2, 3, dtype=torch.float64), n_clusters=2,
                         dimension=3, counts=torch.tensor([4, 1]))
    assert [f.name for f in dataclasses.fields(state)] == ['means', 'n_clusters',
                                                          'dimension', 'counts']
    with pytest.raises(AssertionError):
        ClusterState(means=torch.zeros(2, 3), n_clusters=3, dimension=3)

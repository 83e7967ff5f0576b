import json

import pytest
import torch

from zkmeans.io import parse_dataset, load_dataset, encode_clustering
from zkmeans.io.json_codec import format_result
from zkmeans.exceptions import MalformedInput


def test_parse_text_request():
    ds = parse_dataset('{"instances": [[1, 1], [1.5, 2]], "clusters": 2}')
    assert ds.n_clusters == 2
    assert ds.instances.dtype == torch.float64
    assert ds.to_lists() == [[1.0, 1.0], [1.5, 2.0]]


def test_parse_keys_case_insensitive():
    ds = parse_dataset({"Instances": [[0.0], [1.0], [2.0]], "CLUSTERS": 3})
    assert ds.n_points == 3
    assert ds.dimension == 1
    assert ds.n_clusters == 3


def test_cluster_count_override():
    ds = parse_dataset({"instances": [[0.0], [1.0], [2.0]], "clusters": 2}, n_clusters=3)
    assert ds.n_clusters == 3

    # The override also supplies a missing field
    ds = parse_dataset({"instances": [[0.0], [1.0]]}, n_clusters=2)
    assert ds.n_clusters == 2


@pytest.mark.parametrize("payload", [
    '{"instances": [[1, 2]], "clusters": 2',
    '[[1, 2], [3, 4]]',
    {"clusters": 2},
    {"instances": [[1, 2]]},
    {"instances": "1,2", "clusters": 2},
    {"instances": [1, 2], "clusters": 2},
    {"instances": [[1, "2"]], "clusters": 2},
    {"instances": [[1, True]], "clusters": 2},
    {"instances": [[1, None]], "clusters": 2},
    {"instances": [[1, 2], [3]], "clusters": 2},
    {"instances": [], "clusters": 2},
    {"instances": [[1, 2]], "clusters": 2.5},
    {"instances": [[1, 2]], "clusters": "2"},
    {"instances": [[1, 2]], "clusters": True},
    {"instances": [[1, 2]], "clusters": 0},
])
def test_parse_rejects_malformed(payload):
    with pytest.raises(MalformedInput):
        parse_dataset(payload)


def test_parse_rejects_integer_too_large_for_float():
    huge = "9" * 400
    with pytest.raises(MalformedInput, match="too large"):
        parse_dataset('{"instances": [[1], [%s]], "clusters": 2}' % huge)


def test_parse_rejects_bytes_that_are_not_utf8():
    with pytest.raises(MalformedInput, match="not valid JSON"):
        parse_dataset(b'{"instances": "\xff\xfe"}')


def test_parse_accepts_utf8_bytes():
    ds = parse_dataset(b'{"instances": [[1], [2]], "clusters": 2}')
    assert ds.to_lists() == [[1.0], [2.0]]


def test_load_dataset_from_file(tmp_path):
    path = tmp_path / "data.json"
    path.write_text(json.dumps({"instances": [[1, 1], [1.1, 1], [9, 9], [9.1, 9]],
                                "clusters": 2}))
    ds = load_dataset(path)
    assert ds.n_points == 4
    assert ds.n_clusters == 2


def test_load_dataset_missing_file(tmp_path):
    with pytest.raises(MalformedInput, match="Could not read"):
        load_dataset(tmp_path / "absent.json")


def test_load_dataset_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    with pytest.raises(MalformedInput, match="not valid JSON"):
        load_dataset(path)


def test_encode_clustering():
    assert encode_clustering(torch.tensor([0, 1, 1, 0])) == "[0, 1, 1, 0]"
    assert encode_clustering([2, 0, 1]) == "[2, 0, 1]"
    assert json.loads(encode_clustering([])) == []


def test_format_result():
    assert format_result(torch.tensor([1, 0])) == {"clustering": [1, 0]}

"""
JSON boundary for clustering requests and results.

A request is an object with an ``instances`` array of equal-length numeric
arrays and a positive integer ``clusters``. Keys match case-insensitively,
so ``{"Instances": ..., "Clusters": ...}`` is accepted too. Everything is
checked here, before the clustering core sees the data.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence, Union
from numbers import Real
from pathlib import Path
import json

import torch

from ..base.data_structures import Dataset
from ..exceptions import MalformedInput
from ..utils.validation import validate_data

DEFAULT_DATA_PATH = 'data.json'


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _lookup(payload: Mapping[str, Any], name: str) -> Any:
    """Fetch a field by case-insensitive key; None when absent."""
    for key, value in payload.items():
        if isinstance(key, str) and key.lower() == name:
            return value
    return None


def _parse_instances(raw: Any) -> List[List[float]]:
    if raw is None:
        raise MalformedInput("Missing required field 'instances'")
    if not isinstance(raw, list):
        raise MalformedInput(f"'instances' must be an array, got {type(raw).__name__}")

    rows = []
    for i, row in enumerate(raw):
        if not isinstance(row, list):
            raise MalformedInput(f"Instance {i} must be an array of numbers")
        for j, value in enumerate(row):
            if not _is_number(value):
                raise MalformedInput(f"Instance {i}, feature {j} is not a number: {value!r}")
        try:
            rows.append([float(v) for v in row])
        except OverflowError as e:
            raise MalformedInput(f"Instance {i} has a value too large for a float: {e}") from e
    return rows


def _parse_clusters(raw: Any) -> int:
    if raw is None:
        raise MalformedInput("Missing required field 'clusters'")
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise MalformedInput(f"'clusters' must be an integer, got {raw!r}")
    if raw < 1:
        raise MalformedInput(f"'clusters' must be positive, got {raw}")
    return raw


def parse_dataset(payload: Union[str, bytes, Mapping[str, Any]],
                  n_clusters: Optional[int] = None) -> Dataset:
    """Validate a clustering request and build a Dataset.

    Args:
        payload: JSON text or an already decoded mapping
        n_clusters: Overrides (or supplies) the ``clusters`` field

    Returns:
        Dataset with float64 instances

    Raises:
        MalformedInput: If the payload is not valid JSON, is not an object,
            or has missing or ill-typed fields
    """
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedInput(f"Request is not valid JSON: {e}") from e

    if not isinstance(payload, Mapping):
        raise MalformedInput(f"Request must be a JSON object, got {type(payload).__name__}")

    instances = _parse_instances(_lookup(payload, 'instances'))
    clusters = _parse_clusters(n_clusters if n_clusters is not None
                               else _lookup(payload, 'clusters'))

    X = validate_data(instances, dtype=torch.float64, device=torch.device('cpu'))
    return Dataset(instances=X, n_clusters=clusters)


def load_dataset(path: Union[str, Path] = DEFAULT_DATA_PATH,
                 n_clusters: Optional[int] = None) -> Dataset:
    """Read a JSON request file and parse it.

    Raises:
        MalformedInput: If the file cannot be read or its content is invalid
    """
    path = Path(path)
    try:
        text = path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise MalformedInput(f"Could not read data file '{path}': {e}") from e
    return parse_dataset(text, n_clusters=n_clusters)


def _as_int_list(labels: Union[torch.Tensor, Sequence[int]]) -> List[int]:
    if isinstance(labels, torch.Tensor):
        return [int(v) for v in labels.tolist()]
    return [int(v) for v in labels]


def encode_clustering(labels: Union[torch.Tensor, Sequence[int]]) -> str:
    """JSON array text with one cluster id per instance."""
    return json.dumps(_as_int_list(labels))


def format_result(labels: Union[torch.Tensor, Sequence[int]]) -> Dict[str, List[int]]:
    """Result record: ``{'clustering': [...]}``."""
    return {'clustering': _as_int_list(labels)}

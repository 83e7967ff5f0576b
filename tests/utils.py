# tests/utils.py
"""
Small, reusable helpers used across the zkmeans test suite.

Functions:
- to_list(labels): tensor/array/list of labels -> list of ints.
- same_partition(labels, groups): whether labels realize exactly the given groups.
- perm_invariant_accuracy(y_pred, split_index): best accuracy over label swap for 2-way splits.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Sequence

import numpy as np
import torch


def to_list(labels: Any) -> List[int]:
    if isinstance(labels, torch.Tensor):
        return [int(v) for v in labels.detach().cpu().tolist()]
    return [int(v) for v in np.asarray(labels).tolist()]


def same_partition(labels: Any, groups: Iterable[Sequence[int]]) -> bool:
    """
    Whether `labels` puts exactly the members of each group together and
    different groups apart.

    >>> same_partition([1, 1, 0, 0], [(0, 1), (2, 3)])
    True
    """
    y = to_list(labels)
    seen = set()
    for group in groups:
        ids = {y[i] for i in group}
        if len(ids) != 1:
            return False
        (gid,) = ids
        if gid in seen:
            return False
        seen.add(gid)
    return True


def perm_invariant_accuracy(y_pred: Any, split_index: int) -> float:
    """
    Best accuracy over label swaps for 2-way synthetic datasets where the
    first `split_index` points belong to class 0 and the rest to class 1.
    """
    y_pred = np.asarray(to_list(y_pred))
    n = y_pred.size
    if not (0 <= split_index <= n):
        raise ValueError(f"split_index must be in [0, {n}], got {split_index}")

    first = y_pred[:split_index]
    second = y_pred[split_index:]

    acc_a = (np.sum(first == 0) + np.sum(second == 1)) / max(1, n)
    acc_b = (np.sum(first == 1) + np.sum(second == 0)) / max(1, n)

    return float(max(acc_a, acc_b))


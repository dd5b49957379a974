"""
Functions that combine several tensors into one.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from densetensor.core.compute.precision import ieee_semantics
from densetensor.core.exceptions import ShapeError
from densetensor.core.validation import check_non_empty, check_same_shape
from densetensor.tensor.tensor import Tensor


def stack(tensors: Sequence[Tensor]) -> Tensor:
    """
    Join equally shaped tensors along a new leading dimension.

    Args:
        tensors: At least one tensor; all of the same shape

    Returns:
        Tensor of shape (len(tensors),) + shape

    Raises:
        ShapeError: If tensors is empty
        ShapeMismatchError: If the shapes differ
    """
    check_non_empty(tensors, "stack")
    shape = tensors[0].shape
    for t in tensors[1:]:
        check_same_shape(shape, t.shape, "stack")
    data = np.concatenate([t.numpy().reshape(-1) for t in tensors]).astype(np.float64)
    return Tensor((len(tensors),) + shape, data)


def rows_by_indices(tensor: Tensor, indices: Sequence[int]) -> Tensor:
    """Stack of tensor[i] for each i in indices, in the given order."""
    return stack([tensor[i] for i in indices])


def cov(tensors: Sequence[Tensor]) -> Tensor:
    """
    Sample covariance matrix of 1-D tensors.

    M[i, j] is the covariance of tensors[i] and tensors[j] with the N - 1
    denominator; vectors of length 1 give NaN.

    Args:
        tensors: At least one 1-D tensor; all of the same length

    Returns:
        Tensor of shape (len(tensors), len(tensors))

    Raises:
        ShapeError: If tensors is empty or any tensor is not 1-D
        ShapeMismatchError: If the lengths differ
    """
    check_non_empty(tensors, "cov")
    for t in tensors:
        if t.dim != 1:
            raise ShapeError(f"cov: expected 1-D tensors, got shape {t.shape}")
        check_same_shape(tensors[0].shape, t.shape, "cov")

    n = tensors[0].shape[0]
    x = np.stack([t.as_1d() for t in tensors]).astype(np.float64)
    centered = x - x.mean(axis=1, keepdims=True)
    with ieee_semantics():
        m = np.divide(centered @ centered.T, n - 1)
    k = len(tensors)
    return Tensor((k, k), m.reshape(-1))

"""
Batched matrix sequencing.

Every factorization in densetensor is a 2-D kernel applied independently
to each matrix in the trailing two dimensions of a tensor. The sequences
below walk the leading "batch" dimensions in row-major order and yield
views that share the tensor's buffer, so a kernel writing into the
slice of an output tensor writes straight into that tensor.

Key property: each slice of a freshly allocated output is disjoint from
every other slice, so slices can be processed in any order.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Iterator

import numpy as np

from densetensor.core.validation import broadcast_shapes, check_min_rank

if TYPE_CHECKING:
    from densetensor.tensor.tensor import Tensor


class _TrailingSequence:
    """Restartable sequence of views over the last `core_rank` dimensions."""

    core_rank = 0
    operation = ''

    def __init__(self, tensor: 'Tensor'):
        check_min_rank(tensor.shape, self.core_rank, self.operation)
        self._tensor = tensor
        self._core_shape = tensor.shape[-self.core_rank:]
        self._step = math.prod(self._core_shape)

    @property
    def batch_shape(self) -> tuple[int, ...]:
        """Leading dimensions iterated by the sequence."""
        return self._tensor.shape[:-self.core_rank]

    @property
    def core_shape(self) -> tuple[int, ...]:
        """Shape of each yielded view."""
        return self._core_shape

    def __len__(self) -> int:
        return self._tensor.num_elements // self._step

    def __iter__(self) -> Iterator['Tensor']:
        tensor = self._tensor
        make = type(tensor)
        start = tensor.buffer_start
        for i in range(len(self)):
            yield make(self._core_shape, tensor.buffer, start + i * self._step)


class MatrixSequence(_TrailingSequence):
    """
    Sequence of 2-D views over the trailing two dimensions of a tensor.

    Usage:
        for matrix in MatrixSequence(t):
            kernel(matrix.as_2d())
    """

    core_rank = 2
    operation = 'matrix_sequence'


class VectorSequence(_TrailingSequence):
    """Sequence of 1-D views over the last dimension of a tensor."""

    core_rank = 1
    operation = 'vector_sequence'


def broadcast_outer(first: 'Tensor', second: 'Tensor') -> tuple['Tensor', 'Tensor']:
    """
    Broadcast the batch dimensions of two matrix tensors.

    The trailing two dimensions of each operand are left untouched; the
    leading dimensions follow the element-wise broadcasting rule.

    Args:
        first: Tensor of rank >= 2
        second: Tensor of rank >= 2

    Returns:
        Fresh tensors (never views) whose batch shapes are equal

    Raises:
        ShapeError: If either operand has rank < 2
        ShapeMismatchError: If the batch shapes are not broadcast-compatible
    """
    check_min_rank(first.shape, 2, 'broadcast_outer')
    check_min_rank(second.shape, 2, 'broadcast_outer')
    batch = broadcast_shapes(first.shape[:-2], second.shape[:-2])

    result = []
    for tensor in (first, second):
        shape = batch + tensor.shape[-2:]
        data = np.broadcast_to(tensor.numpy(), shape).reshape(-1).copy()
        result.append(type(tensor)(shape, data))
    return result[0], result[1]

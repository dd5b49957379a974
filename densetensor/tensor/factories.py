"""
Tensor construction.

Every factory allocates a fresh float64 buffer owned by the new tensor;
nothing here aliases caller data.

Random tensors draw from an explicit numpy Generator. A seed builds one
with numpy.random.default_rng; passing rng= threads an existing generator
through several calls. No global random state is read or written.
"""

from __future__ import annotations

import math
from typing import Callable, Sequence

import numpy as np
from numpy.typing import ArrayLike

from densetensor.core.exceptions import ValidationError, ShapeError
from densetensor.core.validation import check_buffer_size, check_positive_int, check_shape
from densetensor.tensor.structure import LinearStructure
from densetensor.tensor.tensor import Tensor


def from_array(shape: Sequence[int], data: ArrayLike) -> Tensor:
    """
    Build a tensor from a shape and flat row-major data.

    Args:
        shape: Dimension sizes, all positive
        data: Flat sequence of prod(shape) numbers; copied

    Returns:
        Tensor of the given shape

    Raises:
        ShapeError: If shape is empty or has a non-positive dimension, data
            is empty or not flat, or prod(shape) != len(data)
        ValidationError: If data is not numeric

    Example:
        >>> from_array((2, 2), [1, 2, 3, 4]).transpose(0, 1).tolist()
        [[1.0, 3.0], [2.0, 4.0]]
    """
    shape = check_shape(shape)
    try:
        values = np.array(data, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"data: expected numeric values, got {data!r}") from e
    if values.ndim != 1:
        raise ShapeError(f"data: expected a flat sequence, got shape {values.shape}")
    check_buffer_size(shape, values.size)
    return Tensor(shape, values)


def from_numpy(array: ArrayLike) -> Tensor:
    """Tensor with the shape and (copied) values of an array."""
    values = np.array(array, dtype=np.float64)
    return Tensor(check_shape(values.shape), values.reshape(-1))


def produce(shape: Sequence[int], func: Callable[[tuple[int, ...]], float]) -> Tensor:
    """
    Build a tensor by evaluating func at every multi-index.

    func is called once per element, in row-major order.
    """
    structure = LinearStructure(shape)
    values = np.fromiter(
        (func(index) for index in structure.indices()),
        dtype=np.float64,
        count=structure.size,
    )
    return Tensor(structure.shape, values)


def full(value: float, shape: Sequence[int]) -> Tensor:
    """Tensor of the given shape with every element equal to value."""
    shape = check_shape(shape)
    return Tensor(shape, np.full(math.prod(shape), float(value)))


def zeros(shape: Sequence[int]) -> Tensor:
    return full(0.0, shape)


def ones(shape: Sequence[int]) -> Tensor:
    return full(1.0, shape)


def eye(n: int) -> Tensor:
    """n x n identity matrix."""
    check_positive_int(n, "n")
    return Tensor((n, n), np.eye(n).reshape(-1))


def random_normal(
    shape: Sequence[int],
    seed: int = 0,
    *,
    rng: np.random.Generator | None = None,
) -> Tensor:
    """
    Standard normal samples.

    Args:
        shape: Dimension sizes
        seed: Seed for a fresh generator; ignored when rng is given
        rng: Generator to draw from

    Returns:
        Tensor of independent N(0, 1) draws
    """
    shape = check_shape(shape)
    generator = rng if rng is not None else np.random.default_rng(seed)
    return Tensor(shape, generator.standard_normal(math.prod(shape)))


def full_like(tensor: Tensor, value: float) -> Tensor:
    return full(value, tensor.shape)


def zeros_like(tensor: Tensor) -> Tensor:
    return zeros(tensor.shape)


def ones_like(tensor: Tensor) -> Tensor:
    return ones(tensor.shape)


def random_normal_like(
    tensor: Tensor,
    seed: int = 0,
    *,
    rng: np.random.Generator | None = None,
) -> Tensor:
    return random_normal(tensor.shape, seed, rng=rng)


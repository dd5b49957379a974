"""
Input validation utilities for densetensor.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent shape coercion
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Validators that normalize (axes, shapes) return the normalized value
"""

from __future__ import annotations

import math
import operator
from typing import Iterable, Sequence

import numpy as np

from densetensor.core.exceptions import (
    RangeError,
    ShapeError,
    ShapeMismatchError,
    ValidationError,
)


def check_shape(shape: Iterable[int], name: str = "shape") -> tuple[int, ...]:
    """
    Validate a tensor shape and return it as a tuple.

    Args:
        shape: Sequence of dimension sizes
        name: Parameter name for error messages

    Returns:
        The shape as a tuple of Python ints

    Raises:
        ShapeError: If the shape is empty, contains non-integers, or has a
            non-positive dimension
    """
    try:
        result = tuple(shape)
    except TypeError as e:
        raise ShapeError(f"{name}: expected a sequence of ints, got {shape!r}") from e

    if len(result) == 0:
        raise ShapeError(f"{name}: shape must have at least one dimension")

    sizes = []
    for i, size in enumerate(result):
        try:
            size = operator.index(size)
        except TypeError as e:
            raise ShapeError(f"{name}: dimension {i} is not an int: {size!r}") from e
        if size <= 0:
            raise ShapeError(
                f"{name}: dimension {i} must be positive, got {size} in {result}"
            )
        sizes.append(size)
    return tuple(sizes)


def check_buffer_size(shape: tuple[int, ...], size: int, name: str = "data") -> None:
    """
    Verify that a flat buffer holds exactly prod(shape) elements.

    Args:
        shape: Validated tensor shape
        size: Number of elements in the buffer
        name: Parameter name for error messages

    Raises:
        ShapeError: If the buffer is empty or its size disagrees with shape
    """
    if size == 0:
        raise ShapeError(f"{name}: buffer is empty")
    expected = math.prod(shape)
    if size != expected:
        raise ShapeError(
            f"{name}: shape {shape} requires {expected} elements, got {size}"
        )


def normalize_dim(dim: int, rank: int, name: str = "dim") -> int:
    """
    Resolve a possibly negative axis against a tensor rank.

    Negative axes count from the end, so -1 is the last dimension.

    Args:
        dim: Axis to resolve
        rank: Number of dimensions of the tensor
        name: Parameter name for error messages

    Returns:
        The axis in [0, rank)

    Raises:
        RangeError: If dim lies outside [-rank, rank)
    """
    if not -rank <= dim < rank:
        raise RangeError(
            f"{name}: dimension {dim} out of range for tensor of rank {rank}",
            index=dim,
            bound=rank,
        )
    return dim + rank if dim < 0 else dim


def broadcast_shapes(*shapes: Sequence[int]) -> tuple[int, ...]:
    """
    Compute the broadcast shape of several shapes.

    Shapes are aligned from the trailing dimension; each aligned pair must
    be equal or one of them must be 1, in which case it stretches.

    Args:
        *shapes: Shapes to combine

    Returns:
        The common broadcast shape

    Raises:
        ShapeMismatchError: If any aligned pair is incompatible
    """
    shapes = tuple(tuple(s) for s in shapes)
    try:
        result = np.broadcast_shapes(*shapes)
    except ValueError as e:
        raise ShapeMismatchError(
            f"Shapes {' and '.join(str(s) for s in shapes)} "
            f"are not broadcast-compatible",
            shapes=shapes,
        ) from e
    return tuple(int(size) for size in result)


def check_same_shape(
    first: tuple[int, ...], second: tuple[int, ...], operation: str
) -> None:
    """
    Verify two shapes are identical.

    Args:
        first: Shape of the first operand
        second: Shape of the second operand
        operation: Operation name for error messages

    Raises:
        ShapeMismatchError: If the shapes differ
    """
    if tuple(first) != tuple(second):
        raise ShapeMismatchError(
            f"{operation}: shapes {tuple(first)} and {tuple(second)} differ",
            shapes=(tuple(first), tuple(second)),
        )


def check_min_rank(shape: tuple[int, ...], rank: int, operation: str) -> None:
    """
    Verify a shape has at least the given number of dimensions.

    Raises:
        ShapeError: If the shape has fewer than rank dimensions
    """
    if len(shape) < rank:
        raise ShapeError(
            f"{operation}: requires a tensor of rank >= {rank}, got shape {shape}"
        )


def check_square_matrix(shape: tuple[int, ...], operation: str) -> None:
    """
    Verify the trailing two dimensions form square matrices.

    Args:
        shape: Tensor shape
        operation: Operation name for error messages

    Raises:
        ShapeError: If rank < 2 or the last two dimensions differ
    """
    check_min_rank(shape, 2, operation)
    if shape[-1] != shape[-2]:
        raise ShapeError(
            f"{operation}: requires square matrices, got trailing dimensions "
            f"({shape[-2]}, {shape[-1]})"
        )


def check_non_empty(items: Sequence, name: str) -> None:
    """
    Verify a sequence of operands is not empty.

    Raises:
        ShapeError: If the sequence is empty
    """
    if len(items) == 0:
        raise ShapeError(f"{name}: list must have at least 1 element")


def check_positive_int(value: int, name: str) -> None:
    """
    Verify a count parameter is a positive integer.

    Raises:
        ValidationError: If value is not an int or is < 1
    """
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationError(f"{name}: must be a positive integer, got {value!r}")

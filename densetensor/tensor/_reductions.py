"""
Reduction engine: whole-tensor folds and folds along one dimension.

Every reduction exists in two forms:
    dim=None   reduce all elements in row-major order, return a float
    dim=d      reduce each 1-D slice along d, return a tensor whose shape
               drops d (or keeps it with size 1 when keep_dim=True)

A reduction that drops the only dimension of a 1-D tensor returns shape
(1,), since tensors are never rank 0.

Degenerate statistics follow IEEE-754: the sample variance of a single
element is 0/0 = NaN, with no warning.
"""

from __future__ import annotations

from typing import Any, Callable

import numpy as np
from numpy.typing import NDArray

from densetensor.core.compute.precision import ieee_semantics
from densetensor.core.validation import normalize_dim


def _sample_variance(a: NDArray[np.floating[Any]], axis: int | None) -> Any:
    """Unbiased variance (N - 1 denominator) along axis, or of all of a."""
    n = a.size if axis is None else a.shape[axis]
    mean = np.mean(a, axis=axis, keepdims=True)
    squares = np.sum((a - mean) ** 2, axis=axis)
    return np.divide(squares, n - 1)


def _sample_std(a: NDArray[np.floating[Any]], axis: int | None) -> Any:
    return np.sqrt(_sample_variance(a, axis))


class Reductions:
    """Mixin providing fold, fold_dim and the standard reductions."""

    def fold(self, func: Callable[[NDArray[np.floating[Any]]], Any]) -> Any:
        """
        Reduce the flattened elements with func.

        Args:
            func: Receives a fresh 1-D array of all elements in row-major
                order; whatever it returns is returned

        Returns:
            func's result
        """
        with ieee_semantics():
            return func(self._flat.copy())

    def fold_dim(
        self,
        func: Callable[[NDArray[np.floating[Any]]], float],
        dim: int,
        keep_dim: bool = False,
    ):
        """
        Reduce every 1-D slice along dim with func.

        Args:
            func: Receives one slice (a fresh 1-D array), returns a scalar
            dim: Dimension to reduce; negative values count from the end
            keep_dim: Keep the reduced dimension with size 1

        Returns:
            Tensor of reduced values

        Raises:
            RangeError: If dim lies outside [-rank, rank)
        """
        axis = normalize_dim(dim, self.dim)
        with ieee_semantics():
            result = np.apply_along_axis(
                lambda values: func(values.copy()), axis, self._array
            )
        return self._reduced(result, axis, keep_dim)

    def _reduce(
        self,
        reducer: Callable[..., Any],
        dim: int | None,
        keep_dim: bool,
    ):
        if dim is None:
            with ieee_semantics():
                return float(reducer(self._flat, None))
        axis = normalize_dim(dim, self.dim)
        with ieee_semantics():
            result = reducer(self._array, axis)
        return self._reduced(result, axis, keep_dim)

    def _reduced(self, result: Any, axis: int, keep_dim: bool):
        values = np.array(result, dtype=np.float64)
        if keep_dim:
            values = np.expand_dims(values, axis)
        if values.ndim == 0:
            values = values.reshape(1)
        return type(self)(values.shape, values.reshape(-1))

    def sum(self, dim: int | None = None, keep_dim: bool = False):
        """Sum of all elements, or along dim."""
        return self._reduce(lambda a, axis: np.sum(a, axis=axis), dim, keep_dim)

    def min(self, dim: int | None = None, keep_dim: bool = False):
        """Minimum of all elements, or along dim."""
        return self._reduce(lambda a, axis: np.min(a, axis=axis), dim, keep_dim)

    def max(self, dim: int | None = None, keep_dim: bool = False):
        """Maximum of all elements, or along dim."""
        return self._reduce(lambda a, axis: np.max(a, axis=axis), dim, keep_dim)

    def mean(self, dim: int | None = None, keep_dim: bool = False):
        """Arithmetic mean of all elements, or along dim."""
        return self._reduce(lambda a, axis: np.mean(a, axis=axis), dim, keep_dim)

    def variance(self, dim: int | None = None, keep_dim: bool = False):
        """Sample variance (N - 1 denominator); NaN for a single element."""
        return self._reduce(_sample_variance, dim, keep_dim)

    def std(self, dim: int | None = None, keep_dim: bool = False):
        """Sample standard deviation (N - 1 denominator)."""
        return self._reduce(_sample_std, dim, keep_dim)

    def arg_max(self, dim: int, keep_dim: bool = False):
        """
        Index of the maximum along dim, as a float.

        Ties go to the first occurrence.
        """
        return self._reduce(lambda a, axis: np.argmax(a, axis=axis), dim, keep_dim)

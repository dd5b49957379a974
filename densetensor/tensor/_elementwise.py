"""
Element-wise arithmetic with broadcasting.

Operands may be tensors or real scalars, on either side. Shapes are
combined with the broadcasting rule from densetensor.core.validation;
division by zero yields inf/NaN silently.

Out-of-place operations always produce a fresh float64 buffer. In-place
operations write through the receiver's buffer, so every alias of that
buffer sees the update.
"""

from __future__ import annotations

import numbers
from typing import Any, Callable

import numpy as np

from densetensor.core.compute.precision import ieee_semantics
from densetensor.core.exceptions import ShapeMismatchError
from densetensor.core.validation import broadcast_shapes


class ElementwiseOps:
    """Mixin providing plus / minus / times / div and their operators."""

    def _operand(self, other: Any) -> Any:
        """Numpy view of a tensor operand, float for a scalar, None otherwise."""
        if isinstance(other, ElementwiseOps):
            return other._array
        if isinstance(other, numbers.Real):
            return float(other)
        return None

    def _binary(self, other: Any, ufunc: Callable[..., Any]) -> Any:
        rhs = self._operand(other)
        if rhs is None:
            return NotImplemented
        if isinstance(other, ElementwiseOps):
            broadcast_shapes(self.shape, other.shape)
        with ieee_semantics():
            result = ufunc(self._array, rhs, dtype=np.float64)
        return type(self)(result.shape, result.reshape(-1))

    def _reflected(self, other: Any, ufunc: Callable[..., Any]) -> Any:
        # only reached for scalar left operands
        if not isinstance(other, numbers.Real):
            return NotImplemented
        with ieee_semantics():
            result = ufunc(float(other), self._array, dtype=np.float64)
        return type(self)(result.shape, result.reshape(-1))

    def _inplace(self, other: Any, ufunc: Callable[..., Any], operation: str) -> Any:
        rhs = self._operand(other)
        if rhs is None:
            return NotImplemented
        if isinstance(other, ElementwiseOps):
            shape = broadcast_shapes(self.shape, other.shape)
            if shape != self.shape:
                raise ShapeMismatchError(
                    f"{operation}: broadcast shape {shape} differs from "
                    f"receiver shape {self.shape}",
                    shapes=(self.shape, other.shape),
                )
        with ieee_semantics():
            ufunc(self._array, rhs, out=self._array)
        return None

    @staticmethod
    def _require(result: Any, operation: str, other: Any) -> Any:
        if result is NotImplemented:
            raise TypeError(
                f"{operation}: unsupported operand type {type(other).__name__}"
            )
        return result

    # Named operations

    def plus(self, other: Any):
        """Element-wise sum with a tensor or scalar."""
        return self._require(self._binary(other, np.add), 'plus', other)

    def minus(self, other: Any):
        """Element-wise difference with a tensor or scalar."""
        return self._require(self._binary(other, np.subtract), 'minus', other)

    def times(self, other: Any):
        """Element-wise product with a tensor or scalar."""
        return self._require(self._binary(other, np.multiply), 'times', other)

    def div(self, other: Any):
        """Element-wise quotient with a tensor or scalar."""
        return self._require(self._binary(other, np.true_divide), 'div', other)

    def plus_assign(self, other: Any) -> None:
        self._require(self._inplace(other, np.add, 'plus_assign'), 'plus_assign', other)

    def minus_assign(self, other: Any) -> None:
        self._require(
            self._inplace(other, np.subtract, 'minus_assign'), 'minus_assign', other
        )

    def times_assign(self, other: Any) -> None:
        self._require(
            self._inplace(other, np.multiply, 'times_assign'), 'times_assign', other
        )

    def div_assign(self, other: Any) -> None:
        self._require(
            self._inplace(other, np.true_divide, 'div_assign'), 'div_assign', other
        )

    def unary_minus(self):
        """Fresh tensor with every element negated."""
        return type(self)(self.shape, np.negative(self._flat, dtype=np.float64))

    # Operators

    def __add__(self, other):
        return self._binary(other, np.add)

    def __radd__(self, other):
        return self._reflected(other, np.add)

    def __sub__(self, other):
        return self._binary(other, np.subtract)

    def __rsub__(self, other):
        return self._reflected(other, np.subtract)

    def __mul__(self, other):
        return self._binary(other, np.multiply)

    def __rmul__(self, other):
        return self._reflected(other, np.multiply)

    def __truediv__(self, other):
        return self._binary(other, np.true_divide)

    def __rtruediv__(self, other):
        return self._reflected(other, np.true_divide)

    def __iadd__(self, other):
        result = self._inplace(other, np.add, '+=')
        return self if result is None else result

    def __isub__(self, other):
        result = self._inplace(other, np.subtract, '-=')
        return self if result is None else result

    def __imul__(self, other):
        result = self._inplace(other, np.multiply, '*=')
        return self if result is None else result

    def __itruediv__(self, other):
        result = self._inplace(other, np.true_divide, '/=')
        return self if result is None else result

    def __neg__(self):
        return self.unary_minus()

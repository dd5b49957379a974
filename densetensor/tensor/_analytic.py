"""
Transcendental and rounding functions, element by element.

Each function returns a fresh tensor. Inputs outside a function's domain
(ln of a negative number, acos(2), atanh(1)) produce NaN or inf, never an
exception or a warning.
"""

from typing import Any, Callable

import numpy as np

from densetensor.core.compute.precision import ieee_apply


class AnalyticFunctions:
    """Mixin providing the analytic function algebra."""

    def _apply(self, ufunc: Callable[..., Any]):
        result = ieee_apply(ufunc, self._flat)
        return type(self)(self.shape, np.asarray(result, dtype=np.float64))

    def exp(self):
        return self._apply(np.exp)

    def ln(self):
        """Natural logarithm."""
        return self._apply(np.log)

    def sqrt(self):
        return self._apply(np.sqrt)

    def cos(self):
        return self._apply(np.cos)

    def acos(self):
        return self._apply(np.arccos)

    def cosh(self):
        return self._apply(np.cosh)

    def acosh(self):
        return self._apply(np.arccosh)

    def sin(self):
        return self._apply(np.sin)

    def asin(self):
        return self._apply(np.arcsin)

    def sinh(self):
        return self._apply(np.sinh)

    def asinh(self):
        return self._apply(np.arcsinh)

    def tan(self):
        return self._apply(np.tan)

    def atan(self):
        return self._apply(np.arctan)

    def tanh(self):
        return self._apply(np.tanh)

    def atanh(self):
        return self._apply(np.arctanh)

    def ceil(self):
        return self._apply(np.ceil)

    def floor(self):
        return self._apply(np.floor)

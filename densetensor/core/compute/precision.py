"""
Numerical precision constants and utilities.

Provides machine epsilon and IEEE-754 helpers used across the kernels.
Floating-point exceptional values (inf, NaN) are treated as ordinary
results throughout densetensor, so these helpers silence numpy's
floating-point warnings instead of converting them.
"""

from contextlib import contextmanager
from typing import Any, Callable, Iterator

import numpy as np
from numpy.typing import NDArray


# Machine epsilon for float64
EPSILON_64: float = float(np.finfo(np.float64).eps)  # ~2.22e-16


@contextmanager
def ieee_semantics() -> Iterator[None]:
    """
    Context in which division by zero and invalid operations pass silently.

    Usage:
        with ieee_semantics():
            result = a / b   # inf / NaN where b == 0, no RuntimeWarning
    """
    with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
        yield


def ieee_apply(
    func: Callable[..., NDArray[np.floating[Any]]],
    *args: Any,
) -> NDArray[np.floating[Any]]:
    """
    Apply a numpy function under IEEE semantics.

    Args:
        func: Function (typically a ufunc) to apply
        *args: Arguments forwarded to func

    Returns:
        func(*args), with inf/NaN where the operation is undefined
    """
    with ieee_semantics():
        return func(*args)

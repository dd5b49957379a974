"""
Cholesky decomposition kernel.

Computes lower-triangular L with A = L @ L.T for a symmetric positive
definite matrix, row by row:

    L[i, j] = (A[i, j] - sum_k<j L[i, k] L[j, k]) / L[j, j]     j < i
    L[i, i] = sqrt(A[i, i] - sum_k<i L[i, k]^2)

Positive definiteness is checked on the fly: the quantity under the
square root (the pivot) must stay above epsilon * |A[i, i]|, which is
scale invariant and rejects singular positive semi-definite input.
"""

from typing import Any

import numpy as np
from numpy.typing import NDArray


def is_symmetric(a: NDArray[np.floating[Any]], epsilon: float) -> bool:
    """
    True if every entry matches its mirror within epsilon.

    Entries compare equal when |a_ij - a_ji| < epsilon or when they are
    exactly equal, so epsilon = 0 demands exact symmetry.
    """
    mirror = a.T
    return bool(np.all((np.abs(a - mirror) < epsilon) | (a == mirror)))


def cholesky_decompose(
    a: NDArray[np.floating[Any]],
    lower: NDArray[np.floating[Any]],
    epsilon: float,
) -> bool:
    """
    Factor a symmetric matrix into lower.

    Args:
        a: Symmetric matrix (n x n), not modified
        lower: Output (n x n); entries above the diagonal are zeroed
        epsilon: Relative pivot threshold

    Returns:
        True on success, False if a pivot fails the positivity check.
        On failure lower holds a partial factor and must be discarded.
    """
    n = a.shape[0]
    lower[...] = 0.0

    for i in range(n):
        for j in range(i):
            h = a[i, j] - lower[i, :j] @ lower[j, :j]
            lower[i, j] = h / lower[j, j]

        pivot = a[i, i] - lower[i, :i] @ lower[i, :i]
        if not (pivot > 0.0 and pivot > epsilon * abs(a[i, i])):
            return False
        lower[i, i] = np.sqrt(pivot)

    return True

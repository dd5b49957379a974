"""
LU factorization kernels with partial pivoting.

All functions operate on a single square matrix held in a writable numpy
view; batching is the caller's job (see batched.py).

Packed form:
    lu      n x n, L strictly below the diagonal (unit diagonal implied),
            U on and above the diagonal
    pivots  length n + 1 integer vector; pivots[i] is the input row that
            ended up in row i, pivots[n] counts the row swaps

With P[i, pivots[i]] = 1 the factorization satisfies P @ A = L @ U.
"""

from typing import Any

import numpy as np
from numpy.typing import NDArray


def lu_decompose(
    lu: NDArray[np.floating[Any]],
    pivots: NDArray[np.integer[Any]],
    epsilon: float,
) -> bool:
    """
    Factor a square matrix in place by Gaussian elimination.

    At step i the row with the largest |value| in column i (rows i..n-1,
    first occurrence on ties) is swapped into the pivot position.

    Args:
        lu: Matrix to factor (n x n), overwritten with the packed factors
        pivots: Output vector of length n + 1
        epsilon: Smallest acceptable pivot magnitude

    Returns:
        True if the matrix is singular at precision epsilon, in which case
        lu and pivots hold a partial factorization and must be discarded.
    """
    n = lu.shape[0]
    pivots[:n] = np.arange(n)
    pivots[n] = 0

    for i in range(n):
        column = np.abs(lu[i:, i])
        k = i + int(np.argmax(column))
        if not column[k - i] >= epsilon:
            return True

        if k != i:
            pivots[[i, k]] = pivots[[k, i]]
            pivots[n] += 1
            lu[[i, k], :] = lu[[k, i], :]

        lu[i + 1:, i] /= lu[i, i]
        lu[i + 1:, i + 1:] -= np.outer(lu[i + 1:, i], lu[i, i + 1:])

    return False


def lu_determinant(
    lu: NDArray[np.floating[Any]],
    pivots: NDArray[np.integer[Any]],
) -> float:
    """Determinant from a packed factorization: prod(diag(U)) * sign(P)."""
    n = lu.shape[0]
    sign = -1.0 if pivots[n] % 2 else 1.0
    return sign * float(np.prod(np.diagonal(lu)))


def lu_inverse(
    lu: NDArray[np.floating[Any]],
    pivots: NDArray[np.integer[Any]],
    out: NDArray[np.floating[Any]],
) -> None:
    """
    Inverse of the factored matrix, written into out.

    Solves A @ X = I for every column of I at once: forward substitution
    L @ Y = P, then back substitution U @ X = Y.
    """
    n = lu.shape[0]
    out[...] = 0.0
    out[np.arange(n), pivots[:n]] = 1.0

    for i in range(1, n):
        out[i, :] -= lu[i, :i] @ out[:i, :]

    for i in range(n - 1, -1, -1):
        out[i, :] -= lu[i, i + 1:] @ out[i + 1:, :]
        out[i, :] /= lu[i, i]


def permutation_matrix(
    pivots: NDArray[np.integer[Any]],
    out: NDArray[np.floating[Any]],
) -> None:
    """Write P with P[i, pivots[i]] = 1 into out (n x n)."""
    n = out.shape[0]
    out[...] = 0.0
    out[np.arange(n), pivots[:n]] = 1.0


def unpack_lu(
    lu: NDArray[np.floating[Any]],
    lower: NDArray[np.floating[Any]],
    upper: NDArray[np.floating[Any]],
) -> None:
    """Split packed factors into unit-lower L and upper U."""
    lower[...] = np.tril(lu, k=-1)
    np.fill_diagonal(lower, 1.0)
    upper[...] = np.triu(lu)


def is_permutation(pivots: NDArray[np.integer[Any]]) -> bool:
    """True if pivots[:n] is a permutation of 0..n-1."""
    n = pivots.shape[0] - 1
    return bool(np.array_equal(np.sort(pivots[:n]), np.arange(n)))

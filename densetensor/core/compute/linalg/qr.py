"""
QR decomposition kernel.

Householder reduction of a square matrix: each step reflects the
sub-column below the diagonal onto a multiple of e_1, accumulating the
reflections into Q. Rows of R and columns of Q are then sign-flipped so
that R has a non-negative diagonal, which makes the factorization unique
for non-singular input.
"""

from typing import Any

import numpy as np
from numpy.typing import NDArray


def householder_qr(
    a: NDArray[np.floating[Any]],
    q: NDArray[np.floating[Any]],
    r: NDArray[np.floating[Any]],
) -> None:
    """
    Compute A = Q @ R for a square matrix.

    Args:
        a: Matrix to decompose (n x n), not modified
        q: Output orthogonal factor (n x n)
        r: Output upper-triangular factor (n x n)
    """
    n = a.shape[0]
    r[...] = a
    q[...] = np.eye(n)

    for k in range(n - 1):
        x = r[k:, k]
        alpha = np.linalg.norm(x)
        if alpha == 0.0:
            continue

        v = x.copy()
        v[0] += alpha if v[0] >= 0.0 else -alpha
        v /= np.linalg.norm(v)

        # H = I - 2 v v^T applied from the left to R and from the right to Q
        r[k:, :] -= 2.0 * np.outer(v, v @ r[k:, :])
        q[:, k:] -= 2.0 * np.outer(q[:, k:] @ v, v)

    negative = np.diagonal(r) < 0.0
    r[negative, :] *= -1.0
    q[:, negative] *= -1.0
    r[...] = np.triu(r)

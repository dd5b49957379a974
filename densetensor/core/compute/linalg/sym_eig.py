"""
Symmetric eigendecomposition read off a singular value decomposition.

For symmetric A = U S V^T, each eigenvector equals its right singular
vector up to sign, and the matching left vector carries that sign:
u_i = sign(lambda_i) v_i. Hence U^T V is (numerically) a diagonal sign
matrix D and the eigenvalues are D @ S.

This is an approximation, not a dedicated eigensolver: when two
eigenvalues share a magnitude but differ in sign, the singular subspace
mixes them and U^T V stops being diagonal.
"""

from typing import Any

import numpy as np
from numpy.typing import NDArray


def clean_sign_matrix(m: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
    """Keep sign(m_ii) on the diagonal and zero everything else."""
    cleaned = np.zeros_like(m)
    np.fill_diagonal(cleaned, np.sign(np.diagonal(m)))
    return cleaned


def eigen_from_svd(
    u: NDArray[np.floating[Any]],
    s: NDArray[np.floating[Any]],
    v: NDArray[np.floating[Any]],
) -> NDArray[np.floating[Any]]:
    """
    Eigenvalues of a symmetric matrix from its SVD factors.

    Args:
        u: Left singular vectors (n x n)
        s: Singular values (n,)
        v: Right singular vectors (n x n); these are the eigenvectors

    Returns:
        Eigenvalues (n,), in the same order as the columns of v
    """
    return clean_sign_matrix(u.T @ v) @ s

"""
Linear algebra methods on Tensor.

Thin delegation to densetensor.linalg.solvers, which holds the batched
implementations. The import is deferred because the solvers module
constructs tensors itself.
"""

from __future__ import annotations

from typing import Any

from densetensor.core.compute.tolerances import (
    CHOLESKY_EPSILON,
    GENERAL_EPSILON,
    SVD_EPSILON,
    SVD_MAX_SWEEPS,
    SYM_EIG_EPSILON,
)


def _solvers():
    from densetensor.linalg import solvers
    return solvers


class LinearOps:
    """Mixin providing the linear-ops algebra."""

    def dot(self, other: Any):
        """Matrix product over the trailing two dimensions, batched."""
        return _solvers().dot(self, other)

    def __matmul__(self, other):
        if not isinstance(other, LinearOps):
            return NotImplemented
        return _solvers().dot(self, other)

    def lu_factor(self, epsilon: float = GENERAL_EPSILON):
        """Packed LU factors and pivots; see densetensor.linalg.lu_factor."""
        return _solvers().lu_factor(self, epsilon)

    def lu(self, epsilon: float = GENERAL_EPSILON):
        """Unpacked (P, L, U) with P @ A = L @ U."""
        return _solvers().lu(self, epsilon)

    def det(self, epsilon: float = GENERAL_EPSILON):
        """Determinant of every batch matrix, shape batch + (1,)."""
        return _solvers().det(self, epsilon)

    def det_lu(self, epsilon: float = GENERAL_EPSILON):
        return _solvers().det_lu(self, epsilon)

    def inv(self, epsilon: float = GENERAL_EPSILON):
        """Inverse of every batch matrix."""
        return _solvers().inv(self, epsilon)

    def inv_lu(self, epsilon: float = GENERAL_EPSILON):
        return _solvers().inv_lu(self, epsilon)

    def cholesky(self, epsilon: float = CHOLESKY_EPSILON):
        """Lower-triangular L with A = L @ L.T."""
        return _solvers().cholesky(self, epsilon)

    def qr(self):
        return _solvers().qr(self)

    def svd(self, epsilon: float = SVD_EPSILON, *, max_sweeps: int = SVD_MAX_SWEEPS):
        """Singular value decomposition by one-sided Jacobi rotations."""
        return _solvers().svd(self, epsilon, max_sweeps=max_sweeps, _stacklevel=3)

    def sym_eig(
        self,
        epsilon: float = SYM_EIG_EPSILON,
        *,
        max_sweeps: int = SVD_MAX_SWEEPS,
    ):
        """Eigenvalues and eigenvectors of symmetric matrices."""
        return _solvers().sym_eig(
            self, epsilon, max_sweeps=max_sweeps, _stacklevel=3
        )

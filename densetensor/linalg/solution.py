"""
Factorization results.

Every result holds freshly allocated tensors that never alias the input
tensor. Results unpack like tuples in field order, so both

    decomposition = t.qr()
    q, r = t.qr()

work. SVDDecomposition unpacks to its three factors only; the iteration
diagnostics are read as attributes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from densetensor.tensor.tensor import Tensor


@dataclass(frozen=True)
class LUFactorization:
    """
    Packed LU factors with partial pivoting.

    Attributes:
        lu: L strictly below the diagonal (unit diagonal implied), U on and
            above it; shape batch + (n, n)
        pivots: Integer tensor of shape batch + (n + 1,). Entries 0..n-1
            give the input row placed in each result row; the last entry
            counts row swaps
    """
    lu: Tensor
    pivots: Tensor

    def __iter__(self) -> Iterator[Tensor]:
        return iter((self.lu, self.pivots))


@dataclass(frozen=True)
class PLUDecomposition:
    """
    Unpacked LU factors satisfying P @ A = L @ U.

    Attributes:
        p: Permutation matrices
        l: Unit lower-triangular factors
        u: Upper-triangular factors
    """
    p: Tensor
    l: Tensor
    u: Tensor

    def __iter__(self) -> Iterator[Tensor]:
        return iter((self.p, self.l, self.u))


@dataclass(frozen=True)
class QRDecomposition:
    """
    A = Q @ R with orthogonal Q and upper-triangular R.

    R has a non-negative diagonal.
    """
    q: Tensor
    r: Tensor

    def __iter__(self) -> Iterator[Tensor]:
        return iter((self.q, self.r))


@dataclass(frozen=True)
class SVDDecomposition:
    """
    A = U @ diag(S) @ V.T for every batch matrix.

    For input of shape batch + (n, m) and k = min(n, m):

    Attributes:
        u: Left singular vectors, batch + (n, k)
        s: Singular values, batch + (k,); non-negative, NOT sorted
        v: Right singular vectors, batch + (m, k)
        sweeps: Largest number of Jacobi sweeps used by any batch matrix
        converged: False if any batch matrix hit the sweep limit
    """
    u: Tensor
    s: Tensor
    v: Tensor
    sweeps: int
    converged: bool

    def __iter__(self) -> Iterator[Tensor]:
        return iter((self.u, self.s, self.v))


@dataclass(frozen=True)
class SymEigDecomposition:
    """
    Eigenpairs of symmetric matrices.

    Attributes:
        eigenvalues: batch + (n,), in the order of the eigenvector columns
        eigenvectors: batch + (n, n), one eigenvector per column
    """
    eigenvalues: Tensor
    eigenvectors: Tensor

    def __iter__(self) -> Iterator[Tensor]:
        return iter((self.eigenvalues, self.eigenvectors))

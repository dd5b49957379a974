"""
Batched linear algebra.

Every operation treats the trailing two dimensions of its input as
matrices and the leading dimensions as a batch. The matrix sequencer
hands each batch matrix to a 2-D kernel from
densetensor.core.compute.linalg, which writes into the matching slice of
a freshly allocated output tensor.

Batch index in error messages and exception attributes is the position
of the offending matrix in row-major order over the batch dimensions.

Design principles:
    - Validate everything up front, then compute
    - Failures raise; no partial results are returned
    - Thresholds are keyword arguments with the documented defaults
"""

from __future__ import annotations

import math
import warnings

import numpy as np

from densetensor.core.compute.linalg.batched import broadcast_outer
from densetensor.core.compute.linalg.cholesky import cholesky_decompose, is_symmetric
from densetensor.core.compute.linalg.lu import (
    is_permutation,
    lu_decompose,
    lu_determinant,
    lu_inverse,
    permutation_matrix,
    unpack_lu,
)
from densetensor.core.compute.linalg.qr import householder_qr
from densetensor.core.compute.linalg.svd import jacobi_svd
from densetensor.core.compute.linalg.sym_eig import eigen_from_svd
from densetensor.core.compute.tolerances import (
    CHOLESKY_EPSILON,
    GENERAL_EPSILON,
    SVD_EPSILON,
    SVD_MAX_SWEEPS,
    SYM_EIG_EPSILON,
)
from densetensor.core.exceptions import (
    NotPositiveDefiniteError,
    NotSymmetricError,
    ShapeMismatchError,
    SingularMatrixError,
    ValidationError,
)
from densetensor.core.validation import (
    check_min_rank,
    check_positive_int,
    check_square_matrix,
    normalize_dim,
)
from densetensor.linalg.solution import (
    LUFactorization,
    PLUDecomposition,
    QRDecomposition,
    SVDDecomposition,
    SymEigDecomposition,
)
from densetensor.tensor.factories import zeros
from densetensor.tensor.tensor import Tensor


def _float_copy(tensor: Tensor) -> Tensor:
    return Tensor(tensor.shape, tensor.numpy().astype(np.float64).reshape(-1))


# ═══════════════════════════════════════════════════════════════════════
# Products and embeddings
# ═══════════════════════════════════════════════════════════════════════

def dot(a: Tensor, b: Tensor) -> Tensor:
    """
    Matrix product of a and b, batched over leading dimensions.

    Two 1-D tensors give their inner product with shape (1,). Otherwise
    a 1-D left operand acts as a row (1, n) and a 1-D right operand as a
    column (n, 1); the added axis is removed from the result. Leading
    dimensions broadcast.

    Args:
        a: Left operand, batch_a + (l, m) or (m,)
        b: Right operand, batch_b + (m, n) or (m,)

    Returns:
        Tensor of shape broadcast(batch_a, batch_b) + (l, n), less any
        axis added for a 1-D operand

    Raises:
        ShapeMismatchError: If the inner dimensions differ or the batch
            dimensions do not broadcast
    """
    if not isinstance(b, Tensor):
        raise TypeError(f"dot: expected a Tensor, got {type(b).__name__}")

    if a.dim == 1 and b.dim == 1:
        if a.shape != b.shape:
            raise ShapeMismatchError(
                f"dot: vector lengths differ: {a.shape[0]} and {b.shape[0]}",
                shapes=(a.shape, b.shape),
            )
        return Tensor((1,), np.array([float(a.as_1d() @ b.as_1d())]))

    left = a.view((1,) + a.shape) if a.dim == 1 else a
    right = b.view(b.shape + (1,)) if b.dim == 1 else b
    l, m1 = left.shape[-2:]
    m2, n = right.shape[-2:]
    if m1 != m2:
        raise ShapeMismatchError(
            f"dot: inner dimensions differ: ({l}, {m1}) x ({m2}, {n})",
            shapes=(a.shape, b.shape),
        )

    left, right = broadcast_outer(left, right)
    result = zeros(left.shape[:-1] + (n,))
    for out, x, y in zip(
        result.matrix_sequence(), left.matrix_sequence(), right.matrix_sequence()
    ):
        np.matmul(x.as_2d(), y.as_2d(), out=out.as_2d())

    if a.dim == 1:
        return result.view(result.shape[:-2] + result.shape[-1:])
    if b.dim == 1:
        return result.view(result.shape[:-1])
    return result


def diagonal_embedding(
    diag: Tensor,
    offset: int = 0,
    dim1: int = -2,
    dim2: int = -1,
) -> Tensor:
    """
    Embed the last dimension of diag as a diagonal of 2-D planes.

    The result has one more dimension than diag. Its planes spanned by
    dim1 and dim2 (counted in the result's rank) are zero except for a
    diagonal holding the entries of diag; offset > 0 shifts that diagonal
    towards higher dim2 indices, offset < 0 towards higher dim1 indices.

    Args:
        diag: Tensor whose last dimension holds the diagonal entries
        offset: Diagonal to fill; 0 is the main diagonal
        dim1: First plane dimension of the result
        dim2: Second plane dimension of the result

    Returns:
        Fresh tensor; both plane dimensions have size
        diag.shape[-1] + |offset|

    Raises:
        ValidationError: If dim1 and dim2 name the same dimension
        RangeError: If dim1 or dim2 lies outside [-(rank+1), rank+1)

    Example:
        >>> diagonal_embedding(from_array((2,), [1, 2])).tolist()
        [[1.0, 0.0], [0.0, 2.0]]
    """
    n = diag.dim
    d1 = normalize_dim(dim1, n + 1, name="dim1")
    d2 = normalize_dim(dim2, n + 1, name="dim2")
    if d1 == d2:
        raise ValidationError(
            f"diagonal_embedding: diagonal dimensions cannot be identical, "
            f"got {d1} and {d2}"
        )

    lower, upper, shift = d1, d2, offset
    if lower > upper:
        lower, upper, shift = d2, d1, -offset

    size = diag.shape[-1] + abs(shift)
    shape = (
        diag.shape[:lower] + (size,) + diag.shape[lower:upper - 1]
        + (size,) + diag.shape[upper - 1:n - 1]
    )
    result = zeros(shape)

    row_shift, col_shift = (0, shift) if shift >= 0 else (-shift, 0)
    for index in diag.linear_structure.indices():
        k = index[-1]
        target = (
            index[:lower] + (k + row_shift,) + index[lower:upper - 1]
            + (k + col_shift,) + index[upper - 1:n - 1]
        )
        result[target] = diag[index]
    return result


# ═══════════════════════════════════════════════════════════════════════
# LU
# ═══════════════════════════════════════════════════════════════════════

def _factor_all(t: Tensor, epsilon: float, operation: str) -> tuple[Tensor, Tensor, list[bool]]:
    """Factor every batch matrix; returns lu, pivots and a singular flag per matrix."""
    check_square_matrix(t.shape, operation)
    n = t.shape[-1]
    lu = _float_copy(t)
    pivot_shape = t.shape[:-2] + (n + 1,)
    pivots = Tensor(pivot_shape, np.zeros(math.prod(pivot_shape), dtype=np.int64))
    singular = [
        lu_decompose(matrix.as_2d(), pivot.as_1d(), epsilon)
        for matrix, pivot in zip(lu.matrix_sequence(), pivots.vector_sequence())
    ]
    return lu, pivots, singular


def lu_factor(t: Tensor, epsilon: float = GENERAL_EPSILON) -> LUFactorization:
    """
    LU factorization with partial pivoting, packed.

    Args:
        t: Square matrices, batch + (n, n)
        epsilon: Smallest acceptable pivot magnitude

    Returns:
        LUFactorization(lu, pivots)

    Raises:
        ShapeError: If t is not a batch of square matrices
        SingularMatrixError: If some batch matrix is singular at precision
            epsilon
    """
    lu, pivots, singular = _factor_all(t, epsilon, "lu_factor")
    for index, failed in enumerate(singular):
        if failed:
            raise SingularMatrixError(
                f"lu_factor: matrix {index} is singular at precision {epsilon}",
                epsilon=epsilon,
                batch_index=index,
            )
    return LUFactorization(lu=lu, pivots=pivots)


def lu_pivot(lu: Tensor, pivots: Tensor) -> PLUDecomposition:
    """
    Unpack packed LU factors into P, L and U with P @ A = L @ U.

    Raises:
        ShapeError: If lu is not a batch of square matrices
        ShapeMismatchError: If pivots does not have shape batch + (n + 1,)
        ValidationError: If some pivot vector is not a permutation
    """
    check_square_matrix(lu.shape, "lu_pivot")
    n = lu.shape[-1]
    expected = lu.shape[:-2] + (n + 1,)
    if pivots.shape != expected:
        raise ShapeMismatchError(
            f"lu_pivot: pivots must have shape {expected} for lu of shape "
            f"{lu.shape}, got {pivots.shape}",
            shapes=(lu.shape, pivots.shape),
        )

    p = zeros(lu.shape)
    l = zeros(lu.shape)
    u = zeros(lu.shape)
    slices = zip(
        lu.matrix_sequence(),
        pivots.vector_sequence(),
        p.matrix_sequence(),
        l.matrix_sequence(),
        u.matrix_sequence(),
    )
    for index, (packed, pivot, p_out, l_out, u_out) in enumerate(slices):
        order = pivot.as_1d()
        if not is_permutation(order):
            raise ValidationError(
                f"lu_pivot: pivots of matrix {index} are not a permutation of "
                f"0..{n - 1}: {order[:n].tolist()}"
            )
        permutation_matrix(order.astype(np.int64), p_out.as_2d())
        unpack_lu(packed.as_2d(), l_out.as_2d(), u_out.as_2d())
    return PLUDecomposition(p=p, l=l, u=u)


def lu(t: Tensor, epsilon: float = GENERAL_EPSILON) -> PLUDecomposition:
    """lu_pivot(lu_factor(t, epsilon))."""
    factorization = lu_factor(t, epsilon)
    return lu_pivot(factorization.lu, factorization.pivots)


def det_lu(t: Tensor, epsilon: float = GENERAL_EPSILON) -> Tensor:
    """
    Determinants via LU factorization.

    A matrix found singular at precision epsilon has determinant 0.0;
    this is not an error.

    Returns:
        Tensor of shape batch + (1,)
    """
    lu, pivots, singular = _factor_all(t, epsilon, "det")
    result = zeros(t.shape[:-2] + (1,))
    slices = zip(lu.matrix_sequence(), pivots.vector_sequence(), result.vector_sequence())
    for failed, (matrix, pivot, out) in zip(singular, slices):
        out.as_1d()[0] = 0.0 if failed else lu_determinant(matrix.as_2d(), pivot.as_1d())
    return result


def det(t: Tensor, epsilon: float = GENERAL_EPSILON) -> Tensor:
    """Determinant of every batch matrix; see det_lu."""
    return det_lu(t, epsilon)


def inv_lu(t: Tensor, epsilon: float = GENERAL_EPSILON) -> Tensor:
    """
    Inverses via LU factorization, solving A @ X = I column by column.

    Raises:
        SingularMatrixError: As lu_factor
    """
    factorization = lu_factor(t, epsilon)
    result = zeros(t.shape)
    slices = zip(
        factorization.lu.matrix_sequence(),
        factorization.pivots.vector_sequence(),
        result.matrix_sequence(),
    )
    for matrix, pivot, out in slices:
        lu_inverse(matrix.as_2d(), pivot.as_1d(), out.as_2d())
    return result


def inv(t: Tensor, epsilon: float = GENERAL_EPSILON) -> Tensor:
    """Inverse of every batch matrix; see inv_lu."""
    return inv_lu(t, epsilon)


# ═══════════════════════════════════════════════════════════════════════
# Orthogonal and spectral factorizations
# ═══════════════════════════════════════════════════════════════════════

def cholesky(t: Tensor, epsilon: float = CHOLESKY_EPSILON) -> Tensor:
    """
    Cholesky factor L with A = L @ L.T for every batch matrix.

    Args:
        t: Symmetric positive definite matrices, batch + (n, n)
        epsilon: Symmetry tolerance and relative pivot threshold

    Returns:
        Lower-triangular tensor of the same shape

    Raises:
        ShapeError: If t is not a batch of square matrices
        NotPositiveDefiniteError: If some batch matrix is not symmetric
            within epsilon or not positive definite
    """
    check_square_matrix(t.shape, "cholesky")
    result = zeros(t.shape)
    slices = zip(t.matrix_sequence(), result.matrix_sequence())
    for index, (matrix, out) in enumerate(slices):
        a = matrix.as_2d()
        if not is_symmetric(a, epsilon):
            raise NotPositiveDefiniteError(
                f"cholesky: matrix {index} is not symmetric within {epsilon}",
                epsilon=epsilon,
                batch_index=index,
            )
        if not cholesky_decompose(a, out.as_2d(), epsilon):
            raise NotPositiveDefiniteError(
                f"cholesky: matrix {index} is not positive definite "
                f"at precision {epsilon}",
                epsilon=epsilon,
                batch_index=index,
            )
    return result


def qr(t: Tensor) -> QRDecomposition:
    """
    Householder QR of every batch matrix.

    Raises:
        ShapeError: If t is not a batch of square matrices
    """
    check_square_matrix(t.shape, "qr")
    q = zeros(t.shape)
    r = zeros(t.shape)
    slices = zip(t.matrix_sequence(), q.matrix_sequence(), r.matrix_sequence())
    for matrix, q_out, r_out in slices:
        householder_qr(matrix.as_2d(), q_out.as_2d(), r_out.as_2d())
    return QRDecomposition(q=q, r=r)


def svd(
    t: Tensor,
    epsilon: float = SVD_EPSILON,
    *,
    max_sweeps: int = SVD_MAX_SWEEPS,
    _stacklevel: int = 2,
) -> SVDDecomposition:
    """
    Singular value decomposition by one-sided Jacobi rotations.

    Args:
        t: Matrices, batch + (n, m)
        epsilon: Column pairs count as orthogonal once the cosine of their
            angle is at most epsilon
        max_sweeps: Limit on Jacobi sweeps per matrix
        _stacklevel: Frame the convergence warning is attributed to, for
            wrappers that forward here

    Returns:
        SVDDecomposition; singular values are NOT sorted

    Raises:
        ShapeError: If t has rank < 2
        ValidationError: If max_sweeps is not a positive int

    Warns:
        RuntimeWarning: If some matrix reaches max_sweeps before
            converging; the current iterate is returned
    """
    check_min_rank(t.shape, 2, "svd")
    check_positive_int(max_sweeps, "max_sweeps")
    n, m = t.shape[-2:]
    k = min(n, m)
    batch = t.shape[:-2]
    u = zeros(batch + (n, k))
    s = zeros(batch + (k,))
    v = zeros(batch + (m, k))

    sweeps = 0
    unconverged = []
    slices = zip(
        t.matrix_sequence(),
        u.matrix_sequence(),
        s.vector_sequence(),
        v.matrix_sequence(),
    )
    for index, (matrix, u_out, s_out, v_out) in enumerate(slices):
        result = jacobi_svd(matrix.as_2d(), epsilon, max_sweeps)
        u_out.as_2d()[...] = result.U
        s_out.as_1d()[...] = result.S
        v_out.as_2d()[...] = result.V
        sweeps = max(sweeps, result.sweeps)
        if not result.converged:
            unconverged.append(index)

    if unconverged:
        warnings.warn(
            f"SVD did not converge within {max_sweeps} sweeps for "
            f"{len(unconverged)} matrices (batch indices {unconverged}). "
            f"Returning the current iterate.",
            RuntimeWarning,
            stacklevel=_stacklevel,
        )
    return SVDDecomposition(u=u, s=s, v=v, sweeps=sweeps, converged=not unconverged)


def sym_eig(
    t: Tensor,
    epsilon: float = SYM_EIG_EPSILON,
    *,
    max_sweeps: int = SVD_MAX_SWEEPS,
    _stacklevel: int = 2,
) -> SymEigDecomposition:
    """
    Eigendecomposition of symmetric matrices, derived from their SVD.

    Eigenvalues of equal magnitude and opposite sign cannot be separated
    by this method and come out mixed.

    Args:
        t: Symmetric matrices, batch + (n, n)
        epsilon: Symmetry tolerance, also passed to svd
        max_sweeps: Passed to svd

    Returns:
        SymEigDecomposition(eigenvalues, eigenvectors); eigenvectors are
        the right singular vectors

    Raises:
        ShapeError: If t is not a batch of square matrices
        NotSymmetricError: If some batch matrix is not symmetric within
            epsilon
    """
    check_square_matrix(t.shape, "sym_eig")
    for index, matrix in enumerate(t.matrix_sequence()):
        if not is_symmetric(matrix.as_2d(), epsilon):
            raise NotSymmetricError(
                f"sym_eig: matrix {index} is not symmetric within {epsilon}",
                epsilon=epsilon,
                batch_index=index,
            )

    decomposition = svd(
        t, epsilon, max_sweeps=max_sweeps, _stacklevel=_stacklevel + 1
    )
    eigenvalues = zeros(t.shape[:-1])
    slices = zip(
        decomposition.u.matrix_sequence(),
        decomposition.s.vector_sequence(),
        decomposition.v.matrix_sequence(),
        eigenvalues.vector_sequence(),
    )
    for u, s, v, out in slices:
        out.as_1d()[...] = eigen_from_svd(u.as_2d(), s.as_1d(), v.as_2d())
    return SymEigDecomposition(eigenvalues=eigenvalues, eigenvectors=decomposition.v)

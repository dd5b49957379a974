"""
Linear algebra kernels.

Each kernel works on one 2-D (or 1-D) numpy view; the batched sequencer
walks the leading dimensions of a tensor and hands one slice at a time
to a kernel.
"""

from densetensor.core.compute.linalg.batched import (
    MatrixSequence,
    VectorSequence,
    broadcast_outer,
)
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
from densetensor.core.compute.linalg.svd import JacobiSVDResult, jacobi_svd
from densetensor.core.compute.linalg.sym_eig import clean_sign_matrix, eigen_from_svd

__all__ = [
    'MatrixSequence',
    'VectorSequence',
    'broadcast_outer',
    'cholesky_decompose',
    'is_symmetric',
    'lu_decompose',
    'lu_determinant',
    'lu_inverse',
    'permutation_matrix',
    'unpack_lu',
    'is_permutation',
    'householder_qr',
    'JacobiSVDResult',
    'jacobi_svd',
    'clean_sign_matrix',
    'eigen_from_svd',
]

"""
Batched dense linear algebra.

Every function here is also available as a Tensor method, e.g.
densetensor.linalg.qr(t) is t.qr().
"""

from densetensor.linalg.solution import (
    LUFactorization,
    PLUDecomposition,
    QRDecomposition,
    SVDDecomposition,
    SymEigDecomposition,
)
from densetensor.linalg.solvers import (
    dot,
    diagonal_embedding,
    lu_factor,
    lu_pivot,
    lu,
    det,
    det_lu,
    inv,
    inv_lu,
    cholesky,
    qr,
    svd,
    sym_eig,
)

__all__ = [
    # Results
    "LUFactorization",
    "PLUDecomposition",
    "QRDecomposition",
    "SVDDecomposition",
    "SymEigDecomposition",
    # Operations
    "dot",
    "diagonal_embedding",
    "lu_factor",
    "lu_pivot",
    "lu",
    "det",
    "det_lu",
    "inv",
    "inv_lu",
    "cholesky",
    "qr",
    "svd",
    "sym_eig",
]

"""
densetensor: dense N-dimensional float64 tensors with batched linear algebra.

Tensors are shaped windows onto shared flat numpy buffers. The library
provides broadcasting element-wise arithmetic, reductions, views and
transposes, and LU, Cholesky, QR, SVD and symmetric eigendecompositions
applied independently to every matrix in the trailing two dimensions.

Submodules:
    tensor: The Tensor type, factories and aggregation helpers
    linalg: Batched factorizations and their result types
    core: Exceptions, validation, tolerances and numerical kernels
"""

__version__ = "0.1.0"

from densetensor.core.exceptions import (
    DenseTensorError,
    ValidationError,
    ShapeError,
    ShapeMismatchError,
    RangeError,
    ScalarAccessError,
    NumericalError,
    SingularMatrixError,
    NotPositiveDefiniteError,
    NotSymmetricError,
)
from densetensor.core.compute.tolerances import DEFAULT_TOLERANCES, Tolerances
from densetensor.tensor import (
    LinearStructure,
    Tensor,
    from_array,
    from_numpy,
    produce,
    full,
    zeros,
    ones,
    eye,
    random_normal,
    full_like,
    zeros_like,
    ones_like,
    random_normal_like,
    stack,
    rows_by_indices,
    cov,
)
from densetensor.linalg import (
    LUFactorization,
    PLUDecomposition,
    QRDecomposition,
    SVDDecomposition,
    SymEigDecomposition,
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
    "__version__",
    # Tensor
    "LinearStructure",
    "Tensor",
    "from_array",
    "from_numpy",
    "produce",
    "full",
    "zeros",
    "ones",
    "eye",
    "random_normal",
    "full_like",
    "zeros_like",
    "ones_like",
    "random_normal_like",
    "stack",
    "rows_by_indices",
    "cov",
    # Linear algebra
    "LUFactorization",
    "PLUDecomposition",
    "QRDecomposition",
    "SVDDecomposition",
    "SymEigDecomposition",
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
    # Configuration
    "DEFAULT_TOLERANCES",
    "Tolerances",
    # Exceptions
    "DenseTensorError",
    "ValidationError",
    "ShapeError",
    "ShapeMismatchError",
    "RangeError",
    "ScalarAccessError",
    "NumericalError",
    "SingularMatrixError",
    "NotPositiveDefiniteError",
    "NotSymmetricError",
]

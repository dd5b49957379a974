"""
Default tolerances and iteration bounds.

Every operation that compares against a threshold takes it as a keyword
argument; the defaults below are the values those arguments fall back to.
They are part of the public contract and must not drift:

- General / LU (det, inv, lu_factor): 1e-9
- Cholesky symmetry and positive-definiteness checks: 1e-6
- SVD column-orthogonality criterion: 1e-10
- Symmetric eigendecomposition: 1e-15
- Tensor equality: 1e-5
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Tolerances:
    """Threshold configuration for the tensor algebra."""
    general: float
    cholesky: float
    svd: float
    sym_eig: float
    equality: float
    svd_max_sweeps: int


DEFAULT_TOLERANCES = Tolerances(
    general=1e-9,
    cholesky=1e-6,
    svd=1e-10,
    sym_eig=1e-15,
    equality=1e-5,
    svd_max_sweeps=100,
)

# Flat aliases, used as keyword defaults in signatures
GENERAL_EPSILON: float = DEFAULT_TOLERANCES.general
CHOLESKY_EPSILON: float = DEFAULT_TOLERANCES.cholesky
SVD_EPSILON: float = DEFAULT_TOLERANCES.svd
SYM_EIG_EPSILON: float = DEFAULT_TOLERANCES.sym_eig
EQUALITY_EPSILON: float = DEFAULT_TOLERANCES.equality
SVD_MAX_SWEEPS: int = DEFAULT_TOLERANCES.svd_max_sweeps

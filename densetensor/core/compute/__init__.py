"""
Shared compute infrastructure for densetensor.

Submodules:
    tolerances: Default epsilons and iteration bounds
    precision: Numerical precision constants and IEEE-754 helpers
    linalg: Linear algebra kernels (LU, Cholesky, QR, SVD, symmetric eigen)
"""

from densetensor.core.compute.precision import EPSILON_64, ieee_apply, ieee_semantics
from densetensor.core.compute.tolerances import DEFAULT_TOLERANCES, Tolerances

__all__ = [
    # Precision
    "EPSILON_64",
    "ieee_apply",
    "ieee_semantics",
    # Tolerances
    "DEFAULT_TOLERANCES",
    "Tolerances",
]

"""
Core infrastructure for densetensor.

This module provides the shared abstractions and utilities used by the
tensor type and the linear algebra layer.

Key components:
    protocols: ElementwiseAlgebra, AnalyticAlgebra, LinearOpsAlgebra
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Tolerances, IEEE-754 helpers, linear algebra kernels
"""

from densetensor.core.protocols import (
    ElementwiseAlgebra,
    AnalyticAlgebra,
    LinearOpsAlgebra,
)
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

__all__ = [
    # Protocols
    "ElementwiseAlgebra",
    "AnalyticAlgebra",
    "LinearOpsAlgebra",
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

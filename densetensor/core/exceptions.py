"""
Exception hierarchy for densetensor.

All exceptions inherit from DenseTensorError to allow catching any
library-specific error. Precondition violations (shapes, indices) derive
from ValidationError; failures detected while running a numerical kernel
derive from NumericalError.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
    - IEEE-754 exceptional values (NaN, inf) are results, not errors
"""


class DenseTensorError(Exception):
    """Base exception for all densetensor errors."""
    pass


class ValidationError(DenseTensorError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class ShapeError(ValidationError):
    """
    A shape or buffer is invalid for construction or for the operation.

    Raised for empty shapes, non-positive dimensions, empty buffers, and
    shape/buffer size mismatches, and when an operation needs a particular
    rank or square trailing dimensions.
    """
    pass


class ShapeMismatchError(ValidationError):
    """
    Two or more shapes are incompatible with each other.

    Raised by broadcasting element-wise ops, dot products, equality
    checks, and batched operations whose batch dimensions disagree.

    Attributes:
        shapes: The offending shapes, in operand order
    """

    def __init__(self, message: str, shapes: tuple[tuple[int, ...], ...] = ()):
        super().__init__(message)
        self.shapes = shapes


class RangeError(ValidationError, IndexError):
    """
    An axis or element index lies outside its valid range.

    Also an IndexError, so ordinary Python indexing code can catch it.

    Attributes:
        index: The offending index (int or multi-index tuple)
        bound: The exclusive upper bound that was violated, if scalar
    """

    def __init__(
        self,
        message: str,
        index: int | tuple[int, ...] | None = None,
        bound: int | None = None,
    ):
        super().__init__(message)
        self.index = index
        self.bound = bound


class ScalarAccessError(ValidationError):
    """
    Scalar extraction was requested from a non-scalar tensor.

    Attributes:
        shape: Shape of the tensor; only (1,) is scalar
    """

    def __init__(self, message: str, shape: tuple[int, ...] | None = None):
        super().__init__(message)
        self.shape = shape


class NumericalError(DenseTensorError):
    """
    Numerical computation failed.

    Base class for structural matrix conditions detected by a kernel.

    Attributes:
        epsilon: Threshold in effect when the condition was detected
        batch_index: Position of the offending matrix in the batch
            sequence (row-major over the leading dimensions), if known
    """

    def __init__(
        self,
        message: str,
        epsilon: float | None = None,
        batch_index: int | None = None,
    ):
        super().__init__(message)
        self.epsilon = epsilon
        self.batch_index = batch_index


class SingularMatrixError(NumericalError):
    """
    Matrix is singular at the requested precision.

    Raised when partial-pivot elimination finds no pivot whose magnitude
    reaches epsilon.
    """
    pass


class NotPositiveDefiniteError(NumericalError):
    """
    Matrix is not symmetric positive definite.

    Raised by Cholesky factorization when the matrix is not symmetric
    within epsilon or a pivot is not sufficiently positive.
    """
    pass


class NotSymmetricError(NumericalError):
    """
    Matrix is not symmetric within epsilon.

    Raised by operations that are only defined for symmetric input,
    such as the symmetric eigendecomposition.
    """
    pass

"""
Capability protocols for densetensor.

The tensor type implements three independent algebras. Each is described
by its own structural interface so that callers (and alternative tensor
implementations) can depend on exactly the capability they use.

We use Protocol (structural typing) rather than ABC (nominal typing) to allow
flexibility while maintaining type safety.

Design Principles:
    - Interface segregation: one protocol per algebra
    - Minimal contracts: only operations every implementation must provide
    - Runtime checkable: isinstance() works for capability dispatch
"""

from typing import Protocol, TypeVar, Any, runtime_checkable

T = TypeVar('T')  # Tensor type


@runtime_checkable
class ElementwiseAlgebra(Protocol[T]):
    """
    Element-wise field operations with broadcasting.

    Binary operations accept a tensor or a real scalar on either side and
    return a fresh tensor of the broadcast shape. The *_assign variants
    write into the receiver's buffer.
    """

    def plus(self, other: Any) -> T:
        ...

    def minus(self, other: Any) -> T:
        ...

    def times(self, other: Any) -> T:
        ...

    def div(self, other: Any) -> T:
        ...

    def plus_assign(self, other: Any) -> None:
        ...

    def minus_assign(self, other: Any) -> None:
        ...

    def times_assign(self, other: Any) -> None:
        ...

    def div_assign(self, other: Any) -> None:
        ...

    def unary_minus(self) -> T:
        ...


@runtime_checkable
class AnalyticAlgebra(Protocol[T]):
    """
    Transcendental functions applied element by element.

    Out-of-domain input yields NaN per IEEE-754; nothing is raised.
    """

    def exp(self) -> T:
        ...

    def ln(self) -> T:
        ...

    def sqrt(self) -> T:
        ...

    def sin(self) -> T:
        ...

    def cos(self) -> T:
        ...

    def tan(self) -> T:
        ...

    def tanh(self) -> T:
        ...


@runtime_checkable
class LinearOpsAlgebra(Protocol[T]):
    """
    Batched dense linear algebra over the trailing two dimensions.

    Every factorization returns freshly allocated tensors that never
    alias the receiver.
    """

    def dot(self, other: T) -> T:
        ...

    def det(self, epsilon: float = ...) -> T:
        ...

    def inv(self, epsilon: float = ...) -> T:
        ...

    def lu(self, epsilon: float = ...) -> Any:
        ...

    def cholesky(self, epsilon: float = ...) -> T:
        ...

    def qr(self) -> Any:
        ...

    def svd(self, epsilon: float = ...) -> Any:
        ...

    def sym_eig(self, epsilon: float = ...) -> Any:
        ...

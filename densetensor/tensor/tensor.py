"""
The Tensor value type.

A Tensor is a shape plus a window onto a flat numpy buffer:

    buffer        1-D numpy array, possibly shared with other tensors
    buffer_start  offset of element (0, ..., 0) in buffer
    shape         positive dimension sizes; elements are laid out row-major

Views (view, view_as, tensor[i], matrix_sequence) share the buffer, so
writing through one alias is visible through all of them. Everything else
allocates a fresh buffer. No locking is done: a caller mutating a shared
buffer must ensure nobody else uses it at the same time.

Design principles:
    - Shape is fixed at construction; only element values can change
    - Structural checks raise densetensor exceptions, never numpy errors
    - Float semantics throughout; inf/NaN are values, not failures
"""

from __future__ import annotations

import operator
from typing import Any, Callable, Iterator, Sequence

import numpy as np
from numpy.typing import NDArray

from densetensor.core.compute.linalg.batched import MatrixSequence, VectorSequence
from densetensor.core.compute.precision import ieee_semantics
from densetensor.core.compute.tolerances import EQUALITY_EPSILON
from densetensor.core.exceptions import RangeError, ScalarAccessError, ShapeError
from densetensor.core.validation import check_same_shape, check_shape, normalize_dim
from densetensor.tensor._analytic import AnalyticFunctions
from densetensor.tensor._elementwise import ElementwiseOps
from densetensor.tensor._linear_ops import LinearOps
from densetensor.tensor._reductions import Reductions
from densetensor.tensor.structure import LinearStructure


class Tensor(ElementwiseOps, AnalyticFunctions, Reductions, LinearOps):
    """
    Dense N-dimensional array over a shared flat buffer.

    Args:
        shape: Dimension sizes, all positive
        buffer: 1-D numpy array holding the elements; not copied
        buffer_start: Offset of the first element in buffer

    Raises:
        ShapeError: If shape is invalid, buffer is not a 1-D array, or the
            window [buffer_start, buffer_start + prod(shape)) does not fit

    Example:
        >>> t = Tensor((2, 2), np.array([1.0, 2.0, 3.0, 4.0]))
        >>> t[1, 0]
        3.0
    """

    # keep numpy from treating tensors as array-likes in mixed expressions
    __array_ufunc__ = None

    def __init__(
        self,
        shape: Sequence[int],
        buffer: NDArray[Any],
        buffer_start: int = 0,
    ):
        structure = LinearStructure(shape)
        if not isinstance(buffer, np.ndarray) or buffer.ndim != 1:
            raise ShapeError(
                f"buffer: expected a 1-D numpy array, got {type(buffer).__name__} "
                f"of shape {np.shape(buffer)}"
            )
        buffer_start = operator.index(buffer_start)
        if buffer_start < 0 or buffer_start + structure.size > buffer.shape[0]:
            raise ShapeError(
                f"buffer: window [{buffer_start}, {buffer_start + structure.size}) "
                f"does not fit a buffer of {buffer.shape[0]} elements"
            )
        self._structure = structure
        self._buffer = buffer
        self._start = buffer_start

    # ═══════════════════════════════════════════════════════════════════
    # Properties
    # ═══════════════════════════════════════════════════════════════════

    @property
    def shape(self) -> tuple[int, ...]:
        return self._structure.shape

    @property
    def buffer(self) -> NDArray[Any]:
        """The underlying (possibly shared) flat buffer."""
        return self._buffer

    @property
    def buffer_start(self) -> int:
        return self._start

    @property
    def linear_structure(self) -> LinearStructure:
        return self._structure

    @property
    def dim(self) -> int:
        """Number of dimensions."""
        return self._structure.dim

    @property
    def num_elements(self) -> int:
        return self._structure.size

    @property
    def dtype(self) -> np.dtype:
        return self._buffer.dtype

    @property
    def _flat(self) -> NDArray[Any]:
        # writable view of this tensor's elements
        return self._buffer[self._start:self._start + self._structure.size]

    @property
    def _array(self) -> NDArray[Any]:
        return self._flat.reshape(self.shape)

    # ═══════════════════════════════════════════════════════════════════
    # Element access
    # ═══════════════════════════════════════════════════════════════════

    def __getitem__(self, key: int | tuple[int, ...]) -> Any:
        """
        tensor[i] is the i-th sub-tensor (a view); tensor[i, j, ...] with a
        full multi-index is a single element.
        """
        if isinstance(key, tuple):
            return self._buffer[self._start + self._structure.offset(key)].item()
        try:
            i = operator.index(key)
        except TypeError:
            raise TypeError(
                f"Tensor indices must be an int or a tuple of ints, "
                f"got {type(key).__name__}"
            ) from None
        if not 0 <= i < self.shape[0]:
            raise RangeError(
                f"Index {i} out of bounds for dimension 0 with size {self.shape[0]}",
                index=i,
                bound=self.shape[0],
            )
        sub_shape = self.shape[1:] or (1,)
        step = self._structure.strides[0]
        return type(self)(sub_shape, self._buffer, self._start + i * step)

    def __setitem__(self, key: tuple[int, ...], value: float) -> None:
        if not isinstance(key, tuple):
            raise TypeError("Element assignment requires a full multi-index tuple")
        self._buffer[self._start + self._structure.offset(key)] = value

    def __len__(self) -> int:
        return self.shape[0]

    def __iter__(self) -> Iterator['Tensor']:
        for i in range(self.shape[0]):
            yield self[i]

    def value(self) -> float:
        """
        The single element of a shape (1,) tensor.

        Raises:
            ScalarAccessError: If the shape is not exactly (1,)
        """
        if self.shape != (1,):
            raise ScalarAccessError(
                f"value() requires shape (1,), got {self.shape}", shape=self.shape
            )
        return self._buffer[self._start].item()

    def value_or_none(self) -> float | None:
        """Like value(), but None instead of an error for non-scalars."""
        if self.shape != (1,):
            return None
        return self._buffer[self._start].item()

    # ═══════════════════════════════════════════════════════════════════
    # Structural operations
    # ═══════════════════════════════════════════════════════════════════

    def copy(self) -> 'Tensor':
        """Fresh tensor with its own buffer, starting at offset 0."""
        return type(self)(self.shape, self._flat.copy())

    def view(self, shape: Sequence[int]) -> 'Tensor':
        """
        Same buffer and offset under a new shape.

        Raises:
            ShapeError: If the shape is invalid or holds a different number
                of elements
        """
        new_shape = check_shape(shape)
        new_size = LinearStructure(new_shape).size
        if new_size != self.num_elements:
            raise ShapeError(
                f"view: cannot view {self.num_elements} elements of shape "
                f"{self.shape} as shape {new_shape} ({new_size} elements)"
            )
        return type(self)(new_shape, self._buffer, self._start)

    def view_as(self, other: 'Tensor') -> 'Tensor':
        return self.view(other.shape)

    def transpose(self, i: int = -2, j: int = -1) -> 'Tensor':
        """
        Swap two axes, physically reordering elements into a fresh buffer.

        Raises:
            RangeError: If either axis lies outside [-rank, rank)
        """
        a = normalize_dim(i, self.dim, name="i")
        b = normalize_dim(j, self.dim, name="j")
        shape = list(self.shape)
        shape[a], shape[b] = shape[b], shape[a]
        # flatten() always copies, in row-major order of the swapped axes
        return type(self)(tuple(shape), np.swapaxes(self._array, a, b).flatten())

    def map(self, func: Callable[[float], float]) -> 'Tensor':
        """Fresh tensor with func applied to every element."""
        values = np.fromiter(
            (func(x) for x in self._flat.tolist()),
            dtype=np.float64,
            count=self.num_elements,
        )
        return type(self)(self.shape, values)

    def eq(self, other: 'Tensor', epsilon: float = EQUALITY_EPSILON) -> bool:
        """
        True if every element pair satisfies |a - b| < epsilon or a == b.

        Raises:
            ShapeMismatchError: If the shapes differ
        """
        check_same_shape(self.shape, other.shape, 'eq')
        a = self._flat
        b = other._flat
        with ieee_semantics():
            return bool(np.all((np.abs(a - b) < epsilon) | (a == b)))

    def rows_by_indices(self, indices: Sequence[int]) -> 'Tensor':
        """Stack of self[i] for each i in indices."""
        from densetensor.tensor.aggregation import rows_by_indices
        return rows_by_indices(self, indices)

    # ═══════════════════════════════════════════════════════════════════
    # Batched access
    # ═══════════════════════════════════════════════════════════════════

    def matrix_sequence(self) -> MatrixSequence:
        """Views over the trailing two dimensions, batch dims row-major."""
        return MatrixSequence(self)

    def vector_sequence(self) -> VectorSequence:
        """Views over the last dimension, leading dims row-major."""
        return VectorSequence(self)

    def as_2d(self) -> NDArray[Any]:
        """Writable numpy view of a rank-2 tensor."""
        if self.dim != 2:
            raise ShapeError(f"as_2d: requires a tensor of rank 2, got shape {self.shape}")
        return self._array

    def as_1d(self) -> NDArray[Any]:
        """Writable numpy view of a rank-1 tensor."""
        if self.dim != 1:
            raise ShapeError(f"as_1d: requires a tensor of rank 1, got shape {self.shape}")
        return self._flat

    # ═══════════════════════════════════════════════════════════════════
    # Conversion
    # ═══════════════════════════════════════════════════════════════════

    def numpy(self) -> NDArray[Any]:
        """Copy of the elements as an array of this tensor's shape."""
        return self._array.copy()

    def __array__(self, dtype: Any = None, copy: Any = None) -> NDArray[Any]:
        result = self.numpy()
        return result if dtype is None else result.astype(dtype)

    def tolist(self) -> list:
        return self._array.tolist()

    def __repr__(self) -> str:
        data_str = np.array2string(self._array, separator=', ', precision=4, suppress_small=True)
        return f"Tensor({data_str}, shape={self.shape})"

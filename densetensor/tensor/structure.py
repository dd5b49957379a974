"""
Row-major linear structure: multi-index <-> buffer offset.

A LinearStructure is derived purely from a shape. It holds no data and
no mutable state, so tensors sharing a shape can share their structure.
The row-major ordering produced by indices() (last dimension fastest) is
the iteration order every reduction and batched kernel relies on.
"""

from __future__ import annotations

import math
from typing import Iterator, Sequence

from densetensor.core.exceptions import RangeError
from densetensor.core.validation import check_shape


class LinearStructure:
    """
    Maps multi-indices to linear offsets and back for one shape.

    Attributes:
        shape: Dimension sizes
        strides: Row-major strides, in elements
        size: Total number of elements
    """

    __slots__ = ('shape', 'strides', 'size')

    def __init__(self, shape: Sequence[int]):
        self.shape = check_shape(shape)
        self.strides = self._compute_strides(self.shape)
        self.size = math.prod(self.shape)

    @staticmethod
    def _compute_strides(shape: tuple[int, ...]) -> tuple[int, ...]:
        strides = [1]
        for dim in reversed(shape[1:]):
            strides.append(strides[-1] * dim)
        return tuple(reversed(strides))

    @property
    def dim(self) -> int:
        """Number of dimensions."""
        return len(self.shape)

    def offset(self, index: Sequence[int]) -> int:
        """
        Linear offset of a multi-index.

        Args:
            index: One non-negative int per dimension

        Returns:
            Offset in [0, size)

        Raises:
            RangeError: If the rank differs or any component is out of bounds
        """
        index = tuple(index)
        if len(index) != len(self.shape):
            raise RangeError(
                f"Index {index} has {len(index)} components, "
                f"tensor has {len(self.shape)} dimensions",
                index=index,
            )
        result = 0
        for d, (i, size, stride) in enumerate(zip(index, self.shape, self.strides)):
            if not 0 <= i < size:
                raise RangeError(
                    f"Index {i} out of bounds for dimension {d} with size {size}",
                    index=index,
                    bound=size,
                )
            result += i * stride
        return result

    def index(self, offset: int) -> tuple[int, ...]:
        """
        Multi-index at a linear offset.

        Raises:
            RangeError: If offset lies outside [0, size)
        """
        if not 0 <= offset < self.size:
            raise RangeError(
                f"Offset {offset} out of bounds for {self.size} elements",
                index=offset,
                bound=self.size,
            )
        result = []
        current = offset
        for stride in self.strides:
            result.append(current // stride)
            current %= stride
        return tuple(result)

    def indices(self) -> Iterator[tuple[int, ...]]:
        """All multi-indices in row-major order (last dimension fastest)."""
        index = [0] * len(self.shape)
        for _ in range(self.size):
            yield tuple(index)
            for d in range(len(self.shape) - 1, -1, -1):
                index[d] += 1
                if index[d] < self.shape[d]:
                    break
                index[d] = 0

    def __iter__(self) -> Iterator[tuple[int, ...]]:
        return self.indices()

    def __len__(self) -> int:
        return self.size

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LinearStructure):
            return NotImplemented
        return self.shape == other.shape

    def __hash__(self) -> int:
        return hash(self.shape)

    def __repr__(self) -> str:
        return f"LinearStructure(shape={self.shape}, strides={self.strides})"

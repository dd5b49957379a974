"""
The tensor type and its constructors.

Submodules:
    structure: Row-major index <-> offset mapping
    tensor: Tensor value type
    factories: from_array, produce, full, zeros, ones, eye, random_normal
    aggregation: stack, rows_by_indices, cov
"""

from densetensor.tensor.structure import LinearStructure
from densetensor.tensor.tensor import Tensor
from densetensor.tensor.factories import (
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
)
from densetensor.tensor.aggregation import stack, rows_by_indices, cov

__all__ = [
    "LinearStructure",
    "Tensor",
    # Factories
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
    # Aggregation
    "stack",
    "rows_by_indices",
    "cov",
]

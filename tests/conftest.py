"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from densetensor import Tensor, from_numpy


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def matrix_2x2():
    """The 2x2 matrix [[1, 2], [3, 4]]."""
    return Tensor((2, 2), np.array([1.0, 2.0, 3.0, 4.0]))


@pytest.fixture
def batch_3x2x4(rng):
    """Random tensor of shape (3, 2, 4)."""
    return from_numpy(rng.standard_normal((3, 2, 4)))

"""
Shared matrices for the linear algebra tests.
"""

import numpy as np
import pytest

from densetensor import from_numpy


@pytest.fixture
def square_batch(rng):
    """Well-conditioned random matrices, shape (2, 3, 4, 4)."""
    a = rng.standard_normal((2, 3, 4, 4)) + 4.0 * np.eye(4)
    return from_numpy(a)


@pytest.fixture
def spd_matrix(rng):
    """Symmetric positive definite 5x5 matrix."""
    a = rng.standard_normal((5, 5))
    return from_numpy(a @ a.T + 5.0 * np.eye(5))


@pytest.fixture
def spd_batch(rng):
    """Batch of symmetric positive definite 3x3 matrices, shape (4, 3, 3)."""
    a = rng.standard_normal((4, 3, 3))
    return from_numpy(a @ np.swapaxes(a, -1, -2) + 3.0 * np.eye(3))


@pytest.fixture
def symmetric_matrix(rng):
    """Symmetric indefinite 4x4 matrix with well-separated eigenvalues."""
    q, _ = np.linalg.qr(rng.standard_normal((4, 4)))
    eigenvalues = np.array([5.0, -2.0, 0.5, 3.0])
    a = q @ np.diag(eigenvalues) @ q.T
    return from_numpy((a + a.T) / 2.0)

"""
Tests for the SVD-based symmetric eigendecomposition.
"""

import numpy as np
import pytest

from densetensor import SymEigDecomposition, eye, from_array, from_numpy, sym_eig, zeros
from densetensor.core.compute.linalg.sym_eig import clean_sign_matrix, eigen_from_svd
from densetensor.core.exceptions import NotSymmetricError, ShapeError


class TestSymEig:

    def test_eigenvalues(self, symmetric_matrix):
        eigenvalues, _ = symmetric_matrix.sym_eig()
        np.testing.assert_allclose(
            np.sort(eigenvalues.numpy()), [-2.0, 0.5, 3.0, 5.0], atol=1e-10
        )

    def test_eigenpairs(self, symmetric_matrix):
        result = sym_eig(symmetric_matrix)
        assert isinstance(result, SymEigDecomposition)
        a = symmetric_matrix.numpy()
        values = result.eigenvalues.numpy()
        vectors = result.eigenvectors.numpy()
        np.testing.assert_allclose(a @ vectors, vectors * values, atol=1e-10)
        np.testing.assert_allclose(vectors.T @ vectors, np.eye(4), atol=1e-10)

    def test_batched_spd(self, spd_batch):
        eigenvalues, eigenvectors = spd_batch.sym_eig()
        assert eigenvalues.shape == (4, 3)
        assert eigenvectors.shape == (4, 3, 3)
        np.testing.assert_allclose(
            np.sort(eigenvalues.numpy(), axis=-1),
            np.linalg.eigvalsh(spd_batch.numpy()),
            rtol=1e-10,
        )

    def test_identity(self):
        eigenvalues, _ = eye(3).sym_eig()
        np.testing.assert_allclose(eigenvalues.numpy(), np.ones(3))


class TestSymmetryCheck:

    def test_not_symmetric(self):
        a = from_array((2, 2), [1, 2, 3, 4])
        with pytest.raises(NotSymmetricError, match="not symmetric") as info:
            a.sym_eig()
        assert info.value.epsilon == 1e-15
        assert info.value.batch_index == 0

    def test_tolerance(self):
        a = from_array((2, 2), [2, 1, 1 + 1e-12, 3])
        with pytest.raises(NotSymmetricError):
            a.sym_eig()
        eigenvalues, _ = a.sym_eig(epsilon=1e-9)
        assert eigenvalues.shape == (2,)

    def test_batch_index(self, spd_batch):
        a = spd_batch.numpy()
        a[2, 0, 1] += 1.0
        with pytest.raises(NotSymmetricError) as info:
            from_numpy(a).sym_eig()
        assert info.value.batch_index == 2

    def test_not_square(self):
        with pytest.raises(ShapeError):
            zeros((2, 3)).sym_eig()


class TestKernel:

    def test_clean_sign_matrix(self):
        m = np.array([[0.9, 0.1], [-0.2, -0.99]])
        np.testing.assert_array_equal(clean_sign_matrix(m), [[1.0, 0.0], [0.0, -1.0]])

    def test_eigen_from_svd(self):
        u = np.array([[1.0, 0.0], [0.0, -1.0]])
        v = np.eye(2)
        s = np.array([4.0, 2.0])
        np.testing.assert_array_equal(eigen_from_svd(u, s, v), [4.0, -2.0])

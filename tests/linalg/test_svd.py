"""
Tests for the one-sided Jacobi SVD.

Singular values are not sorted, so comparisons against numpy sort first.
"""

import warnings

import numpy as np
import pytest

from densetensor import SVDDecomposition, from_array, from_numpy, svd, sym_eig, zeros
from densetensor.core.compute.linalg.svd import jacobi_svd
from densetensor.core.exceptions import ShapeError, ValidationError


def _reconstruct(u, s, v):
    return u @ np.diag(s) @ v.T


# ═══════════════════════════════════════════════════════════════════════
# Tensor-level SVD
# ═══════════════════════════════════════════════════════════════════════


class TestSVD:

    @pytest.mark.parametrize("shape", [(4, 4), (6, 3), (3, 6), (1, 5), (5, 1)])
    def test_reconstruction(self, rng, shape):
        a = rng.standard_normal(shape)
        u, s, v = from_numpy(a).svd()
        k = min(shape)
        assert u.shape == (shape[0], k)
        assert s.shape == (k,)
        assert v.shape == (shape[1], k)
        np.testing.assert_allclose(
            _reconstruct(u.numpy(), s.numpy(), v.numpy()), a, atol=1e-10
        )

    def test_singular_values_match_numpy(self, rng):
        a = rng.standard_normal((5, 4))
        _, s, _ = from_numpy(a).svd()
        np.testing.assert_allclose(
            np.sort(s.numpy())[::-1], np.linalg.svd(a, compute_uv=False), rtol=1e-10
        )

    def test_orthonormal_factors(self, rng):
        a = rng.standard_normal((6, 4))
        u, _, v = from_numpy(a).svd()
        np.testing.assert_allclose(u.numpy().T @ u.numpy(), np.eye(4), atol=1e-10)
        np.testing.assert_allclose(v.numpy().T @ v.numpy(), np.eye(4), atol=1e-10)

    def test_non_negative(self, rng):
        _, s, _ = from_numpy(rng.standard_normal((4, 4))).svd()
        assert np.all(s.numpy() >= 0.0)

    def test_batched(self, rng):
        a = rng.standard_normal((2, 3, 4, 3))
        result = svd(from_numpy(a))
        assert isinstance(result, SVDDecomposition)
        assert result.u.shape == (2, 3, 4, 3)
        assert result.s.shape == (2, 3, 3)
        assert result.v.shape == (2, 3, 3, 3)
        assert result.converged
        assert result.sweeps >= 1
        u, s, v = result.u.numpy(), result.s.numpy(), result.v.numpy()
        for i in range(2):
            for j in range(3):
                np.testing.assert_allclose(
                    _reconstruct(u[i, j], s[i, j], v[i, j]), a[i, j], atol=1e-10
                )

    def test_rank_deficient(self):
        a = from_array((3, 3), [1, 2, 3, 2, 4, 6, 1, 0, 1])
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            result = a.svd()
        assert result.converged
        assert result.sweeps < 100
        u, s, v = result
        np.testing.assert_allclose(
            _reconstruct(u.numpy(), s.numpy(), v.numpy()), a.numpy(), atol=1e-10
        )
        assert np.sum(s.numpy() < 1e-10) == 1
        np.testing.assert_allclose(u.numpy().T @ u.numpy(), np.eye(3), atol=1e-10)

    def test_rank_deficient_wide(self):
        a = from_array((2, 4), [1, 2, 3, 4, 2, 4, 6, 8])
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            result = a.svd()
        assert result.converged
        u, s, v = result
        np.testing.assert_allclose(
            _reconstruct(u.numpy(), s.numpy(), v.numpy()), a.numpy(), atol=1e-10
        )
        np.testing.assert_allclose(
            np.sort(s.numpy()), [0.0, np.sqrt(150.0)], atol=1e-10
        )

    def test_singular_batch_converges(self, rng):
        base = rng.standard_normal((3, 5, 2))
        a = from_numpy(base @ np.swapaxes(base, -1, -2))
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            result = a.svd()
        assert result.converged
        assert np.sum(result.s.numpy() < 1e-10) == 9

    def test_zero_matrix(self):
        u, s, v = zeros((3, 2)).svd()
        np.testing.assert_array_equal(s.numpy(), 0.0)
        np.testing.assert_allclose(u.numpy().T @ u.numpy(), np.eye(2), atol=1e-12)

    def test_input_untouched(self, square_batch):
        before = square_batch.numpy()
        square_batch.svd()
        np.testing.assert_array_equal(square_batch.numpy(), before)

    def test_rank_one_rejected(self):
        with pytest.raises(ShapeError):
            zeros((3,)).svd()

    def test_bad_max_sweeps(self, matrix_2x2):
        with pytest.raises(ValidationError, match="max_sweeps"):
            matrix_2x2.svd(max_sweeps=0)


# ═══════════════════════════════════════════════════════════════════════
# Convergence bound
# ═══════════════════════════════════════════════════════════════════════


class TestSweepLimit:

    def test_warns_when_limit_reached(self, rng):
        a = from_numpy(rng.standard_normal((6, 6)))
        with pytest.warns(RuntimeWarning, match="did not converge within 1 sweeps"):
            result = a.svd(max_sweeps=1)
        assert not result.converged
        assert result.sweeps == 1

    def test_no_warning_when_converged(self, rng):
        a = from_numpy(rng.standard_normal((4, 4)))
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            result = a.svd()
        assert result.converged

    def test_nan_input_terminates(self):
        a = from_array((2, 2), [np.nan, 1.0, 1.0, 2.0])
        with pytest.warns(RuntimeWarning):
            result = a.svd(max_sweeps=5)
        assert result.sweeps == 5

    def test_warning_points_at_caller(self, rng):
        a = rng.standard_normal((6, 6))
        symmetric = from_numpy(a + a.T)
        calls = [
            lambda: from_numpy(a).svd(max_sweeps=1),
            lambda: svd(from_numpy(a), max_sweeps=1),
            lambda: symmetric.sym_eig(max_sweeps=1),
            lambda: sym_eig(symmetric, max_sweeps=1),
        ]
        for call in calls:
            with pytest.warns(RuntimeWarning, match="did not converge") as record:
                call()
            assert record[0].filename == __file__


# ═══════════════════════════════════════════════════════════════════════
# Kernel
# ═══════════════════════════════════════════════════════════════════════


class TestJacobiKernel:

    def test_diagonal_input_converges_immediately(self):
        a = np.diag([3.0, -1.0, 2.0])
        result = jacobi_svd(a, 1e-10, 100)
        assert result.sweeps == 1
        assert result.converged
        np.testing.assert_allclose(result.S, [3.0, 1.0, 2.0])

    def test_does_not_modify_input(self, rng):
        a = rng.standard_normal((3, 3))
        before = a.copy()
        jacobi_svd(a, 1e-10, 100)
        np.testing.assert_array_equal(a, before)

    def test_badly_scaled_input_is_silent(self):
        a = np.array([[1e150, 1.0], [0.0, 1e-150]])
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            result = jacobi_svd(a, 1e-10, 100)
        assert result.converged
        error = np.abs(_reconstruct(result.U, result.S, result.V) - a).max()
        assert error <= 1e-15 * np.linalg.norm(a)

    def test_null_column_not_rotated(self):
        a = np.array([[1.0, 1e-20], [0.0, 0.0]])
        result = jacobi_svd(a, 1e-10, 100)
        assert result.sweeps == 1
        np.testing.assert_allclose(result.U.T @ result.U, np.eye(2), atol=1e-15)

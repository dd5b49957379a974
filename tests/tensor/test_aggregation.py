"""
Tests for stack, rows_by_indices and cov.
"""

import numpy as np
import pytest

from densetensor import cov, from_array, from_numpy, rows_by_indices, stack, zeros
from densetensor.core.exceptions import ShapeError, ShapeMismatchError


class TestStack:

    def test_new_leading_dimension(self, rng):
        arrays = [rng.standard_normal((2, 3)) for _ in range(4)]
        result = stack([from_numpy(a) for a in arrays])
        assert result.shape == (4, 2, 3)
        np.testing.assert_array_equal(result.numpy(), np.stack(arrays))

    def test_stack_of_views(self, batch_3x2x4):
        result = stack([batch_3x2x4[2], batch_3x2x4[0]])
        np.testing.assert_array_equal(result.numpy(), batch_3x2x4.numpy()[[2, 0]])
        assert result.buffer is not batch_3x2x4.buffer

    def test_empty(self):
        with pytest.raises(ShapeError, match="at least 1 element"):
            stack([])

    def test_shape_mismatch(self):
        with pytest.raises(ShapeMismatchError, match="stack"):
            stack([zeros((2,)), zeros((3,))])


class TestRowsByIndices:

    def test_selects_rows(self):
        t = from_array((3, 2), [1, 2, 3, 4, 5, 6])
        result = t.rows_by_indices([2, 0, 2])
        assert result.tolist() == [[5.0, 6.0], [1.0, 2.0], [5.0, 6.0]]

    def test_function_form(self, batch_3x2x4):
        result = rows_by_indices(batch_3x2x4, [1])
        assert result.shape == (1, 2, 4)

    def test_out_of_range(self):
        with pytest.raises(IndexError):
            zeros((2, 2)).rows_by_indices([2])


class TestCov:

    def test_matches_numpy(self, rng):
        data = rng.standard_normal((3, 50))
        result = cov([from_numpy(row) for row in data])
        assert result.shape == (3, 3)
        np.testing.assert_allclose(result.numpy(), np.cov(data), rtol=1e-12)

    def test_perfectly_correlated(self):
        x = from_array((4,), [1, 2, 3, 4])
        y = from_array((4,), [2, 4, 6, 8])
        result = cov([x, y])
        np.testing.assert_allclose(result.numpy(), [[5 / 3, 10 / 3], [10 / 3, 20 / 3]])

    def test_rejects_matrices(self):
        with pytest.raises(ShapeError, match="1-D"):
            cov([zeros((2, 2))])

    def test_length_mismatch(self):
        with pytest.raises(ShapeMismatchError):
            cov([zeros((3,)), zeros((4,))])

    def test_empty(self):
        with pytest.raises(ShapeError):
            cov([])

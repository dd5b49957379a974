"""
Tests for tensor factories and the Tensor constructor.
"""

import numpy as np
import pytest

from densetensor import (
    Tensor,
    eye,
    from_array,
    from_numpy,
    full,
    full_like,
    ones,
    ones_like,
    produce,
    random_normal,
    random_normal_like,
    zeros,
    zeros_like,
)
from densetensor.core.exceptions import ShapeError, ValidationError


# ═══════════════════════════════════════════════════════════════════════
# from_array
# ═══════════════════════════════════════════════════════════════════════


class TestFromArray:

    def test_basic(self):
        t = from_array((2, 3), [1, 2, 3, 4, 5, 6])
        assert t.shape == (2, 3)
        assert t.num_elements == 6
        assert t.dtype == np.float64
        assert t[1, 2] == 6.0

    def test_copies_input(self):
        data = np.array([1.0, 2.0, 3.0])
        t = from_array((3,), data)
        data[0] = 100.0
        assert t[0, ] == 1.0

    def test_empty_shape(self):
        with pytest.raises(ShapeError, match="at least one dimension"):
            from_array((), [1.0])

    def test_zero_dimension(self):
        with pytest.raises(ShapeError, match="must be positive"):
            from_array((0,), [])

    def test_empty_data(self):
        with pytest.raises(ShapeError, match="empty"):
            from_array((1,), [])

    def test_size_mismatch(self):
        with pytest.raises(ShapeError, match="requires 4 elements, got 3"):
            from_array((2, 2), [1, 2, 3])

    def test_nested_data_rejected(self):
        with pytest.raises(ShapeError, match="flat sequence"):
            from_array((2, 2), [[1, 2], [3, 4]])

    def test_non_numeric(self):
        with pytest.raises(ValidationError, match="numeric"):
            from_array((2,), ["a", "b"])


class TestFromNumpy:

    def test_keeps_shape(self, rng):
        a = rng.standard_normal((2, 3, 4))
        t = from_numpy(a)
        assert t.shape == (2, 3, 4)
        np.testing.assert_array_equal(t.numpy(), a)

    def test_scalar_rejected(self):
        with pytest.raises(ShapeError):
            from_numpy(np.float64(1.0))


# ═══════════════════════════════════════════════════════════════════════
# Fill factories
# ═══════════════════════════════════════════════════════════════════════


class TestFill:

    def test_zeros_shape(self):
        assert zeros((2, 3)).shape == (2, 3)
        assert zeros((2, 3)).tolist() == [[0.0] * 3] * 2

    def test_ones(self):
        assert ones((4,)).tolist() == [1.0] * 4

    def test_full(self):
        t = full(2.5, (2, 2))
        np.testing.assert_array_equal(t.numpy(), np.full((2, 2), 2.5))

    def test_eye(self):
        np.testing.assert_array_equal(eye(3).numpy(), np.eye(3))

    def test_eye_rejects_zero(self):
        with pytest.raises(ValidationError):
            eye(0)

    def test_like_factories(self, batch_3x2x4):
        assert zeros_like(batch_3x2x4).shape == (3, 2, 4)
        assert ones_like(batch_3x2x4).sum() == 24.0
        assert full_like(batch_3x2x4, 7.0).max() == 7.0

    def test_fresh_buffers(self):
        a = zeros((2,))
        b = zeros((2,))
        assert a.buffer is not b.buffer


class TestProduce:

    def test_calls_in_row_major_order(self):
        seen = []

        def func(index):
            seen.append(index)
            return index[0] * 10 + index[1]

        t = produce((2, 3), func)
        assert seen == [(0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2)]
        assert t.tolist() == [[0.0, 1.0, 2.0], [10.0, 11.0, 12.0]]


# ═══════════════════════════════════════════════════════════════════════
# Random tensors
# ═══════════════════════════════════════════════════════════════════════


class TestRandomNormal:

    def test_seed_reproducible(self):
        a = random_normal((3, 4), seed=7)
        b = random_normal((3, 4), seed=7)
        assert a.eq(b, epsilon=0.0)

    def test_different_seeds(self):
        a = random_normal((10,), seed=1)
        b = random_normal((10,), seed=2)
        assert not a.eq(b)

    def test_matches_default_rng(self):
        expected = np.random.default_rng(5).standard_normal(6)
        np.testing.assert_array_equal(random_normal((2, 3), seed=5).numpy().ravel(), expected)

    def test_explicit_generator_advances(self):
        rng = np.random.default_rng(0)
        a = random_normal((5,), rng=rng)
        b = random_normal((5,), rng=rng)
        assert not a.eq(b)

    def test_global_state_untouched(self):
        np.random.seed(123)
        before = np.random.get_state()[1].copy()
        random_normal((100,), seed=1)
        np.testing.assert_array_equal(np.random.get_state()[1], before)

    def test_moments(self):
        t = random_normal((20000,), seed=3)
        assert abs(t.mean()) < 0.05
        assert abs(t.std() - 1.0) < 0.05

    def test_like(self, batch_3x2x4):
        assert random_normal_like(batch_3x2x4, seed=1).shape == (3, 2, 4)


# ═══════════════════════════════════════════════════════════════════════
# Tensor constructor
# ═══════════════════════════════════════════════════════════════════════


class TestConstructor:

    def test_shares_buffer(self):
        buffer = np.arange(6, dtype=np.float64)
        t = Tensor((2, 2), buffer, buffer_start=2)
        assert t.buffer is buffer
        assert t.buffer_start == 2
        assert t.tolist() == [[2.0, 3.0], [4.0, 5.0]]

    def test_window_must_fit(self):
        with pytest.raises(ShapeError, match="does not fit"):
            Tensor((2, 2), np.zeros(5), buffer_start=2)

    def test_negative_start(self):
        with pytest.raises(ShapeError):
            Tensor((2,), np.zeros(5), buffer_start=-1)

    def test_buffer_must_be_flat_array(self):
        with pytest.raises(ShapeError, match="1-D numpy array"):
            Tensor((2, 2), np.zeros((2, 2)))
        with pytest.raises(ShapeError, match="1-D numpy array"):
            Tensor((2,), [1.0, 2.0])

    def test_repr(self, matrix_2x2):
        text = repr(matrix_2x2)
        assert text.startswith("Tensor(")
        assert "shape=(2, 2)" in text

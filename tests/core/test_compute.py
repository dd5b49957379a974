"""
Tests for tolerances and IEEE-754 helpers in core/compute.
"""

import dataclasses
import warnings

import numpy as np
import pytest

from densetensor.core.compute.precision import EPSILON_64, ieee_apply, ieee_semantics
from densetensor.core.compute.tolerances import (
    CHOLESKY_EPSILON,
    DEFAULT_TOLERANCES,
    EQUALITY_EPSILON,
    GENERAL_EPSILON,
    SVD_EPSILON,
    SVD_MAX_SWEEPS,
    SYM_EIG_EPSILON,
)


class TestTolerances:
    """Default thresholds are part of the public contract."""

    def test_default_values(self):
        assert GENERAL_EPSILON == 1e-9
        assert CHOLESKY_EPSILON == 1e-6
        assert SVD_EPSILON == 1e-10
        assert SYM_EIG_EPSILON == 1e-15
        assert EQUALITY_EPSILON == 1e-5
        assert SVD_MAX_SWEEPS == 100

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_TOLERANCES.general = 1e-3

    def test_replace_builds_new_config(self):
        loose = dataclasses.replace(DEFAULT_TOLERANCES, general=1e-3)
        assert loose.general == 1e-3
        assert DEFAULT_TOLERANCES.general == 1e-9


class TestIEEESemantics:

    def test_epsilon_64(self):
        assert EPSILON_64 == np.finfo(np.float64).eps

    def test_division_by_zero_silent(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            with ieee_semantics():
                result = np.array([1.0, -1.0, 0.0]) / np.zeros(3)
        assert result[0] == np.inf
        assert result[1] == -np.inf
        assert np.isnan(result[2])

    def test_ieee_apply_out_of_domain(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            result = ieee_apply(np.log, np.array([-1.0, 0.0]))
        assert np.isnan(result[0])
        assert result[1] == -np.inf

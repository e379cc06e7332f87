"""Tests for the inverse square root primitives."""

import numpy as np
import pytest

from orientation_filter import inv_sqrt, fast_inv_sqrt


INPUTS = np.logspace(-3, 6, 200)


class TestInvSqrt:
    """Tests for the direct inverse square root."""

    def test_accuracy(self):
        for x in INPUTS:
            assert np.isclose(inv_sqrt(x) * np.sqrt(x), 1.0, rtol=1e-12, atol=0.0)

    def test_known_values(self):
        assert inv_sqrt(4.0) == 0.5
        assert inv_sqrt(1.0) == 1.0

    def test_zero_is_infinite(self):
        with np.errstate(divide='ignore'):
            assert np.isinf(inv_sqrt(0.0))


class TestFastInvSqrt:
    """Tests for the bit-level approximation."""

    @pytest.mark.parametrize('iterations, tolerance', [
        (1, 2e-3),
        (2, 1e-5),
        (3, 1e-9),
    ])
    def test_accuracy(self, iterations, tolerance):
        """Test relative error bound for each refinement depth."""
        for x in INPUTS:
            relative = fast_inv_sqrt(x, iterations=iterations) * np.sqrt(x)
            assert abs(relative - 1.0) < tolerance

    def test_more_iterations_improve_accuracy(self):
        x = 7.3
        errors = [
            abs(fast_inv_sqrt(x, iterations=n) * np.sqrt(x) - 1.0)
            for n in (1, 2, 3)
        ]
        assert errors[0] > errors[1] > errors[2]

    def test_underestimates(self):
        """Newton-Raphson for 1/sqrt converges from below."""
        for x in (0.01, 1.0, 2.0, 1234.5):
            assert fast_inv_sqrt(x, iterations=2) <= 1.0 / np.sqrt(x)

    def test_returns_finite_float(self):
        value = fast_inv_sqrt(2.0)
        assert np.isfinite(value)
        assert isinstance(float(value), float)

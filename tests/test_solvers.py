"""Tests for solvers.py — root finders and precision helpers."""

import numpy as np
import pytest
from comp_flow.solvers import (
    NonConvergenceError,
    brent,
    default_tolerance,
    expand_bracket,
    newton,
    secant,
    working_dtype,
)


def cubic(x):
    """x³ + x² - 3x - 3, with roots -1 and ±√3."""
    return x**3 + x**2 - 3 * x - 3


def cubic_prime(x):
    return 3 * x**2 + 2 * x - 3


class TestSecant:

    def test_finds_root(self):
        assert secant(cubic, 2.0) == pytest.approx(np.sqrt(3), rel=1e-10)

    def test_tolerance_respected(self):
        root = secant(lambda x: np.cos(x) - x, 1.0, tol=1e-12)
        assert np.cos(root) == pytest.approx(root, abs=1e-12)

    def test_no_root_raises(self):
        with pytest.raises(NonConvergenceError):
            secant(lambda x: np.hypot(x, 1.0), 0.5)

    def test_iteration_cap(self):
        with pytest.raises(NonConvergenceError) as excinfo:
            secant(cubic, 100.0, max_iterations=2)
        assert excinfo.value.iterations == 2

    def test_is_runtime_error(self):
        with pytest.raises(RuntimeError):
            secant(lambda x: np.hypot(x, 1.0), 0.5)


class TestBrent:

    def test_finds_root(self):
        assert brent(cubic, (1.0, 2.0), tol=1e-12) == pytest.approx(np.sqrt(3), rel=1e-10)

    def test_undefined_outside_bracket(self):
        """f is never evaluated below the lower limit."""
        root = brent(lambda x: np.sqrt(x - 1.0) - 0.1, (1.0, 5.0), tol=1e-12)
        assert root == pytest.approx(1.01, rel=1e-10)

    def test_unbracketed_raises(self):
        with pytest.raises(NonConvergenceError, match="do not bracket"):
            brent(lambda x: x**2 + 1, (0.0, 1.0))

    def test_iteration_cap(self):
        with pytest.raises(NonConvergenceError) as excinfo:
            brent(cubic, (1.0, 100.0), max_iterations=1)
        assert excinfo.value.iterations == 1


class TestNewton:

    def test_unbracketed(self):
        assert newton(cubic, cubic_prime, 2.0) == pytest.approx(np.sqrt(3), rel=1e-12)

    def test_bracketed(self):
        root = newton(cubic, cubic_prime, 1.5, limits=(1.0, 2.0))
        assert root == pytest.approx(np.sqrt(3), rel=1e-12)

    def test_iterates_stay_in_bracket(self):
        """An overshooting step is replaced by bisection."""
        visited = []

        def f(x):
            visited.append(x)
            return x**2 - 1

        root = newton(f, lambda x: 2 * x, 0.01, limits=(0.0, 5.0))
        assert root == pytest.approx(1.0, rel=1e-12)
        assert all(0.0 <= x <= 5.0 for x in visited)

    def test_bracket_selects_root(self):
        f = lambda x: x**2 - 1  # noqa: E731
        f_prime = lambda x: 2 * x  # noqa: E731
        assert newton(f, f_prime, -0.5) == pytest.approx(-1.0)
        assert newton(f, f_prime, -0.5, limits=(0.0, 5.0)) == pytest.approx(1.0)

    def test_reversed_limits(self):
        root = newton(lambda x: 1 - x, lambda x: -1.0, 0.3, limits=(4.0, 0.0))
        assert root == pytest.approx(1.0)

    def test_guess_outside_limits(self):
        root = newton(cubic, cubic_prime, -10.0, limits=(1.0, 2.0))
        assert root == pytest.approx(np.sqrt(3), rel=1e-12)

    def test_root_on_limit(self):
        assert newton(lambda x: x - 1, lambda x: 1.0, 0.5, limits=(1.0, 3.0)) == 1.0

    def test_root_at_bracket_edge(self):
        """Overshooting Newton steps bisect all the way to the root."""
        f = lambda x: x**2 - 3.999999999999999  # noqa: E731
        root = newton(f, lambda x: 2 * x, 1.5, limits=(1.0, 2.0))
        assert root == pytest.approx(2.0, rel=1e-14)

    def test_zero_slope_with_bracket_bisects(self):
        root = newton(lambda x: x**3 - 8, lambda x: 0.0, 1.0, limits=(0.0, 5.0))
        assert root == pytest.approx(2.0, rel=1e-7)

    def test_zero_slope_raises(self):
        with pytest.raises(NonConvergenceError, match="zero slope"):
            newton(lambda x: x**2 - 1, lambda x: 2 * x, 0.0)

    def test_unbracketed_limits_raise(self):
        with pytest.raises(NonConvergenceError, match="do not bracket"):
            newton(lambda x: x**2 + 1, lambda x: 2 * x, 0.5, limits=(0.0, 1.0))

    def test_iteration_cap(self):
        with pytest.raises(NonConvergenceError) as excinfo:
            newton(lambda x: x**2 - 2, lambda x: 2 * x, 100.0, max_iterations=2)
        assert excinfo.value.iterations == 2
        assert np.isfinite(excinfo.value.estimate)


class TestExpandBracket:

    def test_grows_upper_end(self):
        assert expand_bracket(lambda x: x - 100, 1.0, 2.0) == (1.0, 128.0)

    def test_already_bracketed(self):
        assert expand_bracket(lambda x: x - 1.5, 1.0, 2.0) == (1.0, 2.0)

    def test_gives_up(self):
        lo, hi = expand_bracket(lambda x: 1.0, 1.0, 2.0, max_expansions=3)
        assert (lo, hi) == (1.0, 16.0)


class TestPrecision:

    def test_python_floats_are_double(self):
        assert working_dtype(1.0, 1.4) is np.float64
        assert working_dtype(2, 3) is np.float64

    def test_single_precision(self):
        assert working_dtype(np.float32(1.0), np.float32(1.4)) is np.float32
        # Python scalars are weak and do not promote
        assert working_dtype(np.float32(1.0), 1.4) is np.float32

    def test_mixed_precision_promotes(self):
        assert working_dtype(np.float32(1.0), np.float64(1.4)) is np.float64

    def test_default_tolerance(self):
        assert default_tolerance(np.float64) == pytest.approx(1.4901161193847656e-08)
        assert default_tolerance(np.float32) == pytest.approx(3.4526698e-04, rel=1e-6)

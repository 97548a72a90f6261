"""Scalar root finders used by the inversion layer.

Three root finders:

- `secant`: derivative-free, delegated to `scipy.optimize.newton` in secant
  mode. Used for the oblique wave angle, which is re-seeded on failure.
- `brent`: derivative-free and bracketed, delegated to `scipy.optimize.brentq`.
  Used for the Prandtl-Meyer inversion, where ν(M) is NaN below M = 1.
- `newton`: analytic derivative, optionally safeguarded by a bracket. Any
  step that leaves the bracket becomes a bisection step, which is what
  keeps a branch inversion (subsonic vs supersonic) on its branch.

Failures raise `NonConvergenceError`, a `RuntimeError`, so callers can
recover instead of the whole computation aborting.
"""

import numpy as np
from scipy import optimize

# Bracket width, relative to the root, at which bisection cannot do better
_BRACKET_RTOL = 4 * np.finfo(float).eps


class NonConvergenceError(RuntimeError):
    """A root finder stopped without finding a root.

    Attributes
    ----------
    estimate : float
        Last iterate (may be NaN).
    iterations : int
        Iterations performed before giving up.
    """

    def __init__(self, message, estimate=np.nan, iterations=0):
        super().__init__(message)
        self.estimate = estimate
        self.iterations = iterations


def working_dtype(*values):
    """Floating-point type the given scalars compute in.

    Python floats and ints map to float64; numpy scalars keep their own
    precision (numpy >= 2 promotion rules).
    """
    dtype = np.result_type(*values)
    if not np.issubdtype(dtype, np.floating):
        dtype = np.dtype(np.float64)
    return dtype.type


def default_tolerance(dtype):
    """Step tolerance √ε of the working precision (1.49e-8 for float64)."""
    return float(np.sqrt(np.finfo(dtype).eps))


def secant(f, x0, tol=1.48e-8, max_iterations=50):
    """Derivative-free root of f near x0.

    Thin wrapper over `scipy.optimize.newton` with ``fprime=None``. The
    second point is scipy's default perturbation of x0.

    Parameters
    ----------
    f : callable
        Scalar objective f(x).
    x0 : float
        Initial guess.
    tol : float
        Absolute step tolerance.
    max_iterations : int
        Iteration cap.

    Returns
    -------
    float : x such that f(x) ≈ 0.

    Raises
    ------
    NonConvergenceError
        No convergence within ``max_iterations``, a flat secant, or a
        non-finite root.
    """
    root, info = optimize.newton(
        lambda x: float(f(x)), float(x0), tol=tol, maxiter=max_iterations,
        full_output=True, disp=False,
    )
    if not info.converged or not np.isfinite(root):
        raise NonConvergenceError(
            f"Secant iteration from x0 = {x0} did not converge "
            f"({info.flag}) after {info.iterations} iterations",
            estimate=root, iterations=info.iterations,
        )
    return root


def brent(f, limits, tol=1.48e-8, max_iterations=50):
    """Root of f inside ``limits`` by Brent's method (`scipy.optimize.brentq`).

    f is only evaluated inside the bracket, so it may be undefined outside.

    Parameters
    ----------
    f : callable
        Scalar objective f(x).
    limits : (float, float)
        Interval over which f changes sign.
    tol : float
        Relative tolerance on x.
    max_iterations : int
        Iteration cap.

    Raises
    ------
    NonConvergenceError
        ``limits`` do not bracket a sign change, or no convergence within
        ``max_iterations``.
    """
    lo, hi = float(limits[0]), float(limits[1])
    try:
        root, info = optimize.brentq(
            lambda x: float(f(x)), lo, hi, rtol=max(tol, _BRACKET_RTOL),
            maxiter=max_iterations, full_output=True, disp=False,
        )
    except ValueError as e:
        raise NonConvergenceError(
            f"Limits [{lo}, {hi}] do not bracket a root ({e})") from e
    if not info.converged:
        raise NonConvergenceError(
            f"Brent iteration on [{lo}, {hi}] did not converge "
            f"({info.flag}) after {info.iterations} iterations",
            estimate=root, iterations=info.iterations,
        )
    return root


def newton(f, f_prime, x0, limits=None, tol=1.48e-8, max_iterations=100):
    """Newton iteration with analytic derivative, optionally bracketed.

    Parameters
    ----------
    f, f_prime : callable
        Objective and its derivative.
    x0 : float
        Initial guess. Replaced by the bracket midpoint if it lies outside
        ``limits``.
    limits : (float, float) or None
        Interval over which f changes sign. When given, every iterate stays
        inside the shrinking bracket: a Newton step that leaves it, or a
        zero / non-finite derivative, is replaced by bisection.
    tol : float
        Relative step tolerance of a Newton step. Bisection steps only stop
        once the bracket is a few ulps wide.
    max_iterations : int
        Iteration cap.

    Returns
    -------
    float : x such that f(x) ≈ 0.

    Raises
    ------
    NonConvergenceError
        ``limits`` do not bracket a sign change, zero slope without limits,
        or no convergence within ``max_iterations``.
    """
    if limits is not None:
        # Orient the bracket so that f(neg) < 0 < f(pos)
        lo, hi = float(limits[0]), float(limits[1])
        f_lo, f_hi = float(f(lo)), float(f(hi))
        if f_lo == 0.0:
            return lo
        if f_hi == 0.0:
            return hi
        if not f_lo * f_hi < 0:
            raise NonConvergenceError(
                f"Limits [{lo}, {hi}] do not bracket a root "
                f"(f = {f_lo}, {f_hi})")
        neg, pos = (lo, hi) if f_lo < 0 else (hi, lo)
        x = float(x0)
        if not min(lo, hi) < x < max(lo, hi):
            x = 0.5 * (lo + hi)
    else:
        x = float(x0)

    for i in range(max_iterations):
        fx = float(f(x))
        if fx == 0.0:
            return x
        dfx = float(f_prime(x))
        if dfx != 0.0 and np.isfinite(dfx):
            x_new = x - fx / dfx
        else:
            x_new = np.nan

        bisected = False
        if limits is not None:
            if fx < 0:
                neg = x
            else:
                pos = x
            # NaN fails the comparison and falls through to bisection
            if not min(neg, pos) < x_new < max(neg, pos):
                x_new = 0.5 * (neg + pos)
                bisected = True
        elif not np.isfinite(x_new):
            raise NonConvergenceError(
                f"Cannot proceed with zero slope at x = {x}",
                estimate=x, iterations=i + 1)

        # Bisection steps converge on bracket width only
        if bisected:
            if abs(pos - neg) <= _BRACKET_RTOL * abs(x_new):
                return x_new
        elif abs(x_new - x) <= tol * abs(x_new):
            return x_new
        x = x_new

    raise NonConvergenceError(
        f"Newton iteration did not converge after {max_iterations} iterations",
        estimate=x, iterations=max_iterations)


def expand_bracket(f, lo, hi, factor=2.0, max_expansions=60):
    """Grow ``hi`` geometrically until f(lo) and f(hi) differ in sign.

    Returns
    -------
    (lo, hi) : tuple of float
        The last ``hi`` tried is returned even if no sign change was found;
        `newton` then reports the failure.
    """
    f_lo = float(f(lo))
    for _ in range(max_expansions):
        if f_lo * float(f(hi)) <= 0:
            break
        hi *= factor
    return lo, hi

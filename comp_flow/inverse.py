"""Mach number from isentropic ratios and wave angles.

Each relation is inverted the cheapest way that is reliable:

- Stagnation ratios, velocity and Mach angle have algebraic inverses.
- A/A*, the stagnation mass-flow function and the impulse function are
  two-valued about M = 1. They are solved with `newton` and their analytic
  derivatives, seeded on the requested side of the sonic point and
  bracketed to that branch: (0, 1] subsonic, [1, ∞) supersonic with the
  upper end grown until it brackets the target.
- The Prandtl-Meyer angle is solved with the derivative-free, bracketed
  `brent` on the supersonic branch.

Iterative inversions raise `NonConvergenceError` when the branch holds no
root (e.g. A/A* < 1) or the iteration cap is hit. The result has the
precision of the inputs.
"""

import numpy as np

from comp_flow.config import DEFAULT_SETTINGS
from comp_flow.derivatives import (
    der_mach_to_a_ac,
    der_mach_to_f_mcpt0,
    der_mach_to_mcpt0_ap,
    der_mach_to_mcpt0_ap0,
)
from comp_flow.isentropic import (
    mach_to_a_ac,
    mach_to_f_mcpt0,
    mach_to_mcpt0_ap,
    mach_to_mcpt0_ap0,
    mach_to_pm_angle,
)
from comp_flow.solvers import brent, expand_bracket, newton, working_dtype

# A/A* and the impulse function are singular at M = 0
MACH_MIN = 1e-9

SUPERSONIC_GUESS = 1.5
SUBSONIC_GUESS = 0.5


# ---------------------------------------------------------------------------
# Closed-form inverses
# ---------------------------------------------------------------------------

def mach_from_t_t0(t_t0, gamma):
    """M from T/T0: M = √(2/(γ-1) · (T0/T - 1))."""
    return np.sqrt(2 / (gamma - 1) * (1 / t_t0 - 1))


def mach_from_p_p0(p_p0, gamma):
    """M from P/P0: M = √(2/(γ-1) · ((P/P0)^((1-γ)/γ) - 1)).

    Anderson MCF Eq. 3.30 inverted.
    """
    return np.sqrt(2 / (gamma - 1) * (p_p0 ** ((1 - gamma) / gamma) - 1))


def mach_from_rho_rho0(rho_rho0, gamma):
    """M from ρ/ρ0: M = √(2/(γ-1) · ((ρ/ρ0)^(1-γ) - 1))."""
    return np.sqrt(2 / (gamma - 1) * (rho_rho0 ** (1 - gamma) - 1))


def mach_from_v_cpt0(v_cpt0, gamma):
    """M from V/√(c_p·T0): M² = v² / ((γ-1) - (γ-1)/2 · v²).

    NaN at and beyond the escape velocity v = √2.
    """
    return np.sqrt(v_cpt0**2 / ((gamma - 1) - 0.5 * (gamma - 1) * v_cpt0**2))


def mach_from_mach_angle(mach_angle):
    """M = 1 / sin(μ). The angle is not checked against (0, π/2]."""
    return 1 / np.sin(mach_angle)


# ---------------------------------------------------------------------------
# Iterative inverses
# ---------------------------------------------------------------------------

def _branch_limits(f, supersonic):
    """Bracket of the subsonic or supersonic branch, M = 1 at one end."""
    if supersonic:
        return expand_bracket(f, 1.0, 2.0)
    return MACH_MIN, 1.0


def _solve_on_branch(f, f_prime, x0, limits, dtype, settings):
    mach = newton(f, f_prime, x0, limits=limits,
                  tol=settings.tolerance(dtype),
                  max_iterations=settings.max_iterations)
    return dtype(mach)


def mach_from_pm_angle(pm_angle, gamma, settings=None):
    """M from the Prandtl-Meyer angle ν [radians].

    Brent's method on ν(M) - ν over [1, M_hi], with M_hi doubled from
    M = 2 until it brackets the target. ν(M) is undefined below M = 1, so
    the search never leaves the supersonic branch. Anderson MCF Section 4.14.

    Raises
    ------
    NonConvergenceError
        e.g. for ν at or beyond ν_max = (√((γ+1)/(γ-1)) - 1)·π/2.
    """
    settings = settings or DEFAULT_SETTINGS
    dtype = working_dtype(pm_angle, gamma)

    def f(m):
        return mach_to_pm_angle(m, gamma) - pm_angle

    mach = brent(f, _branch_limits(f, supersonic=True),
                 tol=settings.tolerance(dtype),
                 max_iterations=settings.max_iterations)
    return dtype(mach)


def mach_from_a_ac(a_ac, gamma, supersonic, settings=None):
    """M from the critical area ratio A/A*.

    Parameters
    ----------
    a_ac : float
        A/A* (>= 1 for a root to exist).
    gamma : float
        Ratio of specific heats.
    supersonic : bool
        Select the M >= 1 root, otherwise the M <= 1 root.
    settings : SolverSettings or None

    Returns
    -------
    float : Mach number. Exactly 1 for A/A* == 1, where both branches meet.

    Raises
    ------
    NonConvergenceError
    """
    settings = settings or DEFAULT_SETTINGS
    dtype = working_dtype(a_ac, gamma)
    if a_ac == 1:
        return dtype(1)

    def f(m):
        return mach_to_a_ac(m, gamma) - a_ac

    def f_prime(m):
        return der_mach_to_a_ac(m, gamma)

    x0 = SUPERSONIC_GUESS if supersonic else SUBSONIC_GUESS
    return _solve_on_branch(f, f_prime, x0, _branch_limits(f, supersonic),
                            dtype, settings)


def mach_from_a_ac_bisect(a_ac, gamma, supersonic, settings=None):
    """M from A/A* by plain bisection of the branch interval.

    The bracket is [0, 1] subsonic or [1, largest representable float]
    supersonic. It is halved ``settings.bisection_iterations`` times (10000
    by default), or until A/A* at the midpoint equals the target exactly or
    the bracket cannot be split any further, and the last midpoint is
    returned. Never raises; a target below 1 collapses onto M = 1.
    """
    settings = settings or DEFAULT_SETTINGS
    dtype = working_dtype(a_ac, gamma)
    if supersonic:
        m_min, m_max = dtype(1), np.finfo(dtype).max
    else:
        m_min, m_max = dtype(0), dtype(1)

    mach = m_min
    # The open-ended supersonic bracket overflows M² on the first halvings
    with np.errstate(over='ignore', divide='ignore', invalid='ignore'):
        for _ in range(settings.bisection_iterations):
            mach = m_min + (m_max - m_min) / 2
            if mach == m_min or mach == m_max:
                break
            ratio = mach_to_a_ac(mach, gamma)
            if ratio == a_ac:
                break
            # A/A* falls with M below the sonic point and rises above it
            if (ratio > a_ac) == supersonic:
                m_max = mach
            else:
                m_min = mach
    return dtype(mach)


def mach_from_mcpt0_ap0(mcpt0_ap0, gamma, supersonic, settings=None):
    """M from the stagnation mass-flow function ṁ·√(c_p·T0)/(A·P0).

    Two-valued about its choking maximum at M = 1; ``supersonic`` picks the
    branch. Newton iteration with analytic derivative.

    Raises
    ------
    NonConvergenceError
        Target above the choking maximum, or no convergence.
    """
    settings = settings or DEFAULT_SETTINGS
    dtype = working_dtype(mcpt0_ap0, gamma)

    def f(m):
        return mach_to_mcpt0_ap0(m, gamma) - mcpt0_ap0

    def f_prime(m):
        return der_mach_to_mcpt0_ap0(m, gamma)

    x0 = SUPERSONIC_GUESS if supersonic else SUBSONIC_GUESS
    return _solve_on_branch(f, f_prime, x0, _branch_limits(f, supersonic),
                            dtype, settings)


def mach_from_mcpt0_ap(mcpt0_ap, gamma, settings=None):
    """M from the static mass-flow function ṁ·√(c_p·T0)/(A·P).

    Monotonic in M, so there is a single root. Newton iteration with
    analytic derivative, seeded at M = 1.
    """
    settings = settings or DEFAULT_SETTINGS
    dtype = working_dtype(mcpt0_ap, gamma)

    def f(m):
        return mach_to_mcpt0_ap(m, gamma) - mcpt0_ap

    def f_prime(m):
        return der_mach_to_mcpt0_ap(m, gamma)

    limits = expand_bracket(f, MACH_MIN, 2.0)
    return _solve_on_branch(f, f_prime, 1.0, limits, dtype, settings)


def mach_from_f_mcpt0(f_mcpt0, gamma, supersonic, settings=None):
    """M from the impulse function F/(ṁ·√(c_p·T0)).

    Two-valued about its minimum at M = 1. The supersonic branch only
    reaches up to √2 (M → ∞); larger targets raise.

    Raises
    ------
    NonConvergenceError
    """
    settings = settings or DEFAULT_SETTINGS
    dtype = working_dtype(f_mcpt0, gamma)
    if f_mcpt0 == mach_to_f_mcpt0(1.0, gamma):
        return dtype(1)

    def f(m):
        return mach_to_f_mcpt0(m, gamma) - f_mcpt0

    def f_prime(m):
        return der_mach_to_f_mcpt0(m, gamma)

    x0 = SUPERSONIC_GUESS if supersonic else SUBSONIC_GUESS
    return _solve_on_branch(f, f_prime, x0, _branch_limits(f, supersonic),
                            dtype, settings)

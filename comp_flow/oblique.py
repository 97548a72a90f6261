"""Weak oblique-shock relations.

β is the wave angle and θ the flow deflection, both measured from the
upstream flow direction, in radians. The post-shock ratios are the normal
shock relations applied to the upstream normal Mach number M1·sin β.
Anderson MCF Section 4.3; NACA 1135 Eqs. 128-148.

Only the weak branch is returned. When no attached weak shock exists
(θ beyond the detachment angle) the wave angle, and every ratio derived
from it, is NaN.
"""

import warnings

import numpy as np

from comp_flow.config import DEFAULT_SETTINGS
from comp_flow.isentropic import mach_to_mach_angle
from comp_flow.normal import (
    normal_a2_a1,
    normal_p02_p01,
    normal_p2_p1,
    normal_rho2_rho1,
    normal_t2_t1,
)
from comp_flow.solvers import NonConvergenceError, secant, working_dtype


def oblique_theta(mach, gamma, beta):
    """Deflection angle θ for wave angle β (the θ-β-M relation).

    Anderson MCF Eq. 4.17:
        tan θ = 2 cot β · (M²sin²β - 1) / (M²(γ + cos 2β) + 2)
    """
    return np.arctan(2 / np.tan(beta) * (mach**2 * np.sin(beta) ** 2 - 1)
                     / (mach**2 * (gamma + np.cos(2 * beta)) + 2))


def oblique_beta_max(mach, gamma):
    """Wave angle at the detachment condition, where θ peaks.

        sin²β = [(γ+1)/4 · M² - 1
                 + √((γ+1)(1 + (γ-1)/2 · M² + (γ+1)/16 · M⁴))] / (γM²)

    Weak shocks lie in (μ, β_max], strong shocks above it.
    """
    m2 = mach**2
    return np.arcsin(np.sqrt(
        ((gamma + 1) / 4 * m2 - 1
         + np.sqrt((gamma + 1) * (1 + (gamma - 1) / 2 * m2
                                  + (gamma + 1) / 16 * m2**2)))
        / (gamma * m2)))


def oblique_theta_max(mach, gamma):
    """Detachment (maximum) deflection angle for an attached shock."""
    return oblique_theta(mach, gamma, oblique_beta_max(mach, gamma))


def oblique_beta(mach, gamma, theta, settings=None):
    """Wave angle β of the weak oblique shock turning the flow through θ.

    The θ-β-M relation is solved with the secant method, seeded at β_max.
    A root outside (0, β_max] belongs to the strong branch (or is a
    spurious negative or periodic root), and a seed from which the secant
    iteration does not converge is no better, so in both cases the seed is
    lowered by ``settings.oblique_step`` and the solve repeated, at most
    ``settings.oblique_max_retries`` times.

    Returns
    -------
    float : β [radians], or NaN (with a RuntimeWarning) once the retries
        run out, as happens for θ > θ_max.
    """
    settings = settings or DEFAULT_SETTINGS
    dtype = working_dtype(mach, gamma, theta)
    if theta == 0:
        return dtype(mach_to_mach_angle(mach))

    beta_max = oblique_beta_max(mach, gamma)
    tan_theta = np.tan(theta)

    def f(beta):
        return (tan_theta
                - 2 / np.tan(beta) * (mach**2 * np.sin(beta) ** 2 - 1)
                / (mach**2 * (gamma + np.cos(2 * beta)) + 2))

    x0 = float(beta_max)
    tol = settings.tolerance(dtype)
    residual_tol = np.sqrt(tol)
    with np.errstate(divide='ignore', invalid='ignore'):
        for _ in range(settings.oblique_max_retries + 1):
            try:
                beta = secant(f, x0, tol=tol,
                              max_iterations=settings.secant_max_iterations)
            except NonConvergenceError:
                beta = np.nan
            # The sign change of f across the cot β pole at β = 0 can pass
            # for a root; the residual tells them apart.
            if 0 < beta <= beta_max and abs(f(beta)) < residual_tol:
                return dtype(beta)
            x0 -= settings.oblique_step

    warnings.warn(
        f"No weak oblique shock found for M = {mach}, θ = {theta} after "
        f"{settings.oblique_max_retries} retries (detached shock?)",
        RuntimeWarning)
    return dtype(np.nan)


def oblique_mach2(mach, gamma, theta, settings=None):
    """Downstream Mach number M2 behind the weak oblique shock.

        M2² = (1 + (γ-1)/2 · M1²) / (γM1²sin²β - (γ-1)/2)
              + M1²cos²β / (1 + (γ-1)/2 · M1²sin²β)
    """
    beta = oblique_beta(mach, gamma, theta, settings)
    return np.sqrt(
        (1 + (gamma - 1) / 2 * mach**2)
        / (gamma * mach**2 * np.sin(beta) ** 2 - (gamma - 1) / 2)
        + mach**2 * np.cos(beta) ** 2
        / (1 + (gamma - 1) / 2 * mach**2 * np.sin(beta) ** 2))


def oblique_p02_p01(mach, gamma, theta, settings=None):
    """Total pressure ratio P02/P01 across the weak oblique shock."""
    beta = oblique_beta(mach, gamma, theta, settings)
    return normal_p02_p01(mach * np.sin(beta), gamma)


def oblique_p2_p1(mach, gamma, theta, settings=None):
    """Static pressure ratio P2/P1 across the weak oblique shock."""
    beta = oblique_beta(mach, gamma, theta, settings)
    return normal_p2_p1(mach * np.sin(beta), gamma)


def oblique_rho2_rho1(mach, gamma, theta, settings=None):
    """Density ratio ρ2/ρ1 across the weak oblique shock."""
    beta = oblique_beta(mach, gamma, theta, settings)
    return normal_rho2_rho1(mach * np.sin(beta), gamma)


def oblique_t2_t1(mach, gamma, theta, settings=None):
    """Static temperature ratio T2/T1 across the weak oblique shock."""
    beta = oblique_beta(mach, gamma, theta, settings)
    return normal_t2_t1(mach * np.sin(beta), gamma)


def oblique_a2_a1(mach, gamma, theta, settings=None):
    """Speed of sound ratio a2/a1 across the weak oblique shock."""
    beta = oblique_beta(mach, gamma, theta, settings)
    return normal_a2_a1(mach * np.sin(beta), gamma)

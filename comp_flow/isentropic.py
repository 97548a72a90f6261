"""Isentropic, Prandtl-Meyer and mass-flow relations for calorically perfect gas.

Every function cites its published source:
- Anderson, *Modern Compressible Flow* (MCF), 3rd ed., 2003
- NACA 1135, "Equations, Tables, and Charts for Compressible Flow", 1953

All functions take scalar Mach number and ratio of specific heats and keep
the precision of their inputs (numpy.float32 in, numpy.float32 out).
Nothing is validated: M < 1 in `mach_to_pm_angle` or γ <= 1 anywhere
yields NaN or Inf.
"""

import numpy as np


# ---------------------------------------------------------------------------
# Stagnation ratios (Anderson MCF Ch. 3, NACA 1135 Eqs. 43-45)
# ---------------------------------------------------------------------------

def mach_to_t_t0(mach, gamma):
    """T/T0 = (1 + (γ-1)/2 · M²)^(-1).

    Anderson MCF Eq. 3.28; NACA 1135 Eq. 43.
    """
    return (1 + 0.5 * (gamma - 1) * mach**2) ** -1


def mach_to_p_p0(mach, gamma):
    """P/P0 = (1 + (γ-1)/2 · M²)^(γ/(1-γ)).

    Anderson MCF Eq. 3.30; NACA 1135 Eq. 44.
    """
    return (1 + 0.5 * (gamma - 1) * mach**2) ** (gamma / (1 - gamma))


def mach_to_rho_rho0(mach, gamma):
    """ρ/ρ0 = (1 + (γ-1)/2 · M²)^(1/(1-γ)).

    Anderson MCF Eq. 3.31; NACA 1135 Eq. 45.
    """
    return (1 + 0.5 * (gamma - 1) * mach**2) ** (1 / (1 - gamma))


def mach_to_t0_t(mach, gamma):
    """T0/T = 1 + (γ-1)/2 · M²."""
    return 1 + 0.5 * (gamma - 1) * mach**2


def mach_to_p0_p(mach, gamma):
    """P0/P = (1 + (γ-1)/2 · M²)^(γ/(γ-1))."""
    return mach_to_t0_t(mach, gamma) ** (gamma / (gamma - 1))


def mach_to_rho0_rho(mach, gamma):
    """ρ0/ρ = (1 + (γ-1)/2 · M²)^(1/(γ-1))."""
    return mach_to_t0_t(mach, gamma) ** (1 / (gamma - 1))


def mach_to_a_ac(mach, gamma):
    """A/A* from the isentropic area-Mach relation.

    Anderson MCF Eq. 5.20; NACA 1135 Eq. 80:
        A/A* = (1/M) · [(1 + (γ-1)/2 · M²) / ((γ+1)/2)]^((γ+1)/(2(γ-1)))

    Unique minimum of 1 at M = 1; two Mach numbers share every A/A* > 1.
    """
    half = 0.5
    return (1 / mach
            * ((1 + half * (gamma - 1) * mach**2) / (half * (gamma + 1)))
            ** (half * (gamma + 1) / (gamma - 1)))


# ---------------------------------------------------------------------------
# Waves (Anderson MCF Eqs. 9.1, 4.44; NACA 1135 Eq. 171)
# ---------------------------------------------------------------------------

def mach_to_pm_angle(mach, gamma):
    """Prandtl-Meyer angle ν(M) [radians].

    Anderson MCF Eq. 4.44:
        ν = √((γ+1)/(γ-1)) · arctan(√((γ-1)/(γ+1)·(M²-1))) - arctan(√(M²-1))

    Zero at M = 1, monotonically increasing above it, NaN below it.
    """
    msq_m1 = mach**2 - 1
    return (np.sqrt((gamma + 1) / (gamma - 1))
            * np.arctan(np.sqrt((gamma - 1) / (gamma + 1) * msq_m1))
            - np.arctan(np.sqrt(msq_m1)))


def mach_to_mach_angle(mach):
    """Mach angle μ = arcsin(1/M) [radians].

    Anderson MCF Eq. 4.1; NACA 1135.
    """
    return np.arcsin(1 / mach)


# ---------------------------------------------------------------------------
# Velocity and mass-flow functions, non-dimensionalised by c_p·T0
# ---------------------------------------------------------------------------

def mach_to_v_cpt0(mach, gamma):
    """Normalised velocity V/√(c_p·T0) = √(γ-1) · M / √(1 + (γ-1)/2 · M²).

    Tends to √2 as M → ∞ (the maximum, or escape, velocity).
    """
    return np.sqrt(gamma - 1) * mach / np.sqrt(1 + 0.5 * (gamma - 1) * mach**2)


def mach_to_mcpt0_ap0(mach, gamma):
    """Stagnation mass-flow function ṁ·√(c_p·T0) / (A·P0).

        γ/√(γ-1) · M · (1 + (γ-1)/2 · M²)^(-(γ+1)/(2(γ-1)))

    Maximum at M = 1 (choked flow), so it is two-valued like A/A*.
    """
    half = 0.5
    return (gamma / np.sqrt(gamma - 1) * mach
            * (1 + half * (gamma - 1) * mach**2)
            ** (-half * (gamma + 1) / (gamma - 1)))


def mach_to_mcpt0_ap(mach, gamma):
    """Static mass-flow function ṁ·√(c_p·T0) / (A·P).

        γ/√(γ-1) · M · √(1 + (γ-1)/2 · M²)

    Monotonically increasing in M.
    """
    return (gamma / np.sqrt(gamma - 1) * mach
            * np.sqrt(1 + 0.5 * (gamma - 1) * mach**2))


def mach_to_f_mcpt0(mach, gamma):
    """Impulse function F / (ṁ·√(c_p·T0)) with F = P·A·(1 + γM²).

        √(γ-1)/γ · (1 + γM²) / (M · √(1 + (γ-1)/2 · M²))

    Minimum at M = 1.
    """
    return (np.sqrt(gamma - 1) / gamma * (1 + gamma * mach**2)
            / (mach * np.sqrt(1 + 0.5 * (gamma - 1) * mach**2)))

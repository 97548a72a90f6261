"""Normal-shock jump conditions for calorically perfect gas.

State 1 is upstream of the shock, state 2 downstream; velocities in the
shock-stationary frame. Anderson MCF Section 3.6; NACA 1135 Eqs. 96-101.

Upstream Mach numbers below 1 are not rejected; every ratio is exactly the
identity at M = 1.
"""

import numpy as np


def normal_mach2(mach, gamma):
    """Downstream Mach number.

    Anderson MCF Eq. 3.51:
        M2² = (1 + (γ-1)/2 · M1²) / (γ·M1² - (γ-1)/2)
    """
    return np.sqrt((1 + (gamma - 1) / 2 * mach**2)
                   / (gamma * mach**2 - (gamma - 1) / 2))


def normal_p02_p01(mach, gamma):
    """Total pressure ratio P02/P01 (always <= 1 for M1 >= 1).

    NACA 1135 Eq. 99.
    """
    return 1 / (
        (2 * gamma / (gamma + 1) * mach**2 - (gamma - 1) / (gamma + 1))
        ** (1 / (gamma - 1))
        * (2 / (gamma + 1) / mach**2 + (gamma - 1) / (gamma + 1))
        ** (gamma / (gamma - 1))
    )


def normal_p2_p1(mach, gamma):
    """Static pressure ratio P2/P1 = 1 + 2γ/(γ+1) · (M1² - 1).

    Anderson MCF Eq. 3.57.
    """
    return 2 * gamma / (gamma + 1) * (mach**2 - 1) + 1


def normal_rho2_rho1(mach, gamma):
    """Density ratio ρ2/ρ1 = (γ+1)·M1² / ((γ-1)·M1² + 2).

    Anderson MCF Eq. 3.53.
    """
    return (gamma + 1) * mach**2 / ((gamma - 1) * mach**2 + 2)


def normal_t2_t1(mach, gamma):
    """Static temperature ratio T2/T1. Anderson MCF Eq. 3.59."""
    return ((2 + (gamma - 1) * mach**2) * (2 * gamma * mach**2 - (gamma - 1))
            / ((gamma + 1) ** 2 * mach**2))


def normal_a2_a1(mach, gamma):
    """Speed of sound ratio a2/a1 = √(T2/T1)."""
    return np.sqrt(normal_t2_t1(mach, gamma))

"""Analytic derivatives d(ratio)/dM of the isentropic and normal-shock relations.

These are the Jacobians handed to `comp_flow.solvers.newton` by the
inversion layer. Notation: u = 1 + (γ-1)/2 · M² (= T0/T).
"""

import numpy as np


def der_mach_to_t0_t(mach, gamma):
    """d(T0/T)/dM = (γ-1)·M."""
    return (gamma - 1) * mach


def der_mach_to_p0_p(mach, gamma):
    """d(P0/P)/dM = γ·M·u^(1/(γ-1))."""
    return gamma * mach * (1 + 0.5 * (gamma - 1) * mach**2) ** (1 / (gamma - 1))


def der_mach_to_rho0_rho(mach, gamma):
    """d(ρ0/ρ)/dM = M·u^((2-γ)/(γ-1))."""
    return mach * (1 + 0.5 * (gamma - 1) * mach**2) ** ((2 - gamma) / (gamma - 1))


def der_mach_to_a_ac(mach, gamma):
    """d(A/A*)/dM = (2u/(γ+1))^((γ+1)/(2(γ-1))) · ((γ+1)/(2u) - 1/M²).

    Zero at M = 1; tends to -∞ as M → 0.
    """
    half = 0.5
    msq = np.square(mach)
    t0_t = 1 + half * (gamma - 1) * msq
    with np.errstate(divide='ignore'):
        inv_msq = 1 / msq
    return ((2 / (gamma + 1) * t0_t) ** (half * (gamma + 1) / (gamma - 1))
            * (half * (gamma + 1) / t0_t - inv_msq))


def der_mach_to_v_cpt0(mach, gamma):
    """d(V/√(c_p·T0))/dM = √(γ-1) · u^(-3/2)."""
    return np.sqrt(gamma - 1) * np.sqrt(1 + 0.5 * (gamma - 1) * mach**2) ** -3


def der_mach_to_mcpt0_ap0(mach, gamma):
    """d/dM of ṁ√(c_p·T0)/(A·P0).

        γ/√(γ-1) · (1 - (γ+1)/2 · M²/u) · u^(-(γ+1)/(2(γ-1)))
    """
    half = 0.5
    t0_t = 1 + half * (gamma - 1) * mach**2
    return (gamma / np.sqrt(gamma - 1)
            * (1 - half * (gamma + 1) * mach**2 / t0_t)
            * t0_t ** (-half * (gamma + 1) / (gamma - 1)))


def der_mach_to_mcpt0_ap(mach, gamma):
    """d/dM of ṁ√(c_p·T0)/(A·P) = γ/√(γ-1) · (1 + (γ-1)·M²) / √u."""
    return (gamma / np.sqrt(gamma - 1) * (1 + (gamma - 1) * mach**2)
            / np.sqrt(1 + 0.5 * (gamma - 1) * mach**2))


def der_mach_to_f_mcpt0(mach, gamma):
    """d/dM of the impulse function F/(ṁ√(c_p·T0)).

        √(γ-1)/γ · (M² - 1)/M² · u^(-3/2)
    """
    return (np.sqrt(gamma - 1) / gamma * (mach**2 - 1) / mach**2
            * np.sqrt(1 + 0.5 * (gamma - 1) * mach**2) ** -3)


def der_normal_mach2(mach, gamma):
    """dM2/dM1 across a normal shock.

        -(γ+1)² · M1 / (√2 · √u · (γ(2M1² - 1) + 1)^(3/2))
    """
    half = 0.5
    t0_t = 1 + half * (gamma - 1) * mach**2
    a = (gamma + 1) ** 2 * mach * np.sqrt(half)
    c = gamma * (2 * mach**2 - 1) + 1
    return -a / np.sqrt(t0_t) * np.sqrt(c) ** -3


def der_normal_p02_p01(mach, gamma):
    """d(P02/P01)/dM1 across a normal shock; zero at M1 = 1."""
    half = 0.5
    t0_t = 1 + half * (gamma - 1) * mach**2
    a = gamma * mach * (mach**2 - 1) ** 2 / t0_t**2
    b = (gamma + 1) * mach**2 / t0_t * half
    c = 2 * gamma / (gamma + 1) * mach**2 - (gamma - 1) / (gamma + 1)
    return -a * b ** (1 / (gamma - 1)) * c ** (-gamma / (gamma - 1))

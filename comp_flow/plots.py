"""Charts of the compressible-flow relations.

All plot functions return (fig, ax) tuples for composability.
"""

import numpy as np
import matplotlib.pyplot as plt

from comp_flow.isentropic import (
    mach_to_a_ac,
    mach_to_mach_angle,
    mach_to_p_p0,
    mach_to_rho_rho0,
    mach_to_t_t0,
)
from comp_flow.oblique import oblique_beta_max, oblique_theta, oblique_theta_max


def plot_theta_beta_mach(machs, gamma=1.4, n_points=200, ax=None,
                         title="θ-β-M Diagram"):
    """Deflection angle against wave angle for several upstream Mach numbers.

    Each curve runs from the Mach angle (θ = 0) to β = 90°. The detachment
    point (β_max, θ_max) is marked, separating weak shocks (left) from
    strong shocks (right).

    Parameters
    ----------
    machs : sequence of float
        Upstream Mach numbers (> 1).
    gamma : float
    n_points : int
        Samples per curve.
    ax : matplotlib Axes or None
        Existing axes to plot on.
    title : str

    Returns
    -------
    fig, ax
    """
    if ax is None:
        fig, ax = plt.subplots(1, 1, figsize=(8, 6))
    else:
        fig = ax.figure

    colors = plt.cm.tab10.colors
    for i, mach in enumerate(machs):
        color = colors[i % len(colors)]
        beta = np.linspace(mach_to_mach_angle(mach), np.pi / 2, n_points)
        theta = np.array([oblique_theta(mach, gamma, b) for b in beta])
        ax.plot(np.degrees(theta), np.degrees(beta), '-', color=color,
                linewidth=1.5, label=f"M = {mach:g}")
        ax.plot(np.degrees(oblique_theta_max(mach, gamma)),
                np.degrees(oblique_beta_max(mach, gamma)), 'o', color=color)

    ax.set_xlabel("θ [deg]")
    ax.set_ylabel("β [deg]")
    ax.set_title(title)
    ax.set_xlim(left=0)
    ax.grid(True, alpha=0.3)
    ax.legend()
    fig.tight_layout()
    return fig, ax


def plot_isentropic(gamma=1.4, mach_max=5.0, n_points=300, ax=None,
                    title="Isentropic Flow Ratios"):
    """P/P0, T/T0, ρ/ρ0 and A/A* against Mach number.

    The area ratio goes on a secondary log-scale axis.

    Returns
    -------
    fig, (ax, ax_area)
    """
    if ax is None:
        fig, ax = plt.subplots(1, 1, figsize=(8, 5))
    else:
        fig = ax.figure

    mach = np.linspace(0.05, mach_max, n_points)
    ax.plot(mach, mach_to_p_p0(mach, gamma), label="P/P0")
    ax.plot(mach, mach_to_t_t0(mach, gamma), label="T/T0")
    ax.plot(mach, mach_to_rho_rho0(mach, gamma), label="ρ/ρ0")
    ax.set_xlabel("M")
    ax.set_ylabel("stagnation ratio")
    ax.set_ylim(0, 1.05)

    ax_area = ax.twinx()
    ax_area.semilogy(mach, mach_to_a_ac(mach, gamma), 'k--', label="A/A*")
    ax_area.set_ylabel("A/A*")

    lines = ax.get_lines() + ax_area.get_lines()
    ax.legend(lines, [line.get_label() for line in lines], loc='upper right')
    ax.axvline(1.0, color='k', linewidth=0.5, linestyle=':')
    ax.set_title(f"{title} (γ = {gamma:g})")
    fig.tight_layout()
    return fig, (ax, ax_area)

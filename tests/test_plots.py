"""Tests for comp_flow.plots — chart smoke tests."""

import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import pytest

from comp_flow.oblique import oblique_beta_max, oblique_theta_max
from comp_flow.plots import plot_isentropic, plot_theta_beta_mach


class TestThetaBetaMach:

    def test_runs(self):
        """One curve and one detachment marker per Mach number."""
        fig, ax = plot_theta_beta_mach([1.5, 2.0, 3.0])
        assert fig is not None
        assert len(ax.get_lines()) == 6
        plt.close(fig)

    def test_detachment_marker(self, gamma_air):
        fig, ax = plot_theta_beta_mach([2.0], gamma=gamma_air)
        marker = ax.get_lines()[1]
        assert marker.get_xdata()[0] == pytest.approx(
            np.degrees(oblique_theta_max(2.0, gamma_air)))
        assert marker.get_ydata()[0] == pytest.approx(
            np.degrees(oblique_beta_max(2.0, gamma_air)))
        plt.close(fig)

    def test_curve_spans_wave_angles(self):
        fig, ax = plot_theta_beta_mach([2.0], n_points=50)
        beta = ax.get_lines()[0].get_ydata()
        assert len(beta) == 50
        assert beta[0] == pytest.approx(30.0)
        assert beta[-1] == pytest.approx(90.0)
        plt.close(fig)

    def test_existing_axes(self):
        fig, ax = plt.subplots()
        fig2, ax2 = plot_theta_beta_mach([2.0], ax=ax)
        assert ax2 is ax
        assert fig2 is fig
        plt.close(fig)


class TestIsentropicChart:

    def test_runs(self):
        fig, (ax, ax_area) = plot_isentropic()
        assert len(ax.get_lines()) == 4  # three ratios and the sonic line
        assert len(ax_area.get_lines()) == 1
        assert ax_area.get_yscale() == 'log'
        plt.close(fig)

    def test_exhaust_gas(self, gamma_exhaust):
        fig, (ax, _) = plot_isentropic(gamma=gamma_exhaust, mach_max=3.0)
        assert "1.2" in ax.get_title()
        plt.close(fig)

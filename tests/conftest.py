"""Shared fixtures for comp_flow tests."""

import pytest


@pytest.fixture
def gamma_air():
    """Standard gamma for air."""
    return 1.4


@pytest.fixture
def gamma_exhaust():
    """Ratio of specific heats of hot combustion products."""
    return 1.2


@pytest.fixture(params=[1.1, 1.2, 1.4, 1.67])
def gamma(request):
    """Range of ratios of specific heats, near-isothermal to monatomic."""
    return request.param

"""Pytest configuration and shared fixtures for mott_mc tests."""

import numpy as np
import pytest

from mott_mc.core.elements import NuclideTable
from mott_mc.physics.angular_grid import load_angular_grid
from mott_mc.physics.mott_coefficients import MottCoefficientTable
from mott_mc.physics.mott_cross_section import ScreeningMottCrossSection


class SequenceRNG:
    """Uniform source replaying a fixed list of values."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def random(self):
        value = self.values[self.calls]
        self.calls += 1
        return value


def unity_fit_matrix():
    """Fit coefficients giving a Mott/Rutherford ratio of exactly 1."""
    matrix = np.zeros((5, 6))
    matrix[0, 0] = 1.0
    return matrix


@pytest.fixture
def grid():
    """Packaged angular grid."""
    return load_angular_grid()


@pytest.fixture
def nuclides():
    return NuclideTable()


@pytest.fixture
def empty_table():
    """Coefficient table without fits: McKinley-Feshbach everywhere."""
    return MottCoefficientTable()


@pytest.fixture
def unity_table():
    """Coefficient table with a unit ratio fit for silicon only."""
    return MottCoefficientTable({14: unity_fit_matrix()})


@pytest.fixture
def make_model(empty_table, grid):
    """Factory for initialised electron models."""
    def _make(coefficients=None, rng=None, seed=42, strict=False,
              cos_theta_limit=1.0, cos_theta_max=-1.0):
        model = ScreeningMottCrossSection(
            coefficients=coefficients if coefficients is not None else empty_table,
            grid=grid,
            rng=rng if rng is not None else np.random.default_rng(seed),
            strict=strict,
        )
        model.initialise('e-', cos_theta_limit=cos_theta_limit, cos_theta_max=cos_theta_max)
        return model
    return _make


@pytest.fixture
def silicon_model(make_model):
    """1 MeV electron on silicon with the total cross-section computed."""
    model = make_model()
    model.setup_kinematic(1.0, 14)
    model.nuclear_cross_section()
    return model

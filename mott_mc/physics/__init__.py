"""Physics module: angular grid, Mott coefficients, kinematics, cross-section."""

from mott_mc.physics.angular_grid import AngularGrid, load_angular_grid
from mott_mc.physics.kinematics import KinematicContext, setup_kinematic
from mott_mc.physics.mott_coefficients import MottCoefficientTable
from mott_mc.physics.mott_cross_section import (
    CrossSectionTable, ScreeningMottCrossSection, nuclear_cross_section,
)
from mott_mc.physics.direction import rotate_uz

__all__ = [
    "AngularGrid",
    "load_angular_grid",
    "KinematicContext",
    "setup_kinematic",
    "MottCoefficientTable",
    "CrossSectionTable",
    "ScreeningMottCrossSection",
    "nuclear_cross_section",
    "rotate_uz",
]

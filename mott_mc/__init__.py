"""
MOTT_MC: Screened Mott scattering for electron transport

Differential and total cross-sections for single elastic
electron-nucleus Coulomb scattering, with inverse-transform sampling of
the scattering angle, for use inside Monte Carlo transport codes.

Modules:
    core: Units and constants, particle definitions, nuclide masses
    physics: Angular grid, Mott coefficients, kinematics, cross-section
    config: YAML defaults
"""

__version__ = "0.1.0"
__author__ = "William Comaskey"

from mott_mc.core.particle import ParticleDefinition, ELECTRON, POSITRON
from mott_mc.core.elements import NuclideTable
from mott_mc.physics.mott_coefficients import (
    AnalyticFit, MottCoefficientTable, NO_FIT_AVAILABLE,
)
from mott_mc.physics.mott_cross_section import (
    NO_SCATTER_ANGLE, CrossSectionTable, ScreeningMottCrossSection,
)

__all__ = [
    "ParticleDefinition",
    "ELECTRON",
    "POSITRON",
    "NuclideTable",
    "AnalyticFit",
    "MottCoefficientTable",
    "NO_FIT_AVAILABLE",
    "NO_SCATTER_ANGLE",
    "CrossSectionTable",
    "ScreeningMottCrossSection",
]

"""
Units and physical constants.

Internal unit system:
    energy: MeV
    length: cm
    area:   cm² (cross-sections)

All constants are taken from CODATA via scipy.constants and converted
once at import time.
"""

import numpy as np
from scipy import constants as _codata

# Units
MeV = 1.0
keV = 1.0e-3 * MeV
eV = 1.0e-6 * MeV
GeV = 1.0e3 * MeV

cm = 1.0
mm = 0.1 * cm
m = 100.0 * cm
fermi = 1.0e-13 * cm

cm2 = cm * cm
barn = 1.0e-24 * cm2

pi = np.pi
twopi = 2.0 * np.pi


def _codata_value(name: str) -> float:
    return _codata.physical_constants[name][0]


fine_structure_const = _codata_value('fine-structure constant')

# Rest energies [MeV]
electron_mass_c2 = _codata_value('electron mass energy equivalent in MeV') * MeV
proton_mass_c2 = _codata_value('proton mass energy equivalent in MeV') * MeV
neutron_mass_c2 = _codata_value('neutron mass energy equivalent in MeV') * MeV
amu_c2 = _codata_value('atomic mass constant energy equivalent in MeV') * MeV

# Lengths [cm]
classic_electr_radius = _codata_value('classical electron radius') * m
Bohr_radius = _codata_value('Bohr radius') * m

# ħc [MeV cm]
hbarc = _codata_value('reduced Planck constant times c in MeV fm') * MeV * fermi
hbarc_squared = hbarc * hbarc

# e² in Gaussian units expressed as m_e c² r_e [MeV cm]
elm_coupling = electron_mass_c2 * classic_electr_radius

"""Tests for core modules: constants, particles, nuclides."""

import numpy as np
import pytest

from mott_mc.core import constants
from mott_mc.core.elements import (
    LIGHT_NUCLEI, MAX_TABULATED_Z, NuclideTable, binding_energy, stability_line_mass_number,
)
from mott_mc.core.particle import (
    ELECTRON, POSITRON, ParticleDefinition, get_particle_definition,
)


class TestConstants:
    """Units and CODATA constants."""

    def test_electron_mass(self):
        assert constants.electron_mass_c2 == pytest.approx(0.51099895, rel=1e-7)

    def test_hbarc_in_mev_cm(self):
        assert constants.hbarc == pytest.approx(197.3269804e-13, rel=1e-7)
        assert constants.hbarc_squared == pytest.approx(constants.hbarc ** 2)

    def test_lengths_in_cm(self):
        assert constants.classic_electr_radius == pytest.approx(2.8179403e-13, rel=1e-6)
        assert constants.Bohr_radius == pytest.approx(0.529177e-8, rel=1e-5)

    def test_elm_coupling(self):
        # e² = αħc
        assert constants.elm_coupling == pytest.approx(
            constants.fine_structure_const * constants.hbarc, rel=1e-8)

    def test_barn(self):
        assert constants.barn == 1.0e-24


class TestParticle:
    """Particle definitions and name lookup."""

    def test_electron_properties(self):
        assert ELECTRON.mass == constants.electron_mass_c2
        assert ELECTRON.spin == 0.5
        assert ELECTRON.charge == -1.0

    def test_positron_differs_only_in_charge(self):
        assert POSITRON.mass == ELECTRON.mass
        assert POSITRON.charge == +1.0
        assert POSITRON != ELECTRON

    @pytest.mark.parametrize("name, expected", [
        ('e-', ELECTRON), ('electron', ELECTRON), (' e- ', ELECTRON),
        ('e+', POSITRON), ('positron', POSITRON),
    ])
    def test_lookup_by_name(self, name, expected):
        assert get_particle_definition(name) is expected

    def test_definition_passes_through(self):
        custom = ParticleDefinition('mu-', 105.658, 0.5, -1.0)
        assert get_particle_definition(custom) is custom

    def test_unknown_name_raises(self):
        with pytest.raises(ValueError, match="Unknown particle"):
            get_particle_definition('graviton')

    def test_equality_and_hash(self):
        a = ParticleDefinition('x', 1.0, 0.0, 0.0)
        b = ParticleDefinition('x', 1.0, 0.0, 0.0)
        assert a == b
        assert hash(a) == hash(b)
        assert 'x' in repr(a)


class TestNuclideTable:
    """Atomic and nuclear masses."""

    @pytest.mark.parametrize("z, mass", [
        (1, 1.008), (6, 12.011), (14, 28.085), (29, 63.546), (79, 196.966569), (92, 238.02891),
    ])
    def test_standard_atomic_weights(self, nuclides, z, mass):
        assert nuclides.atomic_mass_amu(z) == pytest.approx(mass)

    def test_symbols(self, nuclides):
        assert nuclides.symbol(14) == 'Si'
        assert nuclides.symbol(118) == 'Og'
        assert nuclides.symbol(0) == ''

    def test_non_positive_z_gives_zero_mass(self, nuclides):
        assert nuclides.atomic_mass_amu(0) == 0.0
        assert nuclides.atomic_mass_amu(-3) == 0.0
        assert nuclides.nuclear_mass(0, 0) == 0.0

    def test_superheavy_follow_stability_line(self, nuclides):
        masses = [nuclides.atomic_mass_amu(z) for z in range(MAX_TABULATED_Z + 1, 131)]
        assert np.all(np.diff(masses) > 0)
        assert masses[0] > 2.0 * (MAX_TABULATED_Z + 1)

    def test_stability_line_solution(self):
        a = stability_line_mass_number(50)
        assert a / (1.98 + 0.0155 * a ** (2.0 / 3.0)) == pytest.approx(50.0, rel=1e-9)

    def test_light_nuclei_are_measured(self, nuclides):
        assert nuclides.nuclear_mass(1, 1) == constants.proton_mass_c2
        assert nuclides.nuclear_mass(4, 2) == LIGHT_NUCLEI[(4, 2)]

    def test_silicon_28_nuclear_mass(self, nuclides):
        # AME: 26053.19 MeV
        assert nuclides.nuclear_mass(28, 14) == pytest.approx(26053.19, rel=5e-4)

    def test_lead_208_binding_energy(self):
        # Measured: 1636.4 MeV
        assert binding_energy(208, 82) == pytest.approx(1636.4, rel=0.01)

    def test_arguments_truncated(self, nuclides):
        assert nuclides.nuclear_mass(28.9, 14.7) == nuclides.nuclear_mass(28, 14)
        assert nuclides.atomic_mass_amu(14.99) == nuclides.atomic_mass_amu(14)

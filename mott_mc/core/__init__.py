"""Core module: units, constants, particles and nuclides."""

from mott_mc.core.particle import ParticleDefinition, get_particle_definition
from mott_mc.core.elements import NuclideTable

__all__ = ["ParticleDefinition", "get_particle_definition", "NuclideTable"]

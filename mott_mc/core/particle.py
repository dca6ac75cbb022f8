"""
Incident particle definitions.

Only the properties the Mott cross-section needs are carried: rest
energy, spin and charge.
"""

from typing import Union

from mott_mc.core.constants import electron_mass_c2


class ParticleDefinition:
    """Static properties of an incident particle species."""

    def __init__(self, name: str, mass: float, spin: float, charge: float):
        """
        Parameters:
            name: Particle name (e.g. 'e-')
            mass: Rest energy [MeV]
            spin: Spin [hbar]
            charge: Charge [e]
        """
        self.name = name
        self.mass = mass
        self.spin = spin
        self.charge = charge

    def __eq__(self, other) -> bool:
        if not isinstance(other, ParticleDefinition):
            return NotImplemented
        return (self.name, self.mass, self.spin, self.charge) == \
               (other.name, other.mass, other.spin, other.charge)

    def __hash__(self) -> int:
        return hash((self.name, self.mass, self.spin, self.charge))

    def __repr__(self) -> str:
        return (f"ParticleDefinition(name={self.name!r}, mass={self.mass:.6g} MeV, "
                f"spin={self.spin}, charge={self.charge:+g})")


ELECTRON = ParticleDefinition('e-', electron_mass_c2, 0.5, -1.0)
POSITRON = ParticleDefinition('e+', electron_mass_c2, 0.5, +1.0)

PARTICLES = {
    'e-': ELECTRON,
    'electron': ELECTRON,
    'e+': POSITRON,
    'positron': POSITRON,
}


def get_particle_definition(particle: Union[str, ParticleDefinition]) -> ParticleDefinition:
    """
    Resolve a particle name or pass a definition through unchanged.

    Examples:
        'e-' or 'electron' → ELECTRON
        'e+' or 'positron' → POSITRON
    """
    if isinstance(particle, ParticleDefinition):
        return particle

    key = str(particle).strip()
    if key not in PARTICLES:
        raise ValueError(f"Unknown particle '{particle}'. "
                         f"Available: {list(PARTICLES.keys())}")
    return PARTICLES[key]

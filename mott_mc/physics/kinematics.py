"""
Two-body kinematics and Moliere screening for electron-nucleus scattering.

The lab-frame problem (projectile of mass m on a nucleus of mass M at
rest) is mapped onto an equivalent one-body problem with the relativistic
reduced mass

    Ecm    = sqrt(m² + M² + 2 Etot M)
    mu_rel = m M / Ecm
    p_cm   = p_lab M / Ecm

so that a single screened-Rutherford formula covers all mass ratios.

References:
    - A.P. Martynenko, R.N. Faustov, Teor. Mat. Fiz. 64, 179 (1985)
    - G. Moliere, Z. Naturforsch. A 2, 133 (1947); A 3, 78 (1948)
"""

from dataclasses import dataclass

import numpy as np

from mott_mc.core.constants import Bohr_radius, fine_structure_const, hbarc_squared, pi
from mott_mc.core.particle import ParticleDefinition
from mott_mc.physics.mott_coefficients import MottFit

THOMAS_FERMI_FACTOR = 0.88534


@dataclass(frozen=True, eq=False)
class KinematicContext:
    """
    Everything the cross-section needs for one (particle, energy, target).

    Attributes:
        particle: Incident particle definition
        mass: Projectile rest energy m [MeV]
        spin: Projectile spin
        tkin_lab: Lab kinetic energy [MeV]
        mom_lab2: Lab momentum squared [MeV²]
        inv_beta_lab2: 1/β² in the lab
        target_z: Target charge Z as supplied (not truncated)
        target_a: Atomic mass of element int(Z) [amu]
        target_mass: Nuclear mass M [MeV]
        mu_rel: Relativistic reduced mass [MeV]
        mom2: CM momentum squared [MeV²]
        inv_beta2: 1/β² of the relative motion
        tkin: Kinetic energy of the reduced particle [MeV]
        beta: Velocity of the relative motion
        gamma: Lorentz factor of the relative motion
        screening_as: Screening coefficient As (dimensionless)
        cos_tet_min_nuc: Lower integration bound (cosine of minimum angle)
        cos_tet_max_nuc: Upper integration bound (cosine of maximum angle)
        mott_fit: AnalyticFit or NO_FIT_AVAILABLE for int(Z)
    """

    particle: ParticleDefinition
    mass: float
    spin: float
    tkin_lab: float
    mom_lab2: float
    inv_beta_lab2: float
    target_z: float
    target_a: float
    target_mass: float
    mu_rel: float
    mom2: float
    inv_beta2: float
    tkin: float
    beta: float
    gamma: float
    screening_as: float
    cos_tet_min_nuc: float
    cos_tet_max_nuc: float
    mott_fit: MottFit

    @property
    def etot_lab(self) -> float:
        """Total lab energy of the projectile [MeV]."""
        return self.tkin_lab + self.mass

    @property
    def is_at_rest(self) -> bool:
        """True when there is no relative motion (T <= 0 or non-finite momentum)."""
        return not (np.isfinite(self.mom2) and self.mom2 > 0.0)

    @property
    def is_degenerate(self) -> bool:
        """True when the cosine window is empty or inverted, or nothing moves."""
        return self.cos_tet_max_nuc >= self.cos_tet_min_nuc or self.is_at_rest


def screening_coefficient(target_z: float, mom2: float, inv_beta2: float) -> float:
    """
    Moliere screening coefficient As.

    Thomas-Fermi screening length aU = 0.88534 a0 / Z^(1/3);
        As = 0.25 (ħc)² / (aU² p²) · (1.13 + 3.76 Z² α² / β²)

    Parameters:
        target_z: Target atomic number
        mom2: Momentum squared of the relative motion [MeV²]
        inv_beta2: 1/β² of the relative motion

    Returns:
        As (dimensionless, > 0 for Z > 0)
    """
    alpha2 = fine_structure_const * fine_structure_const
    a_u = THOMAS_FERMI_FACTOR * Bohr_radius / np.cbrt(target_z)
    factor = 1.13 + 3.76 * target_z * target_z * inv_beta2 * alpha2
    return 0.25 * hbarc_squared / (a_u * a_u * mom2) * factor


def screening_angle(screening_as: float) -> float:
    """Characteristic screening angle 2·asin(sqrt(As)), capped at π."""
    if screening_as >= 1.0:
        return pi
    angle = 2.0 * np.arcsin(np.sqrt(screening_as))
    return min(angle, pi)


def setup_kinematic(particle: ParticleDefinition, kinetic_energy: float, z: float,
                    cos_theta_min: float, cos_theta_max: float,
                    nuclides, coefficients) -> KinematicContext:
    """
    Build the kinematic context for one scattering configuration.

    Parameters:
        particle: Incident particle
        kinetic_energy: Lab kinetic energy [MeV]
        z: Target atomic number; int(z) selects the nuclide and fit
        cos_theta_min: Lower integration bound (cosine)
        cos_theta_max: Upper integration bound (cosine)
        nuclides: Provider with atomic_mass_amu(z) and nuclear_mass(a, z)
        coefficients: Provider with get(z) → AnalyticFit | NO_FIT_AVAILABLE

    Returns:
        KinematicContext
    """
    # Truncate, never round: weighted natural-abundance Z is often non-integer
    iz = int(z)
    target_a = nuclides.atomic_mass_amu(iz)
    target_mass = nuclides.nuclear_mass(int(target_a), iz)
    mott_fit = coefficients.get(iz)

    mass = np.float64(particle.mass)

    # T = 0 gives inf/NaN here and a degenerate context, not an exception
    with np.errstate(divide='ignore', invalid='ignore'):
        return _build_context(particle, mass, np.float64(kinetic_energy), z, target_a,
                              target_mass, mott_fit, cos_theta_min, cos_theta_max)


def _build_context(particle, mass, tkin_lab, z, target_a, target_mass, mott_fit,
                   cos_theta_min, cos_theta_max) -> KinematicContext:
    # Lab frame
    mom_lab2 = tkin_lab * (tkin_lab + 2.0 * mass)
    inv_beta_lab2 = 1.0 + mass * mass / mom_lab2
    etot = tkin_lab + mass
    ptot = np.sqrt(mom_lab2)

    # Relative system
    ecm = np.sqrt(mass * mass + target_mass * target_mass + 2.0 * etot * target_mass)
    mu_rel = mass * target_mass / ecm
    mom_cm = ptot * target_mass / ecm

    mom2 = mom_cm * mom_cm
    inv_beta2 = 1.0 + mu_rel * mu_rel / mom2
    tkin = mom_cm * np.sqrt(inv_beta2) - mu_rel
    beta2 = 1.0 / inv_beta2
    beta = np.sqrt(beta2)
    gamma = np.sqrt(1.0 / (1.0 - beta2))

    return KinematicContext(
        particle=particle,
        mass=float(mass),
        spin=particle.spin,
        tkin_lab=float(tkin_lab),
        mom_lab2=float(mom_lab2),
        inv_beta_lab2=float(inv_beta_lab2),
        target_z=float(z),
        target_a=float(target_a),
        target_mass=float(target_mass),
        mu_rel=float(mu_rel),
        mom2=float(mom2),
        inv_beta2=float(inv_beta2),
        tkin=float(tkin),
        beta=float(beta),
        gamma=float(gamma),
        screening_as=float(screening_coefficient(z, mom2, inv_beta2)),
        cos_tet_min_nuc=float(cos_theta_min),
        cos_tet_max_nuc=float(cos_theta_max),
        mott_fit=mott_fit,
    )

"""
Screened Mott cross-section for single elastic electron-nucleus scattering.

Differential cross-section (relative system, reduced mass mu_rel):

    dσ/dΩ = e⁴ (Z / (mu_rel γ β²))² / (2As + 2 sin²(θ/2))²  ·  F²(θ) · R(θ)

where As is the Moliere screening coefficient, F² the nuclear form factor
and R the Mott/Rutherford ratio (analytic fit for Z ≤ 92, McKinley-Feshbach
otherwise). The total cross-section is a Riemann sum over a fixed
logarithmic angular grid; angles are sampled by inverse transform on the
same grid.

Suitable for high energy electrons and light target materials.

References:
    - M.J. Boschini et al., "Non Ionizing Energy Loss induced by Electrons
      in the Space Environment", Proc. 13th ICPPAT (2011), arXiv:1111.4042v4
    - W.A. McKinley, H. Feshbach, Phys. Rev. 74, 1759 (1948)
    - G. Moliere, Z. Naturforsch. A 2, 133 (1947)
    - A.V. Butkevich et al., Nucl. Instr. Meth. A 488, 282 (2002)
"""

import logging
from dataclasses import dataclass, replace
from functools import cached_property
from typing import NamedTuple, Optional, Union

import numpy as np
import numba

from mott_mc.config import get_default
from mott_mc.core.constants import (
    cm, elm_coupling, fine_structure_const, hbarc_squared, pi, twopi,
)
from mott_mc.core.elements import NuclideTable
from mott_mc.core.errors import (
    CrossSectionNotComputedError, KinematicsNotSetError,
    ModelNotInitialisedError, StaleCrossSectionError,
)
from mott_mc.core.particle import ParticleDefinition, get_particle_definition
from mott_mc.physics.angular_grid import AngularGrid, load_angular_grid
from mott_mc.physics.direction import polar_to_direction
from mott_mc.physics.kinematics import KinematicContext, screening_angle, setup_kinematic
from mott_mc.physics.mott_coefficients import (
    N_BETA_POWERS, N_POWERS, AnalyticFit, MottCoefficientTable, load_coefficient_table,
)

logger = logging.getLogger(__name__)

# Returned when inverse-CDF sampling finds no bin (degenerate table or
# accumulated CDF never exceeding the random number)
NO_SCATTER_ANGLE = 0.0

# β expansion point of the Mott ratio fit
BETA_SHIFT = 0.7181228

# Nuclear radius RN = 1.27e-13 A^0.27 cm
NUCLEAR_RADIUS_COEFF = 1.27e-13 * cm
NUCLEAR_RADIUS_EXPONENT = 0.27

_ZERO_COEFFICIENTS = np.zeros((N_POWERS, N_BETA_POWERS), dtype=np.float64)


# ============================================================================
# Numba kernels
# ============================================================================

@numba.njit(fastmath=True, cache=True)
def form_factor2_exp_hof(angle: float, tkin_lab: float, mass: float,
                         target_mass: float, target_a: float) -> float:
    """
    Squared exponential nuclear form factor.

    Parameters:
        angle: Scattering angle [rad]
        tkin_lab: Projectile lab kinetic energy [MeV]
        mass: Projectile rest energy [MeV]
        target_mass: Nuclear mass [MeV]
        target_a: Target atomic mass [amu]

    Returns:
        FN² with FN = 1/(1 + RN² q²/12)²
    """
    etot = tkin_lab + mass
    tmax = 2.0 * target_mass * tkin_lab * (tkin_lab + 2.0 * mass) / \
        (mass * mass + target_mass * target_mass + 2.0 * target_mass * etot)

    sin_half = np.sin(angle * 0.5)
    t = tmax * sin_half * sin_half

    q2 = t * (t + 2.0 * target_mass) / hbarc_squared  # 1/cm²
    rn = NUCLEAR_RADIUS_COEFF * target_a ** NUCLEAR_RADIUS_EXPONENT
    xn = rn * rn * q2

    den = 1.0 + xn / 12.0
    fn = 1.0 / (den * den)
    return fn * fn


@numba.njit(fastmath=True, cache=True)
def mcf_correction(angle: float, inv_beta2: float, beta: float, target_z: float) -> float:
    """
    McKinley-Feshbach Mott/Rutherford ratio.

        R = 1 - β² s² + Z α β π s (1 - s),   s = sin(θ/2)
    """
    beta2 = 1.0 / inv_beta2
    sin_half = np.sin(angle / 2.0)
    sin2_half = sin_half * sin_half
    return 1.0 - beta2 * sin2_half + \
        target_z * fine_structure_const * beta * pi * sin_half * (1.0 - sin_half)


@numba.njit(fastmath=True, cache=True)
def ratio_mott_rutherford(angle: float, beta: float, coeffb: np.ndarray) -> float:
    """
    Analytic fit of the Mott/Rutherford ratio.

        a_j = Σ_k b[j][k] (β - 0.7181228)^k
        R   = Σ_j a_j (sqrt(1 - cos θ))^j
    """
    fcost = np.sqrt(1.0 - np.cos(angle))
    beta0 = beta - BETA_SHIFT

    ratio = 0.0
    for j in range(N_POWERS):
        a_j = 0.0
        for k in range(N_BETA_POWERS):
            a_j += coeffb[j, k] * beta0 ** k
        ratio += a_j * fcost ** j
    return ratio


@numba.njit(fastmath=True, cache=True)
def _nuclear_cross_section_kernel(tet, dangle, tkin_lab, mass, target_mass, target_a,
                                  target_z, mu_rel, gamma, beta, inv_beta2,
                                  screening_as, use_fit, coeffb):
    """Differential cross-section on the grid and its solid-angle integral."""
    n = len(tet)
    cross = np.zeros(n)
    total = 0.0

    e4 = elm_coupling * elm_coupling
    fatt = target_z / (mu_rel * gamma * beta * beta)

    for i in range(n):
        f2 = form_factor2_exp_hof(tet[i], tkin_lab, mass, target_mass, target_a)

        if use_fit:
            r = ratio_mott_rutherford(tet[i], beta, coeffb)
        else:
            r = mcf_correction(tet[i], inv_beta2, beta, target_z)

        sin_half = np.sin(tet[i] * 0.5)
        den = 2.0 * screening_as + 2.0 * sin_half * sin_half
        sigma = e4 * fatt * fatt / (den * den)

        cross[i] = f2 * r * sigma
        total += twopi * np.sin(tet[i]) * cross[i] * dangle[i]

    return cross, total


@numba.njit(fastmath=True, cache=True)
def _angle_shape_kernel(angles, tkin_lab, mass, target_mass, target_a, target_z,
                        beta, inv_beta2, screening_as, use_fit, coeffb):
    """2π sinθ R F² / den², the unnormalised angular density."""
    n = len(angles)
    shape = np.empty(n)

    for i in range(n):
        if use_fit:
            r = ratio_mott_rutherford(angles[i], beta, coeffb)
        else:
            r = mcf_correction(angles[i], inv_beta2, beta, target_z)

        sin_half = np.sin(angles[i] * 0.5)
        den = 2.0 * screening_as + 2.0 * sin_half * sin_half

        shape[i] = twopi * np.sin(angles[i]) * r * \
            form_factor2_exp_hof(angles[i], tkin_lab, mass, target_mass, target_a) / \
            (den * den)

    return shape


@numba.njit(cache=True)
def _find_cdf_bin(cdf: np.ndarray, r: float) -> int:
    """First bin i with cdf[i-1] <= r < cdf[i], or -1."""
    area = 0.0
    for i in range(len(cdf)):
        y = cdf[i]
        if r >= area and r < y:
            return i
        area = y
    return -1


# ============================================================================
# Functional API
# ============================================================================

def _fit_arguments(context: KinematicContext):
    if isinstance(context.mott_fit, AnalyticFit):
        return True, context.mott_fit.coefficients
    return False, _ZERO_COEFFICIENTS


def recoil_energy(context: KinematicContext, cos_theta: float) -> float:
    """
    Kinetic energy given to the target nucleus [MeV].

        Trec = (1 - cosθ) M (Etot² - m²) / (m² + M² + 2 M Etot)
    """
    mass = context.mass
    target_mass = context.target_mass
    etot = context.etot_lab
    return (1.0 - cos_theta) * target_mass * (etot * etot - mass * mass) / \
        (mass * mass + target_mass * target_mass + 2.0 * target_mass * etot)


def angle_density(context: KinematicContext, total_cross: float,
                  angle: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """
    Normalised angular probability density (per radian, Jacobian included).

    Parameters:
        context: Kinematic context supplying the shape
        total_cross: Total cross-section used for normalisation [cm²]
        angle: Scattering angle(s) [rad]

    Returns:
        Density with the same shape as angle
    """
    angles = np.atleast_1d(np.asarray(angle, dtype=np.float64))

    if context.is_at_rest:
        density = np.full(angles.shape, np.nan)
        return float(density[0]) if np.ndim(angle) == 0 else density

    use_fit, coeffb = _fit_arguments(context)

    shape = _angle_shape_kernel(
        angles, context.tkin_lab, context.mass, context.target_mass, context.target_a,
        context.target_z, context.beta, context.inv_beta2, context.screening_as,
        use_fit, coeffb,
    )

    fatt = elm_coupling * context.target_z / (context.mu_rel * context.gamma * context.beta ** 2)
    with np.errstate(divide='ignore', invalid='ignore'):
        density = shape / (np.float64(total_cross) / (fatt * fatt))

    if np.ndim(angle) == 0:
        return float(density[0])
    return density


class ScatteringSample(NamedTuple):
    """One sampled elastic scattering."""
    theta: float              # polar angle [rad]
    phi: float                # azimuth [rad]
    direction: np.ndarray     # unit vector about +z
    recoil_energy: float      # nucleus kinetic energy [MeV]


@dataclass(frozen=True, eq=False)
class CrossSectionTable:
    """
    Total cross-section computed for one kinematic context.

    Distribution and sampling live here so they always use the total that
    belongs to the context they evaluate.

    Attributes:
        context: Kinematic context the table was computed for
        grid: Angular grid
        cross: dσ/dΩ at each grid point [cm²/sr]
        total: Integrated cross-section [cm²]
    """

    context: KinematicContext
    grid: AngularGrid
    cross: np.ndarray
    total: float

    @property
    def is_degenerate(self) -> bool:
        """True when nothing can be sampled (empty window or zero total)."""
        return not (np.isfinite(self.total) and self.total > 0.0)

    def angle_distribution(self, angle: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
        """Normalised angular density at angle(s) [1/rad]."""
        return angle_density(self.context, self.total, angle)

    @cached_property
    def cdf(self) -> np.ndarray:
        """Cumulative probability at the upper edge of each grid bin."""
        density = self.angle_distribution(self.grid.tet)
        return np.cumsum(density * self.grid.dangle)

    def sample_angle(self, rng) -> float:
        """
        Sample a polar scattering angle by inverse transform on the grid.

        The hit bin is jittered uniformly across its width. Returns
        NO_SCATTER_ANGLE if the table is degenerate or the CDF never
        exceeds the random number.
        """
        r = rng.random()

        if self.is_degenerate:
            return NO_SCATTER_ANGLE

        i = _find_cdf_bin(self.cdf, r)
        if i < 0:
            logger.debug("CDF ended at %.12g below r=%.12g; no scattering", self.cdf[-1], r)
            return NO_SCATTER_ANGLE

        return float(self.grid.angle[i] + rng.random() * self.grid.dangle[i])

    def sample(self, rng) -> ScatteringSample:
        """
        Sample polar angle, azimuth, direction about +z and recoil energy.

        Uses the signed cos θ, so θ > π/2 scatters backwards instead of
        being folded forward by cos θ = sqrt(1 - sin²θ).
        """
        theta = self.sample_angle(rng)
        phi = twopi * rng.random()
        direction = polar_to_direction(theta, phi)
        t_rec = recoil_energy(self.context, float(np.cos(theta)))
        return ScatteringSample(theta, phi, direction, t_rec)

    def rebased(self, context: KinematicContext) -> 'CrossSectionTable':
        """Same total and grid values attached to another context."""
        return replace(self, context=context)


def nuclear_cross_section(context: KinematicContext,
                          grid: Optional[AngularGrid] = None) -> CrossSectionTable:
    """
    Integrate the differential cross-section over the angular grid.

    Returns a table with total 0 when the cosine window is degenerate.
    """
    if grid is None:
        grid = load_angular_grid()

    if context.is_degenerate:
        return CrossSectionTable(context, grid, np.zeros(grid.dim), 0.0)

    use_fit, coeffb = _fit_arguments(context)
    cross, total = _nuclear_cross_section_kernel(
        grid.tet, grid.dangle, context.tkin_lab, context.mass, context.target_mass,
        context.target_a, context.target_z, context.mu_rel, context.gamma, context.beta,
        context.inv_beta2, context.screening_as, use_fit, coeffb,
    )
    cross.flags.writeable = False
    return CrossSectionTable(context, grid, cross, float(total))


# ============================================================================
# Model
# ============================================================================

class ScreeningMottCrossSection:
    """
    High-level interface for the screened Mott cross-section.

    Usage:
        model = ScreeningMottCrossSection()
        model.initialise('e-', cos_theta_limit=1.0)
        model.setup_kinematic(1.0, 14)           # 1 MeV on silicon
        sigma = model.nuclear_cross_section()    # cm²
        theta = model.get_scattering_angle()
        direction = model.get_new_direction()
        t_rec = model.recoil_energy

    Calls must follow initialise → setup_kinematic → nuclear_cross_section →
    sampling for each step; an instance must not be shared between threads.
    Out-of-order calls log a warning and return degenerate results
    (0 cross-section, NO_SCATTER_ANGLE, non-finite density); with
    strict=True they raise MottCrossSectionError subclasses instead.

    No Mott fit coefficient table ships with the package. Without one
    (data.mott_coefficients or the coefficients argument) every element
    uses the McKinley-Feshbach correction and the analytic fit branch is
    never taken; pass MottCoefficientTable.from_file(...) to enable it.
    """

    def __init__(self, coefficients=None, nuclides=None,
                 grid: Optional[AngularGrid] = None, rng=None,
                 strict: Optional[bool] = None):
        """
        Initialize the model.

        Parameters:
            coefficients: Mott fit provider (default: table from configuration)
            nuclides: Nuclide provider (default: NuclideTable)
            grid: Angular grid (default: packaged grid)
            rng: Uniform random source with random() in [0, 1)
                 (default: numpy Generator seeded from configuration)
            strict: Raise StaleCrossSectionError instead of reusing a total
                    computed for an older context (default from configuration)
        """
        if coefficients is None:
            coefficients = load_coefficient_table(get_default('data.mott_coefficients'))
        if nuclides is None:
            nuclides = NuclideTable()
        if grid is None:
            grid = load_angular_grid(get_default('data.angular_grid'))
        if rng is None:
            rng = np.random.default_rng(get_default('random.seed'))
        if strict is None:
            strict = bool(get_default('model.strict', False))

        self.coefficients = coefficients
        self.nuclides = nuclides
        self.grid = grid
        self.rng = rng
        self.strict = strict

        self.particle: Optional[ParticleDefinition] = None
        self.cos_theta_min = 1.0
        self.cos_theta_max = -1.0

        self._context: Optional[KinematicContext] = None
        self._table: Optional[CrossSectionTable] = None
        self._rebased_table: Optional[CrossSectionTable] = None
        self.recoil_energy = 0.0

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    def initialise(self, particle: Union[str, ParticleDefinition, None] = None,
                   cos_theta_limit: Optional[float] = None,
                   cos_theta_max: Optional[float] = None):
        """
        Bind the incident particle and the integration window.

        Parameters:
            particle: Particle definition or name (default from configuration)
            cos_theta_limit: Cosine of the minimum counted scattering angle
            cos_theta_max: Cosine of the maximum angle (default -1, i.e. π)
        """
        if particle is None:
            particle = get_default('model.particle', 'e-')
        if cos_theta_limit is None:
            cos_theta_limit = get_default('model.cos_theta_limit', 1.0)
        if cos_theta_max is None:
            cos_theta_max = get_default('model.cos_theta_max', -1.0)

        self.particle = get_particle_definition(particle)
        self.cos_theta_min = float(cos_theta_limit)
        self.cos_theta_max = float(cos_theta_max)

        self._context = None
        self._table = None
        self._rebased_table = None
        self.recoil_energy = 0.0

    def _misuse(self, error_cls, message: str):
        """Raise error_cls in strict mode, otherwise log message as a warning."""
        if self.strict:
            raise error_cls(message)
        logger.warning(message)

    def setup_kinematic(self, kinetic_energy: float, z: float) -> KinematicContext:
        """
        Recompute kinematics and screening for a new energy / target.

        Parameters:
            kinetic_energy: Lab kinetic energy of the projectile [MeV]
            z: Target atomic number (truncated for nuclide and fit lookup)

        Returns:
            The new KinematicContext
        """
        if self.particle is None:
            self._misuse(ModelNotInitialisedError,
                         "initialise() was not called before setup_kinematic(); "
                         "using the configured defaults")
            self.initialise()

        self._context = setup_kinematic(
            self.particle, kinetic_energy, z, self.cos_theta_min, self.cos_theta_max,
            self.nuclides, self.coefficients,
        )
        self._rebased_table = None
        return self._context

    @property
    def kinematics(self) -> KinematicContext:
        """Current kinematic context."""
        if self._context is None:
            raise KinematicsNotSetError("setup_kinematic() has not been called")
        return self._context

    def _current_context(self) -> Optional[KinematicContext]:
        if self._context is None:
            self._misuse(KinematicsNotSetError, "setup_kinematic() has not been called")
        return self._context

    @property
    def cross_section_table(self) -> Optional[CrossSectionTable]:
        """Last computed table (may belong to an older context)."""
        return self._table

    # -inf until kinematics are set

    @property
    def tkin(self) -> float:
        return self._context.tkin if self._context is not None else -np.inf

    @property
    def mom2(self) -> float:
        return self._context.mom2 if self._context is not None else -np.inf

    @property
    def target_z(self) -> float:
        return self._context.target_z if self._context is not None else -np.inf

    @property
    def screening_coefficient(self) -> float:
        """Moliere screening coefficient As of the current context (0 until set)."""
        return self._context.screening_as if self._context is not None else 0.0

    @property
    def cross(self) -> np.ndarray:
        """dσ/dΩ on the grid for the current context (zeros until computed)."""
        if self._table is not None and self._table.context is self._context:
            return self._table.cross
        return np.zeros(self.grid.dim)

    @property
    def total_cross(self) -> float:
        """Last computed total cross-section [cm²]."""
        return self._table.total if self._table is not None else 0.0

    # ------------------------------------------------------------------
    # Physics
    # ------------------------------------------------------------------

    def get_screening_angle(self) -> float:
        """Characteristic screening angle [rad], at most π."""
        ctx = self._current_context()
        if ctx is None:
            return 0.0
        return screening_angle(ctx.screening_as)

    def form_factor2_exp_hof(self, angle: float) -> float:
        """Squared nuclear form factor at angle [rad]."""
        ctx = self._current_context()
        if ctx is None:
            return 0.0
        return form_factor2_exp_hof(angle, ctx.tkin_lab, ctx.mass, ctx.target_mass, ctx.target_a)

    def mcf_correction(self, angle: float) -> float:
        """McKinley-Feshbach Mott/Rutherford ratio at angle [rad]."""
        ctx = self._current_context()
        if ctx is None:
            return 0.0
        return mcf_correction(angle, ctx.inv_beta2, ctx.beta, ctx.target_z)

    def ratio_mott_rutherford(self, angle: float) -> float:
        """
        Fitted Mott/Rutherford ratio at angle [rad].

        Evaluates to 0 for elements without a fit (all-zero coefficients).
        """
        ctx = self._current_context()
        if ctx is None:
            return 0.0
        _, coeffb = _fit_arguments(ctx)
        return ratio_mott_rutherford(angle, ctx.beta, coeffb)

    def mott_ratio(self, angle: float) -> float:
        """Mott/Rutherford ratio from whichever branch applies to the target."""
        ctx = self._current_context()
        if ctx is None:
            return 0.0
        if isinstance(ctx.mott_fit, AnalyticFit):
            return self.ratio_mott_rutherford(angle)
        return self.mcf_correction(angle)

    def nuclear_cross_section(self) -> float:
        """
        Total elastic cross-section for the current context [cm²].

        Zero when the cosine window is empty or inverted, when the projectile
        has no kinetic energy, or (non-strict) before setup_kinematic().
        """
        ctx = self._current_context()
        if ctx is None:
            return 0.0
        self._table = nuclear_cross_section(ctx, self.grid)
        self._rebased_table = None
        return self._table.total

    def _active_table(self) -> Optional[CrossSectionTable]:
        context = self._current_context()
        if context is None:
            return None

        if self._table is not None and self._table.context is context:
            return self._table
        if self._rebased_table is not None and self._rebased_table.context is context:
            return self._rebased_table

        if self._table is None:
            self._misuse(CrossSectionNotComputedError,
                         "nuclear_cross_section() was not called; "
                         "using a zero total cross-section")
            self._rebased_table = CrossSectionTable(context, self.grid, np.zeros(self.grid.dim), 0.0)
        else:
            self._misuse(StaleCrossSectionError,
                         f"Reusing total cross-section {self._table.total:.6g} cm² from an older "
                         f"kinematic context (T={context.tkin_lab:.6g} MeV, Z={context.target_z:g})")
            self._rebased_table = self._table.rebased(context)
        return self._rebased_table

    def angle_distribution(self, angle: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
        """Normalised angular density at angle(s) [1/rad]."""
        table = self._active_table()
        if table is None:
            density = np.full(np.shape(angle), np.nan)
            return float(density) if np.ndim(angle) == 0 else density
        return table.angle_distribution(angle)

    def get_scattering_angle(self) -> float:
        """Sample a polar scattering angle [rad] (NO_SCATTER_ANGLE on failure)."""
        table = self._active_table()
        if table is None:
            return NO_SCATTER_ANGLE
        return table.sample_angle(self.rng)

    def get_new_direction(self) -> np.ndarray:
        """
        Sample a scattered direction about +z and set recoil_energy.

        Returns:
            Direction unit vector [x, y, z]; rotate it onto the incident
            direction with rotate_uz.
        """
        table = self._active_table()
        if table is None:
            self.recoil_energy = 0.0
            return polar_to_direction(NO_SCATTER_ANGLE, 0.0)

        sample = table.sample(self.rng)
        self.recoil_energy = sample.recoil_energy
        return sample.direction


# ============================================================================
# Example Usage
# ============================================================================

if __name__ == "__main__":
    from mott_mc.core.constants import barn, MeV

    print("\n" + "="*70)
    print("Screened Mott Cross-Section Test")
    print("="*70)

    model = ScreeningMottCrossSection(coefficients=MottCoefficientTable(),
                                      rng=np.random.default_rng(12345))
    model.initialise('e-', cos_theta_limit=1.0)

    for Z in [6, 14, 29, 79]:
        for energy in [0.1, 1.0, 10.0, 100.0]:
            model.setup_kinematic(energy * MeV, Z)
            sigma = model.nuclear_cross_section()
            print(f"  Z={Z:3d}  T={energy:7.1f} MeV:  sigma = {sigma / barn:12.5g} barn  "
                  f"screening angle = {model.get_screening_angle():.3e} rad")

    model.setup_kinematic(1.0 * MeV, 14)
    model.nuclear_cross_section()
    angles = np.array([model.get_scattering_angle() for _ in range(10000)])
    print(f"\n1 MeV e- on Si, 10000 samples:")
    print(f"  median angle: {np.median(angles):.3e} rad")
    print(f"  mean angle:   {np.mean(angles):.3e} rad")

    direction = model.get_new_direction()
    print(f"  direction: {direction}, recoil: {model.recoil_energy / MeV * 1e6:.3f} eV")

    print("\n" + "="*70)
    print("Test complete!")
    print("="*70 + "\n")

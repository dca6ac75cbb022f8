"""
Screened Mott Scattering - Angular Distribution Example

Computes total elastic cross-sections for electrons on several targets,
samples scattering angles by inverse transform and compares the sampled
histogram with the analytic angular density.

This example validates:
    - Total cross-section magnitude and energy dependence
    - Normalisation of the angular density
    - Sampling against the density

Expected results for 1 MeV e- on silicon:
    - Total cross-section: ~5e5 barn
    - Median scattering angle: a few times the screening angle (~8e-3 rad)
"""

import numpy as np
import matplotlib.pyplot as plt
from pathlib import Path
import sys

from tqdm import tqdm

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from mott_mc.core.constants import MeV, barn
from mott_mc.core.elements import NuclideTable
from mott_mc.logging_config import get_logger
from mott_mc.physics.mott_cross_section import NO_SCATTER_ANGLE, ScreeningMottCrossSection

logger = get_logger(__name__)


def cross_section_table(targets, energies, seed: int = 12345):
    """
    Total cross-section for each target and energy.

    Parameters:
        targets: Atomic numbers
        energies: Electron kinetic energies [MeV]
        seed: Random seed (sampling is not used here)

    Returns:
        sigma: Array [n_targets, n_energies] of cross-sections [barn]
    """
    model = ScreeningMottCrossSection(rng=np.random.default_rng(seed))
    model.initialise('e-', cos_theta_limit=1.0)

    sigma = np.zeros((len(targets), len(energies)))

    print(f"\n{'='*70}")
    print(f"Total Elastic Cross-Sections [barn]")
    print(f"{'='*70}")
    print("  Z   " + "".join(f"{e:>12.3g}" for e in energies) + "   (MeV)")

    for i, z in enumerate(targets):
        for j, energy in enumerate(energies):
            model.setup_kinematic(energy * MeV, z)
            sigma[i, j] = model.nuclear_cross_section() / barn
        print(f"  {NuclideTable.symbol(z):3s} " + "".join(f"{s:12.4g}" for s in sigma[i]))

    print(f"{'='*70}\n")
    return sigma


def sample_angles(energy: float, z: int, n_samples: int = 100000, seed: int = 12345):
    """
    Sample scattering angles for one energy and target.

    Parameters:
        energy: Electron kinetic energy [MeV]
        z: Target atomic number
        n_samples: Number of samples
        seed: Random seed

    Returns:
        model, angles: Model left at this kinematic point, sampled angles [rad]
    """
    model = ScreeningMottCrossSection(rng=np.random.default_rng(seed))
    model.initialise('e-')
    model.setup_kinematic(energy * MeV, z)
    sigma = model.nuclear_cross_section()

    logger.info("Sampling %d angles: T=%.3g MeV, Z=%d, sigma=%.4g barn",
                n_samples, energy, z, sigma / barn)

    angles = np.empty(n_samples)
    for k in tqdm(range(n_samples), desc="Sampling", unit="angle"):
        angles[k] = model.get_scattering_angle()

    n_failed = np.count_nonzero(angles == NO_SCATTER_ANGLE)
    if n_failed:
        logger.warning("%d samples returned no scattering", n_failed)

    print(f"\n{'='*70}")
    print(f"Sampling Results: T = {energy} MeV, Z = {z}")
    print(f"{'='*70}")
    print(f"  Screening angle: {model.get_screening_angle():.3e} rad")
    print(f"  Median angle:    {np.median(angles):.3e} rad")
    print(f"  Mean angle:      {np.mean(angles):.3e} rad")
    print(f"  P(theta > 1 rad): {np.mean(angles > 1.0):.3e}")
    print(f"{'='*70}\n")

    return model, angles


def plot_angular_distribution(model, angles, save_path=None):
    """
    Compare the sampled histogram with the analytic density.

    Parameters:
        model: Model with the total cross-section computed
        angles: Sampled angles [rad]
        save_path: Path to save figure (optional)
    """
    grid = model.grid
    density = model.angle_distribution(grid.tet)

    edges = np.append(grid.angle, grid.angle[-1] + grid.dangle[-1])[::10]
    counts, edges = np.histogram(angles, bins=edges)
    hist = counts / (len(angles) * np.diff(edges))
    centres = np.sqrt(edges[:-1] * edges[1:])

    ctx = model.kinematics

    plt.figure(figsize=(10, 6))
    plt.loglog(grid.tet, density, 'b-', linewidth=2.5, label='Analytic density')
    plt.loglog(centres[hist > 0], hist[hist > 0], 'r.', markersize=6,
               label=f'Sampled ({len(angles):,})')
    plt.axvline(model.get_screening_angle(), color='g', linestyle=':', linewidth=1.5,
                alpha=0.7, label='Screening angle')

    plt.xlabel('Scattering angle [rad]', fontsize=14, fontweight='bold')
    plt.ylabel('Probability density [1/rad]', fontsize=14, fontweight='bold')
    plt.title(f'Screened Mott: e- @ {ctx.tkin_lab:g} MeV on Z={ctx.target_z:g}',
              fontsize=16, fontweight='bold')

    plt.grid(True, alpha=0.3, linestyle='--')
    plt.legend(fontsize=12, loc='lower left')
    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=300, bbox_inches='tight')
        print(f"Figure saved: {save_path}")

    return plt.gcf()


def plot_cross_sections(targets, energies, sigma, save_path=None):
    """Total cross-section versus energy for each target."""
    plt.figure(figsize=(10, 6))

    for i, z in enumerate(targets):
        plt.loglog(energies, sigma[i], 'o-', linewidth=2,
                   label=f'{NuclideTable.symbol(z)} (Z={z})')

    plt.xlabel('Electron kinetic energy [MeV]', fontsize=14, fontweight='bold')
    plt.ylabel('Total cross-section [barn]', fontsize=14, fontweight='bold')
    plt.title('Screened Mott Total Cross-Section', fontsize=16, fontweight='bold')
    plt.grid(True, alpha=0.3, linestyle='--')
    plt.legend(fontsize=11)
    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=300, bbox_inches='tight')
        print(f"Figure saved: {save_path}")

    return plt.gcf()


# ============================================================================
# Main Execution
# ============================================================================

if __name__ == "__main__":
    targets = [6, 14, 29, 79]
    energies = np.logspace(-1, 3, 9)

    # Example 1: Cross-section table
    sigma = cross_section_table(targets, energies)
    plot_cross_sections(targets, energies, sigma, save_path='mott_total_cross_section.png')
    plt.show()

    # Example 2: Angular distribution, 1 MeV e- on silicon
    model, angles = sample_angles(1.0, 14, n_samples=100000)
    plot_angular_distribution(model, angles, save_path='mott_angular_Si_1MeV.png')
    plt.show()

    # Example 3: Directions and recoil energies
    recoil = np.empty(10000)
    for k in range(len(recoil)):
        model.get_new_direction()
        recoil[k] = model.recoil_energy
    print(f"Mean recoil energy: {np.mean(recoil) / MeV * 1e6:.4g} eV")
    print(f"Max recoil energy:  {np.max(recoil) / MeV * 1e6:.4g} eV")

    print("\n" + "="*70)
    print("All examples complete!")
    print("="*70 + "\n")

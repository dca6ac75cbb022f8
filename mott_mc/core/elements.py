"""
Nuclide properties: atomic masses and nuclear masses.

Atomic masses are IUPAC standard atomic weights; for elements without a
stable isotope the mass number of the longest-lived isotope is used.
Nuclear masses come from measured values for the lightest nuclei and
from the semi-empirical (Weizsäcker) mass formula otherwise.

References:
    - IUPAC, Standard atomic weights of the elements 2021
    - C.F. von Weizsäcker, Z. Phys. 96, 431 (1935)
    - P.A. Seeger, Nucl. Phys. 25, 1 (1961) (beta-stability line)
"""

import numpy as np
from functools import lru_cache
from scipy.optimize import brentq

from mott_mc.core.constants import neutron_mass_c2, proton_mass_c2

# (symbol, standard atomic weight [amu]) indexed by Z - 1
ELEMENTS = (
    ('H', 1.008), ('He', 4.002602), ('Li', 6.94), ('Be', 9.0121831),
    ('B', 10.81), ('C', 12.011), ('N', 14.007), ('O', 15.999),
    ('F', 18.998403163), ('Ne', 20.1797), ('Na', 22.98976928), ('Mg', 24.305),
    ('Al', 26.9815385), ('Si', 28.085), ('P', 30.973761998), ('S', 32.06),
    ('Cl', 35.45), ('Ar', 39.948), ('K', 39.0983), ('Ca', 40.078),
    ('Sc', 44.955908), ('Ti', 47.867), ('V', 50.9415), ('Cr', 51.9961),
    ('Mn', 54.938044), ('Fe', 55.845), ('Co', 58.933194), ('Ni', 58.6934),
    ('Cu', 63.546), ('Zn', 65.38), ('Ga', 69.723), ('Ge', 72.630),
    ('As', 74.921595), ('Se', 78.971), ('Br', 79.904), ('Kr', 83.798),
    ('Rb', 85.4678), ('Sr', 87.62), ('Y', 88.90584), ('Zr', 91.224),
    ('Nb', 92.90637), ('Mo', 95.95), ('Tc', 98.0), ('Ru', 101.07),
    ('Rh', 102.90550), ('Pd', 106.42), ('Ag', 107.8682), ('Cd', 112.414),
    ('In', 114.818), ('Sn', 118.710), ('Sb', 121.760), ('Te', 127.60),
    ('I', 126.90447), ('Xe', 131.293), ('Cs', 132.90545196), ('Ba', 137.327),
    ('La', 138.90547), ('Ce', 140.116), ('Pr', 140.90766), ('Nd', 144.242),
    ('Pm', 145.0), ('Sm', 150.36), ('Eu', 151.964), ('Gd', 157.25),
    ('Tb', 158.92535), ('Dy', 162.500), ('Ho', 164.93033), ('Er', 167.259),
    ('Tm', 168.93422), ('Yb', 173.045), ('Lu', 174.9668), ('Hf', 178.49),
    ('Ta', 180.94788), ('W', 183.84), ('Re', 186.207), ('Os', 190.23),
    ('Ir', 192.217), ('Pt', 195.084), ('Au', 196.966569), ('Hg', 200.592),
    ('Tl', 204.38), ('Pb', 207.2), ('Bi', 208.98040), ('Po', 209.0),
    ('At', 210.0), ('Rn', 222.0), ('Fr', 223.0), ('Ra', 226.0),
    ('Ac', 227.0), ('Th', 232.0377), ('Pa', 231.03588), ('U', 238.02891),
    ('Np', 237.0), ('Pu', 244.0), ('Am', 243.0), ('Cm', 247.0),
    ('Bk', 247.0), ('Cf', 251.0), ('Es', 252.0), ('Fm', 257.0),
    ('Md', 258.0), ('No', 259.0), ('Lr', 266.0), ('Rf', 267.0),
    ('Db', 268.0), ('Sg', 269.0), ('Bh', 270.0), ('Hs', 269.0),
    ('Mt', 278.0), ('Ds', 281.0), ('Rg', 282.0), ('Cn', 285.0),
    ('Nh', 286.0), ('Fl', 289.0), ('Mc', 290.0), ('Lv', 293.0),
    ('Ts', 294.0), ('Og', 294.0),
)

MAX_TABULATED_Z = len(ELEMENTS)

# Measured nuclear masses [MeV] for (A, Z) where the mass formula is meaningless
LIGHT_NUCLEI = {
    (1, 0): neutron_mass_c2,
    (1, 1): proton_mass_c2,
    (2, 1): 1875.61294257,
    (3, 1): 2808.92113298,
    (3, 2): 2808.39160743,
    (4, 2): 3727.3794066,
}

# Weizsäcker coefficients [MeV]
A_VOLUME = 15.75
A_SURFACE = 17.8
A_COULOMB = 0.711
A_ASYMMETRY = 23.7
A_PAIRING = 11.18


def binding_energy(a: int, z: int) -> float:
    """
    Nuclear binding energy from the semi-empirical mass formula.

    Parameters:
        a: Mass number
        z: Atomic number

    Returns:
        Binding energy [MeV] (positive for bound nuclei)
    """
    n = a - z
    a13 = a ** (1.0 / 3.0)

    b = A_VOLUME * a \
        - A_SURFACE * a13 * a13 \
        - A_COULOMB * z * (z - 1) / a13 \
        - A_ASYMMETRY * (a - 2 * z) ** 2 / a

    if z % 2 == 0 and n % 2 == 0:
        b += A_PAIRING / np.sqrt(a)
    elif z % 2 == 1 and n % 2 == 1:
        b -= A_PAIRING / np.sqrt(a)

    return b


@lru_cache(maxsize=None)
def stability_line_mass_number(z: int) -> float:
    """
    Mass number on the beta-stability line for atomic number z.

    Solves Z = A / (1.98 + 0.0155 A^(2/3)) for A.
    """
    def residual(a):
        return a / (1.98 + 0.0155 * a ** (2.0 / 3.0)) - z

    return brentq(residual, float(z), 10.0 * z)


class NuclideTable:
    """
    Atomic and nuclear mass provider.

    Usage:
        nuclides = NuclideTable()
        A = nuclides.atomic_mass_amu(14)          # 28.085
        M = nuclides.nuclear_mass(int(A), 14)     # MeV
    """

    def atomic_mass_amu(self, z: int) -> float:
        """
        Mean atomic mass of element z [amu].

        Returns 0 for z < 1. Elements beyond the tabulated range are
        placed on the beta-stability line.
        """
        z = int(z)
        if z < 1:
            return 0.0
        if z <= MAX_TABULATED_Z:
            return ELEMENTS[z - 1][1]
        return stability_line_mass_number(z)

    def nuclear_mass(self, a: int, z: int) -> float:
        """
        Nuclear (bare nucleus) rest energy [MeV].

        Parameters:
            a: Mass number
            z: Atomic number

        Returns:
            Nuclear mass [MeV], 0 for a < 1
        """
        a = int(a)
        z = int(z)
        if a < 1:
            return 0.0
        if (a, z) in LIGHT_NUCLEI:
            return LIGHT_NUCLEI[(a, z)]

        return z * proton_mass_c2 + (a - z) * neutron_mass_c2 - binding_energy(a, z)

    @staticmethod
    def symbol(z: int) -> str:
        """Chemical symbol for element z ('' outside the tabulated range)."""
        z = int(z)
        if 1 <= z <= MAX_TABULATED_Z:
            return ELEMENTS[z - 1][0]
        return ''

"""
Z-dependent fit coefficients for the Mott/Rutherford cross-section ratio.

For each target Z ≤ 92 the ratio is fitted by a polynomial in
sqrt(1 - cos θ) whose coefficients are themselves degree-5 polynomials in
(β - 0.7181228); a 5×6 matrix per element.

The provider answers with an explicit tag:
    AnalyticFit(coefficients)  - fit available, use the polynomial
    NO_FIT_AVAILABLE           - use the McKinley-Feshbach approximation

Table file format (ASCII, '#' comments), one row per element:
    Z  b00 b01 b02 b03 b04 b05  b10 ... b45      (31 columns)

References:
    - M.J. Boschini et al., arXiv:1111.4042v4, par. 2.1, eq. (16)-(17)
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Union

import numpy as np

logger = logging.getLogger(__name__)

N_POWERS = 5        # powers of sqrt(1 - cos θ)
N_BETA_POWERS = 6   # powers of (β - shift)
MAX_FIT_Z = 92


class AnalyticFit:
    """Fit coefficients available for this element."""

    __slots__ = ('coefficients',)

    def __init__(self, coefficients: np.ndarray):
        coefficients = np.array(coefficients, dtype=np.float64)
        if coefficients.shape != (N_POWERS, N_BETA_POWERS):
            raise ValueError(f"Mott coefficients must have shape "
                             f"({N_POWERS}, {N_BETA_POWERS}), got {coefficients.shape}")
        coefficients.flags.writeable = False
        self.coefficients = coefficients

    def __repr__(self) -> str:
        return f"AnalyticFit(b00={self.coefficients[0, 0]:.6g})"


class NoFitAvailable:
    """No fit for this element; McKinley-Feshbach is used instead."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "NO_FIT_AVAILABLE"


NO_FIT_AVAILABLE = NoFitAvailable()

MottFit = Union[AnalyticFit, NoFitAvailable]


class MottCoefficientTable:
    """
    In-memory coefficient provider.

    Usage:
        table = MottCoefficientTable.from_file('MottCoefficients.dat')
        fit = table.get(14)
        if isinstance(fit, AnalyticFit):
            ...
    """

    def __init__(self, coefficients: Optional[Dict[int, np.ndarray]] = None):
        """
        Parameters:
            coefficients: Mapping Z → 5×6 matrix. Rows whose [0][0] entry is
                zero are treated as "no fit" (legacy sentinel).
        """
        self._fits: Dict[int, AnalyticFit] = {}

        for z, matrix in (coefficients or {}).items():
            z = int(z)
            if not 1 <= z <= MAX_FIT_Z:
                raise ValueError(f"Mott fit coefficients are defined for 1 <= Z <= "
                                 f"{MAX_FIT_Z}, got Z={z}")
            fit = AnalyticFit(matrix)
            if fit.coefficients[0, 0] != 0.0:
                self._fits[z] = fit

    def get(self, z: Union[int, float]) -> MottFit:
        """Fit for element int(z), or NO_FIT_AVAILABLE."""
        return self._fits.get(int(z), NO_FIT_AVAILABLE)

    def __contains__(self, z) -> bool:
        return int(z) in self._fits

    def __len__(self) -> int:
        return len(self._fits)

    def __repr__(self) -> str:
        return f"MottCoefficientTable(n_elements={len(self)})"

    @classmethod
    def from_file(cls, filename: Union[str, Path]) -> 'MottCoefficientTable':
        """
        Load a coefficient table.

        Tries the binary .npy sibling first, falls back to the ASCII table.
        """
        filename = Path(filename)
        npy_file = filename.with_suffix('.npy')

        if npy_file.exists():
            data = np.load(npy_file)
            source = npy_file
        elif filename.exists():
            data = np.loadtxt(filename, comments='#', ndmin=2)
            source = filename
        else:
            raise FileNotFoundError(f"Mott coefficient table not found: {filename}")

        n_cols = 1 + N_POWERS * N_BETA_POWERS
        if data.ndim != 2 or data.shape[1] != n_cols:
            raise ValueError(f"Mott coefficient table {source.name} must have "
                             f"{n_cols} columns, got shape {data.shape}")

        coefficients = {}
        for row in data:
            coefficients[int(row[0])] = row[1:].reshape(N_POWERS, N_BETA_POWERS)

        table = cls(coefficients)
        logger.info("Loaded Mott coefficients for %d elements from %s",
                    len(table), source.name)
        return table

    def save(self, filename: Union[str, Path]):
        """Write the table in ASCII format (readable by from_file)."""
        rows = [np.concatenate(([z], fit.coefficients.ravel()))
                for z, fit in sorted(self._fits.items())]
        data = np.array(rows).reshape(-1, 1 + N_POWERS * N_BETA_POWERS)
        np.savetxt(filename, data, fmt='%.10g',
                   header='Z  b[j][k] row-major (j: sqrt(1-cos) power, k: beta power)')


def load_coefficient_table(filename: Optional[Union[str, Path]] = None) -> MottCoefficientTable:
    """
    Coefficient table from filename; an empty table when filename is None.

    With an empty table every element falls back to McKinley-Feshbach.
    """
    if filename is None:
        logger.warning("No Mott coefficient table configured; "
                       "using the McKinley-Feshbach correction for all elements")
        return MottCoefficientTable()
    return MottCoefficientTable.from_file(filename)

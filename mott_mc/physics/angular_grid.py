"""
Fixed logarithmic angular grid used to integrate and sample the
screened Mott cross-section.

The grid is package data (mott_mc/data/mott_angular_grid.dat): 100 points
per decade from 1e-7 rad up to π. Three parallel columns:
    angle  - lower bin edge [rad]
    dangle - bin width [rad]
    tet    - angle at which the cross-section is evaluated [rad]
"""

import logging
from pathlib import Path
from typing import Optional, Union

import numpy as np

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent.parent / 'data'
DEFAULT_GRID_FILE = DATA_DIR / 'mott_angular_grid.dat'


class AngularGrid:
    """
    Immutable (angle, dangle, tet) grid.

    Parameters:
        angle: Lower bin edges [rad]
        dangle: Bin widths [rad]
        tet: Evaluation angles [rad]
    """

    def __init__(self, angle: np.ndarray, dangle: np.ndarray, tet: np.ndarray):
        angle = np.array(angle, dtype=np.float64)
        dangle = np.array(dangle, dtype=np.float64)
        tet = np.array(tet, dtype=np.float64)

        if not (angle.ndim == dangle.ndim == tet.ndim == 1):
            raise ValueError("Angular grid columns must be one-dimensional")
        if not (len(angle) == len(dangle) == len(tet)):
            raise ValueError(f"Angular grid columns differ in length: "
                             f"angle={len(angle)}, dangle={len(dangle)}, tet={len(tet)}")
        if len(angle) == 0:
            raise ValueError("Angular grid is empty")
        if np.any(np.diff(angle) <= 0) or np.any(np.diff(tet) <= 0):
            raise ValueError("Angular grid must be strictly increasing")
        if np.any(dangle <= 0):
            raise ValueError("Angular grid bin widths must be positive")

        for column in (angle, dangle, tet):
            column.flags.writeable = False

        self.angle = angle
        self.dangle = dangle
        self.tet = tet

    @property
    def dim(self) -> int:
        """Number of grid points."""
        return len(self.angle)

    def __len__(self) -> int:
        return self.dim

    def __repr__(self) -> str:
        return (f"AngularGrid(dim={self.dim}, "
                f"range=[{self.angle[0]:.3g}, {self.angle[-1] + self.dangle[-1]:.4g}] rad)")

    @classmethod
    def from_file(cls, filename: Union[str, Path]) -> 'AngularGrid':
        """
        Load a grid table.

        Tries the binary .npy sibling first, falls back to the ASCII table
        (three whitespace-separated columns, '#' comments).
        """
        filename = Path(filename)
        npy_file = filename.with_suffix('.npy')

        if npy_file.exists():
            data = np.load(npy_file)
            logger.debug("Loaded angular grid from %s", npy_file)
        elif filename.exists():
            data = np.loadtxt(filename, comments='#', ndmin=2)
            logger.debug("Loaded angular grid from %s", filename)
        else:
            raise FileNotFoundError(f"Angular grid file not found: {filename}")

        if data.ndim != 2 or data.shape[1] != 3:
            raise ValueError(f"Angular grid table {filename.name} must have 3 columns, "
                             f"got shape {data.shape}")

        return cls(data[:, 0], data[:, 1], data[:, 2])


_default_grid: Optional[AngularGrid] = None


def load_angular_grid(filename: Optional[Union[str, Path]] = None) -> AngularGrid:
    """
    Return the angular grid stored in filename, or the packaged default.

    The packaged grid is loaded once per process and shared.
    """
    global _default_grid

    if filename is not None:
        return AngularGrid.from_file(filename)

    if _default_grid is None:
        _default_grid = AngularGrid.from_file(DEFAULT_GRID_FILE)
        logger.info("Angular grid ready: %d points", _default_grid.dim)
    return _default_grid

"""
Direction helpers for single elastic scattering.

The cross-section samples (θ, φ) about the +z axis; rotate_uz maps such a
local direction into the lab frame of an arbitrary incident direction.
"""

import numpy as np
import numba


@numba.njit(fastmath=True, cache=True)
def polar_to_direction(theta: float, phi: float) -> np.ndarray:
    """
    Unit vector at polar angle theta and azimuth phi about +z.

    Parameters:
        theta: Polar angle [rad]
        phi: Azimuthal angle [rad]

    Returns:
        Direction unit vector [x, y, z]
    """
    sin_theta = np.sin(theta)

    result = np.empty(3, dtype=np.float64)
    result[0] = sin_theta * np.cos(phi)
    result[1] = sin_theta * np.sin(phi)
    result[2] = np.cos(theta)
    return result


@numba.njit(fastmath=True, cache=True)
def rotate_uz(local: np.ndarray, reference: np.ndarray) -> np.ndarray:
    """
    Rotate a direction given relative to +z into the frame where +z is
    the (unit) reference direction.

    Parameters:
        local: Direction sampled about the +z axis [x, y, z]
        reference: Incident direction unit vector [x, y, z]

    Returns:
        Direction in the lab frame [x, y, z]
    """
    u1, u2, u3 = reference[0], reference[1], reference[2]
    px, py, pz = local[0], local[1], local[2]

    result = np.empty(3, dtype=np.float64)
    up = u1 * u1 + u2 * u2

    if up > 0.0:
        up = np.sqrt(up)
        result[0] = (u1 * u3 * px - u2 * py) / up + u1 * pz
        result[1] = (u2 * u3 * px + u1 * py) / up + u2 * pz
        result[2] = -up * px + u3 * pz
    elif u3 < 0.0:
        # Reference along -z: rotation by π about y
        result[0] = -px
        result[1] = py
        result[2] = -pz
    else:
        result[0] = px
        result[1] = py
        result[2] = pz

    return result

"""
rotation_4d.py - Plane rotations in 4D space

A 4D rotation is built from turns in the six coordinate planes spanned by
pairs of the x, y, z, w axes (xy, xz, xw, yz, yw, zw). Each plane rotation
mixes only its own two coordinates and leaves the remaining pair untouched.

The composite rotation for one tick is always built in the order
XY, XZ, XW, YZ, YW, ZW. Matrix products don't commute, so changing the order
changes the motion.
"""

import numpy as np
from typing import Dict, Tuple

# Axis indices: x=0, y=1, z=2, w=3
PLANES: Dict[str, Tuple[int, int]] = {
    'xy': (0, 1),
    'xz': (0, 2),
    'xw': (0, 3),
    'yz': (1, 2),
    'yw': (1, 3),
    'zw': (2, 3),
}

# Composition order for the composite transform
PLANE_ORDER: Tuple[str, ...] = ('xy', 'xz', 'xw', 'yz', 'yw', 'zw')


def plane_rotation(a: int, b: int, angle: float) -> np.ndarray:
    """
    Rotation confined to the (a, b) coordinate plane.

    Identity everywhere except:
        [a, a] = cos θ    [a, b] = -sin θ
        [b, a] = sin θ    [b, b] = cos θ

    A positive angle turns axis a toward axis b.

    Args:
        a, b: Axis indices in {0, 1, 2, 3}, a != b
        angle: Rotation angle (radians)

    Returns:
        4x4 rotation matrix
    """
    c, s = np.cos(angle), np.sin(angle)
    R = np.eye(4)
    R[a, a] = c
    R[a, b] = -s
    R[b, a] = s
    R[b, b] = c
    return R


def rotation_matrix_4d(angle_xy: float = 0, angle_xz: float = 0, angle_xw: float = 0,
                       angle_yz: float = 0, angle_yw: float = 0, angle_zw: float = 0) -> np.ndarray:
    """
    Compose the six plane rotations into one 4x4 matrix.

    Args:
        angle_xy, angle_xz, angle_xw, angle_yz, angle_yw, angle_zw: Rotation angles (radians)

    Returns:
        R_xy @ R_xz @ R_xw @ R_yz @ R_yw @ R_zw
    """
    angles = (angle_xy, angle_xz, angle_xw, angle_yz, angle_yw, angle_zw)

    R = np.eye(4)
    for plane, angle in zip(PLANE_ORDER, angles):
        a, b = PLANES[plane]
        R = R @ plane_rotation(a, b, angle)
    return R


def plane_angles(speeds: Tuple[float, ...], elapsed: float,
                 multiplier: float = 1.0) -> Tuple[float, ...]:
    """Per-plane angle for one tick: speed * elapsed * multiplier, in PLANE_ORDER."""
    return tuple(speed * elapsed * multiplier for speed in speeds)


def rotate_points_4d(points_4d: np.ndarray, R: np.ndarray) -> np.ndarray:
    """
    Apply a 4x4 matrix to a single point (4,) or a batch of points (n, 4).

    Returns a new array; the input is not modified.
    """
    return points_4d @ R.T

#!/usr/bin/env python3
"""
4D to 3D Projection of the rotating hypersphere

Mathematical Background:
- Points on the hypersphere satisfy x² + y² + z² + w² = r²
- The projection divides x, y, z by a factor driven by w:

      factor = 1 / (1 + w / r)        (x, y, z, w) → (x, y, z) * factor

  w = 0 maps unchanged, w → r shrinks toward the origin by half, and
  w → -r blows up (the south pole is the singular point).

Singular points: when |1 + w/r| < PROJECTION_EPSILON the denominator is
replaced by PROJECTION_EPSILON, so the factor never exceeds 1 / PROJECTION_EPSILON
and every finite input gives a finite, repeatable output.
"""

import numpy as np

PROJECTION_EPSILON = 1e-6


def perspective_factor(w, radius: float):
    """
    Perspective division factor 1 / (1 + w / r) with the singularity clamp.

    Args:
        w: Scalar or array of w-coordinates
        radius: Radius of the hypersphere

    Returns:
        Factor(s) with the same shape as w
    """
    denom = 1.0 + np.asarray(w, dtype=float) / radius
    denom = np.where(np.abs(denom) < PROJECTION_EPSILON, PROJECTION_EPSILON, denom)
    return 1.0 / denom


def project_to_3d(points_4d: np.ndarray, radius: float) -> np.ndarray:
    """
    Project a single point (4,) or a batch of points (n, 4) to 3D.

    Args:
        points_4d: 4D coordinates
        radius: Radius of the hypersphere

    Returns:
        (3,) or (n, 3) array of projected coordinates
    """
    points_4d = np.asarray(points_4d, dtype=float)
    scale = perspective_factor(points_4d[..., 3:4], radius)
    return points_4d[..., :3] * scale


def w_display_factor(points_4d: np.ndarray, radius: float) -> np.ndarray:
    """
    Map w from [-r, r] to [0, 1] for size and colour interpolation.

    (w / r + 1) / 2, clipped to [0, 1] so rounding just off the sphere
    can't push sizes or colours past their endpoints.
    """
    points_4d = np.asarray(points_4d, dtype=float)
    return np.clip((points_4d[..., 3] / radius + 1.0) / 2.0, 0.0, 1.0)

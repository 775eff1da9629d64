"""
hypersphere_sampler.py - Deterministic point cloud on a 4D hypersphere

Points come from three nested angular sweeps:
- θ (longitude, x-y pair): R steps over [0, 2π)
- φ (latitude):            R // 2 steps over [0, π)
- ψ (second longitude, z-w pair): R steps over [0, 2π)

    x = r cos θ sin φ
    y = r sin θ sin φ
    z = r cos φ cos ψ
    w = r cos φ sin ψ

so x² + y² + z² + w² = r² sin² φ + r² cos² φ = r² for every sample.

Latitude gets half the steps to keep the poles from crowding. This is NOT an
equal-area sampling; points still cluster near φ = 0 and φ = π.
"""

import numpy as np


def sample_count(resolution: int) -> int:
    """Number of points sample_hypersphere() returns for this resolution."""
    return resolution * (resolution // 2) * resolution


def sample_hypersphere(resolution: int, radius: float) -> np.ndarray:
    """
    Generate the hypersphere point cloud.

    Ordering is θ outermost, then φ, then ψ innermost, so point index is
    (i * (R // 2) + j) * R + k.

    Args:
        resolution: Angular steps along θ and ψ (φ gets resolution // 2)
        radius: Radius of the hypersphere

    Returns:
        Array of shape (sample_count(resolution), 4) with [x, y, z, w] rows
    """
    n_lat = resolution // 2
    if resolution <= 0 or n_lat == 0:
        return np.empty((0, 4))

    theta = 2 * np.pi * np.arange(resolution) / resolution
    phi = np.pi * np.arange(n_lat) / n_lat
    psi = 2 * np.pi * np.arange(resolution) / resolution

    tv, pv, sv = np.meshgrid(theta, phi, psi, indexing='ij')

    x = radius * np.cos(tv) * np.sin(pv)
    y = radius * np.sin(tv) * np.sin(pv)
    z = radius * np.cos(pv) * np.cos(sv)
    w = radius * np.cos(pv) * np.sin(sv)

    return np.column_stack([x.ravel(), y.ravel(), z.ravel(), w.ravel()])

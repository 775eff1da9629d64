"""
hypersphere_animation.py - Rotating 4D hypersphere, projected to 3D

Owns the point cloud and the tracked direction vector. Every tick:
1. Build the composite rotation from the six plane speeds and elapsed time
2. Rotate every point and the vector, then rescale each back to the radius
3. Derive per-point size and colour from w
4. Project everything to 3D and hand back a Frame for the renderer

Lifecycle: UNINITIALIZED --initialize()--> RUNNING. There is no way back;
a driver that wants to pause just stops calling tick().

A tick is all-or-nothing. Results are computed into new arrays and only
committed once every check has passed, so a failed tick leaves the cloud and
vector exactly as they were.
"""

import sys
import time
import numpy as np
from dataclasses import dataclass, replace
from typing import Dict, Optional, Tuple

from hypersphere_sampler import sample_hypersphere
from projection_4d import project_to_3d, w_display_factor
from rotation_4d import plane_angles, rotate_points_4d, rotation_matrix_4d

UNINITIALIZED = 'uninitialized'
RUNNING = 'running'

ZERO_NORM_EPSILON = 1e-12

# Display endpoints for the w-coordinate encoding
MIN_POINT_SIZE = 0.05
MAX_POINT_SIZE = 0.3
COLD_COLOR = np.array([0.0, 0.0, 1.0])    # w = -r (blue)
HOT_COLOR = np.array([1.0, 0.0, 0.0])     # w = +r (red)
VECTOR_COLOR = np.array([0.0, 1.0, 0.0])  # tracked vector (green)


class HypersphereConfigError(ValueError):
    """Configuration that can't describe a hypersphere (bad resolution or radius)."""


class TickError(RuntimeError):
    """A tick failed; nothing from it was committed and it must not be rendered."""


class DegenerateRotationError(TickError):
    """Elapsed time or speeds are NaN/infinite (or elapsed time is negative)."""


class ZeroNormError(TickError):
    """A rotated point collapsed to zero (or non-finite) length and can't be rescaled."""


@dataclass
class HypersphereParams:
    """Parameters for the rotating hypersphere"""
    # Geometry
    resolution: int = 32          # Steps along θ and ψ (φ gets resolution // 2)
    radius: float = 5.0           # Hypersphere radius

    # Global multiplier applied to all six plane speeds
    rotation_speed: float = 1.0

    # Independent rotation speeds for each plane (radians per unit time)
    rotation_xy: float = 1.0
    rotation_xz: float = 1.0
    rotation_xw: float = 1.0
    rotation_yz: float = 1.0
    rotation_yw: float = 1.0
    rotation_zw: float = 1.0

    # Print an initialization summary
    verbose: bool = False

    def plane_speeds(self) -> Tuple[float, ...]:
        """The six plane speeds in composition order (XY, XZ, XW, YZ, YW, ZW)."""
        return (self.rotation_xy, self.rotation_xz, self.rotation_xw,
                self.rotation_yz, self.rotation_yw, self.rotation_zw)

    def validate_radius(self):
        if not np.isfinite(self.radius) or self.radius <= 0:
            raise HypersphereConfigError(f"Radius must be a positive finite number, got {self.radius}")

    def validate(self):
        if isinstance(self.resolution, bool) or not isinstance(self.resolution, (int, np.integer)):
            raise HypersphereConfigError(f"Resolution must be an integer, got {self.resolution!r}")
        if self.resolution < 1:
            raise HypersphereConfigError(f"Resolution must be >= 1, got {self.resolution}")
        self.validate_radius()


@dataclass
class Frame:
    """Everything the renderer needs for one tick"""
    points_3d: np.ndarray       # (n, 3) projected positions
    sizes: np.ndarray           # (n,) display sizes in [MIN_POINT_SIZE, MAX_POINT_SIZE]
    color_factors: np.ndarray   # (n,) colour interpolation factor in [0, 1]
    colors: np.ndarray          # (n, 3) RGB between COLD_COLOR and HOT_COLOR
    vector_segment: np.ndarray  # (2, 3) origin projection -> tracked vector projection
    vector_color: np.ndarray    # (3,) RGB
    transform: np.ndarray       # (4, 4) composite rotation used for this frame
    radius: float
    elapsed: float

    def to_dict(self) -> Dict:
        """Plain-list version of the frame, ready for json.dump or a web viewer."""
        return {
            'points_3d': self.points_3d.tolist(),
            'sizes': self.sizes.tolist(),
            'color_factors': self.color_factors.tolist(),
            'colors': self.colors.tolist(),
            'vector': {
                'segment': self.vector_segment.tolist(),
                'color': self.vector_color.tolist(),
            },
            'metadata': {
                'n_points': len(self.points_3d),
                'radius': self.radius,
                'elapsed': self.elapsed,
                'transform': self.transform.tolist(),
            }
        }


def composite_transform(params: HypersphereParams, elapsed: float) -> np.ndarray:
    """
    Composite rotation for one tick.

    Each plane angle is speed * elapsed * rotation_speed; the planes are
    composed in the fixed order XY, XZ, XW, YZ, YW, ZW.
    """
    speeds = params.plane_speeds()
    values = np.array((elapsed, params.rotation_speed) + speeds, dtype=float)
    if not np.all(np.isfinite(values)):
        raise DegenerateRotationError(
            f"Non-finite rotation input: elapsed={elapsed}, rotation_speed={params.rotation_speed}, "
            f"plane speeds={speeds}")
    if elapsed < 0:
        raise DegenerateRotationError(f"Elapsed time must be non-negative, got {elapsed}")

    angles = plane_angles(speeds, elapsed, params.rotation_speed)
    # Finite inputs can still overflow once multiplied together
    if not np.all(np.isfinite(angles)):
        raise DegenerateRotationError(
            f"Rotation angles overflowed: elapsed={elapsed}, rotation_speed={params.rotation_speed}, "
            f"plane speeds={speeds}")
    return rotation_matrix_4d(*angles)


def renormalize(points_4d: np.ndarray, radius: float) -> np.ndarray:
    """
    Rescale each point (row) to length radius.

    Raises:
        ZeroNormError: if any point has (numerically) zero length
    """
    norms = np.linalg.norm(points_4d, axis=-1, keepdims=True)
    if norms.size:
        usable = np.isfinite(norms.ravel()) & (norms.ravel() > ZERO_NORM_EPSILON)
        if not np.all(usable):
            bad = int(np.argmin(usable))
            raise ZeroNormError(
                f"Point {bad} has norm {norms.ravel()[bad]} after rotation; cannot rescale to radius {radius}")
    return points_4d / norms * radius


def build_frame(points_4d: np.ndarray, vector_4d: np.ndarray, radius: float,
                transform: np.ndarray, elapsed: float) -> Frame:
    """Project a cloud and vector and derive their display scalars."""
    factors = w_display_factor(points_4d, radius)
    sizes = MIN_POINT_SIZE + factors * (MAX_POINT_SIZE - MIN_POINT_SIZE)
    colors = COLD_COLOR + factors[:, None] * (HOT_COLOR - COLD_COLOR)

    segment = np.vstack([
        project_to_3d(np.zeros(4), radius),
        project_to_3d(vector_4d, radius),
    ])

    return Frame(
        points_3d=project_to_3d(points_4d, radius).reshape(-1, 3),
        sizes=sizes,
        color_factors=factors,
        colors=colors.reshape(-1, 3),
        vector_segment=segment,
        vector_color=VECTOR_COLOR.copy(),
        transform=transform,
        radius=float(radius),
        elapsed=float(elapsed),
    )


class AnimationState:
    """
    Rotating hypersphere point cloud plus one tracked vector.

    The params object is shared: an outside controller may change speeds or
    radius between ticks and the next tick picks them up. Resolution is only
    read by initialize(); changing it later needs a new AnimationState.
    """

    def __init__(self, params: Optional[HypersphereParams] = None):
        self.p = params if params is not None else HypersphereParams()
        self.state = UNINITIALIZED

        self._points = None
        self._vector = None
        self._last_transform = None
        self.tick_count = 0
        self.elapsed_total = 0.0

    def initialize(self):
        """Sample the hypersphere and place the tracked vector at normalize(1, 1, 1, 1) * radius."""
        if self.state == RUNNING:
            raise RuntimeError("AnimationState is already running")

        self.p.validate()

        start_time = time.time()
        self._points = sample_hypersphere(self.p.resolution, self.p.radius)
        self._vector = np.ones(4) / np.linalg.norm(np.ones(4)) * self.p.radius
        self._last_transform = np.eye(4)
        self.state = RUNNING

        if self.p.verbose:
            print(f"\n{'='*70}")
            print(f"4D Hypersphere - rotating point cloud")
            print(f"{'='*70}")
            print(f"  Resolution: {self.p.resolution} (θ, ψ) x {self.p.resolution // 2} (φ)")
            print(f"  Radius: {self.p.radius}")
            print(f"  Rotation speed: {self.p.rotation_speed}")
            print(f"  Plane speeds (xy, xz, xw, yz, yw, zw): {self.p.plane_speeds()}")
            print(f"  ✓ Sampled {len(self._points):,} points in {time.time() - start_time:.3f}s")
            print(f"{'='*70}\n")

    def _require_running(self):
        if self.state != RUNNING:
            raise RuntimeError("AnimationState.initialize() must be called before use")

    @property
    def points_4d(self) -> np.ndarray:
        self._require_running()
        return self._points.copy()

    @property
    def vector_4d(self) -> np.ndarray:
        self._require_running()
        return self._vector.copy()

    @property
    def last_transform(self) -> np.ndarray:
        self._require_running()
        return self._last_transform.copy()

    def current_frame(self) -> Frame:
        """Frame for the current state without advancing time."""
        self._require_running()
        self.p.validate_radius()
        return build_frame(self._points, self._vector, self.p.radius, np.eye(4), 0.0)

    def tick(self, elapsed: float, params: Optional[HypersphereParams] = None) -> Frame:
        """
        Advance the animation by elapsed time units.

        Args:
            elapsed: Time since the previous tick (finite, >= 0)
            params: Optional replacement for the shared params (kept for later ticks)

        Returns:
            Frame for the rendering backend

        Raises:
            HypersphereConfigError: radius was changed to an invalid value
            DegenerateRotationError: non-finite or negative elapsed, non-finite speeds
            ZeroNormError: a rotated point lost all length
        """
        self._require_running()
        if params is not None:
            self.p = params

        # One consistent view of the params for the whole tick
        p = replace(self.p)
        p.validate_radius()

        R = composite_transform(p, elapsed)

        points = renormalize(rotate_points_4d(self._points, R), p.radius)
        vector = renormalize(rotate_points_4d(self._vector, R), p.radius)

        frame = build_frame(points, vector, p.radius, R, elapsed)

        self._points = points
        self._vector = vector
        self._last_transform = R
        self.tick_count += 1
        self.elapsed_total += elapsed
        return frame


def demo(resolution: int = 16, n_ticks: int = 120, dt: float = 1.0 / 60.0):
    """Run the animation headless and report norm drift and projected ranges."""
    print("=" * 60)
    print("Rotating 4D Hypersphere Demo")
    print("=" * 60)

    params = HypersphereParams(resolution=resolution, verbose=True)
    anim = AnimationState(params)
    anim.initialize()

    print(f"Running {n_ticks} ticks (dt = {dt:.4f})...")
    start_time = time.time()
    frame = anim.current_frame()
    for _ in range(n_ticks):
        frame = anim.tick(dt)
    total_time = time.time() - start_time

    norms = np.linalg.norm(anim.points_4d, axis=1)
    drift = np.max(np.abs(norms - params.radius)) if norms.size else 0.0
    ticks_per_sec = n_ticks / total_time if total_time > 0 else 0
    print(f"  ✓ {n_ticks} ticks in {total_time:.3f}s ({ticks_per_sec:.1f} ticks/s)")
    print(f"  Max norm drift: {drift:.2e}")
    print(f"  Vector endpoint (3D): {np.round(frame.vector_segment[1], 3).tolist()}")

    if len(frame.points_3d):
        print(f"  3D coordinate ranges:")
        print(f"    X: [{frame.points_3d[:, 0].min():.3f}, {frame.points_3d[:, 0].max():.3f}]")
        print(f"    Y: [{frame.points_3d[:, 1].min():.3f}, {frame.points_3d[:, 1].max():.3f}]")
        print(f"    Z: [{frame.points_3d[:, 2].min():.3f}, {frame.points_3d[:, 2].max():.3f}]")
    print("=" * 60)

    return frame


if __name__ == '__main__':
    # Usage: python hypersphere_animation.py [resolution] [n_ticks]
    resolution = int(sys.argv[1]) if len(sys.argv) > 1 else 16
    n_ticks = int(sys.argv[2]) if len(sys.argv) > 2 else 120
    demo(resolution=resolution, n_ticks=n_ticks)

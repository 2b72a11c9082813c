"""
Orbit Geometry

Satellite position, sampled orbit path and the reference directions drawn as
overlays (line of nodes, perigee direction, orbit normal). Every function is
a pure mapping from an ``OrbitalElements`` snapshot (plus an optional true
anomaly) to render-frame numpy vectors.

The conic equation r = a(1 - e²) / (1 + e·cos ν) has a positive denominator
for every ν because ``OrbitalElements`` guarantees 0 <= e < 1.
"""

import math
from collections.abc import Sequence
from typing import Iterator, Optional, Union

import numpy as np

from orbit_visualizer import config
from orbit_visualizer.elements import OrbitalElements
from orbit_visualizer.frames import physics_to_render, to_render_frame

ArrayLike = Union[float, np.ndarray]


def _unit(vector: np.ndarray) -> np.ndarray:
    return vector / np.linalg.norm(vector)


def radius(elements: OrbitalElements, anomaly: Optional[ArrayLike] = None) -> ArrayLike:
    """
    Distance from the focus at a true anomaly.

    Args:
        elements: Orbital elements
        anomaly: True anomaly (rad), scalar or array. Defaults to ``elements.nu``.

    Returns:
        Radial distance in the units of ``elements.a``
    """
    nu = elements.nu if anomaly is None else anomaly
    a, e = elements.a, elements.e
    return a * (1.0 - e * e) / (1.0 + e * np.cos(nu))


def position(elements: OrbitalElements, anomaly: Optional[ArrayLike] = None) -> np.ndarray:
    """
    Satellite position in the render frame.

    Args:
        elements: Orbital elements
        anomaly: True anomaly override (rad). A 1-D array yields an (N, 3) result.

    Returns:
        Render-frame position vector(s)
    """
    nu = elements.nu if anomaly is None else anomaly
    r = radius(elements, nu)

    # Position in orbital plane
    r_op = np.stack([
        r * np.cos(nu),
        r * np.sin(nu),
        np.zeros_like(r),
    ], axis=-1)

    return to_render_frame(r_op, elements)


class OrbitPath(Sequence):
    """
    Closed polyline around one full revolution.

    Points are computed on access; iterating twice yields the same points
    again. Point ``j`` lies at ν = 2π·j/segments, so the first and last
    points coincide.
    """

    def __init__(self, elements: OrbitalElements, segments: int = config.ORBIT_PATH_SEGMENTS):
        if segments < 1:
            raise ValueError(f"segments must be >= 1, got {segments}")
        self.elements = elements
        self.segments = int(segments)

    def __len__(self) -> int:
        return self.segments + 1

    def __getitem__(self, index):
        if isinstance(index, slice):
            return [self[j] for j in range(*index.indices(len(self)))]
        if index < 0:
            index += len(self)
        if not 0 <= index < len(self):
            raise IndexError("orbit path index out of range")
        return position(self.elements, self.anomaly(index))

    def __iter__(self) -> Iterator[np.ndarray]:
        for j in range(len(self)):
            yield position(self.elements, self.anomaly(j))

    def anomaly(self, index: int) -> float:
        """True anomaly of point ``index``."""
        return 2.0 * math.pi * index / self.segments

    def as_array(self) -> np.ndarray:
        """All points as an (segments + 1, 3) array."""
        nu = 2.0 * math.pi * np.arange(len(self)) / self.segments
        return position(self.elements, nu)

    def __repr__(self) -> str:
        return f"OrbitPath(segments={self.segments}, elements={self.elements!r})"


def orbit_path(elements: OrbitalElements, segments: int = config.ORBIT_PATH_SEGMENTS) -> OrbitPath:
    """Sample one revolution into ``segments + 1`` points (closed loop)."""
    return OrbitPath(elements, segments)


def ascending_node_direction(elements: OrbitalElements) -> np.ndarray:
    """
    Unit vector toward the ascending node.

    The node lies in the reference plane at angle Ω from the reference
    direction, independent of i and ω. For an equatorial orbit the node is
    undefined by convention; the vector is still finite and deterministic
    (the reference direction when Ω = 0).
    """
    node = np.array([math.cos(elements.raan), math.sin(elements.raan), 0.0])
    return _unit(physics_to_render(node))


def perigee_direction(elements: OrbitalElements) -> np.ndarray:
    """Unit vector toward perigee (position at ν = 0)."""
    return _unit(position(elements, 0.0))


def orbit_normal(elements: OrbitalElements) -> np.ndarray:
    """Unit vector along the orbital angular momentum."""
    return _unit(to_render_frame([0.0, 0.0, 1.0], elements))

"""
Visualization Guides

Derived overlays for the 3D scene: apsides, ellipse centre, angle arcs
marking Ω, i, ω and ν, the fan-triangulated orbit-plane surface, and a
``SceneGeometry`` snapshot bundling everything a renderer needs for one set
of elements.

All outputs are render-frame numpy arrays; nothing here draws.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

import numpy as np

from orbit_visualizer import config
from orbit_visualizer.elements import OrbitalElements
from orbit_visualizer.frames import to_render_frame
from orbit_visualizer.geometry import (
    ascending_node_direction,
    orbit_normal,
    orbit_path,
    perigee_direction,
    position,
)
from orbit_visualizer.singularities import SingularityFlags

ORIGIN = np.zeros(3)
RENDER_X = np.array([1.0, 0.0, 0.0])  # reference direction
RENDER_UP = np.array([0.0, 1.0, 0.0])  # reference pole
EMPTY_POLYLINE = np.zeros((0, 3))


def ellipse_center(elements: OrbitalElements) -> np.ndarray:
    """Geometric centre of the ellipse (the focus sits at the origin)."""
    return to_render_frame([-elements.a * elements.e, 0.0, 0.0], elements)


def apsides(elements: OrbitalElements) -> Tuple[np.ndarray, np.ndarray]:
    """(perigee point, apogee point) in the render frame."""
    return position(elements, 0.0), position(elements, math.pi)


def project_onto_plane(vector, normal) -> np.ndarray:
    """Remove the component of ``vector`` along ``normal``."""
    v = np.asarray(vector, dtype=float)
    n = np.asarray(normal, dtype=float)
    return v - (np.dot(v, n) / np.dot(n, n)) * n


def angle_arc(
    start,
    end,
    radius: float = config.ANOMALY_ARC_RADIUS,
    segments: int = config.ANGLE_ARC_SEGMENTS,
    center=ORIGIN,
) -> np.ndarray:
    """
    Arc of constant radius sweeping from ``start`` to ``end``.

    The arc rotates about start × end, so it always takes the short way
    round (angle in [0, π]).

    Args:
        start: Direction the arc starts from
        end: Direction the arc ends at
        radius: Arc radius
        segments: Number of segments (returns segments + 1 points)
        center: Arc centre

    Returns:
        (segments + 1, 3) array, or an empty (0, 3) array when the angle is
        too small or the directions are (anti)parallel or degenerate
    """
    start = np.asarray(start, dtype=float)
    end = np.asarray(end, dtype=float)
    start_norm = np.linalg.norm(start)
    end_norm = np.linalg.norm(end)
    if start_norm < 1e-12 or end_norm < 1e-12:
        return EMPTY_POLYLINE.copy()

    v1 = start / start_norm
    v2 = end / end_norm
    angle = math.acos(float(np.clip(np.dot(v1, v2), -1.0, 1.0)))

    cross = np.cross(v1, v2)
    if np.dot(cross, cross) < 1e-4 or angle < config.ANGLE_ARC_MIN_RAD:
        return EMPTY_POLYLINE.copy()
    axis = cross / np.linalg.norm(cross)

    # Rodrigues rotation of v1 about axis
    theta = angle * np.linspace(0.0, 1.0, segments + 1)[:, None]
    k_cross_v = np.cross(axis, v1)
    rotated = (
        v1 * np.cos(theta)
        + k_cross_v * np.sin(theta)
        + axis * np.dot(axis, v1) * (1.0 - np.cos(theta))
    )
    return rotated * radius + np.asarray(center, dtype=float)


def plane_surface(
    elements: OrbitalElements, segments: int = config.PLANE_SURFACE_SEGMENTS
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Fan triangulation of the orbit plane inside the orbit.

    Returns:
        vertices: (segments + 2, 3) array; vertex 0 is the focus, vertices
            1..segments+1 are the closed path points
        faces: (segments, 3) int array of triangles (0, j, j + 1)
    """
    path = orbit_path(elements, segments).as_array()
    vertices = np.vstack([ORIGIN, path])
    j = np.arange(1, len(path))
    faces = np.column_stack([np.zeros_like(j), j, j + 1])
    return vertices, faces


@dataclass(frozen=True, eq=False)
class SceneGeometry:
    """Everything the renderer draws for one elements snapshot."""

    elements: OrbitalElements
    flags: SingularityFlags
    satellite: np.ndarray
    orbit_path: np.ndarray
    surface_vertices: np.ndarray
    surface_faces: np.ndarray
    node_line: np.ndarray
    perigee_line: np.ndarray
    normal_line: np.ndarray
    perigee_point: np.ndarray
    apogee_point: np.ndarray
    ellipse_center: np.ndarray
    arcs: Dict[str, np.ndarray] = field(default_factory=dict)
    reference_axes: Dict[str, np.ndarray] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly representation (nested lists of floats)."""
        return {
            "elements": self.elements.model_dump(),
            "flags": {
                "circular": self.flags.circular,
                "equatorial": self.flags.equatorial,
                "disabled": sorted(k.value for k in self.flags.disabled_parameters),
            },
            "satellite": self.satellite.tolist(),
            "orbit_path": self.orbit_path.tolist(),
            "surface": {
                "vertices": self.surface_vertices.tolist(),
                "faces": self.surface_faces.tolist(),
            },
            "node_line": self.node_line.tolist(),
            "perigee_line": self.perigee_line.tolist(),
            "normal_line": self.normal_line.tolist(),
            "perigee_point": self.perigee_point.tolist(),
            "apogee_point": self.apogee_point.tolist(),
            "ellipse_center": self.ellipse_center.tolist(),
            "arcs": {name: arc.tolist() for name, arc in self.arcs.items()},
            "reference_axes": {name: axis.tolist() for name, axis in self.reference_axes.items()},
        }


def build_scene(
    elements: OrbitalElements,
    path_segments: int = config.ORBIT_PATH_SEGMENTS,
    surface_segments: int = config.PLANE_SURFACE_SEGMENTS,
) -> SceneGeometry:
    """
    Compute the full scene for one elements snapshot.

    Arcs for elements that are undefined in the current geometry (ω for a
    circular orbit, Ω for an equatorial one) are returned empty.
    """
    flags = SingularityFlags.evaluate(elements)

    node_line = ascending_node_direction(elements) * config.NODE_LINE_LENGTH
    perigee_line = perigee_direction(elements) * config.PERIGEE_LINE_LENGTH
    normal_line = orbit_normal(elements) * config.NORMAL_LINE_LENGTH
    satellite = position(elements)
    perigee_point, apogee_point = apsides(elements)
    vertices, faces = plane_surface(elements, surface_segments)

    arcs = {
        "raan": EMPTY_POLYLINE.copy() if flags.equatorial else angle_arc(
            RENDER_X, project_onto_plane(node_line, RENDER_UP), radius=config.RAAN_ARC_RADIUS
        ),
        "i": angle_arc(RENDER_UP, normal_line, radius=config.INCLINATION_ARC_RADIUS),
        "omega": EMPTY_POLYLINE.copy() if flags.circular else angle_arc(
            node_line, perigee_line, radius=config.PERIGEE_ARC_RADIUS
        ),
        "nu": angle_arc(perigee_line, satellite, radius=config.ANOMALY_ARC_RADIUS),
    }

    return SceneGeometry(
        elements=elements,
        flags=flags,
        satellite=satellite,
        orbit_path=orbit_path(elements, path_segments).as_array(),
        surface_vertices=vertices,
        surface_faces=faces,
        node_line=node_line,
        perigee_line=perigee_line,
        normal_line=normal_line,
        perigee_point=perigee_point,
        apogee_point=apogee_point,
        ellipse_center=ellipse_center(elements),
        arcs=arcs,
        reference_axes={
            "vernal": RENDER_X * config.REFERENCE_AXIS_LENGTH,
            "north": RENDER_UP * config.REFERENCE_AXIS_LENGTH,
        },
    )

"""
Orbit Visualizer Package

Geometry core for an interactive, educational 3D view of the six classical
(Keplerian) orbital elements.

Modules:
    angles: degree/radian conversion
    elements: validated, immutable orbital elements snapshot
    frames: perifocal -> physics -> render frame transform
    geometry: satellite position, orbit path and reference directions
    singularities: circular / equatorial orbit flags
    guides: derived overlays and full scene snapshots
    descriptions: slider metadata and qualitative labels
    explanation: AI explanation client (external service)
    session: application-side session state

References:
    Vallado, D. A. (2013). Fundamentals of Astrodynamics and Applications (4th ed.).
"""

from orbit_visualizer.angles import deg_to_rad, rad_to_deg
from orbit_visualizer.elements import (
    DEFAULT_ELEMENTS,
    InvalidElementsError,
    OrbitalElements,
    ParameterKey,
)
from orbit_visualizer.frames import to_render_frame
from orbit_visualizer.geometry import (
    ascending_node_direction,
    orbit_normal,
    orbit_path,
    perigee_direction,
    position,
)
from orbit_visualizer.singularities import SingularityFlags, is_circular, is_equatorial

__version__ = "1.0.0"

__all__ = [
    "DEFAULT_ELEMENTS",
    "InvalidElementsError",
    "OrbitalElements",
    "ParameterKey",
    "SingularityFlags",
    "ascending_node_direction",
    "deg_to_rad",
    "is_circular",
    "is_equatorial",
    "orbit_normal",
    "orbit_path",
    "perigee_direction",
    "position",
    "rad_to_deg",
    "to_render_frame",
]

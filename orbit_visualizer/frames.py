"""
Perifocal to Render Frame Transform

Maps vectors from the perifocal (orbit-plane) frame to the frame used by the
rendering layer.

Frames:
    Perifocal: X toward perigee, Y 90° ahead in the orbit plane,
               Z along the orbital angular momentum.
    Physics:   inertial, Z toward the reference pole ("north"),
               X toward the reference direction (vernal equinox).
    Render:    Y-up. Physics X -> render X, physics Z -> render Y,
               physics Y -> render -Z. Still right-handed.

The perifocal -> physics rotation is the classical 3-1-3 Euler sequence
R3(-Ω) · R1(-i) · R3(-ω). Every vector the package produces goes through the
same final relabeling, not only positions.

References:
    Vallado, D. A. (2013). Fundamentals of Astrodynamics and Applications (4th ed.),
    Section 2.6.
"""

import math
import numpy as np

from orbit_visualizer.elements import OrbitalElements

# Physics (Z-up) -> render (Y-up) relabeling
PHYSICS_TO_RENDER = np.array([
    [1.0, 0.0, 0.0],
    [0.0, 0.0, 1.0],
    [0.0, -1.0, 0.0],
])


def perifocal_to_inertial_matrix(i: float, omega: float, raan: float) -> np.ndarray:
    """
    Rotation matrix from the perifocal frame to the physics frame.

    Args:
        i: Inclination (rad)
        omega: Argument of perigee (rad)
        raan: Right ascension of ascending node (rad)

    Returns:
        3x3 rotation matrix
    """
    cos_raan = math.cos(raan)
    sin_raan = math.sin(raan)
    cos_i = math.cos(i)
    sin_i = math.sin(i)
    cos_argp = math.cos(omega)
    sin_argp = math.sin(omega)

    R_raan = np.array([
        [cos_raan, -sin_raan, 0],
        [sin_raan, cos_raan, 0],
        [0, 0, 1]
    ])

    R_i = np.array([
        [1, 0, 0],
        [0, cos_i, -sin_i],
        [0, sin_i, cos_i]
    ])

    R_argp = np.array([
        [cos_argp, -sin_argp, 0],
        [sin_argp, cos_argp, 0],
        [0, 0, 1]
    ])

    return R_raan @ R_i @ R_argp


def physics_to_render(vector) -> np.ndarray:
    """Relabel a physics-frame vector (or an (N, 3) array of them) into the render frame."""
    return np.asarray(vector, dtype=float) @ PHYSICS_TO_RENDER.T


def to_render_frame(point, elements: OrbitalElements) -> np.ndarray:
    """
    Transform a perifocal point into the render frame.

    Args:
        point: Perifocal coordinates [x, y, z], or an (N, 3) array of points
        elements: Orbital elements supplying i, ω and Ω

    Returns:
        Render-frame coordinates with the same shape as ``point``
    """
    rotation = perifocal_to_inertial_matrix(elements.i, elements.omega, elements.raan)
    physics = np.asarray(point, dtype=float) @ rotation.T
    return physics_to_render(physics)

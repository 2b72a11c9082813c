"""
Angle and unit conversions.

Angles are radians everywhere inside the package; degrees only exist at the
presentation boundary (sliders, labels, explanation prompts).
"""

import math
import numpy as np

TWO_PI = 2.0 * math.pi


def deg_to_rad(deg):
    """Convert degrees to radians (scalar or numpy array)."""
    return deg * (math.pi / 180.0)


def rad_to_deg(rad):
    """Convert radians to degrees (scalar or numpy array)."""
    return rad * (180.0 / math.pi)


def wrap_two_pi(angle):
    """
    Wrap an angle into [0, 2π).

    Args:
        angle: Angle in radians (scalar or numpy array)

    Returns:
        Equivalent angle in [0, 2π)
    """
    wrapped = np.mod(angle, TWO_PI)
    # np.mod can return exactly 2π for tiny negative inputs
    wrapped = np.where(wrapped >= TWO_PI, 0.0, wrapped)
    if np.ndim(wrapped) == 0:
        return float(wrapped)
    return wrapped

"""
Parameter display metadata and qualitative labels.

Slider ranges are in presentation units (DU, dimensionless, degrees).
"""

from dataclasses import dataclass
from typing import Dict

from orbit_visualizer.angles import rad_to_deg
from orbit_visualizer.elements import ANGULAR_KEYS, OrbitalElements, ParameterKey


@dataclass(frozen=True)
class ParameterInfo:
    name: str
    symbol: str
    unit: str
    minimum: float
    maximum: float
    step: float
    hint: str = ""
    disabled_message: str = ""

    @property
    def in_degrees(self) -> bool:
        return self.unit == "deg"


PARAMETERS: Dict[ParameterKey, ParameterInfo] = {
    ParameterKey.A: ParameterInfo(
        "Semi-Major Axis", "a", "distance units", 4.0, 15.0, 0.1,
        hint="Controls the size of the orbit",
    ),
    ParameterKey.E: ParameterInfo(
        "Eccentricity", "e", "dimensionless", 0.0, 0.85, 0.01,
    ),
    ParameterKey.I: ParameterInfo(
        "Inclination", "i", "deg", 0.0, 180.0, 1.0,
    ),
    ParameterKey.RAAN: ParameterInfo(
        "Right Ascension of Ascending Node", "Ω", "deg", 0.0, 360.0, 1.0,
        hint="Rotates the orbit plane about the polar axis",
        disabled_message="Equatorial orbit has no ascending node",
    ),
    ParameterKey.OMEGA: ParameterInfo(
        "Argument of Perigee", "ω", "deg", 0.0, 360.0, 1.0,
        hint="Orientation of the ellipse within the orbit plane",
        disabled_message="Circular orbit has no perigee",
    ),
    ParameterKey.NU: ParameterInfo(
        "True Anomaly", "ν", "deg", 0.0, 360.0, 1.0,
        hint="Angle the satellite has travelled from perigee",
    ),
}


def eccentricity_label(e: float) -> str:
    if e == 0:
        return "circular"
    if e < 0.2:
        return "near-circular"
    if e < 0.8:
        return "elliptical"
    return "highly eccentric"


def inclination_label(i: float) -> str:
    """Prograde / polar / retrograde for an inclination in radians."""
    deg = rad_to_deg(i)
    if deg < 90:
        return "prograde"
    if abs(deg - 90) < 1:
        return "polar"
    return "retrograde"


def presentation_value(key: ParameterKey, elements: OrbitalElements) -> float:
    """Value of ``key`` in the units shown on its slider."""
    key = ParameterKey(key)
    value = getattr(elements, key.value)
    if key in ANGULAR_KEYS:
        return rad_to_deg(value)
    return value


def subtitle(key: ParameterKey, elements: OrbitalElements) -> str:
    """Short text shown under a slider."""
    key = ParameterKey(key)
    if key is ParameterKey.E:
        return eccentricity_label(elements.e)
    if key is ParameterKey.I:
        return inclination_label(elements.i)
    return PARAMETERS[key].hint

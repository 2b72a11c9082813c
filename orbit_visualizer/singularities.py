"""
Geometric singularities of the classical elements.

Two elements lose their meaning in special geometries:

- Circular orbit (e ≈ 0): there is no perigee, so the argument of perigee ω
  is undefined.
- Equatorial orbit (i ≈ 0): the orbit never crosses the reference plane, so
  the ascending node and Ω are undefined.

The values are still stored in ``OrbitalElements``; callers check these
flags before presenting ω or Ω as meaningful. The flags are recomputed from
the current snapshot on every call and carry no memory of earlier states.
"""

from dataclasses import dataclass
from typing import FrozenSet

from orbit_visualizer import config
from orbit_visualizer.elements import OrbitalElements, ParameterKey

CIRCULAR_ECCENTRICITY_EPS = config.CIRCULAR_ECCENTRICITY_EPS
EQUATORIAL_INCLINATION_EPS = config.EQUATORIAL_INCLINATION_EPS


def is_circular(elements: OrbitalElements) -> bool:
    """True when the argument of perigee is undefined."""
    return elements.e < CIRCULAR_ECCENTRICITY_EPS


def is_equatorial(elements: OrbitalElements) -> bool:
    """True when the ascending node is undefined."""
    return elements.i < EQUATORIAL_INCLINATION_EPS


@dataclass(frozen=True)
class SingularityFlags:
    """Singularity state of one elements snapshot."""

    circular: bool
    equatorial: bool

    @classmethod
    def evaluate(cls, elements: OrbitalElements) -> "SingularityFlags":
        return cls(circular=is_circular(elements), equatorial=is_equatorial(elements))

    @property
    def disabled_parameters(self) -> FrozenSet[ParameterKey]:
        """Controls that should be disabled for this geometry."""
        disabled = set()
        if self.circular:
            disabled.add(ParameterKey.OMEGA)
        if self.equatorial:
            disabled.add(ParameterKey.RAAN)
        return frozenset(disabled)

    def is_defined(self, key: ParameterKey) -> bool:
        return key not in self.disabled_parameters

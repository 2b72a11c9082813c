"""
Classical Orbital Elements

Immutable snapshot of the six Keplerian elements shown by the visualizer.
A new record is created for every change; the geometry functions never see a
partially updated orbit.

Domain (validated at construction):
    a      semi-major axis, > 0 (display units, typically 4-15 DU)
    e      eccentricity, 0 <= e < 1 (ellipses only)
    i      inclination, 0 <= i <= π (rad)
    omega  argument of perigee, wrapped into [0, 2π) (rad)
    raan   right ascension of ascending node, wrapped into [0, 2π) (rad)
    nu     true anomaly, wrapped into [0, 2π) (rad)
"""

import math
import sys
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from orbit_visualizer import config
from orbit_visualizer.angles import deg_to_rad, rad_to_deg, wrap_two_pi

PI_ULP_TOLERANCE = 4 * sys.float_info.epsilon


class InvalidElementsError(ValueError):
    """Raised when orbital elements fall outside the supported domain."""


def _invalid(error: ValidationError) -> InvalidElementsError:
    problems = "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
        for err in error.errors()
    )
    return InvalidElementsError(f"Invalid orbital elements ({problems})")


class ParameterKey(str, Enum):
    """Names of the user-adjustable elements."""

    A = "a"
    E = "e"
    I = "i"  # noqa: E741
    OMEGA = "omega"
    RAAN = "raan"
    NU = "nu"


ANGULAR_KEYS = frozenset(
    {ParameterKey.I, ParameterKey.OMEGA, ParameterKey.RAAN, ParameterKey.NU}
)


class OrbitalElements(BaseModel):
    """Orbital elements snapshot with validation"""

    model_config = ConfigDict(frozen=True)

    a: float = Field(gt=0.0, allow_inf_nan=False)
    e: float = Field(ge=0.0, lt=1.0, allow_inf_nan=False)
    i: float = Field(ge=0.0, allow_inf_nan=False)
    omega: float = Field(allow_inf_nan=False)
    raan: float = Field(allow_inf_nan=False)
    nu: float = Field(allow_inf_nan=False)

    def __init__(self, **data: Any):
        try:
            super().__init__(**data)
        except ValidationError as e:
            raise _invalid(e) from e

    @classmethod
    def model_validate(cls, obj: Any, **kwargs: Any) -> "OrbitalElements":
        try:
            return super().model_validate(obj, **kwargs)
        except ValidationError as e:
            raise _invalid(e) from e

    @classmethod
    def model_validate_json(cls, json_data: Any, **kwargs: Any) -> "OrbitalElements":
        try:
            return super().model_validate_json(json_data, **kwargs)
        except ValidationError as e:
            raise _invalid(e) from e

    def model_copy(self, *, update: Optional[Dict[str, Any]] = None, deep: bool = False):
        """Copies with changes are validated like any other construction."""
        if update:
            return self.replace(**update)
        return super().model_copy(deep=deep)

    @field_validator("i")
    @classmethod
    def _check_inclination(cls, value: float) -> float:
        # 180° converted to radians can land a few ulps above π
        if value > math.pi:
            if not math.isclose(value, math.pi, rel_tol=0.0, abs_tol=PI_ULP_TOLERANCE):
                raise ValueError("inclination must be within [0, π]")
            return math.pi
        return value

    @field_validator("omega", "raan", "nu")
    @classmethod
    def _wrap_circular(cls, value: float) -> float:
        return wrap_two_pi(value)

    @classmethod
    def from_degrees(
        cls,
        a: float,
        e: float,
        i_deg: float,
        omega_deg: float,
        raan_deg: float,
        nu_deg: float,
    ) -> "OrbitalElements":
        """Build elements from presentation-layer degrees."""
        return cls(
            a=a,
            e=e,
            i=deg_to_rad(i_deg),
            omega=deg_to_rad(omega_deg),
            raan=deg_to_rad(raan_deg),
            nu=deg_to_rad(nu_deg),
        )

    def replace(self, **changes: float) -> "OrbitalElements":
        """
        Return a new, validated record with some fields replaced.

        Raises:
            InvalidElementsError: if a changed value is out of domain
            ValueError: if a field name is unknown
        """
        unknown = set(changes) - set(type(self).model_fields)
        if unknown:
            raise ValueError(f"Unknown orbital element(s): {sorted(unknown)}")
        data = self.model_dump()
        data.update(changes)
        return type(self)(**data)

    def as_degrees(self) -> Dict[str, float]:
        """Elements in presentation units (angles in degrees)."""
        data = self.model_dump()
        for key in ANGULAR_KEYS:
            data[key.value] = rad_to_deg(data[key.value])
        return data


DEFAULT_ELEMENTS = OrbitalElements.from_degrees(
    a=config.DEFAULT_ELEMENTS_DEG['a'],
    e=config.DEFAULT_ELEMENTS_DEG['e'],
    i_deg=config.DEFAULT_ELEMENTS_DEG['i'],
    omega_deg=config.DEFAULT_ELEMENTS_DEG['omega'],
    raan_deg=config.DEFAULT_ELEMENTS_DEG['raan'],
    nu_deg=config.DEFAULT_ELEMENTS_DEG['nu'],
)

"""
Orbit Visualizer Configuration and Constants

This module contains the default orbital elements, singularity thresholds,
display scales and the settings of the explanation service used throughout
the project.

Defaults:
    The initial orbit shown to a new session is a moderately eccentric,
    inclined ellipse so that every element has a visible effect:
    a = 8 DU, e = 0.4, i = 45°, ω = 45°, Ω = 30°, ν = 0°.

Explanation Service:
    Explanations are produced by the Gemini ``generateContent`` REST endpoint.
    The API key is read from the environment (``GEMINI_API_KEY``, falling back
    to ``API_KEY``). Without a key the application still runs; explanation
    requests simply return the "unavailable" message.

References:
    Vallado, D. A. (2013). Fundamentals of Astrodynamics and Applications (4th ed.).
"""

import math
import os
from typing import Dict, Optional

# Default orbit, presentation units (DU and degrees)
DEFAULT_ELEMENTS_DEG: Dict[str, float] = {
    'a': 8.0,
    'e': 0.4,
    'i': 45.0,
    'omega': 45.0,
    'raan': 30.0,
    'nu': 0.0,
}

# Singularity thresholds
CIRCULAR_ECCENTRICITY_EPS: float = 0.01  # below this e, argument of perigee is undefined
EQUATORIAL_INCLINATION_EPS: float = math.radians(0.01)  # rad, below this i the node is undefined

# Sampling
ORBIT_PATH_SEGMENTS: int = 200
PLANE_SURFACE_SEGMENTS: int = 128
ANGLE_ARC_SEGMENTS: int = 32
ANGLE_ARC_MIN_RAD: float = 0.01  # arcs narrower than this are not drawn

# Display scales for guide vectors (DU)
NODE_LINE_LENGTH: float = 12.0
PERIGEE_LINE_LENGTH: float = 12.0
NORMAL_LINE_LENGTH: float = 10.0
REFERENCE_AXIS_LENGTH: float = 14.0

# Angle arc radii (DU)
RAAN_ARC_RADIUS: float = 5.0
INCLINATION_ARC_RADIUS: float = 4.0
PERIGEE_ARC_RADIUS: float = 7.0
ANOMALY_ARC_RADIUS: float = 3.0


class ExplanationConfig:
    """Settings for the generative-language explanation service."""

    API_BASE: str = os.getenv(
        'GEMINI_API_BASE', 'https://generativelanguage.googleapis.com/v1beta'
    )
    MODEL: str = os.getenv('GEMINI_MODEL', 'gemini-2.5-flash')
    TIMEOUT_S: float = float(os.getenv('EXPLANATION_TIMEOUT_S', '30'))
    MAX_WORKERS: int = int(os.getenv('EXPLANATION_MAX_WORKERS', '2'))
    MAX_WORDS: int = 100

    NO_EXPLANATION_TEXT: str = "No explanation available."
    UNAVAILABLE_TEXT: str = "The AI explanation is temporarily unavailable."
    ERROR_TITLE: str = "Error"

    @staticmethod
    def api_key() -> Optional[str]:
        """Read the API key at call time so tests and shells can change it."""
        return os.getenv('GEMINI_API_KEY') or os.getenv('API_KEY')


explanation_config = ExplanationConfig()

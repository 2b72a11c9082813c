"""
Explorer Session

Application-side owner of the current orbital elements. The geometry core is
stateless; the session keeps the latest immutable snapshot, replaces it one
field at a time, and recomputes geometry when asked to.
"""

import logging
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Optional

from orbit_visualizer.config import explanation_config
from orbit_visualizer.angles import deg_to_rad
from orbit_visualizer.descriptions import PARAMETERS, presentation_value
from orbit_visualizer.elements import (
    ANGULAR_KEYS,
    DEFAULT_ELEMENTS,
    OrbitalElements,
    ParameterKey,
)
from orbit_visualizer.explanation import ExplanationClient
from orbit_visualizer.guides import SceneGeometry, build_scene
from orbit_visualizer.singularities import SingularityFlags

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Explanation:
    title: str
    content: str


class ExplorerSession:
    """
    Interactive session state.

    Parameters
    ----------
    initial : OrbitalElements
        Elements restored by ``reset``
    explainer : ExplanationClient, optional
        Explanation service client; created lazily when first needed
    """

    def __init__(
        self,
        initial: OrbitalElements = DEFAULT_ELEMENTS,
        explainer: Optional[ExplanationClient] = None,
    ):
        self.initial = initial
        self.elements = initial
        self.reset_count = 0
        self._explainer = explainer
        self._owns_explainer = False

    @property
    def explainer(self) -> ExplanationClient:
        if self._explainer is None:
            self._explainer = ExplanationClient()
            self._owns_explainer = True
        return self._explainer

    def update(self, key: ParameterKey, value: float, degrees: bool = False) -> OrbitalElements:
        """
        Replace one element and return the new snapshot.

        Args:
            key: Element to change
            value: New value (radians for angles unless ``degrees`` is set)
            degrees: Interpret an angular ``value`` as degrees

        Raises:
            InvalidElementsError: if the value is out of domain; the current
                snapshot is left unchanged
        """
        key = ParameterKey(key)
        if degrees and key in ANGULAR_KEYS:
            value = deg_to_rad(value)
        self.elements = self.elements.replace(**{key.value: value})
        logger.debug(f"Element {key.value} set to {value}")
        return self.elements

    def reset(self) -> OrbitalElements:
        """Restore the initial elements and signal a camera reset."""
        self.elements = self.initial
        self.reset_count += 1
        logger.info("Session reset to initial elements")
        return self.elements

    def flags(self) -> SingularityFlags:
        return SingularityFlags.evaluate(self.elements)

    def scene(self) -> SceneGeometry:
        """Recompute the scene for the current snapshot."""
        return build_scene(self.elements)

    def request_explanation(self, key: ParameterKey) -> Future:
        """
        Ask for an explanation of ``key`` at its current value.

        Returns:
            Future resolving to an ``Explanation``
        """
        key = ParameterKey(key)
        info = PARAMETERS[key]
        title = f"{info.name} ({info.symbol})"
        value = presentation_value(key, self.elements)
        unit = "degrees" if info.in_degrees else info.unit

        outer: Future = Future()
        inner = self.explainer.explain_async(title, value, unit)

        def _done(fut: Future) -> None:
            try:
                outer.set_result(Explanation(title=title, content=fut.result()))
            except Exception as e:  # explain() itself should never raise
                logger.error(f"Explanation for {key.value} failed: {e}")
                outer.set_result(Explanation(
                    title=explanation_config.ERROR_TITLE,
                    content=explanation_config.UNAVAILABLE_TEXT,
                ))

        inner.add_done_callback(_done)
        return outer

    def close(self) -> None:
        """Close the explainer if this session created it; a passed-in one stays open."""
        if self._owns_explainer:
            self._explainer.close()
            self._explainer = None
            self._owns_explainer = False

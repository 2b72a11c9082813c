"""
AI Explanation Client

Asks a generative-language service (Gemini ``generateContent`` REST endpoint)
for a short, beginner-level explanation of an orbital element at its current
value.

Failures never propagate to the caller: a missing API key, network errors,
HTTP errors and malformed responses are logged and turned into a generic
"unavailable" message. Geometry never depends on this module.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Dict, Optional

import requests

from orbit_visualizer.config import explanation_config

logger = logging.getLogger(__name__)


class ExplanationError(Exception):
    """Base class for explanation service failures."""


class ExplanationConfigError(ExplanationError):
    """Raised when the service is not configured (e.g. missing API key)."""


class ExplanationResponseError(ExplanationError):
    """Raised when the service answer cannot be interpreted."""


def build_prompt(name: str, value: float, unit: str) -> str:
    """Prompt asking for a short, formula-free explanation."""
    return (
        "You are an astrodynamics teacher. Explain the orbital element "
        f"\"{name}\" to a beginner.\n"
        f"Its current value is {value:.2f} {unit}.\n\n"
        "Explain vividly and intuitively:\n"
        "1. What does this parameter represent geometrically? (for example, how "
        "flattened the shape is, or how tilted the orbit plane is)\n"
        "2. What does the current value mean?\n\n"
        f"Keep the explanation short (under {explanation_config.MAX_WORDS} words) "
        "and avoid complicated formulas."
    )


def extract_text(payload: Dict[str, Any]) -> str:
    """
    Concatenate the text parts of the first candidate.

    Raises:
        ExplanationResponseError: if the payload has no candidates structure
    """
    try:
        candidates = payload.get("candidates") or []
        if not candidates:
            return ""
        parts = candidates[0].get("content", {}).get("parts", [])
        return "".join(part.get("text", "") for part in parts).strip()
    except (AttributeError, TypeError) as e:
        raise ExplanationResponseError(f"Unexpected response structure: {e}") from e


class ExplanationClient:
    """
    Client for the explanation service.

    Parameters
    ----------
    api_key : str, optional
        Service API key. Defaults to the ``GEMINI_API_KEY``/``API_KEY`` env var.
    model : str, optional
        Model name. Defaults to ``config.ExplanationConfig.MODEL``.
    timeout : float, optional
        Request timeout in seconds.
    session : requests.Session, optional
        HTTP session to use (tests inject a mock here).
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self._api_key = api_key
        self.model = model or explanation_config.MODEL
        self.timeout = timeout if timeout is not None else explanation_config.TIMEOUT_S
        self.session = session or requests.Session()
        self._executor = None

    @property
    def api_key(self) -> str:
        key = self._api_key or explanation_config.api_key()
        if not key:
            raise ExplanationConfigError("API key environment variable is missing")
        return key

    @property
    def url(self) -> str:
        return f"{explanation_config.API_BASE}/models/{self.model}:generateContent"

    def _request(self, prompt: str) -> str:
        response = self.session.post(
            self.url,
            headers={"x-goog-api-key": self.api_key},
            json={"contents": [{"parts": [{"text": prompt}]}]},
            timeout=self.timeout,
        )
        response.raise_for_status()
        try:
            payload = response.json()
        except ValueError as e:
            raise ExplanationResponseError(f"Response is not JSON: {e}") from e
        return extract_text(payload)

    def explain(self, name: str, value: float, unit: str) -> str:
        """
        Explanation text for a parameter, or a fallback message.

        Args:
            name: Display name of the parameter
            value: Current value in presentation units
            unit: Unit label

        Returns:
            Explanation text; never raises for service failures
        """
        logger.debug(f"Requesting explanation for {name} = {value:.2f} {unit}")
        try:
            text = self._request(build_prompt(name, value, unit))
        except (ExplanationError, requests.RequestException) as e:
            logger.error(f"Explanation request failed for {name}: {e}")
            return explanation_config.UNAVAILABLE_TEXT

        if not text:
            logger.warning(f"Explanation service returned no text for {name}")
            return explanation_config.NO_EXPLANATION_TEXT
        return text

    def explain_async(self, name: str, value: float, unit: str) -> Future:
        """Run ``explain`` on a worker thread; the Future resolves to the text."""
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=explanation_config.MAX_WORKERS,
                thread_name_prefix="explanation",
            )
        return self._executor.submit(self.explain, name, value, unit)

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=False, cancel_futures=True)
            self._executor = None
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

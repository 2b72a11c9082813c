"""
Tests for the Explanation Client and Explorer Session

The HTTP layer is mocked; no network access is needed.

Run with:
    python -m pytest tests/test_explanation_and_session.py -v
"""

import math
import os
import threading
import unittest
from concurrent.futures import Future
from unittest.mock import MagicMock, patch

import requests

from orbit_visualizer.config import explanation_config
from orbit_visualizer.elements import DEFAULT_ELEMENTS, InvalidElementsError, ParameterKey
from orbit_visualizer.explanation import (
    ExplanationClient,
    ExplanationResponseError,
    build_prompt,
    extract_text,
)
from orbit_visualizer.guides import SceneGeometry
from orbit_visualizer.session import Explanation, ExplorerSession


def _response(payload=None, status_error=None, json_error=None):
    response = MagicMock()
    if status_error is not None:
        response.raise_for_status.side_effect = status_error
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


def _payload(*texts):
    return {"candidates": [{"content": {"parts": [{"text": t} for t in texts]}}]}


class TestExplanationClient(unittest.TestCase):
    """Test request construction and failure isolation."""

    def setUp(self):
        self.http = MagicMock()
        self.client = ExplanationClient(api_key="test-key", model="test-model",
                                        timeout=5.0, session=self.http)

    def tearDown(self):
        self.client.close()

    def test_successful_explanation(self):
        self.http.post.return_value = _response(_payload("Tilt of the ", "orbit plane."))

        text = self.client.explain("Inclination (i)", 45.0, "degrees")

        self.assertEqual(text, "Tilt of the orbit plane.")
        args, kwargs = self.http.post.call_args
        self.assertTrue(args[0].endswith("/models/test-model:generateContent"))
        self.assertEqual(kwargs["headers"]["x-goog-api-key"], "test-key")
        self.assertEqual(kwargs["timeout"], 5.0)
        prompt = kwargs["json"]["contents"][0]["parts"][0]["text"]
        self.assertIn("Inclination (i)", prompt)
        self.assertIn("45.00 degrees", prompt)

    def test_prompt_formats_value(self):
        prompt = build_prompt("Eccentricity (e)", 0.456, "dimensionless")
        self.assertIn("0.46 dimensionless", prompt)
        self.assertIn("Eccentricity (e)", prompt)

    def test_network_error_returns_unavailable(self):
        self.http.post.side_effect = requests.ConnectionError("offline")
        self.assertEqual(self.client.explain("a", 8.0, "DU"),
                         explanation_config.UNAVAILABLE_TEXT)

    def test_http_error_returns_unavailable(self):
        self.http.post.return_value = _response(
            status_error=requests.HTTPError("500 Server Error"))
        self.assertEqual(self.client.explain("a", 8.0, "DU"),
                         explanation_config.UNAVAILABLE_TEXT)

    def test_invalid_json_returns_unavailable(self):
        self.http.post.return_value = _response(json_error=ValueError("not json"))
        self.assertEqual(self.client.explain("a", 8.0, "DU"),
                         explanation_config.UNAVAILABLE_TEXT)

    def test_empty_answer_returns_placeholder(self):
        self.http.post.return_value = _response({"candidates": []})
        self.assertEqual(self.client.explain("a", 8.0, "DU"),
                         explanation_config.NO_EXPLANATION_TEXT)

    def test_missing_api_key(self):
        """Without a key no request is sent and the caller gets the fallback text."""
        client = ExplanationClient(session=self.http)
        with patch.dict(os.environ, {}, clear=True):
            self.assertEqual(client.explain("a", 8.0, "DU"),
                             explanation_config.UNAVAILABLE_TEXT)
        self.http.post.assert_not_called()

    def test_api_key_from_environment(self):
        self.http.post.return_value = _response(_payload("ok"))
        client = ExplanationClient(session=self.http)
        with patch.dict(os.environ, {"GEMINI_API_KEY": "env-key"}, clear=True):
            self.assertEqual(client.explain("a", 8.0, "DU"), "ok")
        self.assertEqual(self.http.post.call_args.kwargs["headers"]["x-goog-api-key"], "env-key")

    def test_explain_async(self):
        self.http.post.return_value = _response(_payload("async text"))
        future = self.client.explain_async("a", 8.0, "DU")
        self.assertEqual(future.result(timeout=5), "async text")

    def test_close_cancels_queued_requests(self):
        """Requests still waiting for a worker are cancelled when the client closes."""
        release = threading.Event()
        started = threading.Semaphore(0)

        def _slow_explain(name, value, unit):
            started.release()
            release.wait(5)
            return "late"

        self.client.explain = _slow_explain
        futures = [self.client.explain_async("a", 8.0, "DU")
                   for _ in range(explanation_config.MAX_WORKERS + 2)]
        try:
            # every worker is busy before closing
            for _ in range(explanation_config.MAX_WORKERS):
                self.assertTrue(started.acquire(timeout=5))
            self.client.close()
            self.assertTrue(futures[-1].cancelled())
            self.http.close.assert_called_once()
        finally:
            release.set()
        for future in futures[:explanation_config.MAX_WORKERS]:
            self.assertEqual(future.result(timeout=5), "late")

    def test_extract_text_malformed(self):
        with self.assertRaises(ExplanationResponseError):
            extract_text({"candidates": ["not a dict"]})
        self.assertEqual(extract_text({}), "")


class _StubExplainer:
    """Explainer returning a pre-resolved future."""

    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error
        self.calls = []
        self.closed = False

    def explain_async(self, name, value, unit):
        self.calls.append((name, value, unit))
        future = Future()
        if self.error is not None:
            future.set_exception(self.error)
        else:
            future.set_result(self.text)
        return future

    def close(self):
        self.closed = True


class TestExplorerSession(unittest.TestCase):
    """Test session state handling."""

    def test_initial_state(self):
        session = ExplorerSession()
        self.assertIs(session.elements, DEFAULT_ELEMENTS)
        self.assertEqual(session.reset_count, 0)

    def test_update_replaces_one_field(self):
        session = ExplorerSession()
        updated = session.update(ParameterKey.E, 0.2)
        self.assertEqual(updated.e, 0.2)
        self.assertIs(session.elements, updated)
        self.assertEqual(updated.a, DEFAULT_ELEMENTS.a)
        self.assertEqual(DEFAULT_ELEMENTS.e, 0.4)

    def test_update_in_degrees(self):
        session = ExplorerSession()
        session.update(ParameterKey.I, 90.0, degrees=True)
        self.assertAlmostEqual(session.elements.i, math.pi / 2, places=12)
        session.update("a", 12.0, degrees=True)
        self.assertEqual(session.elements.a, 12.0)

    def test_invalid_update_keeps_snapshot(self):
        session = ExplorerSession()
        before = session.elements
        with self.assertRaises(InvalidElementsError):
            session.update(ParameterKey.E, 1.0)
        self.assertIs(session.elements, before)

    def test_reset(self):
        session = ExplorerSession()
        session.update(ParameterKey.A, 14.0)
        session.reset()
        self.assertEqual(session.elements, DEFAULT_ELEMENTS)
        self.assertEqual(session.reset_count, 1)

    def test_flags_and_scene_follow_updates(self):
        session = ExplorerSession()
        self.assertFalse(session.flags().circular)
        session.update(ParameterKey.E, 0.0)
        self.assertTrue(session.flags().circular)
        scene = session.scene()
        self.assertIsInstance(scene, SceneGeometry)
        self.assertEqual(scene.elements, session.elements)

    def test_request_explanation(self):
        stub = _StubExplainer(text="Tilted plane.")
        session = ExplorerSession(explainer=stub)

        result = session.request_explanation(ParameterKey.I).result(timeout=5)

        self.assertEqual(result, Explanation(title="Inclination (i)", content="Tilted plane."))
        name, value, unit = stub.calls[0]
        self.assertAlmostEqual(value, 45.0)
        self.assertEqual(unit, "degrees")

    def test_request_explanation_failure(self):
        session = ExplorerSession(explainer=_StubExplainer(error=RuntimeError("boom")))
        result = session.request_explanation(ParameterKey.E).result(timeout=5)
        self.assertEqual(result.title, explanation_config.ERROR_TITLE)
        self.assertEqual(result.content, explanation_config.UNAVAILABLE_TEXT)

    def test_close_leaves_caller_explainer_open(self):
        """An explainer passed in by the caller is still owned by the caller."""
        stub = _StubExplainer(text="ok")
        session = ExplorerSession(explainer=stub)
        session.close()
        self.assertFalse(stub.closed)

    def test_close_shuts_down_own_explainer(self):
        session = ExplorerSession()
        with patch("orbit_visualizer.session.ExplanationClient") as client_cls:
            created = session.explainer
            session.close()
        self.assertIs(created, client_cls.return_value)
        created.close.assert_called_once()


if __name__ == "__main__":
    unittest.main()

# tests/test_gemini_client.py
"""Tests for the Gemini REST client (HTTP session mocked)."""

from unittest.mock import Mock

import pytest
import requests

from cryptodeck.app.advisor_service import AdvisorService
from cryptodeck.backend.ai.gemini_client import (
    GeminiAuthError,
    GeminiClient,
    GeminiConfig,
    GeminiError,
    GeminiNetworkError,
    GeminiRateLimitError,
    GeminiResponseError,
)


def _response(status=200, payload=None, text=""):
    resp = Mock(spec=requests.Response)
    resp.status_code = status
    resp.text = text
    resp.reason = "reason"
    if payload is None:
        resp.json.side_effect = ValueError("no json")
    else:
        resp.json.return_value = payload
    return resp


def _ok(text="Hello"):
    return _response(200, {"candidates": [{"content": {"parts": [{"text": text}]}}]})


@pytest.fixture
def session():
    return Mock()


def _client(session, api_key="test-key"):
    cfg = GeminiConfig(api_key=api_key, base_url="https://example.test/v1beta", model="gemini-2.5-flash")
    return GeminiClient(cfg, session=session)


class TestGenerate:
    def test_success_builds_request(self, session):
        session.post.return_value = _ok("BTC looks strong")
        client = _client(session)

        assert client.generate("prompt", system_instruction="be brief") == "BTC looks strong"

        url = session.post.call_args.args[0]
        kwargs = session.post.call_args.kwargs
        assert url == "https://example.test/v1beta/models/gemini-2.5-flash:generateContent"
        assert kwargs["headers"]["x-goog-api-key"] == "test-key"
        assert kwargs["json"]["contents"][0]["parts"][0]["text"] == "prompt"
        assert kwargs["json"]["systemInstruction"] == {"parts": [{"text": "be brief"}]}

    def test_model_override_and_no_system_instruction(self, session):
        session.post.return_value = _ok()
        _client(session).generate("p", model="gemini-pro")

        assert session.post.call_args.args[0].endswith("/models/gemini-pro:generateContent")
        assert "systemInstruction" not in session.post.call_args.kwargs["json"]

    def test_multiple_parts_joined(self, session):
        session.post.return_value = _response(
            200, {"candidates": [{"content": {"parts": [{"text": "a"}, {"text": "b"}]}}]}
        )
        assert _client(session).generate("p") == "ab"

    def test_no_key_raises_without_request(self, session):
        client = _client(session, api_key=None)
        assert client.has_api_key is False
        with pytest.raises(GeminiAuthError):
            client.generate("p")
        session.post.assert_not_called()

    @pytest.mark.parametrize(
        "status,exc",
        [(401, GeminiAuthError), (403, GeminiAuthError), (429, GeminiRateLimitError), (500, GeminiError)],
    )
    def test_http_errors(self, session, status, exc):
        session.post.return_value = _response(status, {"error": {"message": "boom"}})
        with pytest.raises(exc, match="boom"):
            _client(session).generate("p")

    def test_error_body_without_json(self, session):
        session.post.return_value = _response(502, None, text="Bad Gateway")
        with pytest.raises(GeminiError, match="API error 502: Bad Gateway"):
            _client(session).generate("p")

    def test_connection_error(self, session):
        session.post.side_effect = requests.ConnectionError("refused")
        with pytest.raises(GeminiNetworkError, match="Network error"):
            _client(session).generate("p")

    def test_empty_candidates(self, session):
        session.post.return_value = _response(200, {"candidates": [], "promptFeedback": {"blockReason": "SAFETY"}})
        with pytest.raises(GeminiResponseError, match="SAFETY"):
            _client(session).generate("p")

    def test_candidate_without_text(self, session):
        session.post.return_value = _response(200, {"candidates": [{"finishReason": "MAX_TOKENS"}]})
        with pytest.raises(GeminiResponseError):
            _client(session).generate("p")

    def test_invalid_json(self, session):
        session.post.return_value = _response(200, None)
        with pytest.raises(GeminiResponseError):
            _client(session).generate("p")


class TestAdvisorIntegration:
    def test_rate_limit_becomes_message(self, session):
        session.post.return_value = _response(429, {"error": {"message": "quota"}})
        client = _client(session)
        advisor = AdvisorService(client, client.has_api_key)

        assert advisor.request_advice("q", "en") == "An error occurred while calling the Gemini API: Rate limit: quota"

    def test_missing_key_makes_no_request(self, session):
        client = _client(session, api_key="")
        advisor = AdvisorService(client, client.has_api_key)

        assert advisor.request_analysis("BTC", "vi").startswith("Lỗi: API key")
        session.post.assert_not_called()

"""Provider boundary behaviour without real network calls."""

import base64

import pytest
import requests

from logic.prompts import build_makeup_prompt
from tools import genai_provider
from tools.genai_provider import (
    GeminiRecommendationProvider,
    HttpRecommendationProvider,
    MockRecommendationProvider,
    OfflineRecommendationProvider,
    RecommendationProvider,
    RecommendationProviderError,
    decode_image,
)


class _FakeResponse:
    def __init__(self, text: str = "", status_code: int = 200) -> None:
        self.text = text
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"status {self.status_code}")


def test_gemini_provider_without_key_fails_fast(monkeypatch) -> None:
    def _unexpected(*args, **kwargs):
        raise AssertionError("no SDK call expected without an API key")

    monkeypatch.setattr(genai_provider.genai, "configure", _unexpected)
    provider = GeminiRecommendationProvider(api_key=None)

    with pytest.raises(RecommendationProviderError) as excinfo:
        provider.request_recommendation("wedding makeup")
    assert excinfo.value.reason == "missing_api_key"
    assert isinstance(provider, RecommendationProvider)


class _GeminiResponse:
    def __init__(self, text: str) -> None:
        self.text = text


class _BlockedResponse:
    @property
    def text(self) -> str:
        raise ValueError("response has no text parts")


def _fake_gemini(monkeypatch, outcomes: list) -> dict:
    """Replace the SDK model with one that replays ``outcomes`` call by call."""

    seen: dict = {"configure": [], "model": [], "calls": []}

    class _FakeModel:
        def __init__(self, **kwargs) -> None:
            seen["model"].append(kwargs)

        def generate_content(self, parts, request_options=None):
            seen["calls"].append({"parts": parts, "request_options": request_options})
            outcome = outcomes.pop(0)
            if isinstance(outcome, Exception):
                raise outcome
            return outcome

    monkeypatch.setattr(genai_provider.genai, "configure", lambda **kwargs: seen["configure"].append(kwargs))
    monkeypatch.setattr(genai_provider.genai, "GenerationConfig", lambda **kwargs: kwargs)
    monkeypatch.setattr(genai_provider.genai, "GenerativeModel", _FakeModel)
    return seen


def test_gemini_provider_uses_json_mode_and_request_timeout(monkeypatch) -> None:
    seen = _fake_gemini(monkeypatch, [_GeminiResponse('{"lipstick": {}}')])
    provider = GeminiRecommendationProvider(api_key="test-key", model="models/test", timeout_seconds=7.0)

    assert provider.request_recommendation("soft glam") == '{"lipstick": {}}'
    assert seen["configure"] == [{"api_key": "test-key"}]
    model_kwargs = seen["model"][0]
    assert model_kwargs["model_name"] == "models/test"
    assert model_kwargs["generation_config"]["response_mime_type"] == "application/json"
    assert "makeup artist" in model_kwargs["system_instruction"]
    assert seen["calls"] == [{"parts": ["soft glam"], "request_options": {"timeout": 7.0}}]


def test_gemini_provider_retries_after_timeout(monkeypatch) -> None:
    seen = _fake_gemini(
        monkeypatch,
        [genai_provider.google_exceptions.DeadlineExceeded("slow"), _GeminiResponse('{"ok": true}')],
    )
    provider = GeminiRecommendationProvider(api_key="test-key", max_retries=1)

    assert provider.request_recommendation("party glam") == '{"ok": true}'
    assert len(seen["calls"]) == 2
    assert len(seen["model"]) == 1


@pytest.mark.parametrize(
    "make_outcome, reason",
    [
        (lambda: genai_provider.google_exceptions.DeadlineExceeded("slow"), "timeout"),
        (lambda: genai_provider.google_exceptions.GoogleAPIError("quota"), "request_error"),
        (_BlockedResponse, "empty_response"),
        (lambda: _GeminiResponse("   "), "empty_response"),
    ],
)
def test_gemini_provider_failures_carry_reason_after_retries(monkeypatch, make_outcome, reason) -> None:
    seen = _fake_gemini(monkeypatch, [make_outcome(), make_outcome()])
    provider = GeminiRecommendationProvider(api_key="test-key", max_retries=1)

    with pytest.raises(RecommendationProviderError) as excinfo:
        provider.request_recommendation("date night")
    assert excinfo.value.reason == reason
    assert len(seen["calls"]) == 2


def test_gemini_provider_skips_undecodable_images(monkeypatch) -> None:
    seen = _fake_gemini(monkeypatch, [_GeminiResponse("{}")])
    encoded = base64.b64encode(b"jpeg-bytes").decode()
    provider = GeminiRecommendationProvider(api_key="test-key")

    provider.request_recommendation("match this look", images=["not base64!!", f"data:image/jpeg;base64,{encoded}"])

    assert seen["calls"][0]["parts"] == ["match this look", {"mime_type": "image/jpeg", "data": b"jpeg-bytes"}]


def test_http_provider_posts_prompt_with_bearer_token(monkeypatch) -> None:
    captured = {}

    def fake_post(url, json=None, headers=None, timeout=None):
        captured.update(url=url, json=json, headers=headers, timeout=timeout)
        return _FakeResponse('{"ok": true}')

    monkeypatch.setattr(genai_provider.requests, "post", fake_post)
    provider = HttpRecommendationProvider(endpoint="https://example.com/recommend", api_key="secret", timeout_seconds=3)

    text = provider.request_recommendation("soft glam", images=["data:image/jpeg;base64,QUJD"])

    assert text == '{"ok": true}'
    assert captured["headers"]["Authorization"] == "Bearer secret"
    assert captured["json"] == {"prompt": "soft glam", "imageBase64": "QUJD"}
    assert captured["timeout"] == 3


def test_http_provider_retries_once_then_raises(monkeypatch) -> None:
    calls = []

    def failing_post(*args, **kwargs):
        calls.append(1)
        raise requests.ConnectionError("down")

    monkeypatch.setattr(genai_provider.requests, "post", failing_post)
    provider = HttpRecommendationProvider(endpoint="https://example.com", api_key="k", max_retries=1)

    with pytest.raises(RecommendationProviderError) as excinfo:
        provider.request_recommendation("x")
    assert excinfo.value.reason == "request_error"
    assert len(calls) == 2


def test_http_provider_reports_timeouts_and_http_errors(monkeypatch) -> None:
    def timeout_post(*args, **kwargs):
        raise requests.Timeout("slow")

    monkeypatch.setattr(genai_provider.requests, "post", timeout_post)
    provider = HttpRecommendationProvider(endpoint="https://example.com", api_key="k", max_retries=0)
    with pytest.raises(RecommendationProviderError) as excinfo:
        provider.request_recommendation("x")
    assert excinfo.value.reason == "timeout"

    monkeypatch.setattr(genai_provider.requests, "post", lambda *a, **k: _FakeResponse("nope", 500))
    with pytest.raises(RecommendationProviderError) as excinfo:
        provider.request_recommendation("x")
    assert excinfo.value.reason == "request_error"


def test_http_provider_requires_endpoint_and_key() -> None:
    with pytest.raises(RecommendationProviderError) as excinfo:
        HttpRecommendationProvider(endpoint=None, api_key="k").request_recommendation("x")
    assert excinfo.value.reason == "missing_endpoint"
    with pytest.raises(RecommendationProviderError) as excinfo:
        HttpRecommendationProvider(endpoint="https://example.com").request_recommendation("x")
    assert excinfo.value.reason == "missing_api_key"


def test_offline_and_mock_providers() -> None:
    with pytest.raises(RecommendationProviderError) as excinfo:
        OfflineRecommendationProvider().request_recommendation("x")
    assert excinfo.value.reason == "offline"

    mock = MockRecommendationProvider(response_text="{}")
    assert mock.request_recommendation("hello", images=["abc"]) == "{}"
    assert mock.calls == [{"prompt": "hello", "images": ["abc"]}]

    with pytest.raises(RecommendationProviderError):
        MockRecommendationProvider().request_recommendation("x")


def test_decode_image_accepts_data_urls() -> None:
    encoded = base64.b64encode(b"jpeg-bytes").decode()
    assert decode_image(encoded) == b"jpeg-bytes"
    assert decode_image(f"data:image/jpeg;base64,{encoded}") == b"jpeg-bytes"


def test_build_makeup_prompt_includes_occasion_guidance_and_contract() -> None:
    prompt = build_makeup_prompt("Bridal look for my wedding", "Bridal Makeup")

    assert "Detected occasion: Bridal Makeup" in prompt
    assert "SPECIFIC OCCASION GUIDANCE - WEDDING" in prompt
    assert "lookDescription" in prompt
    assert "#RRGGBB" in prompt

    plain = build_makeup_prompt("surprise me", "Custom Makeup Look")
    assert "SPECIFIC OCCASION GUIDANCE" not in plain

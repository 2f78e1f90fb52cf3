"""Generative recommendation providers.

Providers return the raw response text. Parsing and fallback selection live in
:mod:`logic.filter_synthesizer`; every provider failure is reported as a
:class:`RecommendationProviderError` carrying a short machine-readable reason.
"""

from __future__ import annotations

import base64
import binascii
import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence

import google.generativeai as genai
import requests
from google.api_core import exceptions as google_exceptions
from pydantic import BaseModel, Field

from logic.prompts import system_instruction

LOGGER = logging.getLogger(__name__)

GENERATION_SETTINGS: Dict[str, object] = {
    "temperature": 0.2,
    "top_k": 32,
    "top_p": 0.95,
    "max_output_tokens": 1024,
    "response_mime_type": "application/json",
}


class RecommendationProviderError(RuntimeError):
    """Raised when the upstream service cannot produce a usable response."""

    def __init__(self, reason: str, message: Optional[str] = None) -> None:
        super().__init__(message or reason)
        self.reason = reason


class RecommendationRequest(BaseModel):
    """Input contract for one upstream call."""

    prompt: str = Field(min_length=1)
    images: List[str] = Field(default_factory=list)


def decode_image(image_base64: str) -> bytes:
    """Decode a base64 image, accepting ``data:image/...;base64,`` prefixes."""

    payload = image_base64.split(",", 1)[1] if image_base64.startswith("data:") else image_base64
    return base64.b64decode(payload, validate=True)


def strip_data_url(image_base64: str) -> str:
    return image_base64.split(",", 1)[1] if image_base64.startswith("data:") else image_base64


class RecommendationProvider(ABC):
    """Abstract generative recommendation service."""

    name = "abstract"

    @abstractmethod
    def request_recommendation(self, prompt: str, images: Sequence[str] = ()) -> str:
        """Return response text expected to hold one JSON object."""


class GeminiRecommendationProvider(RecommendationProvider):
    """Gemini provider in JSON mode with a per-call timeout and bounded retries."""

    name = "gemini"

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "models/gemini-1.5-flash-002",
        timeout_seconds: float = 15.0,
        max_retries: int = 1,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.timeout_seconds = timeout_seconds
        self.max_retries = max(0, int(max_retries))
        self._model: genai.GenerativeModel | None = None

    def _client(self) -> genai.GenerativeModel:
        if self._model is None:
            genai.configure(api_key=self.api_key)
            self._model = genai.GenerativeModel(
                model_name=self.model,
                system_instruction=system_instruction("makeup artist"),
                generation_config=genai.GenerationConfig(**GENERATION_SETTINGS),
            )
        return self._model

    def _parts(self, prompt: str, images: Sequence[str]) -> List[object]:
        parts: List[object] = [prompt]
        for index, image in enumerate(images):
            try:
                parts.append({"mime_type": "image/jpeg", "data": decode_image(image)})
            except (binascii.Error, ValueError):
                LOGGER.warning("Skipping undecodable image", extra={"reason": "invalid_image", "image_index": index})
        return parts

    def request_recommendation(self, prompt: str, images: Sequence[str] = ()) -> str:
        if not self.api_key:
            raise RecommendationProviderError("missing_api_key", "Gemini API key is not configured")

        client = self._client()
        parts = self._parts(prompt, images)
        last_reason = "request_error"
        for attempt in range(self.max_retries + 1):
            try:
                response = client.generate_content(parts, request_options={"timeout": self.timeout_seconds})
                text = response.text
            except google_exceptions.DeadlineExceeded as exc:
                last_reason = "timeout"
                LOGGER.warning("Gemini request timed out", extra={"reason": last_reason, "attempt": attempt + 1})
                error: Exception = exc
            except google_exceptions.GoogleAPIError as exc:
                last_reason = "request_error"
                LOGGER.warning("Gemini request failed", extra={"reason": last_reason, "attempt": attempt + 1})
                error = exc
            except ValueError as exc:
                # response.text raises when the candidate was blocked or empty.
                last_reason = "empty_response"
                LOGGER.warning("Gemini returned no text", extra={"reason": last_reason, "attempt": attempt + 1})
                error = exc
            else:
                if text and text.strip():
                    return text
                last_reason = "empty_response"
                error = RecommendationProviderError(last_reason)
        raise RecommendationProviderError(last_reason, f"Gemini request failed: {error}")


class HttpRecommendationProvider(RecommendationProvider):
    """Generic HTTPS endpoint accepting ``{prompt, imageBase64?}``."""

    name = "http"

    def __init__(
        self,
        endpoint: str | None,
        api_key: str | None = None,
        timeout_seconds: float = 15.0,
        max_retries: int = 1,
    ) -> None:
        self.endpoint = endpoint
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds
        self.max_retries = max(0, int(max_retries))

    def request_recommendation(self, prompt: str, images: Sequence[str] = ()) -> str:
        if not self.endpoint:
            raise RecommendationProviderError("missing_endpoint", "HTTP recommendation endpoint is not configured")
        if not self.api_key:
            raise RecommendationProviderError("missing_api_key", "HTTP recommendation API key is not configured")

        body: Dict[str, object] = {"prompt": prompt}
        if images:
            body["imageBase64"] = strip_data_url(images[0])
        headers = {"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"}

        last_reason = "request_error"
        for attempt in range(self.max_retries + 1):
            try:
                response = requests.post(self.endpoint, json=body, headers=headers, timeout=self.timeout_seconds)
                response.raise_for_status()
            except requests.Timeout:
                last_reason = "timeout"
                LOGGER.warning("Recommendation endpoint timed out", extra={"reason": last_reason, "attempt": attempt + 1})
                continue
            except requests.RequestException:
                last_reason = "request_error"
                LOGGER.warning("Recommendation endpoint unreachable", extra={"reason": last_reason, "attempt": attempt + 1})
                continue
            if response.text and response.text.strip():
                return response.text
            last_reason = "empty_response"
        raise RecommendationProviderError(last_reason, f"Recommendation endpoint failed after {self.max_retries + 1} attempts")


class OfflineRecommendationProvider(RecommendationProvider):
    """Never calls out; every request is served from the fallback table."""

    name = "offline"

    def request_recommendation(self, prompt: str, images: Sequence[str] = ()) -> str:
        raise RecommendationProviderError("offline", "Generative recommendations are disabled")


class MockRecommendationProvider(RecommendationProvider):
    """Deterministic provider for tests: returns canned text or raises."""

    name = "mock"

    def __init__(self, response_text: str | None = None, error: Exception | None = None) -> None:
        self.response_text = response_text
        self.error = error
        self.calls: List[Dict[str, object]] = []

    def request_recommendation(self, prompt: str, images: Sequence[str] = ()) -> str:
        self.calls.append({"prompt": prompt, "images": list(images)})
        if self.error is not None:
            raise self.error
        if self.response_text is None:
            raise RecommendationProviderError("empty_response")
        return self.response_text


__all__ = [
    "GENERATION_SETTINGS",
    "GeminiRecommendationProvider",
    "HttpRecommendationProvider",
    "MockRecommendationProvider",
    "OfflineRecommendationProvider",
    "RecommendationProvider",
    "RecommendationProviderError",
    "RecommendationRequest",
    "decode_image",
]

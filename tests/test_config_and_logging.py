"""Configuration loading, log redaction and call instrumentation."""

import json
import logging

import pytest
from pydantic import BaseModel, ValidationError

from aurafit_app.config import AuraFitConfig
from aurafit_app.logging_config import JsonFormatter, log_event, redact_for_log
from tools.observability import instrument_tool

_ENV_KEYS = (
    "APP_ENV",
    "APP_CONFIG_PATH",
    "AURAFIT_CONFIG_DIR",
    "GOOGLE_API_KEY",
    "MODEL",
    "GENAI_PROVIDER",
    "GENAI_ENDPOINT",
    "REQUEST_TIMEOUT_SECONDS",
    "MAX_RETRIES",
    "CATALOG_PATH",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_from_env_defaults() -> None:
    config = AuraFitConfig.from_env()
    assert config.genai_provider == "gemini"
    assert config.api_key is None
    assert config.max_retries == 1
    assert config.request_timeout_seconds == 15.0


def test_yaml_file_is_merged_and_env_wins(tmp_path, monkeypatch) -> None:
    env_dir = tmp_path / "environments"
    env_dir.mkdir()
    (env_dir / "staging.yaml").write_text(
        "# staging settings\n"
        "genai_provider: http\n"
        "genai_endpoint: \"https://recommend.example.com\"\n"
        "max_retries: 3\n"
    )
    monkeypatch.setenv("APP_ENV", "staging")
    monkeypatch.setenv("AURAFIT_CONFIG_DIR", str(env_dir))
    monkeypatch.setenv("MAX_RETRIES", "0")
    monkeypatch.setenv("GOOGLE_API_KEY", "injected-key")

    config = AuraFitConfig.from_env()

    assert config.environment == "staging"
    assert config.genai_provider == "http"
    assert config.genai_endpoint == "https://recommend.example.com"
    assert config.max_retries == 0
    assert config.api_key == "injected-key"


def test_invalid_provider_is_rejected() -> None:
    with pytest.raises(ValueError):
        AuraFitConfig(genai_provider="carrier-pigeon")
    assert AuraFitConfig(genai_provider=" Offline ").genai_provider == "offline"


def test_redact_for_log_masks_prompts_images_and_keys() -> None:
    scrubbed = redact_for_log(
        {
            "prompt": "my wedding",
            "note": "contact me at shopper@example.com",
            "nested": ["data:image/jpeg;base64,AAAA", "key AIzaSyA1234567890abcdefghijklmnop"],
            "count": 3,
        }
    )

    assert scrubbed["prompt"] == "[redacted]"
    assert "shopper@example.com" not in scrubbed["note"]
    assert scrubbed["nested"][0] == "[redacted-image]"
    assert "AIza" not in scrubbed["nested"][1]
    assert scrubbed["count"] == 3


def test_log_event_emits_json_with_correlation_id(caplog) -> None:
    logger = logging.getLogger("aurafit.test")
    with caplog.at_level(logging.INFO, logger="aurafit.test"):
        log_event(logger, level=logging.INFO, event="unit_event", correlation_id="abc123", query="pastel sarees", count=2)

    record = caplog.records[-1]
    assert record.correlation_id == "abc123"
    assert record.query == "[redacted]"

    payload = json.loads(JsonFormatter().format(record))
    assert payload["event"] == "unit_event"
    assert payload["correlation_id"] == "abc123"
    assert payload["count"] == 2


def test_instrument_tool_validates_and_reraises() -> None:
    class EchoInput(BaseModel):
        text: str

    @instrument_tool("echo", input_model=EchoInput)
    def echo(text: str) -> str:
        return text.upper()

    @instrument_tool("echo_default", input_model=EchoInput, on_validation_error=lambda exc: "invalid")
    def echo_default(text: str) -> str:
        return text

    @instrument_tool("explode")
    def explode() -> None:
        raise RuntimeError("boom")

    assert echo(text="hi") == "HI"
    with pytest.raises(ValidationError):
        echo(text=None)
    assert echo_default(text=None) == "invalid"
    with pytest.raises(RuntimeError):
        explode()

"""Runtime configuration for the AURAFIT recommendation service."""

from dataclasses import dataclass
from pathlib import Path
import os
from typing import Dict, Mapping, Optional

DEFAULT_GEMINI_MODEL = "models/gemini-1.5-flash-002"
GENAI_PROVIDERS = ("gemini", "http", "offline")

# Setting name -> environment variable. The environment always wins over the file.
ENV_VARS: Dict[str, str] = {
    "model": "MODEL",
    "google_api_key": "GOOGLE_API_KEY",
    "genai_provider": "GENAI_PROVIDER",
    "genai_endpoint": "GENAI_ENDPOINT",
    "request_timeout_seconds": "REQUEST_TIMEOUT_SECONDS",
    "max_retries": "MAX_RETRIES",
    "catalog_path": "CATALOG_PATH",
}


@dataclass
class AuraFitConfig:
    """Settings for the recommendation pipeline and its generative provider.

    ``api_key`` is a secret: it is read from ``GOOGLE_API_KEY`` (or an
    environment file kept out of source control) and never has a default.
    ``genai_provider="offline"`` serves every request from the fallback table.
    """

    model: str = DEFAULT_GEMINI_MODEL
    api_key: Optional[str] = None
    genai_provider: str = "gemini"
    genai_endpoint: Optional[str] = None
    request_timeout_seconds: float = 15.0
    max_retries: int = 1
    catalog_path: Optional[str] = None
    environment: str | None = None

    def __post_init__(self) -> None:
        provider = (self.genai_provider or "gemini").strip().lower()
        if provider not in GENAI_PROVIDERS:
            raise ValueError(f"Unsupported genai_provider '{self.genai_provider}'. Allowed: {list(GENAI_PROVIDERS)}")
        self.genai_provider = provider
        self.request_timeout_seconds = float(self.request_timeout_seconds)
        if self.request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be positive")
        self.max_retries = max(0, int(self.max_retries))

    @classmethod
    def from_env(cls) -> "AuraFitConfig":
        """Build a config from environment variables over an optional settings file.

        The file is ``APP_CONFIG_PATH`` when set, otherwise
        ``$AURAFIT_CONFIG_DIR/<APP_ENV>.yaml`` (``config/environments`` by
        default). A missing file is ignored.
        """

        env_name = os.getenv("APP_ENV")
        settings = cls._load_settings_file(cls._settings_path(env_name))
        for key, env_var in ENV_VARS.items():
            if env_var in os.environ:
                settings[key] = os.environ[env_var]

        return cls(
            model=settings.get("model") or DEFAULT_GEMINI_MODEL,
            api_key=settings.get("google_api_key") or None,
            genai_provider=settings.get("genai_provider") or "gemini",
            genai_endpoint=settings.get("genai_endpoint") or None,
            request_timeout_seconds=float(settings.get("request_timeout_seconds") or 15),
            max_retries=int(settings.get("max_retries", 1) or 0),
            catalog_path=settings.get("catalog_path") or None,
            environment=env_name,
        )

    @staticmethod
    def _settings_path(env_name: Optional[str]) -> Optional[Path]:
        explicit = os.getenv("APP_CONFIG_PATH")
        if explicit:
            return Path(explicit)
        if env_name:
            return Path(os.getenv("AURAFIT_CONFIG_DIR", "config/environments")) / f"{env_name}.yaml"
        return None

    @staticmethod
    def _load_settings_file(path: Optional[Path]) -> Dict[str, str]:
        """Read flat ``key: value`` lines; comments and blank lines are skipped."""

        if path is None or not path.exists():
            return {}
        settings: Dict[str, str] = {}
        for line in path.read_text().splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#") or ":" not in stripped:
                continue
            key, raw_value = stripped.split(":", 1)
            settings[key.strip()] = _unquote(raw_value.strip())
        return settings


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def redacted_summary(config: AuraFitConfig) -> Mapping[str, object]:
    """Config fields safe to log or expose on a health endpoint."""

    return {
        "model": config.model,
        "genai_provider": config.genai_provider,
        "genai_endpoint_configured": bool(config.genai_endpoint),
        "api_key_configured": bool(config.api_key),
        "request_timeout_seconds": config.request_timeout_seconds,
        "max_retries": config.max_retries,
        "environment": config.environment or "local",
    }


__all__ = ["AuraFitConfig", "DEFAULT_GEMINI_MODEL", "ENV_VARS", "GENAI_PROVIDERS", "redacted_summary"]

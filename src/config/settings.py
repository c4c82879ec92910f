# src/config/settings.py - v2
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for provider keys, timeouts, retry counts, cache
backend selection and logging. Every field can be set through the
environment variable of the same name (case-insensitive).
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_GEOCODING_URL = "https://maps.googleapis.com/maps/api/geocode/json"


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === LLM PROVIDERS ===
    llm_default_provider: str = "openai"
    llm_default_model: str = "gpt-4o"
    llm_temperature: float = 0.1
    llm_max_tokens: int = 150
    llm_json_mode: bool = True
    llm_timeout_s: float = 10.0
    llm_max_retries: int = 1

    # Per-phase LLM assignment (provider:model)
    llm_phase_resolution: str = ""

    # Per-component LLM assignment (provider:model, highest priority)
    llm_address_extractor: str = ""

    # Provider API keys
    openai_api_key: str = ""
    anthropic_api_key: str = ""
    google_api_key: str = ""
    ollama_base_url: str = "http://localhost:11434"

    # === Geocoding ===
    google_geocoding_api_key: str = ""
    geocoding_base_url: str = DEFAULT_GEOCODING_URL
    geocoding_timeout_s: float = 10.0
    geocoding_max_retries: int = 1

    # === Retry ===
    retry_base_delay_s: float = 1.0

    # === Verification ===
    verification_similarity: Literal["jaccard", "token_sort"] = "jaccard"
    verification_threshold: float = 0.7

    # === Timezone ===
    timezone_default: str = "UTC"
    timezone_timeout_s: float = 5.0

    # === Cache ===
    cache_backend: Literal["memory", "json", "sqlite", "redis"] = "memory"
    cache_ttl_days: float = 7.0
    cache_root: Path = Path("~/.eventlocator/cache")
    cache_redis_url: str = ""

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator("llm_max_retries", "geocoding_max_retries")
    @classmethod
    def validate_retries(cls, v: int) -> int:  # noqa: N805
        if v < 0:
            raise ValueError("retry counts must be >= 0")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.cache_backend == "redis" and not self.cache_redis_url:
            errors.append("CACHE_BACKEND=redis requires CACHE_REDIS_URL")

        if not 0.0 < self.verification_threshold <= 1.0:
            errors.append("VERIFICATION_THRESHOLD must be in (0, 1]")

        if self.cache_ttl_days <= 0:
            errors.append("CACHE_TTL_DAYS must be > 0")

        for name in ("llm_timeout_s", "geocoding_timeout_s", "timezone_timeout_s"):
            if getattr(self, name) <= 0:
                errors.append(f"{name.upper()} must be > 0")

        if self.retry_base_delay_s < 0:
            errors.append("RETRY_BASE_DELAY_S must be >= 0")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def cache_ttl_seconds(self) -> int:
        """Cache TTL expressed in whole seconds."""
        return int(self.cache_ttl_days * 24 * 60 * 60)


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or per-call config).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]

# tests/unit/config/test_settings.py - v2
"""Tests for config/settings.py - typed Settings and validation rules."""

from __future__ import annotations

import pytest

from eventlocator.config.settings import (
    DEFAULT_GEOCODING_URL,
    ConfigurationError,
    Settings,
    load_settings,
)


class TestSettingsDefaults:
    def test_default_llm(self):
        s = Settings(_env_file=None)
        assert s.llm_default_provider == "openai"
        assert s.llm_default_model == "gpt-4o"
        assert s.llm_temperature == 0.1
        assert s.llm_max_tokens == 150
        assert s.llm_json_mode is True

    def test_default_timeouts_and_retries(self):
        s = Settings(_env_file=None)
        assert s.llm_timeout_s == 10.0
        assert s.geocoding_timeout_s == 10.0
        assert s.timezone_timeout_s == 5.0
        assert s.llm_max_retries == 1
        assert s.geocoding_max_retries == 1

    def test_default_geocoding(self):
        s = Settings(_env_file=None)
        assert s.geocoding_base_url == DEFAULT_GEOCODING_URL
        assert s.google_geocoding_api_key == ""

    def test_default_verification(self):
        s = Settings(_env_file=None)
        assert s.verification_similarity == "jaccard"
        assert s.verification_threshold == 0.7

    def test_default_cache(self):
        s = Settings(_env_file=None)
        assert s.cache_backend == "memory"
        assert s.cache_ttl_days == 7.0
        assert s.cache_ttl_seconds == 7 * 24 * 3600

    def test_default_timezone(self):
        assert Settings(_env_file=None).timezone_default == "UTC"


class TestSettingsValidation:
    def test_redis_without_url(self):
        with pytest.raises(ConfigurationError, match="CACHE_REDIS_URL"):
            Settings(_env_file=None, cache_backend="redis")

    def test_redis_with_url(self):
        s = Settings(_env_file=None, cache_backend="redis", cache_redis_url="redis://localhost")
        assert s.cache_backend == "redis"

    @pytest.mark.parametrize("threshold", [0.0, -0.1, 1.5])
    def test_threshold_out_of_range(self, threshold):
        with pytest.raises(ConfigurationError, match="VERIFICATION_THRESHOLD"):
            Settings(_env_file=None, verification_threshold=threshold)

    def test_threshold_one_allowed(self):
        assert Settings(_env_file=None, verification_threshold=1.0).verification_threshold == 1.0

    def test_non_positive_ttl(self):
        with pytest.raises(ConfigurationError, match="CACHE_TTL_DAYS"):
            Settings(_env_file=None, cache_ttl_days=0)

    def test_non_positive_timeout(self):
        with pytest.raises(ConfigurationError, match="GEOCODING_TIMEOUT_S"):
            Settings(_env_file=None, geocoding_timeout_s=0)

    def test_negative_retries(self):
        with pytest.raises(ValueError, match="retry counts"):
            Settings(_env_file=None, llm_max_retries=-1)

    def test_multiple_errors_joined(self):
        with pytest.raises(ConfigurationError) as exc_info:
            Settings(_env_file=None, cache_ttl_days=-1, verification_threshold=2)
        assert "CACHE_TTL_DAYS" in str(exc_info.value)
        assert "VERIFICATION_THRESHOLD" in str(exc_info.value)


class TestEnvironment:
    def test_reads_env_vars(self, monkeypatch):
        monkeypatch.setenv("LLM_DEFAULT_PROVIDER", "anthropic")
        monkeypatch.setenv("CACHE_TTL_DAYS", "1.5")
        s = Settings(_env_file=None)
        assert s.llm_default_provider == "anthropic"
        assert s.cache_ttl_seconds == 36 * 3600

    def test_load_settings_overrides(self):
        s = load_settings(_env_file=None, cache_backend="sqlite")
        assert s.cache_backend == "sqlite"

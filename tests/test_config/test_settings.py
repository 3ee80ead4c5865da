"""Testes das settings (dataclasses frozen + loaders de ambiente)."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from config.settings import (
    BaseSettings,
    PreferenceStoreSettings,
    PreferenceSyncSettings,
    get_base_settings,
    get_preference_store_settings,
    get_preference_sync_settings,
)

_ENV_VARS = (
    "ENVIRONMENT",
    "SERVICE_NAME",
    "DEBUG",
    "REDIS_URL",
    "LOG_LEVEL",
    "CORS_ALLOW_ORIGINS",
    "PREFERENCES_API_BASE_URL",
    "PREFERENCES_DEBOUNCE_MS",
    "PREFERENCES_REQUEST_TIMEOUT_SECONDS",
    "PREFERENCES_MAX_RETRIES",
    "PREFERENCES_CACHE_TTL_SECONDS",
    "PREFERENCES_STORE_BACKEND",
    "PREFERENCES_REDIS_PREFIX",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    _clear_caches()
    yield
    _clear_caches()


def _clear_caches() -> None:
    get_base_settings.cache_clear()
    get_preference_sync_settings.cache_clear()
    get_preference_store_settings.cache_clear()


class TestBaseSettings:
    def test_defaults(self) -> None:
        settings = get_base_settings()
        assert settings.environment == "development"
        assert settings.service_name == "grid-views"
        assert settings.is_development
        assert not settings.is_production
        assert settings.validate() == []

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("prod", "production"), ("PRODUCTION", "production"), ("stage", "staging"), ("qa", "development")],
    )
    def test_environment_aliases(self, monkeypatch, raw, expected) -> None:
        monkeypatch.setenv("ENVIRONMENT", raw)
        assert get_base_settings().environment == expected

    def test_debug_and_redis_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv("DEBUG", "yes")
        monkeypatch.setenv("REDIS_URL", "redis://localhost:6379/0")
        settings = get_base_settings()
        assert settings.debug is True
        assert settings.redis_url == "redis://localhost:6379/0"

    def test_empty_service_name_is_invalid(self) -> None:
        assert BaseSettings(service_name="").validate() == ["SERVICE_NAME não pode ser vazio"]

    def test_log_level_and_origins_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("CORS_ALLOW_ORIGINS", "https://a.example.com/, https://b.example.com")
        settings = get_base_settings()
        assert settings.log_level == "DEBUG"
        assert settings.cors_allow_origins == ("https://a.example.com", "https://b.example.com")

    def test_invalid_log_level(self) -> None:
        assert BaseSettings(log_level="LOUD").validate() == ["LOG_LEVEL inválido: LOUD"]

    def test_wildcard_cors_forbidden_in_production(self) -> None:
        errors = BaseSettings(environment="production").validate()
        assert errors == ["CORS_ALLOW_ORIGINS='*' proibido em production"]

    def test_is_cached(self) -> None:
        assert get_base_settings() is get_base_settings()


class TestPreferenceSyncSettings:
    def test_defaults(self) -> None:
        settings = get_preference_sync_settings()
        assert settings.api_base_url == "http://localhost:8080"
        assert settings.debounce_ms == 600
        assert settings.debounce_seconds == pytest.approx(0.6)
        assert settings.max_retries == 0
        assert settings.validate() == []

    def test_env_overrides(self, monkeypatch) -> None:
        monkeypatch.setenv("PREFERENCES_API_BASE_URL", "https://api.example.com/")
        monkeypatch.setenv("PREFERENCES_DEBOUNCE_MS", "250")
        monkeypatch.setenv("PREFERENCES_REQUEST_TIMEOUT_SECONDS", "2.5")
        monkeypatch.setenv("PREFERENCES_MAX_RETRIES", "2")
        monkeypatch.setenv("PREFERENCES_CACHE_TTL_SECONDS", "0")
        settings = get_preference_sync_settings()
        assert settings.api_base_url == "https://api.example.com"
        assert settings.debounce_seconds == pytest.approx(0.25)
        assert settings.request_timeout_seconds == 2.5
        assert settings.max_retries == 2
        assert settings.cache_ttl_seconds == 0

    def test_validate_collects_all_errors(self) -> None:
        settings = PreferenceSyncSettings(
            api_base_url="ftp://x",
            debounce_ms=-1,
            request_timeout_seconds=0,
            max_retries=-1,
            cache_ttl_seconds=-5,
        )
        assert len(settings.validate()) == 5


class TestPreferenceStoreSettings:
    def test_defaults_to_memory(self) -> None:
        settings = get_preference_store_settings()
        assert settings.backend == "memory"
        assert settings.redis_prefix == "grid_pref:"

    def test_unknown_backend_falls_back_to_memory(self, monkeypatch) -> None:
        monkeypatch.setenv("PREFERENCES_STORE_BACKEND", "postgres")
        assert get_preference_store_settings().backend == "memory"

    def test_memory_allowed_in_development(self) -> None:
        assert PreferenceStoreSettings().validate(BaseSettings()) == []

    def test_memory_forbidden_in_production(self) -> None:
        errors = PreferenceStoreSettings().validate(BaseSettings(environment="production"))
        assert errors == ["PREFERENCES_STORE_BACKEND=memory proibido em staging/production"]

    def test_redis_requires_url(self) -> None:
        errors = PreferenceStoreSettings(backend="redis").validate(BaseSettings())
        assert errors == ["REDIS_URL obrigatório com PREFERENCES_STORE_BACKEND=redis"]

    def test_redis_with_url_is_valid_in_production(self) -> None:
        base = BaseSettings(environment="production", redis_url="redis://cache:6379/0")
        assert PreferenceStoreSettings(backend="redis").validate(base) == []

    def test_empty_prefix_is_invalid(self) -> None:
        errors = PreferenceStoreSettings(redis_prefix="").validate(BaseSettings())
        assert errors == ["PREFERENCES_REDIS_PREFIX não pode ser vazio"]

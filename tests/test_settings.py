import logging

import pytest

import main

from core.errors import ConfigurationError, build_error
from core.settings import DEFAULT_EXCLUDED_PATHS, CacheSettings, GreeterSettings, Settings


def test_cache_defaults(monkeypatch):
    for name in ("CACHE_TTL_MS", "CACHE_SWEEP_INTERVAL_MS", "CACHE_EXCLUDED_PATHS"):
        monkeypatch.delenv(name, raising=False)

    settings = CacheSettings.from_env()

    assert settings.ttl_seconds == 10.0
    assert settings.sweep_interval_seconds == 10.0
    assert settings.excluded_paths == DEFAULT_EXCLUDED_PATHS == ("/explorer/", "/explorer/openapi.json")


def test_cache_durations_are_independent(monkeypatch):
    monkeypatch.setenv("CACHE_TTL_MS", "2500")
    monkeypatch.setenv("CACHE_SWEEP_INTERVAL_MS", "500")
    monkeypatch.setenv("CACHE_EXCLUDED_PATHS", " /docs , /openapi.json ,")

    settings = CacheSettings.from_env()

    assert settings.ttl_seconds == 2.5
    assert settings.sweep_interval_seconds == 0.5
    assert settings.excluded_paths == ("/docs", "/openapi.json")


@pytest.mark.parametrize("raw", ["0", "-5", "soon"])
def test_invalid_durations_are_rejected(monkeypatch, raw):
    monkeypatch.setenv("CACHE_TTL_MS", raw)
    with pytest.raises(ConfigurationError) as exc_info:
        CacheSettings.from_env()
    assert exc_info.value.setting == "CACHE_TTL_MS"


def test_greeter_flags(monkeypatch):
    monkeypatch.setenv("GREETER_ZH_NAME_FIRST", "true")
    monkeypatch.setenv("GREETER_FR_NAME_FIRST", "0")

    settings = GreeterSettings.from_env()

    assert settings.zh_name_first is True
    assert settings.fr_name_first is False


def test_allowed_origins(monkeypatch):
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings.from_env()

    assert settings.allowed_origins == ("https://a.example", "https://b.example")
    assert settings.log_level == "DEBUG"


def test_build_error_maps_codes():
    err = build_error(404, "missing")
    assert err.to_response()["code"] == "GREET-404"
    assert err.error_id.startswith("err_")
    assert build_error(418, "teapot").error_code == "GREET-500"


def test_configuration_error_has_its_own_code():
    err = ConfigurationError("CACHE_SWEEP_INTERVAL_MS", "CACHE_SWEEP_INTERVAL_MS must be positive, got '0'")
    body = err.to_error().to_response()
    assert body["code"] == "GREET-CONFIG"
    assert body["retryable"] is False
    assert "CACHE_SWEEP_INTERVAL_MS" in body["message"]


def test_create_app_rejects_invalid_environment(monkeypatch, caplog):
    monkeypatch.setenv("CACHE_SWEEP_INTERVAL_MS", "-1")
    with caplog.at_level(logging.ERROR, logger="greeter-api"):
        with pytest.raises(ConfigurationError):
            main.create_app()

    record = next(r for r in caplog.records if r.getMessage() == "invalid_configuration")
    assert record.setting == "CACHE_SWEEP_INTERVAL_MS"
    assert record.error["code"] == "GREET-CONFIG"

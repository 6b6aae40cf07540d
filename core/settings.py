"""Runtime configuration read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from core.errors import ConfigurationError

DEFAULT_EXCLUDED_PATHS = ("/explorer/", "/explorer/openapi.json")


def _seconds_from_ms(name: str, default: int) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default / 1000.0
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(name, f"{name} must be a number of milliseconds, got {raw!r}")
    if value <= 0:
        raise ConfigurationError(name, f"{name} must be positive, got {raw!r}")
    return value / 1000.0


def _flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _paths(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None:
        return default
    return tuple(p.strip() for p in raw.split(",") if p.strip())


@dataclass(frozen=True)
class CacheSettings:
    ttl_seconds: float = 10.0
    sweep_interval_seconds: float = 10.0
    excluded_paths: tuple[str, ...] = DEFAULT_EXCLUDED_PATHS

    @classmethod
    def from_env(cls) -> "CacheSettings":
        return cls(
            ttl_seconds=_seconds_from_ms("CACHE_TTL_MS", 10000),
            sweep_interval_seconds=_seconds_from_ms("CACHE_SWEEP_INTERVAL_MS", 10000),
            excluded_paths=_paths("CACHE_EXCLUDED_PATHS", DEFAULT_EXCLUDED_PATHS),
        )


@dataclass(frozen=True)
class GreeterSettings:
    zh_name_first: bool = False
    fr_name_first: bool = True

    @classmethod
    def from_env(cls) -> "GreeterSettings":
        return cls(
            zh_name_first=_flag("GREETER_ZH_NAME_FIRST", False),
            fr_name_first=_flag("GREETER_FR_NAME_FIRST", True),
        )


@dataclass(frozen=True)
class Settings:
    cache: CacheSettings
    greeters: GreeterSettings
    log_level: str = "INFO"
    allowed_origins: Optional[tuple[str, ...]] = None

    @classmethod
    def from_env(cls) -> "Settings":
        origins = os.getenv("ALLOWED_ORIGINS", "*")
        return cls(
            cache=CacheSettings.from_env(),
            greeters=GreeterSettings.from_env(),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            allowed_origins=None if origins == "*" else tuple(o.strip() for o in origins.split(",")),
        )

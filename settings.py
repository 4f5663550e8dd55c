from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


_DATABASE_URL_ENV = "DATABASE_URL"
_DATABASE_ECHO_ENV = "DATABASE_ECHO"
_LOG_LEVEL_ENV = "LOG_LEVEL"
_AUTH_AUDIENCE_ENV = "AUTH_AUDIENCE"
_AUTH_ISSUER_ENV = "AUTH_ISSUER"
_AUTH_JWKS_URL_ENV = "AUTH_JWKS_URL"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    database_url: str
    database_echo: bool
    log_level: str
    auth_audience: Optional[str]
    auth_issuer: str
    auth_jwks_url: str

    @property
    def auth_enabled(self) -> bool:
        return self.auth_audience is not None


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_optional_env(name: str, default: Optional[str]) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or None


def _read_bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip().lower()
    if candidate in _TRUE_VALUES:
        return True
    if candidate in _FALSE_VALUES:
        return False
    return default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        database_url=_read_str_env(_DATABASE_URL_ENV, "sqlite:///./tmp/power_analytics.db"),
        database_echo=_read_bool_env(_DATABASE_ECHO_ENV, False),
        log_level=_read_log_level("INFO"),
        auth_audience=_read_optional_env(_AUTH_AUDIENCE_ENV, None),
        auth_issuer=_read_str_env(_AUTH_ISSUER_ENV, "https://accounts.google.com"),
        auth_jwks_url=_read_str_env(
            _AUTH_JWKS_URL_ENV, "https://www.googleapis.com/oauth2/v3/certs"
        ),
    )

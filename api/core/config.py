"""
Process settings read from the environment.

Required: DB_HOST, DB_USER, DB_PASSWORD, DB_NAME.
Everything else has a default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

REQUIRED_ENV_VARS = ("DB_HOST", "DB_USER", "DB_PASSWORD", "DB_NAME")


# Raised before anything else starts; main() turns it into exit status 1.
class ConfigError(RuntimeError):
    pass


@dataclass(frozen=True)
class Settings:
    db_host: str
    db_user: str
    db_password: str
    db_name: str
    db_port: int = 3306
    db_ssl_ca: str | None = None
    db_pool_size: int = 10
    connect_retries: int = 10
    connect_delay_s: float = 3.0
    host: str = "0.0.0.0"
    port: int = 3500
    log_level: str = "INFO"
    cors_origins: tuple[str, ...] = ("*",)


def _env_str(environ: Mapping[str, str], name: str, default: str) -> str:
    return environ.get(name, "").strip() or default


def _env_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}.") from exc


def _env_float(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}.") from exc


def _cors_origins(environ: Mapping[str, str]) -> tuple[str, ...]:
    raw = environ.get("CORS_ORIGINS", "").strip()
    if not raw:
        return ("*",)
    return tuple(origin.strip() for origin in raw.split(",") if origin.strip())


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """
    Build settings from `environ` (defaults to `os.environ`).

    Raises ConfigError naming the first required variable that is unset or blank.
    """
    if environ is None:
        environ = os.environ

    for key in REQUIRED_ENV_VARS:
        if not environ.get(key, "").strip():
            raise ConfigError(f"Missing required environment variable: {key}")

    return Settings(
        db_host=environ["DB_HOST"].strip(),
        db_user=environ["DB_USER"].strip(),
        # Passwords are taken verbatim.
        db_password=environ["DB_PASSWORD"],
        db_name=environ["DB_NAME"].strip(),
        db_port=_env_int(environ, "DB_PORT", 3306),
        db_ssl_ca=environ.get("DB_SSL_CA", "").strip() or None,
        db_pool_size=max(1, _env_int(environ, "DB_POOL_SIZE", 10)),
        connect_retries=max(1, _env_int(environ, "DB_CONNECT_RETRIES", 10)),
        connect_delay_s=max(0.0, _env_float(environ, "DB_CONNECT_DELAY", 3.0)),
        host=_env_str(environ, "HOST", "0.0.0.0"),
        port=_env_int(environ, "PORT", 3500),
        log_level=_env_str(environ, "LOG_LEVEL", "INFO").upper(),
        cors_origins=_cors_origins(environ),
    )

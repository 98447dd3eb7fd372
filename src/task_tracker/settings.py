from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - SEED_EXAMPLE_TASKS: 'false' to start with an empty store (default: true)
    - LOG_LEVEL: console log level name (default: INFO)
    - LOG_FILE: optional path of a file receiving DEBUG logs
    - HOST: bind address for the launcher (default: 127.0.0.1)
    - PORT: bind port for the launcher (default: 8000)
    """

    cors_allow_origins: List[str]
    seed_example_tasks: bool
    log_level: str
    log_file: Optional[str]
    host: str
    port: int


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_bool(value: str, default: bool = False) -> bool:
    v = value.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    return default


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        # main maps a lone "*" to allow_origins=["*"]
        return ["*"]
    return [o.strip() for o in value.split(",") if o.strip()]


def _parse_log_level(value: str, default: str = "INFO") -> str:
    name = value.strip().upper()
    if isinstance(logging.getLevelName(name), int):
        return name
    return default


def _parse_port(value: str, default: int = 8000) -> int:
    try:
        port = int(value.strip())
    except ValueError:
        return default
    return port if 0 < port < 65536 else default


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    origins = _parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*"))
    seed = _parse_bool(_get_env("SEED_EXAMPLE_TASKS", "true"), True)
    log_file = os.getenv("LOG_FILE") or None

    return Settings(
        cors_allow_origins=origins,
        seed_example_tasks=seed,
        log_level=_parse_log_level(_get_env("LOG_LEVEL", "INFO")),
        log_file=log_file.strip() if log_file else None,
        host=_get_env("HOST", "127.0.0.1").strip(),
        port=_parse_port(_get_env("PORT", "8000")),
    )

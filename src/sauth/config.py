# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import os
from dataclasses import dataclass

from sauth.auth.session import SESSION_MAX_AGE

_TRUE = {"1", "true", "yes", "y"}


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in _TRUE


@dataclass
class Settings:
    credentials: str
    host: str = "0.0.0.0"
    port: int = 8000
    cookie_secure: bool = False
    session_max_age: int = SESSION_MAX_AGE
    log_level: str = "INFO"
    log_json: bool = False


def _int(name: str, default: int) -> int:
    raw = os.getenv(name, str(default)).strip()
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def check_settings(settings: Settings) -> Settings:
    if settings.session_max_age <= 0:
        raise ValueError(f"session max age must be positive, got {settings.session_max_age}")
    if not 0 < settings.port < 65536:
        raise ValueError(f"port out of range: {settings.port}")
    return settings


def load_settings() -> Settings:
    settings = Settings(
        credentials=os.getenv("SAUTH_CREDENTIALS", ""),
        host=os.getenv("SAUTH_HOST", "0.0.0.0"),
        port=_int("SAUTH_PORT", 8000),
        cookie_secure=_flag("SAUTH_COOKIE_SECURE"),
        session_max_age=_int("SAUTH_SESSION_MAX_AGE", SESSION_MAX_AGE),
        log_level=os.getenv("SAUTH_LOG_LEVEL", "INFO").upper(),
        log_json=_flag("SAUTH_LOG_JSON"),
    )
    return check_settings(settings)

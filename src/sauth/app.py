# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from sauth.auth.session import SessionSecret
from sauth.config import Settings, check_settings, load_settings
from sauth.middleware import AuthMiddleware, SessionAuthHandler

logger = logging.getLogger(__name__)


def build_downstream() -> FastAPI:
    app = FastAPI()

    @app.get("/", response_class=PlainTextResponse)
    def index():
        return "treasure"

    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}

    return app


def create_app(
    settings: Optional[Settings] = None,
    *,
    secret: Optional[SessionSecret] = None,
    downstream: Optional[FastAPI] = None,
    middleware: Optional[AuthMiddleware] = None,
) -> FastAPI:
    """Put the gate in front of ``downstream`` (a demo app by default).

    The session secret is generated here unless one is given, so every
    process start invalidates previously issued cookies. Bad settings raise
    ``ValueError`` here rather than on the first request.
    """
    settings = check_settings(settings or load_settings())
    mw = middleware if middleware is not None else AuthMiddleware(settings.credentials)
    secret = secret or SessionSecret.generate()

    app = downstream if downstream is not None else build_downstream()
    app.add_middleware(
        SessionAuthHandler,
        config=mw,
        secret=secret,
        max_age=settings.session_max_age,
        secure=settings.cookie_secure,
    )
    logger.info("Gate enabled for %d credential(s)", len(mw.store))
    return app

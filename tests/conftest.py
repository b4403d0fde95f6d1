import sys
from pathlib import Path as _Path
sys.path.insert(0, str(_Path(__file__).resolve().parents[1] / "src"))

import pytest
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from fastapi.testclient import TestClient

from sauth.auth.session import SessionSecret
from sauth.middleware import AuthMiddleware, SessionAuthHandler


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "SAUTH_CREDENTIALS",
        "SAUTH_HOST",
        "SAUTH_PORT",
        "SAUTH_COOKIE_SECURE",
        "SAUTH_SESSION_MAX_AGE",
        "SAUTH_LOG_LEVEL",
        "SAUTH_LOG_JSON",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def secret() -> SessionSecret:
    return SessionSecret.generate()


@pytest.fixture()
def aladdin() -> AuthMiddleware:
    return AuthMiddleware("aladdin,open sesame")


@pytest.fixture()
def treasure_app() -> FastAPI:
    """Downstream app that counts how often it was reached."""
    app = FastAPI()
    app.state.hits = 0

    @app.get("/", response_class=PlainTextResponse)
    def index():
        app.state.hits += 1
        return "treasure"

    return app


@pytest.fixture()
def client(treasure_app, aladdin, secret) -> TestClient:
    treasure_app.add_middleware(SessionAuthHandler, config=aladdin, secret=secret)
    return TestClient(treasure_app)

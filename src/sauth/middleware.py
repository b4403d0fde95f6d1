# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import base64
import binascii
import logging
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from sauth.auth.credentials import CredentialStore, is_authorized
from sauth.auth.session import SESSION_MAX_AGE, SessionCache, SessionSecret

logger = logging.getLogger(__name__)

TYPE = "sauth"
REALM = "Please log in"


class AuthMiddlewareConfig(BaseModel):
    """Serialized form of an :class:`AuthMiddleware`."""

    model_config = ConfigDict(extra="forbid")

    credentials: str


class AuthMiddleware:
    """Gate configuration: the raw credential string and the store parsed from it.

    ``credentials`` is CSV, one ``username,password`` pair per line::

        "foo,bar\\nusername,password\\nus3r,p@ssw0rd1"

    Raises :class:`~sauth.errors.InvalidConfiguration` if no line is usable.
    """

    type = TYPE

    def __init__(self, credentials: str):
        self.credentials = credentials
        self.store = CredentialStore.parse(credentials)

    @classmethod
    def new(cls, credentials: str) -> "AuthMiddleware":
        return cls(credentials)

    def lookup(self, username: str, password: str) -> bool:
        return is_authorized(self.store, username, password)

    def to_config(self) -> AuthMiddlewareConfig:
        return AuthMiddlewareConfig(credentials=self.credentials)

    def dumps(self) -> Dict[str, Any]:
        return self.to_config().model_dump()

    def new_handler(self, app: ASGIApp, secret: SessionSecret, **options) -> "SessionAuthHandler":
        return SessionAuthHandler(app, config=self, secret=secret, **options)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AuthMiddleware):
            return NotImplemented
        return self.credentials == other.credentials

    def __hash__(self) -> int:
        return hash(self.credentials)

    def __str__(self) -> str:
        return self.store.describe()

    def __repr__(self) -> str:
        return f"AuthMiddleware({self.store!r})"


def parse_basic_auth(header: Optional[str]) -> Optional[Tuple[str, str]]:
    """Return ``(username, password)`` from an ``Authorization: Basic`` value, or None."""
    if not header:
        return None
    scheme, _, param = header.strip().partition(" ")
    param = param.strip()
    if scheme.lower() != "basic" or not param:
        return None
    try:
        decoded = base64.b64decode(param, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None
    username, sep, password = decoded.partition(":")
    if not sep:
        return None
    return username, password


def unauthorized(realm: str = REALM) -> Response:
    return Response(status_code=401, headers={"WWW-Authenticate": f'Basic realm="{realm}"'})


class SessionAuthHandler(BaseHTTPMiddleware):
    """Basic Auth gate that remembers a successful login in a signed cookie.

    A request carrying a valid, unexpired session cookie is forwarded as is.
    Anything else must present credentials known to ``config``; on success a
    fresh session cookie is attached to the downstream response, on failure
    the client gets a 401 challenge and the downstream app is never called.
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        config: AuthMiddleware,
        secret: SessionSecret,
        max_age: int = SESSION_MAX_AGE,
        secure: bool = False,
        realm: str = REALM,
    ):
        super().__init__(app)
        self.config = config
        self.realm = realm
        self.sessions = SessionCache(secret, max_age=max_age, secure=secure)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        session = self.sessions.read(request)
        if session is not None and session.authenticated:
            return await call_next(request)

        creds = parse_basic_auth(request.headers.get("authorization"))
        if creds is None:
            return unauthorized(self.realm)

        username, password = creds
        if not self.config.lookup(username, password):
            client = request.client.host if request.client else "-"
            logger.warning("Rejected credentials for user %r from %s", username, client)
            return unauthorized(self.realm)

        response = await call_next(request)
        self.sessions.issue(response, True)
        return response

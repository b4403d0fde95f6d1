# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
import secrets
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from itsdangerous import BadData, URLSafeTimedSerializer
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)

COOKIE_NAME = "session"
SESSION_MAX_AGE = 86400  # 1 day
SESSION_SALT = "sauth.session.v1"


@dataclass(frozen=True)
class SessionSecret:
    """Symmetric key used to sign every session token of one process.

    Created once by whoever composes the gate and shared read-only. It is
    never persisted, so a restart invalidates all outstanding sessions.
    """

    key: bytes = field(repr=False)

    @classmethod
    def generate(cls, nbytes: int = 32) -> "SessionSecret":
        if nbytes < 16:
            raise ValueError("Session secret needs at least 128 bits")
        return cls(key=secrets.token_bytes(nbytes))


@dataclass(frozen=True)
class SessionData:
    authenticated: bool
    expires_at: float


class SessionCache:
    """Client-held session state carried in a signed cookie.

    Tokens embed ``{"a": <authenticated>, "exp": <absolute expiry>}`` and are
    signed with the process secret. ``verify`` is the only authority on
    validity: the embedded expiry is checked explicitly, cookie attributes
    sent back by the client are ignored.
    """

    def __init__(
        self,
        secret: SessionSecret,
        *,
        max_age: int = SESSION_MAX_AGE,
        cookie_name: str = COOKIE_NAME,
        secure: bool = False,
        clock: Callable[[], float] = time.time,
    ):
        if max_age <= 0:
            raise ValueError("max_age must be positive")
        self.max_age = max_age
        self.cookie_name = cookie_name
        self.secure = secure
        self._clock = clock
        self._serializer = URLSafeTimedSerializer(secret_key=secret.key, salt=SESSION_SALT)

    def sign(self, authenticated: bool) -> str:
        exp = int(self._clock()) + self.max_age
        return self._serializer.dumps({"a": bool(authenticated), "exp": exp})

    def verify(self, token: Optional[str]) -> Optional[SessionData]:
        if not token:
            return None
        try:
            data = self._serializer.loads(token, max_age=self.max_age)
        except BadData as e:
            logger.debug("Discarding session cookie: %s", type(e).__name__)
            return None
        if not isinstance(data, dict):
            return None
        authenticated = data.get("a")
        exp = data.get("exp")
        if not isinstance(authenticated, bool) or not isinstance(exp, (int, float)):
            return None
        if exp <= self._clock():
            logger.debug("Discarding expired session cookie")
            return None
        return SessionData(authenticated=authenticated, expires_at=float(exp))

    def issue(self, response: Response, authenticated: bool) -> None:
        response.set_cookie(
            self.cookie_name,
            self.sign(authenticated),
            max_age=self.max_age,
            path="/",
            httponly=True,
            samesite="lax",
            secure=self.secure,
        )

    def read(self, request: Request) -> Optional[SessionData]:
        return self.verify(request.cookies.get(self.cookie_name, ""))

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask, Response, g, request
from itsdangerous import BadSignature, Signer

from userhub.domain.sessions.entities import Session
from userhub.domain.sessions.repositories import SessionStore
from userhub.shared.config import SecurityConfig
from userhub.shared.logging import logger


def current_session() -> Session:
    session = g.get("session")
    return session if session is not None else Session.anonymous()


def bind_session(session: Session) -> None:
    g.session = session
    g.username = session.username if session.authenticated else None


class SessionCookieBinding:
    """Loads the server-side session named by the request cookie.

    Every request carrying a live session renews its expiry and re-issues
    the cookie (sliding expiration). Anonymous sessions never reach the
    store and never produce a cookie.
    """

    def __init__(
        self,
        *,
        store: SessionStore,
        secret_key: str,
        security: SecurityConfig,
    ) -> None:
        self._store = store
        self._security = security
        self._signer = Signer(secret_key, salt="userhub.session")

    @property
    def cookie_name(self) -> str:
        return self._security.session_cookie_name

    def encode(self, session_id: str) -> str:
        return self._signer.sign(session_id).decode("utf-8")

    def decode(self, value: str) -> str | None:
        try:
            return self._signer.unsign(value).decode("utf-8")
        except BadSignature:
            logger.warning("sessions.cookie: bad signature, ignoring cookie")
            return None

    def load(self, raw_cookie: str | None) -> Session:
        if not raw_cookie:
            return Session.anonymous()
        session_id = self.decode(raw_cookie)
        if not session_id:
            return Session.anonymous()
        stored = self._store.get(session_id)
        if stored is None:
            return Session.anonymous()
        return self._store.touch(stored)

    def install(self, app: Flask) -> None:
        @app.before_request
        def _load_session() -> None:
            if request.endpoint == "static":
                return
            raw_cookie = request.cookies.get(self.cookie_name)
            g.had_session_cookie = raw_cookie is not None
            bind_session(self.load(raw_cookie))

        @app.after_request
        def _write_cookie(response: Response) -> Response:
            session = current_session()
            if session.id:
                response.set_cookie(
                    self.cookie_name,
                    self.encode(session.id),
                    max_age=self._security.session_lifetime,
                    httponly=True,
                    secure=self._security.cookie_secure,
                    samesite=self._security.cookie_samesite,
                    path="/",
                )
            elif g.get("had_session_cookie"):
                response.delete_cookie(self.cookie_name, path="/")
            return response


__all__ = ["SessionCookieBinding", "bind_session", "current_session"]

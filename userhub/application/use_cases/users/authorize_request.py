# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from userhub.domain.sessions.entities import RequestContext, Session
from userhub.domain.sessions.exceptions import StaleSessionError, UnauthorizedError
from userhub.domain.sessions.repositories import SessionStore
from userhub.domain.users.repositories import UserRepository
from userhub.shared.logging import logger


class AuthorizeRequestUseCase:
    """Admit a request only when its session names an existing user.

    The user is re-read on every call. A session whose user has disappeared
    is destroyed before rejecting, so the next request sees an anonymous
    visitor instead of the same dangling identity.
    """

    def __init__(self, *, users: UserRepository, sessions: SessionStore) -> None:
        self._users = users
        self._sessions = sessions

    def execute(self, session: Session) -> RequestContext:
        if not session.authenticated or not session.username:
            raise UnauthorizedError()

        user = self._users.find_by_username(session.username)
        if user is None:
            logger.warning(f"auth.gate: session user missing username={session.username}")
            if session.id:
                self._sessions.destroy(session.id)
            raise StaleSessionError()

        return RequestContext(session=session, user=user)

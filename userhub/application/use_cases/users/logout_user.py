"""Use-case for ending a session."""

from __future__ import annotations

from userhub.domain.sessions.entities import Session
from userhub.domain.sessions.repositories import SessionStore


class LogoutUserUseCase:
    def __init__(self, *, sessions: SessionStore) -> None:
        self._sessions = sessions

    def execute(self, session: Session) -> Session:
        if session.id:
            self._sessions.destroy(session.id)
        return Session.anonymous()

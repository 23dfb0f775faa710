# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import replace

from userhub.domain.sessions.entities import Session
from userhub.domain.sessions.repositories import SessionStore
from userhub.domain.users.exceptions import InvalidCredentialsError, UserNotFoundError
from userhub.domain.users.repositories import PasswordHasher, UserRepository
from userhub.shared.errors.base import ValidationError


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        sessions: SessionStore,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._sessions = sessions
        self._password_hasher = password_hasher

    def execute(self, session: Session, username: str, password: str) -> Session:
        if not (username and password):
            raise ValidationError(
                "Request body incomplete. Please try again", code="missing_fields"
            )

        user = self._users.find_by_username(username)
        if user is None:
            raise UserNotFoundError(username)

        if not self._password_hasher.verify(password, user.password_hash):
            raise InvalidCredentialsError()

        # Rotate the id so a cookie issued before login never carries the new identity.
        if session.id:
            self._sessions.destroy(session.id)
        return self._sessions.save(replace(session.authenticate(user.username), id=None))

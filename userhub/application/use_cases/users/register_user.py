# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from userhub.domain.users.entities import User
from userhub.domain.users.exceptions import UserAlreadyExistsError
from userhub.domain.users.repositories import PasswordHasher, UserRepository
from userhub.shared.errors.base import ValidationError
from userhub.shared.logging import logger


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, username: str, password: str, confirm_password: str) -> User:
        if not (username and password and confirm_password):
            raise ValidationError("Request body incomplete.", code="missing_fields")
        if password != confirm_password:
            raise ValidationError(
                "Password and Confirm Password Does not Match!", code="password_mismatch"
            )

        # The unique index decides; this lookup only avoids hashing for a taken name.
        if self._users.find_by_username(username):
            raise UserAlreadyExistsError(username)

        hashed = self._password_hasher.hash(password)
        user = User(id=0, username=username, password_hash=hashed, created_at=datetime.now(UTC))
        persisted = self._users.add(user)
        logger.info(f"users.register: created username={persisted.username} id={persisted.id}")
        return persisted

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from userhub.domain.sessions.entities import RequestContext
from userhub.domain.users.exceptions import PersistenceError
from userhub.domain.users.repositories import UserRepository
from userhub.shared.errors.base import ValidationError


class ChangeStatusUseCase:
    def __init__(self, *, users: UserRepository, max_length: int = 500) -> None:
        self._users = users
        self._max_length = max_length

    def execute(self, context: RequestContext, new_status: str) -> str:
        if len(new_status) > self._max_length:
            raise ValidationError(
                f"New status too long. Do not exceed {self._max_length} characters",
                code="status_too_long",
                context={"max_length": self._max_length},
            )

        if self._users.update_status(context.username, new_status) == 0:
            raise PersistenceError(f"Unable to update status for user {context.username}")
        return new_status

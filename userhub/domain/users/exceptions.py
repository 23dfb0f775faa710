# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from userhub.shared.errors.base import DomainError


class UserAlreadyExistsError(DomainError):
    code = "user_already_exists"
    status = HTTPStatus.CONFLICT

    def __init__(self, username: str) -> None:
        super().__init__(
            f"Username {username} is already taken!",
            context={"username": username},
        )


class UserNotFoundError(DomainError):
    code = "user_not_found"
    status = HTTPStatus.NOT_FOUND

    def __init__(self, username: str) -> None:
        super().__init__(
            f'No user with username "{username}" exists!',
            context={"username": username},
        )


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED
    message = "Incorrect password"


class PersistenceError(DomainError):
    code = "persistence_error"
    status = HTTPStatus.INTERNAL_SERVER_ERROR

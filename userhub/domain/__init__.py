# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .sessions.entities import RequestContext, Session
from .sessions.exceptions import StaleSessionError, UnauthorizedError
from .users.entities import User
from .users.exceptions import (
    InvalidCredentialsError,
    PersistenceError,
    UserAlreadyExistsError,
    UserNotFoundError,
)

__all__ = [
    "InvalidCredentialsError",
    "PersistenceError",
    "RequestContext",
    "Session",
    "StaleSessionError",
    "UnauthorizedError",
    "User",
    "UserAlreadyExistsError",
    "UserNotFoundError",
]

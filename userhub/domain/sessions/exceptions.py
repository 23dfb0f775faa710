# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from userhub.shared.errors.base import DomainError


class UnauthorizedError(DomainError):
    code = "unauthorized"
    status = HTTPStatus.UNAUTHORIZED
    message = "Unauthorized. Please log in to fix this problem"


class StaleSessionError(DomainError):
    code = "stale_session"
    status = HTTPStatus.NOT_FOUND
    message = "404 Error User cannot be found"

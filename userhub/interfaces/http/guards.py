# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any

from flask import g, redirect, request, url_for

from userhub.application.use_cases.users.authorize_request import AuthorizeRequestUseCase
from userhub.domain.sessions.entities import Session
from userhub.domain.sessions.exceptions import StaleSessionError, UnauthorizedError
from userhub.infrastructure.audit import AuditAction, audit_log
from userhub.interfaces.http.session import bind_session, current_session
from userhub.shared.errors import AppError, handle_app_error
from userhub.shared.logging import logger

LOGIN_FIRST_MESSAGE = "Please login into your profile first!"


def _reject(exc: AppError, *, api: bool, page_message: str):
    if api:
        return handle_app_error(exc)
    return redirect(url_for("auth.login_page", messageDanger=page_message), code=303)


def require_session(gate: AuthorizeRequestUseCase, *, api: bool) -> Callable:
    """Run the authorization gate before the view.

    The view receives the resolved identity as context. Page views are
    redirected to the login page on rejection, API views get a JSON error.
    """

    def decorator(f: Callable) -> Callable:
        @wraps(f)
        def inner(*a: Any, **kw: Any):
            session = current_session()
            try:
                context = gate.execute(session)
            except StaleSessionError as exc:
                bind_session(Session.anonymous())
                audit_log(
                    AuditAction.SESSION_REVOKED,
                    username=session.username,
                    ip_address=request.remote_addr,
                    details={"reason": "user_missing"},
                    success=False,
                )
                return _reject(exc, api=api, page_message=exc.message or exc.code)
            except UnauthorizedError as exc:
                logger.warning(f"Unauthenticated access to {request.method} {request.path}")
                return _reject(exc, api=api, page_message=LOGIN_FIRST_MESSAGE)

            g.username = context.username
            kw["context"] = context
            return f(*a, **kw)

        return inner

    return decorator


__all__ = ["LOGIN_FIRST_MESSAGE", "require_session"]

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, redirect, render_template, request, url_for
from pydantic import ValidationError

from userhub.application.use_cases.users.login_user import LoginUserUseCase
from userhub.application.use_cases.users.logout_user import LogoutUserUseCase
from userhub.application.use_cases.users.register_user import RegisterUserUseCase
from userhub.domain.users.exceptions import InvalidCredentialsError, UserNotFoundError
from userhub.infrastructure.audit import AuditAction, audit_log
from userhub.interfaces.http.dto.auth import AuthSuccessDTO, LoginFormDTO, RegisterFormDTO
from userhub.interfaces.http.session import bind_session, current_session
from userhub.shared.errors import AppError, raise_validation_error
from userhub.shared.logging import logger

UNIFORM_LOGIN_ERROR = "Invalid username or password"
LOGGED_OUT_MESSAGE = "Successfully Logged Out!"
USERNAME_TOO_LONG = "Username must be 64 characters or fewer"


def _get_client_ip() -> str | None:
    ip_address = request.headers.get("X-Forwarded-For", request.remote_addr)
    if ip_address and "," in ip_address:
        ip_address = ip_address.split(",")[0].strip()
    return ip_address


def _form_payload() -> dict[str, str]:
    if request.is_json:
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            return {}
        return {k: v for k, v in payload.items() if isinstance(v, str)}
    return request.form.to_dict()


def _redirect_to_profile() -> Response:
    return redirect(url_for("profile.profile"), code=303)


def _page_messages() -> dict[str, str | None]:
    return {
        "messageDanger": request.args.get("messageDanger"),
        "messageSuccess": request.args.get("messageSuccess"),
    }


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        logout_use_case: LogoutUserUseCase,
        uniform_login_errors: bool = False,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case
        self._uniform_login_errors = uniform_login_errors

    def index(self) -> Response:
        if current_session().authenticated:
            return _redirect_to_profile()
        return redirect(url_for("auth.login_page"), code=303)

    def login_page(self):
        if current_session().authenticated:
            return _redirect_to_profile()
        return render_template("login.html", **_page_messages())

    def register_page(self):
        if current_session().authenticated:
            return _redirect_to_profile()
        return render_template("register.html", **_page_messages())

    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterFormDTO.model_validate(_form_payload())
        except ValidationError as exc:
            raise_validation_error(exc, USERNAME_TOO_LONG)

        user = self._register_use_case.execute(dto.username, dto.password, dto.confirm_password)

        audit_log(
            AuditAction.REGISTER,
            username=user.username,
            ip_address=_get_client_ip(),
            success=True,
        )
        logger.info(f"auth.register: ok username={user.username}")
        return jsonify(AuthSuccessDTO().model_dump()), 200

    def login(self):
        try:
            dto = LoginFormDTO.model_validate(_form_payload())
        except ValidationError as exc:
            raise_validation_error(exc)

        ip_address = _get_client_ip()

        try:
            session = self._login_use_case.execute(current_session(), dto.username, dto.password)
        except AppError as exc:
            audit_log(
                AuditAction.LOGIN_FAILED,
                username=dto.username,
                ip_address=ip_address,
                details={"error": exc.code},
                success=False,
            )
            message = exc.message or exc.code
            if self._uniform_login_errors and isinstance(
                exc, (UserNotFoundError, InvalidCredentialsError)
            ):
                message = UNIFORM_LOGIN_ERROR
            return render_template("login.html", messageDanger=message), exc.status

        bind_session(session)
        audit_log(
            AuditAction.LOGIN_SUCCESS,
            username=session.username,
            ip_address=ip_address,
            success=True,
        )
        logger.info(f"auth.login: ok username={session.username}")
        return _redirect_to_profile()

    def logout(self) -> Response:
        session = current_session()
        bind_session(self._logout_use_case.execute(session))

        audit_log(
            AuditAction.LOGOUT,
            username=session.username,
            ip_address=_get_client_ip(),
            success=True,
        )
        logger.info("auth.logout: ok")
        return redirect(url_for("auth.login_page", messageSuccess=LOGGED_OUT_MESSAGE), code=303)

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__)
        bp.add_url_rule("/", endpoint="index", view_func=self.index, methods=["GET"])
        bp.add_url_rule("/login", endpoint="login_page", view_func=self.login_page, methods=["GET"])
        bp.add_url_rule("/login", endpoint="login", view_func=self.login, methods=["POST"])
        bp.add_url_rule(
            "/register", endpoint="register_page", view_func=self.register_page, methods=["GET"]
        )
        bp.add_url_rule("/register", endpoint="register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/logout", endpoint="logout", view_func=self.logout, methods=["GET"])
        return bp

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

from userhub.application.services.password_hashing import WerkzeugPasswordHasher
from userhub.application.use_cases.profile.change_avatar import ChangeAvatarUseCase
from userhub.application.use_cases.profile.change_status import ChangeStatusUseCase
from userhub.application.use_cases.users.authorize_request import AuthorizeRequestUseCase
from userhub.application.use_cases.users.login_user import LoginUserUseCase
from userhub.application.use_cases.users.logout_user import LogoutUserUseCase
from userhub.application.use_cases.users.register_user import RegisterUserUseCase
from userhub.infrastructure.db import Database
from userhub.infrastructure.repositories.sessions.sqlalchemy_session_store import (
    SqlAlchemySessionStore,
)
from userhub.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from userhub.interfaces.http.controllers.auth_controller import AuthController
from userhub.interfaces.http.controllers.misc_controller import MiscController
from userhub.interfaces.http.controllers.profile_controller import ProfileController
from userhub.interfaces.http.session import SessionCookieBinding
from userhub.shared.config import AppConfig


class Container:
    """Wires stores, use cases and controllers for one application instance."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    @cached_property
    def database(self) -> Database:
        return Database(self.config.database)

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher(
            method=self.config.security.password_hash_method,
            salt_length=self.config.security.password_salt_length,
        )

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.database)

    @cached_property
    def session_store(self) -> SqlAlchemySessionStore:
        return SqlAlchemySessionStore(
            self.database, ttl_seconds=self.config.security.session_lifetime
        )

    @cached_property
    def session_binding(self) -> SessionCookieBinding:
        return SessionCookieBinding(
            store=self.session_store,
            secret_key=self.config.secret_key,
            security=self.config.security,
        )

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            sessions=self.session_store,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase(sessions=self.session_store)

    @cached_property
    def authorize_request_use_case(self) -> AuthorizeRequestUseCase:
        return AuthorizeRequestUseCase(users=self.user_repository, sessions=self.session_store)

    @cached_property
    def change_status_use_case(self) -> ChangeStatusUseCase:
        return ChangeStatusUseCase(
            users=self.user_repository,
            max_length=self.config.profile.status_max_length,
        )

    @cached_property
    def change_avatar_use_case(self) -> ChangeAvatarUseCase:
        return ChangeAvatarUseCase(
            users=self.user_repository,
            max_length=self.config.profile.avatar_max_length,
        )

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            logout_use_case=self.logout_user_use_case,
            uniform_login_errors=self.config.security.uniform_login_errors,
        )

    @cached_property
    def profile_controller(self) -> ProfileController:
        return ProfileController(
            gate=self.authorize_request_use_case,
            change_status_use_case=self.change_status_use_case,
            change_avatar_use_case=self.change_avatar_use_case,
            default_avatar_url=self.config.profile.default_avatar_url,
            status_max_length=self.config.profile.status_max_length,
            avatar_max_length=self.config.profile.avatar_max_length,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(database=self.database)

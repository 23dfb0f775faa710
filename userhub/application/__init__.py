# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .use_cases.profile.change_avatar import ChangeAvatarUseCase
from .use_cases.profile.change_status import ChangeStatusUseCase
from .use_cases.users.authorize_request import AuthorizeRequestUseCase
from .use_cases.users.login_user import LoginUserUseCase
from .use_cases.users.logout_user import LogoutUserUseCase
from .use_cases.users.register_user import RegisterUserUseCase

__all__ = [
    "AuthorizeRequestUseCase",
    "ChangeAvatarUseCase",
    "ChangeStatusUseCase",
    "LoginUserUseCase",
    "LogoutUserUseCase",
    "RegisterUserUseCase",
]

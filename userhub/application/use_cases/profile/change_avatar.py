# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from userhub.domain.sessions.entities import RequestContext
from userhub.domain.users.exceptions import PersistenceError
from userhub.domain.users.repositories import UserRepository
from userhub.shared.errors.base import ValidationError

IMAGE_DATA_URI_PREFIX = "data:image/"


class ChangeAvatarUseCase:
    def __init__(self, *, users: UserRepository, max_length: int = 5_242_880) -> None:
        self._users = users
        self._max_length = max_length

    def execute(self, context: RequestContext, image_data: str) -> None:
        if not image_data.startswith(IMAGE_DATA_URI_PREFIX):
            raise ValidationError(
                "New profile picture is not a valid image!", code="avatar_not_image"
            )
        if len(image_data) > self._max_length:
            raise ValidationError(
                "Image too large! Make sure it is less than ~5MB",
                code="avatar_too_large",
                context={"max_length": self._max_length},
            )

        if self._users.update_avatar(context.username, image_data) == 0:
            raise PersistenceError(
                f"Unable to change profile picture for user {context.username}"
            )

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime

from userhub.domain.users.entities import User


@dataclass(slots=True, frozen=True)
class Session:
    """Server-side session state; the client only holds ``id``.

    ``id`` stays ``None`` until the session is first written, so anonymous
    visitors never create a stored record.
    """

    id: str | None = None
    authenticated: bool = False
    username: str | None = None
    expires_at: datetime | None = None

    @classmethod
    def anonymous(cls) -> "Session":
        return cls()

    @property
    def is_persisted(self) -> bool:
        return self.id is not None

    def authenticate(self, username: str) -> "Session":
        return replace(self, authenticated=True, username=username)


@dataclass(slots=True, frozen=True)
class RequestContext:
    """Identity resolved by the authorization gate for one request."""

    session: Session
    user: User

    @property
    def username(self) -> str:
        return self.user.username

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError

from userhub.domain.users.entities import User as DomainUser
from userhub.domain.users.exceptions import UserAlreadyExistsError
from userhub.domain.users.repositories import UserRepository
from userhub.infrastructure.db.models import User
from userhub.infrastructure.db.session import Database


def _to_domain(row: User) -> DomainUser:
    created_at = row.created_at
    if created_at is not None and created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=UTC)
    return DomainUser(
        id=row.id,
        username=row.username,
        password_hash=row.password_hash,
        created_at=created_at,
        status=row.status or "",
        avatar=row.avatar,
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, db: Database) -> None:
        self._db = db

    def find_by_username(self, username: str) -> DomainUser | None:
        with self._db.session_scope() as session:
            row = session.scalars(select(User).where(User.username == username)).first()
            if not row:
                return None
            return _to_domain(row)

    def add(self, user: DomainUser) -> DomainUser:
        try:
            with self._db.session_scope() as session:
                row = User(
                    username=user.username,
                    password_hash=user.password_hash,
                    status=user.status,
                    avatar=user.avatar,
                    created_at=user.created_at,
                )
                session.add(row)
                session.flush()
                session.refresh(row)
                return _to_domain(row)
        except IntegrityError as exc:
            raise UserAlreadyExistsError(user.username) from exc

    def update_status(self, username: str, status: str) -> int:
        return self._update(username, status=status)

    def update_avatar(self, username: str, avatar: str) -> int:
        return self._update(username, avatar=avatar)

    def remove(self, username: str) -> int:
        with self._db.session_scope() as session:
            result = session.execute(delete(User).where(User.username == username))
            return int(result.rowcount or 0)

    def _update(self, username: str, **values: object) -> int:
        with self._db.session_scope() as session:
            result = session.execute(
                update(User).where(User.username == username).values(**values)
            )
            return int(result.rowcount or 0)

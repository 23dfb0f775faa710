# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from dataclasses import replace
from datetime import UTC, datetime, timedelta

from sqlalchemy import delete, update

from userhub.domain.sessions.entities import Session as DomainSession
from userhub.domain.sessions.repositories import SessionStore
from userhub.infrastructure.db.models import StoredSession
from userhub.infrastructure.db.session import Database
from userhub.shared.logging import logger


def _aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored in UTC.
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


class SqlAlchemySessionStore(SessionStore):
    def __init__(self, db: Database, *, ttl_seconds: int = 3600) -> None:
        self._db = db
        self._ttl = timedelta(seconds=ttl_seconds)

    @property
    def ttl_seconds(self) -> int:
        return int(self._ttl.total_seconds())

    def _next_expiry(self) -> datetime:
        return datetime.now(UTC) + self._ttl

    def get(self, session_id: str) -> DomainSession | None:
        with self._db.session_scope() as session:
            row = session.get(StoredSession, session_id)
            if row is None:
                return None
            expires_at = _aware(row.expires_at)
            if expires_at <= datetime.now(UTC):
                session.delete(row)
                logger.debug("sessions.get: dropped expired session")
                return None
            return DomainSession(
                id=row.id,
                authenticated=bool(row.authenticated),
                username=row.username,
                expires_at=expires_at,
            )

    def save(self, session_value: DomainSession) -> DomainSession:
        session_id = session_value.id or secrets.token_urlsafe(32)
        expires_at = self._next_expiry()
        with self._db.session_scope() as session:
            row = session.get(StoredSession, session_id)
            if row is None:
                row = StoredSession(id=session_id)
                session.add(row)
            row.authenticated = session_value.authenticated
            row.username = session_value.username
            row.expires_at = expires_at
        return replace(session_value, id=session_id, expires_at=expires_at)

    def touch(self, session_value: DomainSession) -> DomainSession:
        if not session_value.id:
            return session_value
        expires_at = self._next_expiry()
        with self._db.session_scope() as session:
            session.execute(
                update(StoredSession)
                .where(StoredSession.id == session_value.id)
                .values(expires_at=expires_at)
            )
        return replace(session_value, expires_at=expires_at)

    def destroy(self, session_id: str) -> None:
        with self._db.session_scope() as session:
            session.execute(delete(StoredSession).where(StoredSession.id == session_id))

    def purge_expired(self) -> int:
        with self._db.session_scope() as session:
            result = session.execute(
                delete(StoredSession).where(StoredSession.expires_at <= datetime.now(UTC))
            )
            removed = int(result.rowcount or 0)
        logger.info(f"sessions.purge: removed={removed}")
        return removed

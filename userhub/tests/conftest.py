from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from dataclasses import replace
from datetime import UTC, datetime, timedelta

os.environ.setdefault("LOG_TO_FILE", "0")

import pytest
from flask import Flask
from flask.testing import FlaskClient

from userhub.app import create_app, get_container
from userhub.domain.sessions.entities import Session
from userhub.domain.sessions.repositories import SessionStore
from userhub.domain.users.entities import User
from userhub.domain.users.repositories import PasswordHasher, UserRepository
from userhub.infrastructure.container import Container
from userhub.infrastructure.db import Database
from userhub.shared.config import AppConfig, DatabaseConfig, SecurityConfig


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[str, User] = {}
        self._seq = 1
        self.lookups = 0

    def find_by_username(self, username: str) -> User | None:
        self.lookups += 1
        return self._users.get(username)

    def add(self, user: User) -> User:
        new_user = replace(user, id=self._seq)
        self._seq += 1
        self._users[new_user.username] = new_user
        return new_user

    def update_status(self, username: str, status: str) -> int:
        return self._update(username, status=status)

    def update_avatar(self, username: str, avatar: str) -> int:
        return self._update(username, avatar=avatar)

    def remove(self, username: str) -> int:
        return 1 if self._users.pop(username, None) else 0

    def _update(self, username: str, **values: object) -> int:
        user = self._users.get(username)
        if user is None:
            return 0
        self._users[username] = replace(user, **values)
        return 1


class InMemorySessionStore(SessionStore):
    def __init__(self) -> None:
        self.sessions: dict[str, Session] = {}
        self._seq = 1

    def get(self, session_id: str) -> Session | None:
        return self.sessions.get(session_id)

    def save(self, session: Session) -> Session:
        session_id = session.id or f"sid-{self._seq}"
        self._seq += 1
        saved = replace(
            session, id=session_id, expires_at=datetime.now(UTC) + timedelta(hours=1)
        )
        self.sessions[session_id] = saved
        return saved

    def touch(self, session: Session) -> Session:
        return self.save(session) if session.id else session

    def destroy(self, session_id: str) -> None:
        self.sessions.pop(session_id, None)


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def sessions() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture()
def hasher() -> DeterministicHasher:
    return DeterministicHasher()


def make_config(**security: object) -> AppConfig:
    return AppConfig(
        SECRET_KEY="test-secret",
        LOG_LEVEL="WARNING",
        database=DatabaseConfig(DATABASE_URL="sqlite://"),
        security=SecurityConfig(PASSWORD_HASH_METHOD="pbkdf2:sha256:1000", **security),
    )


@pytest.fixture()
def database() -> Iterator[Database]:
    db = Database(DatabaseConfig(DATABASE_URL="sqlite://"))
    db.init_schema()
    yield db
    db.drop_schema()
    db.dispose()


@pytest.fixture()
def app_factory() -> Iterator[Callable[..., Flask]]:
    created: list[Flask] = []

    def _make(**security: object) -> Flask:
        application = create_app(make_config(**security))
        created.append(application)
        return application

    yield _make
    for application in created:
        get_container(application).database.dispose()


@pytest.fixture()
def app(app_factory: Callable[..., Flask]) -> Flask:
    return app_factory()


@pytest.fixture()
def container(app: Flask) -> Container:
    return get_container(app)


@pytest.fixture()
def client(app: Flask) -> Iterator[FlaskClient]:
    with app.test_client() as test_client:
        yield test_client

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from userhub.domain.sessions.entities import Session
from userhub.domain.users.entities import User
from userhub.domain.users.exceptions import UserAlreadyExistsError
from userhub.infrastructure.repositories.sessions.sqlalchemy_session_store import (
    SqlAlchemySessionStore,
)
from userhub.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)


def _user(username: str = "alice") -> User:
    return User(id=0, username=username, password_hash="hash", created_at=datetime.now(UTC))


@pytest.fixture()
def user_repo(database) -> SqlAlchemyUserRepository:
    return SqlAlchemyUserRepository(database)


@pytest.fixture()
def store(database) -> SqlAlchemySessionStore:
    return SqlAlchemySessionStore(database, ttl_seconds=3600)


def test_user_round_trip_defaults(user_repo) -> None:
    created = user_repo.add(_user())

    found = user_repo.find_by_username("alice")

    assert created.id > 0
    assert found == created
    assert found.status == ""
    assert found.avatar is None
    assert found.created_at.tzinfo is not None


def test_unique_index_rejects_second_insert(user_repo) -> None:
    user_repo.add(_user())

    # Skips the lookup entirely, as a concurrent registration would.
    with pytest.raises(UserAlreadyExistsError):
        user_repo.add(_user())


def test_update_counts_matched_rows_even_when_value_unchanged(user_repo) -> None:
    user_repo.add(_user())

    assert user_repo.update_status("alice", "hello") == 1
    assert user_repo.update_status("alice", "hello") == 1
    assert user_repo.update_status("nobody", "hello") == 0
    assert user_repo.find_by_username("alice").status == "hello"


def test_update_avatar(user_repo) -> None:
    user_repo.add(_user())

    assert user_repo.update_avatar("alice", "data:image/png;base64,AAAA") == 1
    assert user_repo.find_by_username("alice").avatar == "data:image/png;base64,AAAA"


def test_remove_user(user_repo) -> None:
    user_repo.add(_user())

    assert user_repo.remove("alice") == 1
    assert user_repo.find_by_username("alice") is None


def test_save_assigns_id_and_expiry(store) -> None:
    saved = store.save(Session.anonymous().authenticate("alice"))

    assert saved.id
    assert saved.expires_at > datetime.now(UTC)
    loaded = store.get(saved.id)
    assert loaded is not None
    assert loaded.authenticated is True
    assert loaded.username == "alice"


def test_save_existing_session_updates_in_place(store) -> None:
    first = store.save(Session.anonymous())

    second = store.save(first.authenticate("alice"))

    assert second.id == first.id
    assert store.get(first.id).username == "alice"


def test_touch_slides_expiry(store) -> None:
    saved = store.save(Session.anonymous().authenticate("alice"))

    touched = store.touch(saved)

    assert touched.expires_at >= saved.expires_at
    assert store.get(saved.id).expires_at == touched.expires_at


def test_touch_unsaved_session_is_noop(store) -> None:
    assert store.touch(Session.anonymous()) == Session.anonymous()


def test_expired_session_is_dropped_on_lookup(database) -> None:
    store = SqlAlchemySessionStore(database, ttl_seconds=0)
    saved = store.save(Session.anonymous().authenticate("alice"))

    assert store.get(saved.id) is None
    assert store.purge_expired() == 0


def test_purge_expired(database) -> None:
    expired = SqlAlchemySessionStore(database, ttl_seconds=0)
    live = SqlAlchemySessionStore(database, ttl_seconds=3600)
    expired.save(Session.anonymous())
    expired.save(Session.anonymous())
    kept = live.save(Session.anonymous())

    assert live.purge_expired() == 2
    assert live.get(kept.id) is not None


def test_destroy_is_idempotent(store) -> None:
    saved = store.save(Session.anonymous().authenticate("alice"))

    store.destroy(saved.id)
    store.destroy(saved.id)

    assert store.get(saved.id) is None


def test_unknown_session_id(store) -> None:
    assert store.get("does-not-exist") is None

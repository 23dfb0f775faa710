from __future__ import annotations

from urllib.parse import parse_qs, urlparse

import pytest
from sqlalchemy import func, select

from userhub.infrastructure.db.models import StoredSession

COOKIE = "userhub.sid"
PNG = "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk"


def _register(client, username="alice", password="Secret123", confirm=None):
    return client.post(
        "/register",
        data={
            "register_username": username,
            "register_password": password,
            "register_confirm_password": confirm if confirm is not None else password,
        },
    )


def _login(client, username="alice", password="Secret123"):
    return client.post("/login", data={"login_username": username, "login_password": password})


def _query(response) -> dict[str, list[str]]:
    return parse_qs(urlparse(response.headers["Location"]).query)


def _session_rows(container) -> int:
    with container.database.session_scope() as session:
        return session.scalar(select(func.count()).select_from(StoredSession))


def test_full_profile_scenario(client) -> None:
    register = _register(client)
    assert register.status_code == 200
    assert register.get_json() == {"success": True}

    login = _login(client)
    assert login.status_code == 303
    assert urlparse(login.headers["Location"]).path == "/profile"
    assert client.get_cookie(COOKIE) is not None

    profile = client.get("/profile")
    assert profile.status_code == 200
    body = profile.get_data(as_text=True)
    assert "alice" in body
    assert "/public/image/user.svg" in body

    status = client.post("/profile/status", data={"profile__chgStatus": "hello"})
    assert status.status_code == 200
    assert status.get_json() == {"success": True, "newStatus": "hello"}

    logout = client.get("/logout")
    assert logout.status_code == 303
    assert _query(logout)["messageSuccess"] == ["Successfully Logged Out!"]
    assert client.get_cookie(COOKIE) is None

    again = client.get("/profile")
    assert again.status_code == 303
    assert urlparse(again.headers["Location"]).path == "/login"
    assert _query(again)["messageDanger"] == ["Please login into your profile first!"]


def test_register_accepts_plain_field_names(client) -> None:
    response = client.post(
        "/register",
        data={"username": "bob", "password": "pw12345", "confirmPassword": "pw12345"},
    )

    assert response.status_code == 200


def test_register_duplicate_returns_conflict(client) -> None:
    _register(client)

    response = _register(client, password="Different1")

    assert response.status_code == 409
    assert response.get_json()["error"] == "Username alice is already taken!"


def test_register_mismatch_returns_validation_error(client) -> None:
    response = _register(client, confirm="Nope")

    assert response.status_code == 422
    assert response.get_json()["error"] == "Password and Confirm Password Does not Match!"


def test_register_incomplete_body(client) -> None:
    response = client.post("/register", data={"register_username": "alice"})

    assert response.status_code == 422
    assert response.get_json()["code"] == "missing_fields"


def test_register_rejects_non_object_json(client) -> None:
    response = client.post("/register", json=["x"])

    assert response.status_code == 422
    assert response.get_json()["code"] == "missing_fields"


def test_register_rejects_overlong_username(client, container) -> None:
    response = _register(client, username="a" * 65)

    assert response.status_code == 422
    assert response.get_json()["error"] == "Username must be 64 characters or fewer"
    assert container.user_repository.find_by_username("a" * 65) is None


def test_login_wrong_password_rerenders_page(client, container) -> None:
    _register(client)

    response = _login(client, password="wrong")

    assert response.status_code == 401
    assert "Incorrect password" in response.get_data(as_text=True)
    assert client.get_cookie(COOKIE) is None
    assert _session_rows(container) == 0


def test_login_over_existing_session_issues_new_cookie(app, client, container) -> None:
    _register(client, username="mallory")
    _register(client)
    _login(client, username="mallory")
    planted = client.get_cookie(COOKIE).value

    _login(client)

    assert client.get_cookie(COOKIE).value != planted
    assert _session_rows(container) == 1
    with app.test_client() as other:
        other.set_cookie(COOKIE, planted)
        response = other.get("/profile")
    assert response.status_code == 303
    assert urlparse(response.headers["Location"]).path == "/login"


def test_login_unknown_user_echoes_username(client) -> None:
    response = _login(client, username="mallory")

    assert response.status_code == 404
    assert "mallory" in response.get_data(as_text=True)


def test_uniform_login_errors(app_factory) -> None:
    app = app_factory(UNIFORM_LOGIN_ERRORS=True)
    with app.test_client() as client:
        _register(client)
        unknown = _login(client, username="mallory").get_data(as_text=True)
        wrong = _login(client, password="wrong").get_data(as_text=True)

    assert "Invalid username or password" in unknown
    assert "Invalid username or password" in wrong
    assert "mallory" not in unknown


def test_anonymous_pages_create_no_session(client, container) -> None:
    assert client.get("/login").status_code == 200
    assert client.get("/register").status_code == 200
    root = client.get("/")

    assert urlparse(root.headers["Location"]).path == "/login"
    assert client.get_cookie(COOKIE) is None
    assert _session_rows(container) == 0


def test_authenticated_visitor_is_sent_to_profile(client) -> None:
    _register(client)
    _login(client)

    for path in ("/", "/login", "/register"):
        response = client.get(path)
        assert response.status_code == 303
        assert urlparse(response.headers["Location"]).path == "/profile"


def test_login_page_renders_query_messages(client) -> None:
    response = client.get("/login?messageDanger=Boom&messageSuccess=Yay")

    body = response.get_data(as_text=True)
    assert "Boom" in body
    assert "Yay" in body


def test_session_cookie_is_renewed_on_each_request(client) -> None:
    _register(client)
    _login(client)

    response = client.get("/profile")

    cookies = response.headers.getlist("Set-Cookie")
    assert any(c.startswith(f"{COOKIE}=") and "Max-Age=3600" in c for c in cookies)
    assert any("HttpOnly" in c for c in cookies)


def test_tampered_cookie_is_ignored(client) -> None:
    _register(client)
    _login(client)
    value = client.get_cookie(COOKIE).value
    client.set_cookie(COOKIE, value[:-2] + "xx")

    response = client.get("/profile")

    assert response.status_code == 303
    assert _query(response)["messageDanger"] == ["Please login into your profile first!"]


def test_deleted_user_session_is_destroyed(client, container) -> None:
    _register(client)
    _login(client)
    container.user_repository.remove("alice")

    stale = client.get("/profile")
    assert stale.status_code == 303
    assert _query(stale)["messageDanger"] == ["404 Error User cannot be found"]
    assert _session_rows(container) == 0
    assert client.get_cookie(COOKIE) is None

    after = client.get("/profile")
    assert _query(after)["messageDanger"] == ["Please login into your profile first!"]


def test_api_routes_return_json_errors(client, container) -> None:
    anonymous = client.post("/profile/status", data={"profile__chgStatus": "hi"})
    assert anonymous.status_code == 401
    assert anonymous.get_json()["code"] == "unauthorized"

    _register(client)
    _login(client)
    container.user_repository.remove("alice")

    stale = client.post("/profile/avatar", data=PNG, content_type="text/plain")
    assert stale.status_code == 404
    assert stale.get_json()["code"] == "stale_session"


def test_status_too_long_is_rejected(client, container) -> None:
    _register(client)
    _login(client)
    client.post("/profile/status", data={"profile__chgStatus": "before"})

    response = client.post("/profile/status", data={"profile__chgStatus": "x" * 501})

    assert response.status_code == 422
    assert "500" in response.get_json()["error"]
    assert container.user_repository.find_by_username("alice").status == "before"


def test_status_same_value_twice_succeeds(client) -> None:
    _register(client)
    _login(client)

    client.post("/profile/changeStatus", data={"status": "same"})
    response = client.post("/profile/changeStatus", data={"status": "same"})

    assert response.status_code == 200
    assert response.get_json()["newStatus"] == "same"


def test_status_field_missing(client) -> None:
    _register(client)
    _login(client)

    response = client.post("/profile/status", data={})

    assert response.status_code == 422


@pytest.mark.parametrize("path", ["/profile/avatar", "/profile/changeProfilePic"])
def test_avatar_upload(client, container, path) -> None:
    _register(client)
    _login(client)

    response = client.post(path, data=PNG, content_type="text/plain")

    assert response.status_code == 200
    assert response.get_json() == {"success": True}
    assert container.user_repository.find_by_username("alice").avatar == PNG
    assert PNG in client.get("/profile").get_data(as_text=True)


def test_avatar_not_an_image(client) -> None:
    _register(client)
    _login(client)

    response = client.post("/profile/avatar", data="just some text", content_type="text/plain")

    assert response.status_code == 422
    assert response.get_json()["error"] == "New profile picture is not a valid image!"


def test_health_and_security_headers(client) -> None:
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.get_json() == {"ok": True, "database": "ok"}
    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["X-Content-Type-Options"] == "nosniff"


def test_placeholder_avatar_is_served(client) -> None:
    response = client.get("/public/image/user.svg")

    assert response.status_code == 200
    response.close()


def test_purge_sessions_command(app) -> None:
    result = app.test_cli_runner().invoke(args=["purge-sessions"])

    assert result.exit_code == 0
    assert "Removed 0 expired session(s)" in result.output


def test_pages_load_client_scripts(client) -> None:
    register_page = client.get("/register").get_data(as_text=True)
    assert 'id="register-form"' in register_page
    assert "/public/script/register.js" in register_page

    _register(client)
    _login(client)
    profile_page = client.get("/profile").get_data(as_text=True)
    assert 'id="profile__chgProfilePic"' in profile_page
    assert 'data-max-length="5242880"' in profile_page
    assert "/public/script/profile.js" in profile_page

    for name in ("alerts.js", "register.js", "profile.js"):
        response = client.get(f"/public/script/{name}")
        assert response.status_code == 200
        response.close()

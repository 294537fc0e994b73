from __future__ import annotations

import pytest

from factchecker.errors import DuplicateError, NotFoundError, UnauthorizedError, UsageError
from factchecker.services.user_svc import (
    authenticate,
    get_user,
    list_users,
    register,
    remove_user,
    update_user,
)

NEW_USER = {
    "username": "new",
    "password": "password",
    "firstName": "Test",
    "lastName": "Tester",
    "email": "test@test.com",
    "isAdmin": False,
}


def test_authenticate(store):
    assert authenticate(store, "u1", "password1") == {
        "username": "u1",
        "firstName": "U1F",
        "lastName": "U1L",
        "email": "u1@email.com",
        "isAdmin": False,
    }


@pytest.mark.parametrize("username, password", [("nope", "password1"), ("u1", "wrong")])
def test_authenticate_rejects(store, username, password):
    with pytest.raises(UnauthorizedError):
        authenticate(store, username, password)


def test_register_hashes_password(store, log):
    user = register(store, NEW_USER, log)
    assert user == {k: v for k, v in NEW_USER.items() if k != "password"}
    stored = store.execute("SELECT password FROM users WHERE username = $1", ["new"])[0]["password"]
    assert stored.startswith("pbkdf2_sha256$")
    assert authenticate(store, "new", "password")["username"] == "new"


def test_register_duplicate(store, log):
    with pytest.raises(DuplicateError):
        register(store, {**NEW_USER, "username": "u1"}, log)


def test_list_users(store):
    assert [u["username"] for u in list_users(store)] == ["admin", "u1", "u2"]
    assert all("password" not in u for u in list_users(store))


def test_get_user_includes_posts(store):
    user = get_user(store, "u1")
    assert user["isAdmin"] is False
    assert [p["content"] for p in user["posts"]] == ["First post about Cats"]
    assert "username" not in user["posts"][0]


def test_get_user_not_found(store):
    with pytest.raises(NotFoundError):
        get_user(store, "nope")


def test_update_user(store, log):
    user = update_user(store, "u1", {"firstName": "New", "email": "new@email.com"}, log)
    assert user["firstName"] == "New"
    assert user["email"] == "new@email.com"
    assert user["lastName"] == "U1L"


def test_update_user_password_is_rehashed(store, log):
    update_user(store, "u1", {"password": "new-password"}, log)
    assert authenticate(store, "u1", "new-password")["username"] == "u1"
    with pytest.raises(UnauthorizedError):
        authenticate(store, "u1", "password1")
    # audit record never carries the secret
    assert "password" not in (log.after or {})


def test_update_user_not_found(store, log):
    with pytest.raises(NotFoundError):
        update_user(store, "nope", {"firstName": "x"}, log)


def test_update_user_no_data(store, log):
    with pytest.raises(UsageError):
        update_user(store, "u1", {}, log)


def test_remove_user_cascades_posts(store, log):
    remove_user(store, "u1", log)
    assert store.execute("SELECT id FROM posts WHERE username = $1", ["u1"]) == []
    with pytest.raises(NotFoundError):
        remove_user(store, "u1", log)

from __future__ import annotations

# factchecker/services/user_svc.py
import logging
from typing import Any, Mapping

from ..db import Store
from ..errors import DuplicateError, NotFoundError, UnauthorizedError
from ..logs import LogContext
from ..repository import post_repo, user_repo
from ..security import hash_password, verify_password

logger = logging.getLogger(__name__)


def authenticate(store: Store, username: str, password: str) -> dict:
    """
    Check a username/password pair.

    Returns:
        { username, firstName, lastName, email, isAdmin }

    Raises:
        UnauthorizedError: unknown user or wrong password
    """
    user = user_repo.get_with_password(store, username)
    if user and verify_password(password, user.pop("password")):
        return user
    logger.info("failed login for %s", username)
    raise UnauthorizedError("Invalid username/password")


def register(store: Store, data: Mapping[str, Any], log: LogContext) -> dict:
    username = data["username"]
    if user_repo.exists(store, username):
        raise DuplicateError(f"Duplicate username: {username}")
    user = user_repo.insert(store, data, hash_password(data["password"]))
    log.set_entity("USER", username)
    log.set_after(user)
    return user


def list_users(store: Store) -> list[dict]:
    return user_repo.find_all(store)


def get_user(store: Store, username: str) -> dict:
    """User with their posts: { username, ..., posts: [{ id, topicName, date, content }, ...] }"""
    user = user_repo.get_one(store, username)
    if not user:
        raise NotFoundError(f"No user: {username}")
    user["posts"] = [
        {k: v for k, v in post.items() if k != "username"}
        for post in post_repo.find_all(store, {"username": username})
    ]
    return user


def update_user(store: Store, username: str, data: Mapping[str, Any], log: LogContext) -> dict:
    """
    Partial update; a new password is hashed before it reaches SQL.

    Callers must have restricted who may set ``isAdmin`` or ``password``.
    """
    data = dict(data)
    if data.get("password"):
        data["password"] = hash_password(data["password"])
    user = user_repo.update(store, username, data)
    if not user:
        raise NotFoundError(f"No user: {username}")
    log.set_entity("USER", username)
    log.set_after(user)
    return user


def remove_user(store: Store, username: str, log: LogContext) -> None:
    if not user_repo.remove(store, username):
        raise NotFoundError(f"No user: {username}")
    log.set_entity("USER", username)

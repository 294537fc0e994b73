"""Request-scoped dependencies: the store handle and the authorization gates."""
from __future__ import annotations

from typing import Any, Optional

from fastapi import Depends, Request

from ..db import Store
from ..errors import UnauthorizedError
from ..logs import LogContext
from ..security import decode_token


def get_store(request: Request) -> Store:
    return request.app.state.store


def get_current_user(request: Request) -> Optional[dict[str, Any]]:
    """Token payload if a valid bearer token was sent; invalid tokens count as anonymous."""
    auth_header = request.headers.get("authorization")
    if not auth_header:
        return None
    token = auth_header.replace("Bearer ", "").replace("bearer ", "").strip()
    return decode_token(token)


def ensure_logged_in(user: Optional[dict] = Depends(get_current_user)) -> dict:
    if user and user.get("username"):
        return user
    raise UnauthorizedError()


def ensure_admin(user: dict = Depends(ensure_logged_in)) -> dict:
    if user.get("isAdmin") is True:
        return user
    raise UnauthorizedError()


def ensure_self_or_admin(username: str, user: dict = Depends(ensure_logged_in)) -> dict:
    if user.get("isAdmin") is True or user.get("username") == username:
        return user
    raise UnauthorizedError()


def audit(store: Store, action: str, user: Optional[dict]) -> LogContext:
    return LogContext(store, action, user=(user or {}).get("username") or "anonymous")

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from ..db import Store
from ..errors import ForbiddenError
from ..security import create_token
from ..services.user_svc import get_user, list_users, register, remove_user, update_user
from .deps import audit, ensure_admin, ensure_self_or_admin, get_store

router = APIRouter()

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserNew(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    username: str = Field(min_length=1, max_length=25)
    password: str = Field(min_length=5, max_length=20)
    first_name: str = Field(min_length=1, max_length=30, alias="firstName")
    last_name: str = Field(min_length=1, max_length=30, alias="lastName")
    email: str = Field(min_length=6, max_length=60, pattern=EMAIL_PATTERN)
    is_admin: bool = Field(False, alias="isAdmin")


class UserUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    first_name: str = Field(None, min_length=1, max_length=30, alias="firstName")
    last_name: str = Field(None, min_length=1, max_length=30, alias="lastName")
    password: str = Field(None, min_length=5, max_length=20)
    email: str = Field(None, min_length=6, max_length=60, pattern=EMAIL_PATTERN)
    is_admin: bool = Field(None, alias="isAdmin")


@router.post("/users", status_code=201)
def api_user_create(
    body: UserNew,
    user: dict = Depends(ensure_admin),
    store: Store = Depends(get_store),
):
    """
    Admin-only: add a user (who may be an admin).
    Returns { user: { username, firstName, lastName, email, isAdmin }, token }
    """
    data = body.model_dump(by_alias=True)
    log = audit(store, "CREATE_USER", user)
    log.set_payload(data)
    try:
        new_user = register(store, data, log)
        log.write("OK")
        return {"user": new_user, "token": create_token(new_user)}
    except Exception as e:
        log.write("ERROR", str(e))
        raise


@router.get("/users")
def api_user_list(_: dict = Depends(ensure_admin), store: Store = Depends(get_store)):
    return {"users": list_users(store)}


@router.get("/users/{username}")
def api_user_get(
    username: str,
    _: dict = Depends(ensure_self_or_admin),
    store: Store = Depends(get_store),
):
    return {"user": get_user(store, username)}


@router.patch("/users/{username}")
def api_user_update(
    username: str,
    body: UserUpdate,
    user: dict = Depends(ensure_self_or_admin),
    store: Store = Depends(get_store),
):
    data = body.model_dump(by_alias=True, exclude_unset=True)
    if "isAdmin" in data and user.get("isAdmin") is not True:
        raise ForbiddenError("Only an admin may change isAdmin")
    log = audit(store, "UPDATE_USER", user)
    log.set_payload(data)
    try:
        updated = update_user(store, username, data, log)
        log.write("OK")
        return {"user": updated}
    except Exception as e:
        log.write("ERROR", str(e))
        raise


@router.delete("/users/{username}")
def api_user_delete(
    username: str,
    user: dict = Depends(ensure_self_or_admin),
    store: Store = Depends(get_store),
):
    log = audit(store, "DELETE_USER", user)
    try:
        remove_user(store, username, log)
        log.write("OK")
        return {"deleted": username}
    except Exception as e:
        log.write("ERROR", str(e))
        raise

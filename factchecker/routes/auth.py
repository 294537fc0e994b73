from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from ..db import Store
from ..security import create_token
from ..services.user_svc import authenticate, register
from .deps import audit, get_store
from .users import EMAIL_PATTERN

router = APIRouter()


class UserAuth(BaseModel):
    model_config = ConfigDict(extra="forbid")

    username: str = Field(min_length=1, max_length=25)
    password: str = Field(min_length=1, max_length=20)


class UserRegister(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    username: str = Field(min_length=1, max_length=25)
    password: str = Field(min_length=5, max_length=20)
    first_name: str = Field(min_length=1, max_length=30, alias="firstName")
    last_name: str = Field(min_length=1, max_length=30, alias="lastName")
    email: str = Field(min_length=6, max_length=60, pattern=EMAIL_PATTERN)


@router.post("/auth/token")
def api_auth_token(body: UserAuth, store: Store = Depends(get_store)):
    """{ username, password } => { token }"""
    user = authenticate(store, body.username, body.password)
    return {"token": create_token(user)}


@router.post("/auth/register", status_code=201)
def api_auth_register(body: UserRegister, store: Store = Depends(get_store)):
    """Self sign-up; never creates an admin. Returns { token }."""
    data = {**body.model_dump(by_alias=True), "isAdmin": False}
    log = audit(store, "REGISTER", {"username": body.username})
    log.set_payload(data)
    try:
        user = register(store, data, log)
        log.write("OK")
        return {"token": create_token(user)}
    except Exception as e:
        log.write("ERROR", str(e))
        raise

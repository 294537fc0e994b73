from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict, Field

from ..db import Store
from ..services.post_svc import (
    create_post,
    ensure_author_or_admin,
    get_post,
    list_posts,
    remove_post,
    update_post,
)
from .deps import audit, ensure_logged_in, get_store

router = APIRouter()


class PostNew(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    topic_name: str = Field(min_length=1, max_length=50, alias="topicName")
    content: str = Field(min_length=1)


class PostUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    topic_name: str = Field(None, min_length=1, max_length=50, alias="topicName")
    content: str = Field(None, min_length=1)


@router.post("/posts", status_code=201)
def api_post_create(
    body: PostNew,
    user: dict = Depends(ensure_logged_in),
    store: Store = Depends(get_store),
):
    """{ topicName, content } => { post: { id, username, topicName, date, content } }"""
    data = body.model_dump(by_alias=True)
    log = audit(store, "CREATE_POST", user)
    log.set_payload(data)
    try:
        post = create_post(store, user["username"], data, log)
        log.write("OK")
        return {"post": post}
    except Exception as e:
        log.write("ERROR", str(e))
        raise


@router.get("/posts")
def api_post_list(
    content_like: Optional[str] = Query(None, alias="contentLike"),
    username: Optional[str] = Query(None),
    topic_name: Optional[str] = Query(None, alias="topicName"),
    store: Store = Depends(get_store),
):
    criteria = {
        "contentLike": content_like,
        "username": username,
        "topicName": topic_name,
    }
    return {"posts": list_posts(store, criteria)}


@router.get("/posts/{post_id}")
def api_post_get(post_id: int, store: Store = Depends(get_store)):
    return {"post": get_post(store, post_id)}


@router.patch("/posts/{post_id}")
def api_post_update(
    post_id: int,
    body: PostUpdate,
    user: dict = Depends(ensure_logged_in),
    store: Store = Depends(get_store),
):
    data = body.model_dump(by_alias=True, exclude_unset=True)
    ensure_author_or_admin(store, post_id, user)
    log = audit(store, "UPDATE_POST", user)
    log.set_payload(data)
    try:
        post = update_post(store, post_id, data, log)
        log.write("OK")
        return {"post": post}
    except Exception as e:
        log.write("ERROR", str(e))
        raise


@router.delete("/posts/{post_id}")
def api_post_delete(
    post_id: int,
    user: dict = Depends(ensure_logged_in),
    store: Store = Depends(get_store),
):
    ensure_author_or_admin(store, post_id, user)
    log = audit(store, "DELETE_POST", user)
    try:
        remove_post(store, post_id, log)
        log.write("OK")
        return {"deleted": post_id}
    except Exception as e:
        log.write("ERROR", str(e))
        raise

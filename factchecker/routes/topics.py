from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict, Field

from ..db import Store
from ..services.topic_svc import create_topic, get_topic, list_topics, remove_topic, update_topic
from .deps import audit, ensure_admin, ensure_logged_in, get_store

router = APIRouter()


class TopicNew(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, max_length=50)


class TopicUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, max_length=50)


@router.post("/topics", status_code=201)
def api_topic_create(
    body: TopicNew,
    user: dict = Depends(ensure_logged_in),
    store: Store = Depends(get_store),
):
    log = audit(store, "CREATE_TOPIC", user)
    log.set_payload(body.model_dump())
    try:
        topic = create_topic(store, body.name, log)
        log.write("OK")
        return {"topic": topic}
    except Exception as e:
        log.write("ERROR", str(e))
        raise


@router.get("/topics")
def api_topic_list(
    name_like: Optional[str] = Query(None, alias="nameLike"),
    store: Store = Depends(get_store),
):
    return {"topics": list_topics(store, {"nameLike": name_like})}


@router.get("/topics/{name}")
def api_topic_get(name: str, store: Store = Depends(get_store)):
    """{ topic: { name, posts: [{ id, username, topicName, date, content }, ...] } }"""
    return {"topic": get_topic(store, name)}


@router.patch("/topics/{name}")
def api_topic_update(
    name: str,
    body: TopicUpdate,
    user: dict = Depends(ensure_admin),
    store: Store = Depends(get_store),
):
    data = body.model_dump(exclude_unset=True)
    log = audit(store, "UPDATE_TOPIC", user)
    log.set_payload(data)
    try:
        topic = update_topic(store, name, data, log)
        log.write("OK")
        return {"topic": topic}
    except Exception as e:
        log.write("ERROR", str(e))
        raise


@router.delete("/topics/{name}")
def api_topic_delete(
    name: str,
    user: dict = Depends(ensure_admin),
    store: Store = Depends(get_store),
):
    log = audit(store, "DELETE_TOPIC", user)
    try:
        remove_topic(store, name, log)
        log.write("OK")
        return {"deleted": name}
    except Exception as e:
        log.write("ERROR", str(e))
        raise

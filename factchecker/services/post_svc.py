from __future__ import annotations

# factchecker/services/post_svc.py
import datetime as dt
from typing import Any, Mapping, Optional

from ..db import Store
from ..errors import ForbiddenError, NotFoundError
from ..logs import LogContext
from ..repository import post_repo, topic_repo


def create_post(store: Store, username: str, data: Mapping[str, Any], log: LogContext) -> dict:
    topic_name = data["topicName"]
    if not topic_repo.exists(store, topic_name):
        raise NotFoundError(f"No topic: {topic_name}")
    date = dt.datetime.now(dt.timezone.utc).isoformat()
    post = post_repo.insert(store, username, topic_name, date, data["content"])
    log.set_entity("POST", post["id"])
    log.set_after(post)
    return post


def list_posts(store: Store, criteria: Optional[Mapping[str, Any]] = None) -> list[dict]:
    return post_repo.find_all(store, criteria)


def get_post(store: Store, post_id: int) -> dict:
    post = post_repo.get_one(store, post_id)
    if not post:
        raise NotFoundError(f"No post: {post_id}")
    return post


def ensure_author_or_admin(store: Store, post_id: int, user: Mapping[str, Any]) -> dict:
    post = get_post(store, post_id)
    if not user.get("isAdmin") and post["username"] != user.get("username"):
        raise ForbiddenError("Only the author or an admin may change this post")
    return post


def update_post(store: Store, post_id: int, data: Mapping[str, Any], log: LogContext) -> dict:
    topic_name = data.get("topicName")
    if topic_name is not None and not topic_repo.exists(store, topic_name):
        raise NotFoundError(f"No topic: {topic_name}")
    post = post_repo.update(store, post_id, data)
    if not post:
        raise NotFoundError(f"No post: {post_id}")
    log.set_entity("POST", post_id)
    log.set_after(post)
    return post


def remove_post(store: Store, post_id: int, log: LogContext) -> None:
    if not post_repo.remove(store, post_id):
        raise NotFoundError(f"No post: {post_id}")
    log.set_entity("POST", post_id)

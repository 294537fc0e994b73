from __future__ import annotations

# factchecker/services/topic_svc.py
from typing import Any, Mapping, Optional

from ..db import Store
from ..errors import DuplicateError, NotFoundError
from ..logs import LogContext
from ..repository import post_repo, topic_repo


def create_topic(store: Store, name: str, log: LogContext) -> dict:
    if topic_repo.exists(store, name):
        raise DuplicateError(f"Duplicate topic: {name}")
    topic = topic_repo.insert(store, name)
    log.set_entity("TOPIC", name)
    log.set_after(topic)
    return topic


def list_topics(store: Store, criteria: Optional[Mapping[str, Any]] = None) -> list[dict]:
    return topic_repo.find_all(store, criteria)


def get_topic(store: Store, name: str) -> dict:
    topic = topic_repo.get_one(store, name)
    if not topic:
        raise NotFoundError(f"No topic: {name}")
    topic["posts"] = post_repo.find_all(store, {"topicName": name})
    return topic


def update_topic(store: Store, name: str, data: Mapping[str, Any], log: LogContext) -> dict:
    """Rename a topic; its posts follow through ON UPDATE CASCADE."""
    new_name = data.get("name")
    if new_name and new_name != name and topic_repo.exists(store, new_name):
        raise DuplicateError(f"Duplicate topic: {new_name}")
    topic = topic_repo.update(store, name, data)
    if not topic:
        raise NotFoundError(f"No topic: {name}")
    log.set_entity("TOPIC", topic["name"])
    log.set_after(topic)
    return topic


def remove_topic(store: Store, name: str, log: LogContext) -> None:
    if not topic_repo.remove(store, name):
        raise NotFoundError(f"No topic: {name}")
    log.set_entity("TOPIC", name)

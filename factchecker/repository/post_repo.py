from __future__ import annotations

from typing import Any, Mapping, Optional

from ..db import Store
from .sql import FilterRule, build_set_clause, build_where_clause, contains, is_nonblank, where_sql

COLUMNS = {
    "topicName": "topic_name",
}

FILTERS = (
    FilterRule("contentLike", "content", "ILIKE", transform=contains, is_usable=is_nonblank),
    FilterRule("username", "username", "=", is_usable=is_nonblank),
    FilterRule("topicName", "topic_name", "=", is_usable=is_nonblank),
)

_FIELDS = 'id, username, topic_name AS "topicName", date, content'


def insert(store: Store, username: str, topic_name: str, date: str, content: str) -> dict:
    rows = store.execute(
        "INSERT INTO posts (username, topic_name, date, content) "
        f"VALUES ($1, $2, $3, $4) RETURNING {_FIELDS}",
        [username, topic_name, date, content],
    )
    return dict(rows[0])


def find_all(store: Store, criteria: Optional[Mapping[str, Any]] = None) -> list[dict]:
    where = build_where_clause(criteria, FILTERS)
    sql = f"SELECT {_FIELDS} FROM posts{where_sql(where)} ORDER BY id"
    return [dict(r) for r in store.execute(sql, where.values)]


def get_one(store: Store, post_id: int) -> Optional[dict]:
    rows = store.execute(f"SELECT {_FIELDS} FROM posts WHERE id = $1", [post_id])
    return dict(rows[0]) if rows else None


def update(store: Store, post_id: int, data: Mapping[str, Any]) -> Optional[dict]:
    set_cols, values = build_set_clause(data, COLUMNS)
    id_idx = len(values) + 1
    sql = (
        f"UPDATE posts SET {set_cols} "
        f"WHERE id = ${id_idx} "
        f"RETURNING {_FIELDS}"
    )
    rows = store.execute(sql, [*values, post_id])
    return dict(rows[0]) if rows else None


def remove(store: Store, post_id: int) -> bool:
    return bool(store.execute("DELETE FROM posts WHERE id = $1 RETURNING id", [post_id]))

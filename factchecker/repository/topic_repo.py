from __future__ import annotations

from typing import Any, Mapping, Optional

from ..db import Store
from .sql import FilterRule, build_set_clause, build_where_clause, contains, is_nonblank, where_sql

# Topics are keyed by their name; nothing to translate.
COLUMNS: dict[str, str] = {}

FILTERS = (
    FilterRule("nameLike", "name", "ILIKE", transform=contains, is_usable=is_nonblank),
)


def exists(store: Store, name: str) -> bool:
    return bool(store.execute("SELECT 1 FROM topics WHERE name = $1", [name]))


def insert(store: Store, name: str) -> dict:
    rows = store.execute("INSERT INTO topics (name) VALUES ($1) RETURNING name", [name])
    return dict(rows[0])


def find_all(store: Store, criteria: Optional[Mapping[str, Any]] = None) -> list[dict]:
    where = build_where_clause(criteria, FILTERS)
    sql = f"SELECT name FROM topics{where_sql(where)} ORDER BY name"
    return [dict(r) for r in store.execute(sql, where.values)]


def get_one(store: Store, name: str) -> Optional[dict]:
    rows = store.execute("SELECT name FROM topics WHERE name = $1", [name])
    return dict(rows[0]) if rows else None


def update(store: Store, name: str, data: Mapping[str, Any]) -> Optional[dict]:
    set_cols, values = build_set_clause(data, COLUMNS)
    sql = f"UPDATE topics SET {set_cols} WHERE name = ${len(values) + 1} RETURNING name"
    rows = store.execute(sql, [*values, name])
    return dict(rows[0]) if rows else None


def remove(store: Store, name: str) -> bool:
    return bool(store.execute("DELETE FROM topics WHERE name = $1 RETURNING name", [name]))

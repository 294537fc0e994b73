from __future__ import annotations

from typing import Any, Mapping, Optional

from ..db import Store
from .sql import FilterRule, build_set_clause, build_where_clause, contains, is_nonblank, where_sql

COLUMNS = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}

FILTERS = (
    FilterRule("minEmployees", "num_employees", ">="),
    FilterRule("maxEmployees", "num_employees", "<="),
    FilterRule("nameLike", "name", "ILIKE", transform=contains, is_usable=is_nonblank),
)

_FIELDS = (
    'handle, name, description, '
    'num_employees AS "numEmployees", logo_url AS "logoUrl"'
)


def exists(store: Store, handle: str) -> bool:
    return bool(store.execute("SELECT 1 FROM companies WHERE handle = $1", [handle]))


def name_taken(store: Store, name: str, exclude_handle: Optional[str] = None) -> bool:
    rows = store.execute(
        "SELECT 1 FROM companies WHERE name = $1 AND handle IS NOT $2",
        [name, exclude_handle],
    )
    return bool(rows)


def insert(store: Store, data: Mapping[str, Any]) -> dict:
    rows = store.execute(
        "INSERT INTO companies (handle, name, description, num_employees, logo_url) "
        f"VALUES ($1, $2, $3, $4, $5) RETURNING {_FIELDS}",
        [
            data["handle"],
            data["name"],
            data.get("description"),
            data.get("numEmployees"),
            data.get("logoUrl"),
        ],
    )
    return dict(rows[0])


def find_all(store: Store, criteria: Optional[Mapping[str, Any]] = None) -> list[dict]:
    where = build_where_clause(criteria, FILTERS)
    sql = f"SELECT {_FIELDS} FROM companies{where_sql(where)} ORDER BY name"
    return [dict(r) for r in store.execute(sql, where.values)]


def get_one(store: Store, handle: str) -> Optional[dict]:
    rows = store.execute(f"SELECT {_FIELDS} FROM companies WHERE handle = $1", [handle])
    return dict(rows[0]) if rows else None


def update(store: Store, handle: str, data: Mapping[str, Any]) -> Optional[dict]:
    set_cols, values = build_set_clause(data, COLUMNS)
    handle_idx = len(values) + 1
    sql = (
        f"UPDATE companies SET {set_cols} "
        f"WHERE handle = ${handle_idx} "
        f"RETURNING {_FIELDS}"
    )
    rows = store.execute(sql, [*values, handle])
    return dict(rows[0]) if rows else None


def remove(store: Store, handle: str) -> bool:
    rows = store.execute("DELETE FROM companies WHERE handle = $1 RETURNING handle", [handle])
    return bool(rows)

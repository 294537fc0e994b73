from __future__ import annotations

from typing import Any, Mapping, Optional

from ..db import Store
from .sql import (
    FilterRule,
    build_set_clause,
    build_where_clause,
    contains,
    is_nonblank,
    is_true,
    where_sql,
)

COLUMNS = {
    "companyHandle": "company_handle",
}

# minSalary=0 is a real minimum; hasEquity only fires on an explicit True.
FILTERS = (
    FilterRule("minSalary", "salary", ">="),
    FilterRule("hasEquity", "equity", "literal", literal_predicate="equity > 0", is_usable=is_true),
    FilterRule("titleLike", "title", "ILIKE", transform=contains, is_usable=is_nonblank),
    FilterRule("companyHandle", "company_handle", "=", is_usable=is_nonblank),
)

_FIELDS = 'id, title, salary, equity, company_handle AS "companyHandle"'


def exists_for_company(store: Store, title: str, company_handle: str) -> bool:
    rows = store.execute(
        "SELECT 1 FROM jobs WHERE title = $1 AND company_handle = $2",
        [title, company_handle],
    )
    return bool(rows)


def insert(store: Store, data: Mapping[str, Any]) -> dict:
    rows = store.execute(
        "INSERT INTO jobs (title, salary, equity, company_handle) "
        f"VALUES ($1, $2, $3, $4) RETURNING {_FIELDS}",
        [data["title"], data.get("salary"), data.get("equity"), data["companyHandle"]],
    )
    return dict(rows[0])


def find_all(store: Store, criteria: Optional[Mapping[str, Any]] = None) -> list[dict]:
    where = build_where_clause(criteria, FILTERS)
    sql = f"SELECT {_FIELDS} FROM jobs{where_sql(where)} ORDER BY id"
    return [dict(r) for r in store.execute(sql, where.values)]


def get_one(store: Store, job_id: int) -> Optional[dict]:
    rows = store.execute(f"SELECT {_FIELDS} FROM jobs WHERE id = $1", [job_id])
    return dict(rows[0]) if rows else None


def update(store: Store, job_id: int, data: Mapping[str, Any]) -> Optional[dict]:
    set_cols, values = build_set_clause(data, COLUMNS)
    id_idx = len(values) + 1
    sql = (
        f"UPDATE jobs SET {set_cols} "
        f"WHERE id = ${id_idx} "
        f"RETURNING {_FIELDS}"
    )
    rows = store.execute(sql, [*values, job_id])
    return dict(rows[0]) if rows else None


def remove(store: Store, job_id: int) -> bool:
    return bool(store.execute("DELETE FROM jobs WHERE id = $1 RETURNING id", [job_id]))

from __future__ import annotations

from typing import Any, Mapping, Optional

from ..db import Store
from .sql import build_set_clause

# password and email share their column names.
COLUMNS = {
    "firstName": "first_name",
    "lastName": "last_name",
    "isAdmin": "is_admin",
}

_FIELDS = (
    'username, first_name AS "firstName", last_name AS "lastName", '
    'email, is_admin AS "isAdmin"'
)


def _out(row) -> dict:
    user = dict(row)
    user["isAdmin"] = bool(user["isAdmin"])
    return user


def exists(store: Store, username: str) -> bool:
    return bool(store.execute("SELECT 1 FROM users WHERE username = $1", [username]))


def get_with_password(store: Store, username: str) -> Optional[dict]:
    rows = store.execute(f"SELECT {_FIELDS}, password FROM users WHERE username = $1", [username])
    return _out(rows[0]) if rows else None


def insert(store: Store, data: Mapping[str, Any], hashed_password: str) -> dict:
    rows = store.execute(
        "INSERT INTO users (username, password, first_name, last_name, email, is_admin) "
        f"VALUES ($1, $2, $3, $4, $5, $6) RETURNING {_FIELDS}",
        [
            data["username"],
            hashed_password,
            data["firstName"],
            data["lastName"],
            data["email"],
            bool(data.get("isAdmin", False)),
        ],
    )
    return _out(rows[0])


def find_all(store: Store) -> list[dict]:
    return [_out(r) for r in store.execute(f"SELECT {_FIELDS} FROM users ORDER BY username")]


def get_one(store: Store, username: str) -> Optional[dict]:
    rows = store.execute(f"SELECT {_FIELDS} FROM users WHERE username = $1", [username])
    return _out(rows[0]) if rows else None


def update(store: Store, username: str, data: Mapping[str, Any]) -> Optional[dict]:
    set_cols, values = build_set_clause(data, COLUMNS)
    username_idx = len(values) + 1
    sql = (
        f"UPDATE users SET {set_cols} "
        f"WHERE username = ${username_idx} "
        f"RETURNING {_FIELDS}"
    )
    rows = store.execute(sql, [*values, username])
    return _out(rows[0]) if rows else None


def remove(store: Store, username: str) -> bool:
    rows = store.execute("DELETE FROM users WHERE username = $1 RETURNING username", [username])
    return bool(rows)

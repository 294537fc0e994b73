from __future__ import annotations

# factchecker/db.py
import logging
import re
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Sequence

from .config import get_db_path

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"

# Statements are written with Postgres-style `$1, $2, ...` and ILIKE;
# sqlite spells those `?1, ?2, ...` and LIKE (ASCII case-insensitive).
# A parameterised ILIKE also gets the backslash escape Postgres applies by default.
_DOLLAR_PARAM = re.compile(r"\$(\d+)")
_ILIKE_PARAM = re.compile(r"\bILIKE\s+\$(\d+)")
_ILIKE = re.compile(r"\bILIKE\b")


def to_sqlite(sql: str) -> str:
    sql = _ILIKE_PARAM.sub(r"LIKE $\1 ESCAPE '\\'", sql)
    return _ILIKE.sub("LIKE", _DOLLAR_PARAM.sub(r"?\1", sql))


class Store:
    """
    A single sqlite connection with an explicit lifecycle.

    Opened once (app startup / test fixture) and handed to every repository
    call; ``execute`` is the only way statements reach the database.
    """

    def __init__(self, path: str | None = None):
        self.path = path
        self._conn: sqlite3.Connection | None = None
        self._lock = threading.Lock()

    def open(self) -> "Store":
        if self._conn is not None:
            return self
        if not self.path:
            self.path = get_db_path()
        conn = sqlite3.connect(
            self.path,
            detect_types=sqlite3.PARSE_DECLTYPES | sqlite3.PARSE_COLNAMES,
            check_same_thread=False,
            isolation_level=None,
        )
        conn.execute("PRAGMA foreign_keys = ON;")
        conn.row_factory = sqlite3.Row
        self._conn = conn
        logger.info("store opened: %s", self.path)
        return self

    def close(self) -> None:
        if self._conn is None:
            return
        self._conn.close()
        self._conn = None
        logger.info("store closed: %s", self.path)

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def _require_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            raise RuntimeError("store is not open")
        return self._conn

    def execute(self, sql: str, params: Sequence[Any] = ()) -> list[sqlite3.Row]:
        conn = self._require_conn()
        stmt = to_sqlite(sql)
        with self._lock:
            return conn.execute(stmt, tuple(params)).fetchall()

    def executescript(self, script: str) -> None:
        conn = self._require_conn()
        with self._lock:
            conn.executescript(script)

    def __enter__(self) -> "Store":
        return self.open()

    def __exit__(self, *exc) -> None:
        self.close()


@contextmanager
def open_store(db_path: str | None = None) -> Iterator[Store]:
    """获取 Store。优先使用显式传入的 db_path，否则走 get_db_path()。"""
    store = Store(db_path).open()
    try:
        yield store
    finally:
        store.close()


def ensure_schema(store: Store) -> None:
    store.executescript(SCHEMA_PATH.read_text(encoding="utf-8"))

import json, time, uuid, datetime as dt
from typing import Any, Optional, Tuple, List, Dict

from .db import Store
from .repository.sql import FilterRule, build_where_clause, contains, is_nonblank, where_sql

DDL = """
CREATE TABLE IF NOT EXISTS operation_log (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  ts TEXT NOT NULL,
  user TEXT NOT NULL,
  action TEXT NOT NULL,
  entity_type TEXT,
  entity_id TEXT,
  request_id TEXT,
  after_json TEXT,
  payload_json TEXT,
  result TEXT,
  err_msg TEXT,
  latency_ms INTEGER
);
CREATE INDEX IF NOT EXISTS idx_log_ts ON operation_log(ts);
CREATE INDEX IF NOT EXISTS idx_log_action ON operation_log(action);
"""

LOG_FILTERS = (
    FilterRule("action", "action", "=", is_usable=is_nonblank),
    FilterRule("ts_from", "ts", ">=", is_usable=is_nonblank),
    FilterRule("ts_to", "ts", "<=", is_usable=is_nonblank),
    FilterRule("query", "payload_json", "ILIKE", transform=contains, is_usable=is_nonblank),
)

_SECRET_KEYS = {"password"}


def ensure_log_schema(store: Store):
    store.executescript(DDL)


def _scrub(obj):
    if isinstance(obj, dict):
        return {k: ("***" if k in _SECRET_KEYS else v) for k, v in obj.items()}
    return obj


class LogContext:
    """Audit record for one mutating request, written to operation_log."""

    def __init__(self, store: Store, action: str, user: str = "anonymous"):
        self.store = store
        self.action = action
        self.user = user
        self.request_id = str(uuid.uuid4())
        self.start = time.perf_counter()
        self.after = None
        self.payload = None
        self.entity_type = None
        self.entity_id = None

    def set_entity(self, etype: str, eid):
        self.entity_type = etype
        self.entity_id = str(eid)

    def set_after(self, obj): self.after = _scrub(obj)
    def set_payload(self, obj): self.payload = _scrub(obj)

    def write(self, result: str = "OK", err: Optional[str] = None):
        elapsed_ms = int((time.perf_counter() - self.start) * 1000)
        rec = [
            dt.datetime.now(dt.timezone.utc).isoformat(),
            self.user,
            self.action,
            self.entity_type,
            self.entity_id,
            self.request_id,
            json.dumps(self.after, ensure_ascii=False, default=str) if self.after is not None else None,
            json.dumps(self.payload, ensure_ascii=False, default=str) if self.payload is not None else None,
            result,
            err,
            elapsed_ms,
        ]
        self.store.execute(
            """INSERT INTO operation_log
            (ts,user,action,entity_type,entity_id,request_id,after_json,payload_json,result,err_msg,latency_ms)
            VALUES($1,$2,$3,$4,$5,$6,$7,$8,$9,$10,$11)""",
            rec,
        )


def search_logs(store: Store, criteria: Dict[str, Any], page: int, size: int) -> Tuple[int, List[dict]]:
    where = build_where_clause(criteria, LOG_FILTERS)
    wh = where_sql(where)
    n = len(where.values)
    sql = f"SELECT * FROM operation_log{wh} ORDER BY ts DESC, id DESC LIMIT ${n + 1} OFFSET ${n + 2}"
    count_sql = f"SELECT COUNT(1) AS cnt FROM operation_log{wh}"
    total = store.execute(count_sql, where.values)[0]["cnt"]
    rows = store.execute(sql, [*where.values, size, (page - 1) * size])
    return total, [dict(r) for r in rows]

"""
SQL fragment builders shared by every repository.

Two pure functions turn caller-supplied, sparse data into a clause plus an
aligned parameter tuple:

- ``build_set_clause``: partial-update payload -> ``"col"=$1, "col2"=$2``
- ``build_where_clause``: optional search criteria -> ``a >= $1 AND b ILIKE $2``

Placeholder ``$n`` always corresponds to ``values[n - 1]``. Only column names,
operators and placeholders are written into the clause text; every value
travels in ``values``.

Callers that append fixed parameters after a fragment continue numbering at
``len(values) + 1`` and append those parameters in the same order, e.g.::

    set_cols, values = build_set_clause(data, COLUMNS)
    sql = f"UPDATE jobs SET {set_cols} WHERE id = ${len(values) + 1}"
    store.execute(sql, [*values, job_id])
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, NamedTuple, Optional, Sequence

from ..errors import UsageError

logger = logging.getLogger(__name__)

OPERATORS = ("=", ">=", "<=", "ILIKE", "literal")


class Fragment(NamedTuple):
    clause: str
    values: tuple


def is_present(value: Any) -> bool:
    """Usable unless missing; 0 and False are real values."""
    return value is not None and value != ""


def is_true(value: Any) -> bool:
    return value is True


def is_nonblank(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def escape_like(value: Any) -> str:
    """Make ``%`` and ``_`` match themselves under the default backslash escape."""
    return str(value).replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def contains(value: Any) -> str:
    return f"%{escape_like(value)}%"


@dataclass(frozen=True)
class FilterRule:
    """One optional search criterion and how it becomes a predicate.

    ``literal`` rules emit ``literal_predicate`` verbatim and take no
    parameter; all other operators render ``<column> <op> $n``.

    ``is_usable`` is called with ``criteria.get(key)`` rather than the whole
    criteria mapping: every rule here decides on its own value alone.
    """

    key: str
    column: str
    operator: str
    transform: Optional[Callable[[Any], Any]] = None
    literal_predicate: Optional[str] = None
    is_usable: Callable[[Any], bool] = is_present

    def __post_init__(self):
        if self.operator not in OPERATORS:
            raise ValueError(f"unsupported operator {self.operator!r} for filter {self.key!r}")
        if self.operator == "literal" and not self.literal_predicate:
            raise ValueError(f"literal filter {self.key!r} needs a literal_predicate")


def build_set_clause(payload: Mapping[str, Any] | None, column_map: Mapping[str, str] | None = None) -> Fragment:
    """
    Build the SET portion of a partial update.

    Args:
        payload: external field name -> new value, in the order placeholders are assigned
        column_map: external field name -> column name; unmapped keys are used as-is

    Returns:
        Fragment('"first_name"=$1, "age"=$2', ("Aliya", 32))

    Raises:
        UsageError: payload is empty
    """
    if not payload:
        raise UsageError("No data supplied")
    column_map = column_map or {}

    cols = []
    values = []
    for idx, (key, value) in enumerate(payload.items(), start=1):
        cols.append(f'"{column_map.get(key, key)}"=${idx}')
        values.append(value)

    clause = ", ".join(cols)
    logger.debug("set clause: %s", clause)
    return Fragment(clause, tuple(values))


def build_where_clause(criteria: Mapping[str, Any] | None, rules: Sequence[FilterRule]) -> Fragment:
    """
    Build the predicate portion of a WHERE clause (without the keyword).

    Rules are applied in declaration order; a rule contributes only when its
    ``is_usable`` test accepts ``criteria[rule.key]``. Keys no rule declares
    are ignored. No usable criteria -> Fragment("", ()).
    """
    if not isinstance(criteria, Mapping):
        return Fragment("", ())

    predicates = []
    values = []
    for rule in rules:
        raw = criteria.get(rule.key)
        if not rule.is_usable(raw):
            continue
        if rule.operator == "literal":
            predicates.append(rule.literal_predicate)
            continue
        values.append(rule.transform(raw) if rule.transform else raw)
        predicates.append(f"{rule.column} {rule.operator} ${len(values)}")

    clause = " AND ".join(predicates)
    if clause:
        logger.debug("where clause: %s", clause)
    return Fragment(clause, tuple(values))


def where_sql(fragment: Fragment) -> str:
    """`` WHERE <clause>`` or an empty string when nothing was selected."""
    return f" WHERE {fragment.clause}" if fragment.clause else ""

"""In-memory emulation of a remote table query API.

A ``QueryBuilder`` records filters, ordering, limit and single-row mode in an
immutable ``QueryDescriptor``; nothing is evaluated until ``execute()``.
Evaluation always runs filters (AND, in chain order), then ordering, then the
limit, regardless of the order the calls were chained in.
"""
from __future__ import annotations

import asyncio
import copy
import datetime as dt
import logging
import operator
import re
from collections.abc import Iterable
from functools import lru_cache
from typing import Any, Callable, Dict, List, Literal, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, ValidationError

from ..config import Settings, get_settings
from ..utils import format_date, random_delay

logger = logging.getLogger(__name__)

FilterOp = Literal["eq", "neq", "gt", "gte", "lt", "lte", "in", "ilike"]


class Filter(BaseModel):
    model_config = ConfigDict(frozen=True)

    column: str
    op: FilterOp
    operand: Any = None


class Ordering(BaseModel):
    model_config = ConfigDict(frozen=True)

    column: str
    ascending: bool = True
    nulls_first: Optional[bool] = None  # default: nulls last ascending, first descending


class QueryDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    table: str
    columns: str = "*"  # recorded only; rows are never projected
    filters: Tuple[Filter, ...] = ()
    ordering: Optional[Ordering] = None
    limit: Optional[int] = None
    single: bool = False


class APIError(BaseModel):
    message: str
    code: Optional[str] = None
    details: Optional[str] = None
    hint: Optional[str] = None


class QueryResult(BaseModel):
    """The ``{data, error}`` envelope every resolved call returns."""

    data: Any = None
    error: Optional[APIError] = None


# ---- Operators ----
def _ordered(op: Callable[[Any, Any], bool]) -> Callable[[Any, Any], bool]:
    def check(value: Any, operand: Any) -> bool:
        if value is None or operand is None:
            return False
        try:
            return bool(op(value, operand))
        except TypeError:
            return False

    return check


@lru_cache(maxsize=256)
def _ilike_regex(pattern: str) -> re.Pattern:
    return re.compile(".*".join(re.escape(part) for part in pattern.split("%")), re.IGNORECASE)


def _ilike(value: Any, pattern: Any) -> bool:
    if value is None:
        return False
    return _ilike_regex(str(pattern)).search(str(value)) is not None


def _equality(op: Callable[[Any, Any], bool]) -> Callable[[Any, Any], bool]:
    # A None operand compares like SQL NULL: never equal, never unequal.
    def check(value: Any, operand: Any) -> bool:
        if operand is None:
            return False
        return bool(op(value, operand))

    return check


_OPERATORS: Dict[str, Callable[[Any, Any], bool]] = {
    "eq": _equality(operator.eq),
    "neq": _equality(operator.ne),
    "gt": _ordered(operator.gt),
    "gte": _ordered(operator.ge),
    "lt": _ordered(operator.lt),
    "lte": _ordered(operator.le),
    "in": lambda value, options: value in options,
    "ilike": _ilike,
}


def _wire_value(value: Any) -> Any:
    """Render date/time operands as the ISO text the tables store."""
    if isinstance(value, dt.datetime):  # includes pd.Timestamp
        if value.tzinfo is not None:
            value = value.astimezone(dt.timezone.utc).replace(tzinfo=None)
        if value.time() == dt.time(0, 0):
            return format_date(value)
        return value.strftime("%Y-%m-%dT%H:%M:%SZ")
    if isinstance(value, dt.date):
        return format_date(value)
    return value


def _matches(row: dict, flt: Filter) -> bool:
    return bool(_OPERATORS[flt.op](row.get(flt.column), flt.operand))


def _sort(rows: List[dict], ordering: Ordering) -> List[dict]:
    col = ordering.column
    present = [row for row in rows if row.get(col) is not None]
    missing = [row for row in rows if row.get(col) is None]
    reverse = not ordering.ascending
    try:
        present = sorted(present, key=lambda row: row[col], reverse=reverse)
    except TypeError:
        # Mixed value types in one column; fall back to a total order.
        present = sorted(present, key=lambda row: str(row[col]), reverse=reverse)
    nulls_first = ordering.nulls_first if ordering.nulls_first is not None else reverse
    return missing + present if nulls_first else present + missing


def run_query(snapshot: Sequence[dict], descriptor: QueryDescriptor) -> List[dict]:
    """Apply a descriptor to a snapshot and return deep-copied rows."""
    rows = list(snapshot)
    for flt in descriptor.filters:
        rows = [row for row in rows if _matches(row, flt)]
    if descriptor.ordering is not None:
        rows = _sort(rows, descriptor.ordering)
    if descriptor.limit is not None:
        rows = rows[: descriptor.limit]
    return copy.deepcopy(rows)


class QueryBuilder:
    """Single-use fluent query over one table snapshot.

    Chain methods return the builder itself. Once ``execute()`` has been
    called the builder is resolved: later chain calls are ignored and
    ``execute()`` returns the same envelope again.
    """

    def __init__(self, table: str, snapshot: Sequence[dict], settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()
        self._snapshot = snapshot
        self._descriptor = QueryDescriptor(table=table)
        self._awaited = False
        self._task: Optional["asyncio.Future[QueryResult]"] = None

    @property
    def descriptor(self) -> QueryDescriptor:
        return self._descriptor

    @property
    def resolved(self) -> bool:
        return self._awaited

    def _update(self, **changes: Any) -> "QueryBuilder":
        if self._awaited:
            logger.warning("Ignoring %s on already executed query for '%s'", sorted(changes), self._descriptor.table)
            return self
        self._descriptor = self._descriptor.model_copy(update=changes)
        return self

    def _add_filter(self, column: str, op: FilterOp, operand: Any) -> "QueryBuilder":
        if op == "in":
            operand = tuple(_wire_value(v) for v in operand)
        else:
            operand = _wire_value(operand)
        try:
            flt = Filter(column=column, op=op, operand=operand)
        except ValidationError:
            logger.warning("Ignoring %s filter on invalid column %r", op, column)
            return self
        return self._update(filters=self._descriptor.filters + (flt,))

    # ---- Chain ----
    def select(self, columns: str = "*") -> "QueryBuilder":
        return self._update(columns=columns)

    def eq(self, column: str, value: Any) -> "QueryBuilder":
        return self._add_filter(column, "eq", value)

    def neq(self, column: str, value: Any) -> "QueryBuilder":
        return self._add_filter(column, "neq", value)

    def gt(self, column: str, value: Any) -> "QueryBuilder":
        return self._add_filter(column, "gt", value)

    def gte(self, column: str, value: Any) -> "QueryBuilder":
        return self._add_filter(column, "gte", value)

    def lt(self, column: str, value: Any) -> "QueryBuilder":
        return self._add_filter(column, "lt", value)

    def lte(self, column: str, value: Any) -> "QueryBuilder":
        return self._add_filter(column, "lte", value)

    def in_(self, column: str, values: Any) -> "QueryBuilder":
        if values is None:
            logger.warning("in_(%r) given None; filter ignored", column)
            return self
        if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
            logger.warning("in_(%r) given scalar %r; treating as a one-item list", column, values)
            values = [values]
        return self._add_filter(column, "in", tuple(values))

    def ilike(self, column: str, pattern: Any) -> "QueryBuilder":
        return self._add_filter(column, "ilike", pattern)

    def order(self, column: str, ascending: bool = True, nulls_first: Optional[bool] = None) -> "QueryBuilder":
        if ascending is None:
            ascending = True
        try:
            ordering = Ordering(column=column, ascending=ascending, nulls_first=nulls_first)
        except ValidationError:
            logger.warning("Ignoring order(%r, ascending=%r, nulls_first=%r)", column, ascending, nulls_first)
            return self
        return self._update(ordering=ordering)

    def limit(self, count: Any) -> "QueryBuilder":
        try:
            count = int(count)
        except (TypeError, ValueError):
            logger.warning("limit(%r) is not an integer; limit ignored", count)
            return self
        if count < 0:
            logger.warning("limit(%d) is negative; limit ignored", count)
            return self
        return self._update(limit=count)

    def single(self) -> "QueryBuilder":
        return self._update(single=True)

    def maybe_single(self) -> "QueryBuilder":
        return self._update(single=True)

    # ---- Resolution ----
    async def execute(self) -> QueryResult:
        if self._task is None:
            self._awaited = True
            self._task = asyncio.ensure_future(self._run(self._descriptor))
        return await self._task

    async def _run(self, descriptor: QueryDescriptor) -> QueryResult:
        await random_delay(self.settings.query_latency_min_ms, self.settings.query_latency_max_ms)
        return self._resolve(descriptor)

    def _resolve(self, descriptor: QueryDescriptor) -> QueryResult:
        logger.debug("Resolving %r", descriptor)
        try:
            rows = run_query(self._snapshot, descriptor)
        except Exception as e:  # noqa: BLE001
            logger.exception("Query on '%s' failed", descriptor.table)
            return QueryResult(error=APIError(message=str(e), code="MOCK_QUERY_ERROR"))
        if descriptor.single:
            return QueryResult(data=rows[0] if rows else None)
        return QueryResult(data=rows)

"""Riak TS query builder."""

from __future__ import annotations

from dataclasses import dataclass
import logging

logger = logging.getLogger(__name__)

BACKEND_TABLE = "usertable"


@dataclass(frozen=True)
class BackendQuery:
    """A generated Riak TS query string. Built once, never mutated."""

    query_string: str

    def __str__(self) -> str:
        return self.query_string


def build_backend_query(
    aggregation: str,
    series_id: str,
    start_nanos: int,
    end_nanos: int,
) -> BackendQuery:
    """Build a query over ``[start_nanos, end_nanos)`` for one series row.

    Every series row lives in ``usertable``. An empty ``aggregation`` selects
    raw time/value pairs; otherwise the label is applied to the value column
    verbatim.
    """
    select = _select_expr(aggregation)
    where = f"series = '{series_id}' AND {_time_condition(start_nanos, end_nanos)}"
    query = BackendQuery(f"SELECT {select} FROM {BACKEND_TABLE} WHERE {where}")
    logger.debug("Riak TS query: %s", query.query_string)
    return query


def _select_expr(aggregation: str) -> str:
    if not aggregation:
        return "time, value"
    return f"{aggregation}(value)"


def _time_condition(start_nanos: int, end_nanos: int) -> str:
    return f"time >= {int(start_nanos)} AND time < {int(end_nanos)}"

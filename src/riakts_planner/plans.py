"""Query plan value objects handed to the execution layer."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, List, Mapping, Tuple
import pandas as pd

from .exceptions import InvalidPlanError
from .models import TimeInterval
from .query_builder import BackendQuery


def _freeze_queries(queries: Iterable[BackendQuery]) -> Tuple[BackendQuery, ...]:
    frozen = tuple(queries)
    for q in frozen:
        if not isinstance(q, BackendQuery):
            raise InvalidPlanError(f"Expected BackendQuery, got {type(q).__name__}")
    return frozen


def _freeze_buckets(buckets: Iterable[TimeInterval]) -> Tuple[TimeInterval, ...]:
    frozen = tuple(buckets)
    for b in frozen:
        if not isinstance(b, TimeInterval):
            raise InvalidPlanError(f"Expected TimeInterval bucket, got {type(b).__name__}")
    return frozen


@dataclass(frozen=True)
class QueryPlanWithServerAggregation:
    """Per-bucket backend queries with aggregation pushed to the server.

    Every bucket is a key, including buckets without any matching series; an
    empty query tuple means "no data for this bucket". The executor combines
    the per-series values of a bucket using ``aggregation``.
    """

    aggregation: str
    bucketed_queries: Mapping[TimeInterval, Tuple[BackendQuery, ...]]

    def __post_init__(self) -> None:
        frozen = {}
        for bucket, queries in self.bucketed_queries.items():
            if not isinstance(bucket, TimeInterval):
                raise InvalidPlanError(f"Expected TimeInterval bucket, got {type(bucket).__name__}")
            frozen[bucket] = _freeze_queries(queries)
        object.__setattr__(self, "bucketed_queries", MappingProxyType(frozen))

    def __hash__(self) -> int:
        return hash((self.aggregation, tuple(self.bucketed_queries.items())))

    @property
    def buckets(self) -> Tuple[TimeInterval, ...]:
        return tuple(self.bucketed_queries.keys())

    @property
    def query_count(self) -> int:
        return sum(len(queries) for queries in self.bucketed_queries.values())

    def to_frame(self) -> pd.DataFrame:
        """One row per backend query; empty buckets appear with a null query."""
        rows: List[dict] = []
        for bucket, queries in self.bucketed_queries.items():
            if not queries:
                rows.append({"bucket_start": bucket.start, "bucket_end": bucket.end, "query": None})
            for q in queries:
                rows.append({"bucket_start": bucket.start, "bucket_end": bucket.end, "query": q.query_string})
        return pd.DataFrame(rows, columns=["bucket_start", "bucket_end", "query"])


@dataclass(frozen=True)
class QueryPlanWithoutServerAggregation:
    """Raw per-series queries over the whole range.

    ``time_buckets`` are precomputed for the client-side re-aggregation step
    and do not shape the queries.
    """

    aggregation: str
    group_by_duration: pd.Timedelta
    time_buckets: Tuple[TimeInterval, ...]
    queries: Tuple[BackendQuery, ...]

    def __post_init__(self) -> None:
        duration = pd.Timedelta(self.group_by_duration)
        if duration < pd.Timedelta(0):
            raise InvalidPlanError(f"group_by_duration must not be negative, got {duration}")
        object.__setattr__(self, "group_by_duration", duration)
        object.__setattr__(self, "time_buckets", _freeze_buckets(self.time_buckets))
        object.__setattr__(self, "queries", _freeze_queries(self.queries))

    @property
    def query_count(self) -> int:
        return len(self.queries)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame({"query": [q.query_string for q in self.queries]}, columns=["query"])

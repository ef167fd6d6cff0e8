"""Planner that pushes aggregation to Riak TS."""

from __future__ import annotations

from typing import Dict, List

from ..base import QueryPlannerBase
from ..buckets import bucket_time_intervals
from ..catalog import SeriesCatalogLike
from ..models import AnalyticsQuery, TimeInterval
from ..plans import QueryPlanWithServerAggregation
from ..query_builder import BackendQuery, build_backend_query


class ServerAggregationPlanner(QueryPlannerBase):
    """One aggregated backend query per (series, time bucket) pair."""

    strategy = "server"

    def plan(self, query: AnalyticsQuery) -> QueryPlanWithServerAggregation:
        query.validate()
        query_interval = query.interval

        # Buckets are kept even when empty so that empty periods stay visible.
        buckets = bucket_time_intervals(query.time_start, query.time_end, query.group_by_duration)
        bucketed_series = self.resolve_series(query, buckets)

        bucketed_queries: Dict[TimeInterval, List[BackendQuery]] = {}
        for bucket, series in bucketed_series.items():
            # Only the query bounds are clamped; the bucket key keeps its full width.
            bounds = bucket.clamp(query_interval)
            bucketed_queries[bucket] = [
                build_backend_query(
                    query.aggregation,
                    s.series_id,
                    bounds.start_nanos,
                    bounds.end_nanos,
                )
                for s in series
            ]

        plan = QueryPlanWithServerAggregation(query.aggregation, bucketed_queries)
        self.logger.debug(
            "Planned query %s: %d buckets, %d backend queries",
            query.query_id,
            len(plan.bucketed_queries),
            plan.query_count,
        )
        return plan


def to_query_plan_with_server_aggregation(
    query: AnalyticsQuery, catalog: SeriesCatalogLike
) -> QueryPlanWithServerAggregation:
    return ServerAggregationPlanner(catalog).plan(query)

"""Planner that fetches raw points and leaves aggregation to the caller."""

from __future__ import annotations

from ..base import QueryPlannerBase
from ..buckets import bucket_time_intervals
from ..catalog import SeriesCatalogLike
from ..models import AnalyticsQuery
from ..plans import QueryPlanWithoutServerAggregation
from ..query_builder import build_backend_query


class ClientAggregationPlanner(QueryPlannerBase):
    """At most one raw backend query per matching series, spanning the whole range."""

    strategy = "client"

    def plan(self, query: AnalyticsQuery) -> QueryPlanWithoutServerAggregation:
        query.validate()
        query_interval = query.interval

        # Carried for client-side re-aggregation; not used to shape the queries.
        time_buckets = bucket_time_intervals(query.time_start, query.time_end, query.group_by_duration)

        applicable_series = self.resolve_series(query, [query_interval])[query_interval]
        queries = [
            build_backend_query(
                "",
                s.series_id,
                query_interval.start_nanos,
                query_interval.end_nanos,
            )
            for s in applicable_series
        ]

        plan = QueryPlanWithoutServerAggregation(
            aggregation=query.aggregation,
            group_by_duration=query.group_by_duration,
            time_buckets=time_buckets,
            queries=queries,
        )
        self.logger.debug(
            "Planned query %s: %d raw queries, %d buckets",
            query.query_id,
            plan.query_count,
            len(plan.time_buckets),
        )
        return plan


def to_query_plan_without_server_aggregation(
    query: AnalyticsQuery, catalog: SeriesCatalogLike
) -> QueryPlanWithoutServerAggregation:
    return ClientAggregationPlanner(catalog).plan(query)

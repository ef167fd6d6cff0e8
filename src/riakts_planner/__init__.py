"""riakts_planner package."""

from .base import QueryPlannerBase, resolve_matching_series
from .buckets import bucket_time_intervals
from .catalog import Series, SeriesCatalog, SeriesCatalogLike
from .client.planner import ClientAggregationPlanner, to_query_plan_without_server_aggregation
from .config import PlannerConfig, load_env, planner_config_from_env, resolve_planner_config
from .exceptions import (
    PlannerError,
    InvalidGroupByDurationError,
    InvalidPlanError,
    InvalidTagSetError,
    InvalidTimeRangeError,
)
from .models import AnalyticsQuery, TimeInterval, resolve_query
from .planner import QueryPlannerFactory
from .plans import QueryPlanWithoutServerAggregation, QueryPlanWithServerAggregation
from .query_builder import BackendQuery, build_backend_query
from .server.planner import ServerAggregationPlanner, to_query_plan_with_server_aggregation

__all__ = [
    "QueryPlannerFactory",
    "QueryPlannerBase",
    "ServerAggregationPlanner",
    "ClientAggregationPlanner",
    "to_query_plan_with_server_aggregation",
    "to_query_plan_without_server_aggregation",
    "resolve_matching_series",
    "bucket_time_intervals",
    "Series",
    "SeriesCatalog",
    "SeriesCatalogLike",
    "PlannerConfig",
    "load_env",
    "planner_config_from_env",
    "resolve_planner_config",
    "PlannerError",
    "InvalidGroupByDurationError",
    "InvalidPlanError",
    "InvalidTagSetError",
    "InvalidTimeRangeError",
    "AnalyticsQuery",
    "TimeInterval",
    "resolve_query",
    "QueryPlanWithServerAggregation",
    "QueryPlanWithoutServerAggregation",
    "BackendQuery",
    "build_backend_query",
]

"""Abstract base planner for riakts_planner."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, List, Sequence, Union
import logging

from .catalog import SeriesCatalogLike, SeriesLike
from .models import AnalyticsQuery, TimeInterval
from .plans import QueryPlanWithoutServerAggregation, QueryPlanWithServerAggregation

QueryPlan = Union[QueryPlanWithServerAggregation, QueryPlanWithoutServerAggregation]


class QueryPlannerBase(ABC):
    """Abstract base class for query planners.

    A planner is bound to one read-only catalog and holds no other state, so
    a single instance may serve concurrent callers.
    """

    strategy: str = ""

    def __init__(self, catalog: SeriesCatalogLike) -> None:
        self.catalog = catalog
        self.logger = logging.getLogger(f"{__name__}.{self.strategy}")

    @abstractmethod
    def plan(self, query: AnalyticsQuery) -> QueryPlan:
        """Turn an analytics query into a query plan."""

    def resolve_series(
        self, query: AnalyticsQuery, intervals: Sequence[TimeInterval]
    ) -> Dict[TimeInterval, List[SeriesLike]]:
        return resolve_matching_series(query, self.catalog, intervals)

    def __repr__(self) -> str:
        return f"QueryPlanner({self.strategy}, {self.catalog!r})"


def resolve_matching_series(
    query: AnalyticsQuery,
    catalog: SeriesCatalogLike,
    intervals: Sequence[TimeInterval],
) -> Dict[TimeInterval, List[SeriesLike]]:
    """Associate every catalog series matching ``query`` with the intervals it overlaps.

    Candidates come from the catalog's measurement/field index and must then
    pass the measurement, field and tag-set tests before each interval is
    checked independently. Every interval is present in the result, in the
    given order, even when no series overlaps it.
    """
    matches: Dict[TimeInterval, List[SeriesLike]] = {ti: [] for ti in intervals}
    candidates = catalog.series_for_measurement_and_field(query.measurement, query.field)
    for s in candidates:
        # quick skip if the series doesn't match at all:
        if not s.matches_measurement_name(query.measurement):
            continue
        if not s.matches_field_name(query.field):
            continue
        if not s.matches_tag_sets(query.tag_sets):
            continue
        for ti in matches:
            if s.matches_time_interval(ti):
                matches[ti].append(s)
    return matches

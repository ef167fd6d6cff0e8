"""Factory and entry point for riakts_planner planners."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from .base import QueryPlannerBase
from .catalog import SeriesCatalogLike
from .client.planner import ClientAggregationPlanner
from .config import STRATEGIES, PlannerConfig, normalize_strategy, resolve_planner_config
from .server.planner import ServerAggregationPlanner


class QueryPlannerFactory:
    """Factory for selecting the planning strategy."""

    @staticmethod
    def get_planner(
        catalog: SeriesCatalogLike,
        strategy: Optional[str] = None,
        config: Optional[PlannerConfig | Mapping[str, Any]] = None,
    ) -> QueryPlannerBase:
        if catalog is None:
            raise ValueError("catalog is required")

        if strategy is None or not strategy.strip():
            strategy = resolve_planner_config(config).strategy
        strategy = normalize_strategy(strategy)

        if strategy == "server":
            return ServerAggregationPlanner(catalog)
        if strategy == "client":
            return ClientAggregationPlanner(catalog)

        raise ValueError(
            f"Unsupported planning strategy: {strategy}. Expected one of: {', '.join(STRATEGIES)}"
        )

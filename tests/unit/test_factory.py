from riakts_planner.catalog import SeriesCatalog
from riakts_planner.client.planner import ClientAggregationPlanner
from riakts_planner.config import PlannerConfig
from riakts_planner.planner import QueryPlannerFactory
from riakts_planner.server.planner import ServerAggregationPlanner
import pytest


def test_factory_server_strategy():
    planner = QueryPlannerFactory.get_planner(SeriesCatalog(), strategy="server")
    assert isinstance(planner, ServerAggregationPlanner)


def test_factory_client_strategy():
    planner = QueryPlannerFactory.get_planner(SeriesCatalog(), strategy="client")
    assert isinstance(planner, ClientAggregationPlanner)


def test_factory_strategy_from_config_mapping():
    planner = QueryPlannerFactory.get_planner(SeriesCatalog(), config={"strategy": "client"})
    assert isinstance(planner, ClientAggregationPlanner)


def test_factory_strategy_from_config_dataclass():
    planner = QueryPlannerFactory.get_planner(SeriesCatalog(), config=PlannerConfig(strategy="server"))
    assert isinstance(planner, ServerAggregationPlanner)


def test_factory_explicit_strategy_wins_over_config():
    planner = QueryPlannerFactory.get_planner(SeriesCatalog(), strategy="server", config={"strategy": "client"})
    assert isinstance(planner, ServerAggregationPlanner)


def test_factory_strategy_from_env(monkeypatch):
    monkeypatch.setenv("RIAKTS_PLANNER_STRATEGY", "client")
    planner = QueryPlannerFactory.get_planner(SeriesCatalog())
    assert isinstance(planner, ClientAggregationPlanner)


def test_factory_rejects_unknown_strategy():
    with pytest.raises(ValueError, match="Unsupported planning strategy"):
        QueryPlannerFactory.get_planner(SeriesCatalog(), strategy="hybrid")


def test_factory_requires_catalog():
    with pytest.raises(ValueError, match="catalog is required"):
        QueryPlannerFactory.get_planner(None, strategy="server")


def test_factory_normalizes_explicit_strategy():
    planner = QueryPlannerFactory.get_planner(SeriesCatalog(), strategy=" Server ")
    assert isinstance(planner, ServerAggregationPlanner)
    planner = QueryPlannerFactory.get_planner(SeriesCatalog(), strategy="CLIENT")
    assert isinstance(planner, ClientAggregationPlanner)

from __future__ import annotations

import pandas as pd
import pytest

from riakts_planner.exceptions import InvalidPlanError
from riakts_planner.models import TimeInterval
from riakts_planner.plans import QueryPlanWithoutServerAggregation, QueryPlanWithServerAggregation
from riakts_planner.query_builder import BackendQuery

T0 = pd.Timestamp("2016-01-01T00:00:00Z")
BUCKET = TimeInterval(T0, T0 + pd.Timedelta("1h"))


def test_server_plan_freezes_bucketed_queries() -> None:
    queries = [BackendQuery("SELECT avg(value) FROM usertable")]
    source = {BUCKET: queries}

    plan = QueryPlanWithServerAggregation("avg", source)
    queries.append(BackendQuery("late"))
    source[TimeInterval(T0, T0)] = []

    assert plan.bucketed_queries == {BUCKET: (BackendQuery("SELECT avg(value) FROM usertable"),)}
    with pytest.raises(TypeError):
        plan.bucketed_queries[BUCKET] = ()


def test_server_plan_rejects_malformed_buckets_and_queries() -> None:
    with pytest.raises(InvalidPlanError, match="TimeInterval"):
        QueryPlanWithServerAggregation("avg", {"2016-01-01": []})
    with pytest.raises(InvalidPlanError, match="BackendQuery"):
        QueryPlanWithServerAggregation("avg", {BUCKET: ["SELECT 1"]})


def test_client_plan_validation() -> None:
    with pytest.raises(InvalidPlanError, match="must not be negative"):
        QueryPlanWithoutServerAggregation("avg", pd.Timedelta("-1h"), [BUCKET], [])
    with pytest.raises(InvalidPlanError, match="TimeInterval"):
        QueryPlanWithoutServerAggregation("avg", pd.Timedelta("1h"), [(T0, T0)], [])
    with pytest.raises(InvalidPlanError, match="BackendQuery"):
        QueryPlanWithoutServerAggregation("avg", pd.Timedelta("1h"), [BUCKET], [None])


def test_client_plan_to_frame() -> None:
    plan = QueryPlanWithoutServerAggregation("", "1h", [BUCKET], [BackendQuery("q1"), BackendQuery("q2")])

    assert plan.group_by_duration == pd.Timedelta("1h")
    assert plan.query_count == 2
    assert plan.to_frame()["query"].tolist() == ["q1", "q2"]


def test_plans_are_hashable() -> None:
    server = QueryPlanWithServerAggregation("avg", {BUCKET: [BackendQuery("q1")], TimeInterval(T0, T0): []})
    same = QueryPlanWithServerAggregation("avg", {BUCKET: (BackendQuery("q1"),), TimeInterval(T0, T0): ()})
    client = QueryPlanWithoutServerAggregation("avg", "1h", [BUCKET], [BackendQuery("q1")])

    assert server == same
    assert len({server, same}) == 1
    assert hash(client) == hash(QueryPlanWithoutServerAggregation("avg", "1h", [BUCKET], [BackendQuery("q1")]))

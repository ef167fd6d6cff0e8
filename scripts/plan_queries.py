"""Plan analytics queries against a series catalog and print the result.

Usage:
    py scripts/plan_queries.py --catalog catalog.csv < queries.jsonl
    py scripts/plan_queries.py --catalog catalog.csv --queries queries.jsonl --strategy client
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import IO, List

import pandas as pd

from riakts_planner import (
    AnalyticsQuery,
    QueryPlannerFactory,
    SeriesCatalog,
    planner_config_from_env,
    resolve_query,
)


def _load_catalog(path: str) -> SeriesCatalog:
    # dtype=str keeps tag values like "1" from turning into floats
    df = pd.read_csv(path, dtype=str)
    return SeriesCatalog.from_dataframe(df)


def _load_queries(stream: IO[str]) -> List[AnalyticsQuery]:
    queries = []
    for lineno, line in enumerate(stream, start=1):
        line = line.strip()
        if not line:
            continue
        try:
            queries.append(resolve_query(json.loads(line)))
        except json.JSONDecodeError as exc:
            raise ValueError(f"line {lineno}: invalid JSON ({exc.msg})") from exc
    return queries


def _run_with_catalog(catalog: SeriesCatalog, queries: List[AnalyticsQuery], strategy: str) -> int:
    planner = QueryPlannerFactory.get_planner(catalog, strategy=strategy)
    print(f"strategy={strategy} series={len(catalog)} queries={len(queries)}")
    for query in queries:
        plan = planner.plan(query)
        print(query.force_utc())
        print(f"backend queries: {plan.query_count}")
        df = plan.to_frame()
        if not df.empty:
            print(df.to_string(index=False))
    return 0


def run(catalog_path: str, queries_path: str | None, strategy: str | None) -> int:
    config = planner_config_from_env()
    catalog = _load_catalog(catalog_path)
    if queries_path:
        with open(queries_path, encoding="utf-8") as fh:
            queries = _load_queries(fh)
    else:
        queries = _load_queries(sys.stdin)
    return _run_with_catalog(catalog, queries, strategy or config.strategy)


def main() -> int:
    parser = argparse.ArgumentParser(description="Plan Riak TS queries for analytics queries")
    parser.add_argument("--catalog", required=True, help="CSV file with one row per series")
    parser.add_argument("--queries", help="JSON-lines file with one query per line (default: stdin)")
    parser.add_argument("--strategy", choices=["server", "client"], help="Planning strategy (default: from env)")
    args = parser.parse_args()
    try:
        return run(args.catalog, args.queries, args.strategy)
    except Exception as exc:
        print(f"Planning failed: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())

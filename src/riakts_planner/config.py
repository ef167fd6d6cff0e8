"""Configuration loading for riakts_planner."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional
import os

from dotenv import load_dotenv

STRATEGIES = ("server", "client")


def load_env() -> None:
    """Load environment variables from a .env file if present."""
    load_dotenv()


def normalize_strategy(value: Optional[str], default: str = "server") -> str:
    if value is None or not value.strip():
        return default
    return value.strip().lower()


@dataclass(frozen=True)
class PlannerConfig:
    strategy: str = "server"


def planner_config_from_env() -> PlannerConfig:
    load_env()
    return PlannerConfig(
        strategy=normalize_strategy(os.getenv("RIAKTS_PLANNER_STRATEGY")),
    )


def _dict_get(d: Mapping[str, Any], key: str, fallback: Any = None) -> Any:
    if key in d:
        return d[key]
    return fallback


def resolve_planner_config(config: PlannerConfig | Mapping[str, Any] | None) -> PlannerConfig:
    if config is None:
        return planner_config_from_env()
    if isinstance(config, PlannerConfig):
        return config
    return PlannerConfig(
        strategy=normalize_strategy(_dict_get(config, "strategy")),
    )

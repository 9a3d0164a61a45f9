"""
Centralized configuration for the league balance bot.
"""

from __future__ import annotations

import os
from typing import Any

from dotenv import load_dotenv

load_dotenv()


def _parse_int(env_var: str, default: int) -> int:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _parse_float(env_var: str, default: float) -> float:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _parse_int_list(env_var: str, default: list[int]) -> list[int]:
    raw = os.getenv(env_var)
    if raw is None:
        return default
    try:
        return [int(x.strip()) for x in raw.split(",") if x.strip()]
    except ValueError:
        return default


DB_PATH = os.getenv("DB_PATH", "league_balance.db")
DISCORD_BOT_TOKEN = os.getenv("DISCORD_BOT_TOKEN")
ADMIN_USER_IDS: list[int] = _parse_int_list("ADMIN_USER_IDS", [])

# Pool bounds for performance balancing (inclusive)
BALANCE_MIN_POOL_SIZE = _parse_int("BALANCE_MIN_POOL_SIZE", 8)
BALANCE_MAX_POOL_SIZE = _parse_int("BALANCE_MAX_POOL_SIZE", 18)

# Fallbacks when a guild has no stored weights
DEFAULT_POWER_WEIGHT = _parse_float("DEFAULT_POWER_WEIGHT", 0.5)
DEFAULT_GOAL_WEIGHT = _parse_float("DEFAULT_GOAL_WEIGHT", 0.5)
DEFAULT_ATTRIBUTE_WEIGHT = _parse_float("DEFAULT_ATTRIBUTE_WEIGHT", 1.0)

PERFORMANCE_BALANCER_SETTINGS: dict[str, Any] = {
    # League prior for players without enough history
    "default_power_rating": _parse_float("PERF_DEFAULT_POWER_RATING", 5.35),
    "fallback_goal_threat": _parse_float("PERF_FALLBACK_GOAL_THREAT", 0.5),
    "max_iterations": _parse_int("PERF_MAX_ITERATIONS", 3000),
    "max_stall_iterations": _parse_int("PERF_MAX_STALL_ITERATIONS", 500),
    "target_loss": _parse_float("PERF_TARGET_LOSS", 1.0),
    # Second pass runs when loss > retry_factor * target_loss
    "retry_factor": _parse_float("PERF_RETRY_FACTOR", 1.5),
    "retry_iterations": _parse_int("PERF_RETRY_ITERATIONS", 500),
    "power_gap_floor": 0.1,
    "goal_gap_floor": 0.01,
}

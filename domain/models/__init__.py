"""
Domain models - pure data structures representing business entities.
"""

from domain.models.balance import (
    PerformanceBalanceResult,
    PerformanceWeights,
    RatingBalanceResult,
    TeamLineup,
    TeamSizeTemplate,
)
from domain.models.fixture import Fixture, SlotAssignment
from domain.models.player import Player

__all__ = [
    "Player",
    "Fixture",
    "SlotAssignment",
    "PerformanceWeights",
    "TeamSizeTemplate",
    "TeamLineup",
    "PerformanceBalanceResult",
    "RatingBalanceResult",
]

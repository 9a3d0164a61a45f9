"""
Repository layer for data access abstraction.
"""

from repositories.balance_config_repository import BalanceConfigRepository
from repositories.base_repository import BaseRepository
from repositories.fixture_repository import FixtureRepository
from repositories.interfaces import (
    IBalanceConfigRepository,
    IFixtureRepository,
    IPlayerRepository,
)
from repositories.player_repository import PlayerRepository

__all__ = [
    "BaseRepository",
    "PlayerRepository",
    "FixtureRepository",
    "BalanceConfigRepository",
    "IPlayerRepository",
    "IFixtureRepository",
    "IBalanceConfigRepository",
]

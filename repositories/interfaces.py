"""
Abstract repository interfaces for data access.

These interfaces define the contracts implemented by concrete repositories.
"""

from abc import ABC, abstractmethod

from domain.models.balance import PerformanceWeights, TeamSizeTemplate
from domain.models.fixture import Fixture, SlotAssignment
from domain.models.player import Player


class IPlayerRepository(ABC):
    @abstractmethod
    def add(self, player: Player, guild_id: int | None = None) -> None: ...

    @abstractmethod
    def get_by_id(self, player_id: int, guild_id: int | None = None) -> Player | None: ...

    @abstractmethod
    def get_by_ids(self, player_ids: list[int], guild_id: int | None = None) -> list[Player]: ...


class IFixtureRepository(ABC):
    @abstractmethod
    def create(self, guild_id: int | None, team_size_a: int, team_size_b: int) -> int: ...

    @abstractmethod
    def get_by_id(self, fixture_id: int) -> Fixture | None: ...

    @abstractmethod
    def add_to_pool(self, fixture_id: int, player_ids: list[int]) -> int: ...

    @abstractmethod
    def get_pool_player_ids(self, fixture_id: int) -> list[int]: ...

    @abstractmethod
    def get_assignments(self, fixture_id: int) -> list[SlotAssignment]: ...

    @abstractmethod
    def update_if_version(self, fixture_id: int, expected_version: int, is_balanced: bool) -> int: ...

    @abstractmethod
    def replace_assignments(
        self,
        fixture_id: int,
        assignments: list[SlotAssignment],
        is_balanced: bool = True,
        expected_version: int | None = None,
    ) -> bool: ...


class IBalanceConfigRepository(ABC):
    @abstractmethod
    def get_performance_weights(self, guild_id: int | None) -> PerformanceWeights | None: ...

    @abstractmethod
    def set_performance_weights(self, guild_id: int | None, power_weight: float, goal_weight: float) -> None: ...

    @abstractmethod
    def get_attribute_weights(self, guild_id: int | None) -> dict[tuple[str, str], float]: ...

    @abstractmethod
    def set_attribute_weight(self, guild_id: int | None, position_group: str, attribute: str, weight: float) -> None: ...

    @abstractmethod
    def clear_attribute_weights(self, guild_id: int | None) -> int: ...

    @abstractmethod
    def get_template(self, guild_id: int | None, team_size: int) -> TeamSizeTemplate | None: ...

    @abstractmethod
    def set_template(self, guild_id: int | None, template: TeamSizeTemplate) -> None: ...

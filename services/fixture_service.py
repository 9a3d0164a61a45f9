"""
Fixture and player pool management.
"""

import logging

from domain.models.fixture import TEAM_A, TEAM_B, Fixture
from repositories.interfaces import IFixtureRepository, IPlayerRepository
from services import error_codes
from services.result import Result

logger = logging.getLogger("league_bot.services.fixture")


class FixtureService:
    """Creates fixtures and manages who is in their pool."""

    def __init__(self, fixture_repo: IFixtureRepository, player_repo: IPlayerRepository):
        self.fixture_repo = fixture_repo
        self.player_repo = player_repo

    def create_fixture(self, guild_id: int | None, team_size_a: int, team_size_b: int) -> Result[Fixture]:
        if team_size_a < 1 or team_size_b < 1:
            return Result.fail("Team sizes must be at least 1", code=error_codes.VALIDATION_ERROR)

        fixture_id = self.fixture_repo.create(guild_id, team_size_a, team_size_b)
        logger.info(f"Created fixture {fixture_id} ({team_size_a}v{team_size_b}) in guild {guild_id}")
        return Result.ok(self.fixture_repo.get_by_id(fixture_id))

    def get_fixture(self, fixture_id: int, guild_id: int | None = None) -> Result[Fixture]:
        """Look up a fixture, optionally requiring it to belong to guild_id."""
        fixture = self.fixture_repo.get_by_id(fixture_id)
        if fixture is None or (guild_id is not None and fixture.guild_id != guild_id):
            return Result.fail(f"Fixture {fixture_id} not found", code=error_codes.FIXTURE_NOT_FOUND)
        return Result.ok(fixture)

    def add_players_to_pool(self, fixture_id: int, player_ids: list[int]) -> Result[int]:
        """
        Add registered players to a fixture's pool.

        Returns:
            Result.ok(number newly added); fails if the fixture or any player is unknown
        """
        fixture_result = self.get_fixture(fixture_id)
        if not fixture_result:
            return fixture_result

        fixture = fixture_result.value
        players = self.player_repo.get_by_ids(player_ids, fixture.guild_id)
        found = {p.player_id for p in players}
        missing = [pid for pid in player_ids if pid not in found]
        if missing:
            return Result.fail(
                f"Unknown player(s): {', '.join(str(pid) for pid in missing)}",
                code=error_codes.PLAYER_NOT_FOUND,
            )

        added = self.fixture_repo.add_to_pool(fixture_id, player_ids)
        logger.info(f"Added {added} player(s) to fixture {fixture_id} pool")
        return Result.ok(added)

    def get_lineup(self, fixture_id: int) -> Result[dict[str, list[int]]]:
        """Assigned player ids per team, in slot order."""
        fixture_result = self.get_fixture(fixture_id)
        if not fixture_result:
            return fixture_result

        lineup: dict[str, list[int]] = {TEAM_A: [], TEAM_B: []}
        for assignment in self.fixture_repo.get_assignments(fixture_id):
            lineup[assignment.team].append(assignment.player_id)
        return Result.ok(lineup)

    def get_pool(self, fixture_id: int) -> list[int]:
        """Every player attached to the fixture, assigned or not."""
        return self.fixture_repo.get_pool_player_ids(fixture_id)

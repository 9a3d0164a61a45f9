"""
Balancing orchestration: load a fixture's pool, run a balancer, persist slots.
"""

import logging
import random
from dataclasses import dataclass, field

from config import BALANCE_MAX_POOL_SIZE, BALANCE_MIN_POOL_SIZE, DEFAULT_ATTRIBUTE_WEIGHT
from domain.models.balance import PerformanceWeights
from domain.models.fixture import TEAM_A, TEAM_B, Fixture, build_slot_assignments
from domain.models.player import Player
from domain.services.performance_balancer import PerformanceBalancer
from domain.services.rating_balancer import RatingBalancer
from repositories.interfaces import IFixtureRepository, IPlayerRepository
from services import error_codes
from services.balance_config_service import BalanceConfigService
from services.result import Result

logger = logging.getLogger("league_bot.services.balance")

METHOD_PERFORMANCE = "performance"
METHOD_RATING = "rating"
METHOD_RANDOM = "random"
BALANCE_METHODS = (METHOD_PERFORMANCE, METHOD_RATING, METHOD_RANDOM)


@dataclass
class BalanceOutcome:
    """What a balancing run produced and wrote."""

    fixture_id: int
    method: str
    team_a: list[int]
    team_b: list[int]
    state_version: int
    balance_percent: float | None = None
    power_gap: float | None = None
    goal_gap: float | None = None
    balance_score: float | None = None
    # Rating balancer only: team -> positional units
    positions: dict[str, dict[str, list[int]]] = field(default_factory=dict)


class BalanceService:
    """
    Runs the balancers against persisted fixtures.

    Lookup and validation happen here; the balancers themselves never touch
    storage. Every expected failure comes back as a failed Result.
    """

    def __init__(
        self,
        fixture_repo: IFixtureRepository,
        player_repo: IPlayerRepository,
        config_service: BalanceConfigService,
        rng: random.Random | None = None,
        performance_balancer: PerformanceBalancer | None = None,
        rating_balancer: RatingBalancer | None = None,
        min_pool_size: int = BALANCE_MIN_POOL_SIZE,
        max_pool_size: int = BALANCE_MAX_POOL_SIZE,
    ):
        self.fixture_repo = fixture_repo
        self.player_repo = player_repo
        self.config_service = config_service
        self.rng = rng if rng is not None else random.Random()
        self.performance_balancer = performance_balancer or PerformanceBalancer(rng=self.rng)
        self.rating_balancer = rating_balancer or RatingBalancer(default_weight=DEFAULT_ATTRIBUTE_WEIGHT)
        self.min_pool_size = min_pool_size
        self.max_pool_size = max_pool_size

    # --- Shared steps ---

    def _load_fixture(self, fixture_id: int, expected_version: int | None) -> Result[Fixture]:
        fixture = self.fixture_repo.get_by_id(fixture_id)
        if fixture is None:
            return Result.fail(f"Fixture {fixture_id} not found", code=error_codes.FIXTURE_NOT_FOUND)
        if expected_version is not None and fixture.state_version != expected_version:
            logger.warning(
                f"Fixture {fixture_id} is at version {fixture.state_version}, "
                f"caller expected {expected_version}"
            )
            return Result.fail(
                f"Fixture {fixture_id} changed since version {expected_version}; reload and retry",
                code=error_codes.VERSION_CONFLICT,
            )
        return Result.ok(fixture)

    @staticmethod
    def _resolve_sizes(
        fixture: Fixture, pool_size: int, team_sizes: tuple[int, int] | None
    ) -> Result[tuple[int, int] | None]:
        """Explicit sizes, else the fixture's sizes when they fit the pool, else None (even split)."""
        if team_sizes is not None:
            size_a, size_b = team_sizes
            if size_a < 1 or size_b < 1:
                return Result.fail("Team sizes must be at least 1", code=error_codes.VALIDATION_ERROR)
            if size_a + size_b != pool_size:
                return Result.fail(
                    f"Team sizes {size_a}+{size_b} do not match the pool of {pool_size}",
                    code=error_codes.VALIDATION_ERROR,
                )
            return Result.ok((size_a, size_b))
        if fixture.total_players == pool_size:
            return Result.ok(fixture.team_sizes)
        return Result.ok(None)

    def _persist(
        self,
        fixture: Fixture,
        team_a: list[int],
        team_b: list[int],
        expected_version: int | None,
    ) -> Result[int]:
        """Rewrite the fixture's slots; returns the new state version."""
        written = self.fixture_repo.replace_assignments(
            fixture.fixture_id,
            build_slot_assignments(team_a, team_b),
            is_balanced=True,
            expected_version=expected_version,
        )
        if not written:
            return Result.fail(
                f"Fixture {fixture.fixture_id} was modified concurrently; reload and retry",
                code=error_codes.VERSION_CONFLICT,
            )
        return Result.ok(self.fixture_repo.get_by_id(fixture.fixture_id).state_version)

    def _load_players(self, player_ids: list[int], guild_id: int) -> Result[list[Player]]:
        players = self.player_repo.get_by_ids(player_ids, guild_id)
        if len(players) != len(player_ids):
            found = {p.player_id for p in players}
            missing = [str(pid) for pid in player_ids if pid not in found]
            return Result.fail(
                f"Unknown player(s): {', '.join(missing)}", code=error_codes.PLAYER_NOT_FOUND
            )
        return Result.ok(players)

    # --- Performance ---

    def balance_by_performance(
        self,
        fixture_id: int,
        player_ids: list[int] | None = None,
        team_sizes: tuple[int, int] | None = None,
        weights: PerformanceWeights | None = None,
        expected_version: int | None = None,
    ) -> Result[BalanceOutcome]:
        """
        Balance on power rating and goal threat, then persist the slots.

        Args:
            fixture_id: Fixture to balance
            player_ids: Pool override (default: the fixture's stored pool)
            team_sizes: (size_a, size_b) override
            weights: Weight override (default: guild configuration)
            expected_version: Optimistic concurrency token
        """
        fixture_result = self._load_fixture(fixture_id, expected_version)
        if not fixture_result:
            return fixture_result
        fixture = fixture_result.value

        if player_ids is None:
            player_ids = self.fixture_repo.get_pool_player_ids(fixture_id)

        if len(set(player_ids)) != len(player_ids):
            return Result.fail("Player pool contains duplicates", code=error_codes.VALIDATION_ERROR)
        if not self.min_pool_size <= len(player_ids) <= self.max_pool_size:
            return Result.fail(
                f"Pool must have {self.min_pool_size}-{self.max_pool_size} players, got {len(player_ids)}",
                code=error_codes.VALIDATION_ERROR,
            )

        sizes_result = self._resolve_sizes(fixture, len(player_ids), team_sizes)
        if not sizes_result:
            return sizes_result

        if weights is not None:
            weights_result = self.config_service.validate_performance_weights(
                weights.power_weight, weights.goal_weight
            )
            if not weights_result:
                return weights_result
        else:
            weights = self.config_service.get_performance_weights(fixture.guild_id)

        players_result = self._load_players(player_ids, fixture.guild_id)
        if not players_result:
            return players_result

        result = self.performance_balancer.balance(
            players_result.value, team_sizes=sizes_result.value, weights=weights
        )

        version_result = self._persist(fixture, result.team_a, result.team_b, expected_version)
        if not version_result:
            return version_result

        return Result.ok(
            BalanceOutcome(
                fixture_id=fixture_id,
                method=METHOD_PERFORMANCE,
                team_a=result.team_a,
                team_b=result.team_b,
                state_version=version_result.value,
                balance_percent=result.balance_percent,
                power_gap=result.power_gap,
                goal_gap=result.goal_gap,
            )
        )

    # --- Rating ---

    def balance_by_rating(
        self,
        fixture_id: int,
        team_sizes: tuple[int, int] | None = None,
        expected_version: int | None = None,
    ) -> Result[BalanceOutcome]:
        """
        Balance the fixture's stored pool on positional attributes.

        Raises:
            RuntimeError: If the search finds no combination at all
        """
        fixture_result = self._load_fixture(fixture_id, expected_version)
        if not fixture_result:
            return fixture_result
        fixture = fixture_result.value

        size_a, size_b = team_sizes if team_sizes is not None else fixture.team_sizes
        if size_a < 1 or size_b < 1:
            return Result.fail("Team sizes must be at least 1", code=error_codes.VALIDATION_ERROR)

        pool_ids = self.fixture_repo.get_pool_player_ids(fixture_id)
        players = self.player_repo.get_by_ids(pool_ids, fixture.guild_id)
        if len(players) != size_a + size_b:
            return Result.fail(
                f"Fixture {fixture_id} needs {size_a + size_b} players for {size_a}v{size_b}, "
                f"found {len(players)}",
                code=error_codes.PLAYER_COUNT_MISMATCH,
            )

        template_result = self.config_service.get_template(fixture.guild_id, max(size_a, size_b))
        if not template_result:
            return template_result

        weights = self.config_service.get_attribute_weights(fixture.guild_id)
        result = self.rating_balancer.balance(
            players, template_result.value, (size_a, size_b), weights=weights
        )

        team_a = result.team_a.player_ids
        team_b = result.team_b.player_ids
        version_result = self._persist(fixture, team_a, team_b, expected_version)
        if not version_result:
            return version_result

        return Result.ok(
            BalanceOutcome(
                fixture_id=fixture_id,
                method=METHOD_RATING,
                team_a=team_a,
                team_b=team_b,
                state_version=version_result.value,
                balance_score=result.balance_score,
                positions={
                    TEAM_A: {
                        "defense": result.team_a.defenders,
                        "midfield": result.team_a.midfielders,
                        "attack": result.team_a.attackers,
                    },
                    TEAM_B: {
                        "defense": result.team_b.defenders,
                        "midfield": result.team_b.midfielders,
                        "attack": result.team_b.attackers,
                    },
                },
            )
        )

    # --- Random ---

    def balance_randomly(
        self,
        fixture_id: int,
        team_sizes: tuple[int, int] | None = None,
        expected_version: int | None = None,
    ) -> Result[BalanceOutcome]:
        """Shuffle the stored pool and split it by the target sizes."""
        fixture_result = self._load_fixture(fixture_id, expected_version)
        if not fixture_result:
            return fixture_result
        fixture = fixture_result.value

        pool_ids = self.fixture_repo.get_pool_player_ids(fixture_id)
        if len(pool_ids) < 2:
            return Result.fail(
                f"Fixture {fixture_id} needs at least 2 players in its pool",
                code=error_codes.VALIDATION_ERROR,
            )

        sizes_result = self._resolve_sizes(fixture, len(pool_ids), team_sizes)
        if not sizes_result:
            return sizes_result
        size_a, _ = sizes_result.value or PerformanceBalancer.resolve_team_sizes(len(pool_ids))

        shuffled = list(pool_ids)
        self.rng.shuffle(shuffled)
        team_a, team_b = shuffled[:size_a], shuffled[size_a:]

        version_result = self._persist(fixture, team_a, team_b, expected_version)
        if not version_result:
            return version_result

        logger.info(f"Random balance for fixture {fixture_id}: {len(team_a)}v{len(team_b)}")
        return Result.ok(
            BalanceOutcome(
                fixture_id=fixture_id,
                method=METHOD_RANDOM,
                team_a=team_a,
                team_b=team_b,
                state_version=version_result.value,
            )
        )

"""
Performance-based team balancing.

Splits a pool on two continuous metrics (power rating and goal threat) using
stochastic hill-climbing over a range-normalized, weighted loss.
"""

import logging
import random
from collections.abc import Callable

from config import PERFORMANCE_BALANCER_SETTINGS
from domain.models.balance import PerformanceBalanceResult, PerformanceWeights
from domain.models.player import Player
from domain.services.balance_scoring import metric_range, resolve_performance_metrics, team_totals

logger = logging.getLogger("league_bot.balancer.performance")


class PerformanceBalancer:
    """
    Balances two teams on power rating and goal threat.

    The random source is injected so callers (and tests) control swap
    selection. Only ``randrange`` is used.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        default_power_rating: float | None = None,
        fallback_goal_threat: float | None = None,
        max_iterations: int | None = None,
        max_stall_iterations: int | None = None,
        target_loss: float | None = None,
        retry_factor: float | None = None,
        retry_iterations: int | None = None,
    ):
        """
        Initialize the balancer.

        Args:
            rng: Random source for swap selection (default: unseeded Random)
            default_power_rating: Rating given to unqualified players (default 5.35)
            fallback_goal_threat: Goal threat used when nobody qualifies (default 0.5)
            max_iterations: Main search iteration ceiling (default 3000)
            max_stall_iterations: Consecutive non-improving iterations before stopping (default 500)
            target_loss: Loss below which the search stops (default 1.0)
            retry_factor: Second pass runs when loss > retry_factor * target_loss (default 1.5)
            retry_iterations: Second pass iteration ceiling (default 500)
        """
        settings = PERFORMANCE_BALANCER_SETTINGS
        self.rng = rng if rng is not None else random.Random()
        self.default_power_rating = (
            default_power_rating
            if default_power_rating is not None
            else settings["default_power_rating"]
        )
        self.fallback_goal_threat = (
            fallback_goal_threat
            if fallback_goal_threat is not None
            else settings["fallback_goal_threat"]
        )
        self.max_iterations = (
            max_iterations if max_iterations is not None else settings["max_iterations"]
        )
        self.max_stall_iterations = (
            max_stall_iterations
            if max_stall_iterations is not None
            else settings["max_stall_iterations"]
        )
        self.target_loss = target_loss if target_loss is not None else settings["target_loss"]
        self.retry_factor = retry_factor if retry_factor is not None else settings["retry_factor"]
        self.retry_iterations = (
            retry_iterations if retry_iterations is not None else settings["retry_iterations"]
        )
        self.power_gap_floor = settings["power_gap_floor"]
        self.goal_gap_floor = settings["goal_gap_floor"]

    @staticmethod
    def resolve_team_sizes(pool_size: int, team_sizes: tuple[int, int] | None = None) -> tuple[int, int]:
        """
        Work out target team sizes.

        Without explicit sizes the pool is split evenly, with team A taking
        the extra player when the pool is odd.

        Raises:
            ValueError: If explicit sizes are non-positive or do not sum to the pool size
        """
        if team_sizes is None:
            size_a = (pool_size + 1) // 2
            return size_a, pool_size - size_a

        size_a, size_b = team_sizes
        if size_a < 1 or size_b < 1:
            raise ValueError(f"Team sizes must be positive, got {size_a} and {size_b}")
        if size_a + size_b != pool_size:
            raise ValueError(
                f"Team sizes {size_a}+{size_b} do not match pool size {pool_size}"
            )
        return size_a, size_b

    @staticmethod
    def seed_teams(ranked_ids: list[int], size_a: int, size_b: int) -> tuple[list[int], list[int]]:
        """
        Build the initial partition from players ranked best-first.

        Even sizes use a snake over groups of four (ranks 1 and 4 to A,
        2 and 3 to B). Uneven sizes fill team A first unless team B is
        already full.
        """
        team_a: list[int] = []
        team_b: list[int] = []

        if size_a == size_b:
            for i, pid in enumerate(ranked_ids):
                if i % 4 in (0, 3):
                    team_a.append(pid)
                else:
                    team_b.append(pid)
            return team_a, team_b

        for pid in ranked_ids:
            if len(team_a) < size_a or len(team_b) >= size_b:
                team_a.append(pid)
            else:
                team_b.append(pid)
        return team_a, team_b

    def calculate_loss(
        self,
        team_a: list[int],
        team_b: list[int],
        metrics: dict[int, tuple[float, float]],
        power_range: float,
        goal_range: float,
        weights: PerformanceWeights,
    ) -> float:
        """
        Combined, range-normalized loss for a candidate split (lower is better).

        Args:
            team_a: Player ids on team A
            team_b: Player ids on team B
            metrics: player_id -> (power rating, goal threat)
            power_range: Pool-wide power rating spread
            goal_range: Pool-wide goal threat spread
            weights: Power/goal weighting

        Returns:
            power_weight * normalized power gap + goal_weight * normalized goal gap
        """
        power_a, goals_a = team_totals(team_a, metrics)
        power_b, goals_b = team_totals(team_b, metrics)

        power_gap = max(abs(power_a - power_b), self.power_gap_floor)
        goal_gap = max(abs(goals_a - goals_b), self.goal_gap_floor)

        return (
            weights.power_weight * (power_gap / power_range)
            + weights.goal_weight * (goal_gap / goal_range)
        )

    def _climb(
        self,
        team_a: list[int],
        team_b: list[int],
        loss: float,
        iterations: int,
        stall_limit: int | None,
        evaluate: Callable[[list[int], list[int]], float],
        accepted: list[float],
    ) -> tuple[list[int], list[int], float, int]:
        """Random single-swap hill-climbing. Returns (team_a, team_b, loss, iterations run)."""
        stall = 0
        ran = 0
        for _ in range(iterations):
            if loss < self.target_loss:
                break
            if stall_limit is not None and stall >= stall_limit:
                break

            idx_a = self.rng.randrange(len(team_a))
            idx_b = self.rng.randrange(len(team_b))
            candidate_a = list(team_a)
            candidate_b = list(team_b)
            candidate_a[idx_a], candidate_b[idx_b] = team_b[idx_b], team_a[idx_a]

            candidate_loss = evaluate(candidate_a, candidate_b)
            ran += 1

            if candidate_loss < loss:
                team_a, team_b, loss = candidate_a, candidate_b, candidate_loss
                accepted.append(candidate_loss)
                stall = 0
            else:
                stall += 1

        return team_a, team_b, loss, ran

    def balance(
        self,
        players: list[Player],
        team_sizes: tuple[int, int] | None = None,
        weights: PerformanceWeights | None = None,
    ) -> PerformanceBalanceResult:
        """
        Split players into two teams balanced on power rating and goal threat.

        Args:
            players: Candidate pool (unique player ids)
            team_sizes: Optional (size_a, size_b); defaults to an even split
            weights: Power/goal weighting (default 0.5/0.5)

        Returns:
            PerformanceBalanceResult with both teams sorted by ascending goal threat

        Raises:
            ValueError: If the pool is too small, has duplicates, or sizes are invalid
        """
        if len(players) < 2:
            raise ValueError(f"Need at least 2 players to balance, got {len(players)}")
        ids = [p.player_id for p in players]
        if len(set(ids)) != len(ids):
            raise ValueError("Player pool contains duplicate players")

        weights = weights or PerformanceWeights()
        size_a, size_b = self.resolve_team_sizes(len(players), team_sizes)

        metrics = resolve_performance_metrics(
            players, self.default_power_rating, self.fallback_goal_threat
        )
        power_range = metric_range(m[0] for m in metrics.values())
        goal_range = metric_range(m[1] for m in metrics.values())

        def evaluate(team_a: list[int], team_b: list[int]) -> float:
            return self.calculate_loss(team_a, team_b, metrics, power_range, goal_range, weights)

        ranked = sorted(ids, key=lambda pid: metrics[pid][0], reverse=True)
        team_a, team_b = self.seed_teams(ranked, size_a, size_b)
        loss = evaluate(team_a, team_b)
        logger.debug(f"Seeded {size_a}v{size_b} split, initial loss={loss:.4f}")

        accepted: list[float] = []
        team_a, team_b, loss, iterations = self._climb(
            team_a, team_b, loss, self.max_iterations, self.max_stall_iterations, evaluate, accepted
        )

        if loss > self.retry_factor * self.target_loss:
            logger.debug(f"Loss {loss:.4f} still high after {iterations} iterations, retrying")
            team_a, team_b, loss, extra = self._climb(
                team_a, team_b, loss, self.retry_iterations, None, evaluate, accepted
            )
            iterations += extra

        # Highest goal threat ends up in the last slot
        team_a = sorted(team_a, key=lambda pid: metrics[pid][1])
        team_b = sorted(team_b, key=lambda pid: metrics[pid][1])

        power_a, goals_a = team_totals(team_a, metrics)
        power_b, goals_b = team_totals(team_b, metrics)
        balance_percent = max(0.0, min(100.0, 100.0 - loss * 50.0))

        logger.info(
            f"Performance balance: {size_a}v{size_b}, loss={loss:.4f}, "
            f"balance={balance_percent:.1f}%, iterations={iterations}, swaps={len(accepted)}"
        )

        return PerformanceBalanceResult(
            team_a=team_a,
            team_b=team_b,
            balance_percent=balance_percent,
            power_gap=abs(power_a - power_b),
            goal_gap=abs(goals_a - goals_b),
            combined_loss=loss,
            iterations=iterations,
            accepted_losses=accepted,
        )

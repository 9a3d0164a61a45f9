"""
Positional attribute team balancing.

Pre-partitions the pool into defender/midfielder/attacker pools and searches
every way of splitting each pool between the two teams.
"""

import itertools
import logging
from collections.abc import Iterator

from domain.models.balance import (
    POSITION_GROUPS,
    PositionalCounts,
    RatingBalanceResult,
    TeamLineup,
    TeamSizeTemplate,
)
from domain.models.player import Player
from domain.services.balance_scoring import (
    AttributeWeights,
    positional_balance_score,
    scale_positional_counts,
    suitability_score,
)

logger = logging.getLogger("league_bot.balancer.rating")

Split = tuple[list[Player], list[Player]]


def _splits(pool: list[Player], take: int) -> Iterator[Split]:
    """Yield (chosen, complement) for every way of picking `take` players from pool."""
    for chosen in itertools.combinations(range(len(pool)), take):
        picked = set(chosen)
        yield (
            [pool[i] for i in chosen],
            [p for i, p in enumerate(pool) if i not in picked],
        )


class RatingBalancer:
    """Exhaustive positional balancer over six player attributes."""

    def __init__(self, default_weight: float = 1.0):
        self.default_weight = default_weight

    def team_counts(
        self, template: TeamSizeTemplate, team_sizes: tuple[int, int]
    ) -> tuple[PositionalCounts, PositionalCounts]:
        """Positional counts for each team, scaled from the template."""
        size_a, size_b = team_sizes
        return (
            scale_positional_counts(template, size_a),
            scale_positional_counts(template, size_b),
        )

    def suitability(
        self, players: list[Player], weights: AttributeWeights | None = None
    ) -> dict[int, dict[str, float]]:
        """player_id -> {position_group: composite} for every player."""
        return {
            p.player_id: {
                group: suitability_score(p, group, weights, self.default_weight)
                for group in POSITION_GROUPS
            }
            for p in players
        }

    @staticmethod
    def build_pools(
        players: list[Player], counts_a: PositionalCounts, counts_b: PositionalCounts
    ) -> dict[str, list[Player]]:
        """
        Split the pool into positional pools by raw attributes.

        Best defenders first, then the best goalscorers of the remainder;
        whoever is left plays midfield. Ties keep input order.
        """
        defender_slots = counts_a.defenders + counts_b.defenders
        attacker_slots = counts_a.attackers + counts_b.attackers

        by_defending = sorted(players, key=lambda p: p.get_attribute("defending"), reverse=True)
        defenders = by_defending[:defender_slots]
        rest = by_defending[defender_slots:]

        by_goalscoring = sorted(rest, key=lambda p: p.get_attribute("goalscoring"), reverse=True)
        attackers = by_goalscoring[:attacker_slots]
        midfielders = by_goalscoring[attacker_slots:]

        return {"defense": defenders, "midfield": midfielders, "attack": attackers}

    def balance(
        self,
        players: list[Player],
        template: TeamSizeTemplate,
        team_sizes: tuple[int, int],
        weights: AttributeWeights | None = None,
    ) -> RatingBalanceResult:
        """
        Find the positional split with the lowest balance score.

        Args:
            players: Exactly size_a + size_b players
            template: Positional template for the larger team size
            team_sizes: (size_a, size_b)
            weights: (position_group, attribute) -> weight

        Returns:
            RatingBalanceResult with lineups ordered defenders, midfielders, attackers

        Raises:
            ValueError: If the player count does not match the team sizes
            RuntimeError: If no combination could be evaluated
        """
        size_a, size_b = team_sizes
        if len(players) != size_a + size_b:
            raise ValueError(
                f"Expected {size_a + size_b} players for {size_a}v{size_b}, got {len(players)}"
            )

        counts_a, counts_b = self.team_counts(template, team_sizes)
        suitability = self.suitability(players, weights)
        for pid, scores in suitability.items():
            logger.debug(
                f"Suitability {pid}: "
                + ", ".join(f"{group}={score:.2f}" for group, score in scores.items())
            )

        pools = self.build_pools(players, counts_a, counts_b)

        best: tuple[Split, Split, Split] | None = None
        best_score = float("inf")
        evaluated = 0

        for defense, midfield, attack in itertools.product(
            _splits(pools["defense"], counts_a.defenders),
            _splits(pools["midfield"], counts_a.midfielders),
            _splits(pools["attack"], counts_a.attackers),
        ):
            units_a = {"defense": defense[0], "midfield": midfield[0], "attack": attack[0]}
            units_b = {"defense": defense[1], "midfield": midfield[1], "attack": attack[1]}
            score = positional_balance_score(units_a, units_b, weights, self.default_weight)
            evaluated += 1
            if score < best_score:
                best_score = score
                best = (defense, midfield, attack)

        if best is None:
            raise RuntimeError(
                f"No valid positional split for {size_a}v{size_b} "
                f"(pools: {', '.join(f'{g}={len(p)}' for g, p in pools.items())})"
            )

        defense, midfield, attack = best
        team_a = TeamLineup(
            defenders=[p.player_id for p in defense[0]],
            midfielders=[p.player_id for p in midfield[0]],
            attackers=[p.player_id for p in attack[0]],
        )
        team_b = TeamLineup(
            defenders=[p.player_id for p in defense[1]],
            midfielders=[p.player_id for p in midfield[1]],
            attackers=[p.player_id for p in attack[1]],
        )

        logger.info(
            f"Rating balance: {size_a}v{size_b}, score={best_score:.4f}, "
            f"combinations={evaluated}"
        )

        return RatingBalanceResult(
            team_a=team_a,
            team_b=team_b,
            balance_score=best_score,
            combinations_evaluated=evaluated,
            suitability=suitability,
        )

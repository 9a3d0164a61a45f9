"""
Scoring helpers shared by the team balancers.

Everything here is pure: no I/O, no randomness.
"""

import math
from collections.abc import Iterable, Mapping

from domain.models.balance import POSITION_GROUPS, PositionalCounts, TeamSizeTemplate
from domain.models.player import ATTRIBUTES, Player

# (position_group, attribute) -> weight
AttributeWeights = Mapping[tuple[str, str], float]


def league_average_goal_threat(players: Iterable[Player], fallback: float) -> float:
    """
    Mean goal threat of qualified, non-guest players.

    Args:
        players: Candidate players for this balancing call
        fallback: Value returned when no player qualifies

    Returns:
        Average goal threat, or fallback
    """
    threats = [
        p.goal_threat for p in players if p.has_performance_data() and not p.is_guest
    ]
    if not threats:
        return fallback
    return sum(threats) / len(threats)


def resolve_performance_metrics(
    players: list[Player],
    default_power_rating: float,
    fallback_goal_threat: float,
) -> dict[int, tuple[float, float]]:
    """
    Map each player to the (power rating, goal threat) used for balancing.

    Unqualified players get the league prior rating and the pool's
    average goal threat so sparse data cannot skew the search.
    """
    average_threat = league_average_goal_threat(players, fallback_goal_threat)
    metrics: dict[int, tuple[float, float]] = {}
    for player in players:
        if player.has_performance_data():
            metrics[player.player_id] = (float(player.power_rating), float(player.goal_threat))
        else:
            metrics[player.player_id] = (default_power_rating, average_threat)
    return metrics


def metric_range(values: Iterable[float]) -> float:
    """Spread (max - min) of a metric, 1.0 when the spread is zero."""
    values = list(values)
    if not values:
        return 1.0
    spread = max(values) - min(values)
    return spread if spread > 0 else 1.0


def team_totals(team: Iterable[int], metrics: Mapping[int, tuple[float, float]]) -> tuple[float, float]:
    """Summed (power rating, goal threat) for a team of player ids."""
    power = 0.0
    goals = 0.0
    for pid in team:
        p, g = metrics[pid]
        power += p
        goals += g
    return power, goals


def unit_averages(players: list[Player]) -> dict[str, float]:
    """Per-attribute mean over a positional unit (empty unit -> empty dict)."""
    if not players:
        return {}
    count = len(players)
    return {
        attr: sum(p.get_attribute(attr) for p in players) / count for attr in ATTRIBUTES
    }


def get_weight(weights: AttributeWeights | None, group: str, attribute: str, default: float = 1.0) -> float:
    """Configured weight for a (group, attribute) pair, or the default."""
    if not weights:
        return default
    value = weights.get((group, attribute))
    return default if value is None else float(value)


def positional_balance_score(
    units_a: Mapping[str, list[Player]],
    units_b: Mapping[str, list[Player]],
    weights: AttributeWeights | None = None,
    default_weight: float = 1.0,
) -> float:
    """
    Weighted sum of per-attribute average differences between positional units.

    Lower is better. A group contributes nothing when either side has no
    players in that unit.

    Args:
        units_a: position_group -> players for team A
        units_b: position_group -> players for team B
        weights: (position_group, attribute) -> weight
        default_weight: Weight for unconfigured pairs

    Returns:
        Balance score (0 = identical units)
    """
    total = 0.0
    for group in POSITION_GROUPS:
        averages_a = unit_averages(units_a.get(group, []))
        averages_b = unit_averages(units_b.get(group, []))
        if not averages_a or not averages_b:
            continue
        for attr in ATTRIBUTES:
            diff = abs(averages_a[attr] - averages_b[attr])
            total += diff * get_weight(weights, group, attr, default_weight)
    return total


def suitability_score(
    player: Player,
    group: str,
    weights: AttributeWeights | None = None,
    default_weight: float = 1.0,
) -> float:
    """
    Weighted average of the attributes tied to a position group.

    Uses the weights configured for that group; a group with no configured
    weights averages all attributes at the default weight.
    """
    group_weights = {
        attr: float(w) for (g, attr), w in (weights or {}).items() if g == group and attr in ATTRIBUTES
    }
    if not group_weights:
        group_weights = {attr: default_weight for attr in ATTRIBUTES}

    total_weight = sum(group_weights.values())
    if total_weight <= 0:
        return 0.0
    weighted = sum(player.get_attribute(attr) * w for attr, w in group_weights.items())
    return weighted / total_weight


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def scale_positional_counts(template: TeamSizeTemplate, team_size: int) -> PositionalCounts:
    """
    Scale a template's positional counts to a team's actual size.

    Defenders and attackers scale proportionally (rounded half up);
    midfielders take whatever is left.
    """
    if template.team_size <= 0:
        raise ValueError(f"Invalid template size: {template.team_size}")
    if team_size < 0:
        raise ValueError(f"Invalid team size: {team_size}")

    ratio = team_size / template.team_size
    defenders = _round_half_up(template.defenders * ratio)
    attackers = _round_half_up(template.attackers * ratio)

    # Never ask for more specialists than the team has room for
    overflow = defenders + attackers - team_size
    if overflow > 0:
        trimmed = min(attackers, overflow)
        attackers -= trimmed
        defenders -= overflow - trimmed

    return PositionalCounts(
        defenders=defenders,
        midfielders=team_size - defenders - attackers,
        attackers=attackers,
    )


# Hand-tuned layouts for common squad sizes
_SUGGESTED_LAYOUTS = {
    5: (1, 3, 1),
    6: (2, 3, 1),
    7: (2, 3, 2),
    8: (3, 3, 2),
    9: (3, 4, 2),
    11: (4, 4, 3),
}

SUGGESTED_TEMPLATE_SIZES = tuple(sorted(_SUGGESTED_LAYOUTS))


def suggested_positions(team_size: int) -> TeamSizeTemplate:
    """
    Default positional template for a team size.

    Uncommon sizes get roughly 30% defenders and 20% attackers, with
    midfield taking the rest.
    """
    if team_size < 1:
        raise ValueError(f"Team size must be positive, got {team_size}")
    if team_size in _SUGGESTED_LAYOUTS:
        defenders, midfielders, attackers = _SUGGESTED_LAYOUTS[team_size]
    else:
        defenders = team_size * 3 // 10
        attackers = team_size // 5
        midfielders = team_size - defenders - attackers
    return TeamSizeTemplate(
        team_size=team_size,
        defenders=defenders,
        midfielders=midfielders,
        attackers=attackers,
    )

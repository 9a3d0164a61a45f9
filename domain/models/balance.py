"""
Balancing configuration and result models.
"""

from dataclasses import dataclass, field

POSITION_GROUPS = ("defense", "midfield", "attack")


@dataclass(frozen=True)
class PerformanceWeights:
    """Relative importance of power rating vs goal threat."""

    power_weight: float = 0.5
    goal_weight: float = 0.5


@dataclass(frozen=True)
class TeamSizeTemplate:
    """Expected positional make-up for a nominal team size."""

    team_size: int
    defenders: int
    midfielders: int
    attackers: int


@dataclass(frozen=True)
class PositionalCounts:
    """How many defenders/midfielders/attackers one team fields."""

    defenders: int
    midfielders: int
    attackers: int

    @property
    def total(self) -> int:
        return self.defenders + self.midfielders + self.attackers


@dataclass
class PerformanceBalanceResult:
    """Result of the performance (power rating / goal threat) balancer."""

    team_a: list[int]
    team_b: list[int]
    balance_percent: float
    power_gap: float
    goal_gap: float
    combined_loss: float
    iterations: int = 0
    # Loss after each accepted swap, in order
    accepted_losses: list[float] = field(default_factory=list)


@dataclass
class TeamLineup:
    """One team split into positional units."""

    defenders: list[int] = field(default_factory=list)
    midfielders: list[int] = field(default_factory=list)
    attackers: list[int] = field(default_factory=list)

    @property
    def player_ids(self) -> list[int]:
        """Players in slot order: defenders, midfielders, attackers."""
        return self.defenders + self.midfielders + self.attackers


@dataclass
class RatingBalanceResult:
    """Result of the positional attribute balancer."""

    team_a: TeamLineup
    team_b: TeamLineup
    balance_score: float
    combinations_evaluated: int
    # player_id -> {position_group: composite score}
    suitability: dict[int, dict[str, float]] = field(default_factory=dict)

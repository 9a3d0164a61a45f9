"""
Player domain model.
"""

from dataclasses import dataclass

# Raw positional attributes, in display order
ATTRIBUTES = (
    "goalscoring",
    "teamwork",
    "stamina_pace",
    "control",
    "resilience",
    "defending",
)


@dataclass
class Player:
    """
    Represents a league player as seen by the balancing engine.

    This is a pure domain model with no infrastructure dependencies.
    Ratings are produced upstream and are read-only here.
    """

    player_id: int
    name: str = ""
    # Positional attributes (rating balancer)
    goalscoring: float | None = None
    teamwork: float | None = None
    stamina_pace: float | None = None
    control: float | None = None
    resilience: float | None = None
    defending: float | None = None
    # Aggregated performance figures (performance balancer)
    is_qualified: bool = False
    is_guest: bool = False
    power_rating: float | None = None
    goal_threat: float | None = None
    guild_id: int | None = None

    def get_attribute(self, attribute: str) -> float:
        """Get a positional attribute, treating missing values as 0."""
        if attribute not in ATTRIBUTES:
            raise ValueError(f"Unknown attribute: {attribute}")
        value = getattr(self, attribute)
        return float(value) if value is not None else 0.0

    def has_performance_data(self) -> bool:
        """Whether upstream figures can be trusted for this player."""
        return self.is_qualified and self.power_rating is not None and self.goal_threat is not None

    def __str__(self) -> str:
        rating_str = f"{self.power_rating:.2f}" if self.power_rating is not None else "unrated"
        return f"{self.name or self.player_id} (Power: {rating_str})"

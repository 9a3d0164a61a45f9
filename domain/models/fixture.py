"""
Fixture and slot assignment domain models.
"""

from dataclasses import dataclass

TEAM_A = "A"
TEAM_B = "B"


@dataclass
class Fixture:
    """An upcoming match whose pool is split into two teams."""

    fixture_id: int
    team_size_a: int
    team_size_b: int
    guild_id: int = 0
    is_balanced: bool = False
    state_version: int = 0

    @property
    def total_players(self) -> int:
        return self.team_size_a + self.team_size_b

    @property
    def team_sizes(self) -> tuple[int, int]:
        return self.team_size_a, self.team_size_b


@dataclass(frozen=True)
class SlotAssignment:
    """One player placed in a numbered slot on one side."""

    player_id: int
    team: str
    slot_number: int


def build_slot_assignments(team_a: list[int], team_b: list[int]) -> list[SlotAssignment]:
    """
    Number each team's players 1..N in list order.

    Team A and team B are numbered independently.
    """
    assignments = [
        SlotAssignment(player_id=pid, team=TEAM_A, slot_number=idx)
        for idx, pid in enumerate(team_a, start=1)
    ]
    assignments.extend(
        SlotAssignment(player_id=pid, team=TEAM_B, slot_number=idx)
        for idx, pid in enumerate(team_b, start=1)
    )
    return assignments

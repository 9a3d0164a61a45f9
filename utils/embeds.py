"""
Reusable Discord embed builders.
"""

import discord

from domain.models.fixture import TEAM_A, TEAM_B, Fixture
from utils.formatting import TEAM_LABELS, format_player_name, format_position_display


def format_team_list(player_ids: list[int], names: dict[int, str] | None = None) -> str:
    """Numbered slot list for one team."""
    if not player_ids:
        return "No players"
    return "\n".join(
        f"{slot}. {format_player_name(pid, names)}" for slot, pid in enumerate(player_ids, start=1)
    )


def _format_positional_team(units: dict[str, list[int]], names: dict[int, str] | None) -> str:
    lines = []
    slot = 1
    for group, player_ids in units.items():
        for pid in player_ids:
            lines.append(f"{slot}. {format_player_name(pid, names)} ({format_position_display(group)})")
            slot += 1
    return "\n".join(lines) or "No players"


def create_balance_embed(outcome, names: dict[int, str] | None = None) -> discord.Embed:
    """Embed summarising a balancing run (BalanceOutcome)."""
    embed = discord.Embed(
        title=f"⚖️ Fixture #{outcome.fixture_id} balanced",
        description=f"Method: **{outcome.method}**",
        color=discord.Color.green(),
    )

    if outcome.positions:
        team_a_value = _format_positional_team(outcome.positions[TEAM_A], names)
        team_b_value = _format_positional_team(outcome.positions[TEAM_B], names)
    else:
        team_a_value = format_team_list(outcome.team_a, names)
        team_b_value = format_team_list(outcome.team_b, names)

    embed.add_field(name=f"{TEAM_LABELS[TEAM_A]} ({len(outcome.team_a)})", value=team_a_value, inline=True)
    embed.add_field(name=f"{TEAM_LABELS[TEAM_B]} ({len(outcome.team_b)})", value=team_b_value, inline=True)

    if outcome.balance_percent is not None:
        embed.add_field(
            name="Balance",
            value=(
                f"{outcome.balance_percent:.1f}%\n"
                f"Power gap: {outcome.power_gap:.2f} · Goal gap: {outcome.goal_gap:.2f}"
            ),
            inline=False,
        )
    elif outcome.balance_score is not None:
        embed.add_field(name="Balance score", value=f"{outcome.balance_score:.3f} (lower is better)", inline=False)

    embed.set_footer(text=f"Version {outcome.state_version}")
    return embed


def create_lineup_embed(
    fixture: Fixture, lineup: dict[str, list[int]], names: dict[int, str] | None = None
) -> discord.Embed:
    """Embed showing the stored slot assignments for a fixture."""
    embed = discord.Embed(
        title=f"📋 Fixture #{fixture.fixture_id} ({fixture.team_size_a}v{fixture.team_size_b})",
        description="Balanced" if fixture.is_balanced else "Not balanced yet",
        color=discord.Color.blue() if fixture.is_balanced else discord.Color.light_grey(),
    )
    for team in (TEAM_A, TEAM_B):
        embed.add_field(
            name=TEAM_LABELS[team],
            value=format_team_list(lineup.get(team, []), names),
            inline=True,
        )
    embed.set_footer(text=f"Version {fixture.state_version}")
    return embed

"""
Fixture and team balancing commands for league staff.
"""

import asyncio
import logging

import discord
from discord import app_commands
from discord.ext import commands

from domain.models.fixture import TEAM_A, TEAM_B
from services.balance_service import METHOD_PERFORMANCE, METHOD_RANDOM, METHOD_RATING
from services.permissions import has_admin_permission
from utils.command_helpers import handle_result, handle_result_with_embed
from utils.embeds import create_balance_embed, create_lineup_embed
from utils.formatting import parse_id_list
from utils.interaction_safety import safe_defer, safe_followup

logger = logging.getLogger("league_bot.commands.balance")

ADMIN_ONLY_MESSAGE = "❌ Admin only! You need Administrator or Manage Server permissions."


def _guild_id(interaction: discord.Interaction) -> int:
    """Tenant key for the interaction (0 outside a guild)."""
    return interaction.guild.id if interaction.guild else 0


class BalanceCommands(commands.Cog):
    """Admin slash commands for fixtures, pools and team balancing."""

    def __init__(
        self,
        bot: commands.Bot,
        fixture_service,
        balance_service,
        balance_config_service,
        player_repo=None,
    ):
        self.bot = bot
        self.fixture_service = fixture_service
        self.balance_service = balance_service
        self.balance_config_service = balance_config_service
        self.player_repo = player_repo

    async def _begin_admin_command(self, interaction: discord.Interaction) -> bool:
        """Defer and check permissions. Returns False if the command should stop."""
        can_respond = await safe_defer(interaction, ephemeral=True)
        if not can_respond:
            return False
        if not has_admin_permission(interaction):
            await safe_followup(interaction, content=ADMIN_ONLY_MESSAGE, ephemeral=True)
            return False
        return True

    async def _player_names(self, player_ids: list[int], guild_id: int) -> dict[int, str]:
        if not self.player_repo or not player_ids:
            return {}
        players = await asyncio.to_thread(self.player_repo.get_by_ids, player_ids, guild_id)
        return {p.player_id: p.name for p in players}

    @app_commands.command(name="createfixture", description="Create a fixture to balance (Admin only)")
    @app_commands.describe(size_a="Players on team A", size_b="Players on team B")
    async def createfixture(self, interaction: discord.Interaction, size_a: int, size_b: int):
        if not await self._begin_admin_command(interaction):
            return

        guild_id = _guild_id(interaction)
        result = await asyncio.to_thread(self.fixture_service.create_fixture, guild_id, size_a, size_b)
        if not await handle_result(interaction, result):
            return

        fixture = result.value
        logger.info(
            f"createfixture: user {interaction.user.id} created fixture {fixture.fixture_id} "
            f"({size_a}v{size_b}) in guild {guild_id}"
        )
        await safe_followup(
            interaction,
            content=(
                f"✅ Created fixture **#{fixture.fixture_id}** ({size_a}v{size_b}). "
                f"Add players with `/addtopool`."
            ),
            ephemeral=True,
        )

    @app_commands.command(name="addtopool", description="Add players to a fixture's pool (Admin only)")
    @app_commands.describe(
        fixture_id="Fixture to add players to",
        player_ids="Comma separated player ids",
    )
    async def addtopool(self, interaction: discord.Interaction, fixture_id: int, player_ids: str):
        if not await self._begin_admin_command(interaction):
            return

        try:
            ids = parse_id_list(player_ids)
        except ValueError as exc:
            await safe_followup(interaction, content=f"❌ {exc}", ephemeral=True)
            return
        if not ids:
            await safe_followup(interaction, content="❌ No player ids given.", ephemeral=True)
            return

        guild_id = _guild_id(interaction)
        fixture_result = await asyncio.to_thread(self.fixture_service.get_fixture, fixture_id, guild_id)
        if not await handle_result(interaction, fixture_result):
            return

        result = await asyncio.to_thread(self.fixture_service.add_players_to_pool, fixture_id, ids)
        if not await handle_result(interaction, result):
            return

        pool = await asyncio.to_thread(self.fixture_service.get_pool, fixture_id)
        await safe_followup(
            interaction,
            content=(
                f"✅ Added {result.value} player(s) to fixture #{fixture_id}. "
                f"Pool: {len(pool)}/{fixture_result.value.total_players}."
            ),
            ephemeral=True,
        )

    @app_commands.command(name="balance", description="Auto-assign a fixture's pool to two teams (Admin only)")
    @app_commands.describe(
        fixture_id="Fixture to balance",
        method="Balancing method",
        size_a="Override team A size (needs size_b)",
        size_b="Override team B size (needs size_a)",
        version="Fixture version you last saw (rejects the run if it changed)",
    )
    @app_commands.choices(
        method=[
            app_commands.Choice(name="Performance (power rating + goal threat)", value=METHOD_PERFORMANCE),
            app_commands.Choice(name="Rating (positional attributes)", value=METHOD_RATING),
            app_commands.Choice(name="Random", value=METHOD_RANDOM),
        ]
    )
    async def balance(
        self,
        interaction: discord.Interaction,
        fixture_id: int,
        method: app_commands.Choice[str],
        size_a: int | None = None,
        size_b: int | None = None,
        version: int | None = None,
    ):
        if not await self._begin_admin_command(interaction):
            return

        if (size_a is None) != (size_b is None):
            await safe_followup(
                interaction, content="❌ Provide both size_a and size_b, or neither.", ephemeral=True
            )
            return
        team_sizes = (size_a, size_b) if size_a is not None else None

        guild_id = _guild_id(interaction)
        fixture_result = await asyncio.to_thread(self.fixture_service.get_fixture, fixture_id, guild_id)
        if not await handle_result(interaction, fixture_result):
            return

        if method.value == METHOD_PERFORMANCE:
            result = await asyncio.to_thread(
                self.balance_service.balance_by_performance,
                fixture_id,
                team_sizes=team_sizes,
                expected_version=version,
            )
        elif method.value == METHOD_RATING:
            result = await asyncio.to_thread(
                self.balance_service.balance_by_rating,
                fixture_id,
                team_sizes=team_sizes,
                expected_version=version,
            )
        else:
            result = await asyncio.to_thread(
                self.balance_service.balance_randomly,
                fixture_id,
                team_sizes=team_sizes,
                expected_version=version,
            )

        if not result:
            await handle_result(interaction, result)
            return

        outcome = result.value
        logger.info(
            f"balance: user {interaction.user.id} balanced fixture {fixture_id} "
            f"via {method.value} -> version {outcome.state_version}"
        )
        names = await self._player_names(outcome.team_a + outcome.team_b, guild_id)
        await handle_result_with_embed(interaction, result, create_balance_embed(outcome, names))

    @app_commands.command(
        name="performanceweights",
        description="Set how much power rating vs goal threat matters (Admin only)",
    )
    @app_commands.describe(power="Weight for power rating (0-1)", goal="Weight for goal threat (0-1)")
    async def performanceweights(self, interaction: discord.Interaction, power: float, goal: float):
        if not await self._begin_admin_command(interaction):
            return

        guild_id = _guild_id(interaction)
        result = await asyncio.to_thread(
            self.balance_config_service.set_performance_weights, guild_id, power, goal
        )
        await handle_result(
            interaction,
            result,
            success_msg=f"✅ Performance weights set: power {power:.2f}, goal threat {goal:.2f}.",
        )

    @app_commands.command(name="lineup", description="Show a fixture's current team assignments")
    @app_commands.describe(fixture_id="Fixture to show")
    async def lineup(self, interaction: discord.Interaction, fixture_id: int):
        if not await self._begin_admin_command(interaction):
            return

        guild_id = _guild_id(interaction)
        fixture_result = await asyncio.to_thread(self.fixture_service.get_fixture, fixture_id, guild_id)
        if not await handle_result(interaction, fixture_result):
            return

        lineup_result = await asyncio.to_thread(self.fixture_service.get_lineup, fixture_id)
        if not await handle_result(interaction, lineup_result):
            return

        lineup = lineup_result.value
        names = await self._player_names(lineup[TEAM_A] + lineup[TEAM_B], guild_id)
        embed = create_lineup_embed(fixture_result.value, lineup, names)
        await safe_followup(interaction, embed=embed, ephemeral=True)


async def setup(bot: commands.Bot):
    fixture_service = getattr(bot, "fixture_service", None)
    balance_service = getattr(bot, "balance_service", None)
    balance_config_service = getattr(bot, "balance_config_service", None)
    player_repo = getattr(bot, "player_repo", None)

    if "BalanceCommands" in [cog.__class__.__name__ for cog in bot.cogs.values()]:
        logger.warning("BalanceCommands cog is already loaded, skipping duplicate registration")
        return

    await bot.add_cog(
        BalanceCommands(bot, fixture_service, balance_service, balance_config_service, player_repo)
    )

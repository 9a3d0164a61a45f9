"""
Helpers for turning service Results into slash command replies.
"""

from typing import TYPE_CHECKING

import discord

from utils.interaction_safety import safe_followup

if TYPE_CHECKING:
    from services.result import Result


def format_result_error(result: "Result") -> str:
    """
    User-facing text for a failed Result.

    Retryable failures tell the user to reload and try again.
    """
    if result.success:
        return ""
    message = result.error or "Unknown error"
    if result.error_code:
        message = f"[{result.error_code}] {message}"
    if result.retryable:
        message += " Run /lineup for the current version and try again."
    return message


async def handle_result(
    interaction: discord.Interaction,
    result: "Result",
    success_msg: str | None = None,
    ephemeral: bool = True,
) -> bool:
    """
    Report a failed Result (or an optional success message).

    Returns:
        True if the result was successful

    Usage:
        result = await asyncio.to_thread(service.create_fixture, guild_id, 5, 5)
        if not await handle_result(interaction, result):
            return
    """
    if not result.success:
        await safe_followup(interaction, content=f"❌ {format_result_error(result)}", ephemeral=True)
        return False

    if success_msg:
        await safe_followup(interaction, content=success_msg, ephemeral=ephemeral)
    return True


async def handle_result_with_embed(
    interaction: discord.Interaction,
    result: "Result",
    success_embed: discord.Embed | None = None,
    ephemeral: bool = False,
) -> bool:
    """Like handle_result, but sends an embed on success."""
    if not result.success:
        await safe_followup(interaction, content=f"❌ {format_result_error(result)}", ephemeral=True)
        return False

    if success_embed:
        await safe_followup(interaction, embed=success_embed, ephemeral=ephemeral)
    return True

"""
Helpers for responding to interactions without tripping over expired or
already-acknowledged tokens.
"""

import logging

import discord

logger = logging.getLogger("league_bot.utils.interaction_safety")


async def safe_defer(interaction: discord.Interaction, ephemeral: bool = False) -> bool:
    """
    Defer the interaction response.

    Returns:
        True if the interaction can still be answered via followup
    """
    if interaction.response.is_done():
        return True
    try:
        await interaction.response.defer(ephemeral=ephemeral)
        return True
    except discord.NotFound:
        # Token expired before we got to it
        logger.warning(f"Interaction {interaction.id} expired before defer")
        return False
    except discord.HTTPException as exc:
        logger.warning(f"Failed to defer interaction {interaction.id}: {exc}")
        return False


async def safe_followup(interaction: discord.Interaction, **kwargs):
    """
    Send a followup message to a deferred interaction.

    Returns:
        The sent message, or None if sending failed
    """
    try:
        return await interaction.followup.send(**kwargs)
    except discord.HTTPException as exc:
        logger.warning(f"Failed to send followup for interaction {interaction.id}: {exc}")
        return None

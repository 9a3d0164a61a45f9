"""
Permission checks for league staff commands.
"""

import discord

from config import ADMIN_USER_IDS


def _member_permissions(interaction: discord.Interaction):
    """Guild permissions for the invoking user, or None outside a guild."""
    if interaction.guild:
        get_member = getattr(interaction.guild, "get_member", None)
        if callable(get_member):
            member = get_member(interaction.user.id)
            if member is not None and getattr(member, "guild_permissions", None):
                return member.guild_permissions

    # interaction.user is already a Member in most guild interactions
    return getattr(interaction.user, "guild_permissions", None)


def has_admin_permission(interaction: discord.Interaction) -> bool:
    """
    Whether the user may run fixture and balancing commands.

    Users in ADMIN_USER_IDS always pass. Otherwise the Administrator or
    Manage Server permission is required.
    """
    if ADMIN_USER_IDS and interaction.user.id in ADMIN_USER_IDS:
        return True

    perms = _member_permissions(interaction)
    if not perms:
        return False
    return bool(getattr(perms, "administrator", False) or getattr(perms, "manage_guild", False))

"""
Permission checks for interactions.

Permission names are discord.py flag names (``"ban_members"``,
``"manage_channels"``). Unknown names are ignored.

Usage:
    >>> if not Perms.bot_has(interaction, ["ban_members"]):
    ...     await interaction.response.send_message(
    ...         Perms.missing_text(interaction, ["ban_members"]), ephemeral=True
    ...     )
"""

from typing import Iterable, List, Optional

import discord


def _required(permissions: Iterable[str]) -> discord.Permissions:
    valid = {name: True for name in permissions if name in discord.Permissions.VALID_FLAGS}
    return discord.Permissions(**valid)


class Perms:
    """Static permission helpers."""

    @staticmethod
    def _bot_permissions(interaction: discord.Interaction) -> Optional[discord.Permissions]:
        guild = interaction.guild
        me = guild.me if guild is not None else None
        if me is None:
            return None

        channel = interaction.channel
        if channel is not None and hasattr(channel, "permissions_for"):
            return channel.permissions_for(me)
        return me.guild_permissions

    @staticmethod
    def bot_has(interaction: discord.Interaction, permissions: Iterable[str]) -> bool:
        """True if the bot holds every permission in the interaction's channel."""
        current = Perms._bot_permissions(interaction)
        if current is None:
            return False
        return current >= _required(permissions)

    @staticmethod
    def member_has(interaction: discord.Interaction, permissions: Iterable[str]) -> bool:
        """True if the invoking member holds every permission guild-wide."""
        current = getattr(interaction.user, "guild_permissions", None)
        if current is None:
            return False
        return current >= _required(permissions)

    @staticmethod
    def missing_text(interaction: discord.Interaction, permissions: Iterable[str]) -> str:
        """Formatted list of the permissions the bot lacks, or ``""``."""
        missing: List[str] = [
            name for name in permissions if not Perms.bot_has(interaction, [name])
        ]
        if not missing:
            return ""
        listed = ", ".join(f"`{name}`" for name in missing)
        return f"❌ I'm missing the following permissions: {listed}"

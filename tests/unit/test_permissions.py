"""
Unit tests for Perms helpers.
"""

import discord
import pytest

from forgecord.utils.permissions import Perms


@pytest.fixture
def interaction(mocker):
    interaction = mocker.MagicMock()
    interaction.channel.permissions_for = mocker.MagicMock(
        return_value=discord.Permissions(ban_members=True, send_messages=True)
    )
    interaction.user.guild_permissions = discord.Permissions(manage_messages=True)
    return interaction


@pytest.mark.unit
class TestBotHas:
    def test_has_all(self, interaction):
        assert Perms.bot_has(interaction, ["ban_members", "send_messages"]) is True

    def test_missing_one(self, interaction):
        assert Perms.bot_has(interaction, ["ban_members", "kick_members"]) is False

    def test_unknown_names_ignored(self, interaction):
        assert Perms.bot_has(interaction, ["not_a_permission"]) is True

    def test_outside_guild(self, interaction):
        interaction.guild = None
        assert Perms.bot_has(interaction, ["send_messages"]) is False

    def test_falls_back_to_guild_permissions(self, interaction):
        interaction.channel = None
        interaction.guild.me.guild_permissions = discord.Permissions(kick_members=True)
        assert Perms.bot_has(interaction, ["kick_members"]) is True


@pytest.mark.unit
class TestMemberHas:
    def test_member_permissions(self, interaction):
        assert Perms.member_has(interaction, ["manage_messages"]) is True
        assert Perms.member_has(interaction, ["administrator"]) is False

    def test_user_without_guild_permissions(self, mocker):
        interaction = mocker.MagicMock()
        interaction.user = mocker.Mock(spec=["id"])
        assert Perms.member_has(interaction, ["manage_messages"]) is False


@pytest.mark.unit
class TestMissingText:
    def test_lists_missing(self, interaction):
        text = Perms.missing_text(interaction, ["ban_members", "kick_members", "manage_roles"])
        assert text == "❌ I'm missing the following permissions: `kick_members`, `manage_roles`"

    def test_nothing_missing(self, interaction):
        assert Perms.missing_text(interaction, ["ban_members"]) == ""

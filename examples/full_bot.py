"""
forgecord example bot
=====================

Wires the router, cooldowns, paginator, confirmations, permission helpers
and embed presets into one ``commands.Bot``.

Run:
    DISCORD_TOKEN=... python examples/full_bot.py
"""

import asyncio
import re
import time

import discord
from discord import app_commands
from discord.ext import commands

from forgecord import (
    Config,
    ConfirmationConfig,
    ConfirmationManager,
    ConfirmationTimedOutError,
    CooldownActiveError,
    CooldownManager,
    EmbedPresets,
    InteractionRouter,
    Paginator,
    PaginatorConfig,
    Perms,
    Strings,
    Timestamp,
    get_logger,
    setup_logging,
)
from forgecord.core.logging import shutdown_logging

logger = get_logger(__name__)


class ForgeExampleBot(commands.Bot):
    def __init__(self) -> None:
        intents = discord.Intents.default()
        super().__init__(command_prefix=commands.when_mentioned, intents=intents)

        self.router = InteractionRouter()
        self.cooldowns = CooldownManager()
        self.confirm = ConfirmationManager(ConfirmationConfig(timeout=20))

    async def setup_hook(self) -> None:
        await self.cooldowns.start()
        self._register_routes()
        self.router.attach(self)

        register_commands(self)
        synced = await self.tree.sync()
        logger.info("Slash commands synced", extra={"count": len(synced)})

    async def close(self) -> None:
        await self.cooldowns.destroy()
        await super().close()

    async def on_ready(self) -> None:
        logger.info(f"Logged in as {self.user}", extra={"guilds": len(self.guilds)})

    def _register_routes(self) -> None:
        async def open_ticket(interaction: discord.Interaction, params: dict) -> None:
            await interaction.response.send_message(
                embed=EmbedPresets.success("Ticket Opened", "Staff will be with you shortly."),
                ephemeral=True,
            )

        async def assign_role(interaction: discord.Interaction, params: dict) -> None:
            await interaction.response.send_message(
                embed=EmbedPresets.info("Role Assigned", f"You got the **{params['wildcard']}** role."),
                ephemeral=True,
            )

        async def confirm_ban(interaction: discord.Interaction, params: dict) -> None:
            await interaction.response.send_message(
                embed=EmbedPresets.success("Banned", f"User <@{params['user_id']}> has been banned."),
            )

        async def unknown(interaction: discord.Interaction) -> None:
            await interaction.response.send_message("❓ Unknown action.", ephemeral=True)

        (
            self.router.on("open_ticket", open_ticket)
            .on("role_*", assign_role)
            .on(re.compile(r"^confirm_ban_(?P<user_id>\d+)$"), confirm_ban)
            .fallback(unknown)
        )


def register_commands(bot: ForgeExampleBot) -> None:
    @bot.tree.command(name="pages", description="Demo the paginator")
    async def pages(interaction: discord.Interaction) -> None:
        now = time.time()
        embeds = [
            discord.Embed(
                title=f"📄 Page {n} of 8",
                description=f"This is page **{n}**.\n\nCreated: {Timestamp.relative(now)}",
                color=0x5865F2,
            ).set_footer(text="forgecord pagination")
            for n in range(1, 9)
        ]
        await Paginator(embeds, PaginatorConfig(timeout=60)).reply(interaction)

    @bot.tree.command(name="ban", description="Ban a user (with cooldown + confirmation)")
    @app_commands.guild_only()
    async def ban(interaction: discord.Interaction, member: discord.Member) -> None:
        if not Perms.bot_has(interaction, ["ban_members"]):
            await interaction.response.send_message(
                embed=EmbedPresets.error(
                    "Missing Permissions", Perms.missing_text(interaction, ["ban_members"])
                ),
                ephemeral=True,
            )
            return

        try:
            bot.cooldowns.scope.user("ban", interaction, 30)
        except CooldownActiveError as e:
            await interaction.response.send_message(
                embed=EmbedPresets.warning(
                    "On Cooldown", f"Please wait **{e.remaining_text}** before using this again."
                ),
                ephemeral=True,
            )
            return

        try:
            confirmed = await bot.confirm.ask(
                interaction,
                embeds=[
                    EmbedPresets.warning(
                        "Confirm Ban", f"⚠️ This will permanently ban {member.mention}. Are you sure?"
                    )
                ],
            )
        except ConfirmationTimedOutError:
            return

        if not confirmed:
            return

        await member.ban(reason=f"Requested by {interaction.user}")
        await interaction.edit_original_response(
            embed=EmbedPresets.success("User Banned", f"{member.mention} has been banned."),
        )

    @bot.tree.command(name="info", description="Server info with timestamp helpers")
    @app_commands.guild_only()
    async def info(interaction: discord.Interaction) -> None:
        guild = interaction.guild
        embed = discord.Embed(title=f"📊 {guild.name}", color=0x5865F2)
        embed.add_field(name="Members", value=Strings.format_number(guild.member_count or 0))
        embed.add_field(name="Created", value=Timestamp.relative(guild.created_at))
        embed.add_field(name="Since", value=Timestamp.full(guild.created_at))
        await interaction.response.send_message(embed=embed)


async def main() -> None:
    setup_logging()
    logger.info("Starting example bot", extra=Config.get_config_summary())

    if not Config.DISCORD_TOKEN:
        logger.critical("DISCORD_TOKEN is not set")
        return

    bot = ForgeExampleBot()
    try:
        async with bot:
            await bot.start(Config.DISCORD_TOKEN)
    finally:
        shutdown_logging()


if __name__ == "__main__":
    asyncio.run(main())

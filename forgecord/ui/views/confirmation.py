"""
Awaitable yes/no confirmation dialogs.

``ConfirmationManager.ask`` renders a prompt with Confirm/Cancel buttons and
returns ``True``/``False`` once the invoking user clicks one, or raises
``ConfirmationTimedOutError`` if nobody does in time. Each call gets a fresh
nonce baked into its button custom ids, so concurrent prompts never answer
each other.

Usage:
    >>> confirm = ConfirmationManager()
    >>>
    >>> @bot.tree.command()
    >>> async def purge(interaction: discord.Interaction):
    ...     try:
    ...         ok = await confirm.ask(interaction, content="⚠️ Delete **all** messages?")
    ...     except ConfirmationTimedOutError:
    ...         return
    ...     if not ok:
    ...         return
    ...     ...
"""

import asyncio
import secrets
from dataclasses import dataclass, field, replace
from typing import Any, Optional, Sequence

import discord
from discord.ui import Button

from forgecord.core.config.config import Config
from forgecord.core.exceptions import ConfirmationTimedOutError
from forgecord.ui.views.base import ForgeView

CONFIRM_PREFIX = "forge_confirm_yes"
CANCEL_PREFIX = "forge_confirm_no"


@dataclass(frozen=True, slots=True)
class ConfirmationConfig:
    """
    Confirmation options.

    Attributes:
        timeout: Seconds to wait for a click
        ephemeral: Send the prompt privately
        confirm_label / cancel_label: Button labels
        confirm_style / cancel_style: Button styles
        confirmed_text / cancelled_text / timed_out_text: Terminal message text
        update_reply: Replace the prompt with the terminal text
    """

    timeout: float = field(default_factory=lambda: Config.CONFIRMATION_TIMEOUT)
    ephemeral: bool = True
    confirm_label: str = "Confirm"
    confirm_style: discord.ButtonStyle = discord.ButtonStyle.danger
    cancel_label: str = "Cancel"
    cancel_style: discord.ButtonStyle = discord.ButtonStyle.secondary
    confirmed_text: str = "✅ Confirmed."
    cancelled_text: str = "❌ Cancelled."
    timed_out_text: str = "⏳ Timed out."
    update_reply: bool = True


class ConfirmationView(ForgeView):
    """
    One confirmation session.

    ``result`` is a future settled exactly once: ``True``/``False`` on the
    first owner click, ``ConfirmationTimedOutError`` on timeout.
    """

    rejection_text = "❌ This confirmation is not for you."

    def __init__(
        self,
        user_id: int,
        config: ConfirmationConfig,
        nonce: Optional[str] = None,
    ):
        super().__init__(user_id, timeout=config.timeout, logger_name=__name__)
        self.config = config
        self.nonce = nonce or secrets.token_hex(8)
        self.confirm_id = f"{CONFIRM_PREFIX}_{self.nonce}"
        self.cancel_id = f"{CANCEL_PREFIX}_{self.nonce}"
        self.result: asyncio.Future[bool] = asyncio.get_running_loop().create_future()

        self._setup_buttons()

    def _setup_buttons(self) -> None:
        confirm_button = Button(
            label=self.config.confirm_label,
            style=self.config.confirm_style,
            custom_id=self.confirm_id,
        )
        confirm_button.callback = self._on_click
        self.add_item(confirm_button)

        cancel_button = Button(
            label=self.config.cancel_label,
            style=self.config.cancel_style,
            custom_id=self.cancel_id,
        )
        cancel_button.callback = self._on_click
        self.add_item(cancel_button)

    async def _on_click(self, interaction: discord.Interaction) -> None:
        custom_id = (interaction.data or {}).get("custom_id")
        if custom_id not in (self.confirm_id, self.cancel_id):
            return

        if not self._enter_terminal_state():
            await interaction.response.defer()
            return

        confirmed = custom_id == self.confirm_id
        try:
            if self.config.update_reply:
                await interaction.response.edit_message(
                    content=self.config.confirmed_text if confirmed else self.config.cancelled_text,
                    embeds=[],
                    view=None,
                )
            else:
                await interaction.response.defer()
        except discord.HTTPException as e:
            self.logger.warning(f"Failed to update confirmation prompt: {e}")

        self.logger.info(
            "Confirmation resolved",
            extra={"user_id": self.user_id, "nonce": self.nonce, "confirmed": confirmed},
        )
        if not self.result.done():
            self.result.set_result(confirmed)

    async def on_timeout(self) -> None:
        if not self._enter_terminal_state():
            return

        if self.config.update_reply:
            await self._safe_edit(content=self.config.timed_out_text, embeds=[], view=None)

        self.logger.info(
            "Confirmation timed out",
            extra={"user_id": self.user_id, "nonce": self.nonce},
        )
        if not self.result.done():
            self.result.set_exception(ConfirmationTimedOutError())


class ConfirmationManager:
    """
    Factory for confirmation sessions sharing one set of defaults.

    Per-call keyword overrides are applied on top of the defaults with
    ``dataclasses.replace``; unknown keys raise ``TypeError``.
    """

    def __init__(self, defaults: Optional[ConfirmationConfig] = None):
        self.defaults = defaults or ConfirmationConfig()

    async def ask(
        self,
        interaction: discord.Interaction,
        *,
        content: Optional[str] = None,
        embeds: Optional[Sequence[discord.Embed]] = None,
        **overrides: Any,
    ) -> bool:
        """
        Prompt the invoking user and wait for their answer.

        Returns:
            True on confirm, False on cancel

        Raises:
            ConfirmationTimedOutError: no owner click within the timeout
        """
        config = replace(self.defaults, **overrides) if overrides else self.defaults
        view = ConfirmationView(interaction.user.id, config)
        payload = {"content": content, "embeds": list(embeds or []), "view": view}

        if interaction.response.is_done():
            message = await interaction.edit_original_response(**payload)
        else:
            await interaction.response.send_message(**payload, ephemeral=config.ephemeral)
            message = await interaction.original_response()
        view.set_message(message)

        view.logger.debug(
            "Confirmation prompted",
            extra={"user_id": view.user_id, "nonce": view.nonce, "timeout": config.timeout},
        )
        return await view.result

"""
Base view for forgecord interactive sessions.

A ``discord.ui.View`` bound to one rendered message acts as the click
collector. ``ForgeView`` adds what every session needs on top of it:

- Owner validation in ``interaction_check`` with a private rejection notice
- A fixed session deadline, armed when the message is rendered
- A single terminal gate shared by timeout, stop button and manual stop
- Message tracking and best-effort edits of the rendered message

discord.py's own view timeout restarts on every accepted click, so it is
disabled; ``session_timeout`` counts from render and clicks never move it.

Usage:
    >>> class MyView(ForgeView):
    ...     def __init__(self, user_id: int):
    ...         super().__init__(user_id, timeout=180)
    ...
    ...     async def on_timeout(self) -> None:
    ...         if self._enter_terminal_state():
    ...             self.disable_all()
    ...             await self._safe_edit(view=self)
"""

import asyncio
from typing import Any, Optional

import discord
from discord.ui import View

from forgecord.core.logging.logger import get_logger


class ForgeView(View):
    """
    Base view class with common session behavior.

    ``user_id=None`` leaves the controls open to everyone.
    """

    rejection_text: str = "❌ This interaction is not for you."

    def __init__(
        self,
        user_id: Optional[int],
        timeout: Optional[float] = 180,
        logger_name: Optional[str] = None,
    ):
        """
        Initialize base view.

        Args:
            user_id: Discord user ID allowed to operate the controls
            timeout: Seconds from render until the session expires
            logger_name: Optional logger name for logging interactions
        """
        super().__init__(timeout=None)
        self.user_id = user_id
        self.session_timeout = timeout
        self.message: Optional[discord.Message] = None
        self.logger = get_logger(logger_name or __name__)
        self._finished = False
        self._deadline: Optional[asyncio.TimerHandle] = None
        self._timeout_task: Optional[asyncio.Task[None]] = None

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def deadline(self) -> Optional[float]:
        """Event-loop time at which the session expires, once armed."""
        return self._deadline.when() if self._deadline is not None else None

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        """
        Gate every component click on the owner.

        Runs before discord.py dispatches the callback. Rejected users get an
        ephemeral notice; the session and its deadline are untouched.
        """
        if self.user_id is None or interaction.user.id == self.user_id:
            return True

        self.logger.debug(
            "Rejected interaction from non-owner",
            extra={"user_id": interaction.user.id, "owner_id": self.user_id},
        )
        try:
            await interaction.response.send_message(self.rejection_text, ephemeral=True)
        except discord.HTTPException as e:
            self.logger.warning(f"Failed to send rejection notice: {e}")
        return False

    # ------------------------------------------------------------------
    # Session deadline
    # ------------------------------------------------------------------

    def _arm_deadline(self) -> None:
        """Schedule ``on_timeout`` once; re-arming is a no-op."""
        if self.session_timeout is None or self._deadline is not None or self._finished:
            return
        loop = asyncio.get_running_loop()
        self._deadline = loop.call_later(self.session_timeout, self._deadline_reached)

    def _deadline_reached(self) -> None:
        self._deadline = None
        self._timeout_task = asyncio.get_running_loop().create_task(self._run_timeout())

    async def _run_timeout(self) -> None:
        try:
            await self.on_timeout()
        except Exception:
            self.logger.error("Session timeout handler failed", exc_info=True)

    def _enter_terminal_state(self) -> bool:
        """
        Claim the terminal transition.

        Returns True exactly once per view; every later caller gets False.
        """
        if self._finished:
            return False
        self._finished = True
        if self._deadline is not None:
            self._deadline.cancel()
            self._deadline = None
        super().stop()
        return True

    def disable_all(self) -> None:
        for child in self.children:
            if isinstance(child, (discord.ui.Button, discord.ui.Select)):
                child.disabled = True

    async def _safe_edit(self, **payload: Any) -> bool:
        """
        Edit the rendered message, logging and swallowing HTTP failures.

        Returns:
            True if the edit went through
        """
        if self.message is None:
            return False
        try:
            await self.message.edit(**payload)
            return True
        except discord.HTTPException as e:
            self.logger.warning(
                f"Failed to edit message: {e}",
                extra={"message_id": getattr(self.message, "id", None)},
            )
            return False

    async def on_error(
        self,
        interaction: discord.Interaction,
        error: Exception,
        item: discord.ui.Item,
    ) -> None:
        self.logger.error(
            f"Error in view for user {self.user_id}: {error}",
            exc_info=error,
        )

        try:
            if interaction.response.is_done():
                await interaction.followup.send(
                    "An error occurred while processing your interaction.",
                    ephemeral=True,
                )
            else:
                await interaction.response.send_message(
                    "An error occurred while processing your interaction.",
                    ephemeral=True,
                )
        except discord.HTTPException as e:
            self.logger.warning(f"Failed to report view error: {e}")

    def set_message(self, message: discord.Message) -> None:
        """Bind the rendered message and start the session clock."""
        self.message = message
        self._arm_deadline()

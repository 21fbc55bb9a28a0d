"""
Button-driven pagination over a fixed list of pages.

Lifecycle: constructed (idle) -> rendered by ``reply``/``send`` ->
navigating -> finished. Finishing happens once, through ``_finish``, whether
it was triggered by the timeout, the stop button or ``stop()``; the last
shown page stays visible with every control disabled.

Usage:
    >>> pages = [discord.Embed(title=f"Page {n}") for n in range(1, 6)]
    >>> paginator = Paginator(pages, PaginatorConfig(timeout=60))
    >>> await paginator.reply(interaction)
    >>>
    >>> # Plain strings and message-kwarg dicts work too
    >>> await Paginator(["one", {"content": "two", "embed": embed}]).send(channel, user_id)
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

import discord
from discord.ui import Button

from forgecord.core.config.config import Config
from forgecord.core.exceptions import InvalidPageError, NoPagesError
from forgecord.ui.views.base import ForgeView

Page = Union[discord.Embed, str, Mapping[str, Any]]

FIRST_ID = "forge_page_first"
PREV_ID = "forge_page_prev"
COUNT_ID = "forge_page_count"
NEXT_ID = "forge_page_next"
LAST_ID = "forge_page_last"
STOP_ID = "forge_page_stop"


@dataclass(frozen=True, slots=True)
class PaginatorLabels:
    first: str = "«"
    prev: str = "‹"
    next: str = "›"
    last: str = "»"
    stop: str = "✕"


@dataclass(frozen=True, slots=True)
class PaginatorConfig:
    """
    Paginator options. Immutable for the lifetime of a session.

    Attributes:
        start_page: Index shown first
        timeout: Seconds from render until the controls are disabled
        show_page_count: Render a disabled "current / total" button
        show_stop: Render the stop button
        ephemeral: Send the reply privately (``reply`` only)
        labels: Button labels
    """

    start_page: int = 0
    timeout: float = field(default_factory=lambda: Config.PAGINATOR_TIMEOUT)
    show_page_count: bool = True
    show_stop: bool = True
    ephemeral: bool = False
    labels: PaginatorLabels = field(default_factory=PaginatorLabels)


def _normalize_page(page: Page) -> Dict[str, Any]:
    """Turn a page into explicit ``content``/``embeds`` kwargs so edits replace both."""
    if isinstance(page, discord.Embed):
        return {"content": None, "embeds": [page]}
    if isinstance(page, str):
        return {"content": page, "embeds": []}
    if isinstance(page, Mapping):
        embeds = list(page.get("embeds") or [])
        if page.get("embed") is not None:
            embeds.insert(0, page["embed"])
        return {"content": page.get("content"), "embeds": embeds}
    raise TypeError(f"Unsupported page type: {type(page).__name__}")


class Paginator(ForgeView):
    """
    Paginated message with first/prev/next/last/stop controls.

    Navigation is restricted to ``user_id``; when it is not given, ``reply``
    restricts to the invoking user and ``send`` leaves the controls open
    unless a user is passed.
    """

    rejection_text = "❌ This pagination is not for you."

    def __init__(
        self,
        pages: Sequence[Page],
        config: Optional[PaginatorConfig] = None,
        *,
        user_id: Optional[int] = None,
    ):
        if not pages:
            raise NoPagesError()

        config = config or PaginatorConfig()
        if not 0 <= config.start_page < len(pages):
            raise InvalidPageError(config.start_page, len(pages))

        super().__init__(user_id, timeout=config.timeout, logger_name=__name__)
        self.config = config
        self.pages: List[Dict[str, Any]] = [_normalize_page(page) for page in pages]
        self.index = config.start_page
        self._controls: Dict[str, Button] = {}

        self._setup_buttons()
        self._refresh_controls()

    @property
    def total(self) -> int:
        return len(self.pages)

    @property
    def current_page(self) -> Dict[str, Any]:
        page = self.pages[self.index]
        return {"content": page["content"], "embeds": list(page["embeds"])}

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _setup_buttons(self) -> None:
        labels = self.config.labels
        layout = [
            (FIRST_ID, labels.first, discord.ButtonStyle.secondary),
            (PREV_ID, labels.prev, discord.ButtonStyle.secondary),
        ]
        if self.config.show_page_count:
            layout.append((COUNT_ID, "", discord.ButtonStyle.secondary))
        layout += [
            (NEXT_ID, labels.next, discord.ButtonStyle.secondary),
            (LAST_ID, labels.last, discord.ButtonStyle.secondary),
        ]
        if self.config.show_stop:
            layout.append((STOP_ID, labels.stop, discord.ButtonStyle.danger))

        for custom_id, label, style in layout:
            button = Button(label=label, style=style, custom_id=custom_id)
            if custom_id == COUNT_ID:
                button.disabled = True
            else:
                button.callback = self._on_click
            self._controls[custom_id] = button
            self.add_item(button)

    def _refresh_controls(self) -> None:
        at_start = self.index == 0
        at_end = self.index == self.total - 1
        only_one = self.total == 1

        self._controls[FIRST_ID].disabled = at_start or only_one
        self._controls[PREV_ID].disabled = at_start or only_one
        self._controls[NEXT_ID].disabled = at_end or only_one
        self._controls[LAST_ID].disabled = at_end or only_one

        counter = self._controls.get(COUNT_ID)
        if counter is not None:
            counter.label = f"{self.index + 1} / {self.total}"

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def reply(self, interaction: discord.Interaction) -> discord.Message:
        """Render the current page as the response to ``interaction``."""
        if self.user_id is None:
            self.user_id = interaction.user.id

        if interaction.response.is_done():
            message = await interaction.edit_original_response(**self.current_page, view=self)
        else:
            await interaction.response.send_message(
                **self.current_page, view=self, ephemeral=self.config.ephemeral
            )
            message = await interaction.original_response()

        self.set_message(message)
        self.logger.debug(
            "Paginator rendered",
            extra={"user_id": self.user_id, "pages": self.total, "index": self.index},
        )
        return message

    async def send(
        self, channel: discord.abc.Messageable, user_id: Optional[int] = None
    ) -> discord.Message:
        """Render the current page as a new message in ``channel``."""
        if user_id is not None:
            self.user_id = user_id

        message = await channel.send(**self.current_page, view=self)
        self.set_message(message)
        self.logger.debug(
            "Paginator rendered",
            extra={"user_id": self.user_id, "pages": self.total, "index": self.index},
        )
        return message

    async def go_to(self, index: int) -> None:
        """
        Jump to ``index`` and re-render.

        Raises:
            InvalidPageError: index outside ``[0, total - 1]``
        """
        if not 0 <= index < self.total:
            raise InvalidPageError(index, self.total)
        if self.finished:
            self.logger.debug("go_to ignored on finished paginator", extra={"index": index})
            return

        self.index = index
        self._refresh_controls()
        await self._safe_edit(**self.current_page, view=self)

    async def stop(self) -> None:  # type: ignore[override]
        """Terminate the session immediately, as if the stop button was pressed."""
        await self._finish("manual")

    async def on_timeout(self) -> None:
        await self._finish("timeout")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _on_click(self, interaction: discord.Interaction) -> None:
        if self.finished:
            await interaction.response.defer()
            return

        custom_id = (interaction.data or {}).get("custom_id")
        if custom_id == STOP_ID:
            await self._finish("user", interaction)
            return

        if custom_id == FIRST_ID:
            self.index = 0
        elif custom_id == PREV_ID:
            self.index = max(0, self.index - 1)
        elif custom_id == NEXT_ID:
            self.index = min(self.total - 1, self.index + 1)
        elif custom_id == LAST_ID:
            self.index = self.total - 1

        self._refresh_controls()
        await interaction.response.edit_message(**self.current_page, view=self)

    async def _finish(
        self, reason: str, interaction: Optional[discord.Interaction] = None
    ) -> bool:
        """Run the terminal transition; returns False if it already ran."""
        if not self._enter_terminal_state():
            return False

        self.disable_all()
        if interaction is not None:
            try:
                await interaction.response.edit_message(**self.current_page, view=self)
            except discord.HTTPException as e:
                self.logger.warning(f"Failed to disable paginator controls: {e}")
        else:
            await self._safe_edit(**self.current_page, view=self)

        self.logger.info(
            "Paginator finished",
            extra={"reason": reason, "index": self.index, "pages": self.total},
        )
        return True

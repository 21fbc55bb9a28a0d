"""
WebhookSender: send, edit and delete webhook messages by URL.

Built on ``discord.Webhook.from_url``; the HTTP session comes from a
logged-in client or an explicit ``aiohttp.ClientSession``. Failures are
mapped to forgecord errors the same way ``ForgeRest`` maps them.

Usage
-----
>>> webhooks = WebhookSender(bot)
>>> await webhooks.send(url, content="Deployed!", username="CI")
>>> await webhooks.send_batch(url, embeds=report_embeds, content="Nightly report")
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional, Sequence, Tuple

import aiohttp
import discord

from forgecord.core.exceptions import NotReadyError, WebhookInvalidUrlError
from forgecord.core.logging.logger import get_logger
from forgecord.core.rest import map_http_exception

logger = get_logger(__name__)

WEBHOOK_URL_RE = re.compile(r"^https://discord(?:app)?\.com/api(?:/v\d+)?/webhooks/(\d+)/([\w-]+)")
MAX_EMBEDS_PER_MESSAGE = 10


class WebhookSender:
    """
    Webhook operations keyed by webhook URL.

    Args:
        client: discord.py client whose HTTP session is reused
        session: aiohttp session, for use without a client

    Raises:
        NotReadyError: neither a client nor a session was given
    """

    def __init__(
        self,
        client: Optional[discord.Client] = None,
        *,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        if client is None and session is None:
            raise NotReadyError(extra="WebhookSender needs a client or an aiohttp session")
        self._client = client
        self._session = session

    @staticmethod
    def parse_url(url: str) -> Tuple[int, str]:
        """Return ``(webhook_id, token)``; raises ``WebhookInvalidUrlError``."""
        match = WEBHOOK_URL_RE.match(url or "")
        if match is None:
            raise WebhookInvalidUrlError(url)
        return int(match.group(1)), match.group(2)

    def _webhook(self, url: str) -> discord.Webhook:
        self.parse_url(url)
        if self._client is not None:
            return discord.Webhook.from_url(url, client=self._client)
        return discord.Webhook.from_url(url, session=self._session)

    @staticmethod
    def _thread(thread_id: Optional[int]) -> Dict[str, Any]:
        return {"thread": discord.Object(id=thread_id)} if thread_id is not None else {}

    async def send(
        self,
        url: str,
        *,
        content: Optional[str] = None,
        embeds: Optional[Sequence[discord.Embed]] = None,
        username: Optional[str] = None,
        avatar_url: Optional[str] = None,
        thread_id: Optional[int] = None,
        wait: bool = True,
    ) -> Optional[discord.WebhookMessage]:
        """
        Execute the webhook.

        Returns:
            The sent message when ``wait`` is True, otherwise None
        """
        kwargs: Dict[str, Any] = {"wait": wait, **self._thread(thread_id)}
        if content is not None:
            kwargs["content"] = content
        if embeds:
            kwargs["embeds"] = list(embeds)
        if username is not None:
            kwargs["username"] = username
        if avatar_url is not None:
            kwargs["avatar_url"] = avatar_url

        webhook = self._webhook(url)
        try:
            return await webhook.send(**kwargs)
        except discord.HTTPException as e:
            raise map_http_exception(e) from e

    async def send_batch(
        self,
        url: str,
        embeds: Sequence[discord.Embed],
        *,
        content: Optional[str] = None,
        username: Optional[str] = None,
        avatar_url: Optional[str] = None,
        thread_id: Optional[int] = None,
        wait: bool = True,
    ) -> List[Optional[discord.WebhookMessage]]:
        """
        Send any number of embeds, ten per message.

        ``content`` goes with the first message only.
        """
        chunks = [
            list(embeds[i : i + MAX_EMBEDS_PER_MESSAGE])
            for i in range(0, len(embeds), MAX_EMBEDS_PER_MESSAGE)
        ]

        results: List[Optional[discord.WebhookMessage]] = []
        for index, chunk in enumerate(chunks):
            results.append(
                await self.send(
                    url,
                    content=content if index == 0 else None,
                    embeds=chunk,
                    username=username,
                    avatar_url=avatar_url,
                    thread_id=thread_id,
                    wait=wait,
                )
            )

        logger.debug(
            "Webhook batch sent",
            extra={"embeds": len(embeds), "messages": len(chunks)},
        )
        return results

    async def edit(
        self,
        url: str,
        message_id: int,
        *,
        content: Optional[str] = None,
        embeds: Optional[Sequence[discord.Embed]] = None,
        thread_id: Optional[int] = None,
    ) -> discord.WebhookMessage:
        kwargs: Dict[str, Any] = self._thread(thread_id)
        if content is not None:
            kwargs["content"] = content
        if embeds is not None:
            kwargs["embeds"] = list(embeds)

        webhook = self._webhook(url)
        try:
            return await webhook.edit_message(message_id, **kwargs)
        except discord.HTTPException as e:
            raise map_http_exception(e) from e

    async def delete(self, url: str, message_id: int, *, thread_id: Optional[int] = None) -> None:
        webhook = self._webhook(url)
        try:
            await webhook.delete_message(message_id, **self._thread(thread_id))
        except discord.HTTPException as e:
            raise map_http_exception(e) from e

    async def fetch(self, url: str) -> discord.Webhook:
        """Fetch the webhook's own metadata (name, channel, avatar)."""
        webhook = self._webhook(url)
        try:
            return await webhook.fetch()
        except discord.HTTPException as e:
            raise map_http_exception(e) from e

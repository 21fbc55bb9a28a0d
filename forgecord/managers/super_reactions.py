"""
Burst ("super") reactions.

``emoji`` is either a unicode emoji or ``name:id`` for custom emoji.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from forgecord.managers.base import RestManager

BURST_REACTION_TYPE = 1


class SuperReactionsManager(RestManager):
    async def get_burst_reactors(
        self,
        channel_id: int,
        message_id: int,
        emoji: str,
        *,
        after: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Users who added a burst reaction with ``emoji``."""
        return await self._rest.request(
            "GET",
            "/channels/{channel_id}/messages/{message_id}/reactions/{emoji}",
            channel_id=channel_id,
            message_id=message_id,
            emoji=emoji,
            params={"type": BURST_REACTION_TYPE, "after": after, "limit": limit},
        )

    async def delete_burst_reaction(self, channel_id: int, message_id: int, emoji: str) -> None:
        await self._rest.request(
            "DELETE",
            "/channels/{channel_id}/messages/{message_id}/reactions/{emoji}",
            channel_id=channel_id,
            message_id=message_id,
            emoji=emoji,
            params={"type": BURST_REACTION_TYPE},
        )

    async def get_reaction_summary(self, channel_id: int, message_id: int) -> List[Dict[str, Any]]:
        """Reaction objects (including ``burst_count`` / ``count_details``) of a message."""
        message = await self._rest.request(
            "GET",
            "/channels/{channel_id}/messages/{message_id}",
            channel_id=channel_id,
            message_id=message_id,
        )
        return (message or {}).get("reactions", [])

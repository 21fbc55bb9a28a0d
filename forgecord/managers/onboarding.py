"""Guild onboarding configuration."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from forgecord.managers.base import RestManager


class OnboardingManager(RestManager):
    async def get(self, guild_id: int) -> Dict[str, Any]:
        return await self._rest.request("GET", "/guilds/{guild_id}/onboarding", guild_id=guild_id)

    async def edit(
        self,
        guild_id: int,
        *,
        prompts: Optional[List[Dict[str, Any]]] = None,
        default_channel_ids: Optional[Iterable[int]] = None,
        enabled: Optional[bool] = None,
        mode: Optional[int] = None,
        reason: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Replace onboarding settings; only the fields given are sent."""
        body = self._compact(
            {
                "prompts": prompts,
                "default_channel_ids": (
                    [str(channel_id) for channel_id in default_channel_ids]
                    if default_channel_ids is not None
                    else None
                ),
                "enabled": enabled,
                "mode": mode,
            }
        )
        return await self._rest.request(
            "PUT", "/guilds/{guild_id}/onboarding", guild_id=guild_id, json=body, reason=reason
        )

"""Voice channel effects (animated emoji effects in voice)."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from forgecord.managers.base import RestManager


class VoiceEffectsManager(RestManager):
    async def list_effects(self, channel_id: int) -> List[Dict[str, Any]]:
        return await self._rest.request(
            "GET", "/channels/{channel_id}/voice-effects", channel_id=channel_id
        )

    async def set_effect(
        self,
        channel_id: int,
        effect_id: Optional[int],
        *,
        animation_type: Optional[int] = None,
        animation_id: Optional[int] = None,
        session_id: Optional[str] = None,
    ) -> Any:
        """Apply an effect; ``effect_id=None`` clears it."""
        body: Dict[str, Any] = {"effect_id": effect_id}
        body.update(
            self._compact(
                {
                    "animation_type": animation_type,
                    "animation_id": animation_id,
                    "session_id": session_id,
                }
            )
        )
        return await self._rest.request(
            "PUT", "/channels/{channel_id}/voice-effects", channel_id=channel_id, json=body
        )

    async def clear_effect(self, channel_id: int) -> Any:
        return await self.set_effect(channel_id, None)

"""
Soundboard sounds: default sounds, guild sound CRUD and playback in voice.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from forgecord.core.exceptions import ErrorCode, InvalidFormBodyError, RestError
from forgecord.managers.base import RestManager


def _check_volume(volume: Optional[float]) -> None:
    if volume is not None and not 0 <= volume <= 1:
        raise RestError(ErrorCode.SOUNDBOARD_INVALID_VOLUME, details={"volume": volume})


class SoundboardManager(RestManager):
    """
    Usage:
        >>> soundboard = SoundboardManager(bot)
        >>> sound = await soundboard.create_sound(
        ...     guild.id, name="airhorn", sound="data:audio/mp3;base64,...", volume=0.8
        ... )
        >>> await soundboard.send_sound(voice_channel.id, sound["sound_id"])
    """

    async def get_default_sounds(self) -> List[Dict[str, Any]]:
        return await self._rest.request("GET", "/soundboard-default-sounds")

    async def get_guild_sounds(self, guild_id: int) -> List[Dict[str, Any]]:
        data = await self._rest.request(
            "GET", "/guilds/{guild_id}/soundboard-sounds", guild_id=guild_id
        )
        if isinstance(data, dict) and "items" in data:
            return data["items"]
        return data

    async def get_sound(self, guild_id: int, sound_id: int) -> Dict[str, Any]:
        return await self._rest.request(
            "GET",
            "/guilds/{guild_id}/soundboard-sounds/{sound_id}",
            guild_id=guild_id,
            sound_id=sound_id,
        )

    async def create_sound(
        self,
        guild_id: int,
        *,
        name: str,
        sound: str,
        volume: Optional[float] = None,
        emoji_id: Optional[int] = None,
        emoji_name: Optional[str] = None,
        reason: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Upload a guild soundboard sound.

        Args:
            sound: Data URI of the MP3/OGG payload
            volume: 0..1, defaults to 1

        Raises:
            InvalidFormBodyError: name or sound missing
            RestError: SOUNDBOARD_INVALID_VOLUME when volume is outside [0, 1]
        """
        if not name or not sound:
            raise InvalidFormBodyError(extra="name and sound are required")
        _check_volume(volume)

        sound_data = await self._rest.request(
            "POST",
            "/guilds/{guild_id}/soundboard-sounds",
            guild_id=guild_id,
            reason=reason,
            json={
                "name": name,
                "sound": sound,
                "volume": 1 if volume is None else volume,
                "emoji_id": emoji_id,
                "emoji_name": emoji_name,
            },
        )
        self.log.info(
            "Soundboard sound created",
            extra={"guild_id": guild_id, "sound_name": name},
        )
        return sound_data

    async def edit_sound(
        self,
        guild_id: int,
        sound_id: int,
        *,
        name: Optional[str] = None,
        volume: Optional[float] = None,
        emoji_id: Optional[int] = None,
        emoji_name: Optional[str] = None,
        reason: Optional[str] = None,
    ) -> Dict[str, Any]:
        _check_volume(volume)
        return await self._rest.request(
            "PATCH",
            "/guilds/{guild_id}/soundboard-sounds/{sound_id}",
            guild_id=guild_id,
            sound_id=sound_id,
            reason=reason,
            json=self._compact(
                {"name": name, "volume": volume, "emoji_id": emoji_id, "emoji_name": emoji_name}
            ),
        )

    async def delete_sound(
        self, guild_id: int, sound_id: int, *, reason: Optional[str] = None
    ) -> None:
        await self._rest.request(
            "DELETE",
            "/guilds/{guild_id}/soundboard-sounds/{sound_id}",
            guild_id=guild_id,
            sound_id=sound_id,
            reason=reason,
        )

    async def send_sound(
        self, channel_id: int, sound_id: int, source_guild_id: Optional[int] = None
    ) -> None:
        """Play a sound in a voice channel the bot is connected to."""
        await self._rest.request(
            "POST",
            "/channels/{channel_id}/send-soundboard-sound",
            channel_id=channel_id,
            json=self._compact({"sound_id": sound_id, "source_guild_id": source_guild_id}),
        )

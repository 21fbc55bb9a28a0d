"""
Preset embed builders.

Usage:
    >>> from forgecord.ui.embeds import EmbedPresets
    >>> embed = EmbedPresets.success("Done!", "The user was banned.")
    >>> embed = EmbedPresets.error("Failed", footer={"text": "Missing permissions"})
"""

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional, Union

import discord


class EmbedColors:
    SUCCESS = 0x2ECC71
    ERROR = 0xE74C3C
    WARNING = 0xF39C12
    INFO = 0x3498DB
    LOADING = 0x95A5A6
    BLANK = 0x2C2F33


class EmbedPresets:
    """
    Factory for consistently styled embeds.

    Every preset accepts the same keyword extras:

    - fields: iterable of ``{"name", "value", "inline"}`` dicts
    - footer: ``{"text", "icon_url"}``
    - thumbnail / image: URL strings
    - timestamp: ``True`` for now, or a ``datetime``
    - author: ``{"name", "url", "icon_url"}``
    """

    @classmethod
    def success(cls, title: str, description: Optional[str] = None, **extra: Any) -> discord.Embed:
        return cls._build(EmbedColors.SUCCESS, f"✅ {title}", description, extra)

    @classmethod
    def error(cls, title: str, description: Optional[str] = None, **extra: Any) -> discord.Embed:
        return cls._build(EmbedColors.ERROR, f"❌ {title}", description, extra)

    @classmethod
    def warning(cls, title: str, description: Optional[str] = None, **extra: Any) -> discord.Embed:
        return cls._build(EmbedColors.WARNING, f"⚠️ {title}", description, extra)

    @classmethod
    def info(cls, title: str, description: Optional[str] = None, **extra: Any) -> discord.Embed:
        return cls._build(EmbedColors.INFO, f"ℹ️ {title}", description, extra)

    @classmethod
    def loading(
        cls, title: str = "Loading…", description: Optional[str] = None, **extra: Any
    ) -> discord.Embed:
        return cls._build(EmbedColors.LOADING, f"⏳ {title}", description, extra)

    @staticmethod
    def blank(color: int = EmbedColors.BLANK) -> discord.Embed:
        """Empty embed with a color, used as a base for custom embeds."""
        return discord.Embed(color=color)

    @staticmethod
    def _build(
        color: int,
        title: str,
        description: Optional[str],
        extra: Dict[str, Any],
    ) -> discord.Embed:
        embed = discord.Embed(color=color, title=title, description=description)

        fields: Iterable[Dict[str, Any]] = extra.get("fields") or ()
        for field in fields:
            embed.add_field(
                name=field["name"],
                value=field["value"],
                inline=field.get("inline", True),
            )

        footer = extra.get("footer")
        if footer:
            embed.set_footer(text=footer.get("text"), icon_url=footer.get("icon_url"))

        if extra.get("thumbnail"):
            embed.set_thumbnail(url=extra["thumbnail"])
        if extra.get("image"):
            embed.set_image(url=extra["image"])

        timestamp: Union[bool, datetime, None] = extra.get("timestamp")
        if timestamp is True:
            embed.timestamp = datetime.now(timezone.utc)
        elif isinstance(timestamp, datetime):
            embed.timestamp = timestamp

        author = extra.get("author")
        if author:
            embed.set_author(
                name=author["name"],
                url=author.get("url"),
                icon_url=author.get("icon_url"),
            )

        return embed

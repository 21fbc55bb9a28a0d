"""
Pure formatters for Discord display strings.

Contains no state and performs no I/O:
- Human-readable durations (cooldown remaining text)
- Discord timestamp markup (``<t:1700000000:R>``)
- Mention markup for users, channels, roles, commands and emojis
- String helpers sized for Discord's message limits

Usage:
    >>> from forgecord.ui.formatters import Timestamp, Strings, format_duration
    >>> format_duration(90)
    '1m 30s'
    >>> Timestamp.relative(1700000000)
    '<t:1700000000:R>'
    >>> Strings.truncate("Hello world", 8)
    'Hello w…'
"""

import math
import re
from datetime import datetime
from typing import List, Optional, Union

TimeLike = Union[datetime, int, float]


def format_duration(seconds: float) -> str:
    """
    Format a duration for display.

    Rules:
        < 1s  -> milliseconds ("250ms")
        < 60s -> seconds with one decimal ("12.5s")
        < 1h  -> minutes and leftover seconds ("5m 3s", or "5m")
        else  -> hours and leftover minutes ("2h 10m", or "2h")

    Example:
        >>> format_duration(3600)
        '1h'
    """
    ms = max(0, int(round(seconds * 1000)))

    if ms < 1_000:
        return f"{ms}ms"
    if ms < 60_000:
        return f"{ms / 1_000:.1f}s"
    if ms < 3_600_000:
        minutes = ms // 60_000
        secs = (ms % 60_000) // 1_000
        return f"{minutes}m {secs}s" if secs else f"{minutes}m"

    hours = ms // 3_600_000
    minutes = (ms % 3_600_000) // 60_000
    return f"{hours}h {minutes}m" if minutes else f"{hours}h"


def _to_unix(value: TimeLike) -> int:
    if isinstance(value, datetime):
        return int(value.timestamp())
    # Values this large are millisecond epochs.
    if value > 1e10:
        return math.floor(value / 1000)
    return math.floor(value)


class Timestamp:
    """Discord ``<t:...>`` timestamp markup."""

    @staticmethod
    def relative(value: TimeLike) -> str:
        """Renders as "5 minutes ago"."""
        return f"<t:{_to_unix(value)}:R>"

    @staticmethod
    def time(value: TimeLike) -> str:
        """Renders as "14:30"."""
        return f"<t:{_to_unix(value)}:t>"

    @staticmethod
    def time_long(value: TimeLike) -> str:
        """Renders as "14:30:00"."""
        return f"<t:{_to_unix(value)}:T>"

    @staticmethod
    def date(value: TimeLike) -> str:
        """Renders as "15/01/2025"."""
        return f"<t:{_to_unix(value)}:d>"

    @staticmethod
    def date_long(value: TimeLike) -> str:
        """Renders as "15 January 2025"."""
        return f"<t:{_to_unix(value)}:D>"

    @staticmethod
    def full(value: TimeLike) -> str:
        """Renders as "15 January 2025 14:30"."""
        return f"<t:{_to_unix(value)}:f>"

    @staticmethod
    def full_long(value: TimeLike) -> str:
        """Renders as "Wednesday, 15 January 2025 14:30"."""
        return f"<t:{_to_unix(value)}:F>"

    @staticmethod
    def unix(value: TimeLike) -> int:
        return _to_unix(value)


class Mention:
    """Mention markup shorthands."""

    @staticmethod
    def user(user_id: int) -> str:
        return f"<@{user_id}>"

    @staticmethod
    def channel(channel_id: int) -> str:
        return f"<#{channel_id}>"

    @staticmethod
    def role(role_id: int) -> str:
        return f"<@&{role_id}>"

    @staticmethod
    def command(name: str, command_id: int) -> str:
        return f"</{name}:{command_id}>"

    @staticmethod
    def emoji(name: str, emoji_id: int, animated: bool = False) -> str:
        return f"<a:{name}:{emoji_id}>" if animated else f"<:{name}:{emoji_id}>"


_MARKDOWN_RE = re.compile(r"([*_`~\\|>])")


class Strings:
    """
    String helpers for Discord messages.

    All methods are static and pure.
    """

    @staticmethod
    def truncate(text: str, max_length: int, suffix: str = "…") -> str:
        if len(text) <= max_length:
            return text
        return text[: max_length - len(suffix)] + suffix

    @staticmethod
    def codeblock(code: str, lang: str = "") -> str:
        return f"```{lang}\n{code}\n```"

    @staticmethod
    def chunk(text: str, max_length: int = 2000) -> List[str]:
        """
        Split text into pieces of at most ``max_length`` characters.

        Prefers splitting at the last newline before the limit; leading
        whitespace of each following chunk is dropped.

        Example:
            >>> Strings.chunk("aaaa\\nbbbb", 6)
            ['aaaa', 'bbbb']
        """
        chunks: List[str] = []
        while len(text) > max_length:
            idx = text.rfind("\n", 0, max_length + 1)
            if idx <= 0:
                idx = max_length
            chunks.append(text[:idx])
            text = text[idx:].lstrip()
        if text:
            chunks.append(text)
        return chunks

    @staticmethod
    def plural(count: int, singular: str, plural: Optional[str] = None) -> str:
        if count == 1:
            return singular
        return plural if plural is not None else f"{singular}s"

    @staticmethod
    def escape_markdown(text: str) -> str:
        return _MARKDOWN_RE.sub(r"\\\1", text)

    @staticmethod
    def format_number(value: Union[int, float]) -> str:
        """Thousands separators: 1234567 -> '1,234,567'."""
        return f"{value:,}"

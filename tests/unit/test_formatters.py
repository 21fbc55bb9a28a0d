"""
Unit tests for display formatters and embed presets.
"""

from datetime import datetime, timezone

import discord
import pytest

from forgecord.ui.embeds import EmbedColors, EmbedPresets
from forgecord.ui.formatters import Mention, Strings, Timestamp, format_duration


@pytest.mark.unit
class TestFormatDuration:
    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [
            (0, "0ms"),
            (0.25, "250ms"),
            (0.999, "999ms"),
            (1, "1.0s"),
            (12.5, "12.5s"),
            (59.9, "59.9s"),
            (60, "1m"),
            (90, "1m 30s"),
            (303, "5m 3s"),
            (3600, "1h"),
            (7800, "2h 10m"),
        ],
    )
    def test_rules(self, seconds, expected):
        assert format_duration(seconds) == expected

    def test_negative_clamps_to_zero(self):
        assert format_duration(-3) == "0ms"


@pytest.mark.unit
class TestTimestamp:
    def test_seconds_and_milliseconds(self):
        assert Timestamp.relative(1_700_000_000) == "<t:1700000000:R>"
        assert Timestamp.relative(1_700_000_000_000) == "<t:1700000000:R>"

    def test_datetime(self):
        when = datetime(2025, 1, 15, 14, 30, tzinfo=timezone.utc)
        assert Timestamp.full(when) == f"<t:{int(when.timestamp())}:f>"

    def test_styles(self):
        assert Timestamp.time(1) == "<t:1:t>"
        assert Timestamp.time_long(1) == "<t:1:T>"
        assert Timestamp.date(1) == "<t:1:d>"
        assert Timestamp.date_long(1) == "<t:1:D>"
        assert Timestamp.full_long(1) == "<t:1:F>"
        assert Timestamp.unix(1.9) == 1


@pytest.mark.unit
class TestMention:
    def test_markup(self):
        assert Mention.user(1) == "<@1>"
        assert Mention.channel(2) == "<#2>"
        assert Mention.role(3) == "<@&3>"
        assert Mention.command("ban", 4) == "</ban:4>"
        assert Mention.emoji("wave", 5) == "<:wave:5>"
        assert Mention.emoji("dance", 6, animated=True) == "<a:dance:6>"


@pytest.mark.unit
class TestStrings:
    def test_truncate(self):
        assert Strings.truncate("Hello world", 8) == "Hello w…"
        assert Strings.truncate("short", 8) == "short"

    def test_codeblock(self):
        assert Strings.codeblock("x = 1", "py") == "```py\nx = 1\n```"

    def test_chunk_prefers_last_newline(self):
        assert Strings.chunk("aaaa\nbbbb\ncc", 9) == ["aaaa\nbbbb", "cc"]

    def test_chunk_hard_split_without_newline(self):
        assert Strings.chunk("abcdefgh", 3) == ["abc", "def", "gh"]

    def test_chunk_short_text(self):
        assert Strings.chunk("hi") == ["hi"]
        assert Strings.chunk("") == []

    def test_plural(self):
        assert Strings.plural(1, "page") == "page"
        assert Strings.plural(2, "page") == "pages"
        assert Strings.plural(0, "entry", "entries") == "entries"

    def test_escape_markdown(self):
        assert Strings.escape_markdown("*bold* _x_") == r"\*bold\* \_x\_"

    def test_format_number(self):
        assert Strings.format_number(1234567) == "1,234,567"


@pytest.mark.unit
class TestEmbedPresets:
    def test_success_preset(self):
        embed = EmbedPresets.success("Done!", "The user was banned.")
        assert isinstance(embed, discord.Embed)
        assert embed.title == "✅ Done!"
        assert embed.description == "The user was banned."
        assert embed.colour.value == EmbedColors.SUCCESS

    def test_error_preset_without_description(self):
        embed = EmbedPresets.error("Failed")
        assert embed.title == "❌ Failed"
        assert embed.description is None

    def test_extras_are_applied(self):
        embed = EmbedPresets.info(
            "Stats",
            fields=[{"name": "Users", "value": "10"}, {"name": "Bans", "value": "2", "inline": False}],
            footer={"text": "forgecord"},
            timestamp=True,
            author={"name": "Mod"},
        )
        assert [field.name for field in embed.fields] == ["Users", "Bans"]
        assert embed.fields[1].inline is False
        assert embed.footer.text == "forgecord"
        assert embed.timestamp is not None
        assert embed.author.name == "Mod"

    def test_blank(self):
        assert EmbedPresets.blank().colour.value == EmbedColors.BLANK

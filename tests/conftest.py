"""
Pytest configuration and fixtures for the forgecord test suite.

Purpose
-------
Centralized fixtures for unit tests (mocked discord.py objects) and
integration tests (Redis via testcontainers).

Architecture Notes
------------------
- Unit tests use mocks: interactions, messages, channels and clients are
  MagicMock/AsyncMock objects shaped like their discord.py counterparts.
- Views need a running event loop, so view tests are async.
- Time-dependent code takes an injectable clock; ``FakeClock`` drives it.
- Integration tests use testcontainers and skip when docker is unavailable.
"""

from __future__ import annotations

import os
from typing import Any, Generator, Optional

import discord
import pytest

# ============================================================================
# PYTEST CONFIGURATION
# ============================================================================


def pytest_configure(config):
    """Configure pytest environment."""
    os.environ["ENVIRONMENT"] = "testing"
    os.environ["LOG_LEVEL"] = "DEBUG"


# ============================================================================
# HELPERS
# ============================================================================


class FakeClock:
    """Manually advanced clock for cooldown tests (seconds)."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_http_exception(
    status: int,
    code: int = 0,
    message: str = "",
    reason: str = "Error",
) -> discord.HTTPException:
    """Build a discord.HTTPException the way discord.py does from a JSON error body."""
    response = type("FakeResponse", (), {"status": status, "reason": reason})()
    return discord.HTTPException(response, {"code": code, "message": message})


def find_button(view: discord.ui.View, custom_id: str) -> discord.ui.Button:
    for child in view.children:
        if isinstance(child, discord.ui.Button) and child.custom_id == custom_id:
            return child
    raise AssertionError(f"no button with custom_id {custom_id!r}")


async def press(view: discord.ui.View, custom_id: str, interaction) -> None:
    """Click a button the way discord.py dispatches it: checks, then callback."""
    await view._scheduled_task(find_button(view, custom_id), interaction)


# ============================================================================
# DISCORD.PY MOCK FIXTURES
# ============================================================================


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def mock_message(mocker):
    """
    Mock rendered message.

    Scope: function
    Uses: Views that edit the message they are bound to
    """
    message = mocker.MagicMock(spec_set=["id", "edit"])
    message.id = 555000111
    message.edit = mocker.AsyncMock()
    return message


@pytest.fixture
def make_interaction(mocker, mock_message):
    """
    Factory for mock interactions.

    Usage:
        interaction = make_interaction(user_id=1, custom_id="forge_page_next")
    """

    def factory(
        user_id: int = 987654321,
        custom_id: Optional[str] = None,
        guild_id: Optional[int] = 111222333,
        channel_id: int = 444555666,
        responded: bool = False,
    ):
        interaction = mocker.MagicMock()
        interaction.user.id = user_id
        interaction.guild_id = guild_id
        interaction.channel_id = channel_id
        interaction.data = {"custom_id": custom_id} if custom_id else {}

        interaction.response.is_done = mocker.MagicMock(return_value=responded)
        interaction.response.send_message = mocker.AsyncMock()
        interaction.response.edit_message = mocker.AsyncMock()
        interaction.response.defer = mocker.AsyncMock()
        interaction.original_response = mocker.AsyncMock(return_value=mock_message)
        interaction.edit_original_response = mocker.AsyncMock(return_value=mock_message)
        interaction.followup.send = mocker.AsyncMock()
        return interaction

    return factory


@pytest.fixture
def mock_interaction(make_interaction):
    return make_interaction()


@pytest.fixture
def mock_channel(mocker, mock_message):
    """
    Mock messageable channel.

    Scope: function
    Uses: Paginator.send
    """
    channel = mocker.MagicMock()
    channel.send = mocker.AsyncMock(return_value=mock_message)
    return channel


@pytest.fixture
def mock_client(mocker):
    """
    Mock logged-in discord.py client.

    Scope: function
    Uses: ForgeRest, REST managers, WebhookSender
    """
    client = mocker.MagicMock()
    client.http.token = "test-token"
    client.http.request = mocker.AsyncMock(return_value={})
    client.application_id = 424242
    return client


@pytest.fixture
def mock_bot(mocker):
    """
    Mock bot with listener registration.

    Scope: function
    Uses: InteractionRouter.attach
    """
    bot = mocker.MagicMock()
    bot.add_listener = mocker.MagicMock()
    return bot


# ============================================================================
# TESTCONTAINERS FIXTURES (Integration Tests)
# ============================================================================


@pytest.fixture(scope="session")
def redis_container() -> Generator[Any, None, None]:
    """
    Start Redis testcontainer for integration tests.

    Scope: session (container persists across all tests)
    Uses: RedisCooldownStore tests
    """
    redis_module = pytest.importorskip("testcontainers.redis")

    container = redis_module.RedisContainer(image="redis:7-alpine")
    try:
        container.start()
    except Exception as exc:
        pytest.skip(f"docker unavailable: {exc}")

    yield container

    container.stop()

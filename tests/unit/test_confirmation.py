"""
Unit tests for ConfirmationManager.

Tests owner-only resolution, single outcome per session, timeout handling
and nonce isolation between concurrent prompts.
"""

import asyncio

import discord
import pytest

from forgecord.core.exceptions import ConfirmationTimedOutError
from forgecord.ui.views.confirmation import (
    ConfirmationConfig,
    ConfirmationManager,
    ConfirmationView,
)
from tests.conftest import find_button, make_http_exception, press

OWNER_ID = 987654321


async def rendered_view(interaction) -> ConfirmationView:
    """Wait until ``ask`` has rendered its prompt and return the view."""
    for _ in range(50):
        for call in (
            interaction.response.send_message,
            interaction.edit_original_response,
        ):
            if call.await_count:
                return call.call_args.kwargs["view"]
        await asyncio.sleep(0)
    raise AssertionError("confirmation was never rendered")


async def click(view, make_interaction, custom_id, user_id=OWNER_ID):
    interaction = make_interaction(user_id=user_id, custom_id=custom_id)
    await press(view, custom_id, interaction)
    return interaction


@pytest.fixture
def confirm():
    return ConfirmationManager()


@pytest.mark.ui
class TestAsk:
    async def test_prompt_rendering(self, confirm, mock_interaction, mock_message):
        task = asyncio.create_task(confirm.ask(mock_interaction, content="Sure?"))
        view = await rendered_view(mock_interaction)

        mock_interaction.response.send_message.assert_awaited_once_with(
            content="Sure?", embeds=[], view=view, ephemeral=True
        )
        assert view.message is mock_message
        assert view.session_timeout == 30
        assert view.timeout is None
        assert view.confirm_id == f"forge_confirm_yes_{view.nonce}"
        assert view.cancel_id == f"forge_confirm_no_{view.nonce}"

        confirm_button = find_button(view, view.confirm_id)
        assert confirm_button.label == "Confirm"
        assert confirm_button.style is discord.ButtonStyle.danger
        assert find_button(view, view.cancel_id).style is discord.ButtonStyle.secondary

        view.stop()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    async def test_confirm_resolves_true(self, confirm, mock_interaction, make_interaction):
        task = asyncio.create_task(confirm.ask(mock_interaction, content="Sure?"))
        view = await rendered_view(mock_interaction)

        owner_click = await click(view, make_interaction, view.confirm_id)

        assert await task is True
        owner_click.response.edit_message.assert_awaited_once_with(
            content="✅ Confirmed.", embeds=[], view=None
        )

    async def test_cancel_resolves_false(self, confirm, mock_interaction, make_interaction):
        task = asyncio.create_task(confirm.ask(mock_interaction))
        view = await rendered_view(mock_interaction)

        owner_click = await click(view, make_interaction, view.cancel_id)

        assert await task is False
        owner_click.response.edit_message.assert_awaited_once_with(
            content="❌ Cancelled.", embeds=[], view=None
        )

    async def test_already_responded_edits_original(self, confirm, make_interaction):
        interaction = make_interaction(responded=True)
        task = asyncio.create_task(confirm.ask(interaction, content="Sure?"))
        view = await rendered_view(interaction)

        interaction.response.send_message.assert_not_awaited()
        await click(view, make_interaction, view.confirm_id)
        assert await task is True

    async def test_overrides_apply_per_call(self, confirm, mock_interaction):
        task = asyncio.create_task(
            confirm.ask(mock_interaction, timeout=5, ephemeral=False, confirm_label="Ban")
        )
        view = await rendered_view(mock_interaction)

        assert view.session_timeout == 5
        assert find_button(view, view.confirm_id).label == "Ban"
        assert mock_interaction.response.send_message.call_args.kwargs["ephemeral"] is False
        assert confirm.defaults.timeout == 30

        view.stop()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    async def test_unknown_override_rejected(self, confirm, mock_interaction):
        with pytest.raises(TypeError):
            await confirm.ask(mock_interaction, colour="red")


@pytest.mark.ui
class TestSingleOutcome:
    async def test_non_owner_click_does_not_resolve(self, confirm, mock_interaction, make_interaction):
        task = asyncio.create_task(confirm.ask(mock_interaction))
        view = await rendered_view(mock_interaction)
        deadline = view.deadline

        stranger = await click(view, make_interaction, view.confirm_id, user_id=1)

        stranger.response.send_message.assert_awaited_once_with(
            "❌ This confirmation is not for you.", ephemeral=True
        )
        stranger.response.edit_message.assert_not_awaited()
        assert not task.done()
        assert view.finished is False
        assert view.deadline == deadline

        await click(view, make_interaction, view.cancel_id)
        assert await task is False

    async def test_second_click_is_acknowledged_and_ignored(
        self, confirm, mock_interaction, make_interaction
    ):
        task = asyncio.create_task(confirm.ask(mock_interaction))
        view = await rendered_view(mock_interaction)

        await click(view, make_interaction, view.confirm_id)
        late = await click(view, make_interaction, view.cancel_id)

        assert await task is True
        late.response.defer.assert_awaited_once()
        late.response.edit_message.assert_not_awaited()

    async def test_timeout_after_click_is_noop(self, confirm, mock_interaction, make_interaction, mock_message):
        task = asyncio.create_task(confirm.ask(mock_interaction))
        view = await rendered_view(mock_interaction)

        await click(view, make_interaction, view.confirm_id)
        await view.on_timeout()

        assert await task is True
        mock_message.edit.assert_not_awaited()

    async def test_update_reply_disabled_defers(self, mock_interaction, make_interaction):
        confirm = ConfirmationManager(ConfirmationConfig(update_reply=False))
        task = asyncio.create_task(confirm.ask(mock_interaction))
        view = await rendered_view(mock_interaction)

        owner_click = await click(view, make_interaction, view.confirm_id)

        assert await task is True
        owner_click.response.defer.assert_awaited_once()
        owner_click.response.edit_message.assert_not_awaited()


@pytest.mark.ui
class TestTimeout:
    async def test_timeout_raises_and_updates(self, confirm, mock_interaction, mock_message):
        task = asyncio.create_task(confirm.ask(mock_interaction))
        view = await rendered_view(mock_interaction)

        await view.on_timeout()

        with pytest.raises(ConfirmationTimedOutError):
            await task
        mock_message.edit.assert_awaited_once_with(content="⏳ Timed out.", embeds=[], view=None)

    async def test_click_after_timeout_is_ignored(self, confirm, mock_interaction, make_interaction):
        task = asyncio.create_task(confirm.ask(mock_interaction))
        view = await rendered_view(mock_interaction)

        await view.on_timeout()
        late = await click(view, make_interaction, view.confirm_id)

        with pytest.raises(ConfirmationTimedOutError):
            await task
        late.response.defer.assert_awaited_once()

    async def test_timeout_edit_failure_still_raises(self, confirm, mock_interaction, mock_message):
        mock_message.edit.side_effect = make_http_exception(404, 10008, "Unknown Message")
        task = asyncio.create_task(confirm.ask(mock_interaction))
        view = await rendered_view(mock_interaction)

        await view.on_timeout()

        with pytest.raises(ConfirmationTimedOutError):
            await task

    async def test_deadline_resolves_without_clicks(self, confirm, mock_interaction, mock_message):
        with pytest.raises(ConfirmationTimedOutError):
            await asyncio.wait_for(confirm.ask(mock_interaction, timeout=0.01), timeout=2)

        mock_message.edit.assert_awaited_once_with(content="⏳ Timed out.", embeds=[], view=None)

    async def test_deadline_is_fixed_from_render(self, confirm, mock_interaction, make_interaction):
        task = asyncio.create_task(confirm.ask(mock_interaction, timeout=60))
        view = await rendered_view(mock_interaction)
        deadline = view.deadline

        assert deadline == pytest.approx(asyncio.get_running_loop().time() + 60, abs=1)
        await click(view, make_interaction, view.cancel_id, user_id=1)
        assert view.deadline == deadline

        await click(view, make_interaction, view.confirm_id)
        assert await task is True
        assert view.deadline is None


@pytest.mark.ui
async def test_concurrent_prompts_do_not_cross_resolve(confirm, make_interaction):
    first_interaction = make_interaction()
    second_interaction = make_interaction()

    first = asyncio.create_task(confirm.ask(first_interaction))
    second = asyncio.create_task(confirm.ask(second_interaction))
    first_view = await rendered_view(first_interaction)
    second_view = await rendered_view(second_interaction)

    assert first_view.nonce != second_view.nonce

    # A click carrying the second prompt's id, delivered to the first view.
    stray = make_interaction(custom_id=second_view.confirm_id)
    await find_button(first_view, first_view.confirm_id).callback(stray)
    assert not first.done()

    await click(second_view, make_interaction, second_view.confirm_id)
    assert await second is True
    assert not first.done()

    await click(first_view, make_interaction, first_view.cancel_id)
    assert await first is False

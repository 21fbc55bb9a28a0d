"""
Unit tests for the REST endpoint managers.

Tests client-side validation (which must reject before any HTTP call) and
the routes/bodies sent for each endpoint.
"""

import pytest

from forgecord.core.exceptions import ErrorCode, InvalidFormBodyError, NotReadyError, RestError
from forgecord.managers import (
    MonetizationManager,
    OnboardingManager,
    PollAnswer,
    PollManager,
    SoundboardManager,
    SuperReactionsManager,
    VoiceEffectsManager,
)


def last_call(mock_client):
    call = mock_client.http.request.call_args
    return call.args[0], call.kwargs


@pytest.mark.rest
class TestSoundboard:
    async def test_invalid_volume_rejected_before_request(self, mock_client):
        soundboard = SoundboardManager(mock_client)

        with pytest.raises(RestError) as exc_info:
            await soundboard.create_sound(1, name="horn", sound="data:,", volume=1.5)

        assert exc_info.value.code is ErrorCode.SOUNDBOARD_INVALID_VOLUME
        mock_client.http.request.assert_not_awaited()

    async def test_edit_volume_validated(self, mock_client):
        with pytest.raises(RestError):
            await SoundboardManager(mock_client).edit_sound(1, 2, volume=-0.1)

    async def test_name_and_sound_required(self, mock_client):
        with pytest.raises(InvalidFormBodyError):
            await SoundboardManager(mock_client).create_sound(1, name="", sound="data:,")

    async def test_create_defaults_volume(self, mock_client):
        await SoundboardManager(mock_client).create_sound(1, name="horn", sound="data:,", reason="fun")

        route, kwargs = last_call(mock_client)
        assert route.method == "POST"
        assert route.url.endswith("/guilds/1/soundboard-sounds")
        assert kwargs["json"]["volume"] == 1
        assert kwargs["reason"] == "fun"

    async def test_guild_sounds_unwraps_items(self, mock_client):
        mock_client.http.request.return_value = {"items": [{"sound_id": "1"}]}
        assert await SoundboardManager(mock_client).get_guild_sounds(1) == [{"sound_id": "1"}]

    async def test_edit_sends_only_given_fields(self, mock_client):
        await SoundboardManager(mock_client).edit_sound(1, 2, volume=0.5)
        _, kwargs = last_call(mock_client)
        assert kwargs["json"] == {"volume": 0.5}


@pytest.mark.rest
class TestPolls:
    async def test_too_many_answers(self, mock_client):
        with pytest.raises(RestError) as exc_info:
            await PollManager(mock_client).create(1, question="Q", answers=[str(n) for n in range(11)])

        assert exc_info.value.code is ErrorCode.POLL_TOO_MANY_ANSWERS
        mock_client.http.request.assert_not_awaited()

    @pytest.mark.parametrize("duration", [0, 169])
    async def test_duration_bounds(self, mock_client, duration):
        with pytest.raises(RestError) as exc_info:
            await PollManager(mock_client).create(1, question="Q", answers=["a"], duration=duration)

        assert exc_info.value.code is ErrorCode.POLL_INVALID_DURATION

    async def test_question_and_answers_required(self, mock_client):
        polls = PollManager(mock_client)
        with pytest.raises(InvalidFormBodyError):
            await polls.create(1, question="", answers=["a"])
        with pytest.raises(InvalidFormBodyError):
            await polls.create(1, question="Q", answers=[])

    async def test_create_body(self, mock_client):
        await PollManager(mock_client).create(
            5,
            question="Best language?",
            answers=["Python", PollAnswer("Rust", emoji_name="🦀")],
            duration=168,
        )

        route, kwargs = last_call(mock_client)
        assert route.url.endswith("/channels/5/messages")
        poll = kwargs["json"]["poll"]
        assert "content" not in kwargs["json"]
        assert poll["question"] == {"text": "Best language?"}
        assert poll["answers"] == [
            {"poll_media": {"text": "Python"}},
            {"poll_media": {"text": "Rust", "emoji": {"name": "🦀"}}},
        ]
        assert poll["duration"] == 168
        assert poll["allow_multiselect"] is False

    async def test_answer_voters_query(self, mock_client):
        await PollManager(mock_client).get_answer_voters(1, 2, 3, limit=25)

        route, kwargs = last_call(mock_client)
        assert route.url.endswith("/channels/1/polls/2/answers/3")
        assert kwargs["params"] == {"limit": 25}


@pytest.mark.rest
class TestMonetization:
    async def test_requires_application_id(self, mock_client):
        mock_client.application_id = None
        with pytest.raises(NotReadyError):
            await MonetizationManager(mock_client).get_skus()

    async def test_entitlement_query(self, mock_client):
        await MonetizationManager(mock_client).get_entitlements(
            user_id=7, sku_ids=[1, 2], exclude_ended=True
        )

        route, kwargs = last_call(mock_client)
        assert route.url.endswith("/applications/424242/entitlements")
        assert kwargs["params"] == {"user_id": 7, "sku_ids": "1,2", "exclude_ended": "true"}

    async def test_consume(self, mock_client):
        await MonetizationManager(mock_client).consume_entitlement(99)

        route, _ = last_call(mock_client)
        assert route.method == "POST"
        assert route.url.endswith("/applications/424242/entitlements/99/consume")

    async def test_sku_subscriptions_not_application_scoped(self, mock_client):
        mock_client.application_id = None
        await MonetizationManager(mock_client).get_subscription(3, 4)

        route, _ = last_call(mock_client)
        assert route.url.endswith("/skus/3/subscriptions/4")


@pytest.mark.rest
class TestOnboardingVoiceReactions:
    async def test_onboarding_edit_sends_only_given_fields(self, mock_client):
        await OnboardingManager(mock_client).edit(1, enabled=True, default_channel_ids=[10, 11])

        route, kwargs = last_call(mock_client)
        assert route.method == "PUT"
        assert kwargs["json"] == {"enabled": True, "default_channel_ids": ["10", "11"]}

    async def test_voice_effect_clear(self, mock_client):
        await VoiceEffectsManager(mock_client).clear_effect(8)

        route, kwargs = last_call(mock_client)
        assert route.url.endswith("/channels/8/voice-effects")
        assert kwargs["json"] == {"effect_id": None}

    async def test_burst_reactors_query_type(self, mock_client):
        await SuperReactionsManager(mock_client).get_burst_reactors(1, 2, "🔥", limit=10)

        _, kwargs = last_call(mock_client)
        assert kwargs["params"] == {"type": 1, "limit": 10}

    async def test_reaction_summary(self, mock_client):
        mock_client.http.request.return_value = {"id": "2", "reactions": [{"count": 3}]}
        assert await SuperReactionsManager(mock_client).get_reaction_summary(1, 2) == [{"count": 3}]

    async def test_reaction_summary_without_reactions(self, mock_client):
        mock_client.http.request.return_value = {"id": "2"}
        assert await SuperReactionsManager(mock_client).get_reaction_summary(1, 2) == []

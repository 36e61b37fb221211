"""Tests for channel resolution."""

import pytest
from game_night_fakes import voice_channel

from core.game_nights.resolution import (
    NOT_GAME_NIGHT_MESSAGE,
    NOT_IN_VOICE_MESSAGE,
    NOT_VOICE_MESSAGE,
    UNRESOLVED_CHANNEL_MESSAGE,
    VOICE_STATE_ERROR_MESSAGE,
    InvalidChannel,
    LookupFailed,
    NotInVoice,
    Resolved,
    get_game_night_channels,
    resolution_failure_message,
    resolve_channel,
)

VOICE_STATE_PATH = r"guilds/100/voice-states/1000"


class TestResolveExplicitChannel:
    @pytest.mark.asyncio
    async def test_resolved_game_night_channel(self, make_ctx, fake_discord):
        ctx = make_ctx(
            "lock",
            options={"channel": "42"},
            resolved={"channels": {"42": voice_channel("42")}},
        )

        result = await resolve_channel(ctx, "42")

        assert isinstance(result, Resolved)
        assert result.channel.id == "42"
        # No lookup needed for an explicit channel
        assert fake_discord.requests == []

    @pytest.mark.asyncio
    async def test_missing_resolved_data(self, make_ctx):
        ctx = make_ctx("lock", options={"channel": "42"})

        result = await resolve_channel(ctx, "42")

        assert result == InvalidChannel(UNRESOLVED_CHANNEL_MESSAGE)

    @pytest.mark.asyncio
    async def test_text_channel_rejected(self, make_ctx):
        ctx = make_ctx(
            "lock",
            options={"channel": "42"},
            resolved={"channels": {"42": voice_channel("42", channel_type=0)}},
        )

        result = await resolve_channel(ctx, "42")

        assert result == InvalidChannel(NOT_VOICE_MESSAGE)

    @pytest.mark.asyncio
    async def test_voice_channel_outside_category_rejected(self, make_ctx):
        ctx = make_ctx(
            "lock",
            options={"channel": "42"},
            resolved={"channels": {"42": voice_channel("42", parent_id="999")}},
        )

        result = await resolve_channel(ctx, "42")

        assert result == InvalidChannel(NOT_GAME_NIGHT_MESSAGE)


class TestResolveCurrentVoiceChannel:
    @pytest.mark.asyncio
    async def test_uses_invoker_voice_state(self, make_ctx, fake_discord):
        fake_discord.on("GET", VOICE_STATE_PATH, {"user_id": "1000", "channel_id": "42"})
        fake_discord.on("GET", "channels/42", voice_channel("42", overwrites=[]))
        ctx = make_ctx("lock")

        result = await resolve_channel(ctx, None)

        assert isinstance(result, Resolved)
        assert result.channel.permission_overwrites == []

    @pytest.mark.asyncio
    async def test_unknown_voice_state_means_not_in_voice(self, make_ctx, fake_discord):
        fake_discord.on(
            "GET",
            VOICE_STATE_PATH,
            {"message": "Unknown Voice State", "code": 10065},
            status=404,
        )
        ctx = make_ctx("lock")

        result = await resolve_channel(ctx, None)

        assert isinstance(result, NotInVoice)

    @pytest.mark.asyncio
    async def test_null_channel_means_not_in_voice(self, make_ctx, fake_discord):
        fake_discord.on("GET", VOICE_STATE_PATH, {"user_id": "1000", "channel_id": None})
        ctx = make_ctx("lock")

        result = await resolve_channel(ctx, None)

        assert isinstance(result, NotInVoice)

    @pytest.mark.asyncio
    async def test_not_in_voice_paths_share_one_message(self, make_ctx, fake_discord):
        """Missing state and an empty state read the same to the user."""
        fake_discord.on("GET", VOICE_STATE_PATH, status=404, json_body={"code": 10065})
        missing = await resolve_channel(make_ctx("lock"), None)

        fake_discord.on("GET", VOICE_STATE_PATH, {"user_id": "1000", "channel_id": None})
        empty = await resolve_channel(make_ctx("lock"), None)

        assert resolution_failure_message(missing) == NOT_IN_VOICE_MESSAGE
        assert resolution_failure_message(empty) == NOT_IN_VOICE_MESSAGE

    @pytest.mark.asyncio
    async def test_other_voice_state_errors_fail_lookup(self, make_ctx, fake_discord):
        fake_discord.on("GET", VOICE_STATE_PATH, {"message": "Server Error"}, status=500)
        ctx = make_ctx("lock")

        result = await resolve_channel(ctx, None)

        assert isinstance(result, LookupFailed)
        assert resolution_failure_message(result) == VOICE_STATE_ERROR_MESSAGE

    @pytest.mark.asyncio
    async def test_channel_fetch_failure(self, make_ctx, fake_discord):
        fake_discord.on("GET", VOICE_STATE_PATH, {"user_id": "1000", "channel_id": "42"})
        fake_discord.on("GET", "channels/42", {"message": "Missing Access"}, status=403)
        ctx = make_ctx("lock")

        result = await resolve_channel(ctx, None)

        assert resolution_failure_message(result) == UNRESOLVED_CHANNEL_MESSAGE

    @pytest.mark.asyncio
    async def test_current_channel_outside_category(self, make_ctx, fake_discord):
        fake_discord.on("GET", VOICE_STATE_PATH, {"user_id": "1000", "channel_id": "42"})
        fake_discord.on("GET", "channels/42", voice_channel("42", parent_id="999"))
        ctx = make_ctx("lock")

        result = await resolve_channel(ctx, None)

        assert result == InvalidChannel(NOT_GAME_NIGHT_MESSAGE)


class TestGetGameNightChannels:
    @pytest.mark.asyncio
    async def test_filters_to_voice_channels_in_category(self, make_ctx, fake_discord):
        fake_discord.on(
            "GET",
            "guilds/100/channels",
            [
                voice_channel("1"),
                voice_channel("2", parent_id="999"),
                voice_channel("3", channel_type=0),
                voice_channel("4", position=3),
                {"id": "200", "type": 4, "name": "Game Night"},
            ],
        )

        channels = await get_game_night_channels(make_ctx("create-channel"))

        assert [c.id for c in channels] == ["1", "4"]


def test_success_has_no_failure_message():
    assert resolution_failure_message(Resolved(channel=None)) is None

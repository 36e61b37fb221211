"""
Channel resolution shared by every command that targets one channel.

A command either names a channel explicitly or implicitly means "the voice
channel I'm in". resolve_channel() turns both into a validated game night
channel or a tagged reason why it couldn't.
"""

import logging
from dataclasses import dataclass

from core.config import GameNightConfig
from core.discord_outbound import (
    Channel,
    DiscordHTTPError,
    UNKNOWN_VOICE_STATE,
    get_channel,
    get_voice_state,
    list_guild_channels,
)

from .context import CommandContext

logger = logging.getLogger(__name__)

NOT_IN_VOICE_MESSAGE = (
    "❌ You must be in a voice channel to use this command, or specify a channel."
)
UNRESOLVED_CHANNEL_MESSAGE = "❌ Error resolving channel."
NOT_VOICE_MESSAGE = "❌ Channel must be a voice channel."
NOT_GAME_NIGHT_MESSAGE = "❌ Channel must be a game night channel."
VOICE_STATE_ERROR_MESSAGE = "❌ Error getting user voice state."


@dataclass
class Resolved:
    channel: Channel


@dataclass
class NotInVoice:
    pass


@dataclass
class InvalidChannel:
    reason: str


@dataclass
class LookupFailed:
    error: Exception
    message: str = VOICE_STATE_ERROR_MESSAGE


ChannelResolution = Resolved | NotInVoice | InvalidChannel | LookupFailed


def is_game_night_channel(channel: Channel, config: GameNightConfig) -> bool:
    """A game night channel is a voice channel inside the game night category."""
    return channel.is_voice and channel.parent_id == config.game_night_category_id


def validate_game_night_channel(
    channel: Channel | None, config: GameNightConfig
) -> str | None:
    """Return the failure message for channel, or None if it is a game night channel."""
    if channel is None:
        return UNRESOLVED_CHANNEL_MESSAGE
    if not channel.is_voice:
        return NOT_VOICE_MESSAGE
    if channel.parent_id != config.game_night_category_id:
        return NOT_GAME_NIGHT_MESSAGE
    return None


async def get_game_night_channels(ctx: CommandContext) -> list[Channel]:
    """Fetch the guild's current game night channels."""
    channels = await list_guild_channels(ctx.client, ctx.config.guild_id)
    return [c for c in channels if is_game_night_channel(c, ctx.config)]


def _is_voice_state_missing(error: DiscordHTTPError) -> bool:
    return error.status == 404 or error.code == UNKNOWN_VOICE_STATE


async def resolve_channel(
    ctx: CommandContext,
    channel_id: str | None,
) -> ChannelResolution:
    """
    Resolve the channel a command should act on.

    With channel_id, the record comes from the interaction's resolved data.
    Without it, the invoker's current voice channel is looked up and fetched.
    Either way the result must be a game night channel.
    """
    if channel_id:
        channel = ctx.interaction.resolve_channel(channel_id)
    else:
        try:
            voice_state = await get_voice_state(
                ctx.client, ctx.config.guild_id, ctx.invoker_id
            )
        except DiscordHTTPError as e:
            if _is_voice_state_missing(e):
                return NotInVoice()
            logger.error(f"Error getting voice state for {ctx.invoker_id}: {e}")
            return LookupFailed(e)

        if voice_state is None or not voice_state.channel_id:
            return NotInVoice()

        try:
            channel = await get_channel(ctx.client, voice_state.channel_id)
        except DiscordHTTPError as e:
            logger.error(f"Error fetching channel {voice_state.channel_id}: {e}")
            return LookupFailed(e, UNRESOLVED_CHANNEL_MESSAGE)

    failure = validate_game_night_channel(channel, ctx.config)
    if failure:
        return InvalidChannel(failure)
    return Resolved(channel)


def resolution_failure_message(result: ChannelResolution) -> str | None:
    """User-facing text for a failed resolution, or None when it succeeded."""
    if isinstance(result, NotInVoice):
        return NOT_IN_VOICE_MESSAGE
    if isinstance(result, InvalidChannel):
        return result.reason
    if isinstance(result, LookupFailed):
        return result.message
    return None

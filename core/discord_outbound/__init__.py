"""Discord outbound operations - all Discord API calls go through here."""

from .channels import (
    create_voice_channel,
    delete_channel,
    get_channel,
    list_guild_channels,
    set_channel_overwrites,
    set_channel_user_limit,
)
from .http import DiscordHTTPError, DiscordRestClient
from .interactions import edit_original_response, overwrite_guild_commands, send_followup
from .members import (
    TARGET_USER_NOT_CONNECTED_TO_VOICE,
    UNKNOWN_VOICE_STATE,
    get_voice_state,
    move_member,
)
from .messages import MAX_MESSAGE_LENGTH, send_channel_message
from .models import Channel, ChannelOverwrite, OverwriteType, VoiceState

__all__ = [
    "DiscordRestClient",
    "DiscordHTTPError",
    "Channel",
    "ChannelOverwrite",
    "OverwriteType",
    "VoiceState",
    "list_guild_channels",
    "get_channel",
    "create_voice_channel",
    "set_channel_user_limit",
    "set_channel_overwrites",
    "delete_channel",
    "get_voice_state",
    "move_member",
    "UNKNOWN_VOICE_STATE",
    "TARGET_USER_NOT_CONNECTED_TO_VOICE",
    "send_channel_message",
    "MAX_MESSAGE_LENGTH",
    "edit_original_response",
    "send_followup",
    "overwrite_guild_commands",
]

# core/discord_outbound/members.py
from .http import DiscordRestClient
from .models import VoiceState

# JSON error codes from https://discord.com/developers/docs/topics/opcodes-and-status-codes
UNKNOWN_VOICE_STATE = 10065
TARGET_USER_NOT_CONNECTED_TO_VOICE = 40032


async def get_voice_state(
    client: DiscordRestClient,
    guild_id: str,
    user_id: str,
) -> VoiceState | None:
    """
    Fetch a member's voice state.

    Discord answers 404 (UNKNOWN_VOICE_STATE) when the member is not in voice;
    that surfaces as DiscordHTTPError for the caller to interpret.
    """
    data = await client.request("GET", f"guilds/{guild_id}/voice-states/{user_id}")
    if not data:
        return None
    return VoiceState.from_payload(data)


async def move_member(
    client: DiscordRestClient,
    guild_id: str,
    user_id: str,
    channel_id: str | None,
    reason: str | None = None,
) -> None:
    """Move a member to a voice channel, or disconnect them when channel_id is None."""
    await client.request(
        "PATCH",
        f"guilds/{guild_id}/members/{user_id}",
        json={"channel_id": channel_id},
        reason=reason,
    )

# core/discord_outbound/channels.py
from typing import Any

import discord

from .http import DiscordRestClient
from .models import Channel, ChannelOverwrite


async def list_guild_channels(
    client: DiscordRestClient,
    guild_id: str,
) -> list[Channel]:
    """Fetch every channel in a guild."""
    data = await client.request("GET", f"guilds/{guild_id}/channels")
    return [Channel.from_payload(c) for c in data]


async def get_channel(client: DiscordRestClient, channel_id: str) -> Channel:
    """Fetch a single channel."""
    data = await client.request("GET", f"channels/{channel_id}")
    return Channel.from_payload(data)


async def create_voice_channel(
    client: DiscordRestClient,
    guild_id: str,
    name: str,
    parent_id: str,
    user_limit: int,
    overwrites: list[ChannelOverwrite],
    position: int | None = None,
    reason: str | None = None,
) -> Channel:
    """Create a voice channel under a category."""
    payload: dict[str, Any] = {
        "name": name,
        "type": discord.ChannelType.voice.value,
        "parent_id": parent_id,
        "user_limit": user_limit,
        "permission_overwrites": [o.to_payload() for o in overwrites],
    }
    if position is not None:
        payload["position"] = position
    data = await client.request(
        "POST", f"guilds/{guild_id}/channels", json=payload, reason=reason
    )
    return Channel.from_payload(data)


async def set_channel_user_limit(
    client: DiscordRestClient,
    channel_id: str,
    limit: int,
    reason: str | None = None,
) -> Channel:
    """Change a voice channel's user limit (0 means unlimited)."""
    data = await client.request(
        "PATCH", f"channels/{channel_id}", json={"user_limit": limit}, reason=reason
    )
    return Channel.from_payload(data)


async def set_channel_overwrites(
    client: DiscordRestClient,
    channel_id: str,
    overwrites: list[ChannelOverwrite],
    reason: str | None = None,
) -> Channel:
    """
    Replace a channel's whole overwrite list.

    Discord has no per-entry patch here; entries left out are removed.
    """
    data = await client.request(
        "PATCH",
        f"channels/{channel_id}",
        json={"permission_overwrites": [o.to_payload() for o in overwrites]},
        reason=reason,
    )
    return Channel.from_payload(data)


async def delete_channel(
    client: DiscordRestClient,
    channel_id: str,
    reason: str | None = None,
) -> None:
    """Delete a channel."""
    await client.request("DELETE", f"channels/{channel_id}", reason=reason)

# core/discord_outbound/messages.py
from typing import Any

from .http import DiscordRestClient

# Discord rejects message content longer than this
MAX_MESSAGE_LENGTH = 2000

NO_MENTIONS = {"parse": [], "users": [], "roles": []}


async def send_channel_message(
    client: DiscordRestClient,
    channel_id: str,
    content: str,
    allow_mentions: bool = True,
) -> dict[str, Any]:
    """Send a message to a channel. Content is truncated to Discord's limit."""
    payload: dict[str, Any] = {"content": content[:MAX_MESSAGE_LENGTH], "embeds": []}
    if not allow_mentions:
        payload["allowed_mentions"] = NO_MENTIONS
    return await client.request("POST", f"channels/{channel_id}/messages", json=payload)

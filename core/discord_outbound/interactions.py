# core/discord_outbound/interactions.py
"""Interaction responses sent after the initial HTTP acknowledgement."""

from typing import Any

from .http import DiscordRestClient
from .messages import MAX_MESSAGE_LENGTH


async def edit_original_response(
    client: DiscordRestClient,
    application_id: str,
    token: str,
    content: str,
) -> dict[str, Any]:
    """Replace the deferred placeholder with the real reply."""
    return await client.request(
        "PATCH",
        f"webhooks/{application_id}/{token}/messages/@original",
        json={"content": content[:MAX_MESSAGE_LENGTH]},
    )


async def send_followup(
    client: DiscordRestClient,
    application_id: str,
    token: str,
    content: str,
) -> dict[str, Any]:
    """Send an additional message on an interaction that was already answered."""
    return await client.request(
        "POST",
        f"webhooks/{application_id}/{token}",
        json={"content": content[:MAX_MESSAGE_LENGTH]},
    )


async def overwrite_guild_commands(
    client: DiscordRestClient,
    application_id: str,
    guild_id: str | None,
    commands: list[dict[str, Any]],
) -> list[dict[str, Any]]:
    """
    Bulk-overwrite the application's slash commands.

    Guild commands update instantly; pass guild_id=None for global commands.
    """
    if guild_id:
        path = f"applications/{application_id}/guilds/{guild_id}/commands"
    else:
        path = f"applications/{application_id}/commands"
    return await client.request("PUT", path, json=commands)

"""
Discord interactions webhook.

Endpoints:
- POST /api/interactions - Signed interaction callbacks from Discord
"""

import json
import logging

import discord
from fastapi import APIRouter, BackgroundTasks, Depends, Header, HTTPException, Request

from core.config import GameNightConfig
from core.discord_outbound import DiscordRestClient
from core.game_nights import (
    CommandContext,
    Interaction,
    InteractionSignatureError,
    authorize_command,
    dispatch_command,
    verify_interaction_signature,
)
from core.game_nights.catalog import CommandCatalog
from core.game_nights.webhook_handler import (
    UNKNOWN_INTERACTION_MESSAGE,
    deferred_response,
    ephemeral_message,
    pong_response,
)
from core.settings_store import SettingsStore

from web_api.dependencies import (
    get_catalog,
    get_config,
    get_discord_client,
    get_settings_store,
)

router = APIRouter(prefix="/api/interactions", tags=["interactions"])

logger = logging.getLogger(__name__)


@router.post("")
async def interactions_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    x_signature_ed25519: str | None = Header(None),
    x_signature_timestamp: str | None = Header(None),
    config: GameNightConfig = Depends(get_config),
    client: DiscordRestClient = Depends(get_discord_client),
    store: SettingsStore = Depends(get_settings_store),
    catalog: CommandCatalog = Depends(get_catalog),
):
    """
    Handle an interaction from Discord.

    Pings are answered inline. Commands are authorized, acknowledged with an
    ephemeral deferred response, and run as a background task that edits the
    response when done.
    """
    body = await request.body()
    try:
        verify_interaction_signature(
            body, x_signature_ed25519, x_signature_timestamp, config.public_key
        )
    except InteractionSignatureError as e:
        logger.warning(f"Interaction signature verification failed: {e}")
        raise HTTPException(status_code=401, detail="Bad request signature.")

    try:
        payload = json.loads(body)
        if payload.get("type") == discord.InteractionType.ping.value:
            return pong_response()

        interaction = Interaction.from_payload(payload)

        if interaction.type != discord.InteractionType.application_command.value:
            logger.error(f"Unknown interaction type: {interaction.type}")
            return ephemeral_message(UNKNOWN_INTERACTION_MESSAGE)

        denial = authorize_command(interaction, config)
        if denial:
            logger.info(
                f"Rejected /{interaction.command_name} from guild {interaction.guild_id}"
            )
            return ephemeral_message(denial)

        ctx = CommandContext(
            config=config, client=client, store=store, interaction=interaction
        )
        background_tasks.add_task(dispatch_command, ctx, catalog)
        return deferred_response()
    except Exception as e:
        logger.exception(f"Error processing interaction: {e}")
        raise HTTPException(status_code=500, detail="Internal Server Error")

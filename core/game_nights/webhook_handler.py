"""Signature verification, authorization and initial responses for interaction webhooks."""

import logging
from typing import Any

import discord
from nacl.exceptions import BadSignatureError
from nacl.signing import VerifyKey

from core.config import GameNightConfig

from .interaction import Interaction
from .policy import ADMINISTRATOR, has_all

logger = logging.getLogger(__name__)

WRONG_GUILD_MESSAGE = "❌ This command can only be used in the game night server."
NOT_AUTHORIZED_MESSAGE = "❌ You do not have permission to use this command."
UNKNOWN_INTERACTION_MESSAGE = "❌ Unknown interaction type."

EPHEMERAL = discord.MessageFlags(ephemeral=True).value


class InteractionSignatureError(Exception):
    """Raised when interaction signature verification fails."""

    pass


def verify_interaction_signature(
    payload: bytes,
    signature: str | None,
    timestamp: str | None,
    public_key: str,
) -> None:
    """Verify Discord's Ed25519 signature over timestamp + body.

    Args:
        payload: Raw request body bytes
        signature: Value of X-Signature-Ed25519 header (hex)
        timestamp: Value of X-Signature-Timestamp header
        public_key: Application public key (hex)

    Raises:
        InteractionSignatureError: If headers are missing or the signature is invalid
    """
    if not signature or not timestamp:
        raise InteractionSignatureError("Missing signature headers")

    try:
        verify_key = VerifyKey(bytes.fromhex(public_key))
        verify_key.verify(timestamp.encode() + payload, bytes.fromhex(signature))
    except (BadSignatureError, ValueError) as e:
        raise InteractionSignatureError("Signature verification failed") from e


def authorize_command(interaction: Interaction, config: GameNightConfig) -> str | None:
    """
    Check the invocation may run.

    Returns:
        None if allowed, otherwise the denial message to show the user
    """
    if interaction.guild_id != config.guild_id:
        return WRONG_GUILD_MESSAGE

    member = interaction.member
    if member is None:
        return NOT_AUTHORIZED_MESSAGE
    if set(member.roles) & set(config.staff_role_ids):
        return None
    if has_all(member.permissions, ADMINISTRATOR):
        return None
    return NOT_AUTHORIZED_MESSAGE


def pong_response() -> dict[str, Any]:
    return {"type": discord.InteractionResponseType.pong.value}


def deferred_response() -> dict[str, Any]:
    """Ephemeral "thinking..." placeholder, replaced once the command finishes."""
    return {
        "type": discord.InteractionResponseType.deferred_channel_message.value,
        "data": {"flags": EPHEMERAL},
    }


def ephemeral_message(content: str) -> dict[str, Any]:
    return {
        "type": discord.InteractionResponseType.channel_message.value,
        "data": {"content": content, "flags": EPHEMERAL},
    }

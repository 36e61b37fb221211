"""/move - move (or disconnect) a member between game night channels."""

import logging

from core.discord_outbound import (
    DiscordHTTPError,
    TARGET_USER_NOT_CONNECTED_TO_VOICE,
    UNKNOWN_VOICE_STATE,
    get_channel,
    get_voice_state,
    move_member,
)

from ..catalog import CommandDefinition, user_option, voice_channel_option
from ..context import CommandContext
from ..resolution import validate_game_night_channel

logger = logging.getLogger(__name__)

USER_NOT_IN_VOICE_MESSAGE = "❌ User is not in voice."


def _is_not_in_voice(error: DiscordHTTPError) -> bool:
    return (
        error.code in (TARGET_USER_NOT_CONNECTED_TO_VOICE, UNKNOWN_VOICE_STATE)
        or error.status == 404
    )


async def move_command(ctx: CommandContext) -> str:
    user_id = ctx.interaction.get_option("user")
    member = ctx.interaction.resolve_member(user_id) if user_id else None
    if member is None:
        return "❌ Error resolving user."

    if set(member.roles) & set(ctx.config.staff_role_ids):
        return "❌ Staff cannot be moved."

    destination_id = ctx.interaction.get_option("channel")
    if destination_id:
        failure = validate_game_night_channel(
            ctx.interaction.resolve_channel(destination_id), ctx.config
        )
        if failure:
            return failure

    try:
        voice_state = await get_voice_state(
            ctx.client, ctx.config.guild_id, member.user_id
        )
    except DiscordHTTPError as e:
        if _is_not_in_voice(e):
            return USER_NOT_IN_VOICE_MESSAGE
        logger.error(f"Error fetching voice state for {member.user_id}: {e}")
        return "❌ Error fetching user voice state."

    if voice_state is None or not voice_state.channel_id:
        return USER_NOT_IN_VOICE_MESSAGE

    if destination_id and voice_state.channel_id == str(destination_id):
        return "✅ User is already in that channel."

    # Only members currently in a game night channel may be moved out of it
    try:
        current = await get_channel(ctx.client, voice_state.channel_id)
    except DiscordHTTPError as e:
        logger.error(f"Error fetching channel {voice_state.channel_id}: {e}")
        return "❌ Error fetching user channel."
    if current.parent_id != ctx.config.game_night_category_id:
        return "❌ User is not in a game night channel."

    action = f"moved {member.user_id}" if destination_id else f"disconnected {member.user_id}"
    try:
        await move_member(
            ctx.client,
            ctx.config.guild_id,
            member.user_id,
            str(destination_id) if destination_id else None,
            reason=ctx.audit_reason(action),
        )
    except DiscordHTTPError as e:
        if e.code == TARGET_USER_NOT_CONNECTED_TO_VOICE:
            return USER_NOT_IN_VOICE_MESSAGE
        logger.error(f"Error moving {member.user_id}: {e}")
        return "❌ Error moving user to channel."

    if destination_id:
        return f"✅ Moved <@{member.user_id}> to <#{destination_id}>."
    return f"✅ Disconnected <@{member.user_id}>."


MOVE = CommandDefinition(
    name="move",
    description="Move a user to a different channel.",
    handler=move_command,
    options=(
        user_option("user", "The user to move.", required=True),
        voice_channel_option(
            "channel",
            "The game night channel to move the user to. Leave blank to just disconnect them.",
        ),
    ),
)

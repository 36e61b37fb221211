"""/set-limit and /set-channel-limit."""

import logging

from core.discord_outbound import DiscordHTTPError, set_channel_user_limit
from core.settings_store import USER_LIMIT_KEY

from ..batch import run_bounded
from ..catalog import (
    CommandDefinition,
    boolean_option,
    integer_option,
    voice_channel_option,
)
from ..context import CommandContext
from ..resolution import (
    Resolved,
    get_game_night_channels,
    resolution_failure_message,
    resolve_channel,
)

logger = logging.getLogger(__name__)

MIN_USER_LIMIT = 0
MAX_USER_LIMIT = 99


async def set_limit_command(ctx: CommandContext) -> str:
    limit = ctx.interaction.get_option("limit")
    existing = ctx.interaction.get_option("existing", False)

    try:
        await ctx.store.put(USER_LIMIT_KEY, str(limit))
    except Exception as e:
        logger.error(f"Error setting user limit: {e}")
        return "❌ Error setting user limit."

    if not existing:
        return f"✅ User limit set to `{limit}`.\n✅ Existing channels were not updated."

    reason = ctx.audit_reason("set user limit for all game night channels")
    try:
        channels = await get_game_night_channels(ctx)
        await run_bounded(
            [
                lambda c=channel: set_channel_user_limit(
                    ctx.client, c.id, limit, reason=reason
                )
                for channel in channels
            ]
        )
    except DiscordHTTPError as e:
        logger.error(f"Error updating existing channels: {e}")
        return f"✅ User limit set to `{limit}`.\n❌ Error updating existing channels."

    return f"✅ User limit set to `{limit}`.\n✅ {len(channels)} channels updated."


async def set_channel_limit_command(ctx: CommandContext) -> str:
    limit = ctx.interaction.get_option("limit")
    result = await resolve_channel(ctx, ctx.interaction.get_option("channel"))
    if not isinstance(result, Resolved):
        return resolution_failure_message(result)

    channel = result.channel
    try:
        await set_channel_user_limit(
            ctx.client, channel.id, limit, reason=ctx.audit_reason("set channel limit")
        )
    except DiscordHTTPError as e:
        logger.error(f"Error setting user limit on {channel.id}: {e}")
        return "❌ Error setting user limit."

    return f"✅ User limit set to `{limit}` for <#{channel.id}>."


SET_LIMIT = CommandDefinition(
    name="set-limit",
    description="Set user limit for all game night channels.",
    handler=set_limit_command,
    options=(
        integer_option(
            "limit",
            "The user limit for new game night channels. 0 for infinite",
            required=True,
            min_value=MIN_USER_LIMIT,
            max_value=MAX_USER_LIMIT,
        ),
        boolean_option(
            "existing",
            "Whether to update existing game night channels. Default false.",
        ),
    ),
)

SET_CHANNEL_LIMIT = CommandDefinition(
    name="set-channel-limit",
    description="Set user limit for a specific game night channel.",
    handler=set_channel_limit_command,
    options=(
        integer_option(
            "limit",
            "The user limit for the game night channel. 0 for infinite",
            required=True,
            min_value=MIN_USER_LIMIT,
            max_value=MAX_USER_LIMIT,
        ),
        voice_channel_option(
            "channel",
            "The game night channel to set the limit for. Blank to default to user's current VC.",
        ),
    ),
)

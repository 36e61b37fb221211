"""/lock and /unlock - toggle whether the user role may connect to a channel."""

import logging
from functools import partial

from core.discord_outbound import DiscordHTTPError, get_channel, set_channel_overwrites

from ..catalog import CommandDefinition, voice_channel_option
from ..context import CommandContext
from ..policy import OverwriteNotFoundError, toggle_lock
from ..resolution import Resolved, resolution_failure_message, resolve_channel

logger = logging.getLogger(__name__)


async def lock_command(ctx: CommandContext, lock: bool) -> str:
    result = await resolve_channel(ctx, ctx.interaction.get_option("channel"))
    if not isinstance(result, Resolved):
        return resolution_failure_message(result)

    channel = result.channel
    # Resolved option data is a partial channel without overwrites
    if channel.permission_overwrites is None:
        try:
            channel = await get_channel(ctx.client, channel.id)
        except DiscordHTTPError as e:
            logger.error(f"Error fetching channel {channel.id}: {e}")
            return "❌ Error resolving channel."

    try:
        overwrites = toggle_lock(
            channel.permission_overwrites or [],
            ctx.config.effective_user_role_id,
            lock,
        )
    except OverwriteNotFoundError:
        return "❌ Error finding user overwrite."

    verb = "locked" if lock else "unlocked"
    try:
        await set_channel_overwrites(
            ctx.client,
            channel.id,
            overwrites,
            reason=ctx.audit_reason(f"{verb} game night channel"),
        )
    except DiscordHTTPError as e:
        logger.error(f"Error setting overwrites on {channel.id}: {e}")
        return f"❌ Error {'locking' if lock else 'unlocking'} channel."

    return f"✅ {verb.capitalize()} <#{channel.id}>."


LOCK = CommandDefinition(
    name="lock",
    description="Lock a game night channel.",
    handler=partial(lock_command, lock=True),
    options=(
        voice_channel_option(
            "channel",
            "The game night channel to lock. Blank to default to user's current VC.",
        ),
    ),
)

UNLOCK = CommandDefinition(
    name="unlock",
    description="Unlock a game night channel.",
    handler=partial(lock_command, lock=False),
    options=(
        voice_channel_option(
            "channel",
            "The game night channel to unlock. Blank to default to user's current VC.",
        ),
    ),
)

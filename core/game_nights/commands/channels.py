"""/create-channel, /create-channels, /delete-channel and /delete-all-channels."""

import logging

from core.discord_outbound import (
    Channel,
    DiscordHTTPError,
    TARGET_USER_NOT_CONNECTED_TO_VOICE,
    create_voice_channel,
    delete_channel,
    move_member,
)
from core.settings_store import USER_LIMIT_KEY

from ..batch import run_bounded
from ..catalog import (
    CommandDefinition,
    boolean_option,
    integer_option,
    string_option,
    voice_channel_option,
)
from ..context import CommandContext
from ..policy import build_channel_overwrites
from ..resolution import (
    Resolved,
    get_game_night_channels,
    resolution_failure_message,
    resolve_channel,
)

logger = logging.getLogger(__name__)

MAX_GAME_NIGHT_CHANNELS = 10
CHANNEL_PREFIX = "🎮"

LIMIT_NOT_SET_MESSAGE = "❌ User limit not set. Please run `/set-limit` first."
MAX_CHANNELS_MESSAGE = "❌ Maximum number of game night channels reached."
LIST_CHANNELS_ERROR_MESSAGE = "❌ Error getting existing channels."


async def _get_user_limit(ctx: CommandContext) -> int | None:
    value = await ctx.store.get(USER_LIMIT_KEY)
    if value is None:
        return None
    return int(value)


async def _move_invoker(ctx: CommandContext, channel: Channel) -> None:
    """Pull the invoker into a new channel. A user who isn't in voice is left alone."""
    try:
        await move_member(ctx.client, ctx.config.guild_id, ctx.invoker_id, channel.id)
    except DiscordHTTPError as e:
        if e.code == TARGET_USER_NOT_CONNECTED_TO_VOICE:
            return
        logger.error(f"Error moving {ctx.invoker_id} to channel {channel.id}: {e}")


def next_position(existing: list[Channel]) -> int:
    """Position after the last existing game night channel, or 0 when there are none."""
    if not existing:
        return 0
    return max(c.position for c in existing) + 1


async def create_channel_command(ctx: CommandContext) -> str:
    limit = await _get_user_limit(ctx)
    if limit is None:
        return LIMIT_NOT_SET_MESSAGE

    name = ctx.interaction.get_option("name")
    move = ctx.interaction.get_option("move", True)
    locked = ctx.interaction.get_option("locked", False)

    try:
        existing = await get_game_night_channels(ctx)
    except DiscordHTTPError as e:
        logger.error(f"Error getting existing channels: {e}")
        return LIST_CHANNELS_ERROR_MESSAGE
    if len(existing) >= MAX_GAME_NIGHT_CHANNELS:
        return MAX_CHANNELS_MESSAGE

    try:
        channel = await create_voice_channel(
            ctx.client,
            ctx.config.guild_id,
            name=f"{CHANNEL_PREFIX} {name}",
            parent_id=ctx.config.game_night_category_id,
            user_limit=limit,
            overwrites=build_channel_overwrites(ctx.config, locked=locked),
            reason=ctx.audit_reason("created game night channel"),
        )
    except DiscordHTTPError as e:
        logger.error(f"Error creating channel: {e}")
        return "❌ Error creating channel."

    if move:
        await _move_invoker(ctx, channel)

    return f"✅ Game night channel created: <#{channel.id}>"


async def create_channels_command(ctx: CommandContext) -> str:
    count = ctx.interaction.get_option("count")
    name = ctx.interaction.get_option("name")
    move = ctx.interaction.get_option("move", True)
    locked = ctx.interaction.get_option("locked", False)

    limit = await _get_user_limit(ctx)
    if limit is None:
        return LIMIT_NOT_SET_MESSAGE

    try:
        existing = await get_game_night_channels(ctx)
    except DiscordHTTPError as e:
        logger.error(f"Error getting existing channels: {e}")
        return LIST_CHANNELS_ERROR_MESSAGE
    if len(existing) + count > MAX_GAME_NIGHT_CHANNELS:
        return MAX_CHANNELS_MESSAGE

    start = next_position(existing)
    overwrites = build_channel_overwrites(ctx.config, locked=locked)
    reason = ctx.audit_reason(f"created {count} game night channels")

    async def create_one(number: int) -> Channel | None:
        try:
            return await create_voice_channel(
                ctx.client,
                ctx.config.guild_id,
                name=f"{CHANNEL_PREFIX} {name} {number}",
                parent_id=ctx.config.game_night_category_id,
                user_limit=limit,
                overwrites=overwrites,
                position=start + number - 1,
                reason=reason,
            )
        except DiscordHTTPError as e:
            logger.error(f"Error creating channel {number} of {count}: {e}")
            return None

    results = await run_bounded(
        [lambda n=number: create_one(n) for number in range(1, count + 1)]
    )
    created = [c for c in results if c is not None]

    if move and created:
        await _move_invoker(ctx, created[0])

    return f"✅ Created {len(created)} game night channels."


async def delete_channel_command(ctx: CommandContext) -> str:
    result = await resolve_channel(ctx, ctx.interaction.get_option("channel"))
    if not isinstance(result, Resolved):
        return resolution_failure_message(result)

    channel = result.channel
    try:
        await delete_channel(
            ctx.client, channel.id, reason=ctx.audit_reason("deleted game night channel")
        )
    except DiscordHTTPError as e:
        logger.error(f"Error deleting channel {channel.id}: {e}")
        return "❌ Error deleting channel."

    return f"✅ Deleted `{channel.name}`."


async def delete_all_channels_command(ctx: CommandContext) -> str:
    try:
        channels = await get_game_night_channels(ctx)
    except DiscordHTTPError as e:
        logger.error(f"Error listing channels for deletion: {e}")
        return "❌ Error deleting channels."

    reason = ctx.audit_reason("deleted all game night channels")

    async def delete_one(channel: Channel) -> bool:
        try:
            await delete_channel(ctx.client, channel.id, reason=reason)
            return True
        except DiscordHTTPError as e:
            logger.error(f"Error deleting channel {channel.id}: {e}")
            return False

    results = await run_bounded([lambda c=channel: delete_one(c) for channel in channels])
    return f"✅ Deleted {sum(results)} game night channels."


CREATE_CHANNEL = CommandDefinition(
    name="create-channel",
    description="Create a new game night channel.",
    handler=create_channel_command,
    options=(
        string_option(
            "name",
            f"The name for the game night channel. Will be shown as {CHANNEL_PREFIX} {{name}}",
            required=True,
        ),
        boolean_option("move", "Whether to move the user to the new channel. Default true."),
        boolean_option("locked", "Whether to lock the new channel. Default false."),
    ),
)

CREATE_CHANNELS = CommandDefinition(
    name="create-channels",
    description="Create multiple game night channels.",
    handler=create_channels_command,
    options=(
        integer_option(
            "count",
            "The number of channels to create.",
            required=True,
            min_value=1,
            max_value=MAX_GAME_NIGHT_CHANNELS,
        ),
        string_option(
            "name",
            f"The base name for the game night channels. Will be shown as {CHANNEL_PREFIX} {{name}} {{number}}",
            required=True,
        ),
        boolean_option(
            "move", "Whether to move the user to the first new channel. Default true."
        ),
        boolean_option("locked", "Whether to lock the new channels. Default false."),
    ),
)

DELETE_CHANNEL = CommandDefinition(
    name="delete-channel",
    description="Delete a game night channel.",
    handler=delete_channel_command,
    options=(
        voice_channel_option(
            "channel",
            "The game night channel to delete. Blank to default to user's current VC.",
        ),
    ),
)

DELETE_ALL_CHANNELS = CommandDefinition(
    name="delete-all-channels",
    description="Delete all game night channels.",
    handler=delete_all_channels_command,
)

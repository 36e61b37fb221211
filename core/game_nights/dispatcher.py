"""
Command dispatcher - routes an interaction to its handler and reports the result.

Runs after the deferred acknowledgement has been sent, so every outcome is
delivered by editing the original response. A handler that raises is reported
to the user with a follow-up and to operators in the log channel.
"""

import logging
import traceback

import sentry_sdk

from core.discord_outbound import (
    MAX_MESSAGE_LENGTH,
    DiscordHTTPError,
    edit_original_response,
    send_channel_message,
    send_followup,
)

from .catalog import CommandCatalog
from .context import CommandContext

logger = logging.getLogger(__name__)

UNKNOWN_COMMAND_MESSAGE = "❌ Unknown Command"
COMMAND_FAILED_MESSAGE = "❌ Error processing command."


async def dispatch_command(ctx: CommandContext, catalog: CommandCatalog) -> None:
    """Run the invoked command and deliver its reply. Never raises."""
    interaction = ctx.interaction
    command = catalog.get(interaction.command_name)

    try:
        if command is None:
            logger.warning(f"Unknown command: {interaction.command_name}")
            content = UNKNOWN_COMMAND_MESSAGE
        else:
            logger.info(
                f"Running /{command.name} for {ctx.interaction.member.username}"
            )
            content = await command.handler(ctx)
        await edit_original_response(
            ctx.client, interaction.application_id, interaction.token, content
        )
    except Exception as e:
        logger.exception(f"Error processing command {interaction.command_name}")
        sentry_sdk.capture_exception(e)
        await _report_failure(ctx, e)


async def _report_failure(ctx: CommandContext, error: Exception) -> None:
    """Tell the user something went wrong and post the traceback to the log channel."""
    interaction = ctx.interaction
    try:
        await send_followup(
            ctx.client, interaction.application_id, interaction.token, COMMAND_FAILED_MESSAGE
        )
    except DiscordHTTPError as e:
        logger.error(f"Failed to send failure follow-up: {e}")

    try:
        await send_channel_message(
            ctx.client,
            ctx.config.log_channel_id,
            format_error_report(interaction.command_name, error),
            allow_mentions=False,
        )
    except DiscordHTTPError as e:
        logger.error(f"Failed to post error report to log channel: {e}")


def format_error_report(command_name: str, error: Exception) -> str:
    """
    Log channel message for a failed command.

    Long tracebacks lose their oldest frames; the final exception line is
    always kept.
    """
    header = f"Error processing command: `{command_name}`\n"
    trace = "".join(traceback.format_exception(type(error), error, error.__traceback__))
    room = MAX_MESSAGE_LENGTH - len(header)
    if len(trace) > room:
        trace = "…" + trace[-(room - 1):]
    return header + trace

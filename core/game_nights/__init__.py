"""Game night channel management commands."""

from .commands import COMMANDS, build_catalog
from .context import CommandContext
from .dispatcher import dispatch_command
from .interaction import Interaction
from .webhook_handler import (
    InteractionSignatureError,
    authorize_command,
    verify_interaction_signature,
)

__all__ = [
    "COMMANDS",
    "build_catalog",
    "CommandContext",
    "dispatch_command",
    "Interaction",
    "InteractionSignatureError",
    "authorize_command",
    "verify_interaction_signature",
]

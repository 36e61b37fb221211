"""The game night command set, in registration order."""

from ..catalog import CommandCatalog
from .channels import CREATE_CHANNEL, CREATE_CHANNELS, DELETE_ALL_CHANNELS, DELETE_CHANNEL
from .limits import SET_CHANNEL_LIMIT, SET_LIMIT
from .lock import LOCK, UNLOCK
from .move import MOVE

COMMANDS = [
    SET_LIMIT,
    SET_CHANNEL_LIMIT,
    CREATE_CHANNEL,
    DELETE_CHANNEL,
    CREATE_CHANNELS,
    DELETE_ALL_CHANNELS,
    MOVE,
    LOCK,
    UNLOCK,
]


def build_catalog() -> CommandCatalog:
    return CommandCatalog(COMMANDS)


__all__ = ["COMMANDS", "build_catalog"]

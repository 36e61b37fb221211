"""
Slash command definitions.

The same definitions drive runtime dispatch and command registration with
Discord (see scripts/register_commands.py).
"""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

import discord

from .context import CommandContext

# A handler returns the text that replaces the deferred response
CommandHandler = Callable[[CommandContext], Awaitable[str]]


@dataclass(frozen=True)
class CommandOption:
    type: discord.AppCommandOptionType
    name: str
    description: str
    required: bool = False
    min_value: int | None = None
    max_value: int | None = None
    channel_types: tuple[discord.ChannelType, ...] = ()

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "type": self.type.value,
            "name": self.name,
            "description": self.description,
            "required": self.required,
        }
        if self.min_value is not None:
            payload["min_value"] = self.min_value
        if self.max_value is not None:
            payload["max_value"] = self.max_value
        if self.channel_types:
            payload["channel_types"] = [t.value for t in self.channel_types]
        return payload


@dataclass(frozen=True)
class CommandDefinition:
    name: str
    description: str
    handler: CommandHandler = field(compare=False)
    options: tuple[CommandOption, ...] = ()

    def to_payload(self) -> dict[str, Any]:
        """JSON accepted by Discord's application command endpoints."""
        payload: dict[str, Any] = {
            "name": self.name,
            "description": self.description,
        }
        if self.options:
            payload["options"] = [o.to_payload() for o in self.options]
        return payload


class DuplicateCommandError(Exception):
    """Raised when two definitions share a name."""

    pass


class CommandCatalog:
    """Registry of command definitions keyed by lowercase name."""

    def __init__(self, definitions: list[CommandDefinition] | None = None):
        self._commands: dict[str, CommandDefinition] = {}
        for definition in definitions or []:
            self.register(definition)

    def register(self, definition: CommandDefinition) -> None:
        key = definition.name.lower()
        if key in self._commands:
            raise DuplicateCommandError(f"Command '{definition.name}' already registered")
        self._commands[key] = definition

    def get(self, name: str) -> CommandDefinition | None:
        return self._commands.get(name.lower())

    def definitions(self) -> list[CommandDefinition]:
        return list(self._commands.values())

    def to_payload(self) -> list[dict[str, Any]]:
        return [d.to_payload() for d in self._commands.values()]

    def __len__(self) -> int:
        return len(self._commands)


def integer_option(
    name: str,
    description: str,
    required: bool = False,
    min_value: int | None = None,
    max_value: int | None = None,
) -> CommandOption:
    return CommandOption(
        type=discord.AppCommandOptionType.integer,
        name=name,
        description=description,
        required=required,
        min_value=min_value,
        max_value=max_value,
    )


def string_option(name: str, description: str, required: bool = False) -> CommandOption:
    return CommandOption(
        type=discord.AppCommandOptionType.string,
        name=name,
        description=description,
        required=required,
    )


def boolean_option(name: str, description: str) -> CommandOption:
    return CommandOption(
        type=discord.AppCommandOptionType.boolean,
        name=name,
        description=description,
    )


def user_option(name: str, description: str, required: bool = False) -> CommandOption:
    return CommandOption(
        type=discord.AppCommandOptionType.user,
        name=name,
        description=description,
        required=required,
    )


def voice_channel_option(name: str, description: str) -> CommandOption:
    return CommandOption(
        type=discord.AppCommandOptionType.channel,
        name=name,
        description=description,
        channel_types=(discord.ChannelType.voice,),
    )

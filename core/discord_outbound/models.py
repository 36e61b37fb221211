# core/discord_outbound/models.py
"""Typed views of the Discord REST payloads the bot reads and writes."""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

import discord


class OverwriteType(IntEnum):
    ROLE = 0
    MEMBER = 1


@dataclass
class ChannelOverwrite:
    """A per-subject allow/deny pair attached to a channel."""

    id: str
    type: OverwriteType
    allow: discord.Permissions = field(default_factory=discord.Permissions.none)
    deny: discord.Permissions = field(default_factory=discord.Permissions.none)

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "ChannelOverwrite":
        return cls(
            id=str(data["id"]),
            type=OverwriteType(int(data["type"])),
            allow=discord.Permissions(int(data.get("allow") or 0)),
            deny=discord.Permissions(int(data.get("deny") or 0)),
        )

    def to_payload(self) -> dict[str, Any]:
        # Discord serializes permission bitfields as strings (they exceed 2**53)
        return {
            "id": self.id,
            "type": int(self.type),
            "allow": str(self.allow.value),
            "deny": str(self.deny.value),
        }


@dataclass
class Channel:
    """
    A guild channel.

    permission_overwrites is None when the record came from an interaction's
    resolved data, which only carries a partial channel.
    """

    id: str
    type: int
    name: str = ""
    parent_id: str | None = None
    position: int = 0
    user_limit: int = 0
    permission_overwrites: list[ChannelOverwrite] | None = None

    @property
    def is_voice(self) -> bool:
        return self.type == discord.ChannelType.voice.value

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "Channel":
        overwrites = data.get("permission_overwrites")
        return cls(
            id=str(data["id"]),
            type=int(data["type"]),
            name=data.get("name") or "",
            parent_id=str(data["parent_id"]) if data.get("parent_id") else None,
            position=int(data.get("position") or 0),
            user_limit=int(data.get("user_limit") or 0),
            permission_overwrites=(
                [ChannelOverwrite.from_payload(o) for o in overwrites]
                if overwrites is not None
                else None
            ),
        )


@dataclass
class VoiceState:
    """A member's current voice connection. channel_id is None when disconnected."""

    user_id: str
    channel_id: str | None = None

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "VoiceState":
        return cls(
            user_id=str(data.get("user_id", "")),
            channel_id=str(data["channel_id"]) if data.get("channel_id") else None,
        )

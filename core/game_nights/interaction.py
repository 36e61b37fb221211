"""Parsed application-command interactions."""

from dataclasses import dataclass, field
from typing import Any

import discord

from core.discord_outbound.models import Channel


@dataclass
class InteractionMember:
    """The guild member who invoked the command."""

    user_id: str
    username: str
    roles: list[str] = field(default_factory=list)
    permissions: discord.Permissions = field(default_factory=discord.Permissions.none)

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "InteractionMember":
        user = data.get("user") or {}
        return cls(
            user_id=str(user.get("id", "")),
            username=user.get("username", ""),
            roles=[str(r) for r in data.get("roles", [])],
            permissions=discord.Permissions(int(data.get("permissions") or 0)),
        )


@dataclass
class ResolvedMember:
    """A member referenced by a user option, with its user object merged in."""

    user_id: str
    username: str
    roles: list[str] = field(default_factory=list)


@dataclass
class Interaction:
    """
    An inbound interaction.

    Only the fields the command handlers use are kept. options maps option
    name to its value; resolved_* hold the entities Discord already looked up
    for user/channel options.
    """

    id: str
    application_id: str
    type: int
    token: str
    guild_id: str | None = None
    command_name: str = ""
    options: dict[str, Any] = field(default_factory=dict)
    member: InteractionMember | None = None
    resolved_channels: dict[str, dict[str, Any]] = field(default_factory=dict)
    resolved_members: dict[str, dict[str, Any]] = field(default_factory=dict)
    resolved_users: dict[str, dict[str, Any]] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "Interaction":
        data = payload.get("data") or {}
        resolved = data.get("resolved") or {}
        member = payload.get("member")
        return cls(
            id=str(payload["id"]),
            application_id=str(payload["application_id"]),
            type=int(payload["type"]),
            token=payload["token"],
            guild_id=str(payload["guild_id"]) if payload.get("guild_id") else None,
            command_name=data.get("name", ""),
            options={o["name"]: o.get("value") for o in data.get("options") or []},
            member=InteractionMember.from_payload(member) if member else None,
            resolved_channels=resolved.get("channels") or {},
            resolved_members=resolved.get("members") or {},
            resolved_users=resolved.get("users") or {},
        )

    def get_option(self, name: str, default: Any = None) -> Any:
        """Value of an option, or default when the user left it out."""
        value = self.options.get(name)
        return default if value is None else value

    def resolve_channel(self, channel_id: str) -> Channel | None:
        data = self.resolved_channels.get(str(channel_id))
        if not data:
            return None
        return Channel.from_payload(data)

    def resolve_member(self, user_id: str) -> ResolvedMember | None:
        """
        Look up a member from resolved data.

        Returns None unless both the member and its user object are present.
        """
        member = self.resolved_members.get(str(user_id))
        user = self.resolved_users.get(str(user_id))
        if member is None or user is None:
            return None
        return ResolvedMember(
            user_id=str(user["id"]),
            username=user.get("username", ""),
            roles=[str(r) for r in member.get("roles", [])],
        )

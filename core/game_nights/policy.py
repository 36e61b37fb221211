"""
Access policy for game night channels.

Named permission sets for each kind of subject, the overwrite templates built
from them, and the two operations that apply them: building the overwrite list
for a new channel and toggling the lock bit on an existing one.
"""

from dataclasses import dataclass, field

import discord

from core.config import GameNightConfig
from core.discord_outbound.models import ChannelOverwrite, OverwriteType


def union(*sets: discord.Permissions) -> discord.Permissions:
    """Permissions granted by any of the given sets."""
    value = 0
    for perms in sets:
        value |= perms.value
    return discord.Permissions(value)


def difference(
    base: discord.Permissions, removed: discord.Permissions
) -> discord.Permissions:
    """Permissions in base that are not in removed."""
    return discord.Permissions(base.value & ~removed.value)


def has_all(perms: discord.Permissions, required: discord.Permissions) -> bool:
    return perms.value & required.value == required.value


STAFF_PERMISSIONS = discord.Permissions(
    priority_speaker=True,
    stream=True,
    view_channel=True,
    send_messages=True,
    read_message_history=True,
    connect=True,
    speak=True,
    use_voice_activation=True,
    use_embedded_activities=True,
    use_soundboard=True,
)

USER_PERMISSIONS = discord.Permissions(
    view_channel=True,
    send_messages=True,
    embed_links=True,
    attach_files=True,
    read_message_history=True,
    use_external_emojis=True,
    connect=True,
    use_voice_activation=True,
    speak=True,
    stream=True,
)

# Lock/unlock only ever touches this set
LOCK_PERMISSIONS = discord.Permissions(connect=True)

BOT_PERMISSIONS = discord.Permissions(
    manage_channels=True,
    view_channel=True,
    send_messages=True,
    embed_links=True,
    attach_files=True,
    read_message_history=True,
    mute_members=True,
    deafen_members=True,
    move_members=True,
    manage_roles=True,
    send_voice_messages=True,
    send_polls=True,
    use_external_apps=True,
)

ADMINISTRATOR = discord.Permissions(administrator=True)


@dataclass(frozen=True)
class OverwriteTemplate:
    """Allow/deny sets that can be stamped onto any subject."""

    allow: discord.Permissions = field(default_factory=discord.Permissions.none)
    deny: discord.Permissions = field(default_factory=discord.Permissions.none)

    def apply(self, subject_id: str, subject_type: OverwriteType) -> ChannelOverwrite:
        # Fresh Permissions objects so callers can never mutate the template
        return ChannelOverwrite(
            id=subject_id,
            type=subject_type,
            allow=discord.Permissions(self.allow.value),
            deny=discord.Permissions(self.deny.value),
        )


STAFF_OVERWRITES = OverwriteTemplate(allow=STAFF_PERMISSIONS)
USER_OVERWRITES = OverwriteTemplate(allow=USER_PERMISSIONS)
BOT_OVERWRITES = OverwriteTemplate(allow=BOT_PERMISSIONS)
LOCKED_OVERWRITES = OverwriteTemplate(deny=LOCK_PERMISSIONS)


class OverwriteNotFoundError(Exception):
    """Raised when a channel has no overwrite entry for the role being toggled."""

    pass


def build_channel_overwrites(
    config: GameNightConfig,
    locked: bool = False,
) -> list[ChannelOverwrite]:
    """
    Build the overwrite list for a new game night channel.

    Order: user role, bot, @everyone (only when a separate user role is
    configured), banned role, then each staff role. A subject that already has
    an entry is not added twice.
    """
    user_role_id = config.effective_user_role_id
    entries = [
        (LOCKED_OVERWRITES if locked else USER_OVERWRITES).apply(
            user_role_id, OverwriteType.ROLE
        ),
        BOT_OVERWRITES.apply(config.service_actor_id, OverwriteType.MEMBER),
    ]
    if user_role_id != config.guild_id:
        entries.append(LOCKED_OVERWRITES.apply(config.guild_id, OverwriteType.ROLE))
    if config.banned_role_id:
        entries.append(
            LOCKED_OVERWRITES.apply(config.banned_role_id, OverwriteType.ROLE)
        )
    for role_id in config.staff_role_ids:
        entries.append(STAFF_OVERWRITES.apply(role_id, OverwriteType.ROLE))

    overwrites = []
    seen: set[str] = set()
    for entry in entries:
        if entry.id in seen:
            continue
        seen.add(entry.id)
        overwrites.append(entry)
    return overwrites


def toggle_lock(
    overwrites: list[ChannelOverwrite],
    role_id: str,
    lock: bool,
) -> list[ChannelOverwrite]:
    """
    Return a copy of overwrites with the lock bit flipped for role_id.

    Locking moves CONNECT from allow to deny; unlocking moves it back. Every
    other bit and every other entry is carried over unchanged.

    Raises:
        OverwriteNotFoundError: If role_id has no entry
    """
    if not any(o.id == role_id for o in overwrites):
        raise OverwriteNotFoundError(f"No overwrite for role {role_id}")

    result = []
    for overwrite in overwrites:
        if overwrite.id != role_id:
            result.append(
                ChannelOverwrite(
                    id=overwrite.id,
                    type=overwrite.type,
                    allow=discord.Permissions(overwrite.allow.value),
                    deny=discord.Permissions(overwrite.deny.value),
                )
            )
            continue
        if lock:
            allow = difference(overwrite.allow, LOCK_PERMISSIONS)
            deny = union(overwrite.deny, LOCK_PERMISSIONS)
        else:
            allow = union(overwrite.allow, LOCK_PERMISSIONS)
            deny = difference(overwrite.deny, LOCK_PERMISSIONS)
        result.append(
            ChannelOverwrite(id=overwrite.id, type=overwrite.type, allow=allow, deny=deny)
        )
    return result

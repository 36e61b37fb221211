"""Per-invocation state handed to every command handler."""

from dataclasses import dataclass

from core.config import GameNightConfig
from core.discord_outbound.http import DiscordRestClient
from core.settings_store import SettingsStore

from .interaction import Interaction


@dataclass
class CommandContext:
    config: GameNightConfig
    client: DiscordRestClient
    store: SettingsStore
    interaction: Interaction

    @property
    def invoker_id(self) -> str:
        return self.interaction.member.user_id

    def audit_reason(self, action: str) -> str:
        """Audit log reason naming the invoking member, e.g. "alice 123 locked game night channel"."""
        member = self.interaction.member
        return f"{member.username} {member.user_id} {action}"

"""
FastAPI dependencies for the interactions endpoint.

Each collaborator is created once per process; tests replace them through
app.dependency_overrides.
"""

from functools import lru_cache

from core.config import GameNightConfig
from core.discord_outbound import DiscordRestClient
from core.game_nights import build_catalog
from core.game_nights.catalog import CommandCatalog
from core.settings_store import DatabaseSettingsStore, SettingsStore

_discord_client: DiscordRestClient | None = None


@lru_cache
def get_config() -> GameNightConfig:
    return GameNightConfig.from_env()


def get_discord_client() -> DiscordRestClient:
    """Get or create the shared Discord REST client."""
    global _discord_client
    if _discord_client is None:
        _discord_client = DiscordRestClient(get_config().discord_token)
    return _discord_client


async def close_discord_client() -> None:
    """Close the shared client. Call on shutdown."""
    global _discord_client
    if _discord_client is not None:
        await _discord_client.close()
        _discord_client = None


def get_settings_store() -> SettingsStore:
    return DatabaseSettingsStore()


@lru_cache
def get_catalog() -> CommandCatalog:
    return build_catalog()

"""Pytest fixtures for game night command tests.

Commands talk to a FakeDiscord that sits behind httpx.MockTransport, so tests
exercise the real REST client and can count exactly which calls were made.
"""

import pytest
from game_night_fakes import (
    APPLICATION_ID,
    BANNED_ROLE_ID,
    CATEGORY_ID,
    GUILD_ID,
    LOG_CHANNEL_ID,
    STAFF_ROLE_IDS,
    USER_ROLE_ID,
    FakeDiscord,
    InMemorySettingsStore,
    make_interaction,
)

from core.config import GameNightConfig
from core.game_nights.context import CommandContext
from core.game_nights.interaction import Interaction


@pytest.fixture
def config() -> GameNightConfig:
    return GameNightConfig(
        discord_token="test-token",
        application_id=APPLICATION_ID,
        public_key="00" * 32,
        guild_id=GUILD_ID,
        game_night_category_id=CATEGORY_ID,
        log_channel_id=LOG_CHANNEL_ID,
        staff_role_ids=STAFF_ROLE_IDS,
        user_role_id=USER_ROLE_ID,
        banned_role_id=BANNED_ROLE_ID,
    )


@pytest.fixture
def fake_discord() -> FakeDiscord:
    return FakeDiscord()


@pytest.fixture
def store() -> InMemorySettingsStore:
    return InMemorySettingsStore()


@pytest.fixture
def make_ctx(config, fake_discord, store):
    """Factory: make_ctx(name, options=..., resolved=...) -> CommandContext."""

    def _make(name: str, **kwargs) -> CommandContext:
        return CommandContext(
            config=config,
            client=fake_discord.client(),
            store=store,
            interaction=Interaction.from_payload(make_interaction(name, **kwargs)),
        )

    return _make

# web_api/tests/conftest.py
"""Pytest fixtures for web API tests.

Replaces the app's dependencies with a test configuration signed by a
throwaway Ed25519 key, so requests can be signed the way Discord signs them.
"""

import json
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from nacl.signing import SigningKey

# Ensure we import from root main.py
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from fastapi.testclient import TestClient  # noqa: E402

from core.config import GameNightConfig  # noqa: E402
from core.game_nights import build_catalog  # noqa: E402
from main import app  # noqa: E402
from web_api.dependencies import (  # noqa: E402
    get_catalog,
    get_config,
    get_discord_client,
    get_settings_store,
)

SIGNING_KEY = SigningKey.generate()


class SignedClient:
    """TestClient wrapper that signs interaction bodies."""

    def __init__(self, client: TestClient):
        self.client = client

    def post_interaction(self, payload: dict, timestamp: str = "1700000000", sign: bool = True):
        body = json.dumps(payload).encode()
        headers = {"Content-Type": "application/json"}
        if sign:
            headers["X-Signature-Ed25519"] = SIGNING_KEY.sign(
                timestamp.encode() + body
            ).signature.hex()
            headers["X-Signature-Timestamp"] = timestamp
        return self.client.post("/api/interactions", content=body, headers=headers)


@pytest.fixture
def api_config() -> GameNightConfig:
    return GameNightConfig(
        discord_token="test-token",
        application_id="900",
        public_key=SIGNING_KEY.verify_key.encode().hex(),
        guild_id="100",
        game_night_category_id="200",
        log_channel_id="300",
        staff_role_ids=("400",),
        user_role_id="500",
        banned_role_id="600",
    )


@pytest.fixture
def api_client(api_config):
    """Signed client against the app with test dependencies."""
    app.dependency_overrides[get_config] = lambda: api_config
    app.dependency_overrides[get_discord_client] = lambda: MagicMock()
    app.dependency_overrides[get_settings_store] = lambda: MagicMock()
    app.dependency_overrides[get_catalog] = build_catalog
    yield SignedClient(TestClient(app))
    app.dependency_overrides.clear()

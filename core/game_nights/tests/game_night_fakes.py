"""Fakes and payload builders shared by the game night tests."""

import json
import re
from typing import Any, Callable

import httpx

from core.discord_outbound import DiscordRestClient

GUILD_ID = "100"
CATEGORY_ID = "200"
LOG_CHANNEL_ID = "300"
STAFF_ROLE_IDS = ("400", "401")
USER_ROLE_ID = "500"
BANNED_ROLE_ID = "600"
APPLICATION_ID = "900"
INVOKER_ID = "1000"


class FakeDiscord:
    """Records requests and answers them from registered routes."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self._routes: list[tuple[str, re.Pattern, Callable[[httpx.Request], httpx.Response]]] = []

    def on(
        self,
        method: str,
        path: str,
        json_body: Any = None,
        status: int = 200,
        handler: Callable[[httpx.Request], httpx.Response] | None = None,
    ) -> None:
        """Register a response for METHOD path (a regex matched against the API path)."""
        if handler is None:
            def handler(request, _status=status, _body=json_body):
                if _body is None:
                    return httpx.Response(_status)
                return httpx.Response(_status, json=_body)

        # Later registrations win so tests can override defaults
        self._routes.insert(0, (method, re.compile(path), handler))

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/api/v10/")
        for method, pattern, handler in self._routes:
            if method == request.method and pattern.fullmatch(path):
                return handler(request)
        return httpx.Response(404, json={"message": "Unknown route", "code": 0})

    def client(self) -> DiscordRestClient:
        return DiscordRestClient("test-token", transport=httpx.MockTransport(self._handle))

    def calls(self, method: str, path: str | None = None) -> list[httpx.Request]:
        """Requests with the given method (and path regex, if given)."""
        return [
            r
            for r in self.requests
            if r.method == method
            and (path is None or re.fullmatch(path, r.url.path.removeprefix("/api/v10/")))
        ]

    @property
    def mutations(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.method != "GET"]


def body_of(request: httpx.Request) -> Any:
    return json.loads(request.content)


def voice_channel(
    channel_id: str,
    name: str = "🎮 Game",
    parent_id: str | None = CATEGORY_ID,
    position: int = 0,
    overwrites: list[dict] | None = None,
    channel_type: int = 2,
) -> dict[str, Any]:
    data = {
        "id": channel_id,
        "type": channel_type,
        "name": name,
        "parent_id": parent_id,
        "position": position,
        "user_limit": 0,
    }
    if overwrites is not None:
        data["permission_overwrites"] = overwrites
    return data


def make_interaction(
    name: str,
    options: dict[str, Any] | None = None,
    resolved: dict[str, Any] | None = None,
    roles: list[str] | None = None,
    permissions: str = "0",
    guild_id: str = GUILD_ID,
    interaction_type: int = 2,
) -> dict[str, Any]:
    """Build an APPLICATION_COMMAND interaction payload."""
    data: dict[str, Any] = {
        "name": name,
        "options": [{"name": k, "value": v} for k, v in (options or {}).items()],
    }
    if resolved:
        data["resolved"] = resolved
    return {
        "id": "7000",
        "application_id": APPLICATION_ID,
        "type": interaction_type,
        "token": "interaction-token",
        "guild_id": guild_id,
        "data": data,
        "member": {
            "user": {"id": INVOKER_ID, "username": "alice"},
            "roles": roles if roles is not None else [STAFF_ROLE_IDS[0]],
            "permissions": permissions,
        },
    }


class InMemorySettingsStore:
    def __init__(self, values: dict[str, str] | None = None):
        self.values = dict(values or {})

    async def get(self, key: str) -> str | None:
        return self.values.get(key)

    async def put(self, key: str, value: str) -> None:
        self.values[key] = value


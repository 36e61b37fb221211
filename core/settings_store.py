"""
Persistent bot settings.

Command handlers depend on the SettingsStore protocol rather than on the
database directly, so the user limit can live anywhere that offers get/put.
"""

from typing import Protocol

from .database import get_connection, get_transaction
from .queries.settings import get_setting, set_setting

USER_LIMIT_KEY = "user-limit"


class SettingsStore(Protocol):
    async def get(self, key: str) -> str | None: ...

    async def put(self, key: str, value: str) -> None: ...


class DatabaseSettingsStore:
    """SettingsStore backed by the bot_settings table."""

    async def get(self, key: str) -> str | None:
        async with get_connection() as conn:
            return await get_setting(conn, key)

    async def put(self, key: str, value: str) -> None:
        async with get_transaction() as conn:
            await set_setting(conn, key, value)

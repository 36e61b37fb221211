"""Bot settings queries using SQLAlchemy Core."""

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncConnection

from ..tables import bot_settings


async def get_setting(
    conn: AsyncConnection,
    key: str,
) -> str | None:
    """Get a setting value by key, or None if it was never written."""
    result = await conn.execute(
        select(bot_settings.c.value).where(bot_settings.c.key == key)
    )
    return result.scalar_one_or_none()


async def set_setting(
    conn: AsyncConnection,
    key: str,
    value: str,
) -> None:
    """Insert or overwrite a setting value."""
    stmt = insert(bot_settings).values(key=key, value=value)
    stmt = stmt.on_conflict_do_update(
        index_elements=[bot_settings.c.key],
        set_={"value": value, "updated_at": datetime.now(timezone.utc)},
    )
    await conn.execute(stmt)

"""Per-user settings storage with single-statement upsert."""
from typing import Any

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import UnsupportedDatabaseError
from app.models.common import utcnow
from app.models.user_settings import UserSettings

_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


async def get_settings_row(db: AsyncSession, user_id: str) -> dict[str, Any]:
    """Raw row as {api_key, gpt_link}, or {} when the user never saved settings."""
    result = await db.execute(
        select(UserSettings.api_key, UserSettings.gpt_link).where(UserSettings.user_id == user_id)
    )
    row = result.one_or_none()
    return dict(row._mapping) if row is not None else {}


async def upsert_settings(
    db: AsyncSession,
    user_id: str,
    api_key: str | None,
    gpt_link: str | None,
) -> None:
    """Overwrite both fields; falsy values are stored as NULL."""
    dialect = db.get_bind().dialect.name
    insert = _INSERTS.get(dialect)
    if insert is None:
        raise UnsupportedDatabaseError(f"Settings upsert is not supported on {dialect}")

    now = utcnow()
    stmt = insert(UserSettings).values(
        user_id=user_id,
        api_key=api_key or None,
        gpt_link=gpt_link or None,
        updated_at=now,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=[UserSettings.user_id],
        set_={
            "api_key": stmt.excluded.api_key,
            "gpt_link": stmt.excluded.gpt_link,
            "updated_at": now,
        },
    )
    await db.execute(stmt)
    await db.commit()

"""Settings routes: the caller's own API key and custom GPT link."""
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import parse_body
from app.db.session import get_db
from app.schemas.settings import SettingsInSchema
from app.services.identity import CurrentUser
from app.services.user_settings import get_settings_row, upsert_settings

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("")
async def read_settings(
    user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Stored row, or {} if the user never saved settings."""
    return await get_settings_row(db, user.id)


@router.post("")
async def save_settings(
    request: Request,
    user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    body = await parse_body(request, SettingsInSchema)
    await upsert_settings(db, user.id, body.api_key, body.gpt_link)
    return {"success": True}

"""Auth routes: Google OAuth login, current user, logout. Server-side sessions via cookie."""
from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import HttpClient, SettingsDep
from app.core.errors import UpstreamError
from app.core.security import clear_session_cookie, generate_id, set_session_cookie
from app.db.session import get_db
from app.schemas.auth import MeOutSchema, UserOutSchema
from app.services.google_oauth import (
    build_authorization_url,
    exchange_code,
    fetch_user_info,
    get_or_create_user,
)
from app.services.identity import CurrentIdentity, create_session, delete_session

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


def _callback_uri(request: Request, settings: SettingsDep) -> str:
    origin = f"{request.url.scheme}://{request.url.netloc}"
    return f"{origin}{settings.api_prefix}/auth/google/callback"


@router.get("/google")
async def google_login(request: Request, settings: SettingsDep):
    """Redirect to Google's consent screen."""
    state = generate_id()
    url = build_authorization_url(settings, _callback_uri(request, settings), state)
    response = RedirectResponse(url, status_code=302)

    if settings.oauth_verify_state:
        response.set_cookie(
            key=settings.oauth_state_cookie_name,
            value=state,
            max_age=settings.oauth_state_max_age,
            httponly=True,
            secure=settings.session_cookie_secure,
            samesite="lax",
            path="/",
        )
    return response


@router.get("/google/callback")
async def google_callback(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
    settings: SettingsDep,
    client: HttpClient,
    code: str | None = None,
    state: str | None = None,
):
    """Exchange the code, provision the user, start a session, go home."""
    if not code:
        return PlainTextResponse("No code provided", status_code=400)

    if settings.oauth_verify_state:
        expected = request.cookies.get(settings.oauth_state_cookie_name)
        if not state or state != expected:
            logger.warning("OAuth state mismatch on callback")
            return PlainTextResponse("Invalid OAuth state", status_code=400)

    redirect_uri = _callback_uri(request, settings)
    try:
        access_token = await exchange_code(client, settings, code, redirect_uri)
    except UpstreamError as exc:
        return PlainTextResponse(f"{exc.message}: {exc.details}", status_code=exc.status_code)

    google_user = await fetch_user_info(client, settings, access_token)
    user = await get_or_create_user(db, google_user)
    session_id = await create_session(db, user, settings)

    response = RedirectResponse("/", status_code=302)
    set_session_cookie(response, settings, session_id)
    if settings.oauth_verify_state:
        response.delete_cookie(settings.oauth_state_cookie_name, path="/")
    return response


@router.get("/me", response_model=MeOutSchema)
async def me(identity: CurrentIdentity):
    """Current user, or null for anonymous callers."""
    if not identity.is_authenticated:
        return MeOutSchema(user=None)
    return MeOutSchema(user=UserOutSchema.model_validate(identity.user))


@router.post("/logout")
async def logout(
    db: Annotated[AsyncSession, Depends(get_db)],
    settings: SettingsDep,
    identity: CurrentIdentity,
):
    """Delete the session row (if any) and clear the cookie."""
    if identity.session_id:
        await delete_session(db, identity.session_id)

    response = JSONResponse({"success": True})
    clear_session_cookie(response, settings)
    return response

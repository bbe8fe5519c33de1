"""Google OAuth authorization-code flow and first-login user provisioning."""
import json
import logging
from urllib.parse import urlencode

import httpx
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings
from app.core.errors import UpstreamError
from app.core.security import generate_id
from app.models.user import User
from app.schemas.auth import GoogleUserSchema

logger = logging.getLogger(__name__)


def build_authorization_url(settings: Settings, redirect_uri: str, state: str) -> str:
    params = {
        "client_id": settings.google_client_id,
        "redirect_uri": redirect_uri,
        "response_type": "code",
        "scope": settings.google_scopes,
        "state": state,
    }
    return f"{settings.google_auth_url}?{urlencode(params)}"


async def exchange_code(
    client: httpx.AsyncClient,
    settings: Settings,
    code: str,
    redirect_uri: str,
) -> str:
    """Trade the authorization code for an access token.

    Raises UpstreamError (400) carrying the raw provider reply when no
    access token comes back.
    """
    response = await client.post(
        settings.google_token_url,
        data={
            "code": code,
            "client_id": settings.google_client_id,
            "client_secret": settings.google_client_secret,
            "redirect_uri": redirect_uri,
            "grant_type": "authorization_code",
        },
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )
    try:
        tokens = response.json()
    except ValueError:
        tokens = {"error": response.text}

    access_token = tokens.get("access_token") if isinstance(tokens, dict) else None
    if not access_token:
        logger.error("Token error: %s", tokens)
        raise UpstreamError(
            "Failed to get access token",
            status_code=400,
            details=json.dumps(tokens),
        )
    return access_token


async def fetch_user_info(
    client: httpx.AsyncClient,
    settings: Settings,
    access_token: str,
) -> GoogleUserSchema:
    response = await client.get(
        settings.google_userinfo_url,
        headers={"Authorization": f"Bearer {access_token}"},
    )
    return GoogleUserSchema.model_validate(response.json())


async def get_or_create_user(db: AsyncSession, google_user: GoogleUserSchema) -> User:
    """Find the user by Google id, inserting on first login."""
    result = await db.execute(select(User).where(User.google_id == google_user.id))
    user = result.scalar_one_or_none()
    if user is not None:
        return user

    db.add(
        User(
            id=generate_id(),
            email=google_user.email,
            google_id=google_user.id,
            name=google_user.name,
        )
    )
    await db.commit()
    logger.info("Created user for Google account %s", google_user.email)

    # canonical row
    result = await db.execute(select(User).where(User.google_id == google_user.id))
    return result.scalar_one()

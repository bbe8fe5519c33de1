"""Resolve the caller's identity from the session cookie.

Lookup outcomes are kept distinct (found / missing / failed) even though
both non-found outcomes resolve to an anonymous caller: session resolution
fails open, so a store error never blocks public endpoints such as
``/auth/me`` or the community listing.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Annotated, Union

from fastapi import Depends, HTTPException, Request
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings
from app.core.security import extract_session_id, generate_id
from app.db.session import get_db
from app.models.common import utcnow
from app.models.login_session import LoginSession
from app.models.user import User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionFound:
    user: User


@dataclass(frozen=True)
class SessionMissing:
    pass


@dataclass(frozen=True)
class SessionLookupFailed:
    error: Exception


SessionLookup = Union[SessionFound, SessionMissing, SessionLookupFailed]


@dataclass(frozen=True)
class Identity:
    """Resolved caller, passed explicitly into every handler."""

    user: User | None = None
    session_id: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None


async def lookup_session(db: AsyncSession, session_id: str | None) -> SessionLookup:
    """Find the unexpired session row and its user. Read-only."""
    if not session_id:
        return SessionMissing()
    try:
        result = await db.execute(
            select(LoginSession).where(
                LoginSession.id == session_id,
                LoginSession.expires_at > utcnow(),
            )
        )
        session = result.scalar_one_or_none()
        if session is None:
            return SessionMissing()

        result = await db.execute(select(User).where(User.id == session.user_id))
        user = result.scalar_one_or_none()
        if user is None:
            return SessionMissing()
        return SessionFound(user)
    except Exception as exc:
        return SessionLookupFailed(exc)


async def resolve_identity(db: AsyncSession, cookie_header: str | None) -> Identity:
    session_id = extract_session_id(cookie_header)
    outcome = await lookup_session(db, session_id)

    if isinstance(outcome, SessionFound):
        return Identity(user=outcome.user, session_id=session_id)
    if isinstance(outcome, SessionLookupFailed):
        logger.error("Session lookup failed, treating caller as anonymous: %s", outcome.error)
    return Identity(session_id=session_id)


async def create_session(db: AsyncSession, user: User, settings: Settings) -> str:
    session_id = generate_id()
    db.add(
        LoginSession(
            id=session_id,
            user_id=user.id,
            expires_at=utcnow() + timedelta(seconds=settings.session_max_age),
        )
    )
    await db.commit()
    return session_id


async def delete_session(db: AsyncSession, session_id: str) -> None:
    """Delete a session row; no-op when it is already gone."""
    await db.execute(delete(LoginSession).where(LoginSession.id == session_id))
    await db.commit()


# ---------- dependencies ----------

async def get_identity(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Identity:
    return await resolve_identity(db, request.headers.get("cookie"))


async def require_user(
    identity: Annotated[Identity, Depends(get_identity)],
) -> User:
    if not identity.is_authenticated:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return identity.user


CurrentIdentity = Annotated[Identity, Depends(get_identity)]
CurrentUser = Annotated[User, Depends(require_user)]

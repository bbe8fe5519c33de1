"""Session ids and cookie helpers (server-side sessions, opaque cookie id)."""
import re
import uuid

from fastapi import Response

from app.core.config import Settings

# Single delimiter match on the raw Cookie header
SESSION_COOKIE_RE = re.compile(r"session=([^;]+)")


def generate_id() -> str:
    """Random opaque id for sessions, plans and OAuth state."""
    return str(uuid.uuid4())


def extract_session_id(cookie_header: str | None) -> str | None:
    """Return the session id from a raw Cookie header, or None."""
    match = SESSION_COOKIE_RE.search(cookie_header or "")
    return match.group(1) if match else None


def set_session_cookie(response: Response, settings: Settings, session_id: str) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=session_id,
        max_age=settings.session_max_age,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
        path="/",
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    # Same attributes as set_session_cookie, Max-Age=0
    response.set_cookie(
        key=settings.session_cookie_name,
        value="",
        max_age=0,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
        path="/",
    )

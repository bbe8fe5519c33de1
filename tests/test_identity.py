"""Tests for cookie parsing and fail-open session resolution."""
import asyncio
from datetime import timedelta

from app.core.security import extract_session_id
from app.services.identity import (
    SessionFound,
    SessionLookupFailed,
    SessionMissing,
    lookup_session,
    resolve_identity,
)


class BrokenSession:
    """Stands in for an AsyncSession whose store is unavailable."""

    async def execute(self, *args, **kwargs):
        raise RuntimeError("database is locked")


def test_extract_session_id():
    assert extract_session_id("session=abc-123") == "abc-123"
    assert extract_session_id("a=1; session=abc; b=2") == "abc"
    assert extract_session_id("a=1") is None
    assert extract_session_id("") is None
    assert extract_session_id(None) is None


def test_lookup_without_id_is_missing():
    assert isinstance(asyncio.run(lookup_session(BrokenSession(), None)), SessionMissing)


def test_lookup_store_error_is_distinct_variant():
    outcome = asyncio.run(lookup_session(BrokenSession(), "abc"))

    assert isinstance(outcome, SessionLookupFailed)
    assert "database is locked" in str(outcome.error)


def test_store_error_resolves_to_anonymous():
    identity = asyncio.run(resolve_identity(BrokenSession(), "session=abc"))

    assert not identity.is_authenticated
    assert identity.user is None
    assert identity.session_id == "abc"


def test_lookup_found_and_expired(db, make_user, make_session):
    user_id = make_user(email="grace@school.org")
    live = make_session(user_id)
    expired = make_session(user_id, expires_in=timedelta(minutes=-5))

    found = db(lambda s: lookup_session(s, live))
    assert isinstance(found, SessionFound)
    assert found.user.email == "grace@school.org"

    assert isinstance(db(lambda s: lookup_session(s, expired)), SessionMissing)
    assert isinstance(db(lambda s: lookup_session(s, "unknown")), SessionMissing)


def test_store_error_does_not_break_public_endpoint(client):
    """A failing session lookup still lets /auth/me answer as anonymous."""
    from app.db.session import get_db
    from app.main import app

    async def broken_db():
        yield BrokenSession()

    app.dependency_overrides[get_db] = broken_db

    response = client.get("/api/auth/me", headers={"Cookie": "session=abc"})

    assert response.status_code == 200
    assert response.json() == {"user": None}

"""Tests for per-user settings."""
import asyncio
from types import SimpleNamespace

import pytest
from sqlalchemy import select

from app.core.errors import LessonPlannerError, UnsupportedDatabaseError
from app.models.user_settings import UserSettings
from app.services.user_settings import upsert_settings


def _rows(db, user_id):
    async def query(session):
        result = await session.execute(select(UserSettings).where(UserSettings.user_id == user_id))
        return result.scalars().all()

    return db(query)


def test_settings_require_login(client, count_rows):
    assert client.get("/api/settings").status_code == 401
    response = client.post("/api/settings", json={"apiKey": "sk-1"})

    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}
    assert count_rows(UserSettings) == 0


def test_settings_empty_until_saved(client, login):
    _, cookies = login()

    response = client.get("/api/settings", headers=cookies)

    assert response.status_code == 200
    assert response.json() == {}


def test_save_and_read_settings(client, login):
    _, cookies = login()

    saved = client.post(
        "/api/settings",
        json={"apiKey": "sk-abc", "gptLink": "https://chat.openai.com/g/lesson"},
        headers=cookies,
    )

    assert saved.json() == {"success": True}
    assert client.get("/api/settings", headers=cookies).json() == {
        "api_key": "sk-abc",
        "gpt_link": "https://chat.openai.com/g/lesson",
    }


def test_settings_last_write_wins(client, login, db):
    user_id, cookies = login()

    client.post("/api/settings", json={"apiKey": "A"}, headers=cookies)
    client.post("/api/settings", json={"apiKey": "B"}, headers=cookies)

    rows = _rows(db, user_id)
    assert len(rows) == 1
    assert rows[0].api_key == "B"


def test_omitted_or_empty_fields_are_cleared(client, login, db):
    user_id, cookies = login()

    client.post("/api/settings", json={"apiKey": "A", "gptLink": "https://x"}, headers=cookies)
    client.post("/api/settings", json={"apiKey": ""}, headers=cookies)

    row = _rows(db, user_id)[0]
    assert row.api_key is None
    assert row.gpt_link is None


def test_settings_are_per_user(client, login):
    _, alice = login(email="alice@school.org")
    _, bob = login(email="bob@school.org")

    client.post("/api/settings", json={"apiKey": "alice-key"}, headers=alice)

    assert client.get("/api/settings", headers=bob).json() == {}
    assert client.get("/api/settings", headers=alice).json()["api_key"] == "alice-key"


def test_upsert_rejects_unsupported_dialect():
    class MySQLSession:
        def get_bind(self):
            return SimpleNamespace(dialect=SimpleNamespace(name="mysql"))

    with pytest.raises(UnsupportedDatabaseError) as excinfo:
        asyncio.run(upsert_settings(MySQLSession(), "user-1", "sk", None))

    assert isinstance(excinfo.value, LessonPlannerError)
    assert "mysql" in str(excinfo.value)

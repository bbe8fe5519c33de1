"""Shared fixtures: temp SQLite database, fake upstream APIs, test client."""
import asyncio
import json
from datetime import timedelta

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.core.config import Settings, get_settings
from app.core.dependencies import get_http_client
from app.core.security import generate_id
from app.db.base import Base
from app.db.session import get_db
from app.main import app
from app.models.common import utcnow
from app.models.login_session import LoginSession
from app.models.user import User

GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_USERINFO_URL = "https://www.googleapis.com/oauth2/v2/userinfo"
OPENAI_URL = "https://api.openai.com/v1/chat/completions"


def _bare_url(request: httpx.Request) -> str:
    return f"{request.url.scheme}://{request.url.host}{request.url.path}"


class FakeUpstream:
    """Routes outbound httpx requests to canned responses and records them."""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def add(self, method: str, url: str, response):
        self.routes[(method, url)] = response

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, _bare_url(request))
        if key not in self.routes:
            raise AssertionError(f"Unexpected upstream call: {key}")
        response = self.routes[key]
        return response(request) if callable(response) else response

    def calls_to(self, url: str) -> list[httpx.Request]:
        return [r for r in self.requests if _bare_url(r) == url]


def completion_response(content: str, status_code: int = 200) -> httpx.Response:
    return httpx.Response(
        status_code,
        json={"choices": [{"message": {"role": "assistant", "content": content}}]},
    )


SAMPLE_PLAN = {
    "title": "Photosynthesis with AI Lab Partners",
    "subject": "Biology",
    "gradeLevel": "9",
    "learningObjective": "Explain how plants convert light to energy",
    "aiIntegration": {
        "approach": "Students critique AI explanations",
        "description": "An assistant drafts explanations students verify",
        "rationale": ["Bloom's analysis level"],
        "ethicalConsiderations": ["Disclose AI use"],
    },
    "activities": [
        {
            "phase": "Warm-up (10 min)",
            "activity": "Prompt the assistant",
            "studentRole": "Ask questions",
            "teacherRole": "Model prompts",
        }
    ],
    "assessmentStrategy": "Exit ticket",
    "pedagogicalFrameworks": ["Constructivism"],
    "toolSuggestions": ["ChatGPT for drafting"],
}


@pytest.fixture
def sample_plan():
    return json.loads(json.dumps(SAMPLE_PLAN))


@pytest.fixture
def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)

    async def create_all():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(create_all())
    yield engine
    asyncio.run(engine.dispose())


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        google_client_id="test-client-id",
        google_client_secret="test-client-secret",
        openai_api_key=None,
    )


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def client(session_factory, settings, upstream):
    async def override_get_db():
        async with session_factory() as db:
            yield db

    async def override_http_client():
        async with httpx.AsyncClient(transport=httpx.MockTransport(upstream.handle)) as http:
            yield http

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_http_client] = override_http_client

    yield TestClient(app, raise_server_exceptions=False, follow_redirects=False)

    app.dependency_overrides.clear()


@pytest.fixture
def db(session_factory):
    """Run a coroutine function against a fresh session: db(lambda s: ...)."""

    def run(fn):
        async def go():
            async with session_factory() as session:
                return await fn(session)

        return asyncio.run(go())

    return run


@pytest.fixture
def make_user(db):
    def create(email="teacher@school.org", name="Test Teacher", google_id=None):
        user_id = generate_id()

        async def insert(session):
            session.add(User(id=user_id, email=email, name=name, google_id=google_id or generate_id()))
            await session.commit()

        db(insert)
        return user_id

    return create


@pytest.fixture
def make_session(db):
    def create(user_id, expires_in=timedelta(days=7)):
        session_id = generate_id()

        async def insert(session):
            session.add(LoginSession(id=session_id, user_id=user_id, expires_at=utcnow() + expires_in))
            await session.commit()

        db(insert)
        return session_id

    return create


@pytest.fixture
def login(make_user, make_session):
    """Create a user with a live session; returns (user_id, cookie headers)."""

    def create(email="teacher@school.org", name="Test Teacher"):
        user_id = make_user(email=email, name=name)
        session_id = make_session(user_id)
        return user_id, {"Cookie": f"session={session_id}"}

    return create


@pytest.fixture
def count_rows(db):
    def count(model, *where):
        async def query(session):
            stmt = select(func.count()).select_from(model)
            if where:
                stmt = stmt.where(*where)
            result = await session.execute(stmt)
            return result.scalar_one()

        return db(query)

    return count

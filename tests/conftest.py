"""
Shared fixtures.

Database-backed tests run against a throwaway SQLite file (aiosqlite) built
from the ORM metadata; API tests drive the ASGI app in-process with httpx
and override the session and settings dependencies.
"""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from scholarship_api.core.config import Settings, get_settings
from scholarship_api.core.database import build_session_maker, create_tables, get_db
from scholarship_api.core.security import create_session_token
from scholarship_api.main import app
from scholarship_api.modules.scholarship_applications.schemas import ScholarshipApplicationCreate

TEST_SESSION_SECRET = "test-session-secret-0123456789abcdef"
TEST_USER = {"id": "google:1234567890", "email": "coach@example.com", "name": "Coach Reid"}


@pytest.fixture
def mock_db():
    """Create a mock database session."""
    db = AsyncMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    db.get = AsyncMock()
    db.execute = AsyncMock()
    db.add = MagicMock()
    return db


@pytest.fixture
def application_payload() -> dict:
    """A complete, valid application exactly as the form client sends it."""
    return {
        "semester1Amount": 120000,
        "semester2Amount": 95000,
        "surname": "Campbell",
        "firstName": "Andre",
        "middleName": "Omar",
        "gender": "M",
        "nationality": "Jamaican",
        "dateOfBirth": "2003-08-21",
        "age": 22,
        "studentId": "2104455",
        "projectedGraduationYear": "2026",
        "telephone": "876-555-0101",
        "email": "andre.campbell@example.com",
        "homeAddress": "4 Mona Road, Kingston 7",
        "facultySchool": "Faculty of Engineering",
        "courseOfStudy": "BEng Civil Engineering",
        "yearStarted": "2022",
        "gpa": "3.20",
        "programmeType": "Undergraduate",
        "programmeMode": "Full-time",
        "yearInSchool": "4th",
        "didTransfer": False,
        "sport": "Football",
        "eventPosition": "Midfielder",
        "majorAccomplishments": "Inter-collegiate champions 2024",
        "nationalRepresentative": False,
        "scholarshipTuition": True,
        "scholarshipAccommodation": False,
        "scholarshipBooks": True,
        "guardians": [
            {
                "surname": "Campbell",
                "firstName": "Denise",
                "middleInitial": "A",
                "relation": "Mother",
                "telephone": "876-555-0199",
                "address": "4 Mona Road, Kingston 7",
            },
            {
                "surname": "Campbell",
                "firstName": "Winston",
                "relation": "Father",
                "telephone": "876-555-0188",
                "address": "4 Mona Road, Kingston 7",
            },
        ],
        "affiliations": [{"name": "Harbour View FC"}],
    }


@pytest.fixture
def build_application(application_payload):
    """Factory for validated applications with selected fields overridden."""

    def _build(**overrides) -> ScholarshipApplicationCreate:
        return ScholarshipApplicationCreate.model_validate({**application_payload, **overrides})

    return _build


@pytest_asyncio.fixture
async def engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """Async engine on a fresh SQLite database with all tables created."""
    test_engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await create_tables(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_maker(engine) -> async_sessionmaker[AsyncSession]:
    return build_session_maker(engine)


@pytest_asyncio.fixture
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session


@pytest.fixture
def test_settings() -> Settings:
    """Settings with a known session secret and the submission gate enabled."""
    return Settings(
        _env_file=None,
        SESSION_SECRET=TEST_SESSION_SECRET,
        require_session_for_submission=True,
        python_env="test",
    )


@pytest.fixture
def session_token() -> str:
    """A valid session token for TEST_USER."""
    return create_session_token(TEST_USER, TEST_SESSION_SECRET)


@pytest_asyncio.fixture
async def client(session_maker, test_settings) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the app, with the test database and settings."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: test_settings

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def authed_client(client, test_settings, session_token) -> AsyncClient:
    """The same client carrying a valid session cookie."""
    client.cookies.set(test_settings.session_cookie_name, session_token)
    return client

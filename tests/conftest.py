"""
Test configuration and fixtures for pytest.

This module provides shared fixtures used across all tests:
- Test database (SQLite in-memory for speed)
- Test client (FastAPI TestClient)
- Session cookie helpers
- Scripted provider doubles for the AI layer
"""

import pytest
from datetime import datetime, timezone
from typing import Generator
from uuid import uuid4

from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from app.main import app
from app.db.base import Base
from app.db.session import get_db
from app.deps import get_tool_service
from app.models.user import User
from app.models.generation_request import GenerationRequest
from app.models.custom_tool_type import CustomToolType
from app.models.custom_category import CustomCategory
from app.core.config import settings
from app.core.security import create_session_token
from app.ai.providers.base import AIProvider, AIResponse, ProviderType


# ---------------------------------------------------------------------------
# TEST DATABASE SETUP
# ---------------------------------------------------------------------------
# StaticPool keeps the same in-memory connection across all operations

SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


@event.listens_for(engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores FOREIGN KEY constraints unless asked, so deleting a
    # user before the rows it owns would otherwise go unnoticed
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# ---------------------------------------------------------------------------
# DATABASE FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """
    Create a fresh database for each test function.

    - Creates all tables
    - Yields a session for the test
    - Drops all tables after test (clean slate)
    """
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db: Session) -> Generator[TestClient, None, None]:
    """
    Create a test client with the test database.

    Overrides the get_db dependency to use our test database.
    """
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# USER FIXTURES
# ---------------------------------------------------------------------------

def make_user(db: Session, email: str) -> User:
    user = User(
        id=uuid4(),
        email=email,
        display_name="Test User",
        created_at=datetime.now(timezone.utc),
        updated_at=datetime.now(timezone.utc),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def add_owned_rows(db: Session, user: User) -> None:
    """Give a user one row in every dependent table."""
    db.add_all([
        GenerationRequest(user_id=user.id, prompt="Fractions quiz", html="<div>quiz</div>"),
        GenerationRequest(user_id=user.id, prompt="Cell diagram", html="<div>cell</div>"),
        CustomToolType(user_id=user.id, name="Vocabulary Bingo"),
        CustomCategory(user_id=user.id, name="Organic Chemistry"),
    ])
    db.commit()


@pytest.fixture
def test_user(db: Session) -> User:
    """A user with email "test@example.com"."""
    return make_user(db, "test@example.com")


@pytest.fixture
def other_user(db: Session) -> User:
    """A second user whose data must survive the first user's deletion."""
    return make_user(db, "other@example.com")


@pytest.fixture
def session_cookies(test_user: User) -> dict:
    """Cookies carrying a valid session for test_user."""
    return {settings.SESSION_COOKIE_NAME: create_session_token(subject=str(test_user.id))}


# ---------------------------------------------------------------------------
# AI FIXTURES
# ---------------------------------------------------------------------------

class ScriptedProvider(AIProvider):
    """
    Provider double that plays back a script of outcomes.

    Each entry is either a string (returned as the response text) or an
    exception instance (raised). Calls are recorded as (model, prompt,
    system_prompt) tuples.
    """

    provider_type = ProviderType.GEMINI

    def __init__(self, outcomes=None, image_outcome=""):
        self.outcomes = list(outcomes or [])
        self.image_outcome = image_outcome
        self.calls = []
        self.image_calls = []

    async def generate(self, prompt, model, system_prompt=None, **kwargs):
        self.calls.append((model, prompt, system_prompt))
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return AIResponse(content=outcome, provider=self.provider_type, model=model)

    async def analyze_image(self, image_bytes, mime_type, prompt, model):
        self.image_calls.append((model, image_bytes, mime_type, prompt))
        if isinstance(self.image_outcome, BaseException):
            raise self.image_outcome
        return AIResponse(content=self.image_outcome, provider=self.provider_type, model=model)

    @property
    def models_called(self):
        return [model for model, _, _ in self.calls]


class SleepRecorder:
    """Stands in for asyncio.sleep and records requested delays (seconds)."""

    def __init__(self):
        self.delays = []

    async def __call__(self, seconds):
        self.delays.append(seconds)

    @property
    def delays_ms(self):
        return [round(d * 1000) for d in self.delays]


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def override_tool_service():
    """
    Install a tool service for the API tests.

    Usage:
        override_tool_service(service)
    """
    def _install(service):
        app.dependency_overrides[get_tool_service] = lambda: service
        return service

    yield _install
    app.dependency_overrides.pop(get_tool_service, None)


@pytest.fixture
def make_provider():
    """Factory for ScriptedProvider: make_provider(["<div>ok</div>"])."""
    return ScriptedProvider


@pytest.fixture
def populated_user(db: Session, test_user: User) -> User:
    """test_user with generation history, a custom tool type and a custom category."""
    add_owned_rows(db, test_user)
    return test_user


@pytest.fixture
def populated_other_user(db: Session, other_user: User) -> User:
    add_owned_rows(db, other_user)
    return other_user

"""Shared fixtures: in-memory SQLite database, fake collaborators and an API client."""

import os

# Cheap hashing and plain logs for the test run
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_FORMAT", "console")
os.environ.setdefault("GEOCODER_API_KEY", "")
os.environ.setdefault("SENTRY_DSN", "")

from typing import Dict, List
from uuid import UUID

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from bootcamp_api import models  # noqa: F401
from bootcamp_api.db.base import Base
from bootcamp_api.db.session import get_db
from bootcamp_api.main import app
from bootcamp_api.models.user import User
from bootcamp_api.services.email_service import EmailDeliveryError, EmailSender, get_email_sender
from bootcamp_api.services.file_storage import FileStorage, get_file_storage
from bootcamp_api.services.geocoder import get_geocoder

API = "/api/v1"
DEFAULT_PASSWORD = "Secret123!"


class FakeEmailSender(EmailSender):
    """Records outgoing mail; set ``fail`` to simulate a provider outage."""

    def __init__(self):
        self.sent: List[Dict] = []
        self.fail = False

    async def send(self, recipient: str, subject: str, body: str) -> None:
        if self.fail:
            raise EmailDeliveryError("provider unavailable")
        self.sent.append({"recipient": recipient, "subject": subject, "body": body})


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def email_sender():
    return FakeEmailSender()


@pytest.fixture
def file_storage(tmp_path):
    return FileStorage(tmp_path / "uploads")


@pytest.fixture
async def client(session_factory, email_sender, file_storage):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_sender] = lambda: email_sender
    app.dependency_overrides[get_file_storage] = lambda: file_storage
    app.dependency_overrides[get_geocoder] = lambda: None

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


async def set_role(session_factory, user_id: str, role: str) -> None:
    async with session_factory() as session:
        await session.execute(update(User).where(User.id == UUID(user_id)).values(role=role))
        await session.commit()


@pytest.fixture
def make_user(client, session_factory):
    """
    Register a user through the API and optionally promote it.

    Returns {"id", "token", "headers", "email", "password"}. The client's
    cookie jar is cleared so later requests are anonymous unless they send
    the returned headers.
    """

    async def _make(username: str, role: str = "user", password: str = DEFAULT_PASSWORD):
        email = f"{username.lower()}@example.com"
        response = await client.post(
            f"{API}/auth/register",
            json={"username": username, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        client.cookies.clear()

        body = response.json()
        user_id = body["data"]["id"]
        if role != "user":
            await set_role(session_factory, user_id, role)

        return {
            "id": user_id,
            "token": body["token"],
            "headers": {"Authorization": f"Bearer {body['token']}"},
            "email": email,
            "password": password,
        }

    return _make


def bootcamp_payload(name: str = "Devworks Bootcamp", **overrides) -> Dict:
    payload = {
        "name": name,
        "description": "Full stack web development from zero to deployed apps",
        "phone": "+15551234567",
        "email": "enroll@devworks.io",
        "website": "https://devworks.io",
        "duration": 12,
        "level": "Beginner",
        "category": ["Web Development", "UI/UX"],
        "cost_type": "Paid",
        "price": 9000,
        "start_date": "2026-03-02T00:00:00",
        "online_available": False,
        "address": "233 Bay State Rd Boston MA 02215",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_bootcamp(client):
    async def _make(owner: Dict, name: str = "Devworks Bootcamp", **overrides) -> Dict:
        response = await client.post(
            f"{API}/bootcamps",
            json=bootcamp_payload(name, **overrides),
            headers=owner["headers"],
        )
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _make

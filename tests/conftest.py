import asyncio
import os
import tempfile
import uuid
from datetime import timedelta
from types import SimpleNamespace

import pytest

DB_PATH = os.path.join(tempfile.gettempdir(), f"fittrack-test-{uuid.uuid4().hex}.db")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{DB_PATH}"
os.environ["SECRET_KEY"] = "fittrack-test-secret"
os.environ["SENDGRID_API_KEY"] = ""

from fastapi import Depends
from fastapi.testclient import TestClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from fittrack.main import app
from fittrack.api.deps import get_current_user
from fittrack.core.auth import User
from fittrack.core.clock import utcnow
from fittrack.core.database import Base, get_async_session

# Every TestClient request runs on a fresh event loop, so connections are never pooled
test_engine = create_async_engine(os.environ["DATABASE_URL"], poolclass=NullPool)
TestingSessionLocal = async_sessionmaker(bind=test_engine, expire_on_commit=False, class_=AsyncSession)


async def override_get_async_session():
    async with TestingSessionLocal() as session:
        yield session


def as_user(user_id):
    async def override_current_user(db: AsyncSession = Depends(get_async_session)):
        result = await db.execute(select(User).where(User.id == user_id))
        return result.unique().scalar_one()
    return override_current_user


async def _reset_database():
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    owner = User(email="alex@example.com", hashed_password="unused", name="Alex Runner")
    other = User(email="sam@example.com", hashed_password="unused", name="Sam Lifter")
    async with TestingSessionLocal() as session:
        session.add_all([owner, other])
        await session.commit()
    return SimpleNamespace(owner=owner.id, other=other.id)


def pytest_sessionfinish(session, exitstatus):
    asyncio.run(test_engine.dispose())
    if os.path.exists(DB_PATH):
        os.remove(DB_PATH)


@pytest.fixture
def users():
    return asyncio.run(_reset_database())


@pytest.fixture
def client(users):
    app.dependency_overrides[get_async_session] = override_get_async_session
    app.dependency_overrides[get_current_user] = as_user(users.owner)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def act_as():
    """Switch the authenticated user for the following requests"""
    def _act_as(user_id):
        app.dependency_overrides[get_current_user] = as_user(user_id)
    return _act_as


@pytest.fixture
def anonymous_client(users):
    app.dependency_overrides[get_async_session] = override_get_async_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def goal_payload():
    def _goal_payload(**overrides):
        payload = {
            "title": "Run 100 km",
            "description": "Monthly running volume",
            "target_date": (utcnow() + timedelta(days=30)).isoformat(),
            "target_value": 100,
            "unit": "km",
            "category": "endurance",
        }
        payload.update(overrides)
        return payload
    return _goal_payload


@pytest.fixture
def count_rows():
    """Count stored rows of a model matching column filters"""
    def _count_rows(model, **filters):
        async def _count():
            async with TestingSessionLocal() as session:
                query = select(model)
                for column, value in filters.items():
                    query = query.where(getattr(model, column) == value)
                result = await session.execute(query)
                return len(result.unique().scalars().all())
        return asyncio.run(_count())
    return _count_rows

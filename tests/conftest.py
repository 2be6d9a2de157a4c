"""Shared fixtures: a throwaway SQLite database, an API client and seed helpers"""
import os

# Settings are read at import time, so the environment must be ready first
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["TIMEZONE"] = "UTC"
os.environ["DB_MAX_RETRIES"] = "0"

import uuid
from datetime import date, datetime

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.core.auth import User, create_access_token
from app.core.clock import get_clock
from app.core.database import Base, get_async_session
from app.main import app
from app.models.category import Category
from app.models.goal import Goal, Timeframe


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest_asyncio.fixture
async def engine(tmp_path):
    """File-backed SQLite so every session gets its own connection"""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'goals.db'}",
        poolclass=NullPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


# ============================================================================
# API Fixtures
# ============================================================================

@pytest_asyncio.fixture
async def client(session_factory):
    async def override_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_async_session] = override_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def freeze_now():
    """Pin the API clock: freeze_now(datetime(...))"""
    def _freeze(instant: datetime):
        app.dependency_overrides[get_clock] = lambda: (lambda: instant)
    return _freeze


# ============================================================================
# Seed helpers
# ============================================================================

async def add_user(db, email: str = None, is_active: bool = True) -> User:
    user = User(email=email or f"{uuid.uuid4().hex[:8]}@example.com", is_active=is_active)
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def add_category(db, user: User, name: str = "Health") -> Category:
    category = Category(user_id=user.id, name=name, color="#10B981")
    db.add(category)
    await db.commit()
    await db.refresh(category)
    return category


async def add_goal(
    db,
    category: Category,
    timeframe: Timeframe,
    anchor: date = None,
    completed: bool = False,
    completed_at: datetime = None,
    title: str = "Goal",
) -> Goal:
    """Insert a goal with an arbitrary (possibly stale) anchor"""
    anchors = {
        Timeframe.daily: "goal_date",
        Timeframe.weekly: "week_start_date",
        Timeframe.monthly: "month_start_date",
    }
    goal = Goal(
        category_id=category.id,
        title=title,
        timeframe=timeframe.value,
        completed=completed,
        completed_at=completed_at,
        **{anchors[timeframe]: anchor},
    )
    db.add(goal)
    await db.commit()
    await db.refresh(goal)
    return goal


async def reload(session_factory, goal) -> Goal:
    """Fetch a goal (instance or id) through a fresh session so no cached state leaks in"""
    goal_id = goal if isinstance(goal, uuid.UUID) else goal.id
    async with session_factory() as session:
        return await session.get(Goal, goal_id)


@pytest_asyncio.fixture
async def user(db):
    return await add_user(db, "runner@example.com")


@pytest.fixture
def auth_headers(user):
    token = create_access_token(str(user.id))
    return {"Authorization": f"Bearer {token}"}

# DATABASE_URL points each test at its own temporary SQLite file; the schema comes from the real migrations.
import uuid

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, func, insert, select

from db import Database
from main import create_app
from migrations import run_migrations
from models.location import Location
from models.vote import Vote


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "test_votes.db"


@pytest.fixture
def database_url(db_path, monkeypatch):
    """Async URL the app uses; also exported as DATABASE_URL for startup."""
    url = f"sqlite+aiosqlite:///{db_path}"
    monkeypatch.setenv("DATABASE_URL", url)
    return url


@pytest.fixture
def sync_engine(db_path):
    """Plain sqlite3 engine on the same file, for seeding and checking rows outside the app's event loop."""
    eng = create_engine(f"sqlite:///{db_path}")
    try:
        yield eng
    finally:
        eng.dispose()


@pytest.fixture
def client(database_url):
    """API test client; startup runs migrations and opens the pool against the test file."""
    with TestClient(create_app()) as c:
        yield c


@pytest.fixture
def seed_location(sync_engine):
    """Insert a location row directly. Call after migrations have run (e.g. after `client`)."""
    def seed(title: str, prompt: str, location_id: uuid.UUID | None = None) -> uuid.UUID:
        location_id = location_id or uuid.uuid4()
        with sync_engine.begin() as conn:
            conn.execute(insert(Location.__table__).values(id=location_id, title=title, prompt=prompt))
        return location_id
    return seed


@pytest.fixture
def vote_count(sync_engine):
    """Count vote rows, optionally for one location."""
    def count(location_id: uuid.UUID | None = None) -> int:
        stmt = select(func.count()).select_from(Vote.__table__)
        if location_id is not None:
            stmt = stmt.where(Vote.__table__.c.location_id == location_id)
        with sync_engine.connect() as conn:
            return conn.execute(stmt).scalar_one()
    return count


@pytest_asyncio.fixture
async def database(database_url):
    """Migrated test database with a small request pool."""
    await run_migrations(database_url)
    db = Database(database_url, pool_size=2, pool_timeout=0.3)
    try:
        yield db
    finally:
        await db.aclose()


@pytest_asyncio.fixture
async def session(database):
    """One session leased from the pool for the duration of a test."""
    async with database.acquire() as s:
        yield s

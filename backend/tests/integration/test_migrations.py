"""Integration tests: startup migrations against a SQLite file."""
import pytest
from sqlalchemy import inspect, text

from errors import MigrationError
from migrations import run_migrations

pytestmark = pytest.mark.integration

HEAD = "8b4e6d2f0a31"


@pytest.mark.asyncio
async def test_creates_schema(database_url, sync_engine):
    await run_migrations(database_url)
    inspector = inspect(sync_engine)
    assert {"locations", "votes", "alembic_version"} <= set(inspector.get_table_names())
    columns = {c["name"]: c for c in inspector.get_columns("votes")}
    assert set(columns) == {"id", "user_agent", "agrees", "comment", "location_id", "created_at"}
    assert columns["comment"]["nullable"] is True
    fks = inspector.get_foreign_keys("votes")
    assert fks[0]["referred_table"] == "locations"
    assert fks[0]["constrained_columns"] == ["location_id"]


@pytest.mark.asyncio
async def test_running_twice_is_a_no_op(database_url, sync_engine):
    await run_migrations(database_url)
    before = inspect(sync_engine).get_columns("votes")
    await run_migrations(database_url)
    after = inspect(sync_engine).get_columns("votes")
    assert [c["name"] for c in before] == [c["name"] for c in after]
    with sync_engine.connect() as conn:
        versions = conn.execute(text("SELECT version_num FROM alembic_version")).scalars().all()
    assert versions == [HEAD]


@pytest.mark.asyncio
async def test_unreachable_database_is_fatal(tmp_path):
    url = f"sqlite+aiosqlite:///{tmp_path / 'missing-dir' / 'votes.db'}"
    with pytest.raises(MigrationError, match="Failed to run migrations"):
        await run_migrations(url)

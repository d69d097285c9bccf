"""Alembic environment.

Migrations run over a connection handed in through config.attributes["connection"]
(see migrations.run_migrations). When invoked from the alembic CLI, a single
NullPool connection is opened from DATABASE_URL instead.
"""
import asyncio
import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from db import load_trust_store, normalize_database_url
from models import Base
from models.location import Location  # noqa: F401 - register with Base
from models.vote import Vote  # noqa: F401
from utils.config import load_env_file

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _database_url() -> str:
    load_env_file()
    url = config.get_main_option("sqlalchemy.url") or os.environ.get("DATABASE_URL", "")
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return url


def run_migrations_offline() -> None:
    """Emit SQL to stdout instead of executing it."""
    url, _ = normalize_database_url(_database_url())
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection) -> None:
    context.configure(connection=connection, target_metadata=target_metadata, render_as_batch=True)
    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    url, use_tls = normalize_database_url(_database_url())
    connect_args = {"ssl": load_trust_store()} if use_tls else {}
    connectable = create_async_engine(url, poolclass=NullPool, connect_args=connect_args)
    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)
    await connectable.dispose()


def run_migrations_online() -> None:
    connection = config.attributes.get("connection")
    if connection is None:
        asyncio.run(run_async_migrations())
    else:
        do_run_migrations(connection)


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()

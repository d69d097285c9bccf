"""Startup schema migrations (Alembic), applied over one short-lived connection."""
import asyncio
import logging
import ssl
import sys
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from db import load_trust_store, normalize_database_url
from errors import MigrationError, StartupError
from utils.config import load_env_file, load_settings

logger = logging.getLogger(__name__)

ALEMBIC_DIR = Path(__file__).resolve().parent / "alembic"


def alembic_config() -> Config:
    cfg = Config()
    cfg.set_main_option("script_location", str(ALEMBIC_DIR))
    return cfg


def _upgrade(connection, cfg: Config) -> None:
    cfg.attributes["connection"] = connection
    command.upgrade(cfg, "head")


async def run_migrations(database_url: str, *, ssl_context: ssl.SSLContext | None = None) -> None:
    """Apply all pending migrations in revision order. Already-applied revisions are skipped.

    Uses its own non-pooled connection, separate from the request pool. Any
    failure (connect, SQL, a broken revision) raises MigrationError.
    """
    url, use_tls = normalize_database_url(database_url)
    connect_args = {}
    if use_tls:
        connect_args["ssl"] = ssl_context or load_trust_store()
    engine = create_async_engine(url, poolclass=NullPool, connect_args=connect_args)
    try:
        async with engine.begin() as connection:
            await connection.run_sync(_upgrade, alembic_config())
    except Exception as e:
        raise MigrationError(f"Failed to run migrations: {e}") from e
    finally:
        await engine.dispose()
    logger.info("Database migrations applied")


def main() -> None:
    """Apply migrations and exit; non-zero exit with a message on failure."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    load_env_file()
    try:
        settings = load_settings()
        logging.getLogger().setLevel(settings.log_level)
        asyncio.run(run_migrations(settings.database_url))
    except StartupError as e:
        sys.exit(str(e))


if __name__ == "__main__":
    main()

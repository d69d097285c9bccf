"""Database engine, TLS trust store and the request connection pool.

PostgreSQL (prod) is reached through asyncpg over TLS; SQLite through aiosqlite
(dev/tests). One Database instance is built at startup and stored on app.state;
request handlers receive sessions from it through the get_db dependency.
"""
import logging
import os
import ssl
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Request
from sqlalchemy import event
from sqlalchemy import exc as sa_exc
from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from errors import ConnectionFailed, PoolExhausted, TrustStoreError

logger = logging.getLogger(__name__)

_POSTGRES_DRIVERS = {"postgres", "postgresql", "postgresql+asyncpg", "postgresql+psycopg2", "postgresql+psycopg"}


def load_trust_store() -> ssl.SSLContext:
    """Client TLS context trusting the platform root CAs. No client certificate is presented."""
    try:
        context = ssl.create_default_context(ssl.Purpose.SERVER_AUTH)
    except (ssl.SSLError, OSError) as e:
        raise TrustStoreError(f"Failed to load native trust roots: {e}") from e
    # CA directories (capath) are loaded lazily and do not show up in cert_store_stats.
    paths = ssl.get_default_verify_paths()
    has_capath = bool(paths.capath) and os.path.isdir(paths.capath)
    if context.cert_store_stats().get("x509_ca", 0) == 0 and not has_capath:
        raise TrustStoreError("Failed to load native trust roots: no CA certificates found")
    return context


def normalize_database_url(raw: str) -> tuple[URL, bool]:
    """Return (url, use_tls). PostgreSQL URLs are moved onto asyncpg and lose sslmode, which asyncpg rejects."""
    url = make_url(raw)
    if url.drivername not in _POSTGRES_DRIVERS:
        return url, False
    sslmode = url.query.get("sslmode")
    url = url.set(drivername="postgresql+asyncpg").difference_update_query(["sslmode"])
    return url, sslmode != "disable"


def is_sqlite(url: URL) -> bool:
    return url.get_backend_name() == "sqlite"


def engine_options(url: URL, *, pool_size: int, pool_timeout: float, ssl_context: ssl.SSLContext | None) -> dict:
    """Keyword arguments for create_async_engine for the request pool."""
    if is_sqlite(url) and url.database in (None, "", ":memory:"):
        # In-memory SQLite: one shared connection so all sessions see the same DB.
        return {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}
    options = {
        "pool_size": pool_size,
        "max_overflow": 0,
        "pool_timeout": pool_timeout,
        "pool_pre_ping": True,
    }
    if ssl_context is not None:
        options["connect_args"] = {"ssl": ssl_context}
    return options


def _enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    # Enable foreign keys for SQLite so FK behaviour matches PostgreSQL.
    @event.listens_for(engine.sync_engine, "connect")
    def _sqlite_fk(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def _log_invalidations(engine: AsyncEngine) -> None:
    @event.listens_for(engine.sync_engine, "invalidate")
    def _on_invalidate(dbapi_conn, connection_record, exception):
        # The driver's connection died (or failed a ping); the pool replaces it on next checkout.
        logger.warning("Database connection invalidated: %r", exception)


class Database:
    """Bounded pool of database connections handed out one session per request."""

    def __init__(
        self,
        url: str,
        *,
        pool_size: int = 10,
        pool_timeout: float = 30.0,
        ssl_context: ssl.SSLContext | None = None,
    ) -> None:
        self.url, use_tls = normalize_database_url(url)
        if use_tls and ssl_context is None:
            ssl_context = load_trust_store()
        self.ssl_context = ssl_context if use_tls else None
        self.pool_size = pool_size
        self.engine = create_async_engine(
            self.url,
            echo=False,
            **engine_options(self.url, pool_size=pool_size, pool_timeout=pool_timeout, ssl_context=self.ssl_context),
        )
        if is_sqlite(self.url):
            _enable_sqlite_foreign_keys(self.engine)
        _log_invalidations(self.engine)
        self.session_factory = async_sessionmaker(self.engine, expire_on_commit=False, class_=AsyncSession)

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[AsyncSession]:
        """Check out a connection and yield a session bound to it; returned to the pool on exit."""
        session = self.session_factory()
        try:
            try:
                await session.connection()
            except sa_exc.TimeoutError as e:
                raise PoolExhausted("Failed to access db connection from pool") from e
            except (sa_exc.DBAPIError, OSError) as e:
                raise ConnectionFailed(f"Failed to establish db connection: {e}") from e
            yield session
        finally:
            await session.close()

    async def aclose(self) -> None:
        await self.engine.dispose()

    def __repr__(self) -> str:
        return f"Database({self.url.render_as_string(hide_password=True)!r}, pool_size={self.pool_size})"


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """FastAPI dependency: yield a pooled DB session and release it after the request."""
    database: Database = request.app.state.db
    async with database.acquire() as session:
        yield session

"""Location votes service: FastAPI backend."""
import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

from api.locations import router as locations_router
from api.routes import router
from api.votes import router as votes_router
from db import Database, load_trust_store, normalize_database_url
from errors import StartupError, register_error_handlers
from migrations import run_migrations
from schemas.health import SERVICE_VERSION
from utils.config import load_env_file, load_settings

logger = logging.getLogger(__name__)


async def _open_database() -> Database:
    """Run migrations, then build the request pool. Raises StartupError subclasses on failure."""
    settings = load_settings()
    logging.getLogger().setLevel(settings.log_level)
    _, use_tls = normalize_database_url(settings.database_url)
    ssl_context = load_trust_store() if use_tls else None
    await run_migrations(settings.database_url, ssl_context=ssl_context)
    return Database(
        settings.database_url,
        pool_size=settings.pool_size,
        pool_timeout=settings.pool_timeout,
        ssl_context=ssl_context,
    )


def create_app(database: Database | None = None) -> FastAPI:
    """Build the app. With a database given, startup skips migrations and uses it as the pool."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if database is not None:
            app.state.db = database
            yield
            return
        try:
            app.state.db = await _open_database()
        except StartupError as e:
            logger.critical("Startup failed: %s", e)
            raise
        logger.info("Database ready")
        try:
            yield
        finally:
            await app.state.db.aclose()

    app = FastAPI(
        title="Location Votes",
        description="Read locations and submit votes",
        version=SERVICE_VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["content-type"],
    )
    register_error_handlers(app)

    app.include_router(router)
    app.include_router(locations_router)
    app.include_router(votes_router)
    return app


app = create_app()


def run() -> None:
    """Serve the app with uvicorn. Exits non-zero on bad configuration or failed startup."""
    load_env_file()
    try:
        settings = load_settings()
    except StartupError as e:
        sys.exit(str(e))
    logging.getLogger().setLevel(settings.log_level)
    logger.info("Listening on %s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()

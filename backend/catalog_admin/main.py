"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from catalog_admin.config import get_settings
from catalog_admin.infrastructure.database import Base, engine
from catalog_admin.infrastructure.dependencies import get_upload_http_client
from catalog_admin.infrastructure.logging.log_config import setup_logging
from catalog_admin.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


async def _ensure_database_exists() -> None:
    """Create the PostgreSQL database if it does not yet exist.

    Connects to the default ``postgres`` maintenance database, checks for the
    target database name, and issues ``CREATE DATABASE`` when missing.
    """
    from urllib.parse import urlparse

    import asyncpg

    settings = get_settings()
    if not settings.database_url.startswith("postgresql"):
        return
    parsed = urlparse(settings.database_url)
    db_name = parsed.path.lstrip("/")
    if not db_name:
        return

    # Build a connection URL pointing at the default 'postgres' database
    maintenance_url = settings.database_url.rsplit("/", 1)[0] + "/postgres"
    maintenance_url = maintenance_url.replace("postgresql+asyncpg://", "postgresql://", 1)

    try:
        conn = await asyncpg.connect(maintenance_url)
        try:
            exists = await conn.fetchval(
                "SELECT 1 FROM pg_database WHERE datname = $1", db_name
            )
            if not exists:
                # CREATE DATABASE cannot run inside a transaction block
                await conn.execute(f'CREATE DATABASE "{db_name}"')
                logger.info("Created database '%s'", db_name)
            else:
                logger.debug("Database '%s' already exists", db_name)
        finally:
            await conn.close()
    except (OSError, asyncpg.PostgresError) as exc:
        logger.warning("Could not auto-create database '%s': %s", db_name, exc)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: configure logging, create tables, release the upload client."""
    settings = get_settings()
    setup_logging()

    # 0. Ensure the PostgreSQL database exists (auto-create if missing)
    await _ensure_database_exists()

    # 1. Create the documents table
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    if not (settings.cloudinary_cloud_name and settings.cloudinary_upload_preset):
        logger.warning(
            "Cloudinary is not configured; image uploads will be rejected until "
            "CLOUDINARY_CLOUD_NAME and CLOUDINARY_UPLOAD_PRESET are set."
        )

    yield

    # Shutdown
    await get_upload_http_client().aclose()
    await engine.dispose()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Mount API routes
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "catalog_admin.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )

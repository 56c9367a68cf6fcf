"""FastAPI application factory and process entry point."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from snipshare.config import Settings, get_settings
from snipshare.infrastructure.database import engine
from snipshare.infrastructure.database.bootstrap import create_schema, ensure_postgres_database
from snipshare.infrastructure.logging.log_config import setup_logging
from snipshare.presentation.api.error_handlers import register_exception_handlers
from snipshare.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging and the schema on startup; release the pool on shutdown."""
    setup_logging()
    await ensure_postgres_database(get_settings().database_url)
    await create_schema(engine)
    logger.info("Snippet store ready")
    try:
        yield
    finally:
        await engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title=settings.app_title, version=settings.app_version, lifespan=lifespan)
    # The share page is served from another origin and sends the snippet id as a header.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    app.include_router(api_router)
    return app


app = create_app()


def run() -> None:
    """Development server: ``python -m snipshare.main``."""
    import uvicorn

    uvicorn.run("snipshare.main:app", host="0.0.0.0", port=8020, reload=True)


if __name__ == "__main__":
    run()

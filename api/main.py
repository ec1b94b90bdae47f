"""Books API: FastAPI entry point.

Registers middleware, exception handlers, routers and lifecycle hooks.
The database and the book store are created in the lifespan and stored on
``app.state``; routes receive the store through a dependency.
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.errors import register_exception_handlers
from api.middleware import RequestContextMiddleware
from core.config import Settings
from core.database import Database
from core.observability.logging_setup import configure_logging
from verticals.books.repository import BookStore
from verticals.books.router import router as books_router

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application. Reads the environment when no settings are given."""
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    # -----------------------------------------------------------------------
    # Lifespan
    # -----------------------------------------------------------------------

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Open the database at startup, dispose of it at shutdown."""
        database = Database.from_settings(settings)
        if settings.create_tables:
            await database.init_models()
        app.state.database = database
        app.state.book_store = BookStore(database)

        logger.info("Books API started")
        try:
            yield
        finally:
            await database.close()
            logger.info("Books API shut down")

    # -----------------------------------------------------------------------
    # App
    # -----------------------------------------------------------------------

    app = FastAPI(
        title="Books API",
        description="CRUD service for book records",
        version=settings.version,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request id + access log
    app.add_middleware(RequestContextMiddleware)

    register_exception_handlers(app)
    app.include_router(books_router, tags=["Books"])

    # -----------------------------------------------------------------------
    # Health & root
    # -----------------------------------------------------------------------

    @app.get("/health")
    async def health():
        return {"status": "healthy", "version": settings.version}

    @app.get("/")
    async def root():
        return {
            "name": "Books API",
            "version": settings.version,
            "docs": "/docs",
        }

    return app


def run() -> None:
    """Start the server with settings from the environment."""
    settings = Settings.from_env()
    uvicorn.run(
        create_app(settings),
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()

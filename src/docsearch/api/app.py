"""FastAPI application factory and lifecycle management."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from docsearch import __version__
from docsearch.api.deps import set_engine
from docsearch.api.errors import register_exception_handlers
from docsearch.api.v1.router import router as v1_router
from docsearch.config.settings import Settings
from docsearch.core.engine import DocSearchEngine

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings. If None, loads from environment.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        # Auto-detect docsearch-config.yaml if present
        yaml_path = Path("docsearch-config.yaml")
        if yaml_path.exists():
            logger.info("Loading configuration from %s", yaml_path)
            settings = Settings.from_yaml(yaml_path)
        else:
            settings = Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Manage application lifecycle (startup/shutdown)."""
        logger.info("Starting docsearch v%s", __version__)

        engine = DocSearchEngine(settings)
        await engine.initialize()
        set_engine(engine)

        app.state.settings = settings
        app.state.engine = engine

        if not settings.updates_allowed:
            logger.warning("Updates are disabled; serving in read-only mode")
        logger.info("docsearch is ready to serve requests on port %d", settings.server.port)
        yield

        logger.info("Shutting down docsearch...")
        await engine.shutdown()
        set_engine(None)
        logger.info("docsearch shutdown complete")

    app = FastAPI(
        title=settings.app_name,
        description="Multi-tenant document search over per-collection OpenSearch indices.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(v1_router, prefix="/api/v1")

    return app

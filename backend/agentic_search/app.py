"""FastAPI application setup for Agentic Search."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from agentic_search.api import dependencies
from agentic_search.api.routes_admin import router as admin_router
from agentic_search.api.routes_search import router as search_router
from agentic_search.core.config import ResolvedConfig
from agentic_search.core.logging import get_logger
from agentic_search.retrieval import SearchOrchestrator

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build backend clients on startup and release them on shutdown."""
    orchestrator = dependencies.get_orchestrator()
    logger.info("Search service ready in %s mode", orchestrator.mode.value)
    try:
        yield
    finally:
        await dependencies.shutdown()


def create_app(config: ResolvedConfig, orchestrator: SearchOrchestrator | None = None) -> FastAPI:
    """Create the HTTP application serving ``config``'s search mode."""
    dependencies.configure(config, orchestrator)
    app = FastAPI(
        title="Agentic Search",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.include_router(search_router, prefix="", tags=["search"])
    app.include_router(admin_router, prefix="", tags=["admin"])
    return app


__all__ = ["create_app"]

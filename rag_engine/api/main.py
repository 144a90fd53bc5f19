"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, rag_engine.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

from contextlib import asynccontextmanager
import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rag_engine.api.deps.dependencies import get_service_cache
from rag_engine.configs import get_settings
from rag_engine.observability import configure_logging
from rag_engine.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware
from .routers import documents_router, health_router, search_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Configures logging, ensures the pgvector schema exists when the pgvector
    store is selected, and clears cached services on shutdown.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger = logging.getLogger("uvicorn")
    logger.info("Starting RAG engine", extra={"environment": settings.environment})

    # Startup
    if settings.retrieval.store_type.lower() == "pgvector":
        from rag_engine.boundary.db.connection import create_tables, get_async_engine

        engine = get_async_engine()
        try:
            await create_tables(engine)
        finally:
            await engine.dispose()
        logger.info("pgvector schema ready")

    cache = get_service_cache()
    _ = cache.governor
    logger.info("Service cache pre-warmed")

    yield

    # Shutdown
    cache.clear()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = get_settings()
    app = FastAPI(
        title="RAG Engine API",
        description="Document ingestion, similarity retrieval and citation rendering",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(documents_router, prefix="/api/v1")
    app.include_router(search_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "rag_engine.api.main:app",
        host="0.0.0.0",
        port=8000,
    )

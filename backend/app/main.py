"""
FastAPI main application.
REST API for exchange orders and exchange rates.
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.app.core.config import settings
from backend.app.api.v1.api import api_router
from deelrate.container import Container

# Logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def build_container() -> Container:
    """Wire adapters for the configured persistence backend."""
    if settings.USE_IN_MEMORY_REPOSITORY:
        logger.info("Using in-memory order repository")
        return Container()

    from backend.app.db.init_db import create_tables
    from backend.app.db.session import AsyncSessionLocal

    await create_tables()
    return Container.create_with_database(AsyncSessionLocal)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifecycle

    Startup: build the container (and database tables)
    Shutdown: release HTTP clients and database connections
    """
    logger.info("Application starting...")

    app.state.container = await build_container()

    logger.info("Application started")

    yield

    logger.info("Application shutting down...")

    await app.state.container.close()
    if not settings.USE_IN_MEMORY_REPOSITORY:
        from backend.app.db.session import engine
        await engine.dispose()

    logger.info("Application stopped")


# FastAPI application
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description=settings.DESCRIPTION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    docs_url=f"{settings.API_V1_STR}/docs",
    redoc_url=f"{settings.API_V1_STR}/redoc",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

# API routers
app.include_router(api_router, prefix=settings.API_V1_STR)


@app.get("/")
async def root() -> dict:
    """Root endpoint"""
    return {
        "message": "DeelRate Exchange API",
        "version": settings.VERSION,
        "docs": f"{settings.API_V1_STR}/docs",
    }


@app.exception_handler(Exception)
async def global_exception_handler(request, exc: Exception):
    """Global exception handler"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error.",
            "type": type(exc).__name__,
        },
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "backend.app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level=settings.LOG_LEVEL.lower(),
    )

"""
Q&A Forum Backend Application.

FastAPI application where users ask questions
and reply to them.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from loguru import logger

from qaforum.api.errors import register_exception_handlers
from qaforum.api.v2 import endpoint_routers as api_v2_endpoint_routers
from qaforum.api.v2 import router as api_v2_router
from qaforum.core.config import settings
from qaforum.modules.forum.store import ForumStore, get_forum_store


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info("Starting Q&A Forum Backend...")

    store = get_forum_store()
    logger.info(f"Forum store ready with {len(store)} questions")

    yield

    logger.info("Shutting down Q&A Forum Backend...")
    logger.info(f"Forum store held {len(store)} questions (discarded)")
    logger.info("Shutdown complete")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Q&A Forum Backend

    ## Features

    - **Questions**: Ask a question and browse all questions
    - **Replies**: Answer a question, read every reply in order
    - **API**: RESTful JSON API with OpenAPI documentation

    ## Documentation

    - [API Docs](/docs) - Interactive Swagger UI
    - [ReDoc](/redoc) - Alternative documentation
    """,
    openapi_url=f"{settings.api_prefix}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
    default_response_class=ORJSONResponse,
    debug=settings.debug,
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

register_exception_handlers(
    app,
    api_routers=[(settings.api_prefix, r) for r in api_v2_endpoint_routers],
)

# Include API router
app.include_router(api_v2_router, prefix=settings.api_prefix)


@app.get("/health", tags=["System"])
async def health_check(
    store: ForumStore = Depends(get_forum_store),
) -> dict:
    """Health check endpoint for monitoring."""
    return {
        "status": "healthy",
        "version": settings.app_version,
        "questions": len(store),
    }


@app.get("/", tags=["System"])
async def root() -> dict:
    """Root endpoint with API information."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "api": settings.api_prefix,
    }

"""
DuelLog API

FastAPI application for recording and browsing card game matches.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from duellog.config import settings
from duellog.database import engine
from duellog.exceptions import DuelLogError, BootstrapError
from duellog.services.schema_service import ensure_schema
from duellog.api import (
    matches_router,
    deck_templates_router,
    decks_router,
    seasons_router,
    stats_router,
    health_router,
)

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup: bring the store to the latest schema before serving
    try:
        report = ensure_schema(engine)
    except BootstrapError as e:
        logger.critical("Schema bootstrap failed, refusing to start: %s", e)
        raise
    if report.changed:
        logger.info(
            "Schema updated (base: %s, additive: %s)",
            report.base_applied,
            report.additive_applied,
        )
    yield
    engine.dispose()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    DuelLog API

    Personal match log for online card games:
    - **Matches**: one recorded game with both decks, rank and result
    - **Seasons**: monthly ranked seasons, created on first use
    - **Decks**: archetype identities (main + sub)
    - **Deck templates**: display metadata for deck names

    ## Features
    - Filtering by season, mode, deck, result and date range
    - Season win-rate statistics
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DuelLogError)
async def duellog_error_handler(request: Request, exc: DuelLogError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "database error"})


# Register routers
app.include_router(matches_router)
app.include_router(deck_templates_router)
app.include_router(decks_router)
app.include_router(seasons_router)
app.include_router(stats_router)
app.include_router(health_router)


@app.get("/", tags=["health"])
def root():
    """Root endpoint returning API info."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


@app.get("/health", tags=["health"])
def health_check():
    """Health check endpoint for container orchestration."""
    return {"status": "healthy"}

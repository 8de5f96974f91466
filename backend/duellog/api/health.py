"""
Health & Monitoring API Router

Endpoints for database health checks and statistics.
"""
import time
from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy import text, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from pydantic import BaseModel

from duellog.config import get_settings
from duellog.database import get_db
from duellog.models import Season, Deck, DeckTemplate, Match

router = APIRouter(prefix="/api/health", tags=["health"])


class DatabaseStats(BaseModel):
    """Database statistics response"""
    status: str
    connected: bool
    response_time_ms: float
    tables: dict
    error: Optional[str] = None


class FullHealthResponse(BaseModel):
    """Complete health check response"""
    status: str
    timestamp: datetime
    database: DatabaseStats
    api_version: str


@router.get("/db", response_model=FullHealthResponse)
def check_database_health(db: Session = Depends(get_db)) -> FullHealthResponse:
    """
    Database health check with row counts.

    Returns:
    - Connection status
    - Response time
    - Table row counts
    """
    start_time = time.time()
    connected = False
    error = None
    tables_stats = {}

    try:
        db.execute(text("SELECT 1"))
        connected = True

        tables_stats = {
            "seasons": db.execute(select(func.count(Season.id))).scalar() or 0,
            "decks": db.execute(select(func.count(Deck.id))).scalar() or 0,
            "deck_templates": db.execute(select(func.count(DeckTemplate.id))).scalar() or 0,
            "matches": db.execute(select(func.count(Match.id))).scalar() or 0,
        }
    except SQLAlchemyError as e:
        connected = False
        error = str(e)

    response_time = (time.time() - start_time) * 1000  # Convert to ms

    return FullHealthResponse(
        status="healthy" if connected else "unhealthy",
        timestamp=datetime.now(),
        database=DatabaseStats(
            status="connected" if connected else "disconnected",
            connected=connected,
            response_time_ms=round(response_time, 2),
            tables=tables_stats,
            error=error,
        ),
        api_version=get_settings().app_version,
    )

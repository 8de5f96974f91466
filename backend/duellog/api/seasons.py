"""
Seasons API Router

Endpoints for Season operations.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from duellog.config import get_settings
from duellog.database import get_db
from duellog.services.season_service import SeasonService
from duellog.schemas.season import SeasonListResponse, SeasonInfoResponse

router = APIRouter(prefix="/api/seasons", tags=["seasons"])


@router.get("", response_model=SeasonListResponse)
def list_seasons(
    game_key: Optional[str] = Query(None, alias="gameKey", description="Game key"),
    db: Session = Depends(get_db),
) -> SeasonListResponse:
    """
    Get all seasons recorded for a game.

    Seasons are created automatically the first time a match uses a code.
    """
    service = SeasonService(db)
    return service.list_seasons(game_key or get_settings().default_game_key)


@router.get("/current", response_model=SeasonInfoResponse)
def get_current_season() -> SeasonInfoResponse:
    """Code and calendar range of the running monthly season"""
    return SeasonService.describe()


@router.get("/info/{code}", response_model=SeasonInfoResponse)
def get_season_info(code: str) -> SeasonInfoResponse:
    """Calendar range of a monthly season code such as S49"""
    return SeasonService.describe(code)

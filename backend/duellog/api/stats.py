"""
Stats API Router
"""
import datetime as dt
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from duellog.api.deps import get_current_user_id
from duellog.database import get_db
from duellog.services.stats_service import StatsService
from duellog.schemas.common import MatchMode
from duellog.schemas.match import MatchFilter
from duellog.schemas.stats import SeasonStatsResponse

router = APIRouter(prefix="/api/stats", tags=["stats"])


@router.get("/season", response_model=SeasonStatsResponse)
def get_season_stats(
    season_code: Optional[str] = Query(None, alias="seasonCode", description="Season code"),
    mode: Optional[MatchMode] = Query(None, description="Filter by mode"),
    date_from: Optional[dt.date] = Query(None, alias="dateFrom"),
    date_to: Optional[dt.date] = Query(None, alias="dateTo"),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> SeasonStatsResponse:
    """
    Win rates overall, by play order, by deck and by day.
    """
    service = StatsService(db, user_id)
    filters = MatchFilter(
        season_code=season_code,
        mode=mode,
        date_from=date_from,
        date_to=date_to,
    )
    return service.season_stats(filters)

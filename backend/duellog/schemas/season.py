"""
Season Schemas

Pydantic models for Season endpoints.
"""
from typing import List, Optional
from datetime import date

from duellog.schemas.common import CamelModel


class SeasonResponse(CamelModel):
    """Season response schema"""
    id: str
    game_id: str
    code: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class SeasonListResponse(CamelModel):
    seasons: List[SeasonResponse]
    total: int


class SeasonInfoResponse(CamelModel):
    """Calendar information derived from a monthly season code"""
    code: str
    season_number: int
    year: int
    month: int
    start: date
    end: date

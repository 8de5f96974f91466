"""
Season Service

Read-side operations for seasons. Creation happens lazily through
EntityResolver.resolve_season.
"""
from datetime import date
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from duellog.exceptions import InvalidInputError
from duellog.models import Season
from duellog.schemas.season import (
    SeasonResponse,
    SeasonListResponse,
    SeasonInfoResponse,
)
from duellog.services.entity_resolver import EntityResolver
from duellog.services.season_codes import current_season_code, season_info


class SeasonService:
    """Service class for Season operations"""

    def __init__(self, db: Session):
        self.db = db
        self.resolver = EntityResolver(db)

    def list_seasons(self, game_key: str) -> SeasonListResponse:
        """All seasons of a game, newest start date first"""
        game = self.resolver.resolve_game(game_key)
        query = (
            select(Season)
            .where(Season.game_id == game.id)
            .order_by(Season.start_date.desc().nullslast(), Season.code.desc())
        )
        seasons = self.db.execute(query).scalars().all()
        return SeasonListResponse(
            seasons=[SeasonResponse.model_validate(s) for s in seasons],
            total=len(seasons),
        )

    @staticmethod
    def describe(code: Optional[str] = None, today: Optional[date] = None) -> SeasonInfoResponse:
        """Calendar span of `code`, or of the current season when omitted"""
        info = season_info(code or current_season_code(today))
        if info is None:
            raise InvalidInputError(f"not a monthly season code: {code}")
        return SeasonInfoResponse(
            code=info.code,
            season_number=info.season_number,
            year=info.year,
            month=info.month,
            start=info.start,
            end=info.end,
        )

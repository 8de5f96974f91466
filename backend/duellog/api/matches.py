"""
Matches API Router

Endpoints for Match operations.
"""
import datetime as dt
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from duellog.api.deps import get_current_user_id
from duellog.database import get_db
from duellog.services.match_service import MatchService
from duellog.schemas.common import MatchMode, MessageResponse
from duellog.schemas.match import (
    CreateMatchRequest,
    UpdateMatchRequest,
    RelinkDecksRequest,
    MatchFilter,
    MatchWithDetails,
    MatchListResponse,
)

router = APIRouter(prefix="/api/matches", tags=["matches"])


def get_match_service(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> MatchService:
    return MatchService(db, user_id)


@router.get("", response_model=MatchListResponse)
def list_matches(
    season_code: Optional[str] = Query(None, alias="seasonCode", description="Filter by season code"),
    mode: Optional[MatchMode] = Query(None, description="Filter by mode"),
    my_deck_main: Optional[str] = Query(None, alias="myDeckMain", description="Filter by my main deck"),
    opp_deck_main: Optional[str] = Query(None, alias="oppDeckMain", description="Filter by opponent main deck"),
    result: Optional[str] = Query(None, description="Filter by result (W/L)"),
    play_order: Optional[str] = Query(None, alias="playOrder", description="Filter by play order"),
    date_from: Optional[dt.date] = Query(None, alias="dateFrom", description="Earliest date (inclusive)"),
    date_to: Optional[dt.date] = Query(None, alias="dateTo", description="Latest date (inclusive)"),
    service: MatchService = Depends(get_match_service),
) -> MatchListResponse:
    """
    Get matches, newest first.

    Every filter is optional; omitted filters do not constrain the result.
    """
    filters = MatchFilter(
        season_code=season_code,
        mode=mode,
        my_deck_main=my_deck_main,
        opp_deck_main=opp_deck_main,
        result=result,
        play_order=play_order,
        date_from=date_from,
        date_to=date_to,
    )
    return service.list(filters)


@router.get("/{match_id}", response_model=MatchWithDetails)
def get_match(
    match_id: str,
    service: MatchService = Depends(get_match_service),
) -> MatchWithDetails:
    return service.get(match_id)


@router.post("", response_model=MessageResponse, status_code=201)
def create_match(
    request: CreateMatchRequest,
    service: MatchService = Depends(get_match_service),
) -> MessageResponse:
    """
    Record a match.

    Unknown season codes and deck names are created on first use.
    """
    match_id = service.create(request)
    return MessageResponse(id=match_id, message="Match created")


@router.patch("/{match_id}", response_model=MessageResponse)
def update_match(
    match_id: str,
    request: UpdateMatchRequest,
    service: MatchService = Depends(get_match_service),
) -> MessageResponse:
    """Update only the supplied fields"""
    service.update(match_id, request)
    return MessageResponse(id=match_id, message="Match updated")


@router.put("/{match_id}/decks", response_model=MessageResponse)
def relink_match_decks(
    match_id: str,
    request: RelinkDecksRequest,
    service: MatchService = Depends(get_match_service),
) -> MessageResponse:
    """Reassign my/opponent deck by name"""
    service.relink_decks(match_id, request)
    return MessageResponse(id=match_id, message="Match decks updated")


@router.delete("/{match_id}", response_model=MessageResponse)
def delete_match(
    match_id: str,
    service: MatchService = Depends(get_match_service),
) -> MessageResponse:
    service.delete(match_id)
    return MessageResponse(id=match_id, message="Match deleted")

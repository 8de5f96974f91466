"""
Match Schemas

Pydantic models for Match endpoints.
"""
from pydantic import Field
from typing import List, Optional
import datetime as dt

from duellog.schemas.common import CamelModel, MatchMode
from duellog.schemas.deck import DeckRef, DeckResponse


class CreateMatchRequest(CamelModel):
    """
    Create request.

    game_key, season_code, date and both decks are required; they are
    optional here so that a missing value is reported as invalid input
    rather than a validation error.
    """
    game_key: Optional[str] = None
    season_code: Optional[str] = None
    date: Optional[dt.date] = None
    mode: Optional[MatchMode] = None
    rank: Optional[str] = Field(None, max_length=50)
    my_deck: Optional[DeckRef] = None
    opp_deck: Optional[DeckRef] = None
    play_order: Optional[str] = Field(None, max_length=20)
    result: Optional[str] = Field(None, max_length=20)
    note: Optional[str] = None


class UpdateMatchRequest(CamelModel):
    """Partial update: only fields present in the request change"""
    date: Optional[dt.date] = None
    mode: Optional[MatchMode] = None
    rank: Optional[str] = Field(None, max_length=50)
    play_order: Optional[str] = Field(None, max_length=20)
    result: Optional[str] = Field(None, max_length=20)
    note: Optional[str] = None


class RelinkDecksRequest(CamelModel):
    """Re-resolve one or both deck assignments of a match"""
    my_deck: Optional[DeckRef] = None
    opp_deck: Optional[DeckRef] = None


class MatchFilter(CamelModel):
    """Match filter parameters; absent criteria are unconstrained"""
    season_code: Optional[str] = None
    mode: Optional[MatchMode] = None
    my_deck_main: Optional[str] = None
    opp_deck_main: Optional[str] = None
    result: Optional[str] = None
    play_order: Optional[str] = None
    date_from: Optional[dt.date] = None
    date_to: Optional[dt.date] = None


class MatchWithDetails(CamelModel):
    """Match joined with its season code and both decks"""
    id: str
    date: dt.date
    mode: str
    rank: str
    play_order: Optional[str] = None
    result: Optional[str] = None
    note: Optional[str] = None
    created_at: dt.datetime
    updated_at: dt.datetime
    season_code: str
    my_deck: DeckResponse
    opp_deck: DeckResponse


class MatchListResponse(CamelModel):
    matches: List[MatchWithDetails]
    total: int

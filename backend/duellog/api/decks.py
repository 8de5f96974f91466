"""
Decks API Router
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from duellog.config import get_settings
from duellog.database import get_db
from duellog.services.deck_service import DeckService
from duellog.schemas.deck import DeckListResponse

router = APIRouter(prefix="/api/decks", tags=["decks"])


@router.get("", response_model=DeckListResponse)
def list_decks(
    game_key: Optional[str] = Query(None, alias="gameKey", description="Game key"),
    main: Optional[str] = Query(None, description="Filter by main archetype"),
    db: Session = Depends(get_db),
) -> DeckListResponse:
    service = DeckService(db)
    return service.list_decks(game_key or get_settings().default_game_key, main=main)

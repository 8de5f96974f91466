"""
Deck Service

Read-side listing of decks known for a game.
"""
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from duellog.models import Deck
from duellog.schemas.deck import DeckResponse, DeckListResponse
from duellog.services.entity_resolver import EntityResolver


class DeckService:
    """Service class for Deck operations"""

    def __init__(self, db: Session):
        self.db = db
        self.resolver = EntityResolver(db)

    def list_decks(self, game_key: str, main: Optional[str] = None) -> DeckListResponse:
        game = self.resolver.resolve_game(game_key)
        query = select(Deck).where(Deck.game_id == game.id)
        if main:
            query = query.where(Deck.main == main)
        query = query.order_by(Deck.main, Deck.sub.nullsfirst())

        decks = self.db.execute(query).scalars().all()
        return DeckListResponse(
            decks=[DeckResponse.model_validate(d) for d in decks],
            total=len(decks),
        )

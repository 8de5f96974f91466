"""
Deck Schemas

Pydantic models for deck references and listings.
"""
from pydantic import Field
from typing import List, Optional

from duellog.schemas.common import CamelModel


class DeckRef(CamelModel):
    """Human-entered deck identity: main archetype plus optional sub"""
    main: str = Field(..., min_length=1, max_length=100)
    sub: Optional[str] = Field(None, max_length=100)


class DeckResponse(CamelModel):
    """Deck response schema"""
    id: str
    main: str
    sub: Optional[str] = None


class DeckListResponse(CamelModel):
    decks: List[DeckResponse]
    total: int

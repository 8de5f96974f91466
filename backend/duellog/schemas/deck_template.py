"""
Deck Template Schemas

Pydantic models for deck display templates.
"""
from pydantic import Field
from typing import List, Optional
from datetime import datetime

from duellog.schemas.common import CamelModel, DeckType


class DeckTemplateCreate(CamelModel):
    """Create request; theme defaults to the "no theme" sentinel"""
    game_key: Optional[str] = None
    main: str = Field(..., min_length=1, max_length=100)
    theme: Optional[str] = Field(None, max_length=50)
    deck_type: DeckType = DeckType.MAIN


class DeckTemplateUpdate(CamelModel):
    """Partial update; only supplied fields change"""
    main: Optional[str] = Field(None, min_length=1, max_length=100)
    theme: Optional[str] = Field(None, max_length=50)
    deck_type: Optional[DeckType] = None


class DeckTemplateResponse(CamelModel):
    id: str
    game_id: str
    main: str
    theme: str
    deck_type: str
    created_at: datetime


class DeckTemplateListResponse(CamelModel):
    templates: List[DeckTemplateResponse]
    total: int

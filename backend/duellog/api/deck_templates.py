"""
Deck Templates API Router

Endpoints for deck display templates.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from duellog.config import get_settings
from duellog.database import get_db
from duellog.services.deck_template_service import DeckTemplateService
from duellog.schemas.common import DeckType
from duellog.schemas.deck_template import (
    DeckTemplateCreate,
    DeckTemplateUpdate,
    DeckTemplateResponse,
    DeckTemplateListResponse,
)

router = APIRouter(prefix="/api/deck-templates", tags=["deck-templates"])


def get_template_service(db: Session = Depends(get_db)) -> DeckTemplateService:
    return DeckTemplateService(db, get_settings().default_game_key)


@router.get("", response_model=DeckTemplateListResponse)
def list_deck_templates(
    game_key: Optional[str] = Query(None, alias="gameKey", description="Game key"),
    deck_type: Optional[DeckType] = Query(None, alias="deckType", description="Filter by kind"),
    service: DeckTemplateService = Depends(get_template_service),
) -> DeckTemplateListResponse:
    return service.list_templates(
        game_key=game_key,
        deck_type=deck_type.value if deck_type else None,
    )


@router.post("", response_model=DeckTemplateResponse, status_code=201)
def create_deck_template(
    request: DeckTemplateCreate,
    service: DeckTemplateService = Depends(get_template_service),
) -> DeckTemplateResponse:
    return service.create_template(request)


@router.patch("/{template_id}", response_model=DeckTemplateResponse)
def update_deck_template(
    template_id: str,
    request: DeckTemplateUpdate,
    service: DeckTemplateService = Depends(get_template_service),
) -> DeckTemplateResponse:
    return service.update_template(template_id, request)


@router.delete("/{template_id}", status_code=204)
def delete_deck_template(
    template_id: str,
    service: DeckTemplateService = Depends(get_template_service),
) -> Response:
    service.delete_template(template_id)
    return Response(status_code=204)

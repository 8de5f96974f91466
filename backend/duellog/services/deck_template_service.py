"""
Deck Template Service

Explicit user edits of deck display templates. Auto-creation on first
deck use lives in EntityResolver.ensure_deck_template.
"""
import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from duellog.exceptions import InvalidInputError, NotFoundError
from duellog.models import DeckTemplate
from duellog.models.deck_template import NO_THEME
from duellog.models.types import new_template_id, utc_now
from duellog.schemas.deck_template import (
    DeckTemplateCreate,
    DeckTemplateUpdate,
    DeckTemplateResponse,
    DeckTemplateListResponse,
)
from duellog.services.entity_resolver import EntityResolver

logger = logging.getLogger(__name__)


class DeckTemplateService:
    """Service class for DeckTemplate operations"""

    def __init__(self, db: Session, default_game_key: str):
        self.db = db
        self.default_game_key = default_game_key
        self.resolver = EntityResolver(db)

    def list_templates(
        self,
        game_key: Optional[str] = None,
        deck_type: Optional[str] = None,
    ) -> DeckTemplateListResponse:
        game = self.resolver.resolve_game(game_key or self.default_game_key)
        query = select(DeckTemplate).where(DeckTemplate.game_id == game.id)
        if deck_type:
            query = query.where(DeckTemplate.deck_type == deck_type)
        query = query.order_by(DeckTemplate.main, DeckTemplate.created_at)

        templates = self.db.execute(query).scalars().all()
        return DeckTemplateListResponse(
            templates=[DeckTemplateResponse.model_validate(t) for t in templates],
            total=len(templates),
        )

    def create_template(self, request: DeckTemplateCreate) -> DeckTemplateResponse:
        game = self.resolver.resolve_game(request.game_key or self.default_game_key)
        template = DeckTemplate(
            id=new_template_id(),
            game_id=game.id,
            main=request.main.strip(),
            theme=request.theme or NO_THEME,
            deck_type=request.deck_type.value,
            created_at=utc_now(),
        )
        self.db.add(template)
        self.db.commit()
        self.db.refresh(template)
        logger.info("Created deck template %s (theme: %s)", template.main, template.theme)
        return DeckTemplateResponse.model_validate(template)

    def update_template(
        self, template_id: str, request: DeckTemplateUpdate
    ) -> DeckTemplateResponse:
        template = self._require_template(template_id)

        supplied = request.model_dump(exclude_unset=True, exclude_none=True)
        if not supplied:
            raise InvalidInputError("no fields to update")

        if "main" in supplied:
            template.main = supplied["main"].strip()
        if "theme" in supplied:
            template.theme = supplied["theme"]
        if "deck_type" in supplied:
            template.deck_type = supplied["deck_type"].value

        self.db.commit()
        self.db.refresh(template)
        logger.info("Updated deck template %s", template_id)
        return DeckTemplateResponse.model_validate(template)

    def delete_template(self, template_id: str) -> None:
        template = self._require_template(template_id)
        self.db.delete(template)
        self.db.commit()
        logger.info("Deleted deck template %s", template_id)

    def _require_template(self, template_id: str) -> DeckTemplate:
        template = self.db.get(DeckTemplate, template_id)
        if template is None:
            raise NotFoundError("deck template", template_id)
        return template

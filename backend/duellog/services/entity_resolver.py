"""
Entity Resolver

Translates human-entered names (game key, season code, deck main/sub)
into stable row ids, creating seasons, decks and deck templates on first
reference.

Guarantees differ per entity:
- seasons are backed by UNIQUE(game_id, code); a lost creation race is
  resolved by re-reading the winner's row (on SQLite, writers already
  queue on BEGIN IMMEDIATE, so the second one finds the row on lookup)
- decks and templates use check-then-insert only, so concurrent first use
  of the same name may leave duplicates; lookups tolerate that
"""
import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from duellog.exceptions import NotFoundError
from duellog.models import Game, Season, Deck, DeckTemplate
from duellog.models.deck_template import NO_THEME
from duellog.models.types import new_id, new_template_id
from duellog.schemas.common import NO_SUB, DeckType
from duellog.services.season_codes import parse_year_month

logger = logging.getLogger(__name__)


class EntityResolver:
    """Get-or-create for Season, Deck and DeckTemplate rows"""

    def __init__(self, db: Session):
        self.db = db

    # ── Game ────────────────────────────────────────────────────

    def resolve_game(self, game_key: str) -> Game:
        """Games are seeded out-of-band; an unknown key is a client error"""
        game = self.db.execute(
            select(Game).where(Game.key == game_key)
        ).scalar_one_or_none()
        if game is None:
            raise NotFoundError("game", game_key)
        return game

    # ── Season ──────────────────────────────────────────────────

    def find_season_id(self, game_id: str, code: str) -> Optional[str]:
        return self.db.execute(
            select(Season.id).where(Season.game_id == game_id, Season.code == code)
        ).scalar_one_or_none()

    def resolve_season(self, game_id: str, code: str) -> str:
        """
        Season id for (game_id, code), creating the season if needed.

        Start/end dates are filled in only for "YYYY-MM" codes.
        """
        season_id = self.find_season_id(game_id, code)
        if season_id is not None:
            return season_id

        start_date, end_date = parse_year_month(code) or (None, None)
        season = Season(
            id=new_id(),
            game_id=game_id,
            code=code,
            start_date=start_date,
            end_date=end_date,
        )
        try:
            with self.db.begin_nested():
                self.db.add(season)
        except IntegrityError:
            # Another writer created the same code first
            season_id = self.find_season_id(game_id, code)
            if season_id is None:
                raise
            logger.warning("Season %s was created concurrently; using %s", code, season_id)
            return season_id

        logger.info("Created season %s (game %s)", code, game_id)
        return season.id

    # ── Deck ────────────────────────────────────────────────────

    def find_deck_id(self, game_id: str, main: str, sub: Optional[str]) -> Optional[str]:
        """
        Deck lookup by identity.

        A missing sub matches only NULL rows and "" matches only "" rows;
        `sub = NULL` would never match, so the NULL case gets IS NULL.
        """
        query = select(Deck.id).where(Deck.game_id == game_id, Deck.main == main)
        if sub is None:
            query = query.where(Deck.sub.is_(None))
        else:
            query = query.where(Deck.sub == sub)
        return self.db.execute(query.limit(1)).scalars().first()

    def resolve_deck(self, game_id: str, main: str, sub: Optional[str] = None) -> str:
        deck_id = self.find_deck_id(game_id, main, sub)
        if deck_id is not None:
            return deck_id

        deck = Deck(id=new_id(), game_id=game_id, main=main, sub=sub)
        self.db.add(deck)
        self.db.flush()
        logger.info("Created deck %s / %s", main, sub)

        # Templates follow deck creation only, never plain lookups
        self.ensure_deck_template(game_id, main)
        if sub and sub != NO_SUB:
            self.ensure_deck_template(game_id, sub)

        return deck.id

    # ── DeckTemplate ────────────────────────────────────────────

    def ensure_deck_template(
        self,
        game_id: str,
        name: str,
        deck_type: str = DeckType.MAIN.value,
    ) -> bool:
        """
        Create a "no theme" template for `name` unless one exists.

        Advisory check-then-insert; returns True when a row was added.
        """
        exists = self.db.execute(
            select(DeckTemplate.id)
            .where(
                DeckTemplate.game_id == game_id,
                DeckTemplate.main == name,
                DeckTemplate.deck_type == deck_type,
            )
            .limit(1)
        ).first()
        if exists is not None:
            return False

        self.db.add(
            DeckTemplate(
                id=new_template_id(),
                game_id=game_id,
                main=name,
                theme=NO_THEME,
                deck_type=deck_type,
            )
        )
        self.db.flush()
        logger.info("Created deck template %s (theme: %s)", name, NO_THEME)
        return True

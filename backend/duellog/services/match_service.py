"""
Match Service

Create / read / update / delete of the match log. Deck and season names
are resolved to ids through the EntityResolver at write time.
"""
import logging
from typing import Any, Dict, Mapping, Tuple

from sqlalchemy import delete, select, text, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from duellog.exceptions import InvalidInputError, NotFoundError, StoreFailureError
from duellog.models import Game, Match
from duellog.models.match import DEFAULT_MODE
from duellog.models.types import new_id, utc_now
from duellog.schemas.common import NO_RANK
from duellog.schemas.deck import DeckResponse
from duellog.schemas.match import (
    CreateMatchRequest,
    UpdateMatchRequest,
    RelinkDecksRequest,
    MatchFilter,
    MatchWithDetails,
    MatchListResponse,
)
from duellog.services.entity_resolver import EntityResolver
from duellog.services.query_builder import (
    PlaceholderStyle,
    build_match_query,
    build_match_by_id_query,
)

logger = logging.getLogger(__name__)

# Columns that may not be cleared with an explicit null
_NOT_NULL_FIELDS = ("date", "mode", "rank")


class MatchService:
    """Service class for Match operations"""

    def __init__(self, db: Session, user_id: str):
        self.db = db
        self.user_id = user_id
        self.resolver = EntityResolver(db)

    def validate(self, request: CreateMatchRequest) -> Tuple[Game, str, str]:
        """
        Create-time checks that need no writes.

        Returns the game with the effective mode and rank. A Ranked match
        without a rank keeps an empty rank; other modes get NO_RANK.
        """
        if not request.game_key or not request.season_code or request.date is None:
            raise InvalidInputError("gameKey, seasonCode and date are required")
        if request.my_deck is None or request.opp_deck is None:
            raise InvalidInputError("myDeck and oppDeck are required")

        mode = request.mode.value if request.mode else DEFAULT_MODE
        rank = request.rank or ""
        if mode != DEFAULT_MODE and not rank:
            rank = NO_RANK

        game = self.resolver.resolve_game(request.game_key)
        return game, mode, rank

    def create(self, request: CreateMatchRequest) -> str:
        """Record a match and return its id"""
        game, mode, rank = self.validate(request)
        season_id = self.resolver.resolve_season(game.id, request.season_code)
        my_deck_id = self.resolver.resolve_deck(
            game.id, request.my_deck.main, request.my_deck.sub
        )
        opp_deck_id = self.resolver.resolve_deck(
            game.id, request.opp_deck.main, request.opp_deck.sub
        )

        now = utc_now()
        match = Match(
            id=new_id(),
            user_id=self.user_id,
            game_id=game.id,
            season_id=season_id,
            date=request.date,
            mode=mode,
            rank=rank,
            my_deck_id=my_deck_id,
            opp_deck_id=opp_deck_id,
            play_order=request.play_order,
            result=request.result,
            note=request.note,
            created_at=now,
            updated_at=now,
        )
        try:
            self.db.add(match)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreFailureError("Failed to create match", original_error=e) from e

        logger.info("Created match %s (season %s)", match.id, request.season_code)
        return match.id

    def get(self, match_id: str) -> MatchWithDetails:
        query = build_match_by_id_query(match_id, PlaceholderStyle.NAMED)
        row = self.db.execute(text(query.sql), query.params).mappings().first()
        if row is None:
            raise NotFoundError("match", match_id)
        return self._to_details(row)

    def list(self, filters: MatchFilter) -> MatchListResponse:
        """Filtered listing, newest date first, then newest record first"""
        query = build_match_query(filters, PlaceholderStyle.NAMED)
        rows = self.db.execute(text(query.sql), query.params).mappings().all()
        matches = [self._to_details(row) for row in rows]
        return MatchListResponse(matches=matches, total=len(matches))

    def update(self, match_id: str, request: UpdateMatchRequest) -> None:
        """
        Partial update: only the fields present in `request` change.

        Deck assignments are not updatable here; see relink_decks.
        """
        self._require_match(match_id)

        supplied = request.model_dump(exclude_unset=True)
        values: Dict[str, Any] = {}
        for field_name, value in supplied.items():
            if value is None and field_name in _NOT_NULL_FIELDS:
                raise InvalidInputError(f"{field_name} cannot be null")
            values[field_name] = value.value if field_name == "mode" else value

        if "mode" in values and values["mode"] != DEFAULT_MODE and "rank" not in values:
            values["rank"] = NO_RANK

        if not values:
            raise InvalidInputError("no fields to update")

        values["updated_at"] = utc_now()
        self.db.execute(
            update(Match)
            .where(Match.id == match_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        logger.info("Updated match %s: %s", match_id, ", ".join(sorted(supplied)))

    def relink_decks(self, match_id: str, request: RelinkDecksRequest) -> None:
        """Re-resolve deck names and point the match at the resulting decks"""
        if request.my_deck is None and request.opp_deck is None:
            raise InvalidInputError("myDeck or oppDeck is required")

        match = self._require_match(match_id)
        values: Dict[str, Any] = {}
        if request.my_deck is not None:
            values["my_deck_id"] = self.resolver.resolve_deck(
                match.game_id, request.my_deck.main, request.my_deck.sub
            )
        if request.opp_deck is not None:
            values["opp_deck_id"] = self.resolver.resolve_deck(
                match.game_id, request.opp_deck.main, request.opp_deck.sub
            )

        values["updated_at"] = utc_now()
        self.db.execute(
            update(Match)
            .where(Match.id == match_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        logger.info("Relinked decks of match %s", match_id)

    def delete(self, match_id: str) -> None:
        """Delete by id; a miss is NotFound, not success"""
        result = self.db.execute(delete(Match).where(Match.id == match_id))
        if result.rowcount == 0:
            raise NotFoundError("match", match_id)
        self.db.commit()
        logger.info("Deleted match %s", match_id)

    def _require_match(self, match_id: str) -> Match:
        match = self.db.execute(
            select(Match).where(Match.id == match_id)
        ).scalar_one_or_none()
        if match is None:
            raise NotFoundError("match", match_id)
        return match

    @staticmethod
    def _to_details(row: Mapping[str, Any]) -> MatchWithDetails:
        return MatchWithDetails(
            id=row["id"],
            date=row["date"],
            mode=row["mode"],
            rank=row["rank"],
            play_order=row["play_order"],
            result=row["result"],
            note=row["note"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            season_code=row["season_code"],
            my_deck=DeckResponse(
                id=row["my_deck_id"],
                main=row["my_deck_main"],
                sub=row["my_deck_sub"],
            ),
            opp_deck=DeckResponse(
                id=row["opp_deck_id"],
                main=row["opp_deck_main"],
                sub=row["opp_deck_sub"],
            ),
        )

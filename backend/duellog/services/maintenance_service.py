"""
Maintenance Service

Operator-only data repairs. Not exposed over HTTP: callers must make sure
no live match creation targets the same names while these run.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from sqlalchemy import func, or_, select, update
from sqlalchemy.orm import Session

from duellog.exceptions import InvalidInputError, NotFoundError
from duellog.models import Deck, DeckTemplate

logger = logging.getLogger(__name__)

# (label, model, column) in execution order
RENAME_STEPS: List[Tuple[str, type, str]] = [
    ("deck_templates.main", DeckTemplate, "main"),
    ("decks.main", Deck, "main"),
    ("decks.sub", Deck, "sub"),
]


@dataclass
class RenameResult:
    old_name: str
    new_name: str
    counts: Dict[str, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(self.counts.values())


class MaintenanceService:
    """Bulk identity rewrites over decks and deck templates"""

    def __init__(self, db: Session):
        self.db = db

    def name_in_use(self, name: str) -> bool:
        decks = self.db.execute(
            select(func.count(Deck.id)).where(or_(Deck.main == name, Deck.sub == name))
        ).scalar() or 0
        if decks:
            return True
        templates = self.db.execute(
            select(func.count(DeckTemplate.id)).where(DeckTemplate.main == name)
        ).scalar() or 0
        return templates > 0

    def rename_deck_or_template(self, old_name: str, new_name: str) -> RenameResult:
        """
        Rewrite `old_name` to `new_name` in deck_templates.main, decks.main
        and decks.sub, all or nothing.
        """
        old_name = (old_name or "").strip()
        new_name = (new_name or "").strip()
        if not old_name or not new_name:
            raise InvalidInputError("old and new names cannot be empty")
        if not self.name_in_use(old_name):
            raise NotFoundError("deck", old_name)

        result = RenameResult(old_name=old_name, new_name=new_name)
        with self.db.begin_nested():
            for label, model, column in RENAME_STEPS:
                result.counts[label] = self._rename_step(model, column, old_name, new_name)
                logger.info("Renamed %s: %d rows", label, result.counts[label])
        self.db.commit()

        logger.info(
            "Renamed [%s] -> [%s]: %d rows in total", old_name, new_name, result.total
        )
        return result

    def _rename_step(self, model: type, column: str, old_name: str, new_name: str) -> int:
        attr = getattr(model, column)
        outcome = self.db.execute(
            update(model)
            .where(attr == old_name)
            .values({column: new_name})
            .execution_options(synchronize_session=False)
        )
        return outcome.rowcount

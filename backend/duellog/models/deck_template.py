"""
DeckTemplate Model

Display metadata (theme/color) keyed by deck name. Not owned by Deck:
renaming or restyling never touches match history.
"""
from sqlalchemy import Column, String, DateTime, ForeignKey, Index

from duellog.database import Base
from duellog.models.types import new_template_id, utc_now

NO_THEME = "無"


class DeckTemplate(Base):
    """
    DeckTemplate

    At most one row per (game_id, main, deck_type) is intended but not
    enforced by the store.
    """
    __tablename__ = "deck_templates"
    __table_args__ = (
        Index("idx_deck_templates_name", "game_id", "main", "deck_type"),
    )

    id = Column(String, primary_key=True, default=new_template_id)
    game_id = Column(String, ForeignKey("games.id"), nullable=False)
    main = Column(String, nullable=False)
    theme = Column(String, nullable=False, default=NO_THEME)
    deck_type = Column(String, nullable=False, default="main")
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    def __repr__(self):
        return f"<DeckTemplate(main={self.main}, theme={self.theme})>"

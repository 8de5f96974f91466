"""
Match Model

The fact record: one played game, deck vs deck.
"""
from sqlalchemy import Column, String, Text, Date, ForeignKey, Index, CheckConstraint
from sqlalchemy.orm import relationship

from duellog.database import Base
from duellog.models.types import TimestampMixin, new_id

MATCH_MODES = ("Ranked", "Rating", "DC")
DEFAULT_MODE = "Ranked"


class Match(Base, TimestampMixin):
    """
    Match

    season_id, my_deck_id and opp_deck_id are resolved once at write time.
    Deleting a match never touches seasons or decks.
    """
    __tablename__ = "matches"
    __table_args__ = (
        CheckConstraint("mode IN ('Ranked','Rating','DC')", name="ck_matches_mode"),
        Index("idx_matches_mode", "mode"),
        Index("idx_matches_season", "season_id"),
        Index("idx_matches_date", "date", "created_at"),
    )

    id = Column(String, primary_key=True, default=new_id)
    user_id = Column(String, ForeignKey("users.id"), nullable=False)
    game_id = Column(String, ForeignKey("games.id"), nullable=False)
    season_id = Column(String, ForeignKey("seasons.id"), nullable=False)
    date = Column(Date, nullable=False)
    mode = Column(String, nullable=False, default=DEFAULT_MODE, server_default=DEFAULT_MODE)
    rank = Column(String, nullable=False)
    my_deck_id = Column(String, ForeignKey("decks.id"), nullable=False)
    opp_deck_id = Column(String, ForeignKey("decks.id"), nullable=False)
    play_order = Column(String)
    result = Column(String)
    note = Column(Text)

    # Relationships
    season = relationship("Season")
    my_deck = relationship("Deck", foreign_keys=[my_deck_id])
    opp_deck = relationship("Deck", foreign_keys=[opp_deck_id])

    def __repr__(self):
        return f"<Match(date={self.date}, result={self.result})>"

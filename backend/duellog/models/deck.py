"""
Deck Model

A main/sub archetype pair. A NULL sub and an empty-string sub are
different identities.
"""
from sqlalchemy import Column, String, ForeignKey, Index

from duellog.database import Base
from duellog.models.types import new_id


class Deck(Base):
    __tablename__ = "decks"
    __table_args__ = (Index("idx_decks_identity", "game_id", "main", "sub"),)

    id = Column(String, primary_key=True, default=new_id)
    game_id = Column(String, ForeignKey("games.id"), nullable=False)
    main = Column(String, nullable=False)
    sub = Column(String)

    def __repr__(self):
        return f"<Deck(main={self.main}, sub={self.sub})>"

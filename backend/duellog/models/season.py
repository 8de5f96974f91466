"""
Season Model

A scoring period of a game, identified by a short code (S49, 2026-01).
"""
from sqlalchemy import Column, String, Date, ForeignKey, UniqueConstraint

from duellog.database import Base
from duellog.models.types import new_id


class Season(Base):
    """
    Season

    (game_id, code) is unique; start/end dates are only known for
    year-month codes.
    """
    __tablename__ = "seasons"
    __table_args__ = (UniqueConstraint("game_id", "code"),)

    id = Column(String, primary_key=True, default=new_id)
    game_id = Column(String, ForeignKey("games.id"), nullable=False)
    code = Column(String, nullable=False)
    start_date = Column(Date)
    end_date = Column(Date)

    def __repr__(self):
        return f"<Season(code={self.code})>"

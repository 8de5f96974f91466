"""
Game Model

Reference entity seeded by the base migration; read-only at runtime.
"""
from sqlalchemy import Column, String

from duellog.database import Base


class Game(Base):
    """
    Game

    Examples: master_duel
    """
    __tablename__ = "games"

    id = Column(String, primary_key=True)
    key = Column(String, unique=True, nullable=False)
    name = Column(String, nullable=False)

    def __repr__(self):
        return f"<Game(key={self.key})>"

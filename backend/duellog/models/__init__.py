"""
SQLAlchemy ORM Models

Export all models for easy importing.
"""
from duellog.models.types import TimestampMixin
from duellog.models.game import Game
from duellog.models.user import User
from duellog.models.season import Season
from duellog.models.deck import Deck
from duellog.models.deck_template import DeckTemplate
from duellog.models.match import Match

__all__ = [
    "TimestampMixin",
    "Game",
    "User",
    "Season",
    "Deck",
    "DeckTemplate",
    "Match",
]

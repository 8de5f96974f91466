"""
API Package

FastAPI routers for all endpoints.
"""
from duellog.api.matches import router as matches_router
from duellog.api.deck_templates import router as deck_templates_router
from duellog.api.decks import router as decks_router
from duellog.api.seasons import router as seasons_router
from duellog.api.stats import router as stats_router
from duellog.api.health import router as health_router

__all__ = [
    "matches_router",
    "deck_templates_router",
    "decks_router",
    "seasons_router",
    "stats_router",
    "health_router",
]

"""
Pydantic Schemas

Export all schemas for easy importing.
"""
from duellog.schemas.common import (
    CamelModel,
    MatchMode,
    DeckType,
    MessageResponse,
    NO_RANK,
    NO_SUB,
)
from duellog.schemas.deck import (
    DeckRef,
    DeckResponse,
    DeckListResponse,
)
from duellog.schemas.season import (
    SeasonResponse,
    SeasonListResponse,
    SeasonInfoResponse,
)
from duellog.schemas.deck_template import (
    DeckTemplateCreate,
    DeckTemplateUpdate,
    DeckTemplateResponse,
    DeckTemplateListResponse,
)
from duellog.schemas.match import (
    CreateMatchRequest,
    UpdateMatchRequest,
    RelinkDecksRequest,
    MatchFilter,
    MatchWithDetails,
    MatchListResponse,
)
from duellog.schemas.stats import (
    DeckStatRow,
    DailyStatRow,
    SeasonStatsResponse,
)

__all__ = [
    # Common
    "CamelModel",
    "MatchMode",
    "DeckType",
    "MessageResponse",
    "NO_RANK",
    "NO_SUB",
    # Deck
    "DeckRef",
    "DeckResponse",
    "DeckListResponse",
    # Season
    "SeasonResponse",
    "SeasonListResponse",
    "SeasonInfoResponse",
    # Deck template
    "DeckTemplateCreate",
    "DeckTemplateUpdate",
    "DeckTemplateResponse",
    "DeckTemplateListResponse",
    # Match
    "CreateMatchRequest",
    "UpdateMatchRequest",
    "RelinkDecksRequest",
    "MatchFilter",
    "MatchWithDetails",
    "MatchListResponse",
    # Stats
    "DeckStatRow",
    "DailyStatRow",
    "SeasonStatsResponse",
]

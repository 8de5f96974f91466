"""
Common Schemas

Shared base model, enums and sentinels.
"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from enum import Enum

# Sentinel written into matches.rank for non-ranked modes
NO_RANK = "—"

# Sentinel sub archetype meaning "no sub deck"
NO_SUB = "無"


class CamelModel(BaseModel):
    """Base model exposing camelCase field names to the web client"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# Enum definitions matching database constraints

class MatchMode(str, Enum):
    """Valid match modes"""
    RANKED = "Ranked"
    RATING = "Rating"
    DC = "DC"


class DeckType(str, Enum):
    """Valid deck template kinds"""
    MAIN = "main"
    SUB = "sub"


class MessageResponse(CamelModel):
    """Generic acknowledgement"""
    id: str
    message: str

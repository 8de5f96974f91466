"""
Statistics Schemas

Aggregated win/loss figures for a set of matches.
"""
from typing import List, Optional

from duellog.schemas.common import CamelModel


class DeckStatRow(CamelModel):
    name: str
    games: int
    wins: int
    losses: int
    win_rate: float


class DailyStatRow(CamelModel):
    date: str
    games: int
    wins: int
    losses: int
    first: int
    second: int
    first_wins: int
    second_wins: int
    win_rate: Optional[float] = None
    first_win_rate: Optional[float] = None
    second_win_rate: Optional[float] = None


class SeasonStatsResponse(CamelModel):
    total: int
    wins: int
    losses: int
    win_rate: float
    first_count: int
    second_count: int
    first_wins: int
    second_wins: int
    first_rate: float
    first_win_rate: float
    second_win_rate: float
    my_decks: List[DeckStatRow]
    opp_decks: List[DeckStatRow]
    daily: List[DailyStatRow]

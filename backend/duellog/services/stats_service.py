"""
Stats Service

Win/loss aggregation over a filtered set of matches.
"""
from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from duellog.schemas.match import MatchFilter, MatchWithDetails
from duellog.schemas.stats import DeckStatRow, DailyStatRow, SeasonStatsResponse
from duellog.services.match_service import MatchService

RESULT_WIN = "W"
RESULT_LOSS = "L"
PLAY_FIRST = "先攻"
PLAY_SECOND = "後攻"
UNKNOWN_DECK = "未知"


def _rate(part: int, whole: int) -> Optional[float]:
    if whole <= 0:
        return None
    return round(part / whole * 100, 2)


def _deck_rows(tally: Dict[str, List[int]]) -> List[DeckStatRow]:
    rows = []
    for name, (wins, losses) in tally.items():
        games = wins + losses
        rows.append(
            DeckStatRow(
                name=name,
                games=games,
                wins=wins,
                losses=losses,
                win_rate=_rate(wins, games) or 0.0,
            )
        )
    return sorted(rows, key=lambda r: (-r.games, r.name))


def build_stats(matches: Iterable[MatchWithDetails]) -> SeasonStatsResponse:
    """
    Aggregate matches.

    Any result other than W counts as a loss in the per-deck tables,
    while the top-level `losses` only counts explicit L results.
    """
    matches = list(matches)
    total = len(matches)
    wins = sum(1 for m in matches if m.result == RESULT_WIN)
    losses = sum(1 for m in matches if m.result == RESULT_LOSS)

    first = [m for m in matches if m.play_order == PLAY_FIRST]
    second = [m for m in matches if m.play_order == PLAY_SECOND]
    first_wins = sum(1 for m in first if m.result == RESULT_WIN)
    second_wins = sum(1 for m in second if m.result == RESULT_WIN)

    my_tally: Dict[str, List[int]] = defaultdict(lambda: [0, 0])
    opp_tally: Dict[str, List[int]] = defaultdict(lambda: [0, 0])
    daily: Dict[str, Dict[str, int]] = defaultdict(lambda: defaultdict(int))

    for m in matches:
        slot = 0 if m.result == RESULT_WIN else 1
        my_tally[m.my_deck.main or UNKNOWN_DECK][slot] += 1
        opp_tally[m.opp_deck.main or UNKNOWN_DECK][slot] += 1

        day = daily[m.date.isoformat()]
        day["games"] += 1
        if m.result == RESULT_WIN:
            day["wins"] += 1
        elif m.result == RESULT_LOSS:
            day["losses"] += 1
        if m.play_order == PLAY_FIRST:
            day["first"] += 1
            if m.result == RESULT_WIN:
                day["first_wins"] += 1
        elif m.play_order == PLAY_SECOND:
            day["second"] += 1
            if m.result == RESULT_WIN:
                day["second_wins"] += 1

    daily_rows = [
        DailyStatRow(
            date=key,
            games=day["games"],
            wins=day["wins"],
            losses=day["losses"],
            first=day["first"],
            second=day["second"],
            first_wins=day["first_wins"],
            second_wins=day["second_wins"],
            win_rate=_rate(day["wins"], day["games"]),
            first_win_rate=_rate(day["first_wins"], day["first"]),
            second_win_rate=_rate(day["second_wins"], day["second"]),
        )
        for key, day in sorted(daily.items())
    ]

    return SeasonStatsResponse(
        total=total,
        wins=wins,
        losses=losses,
        win_rate=_rate(wins, total) or 0.0,
        first_count=len(first),
        second_count=len(second),
        first_wins=first_wins,
        second_wins=second_wins,
        first_rate=_rate(len(first), total) or 0.0,
        first_win_rate=_rate(first_wins, len(first)) or 0.0,
        second_win_rate=_rate(second_wins, len(second)) or 0.0,
        my_decks=_deck_rows(my_tally),
        opp_decks=_deck_rows(opp_tally),
        daily=daily_rows,
    )


class StatsService:
    """Service class for aggregated statistics"""

    def __init__(self, db: Session, user_id: str):
        self.matches = MatchService(db, user_id)

    def season_stats(self, filters: MatchFilter) -> SeasonStatsResponse:
        return build_stats(self.matches.list(filters).matches)

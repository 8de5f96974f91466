"""
CSV Import Service

Loads a spreadsheet export of past matches. Every row goes through
MatchService.create so seasons, decks and templates are resolved exactly
as for matches recorded through the API.

Expected columns (header row required):
    Rank, Account, my main, my sub, result, play order,
    opp main, opp sub, note, date, season
"""
import csv
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Iterable, List, Sequence

from sqlalchemy.orm import Session

from duellog.exceptions import DuelLogError
from duellog.schemas.common import NO_SUB
from duellog.schemas.deck import DeckRef
from duellog.schemas.match import CreateMatchRequest
from duellog.services.match_service import MatchService

logger = logging.getLogger(__name__)

MIN_COLUMNS = 11

_RANK_TIERS = {
    "銅": "銅",
    "銀": "銀",
    "金": "金",
    "白金": "白金",
    "鑽": "鑽石",
    "大師": "大師",
}
_ROMAN = {1: "I", 2: "II", 3: "III", 4: "IV", 5: "V"}

# Spreadsheet shorthand ("鑽2") -> display label ("鑽石 II")
RANK_MAPPING = {
    f"{short}{level}": f"{label} {_ROMAN[level]}"
    for short, label in _RANK_TIERS.items()
    for level in _ROMAN
}

_WIN_MARKS = {"O", "o", "勝"}
_LOSS_MARKS = {"X", "x", "敗"}


def normalize_rank(raw: str) -> str:
    raw = raw.strip()
    return RANK_MAPPING.get(raw, raw)


def normalize_result(raw: str) -> str:
    raw = raw.strip()
    if raw in _WIN_MARKS:
        return "W"
    if raw in _LOSS_MARKS:
        return "L"
    return raw


def normalize_date(raw: str) -> date:
    """Accepts 2025/12/31, 2025-12-31 and 2025/1/2"""
    value = raw.strip().replace("/", "-")
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise ValueError(f"invalid date: {raw!r}") from None


def parse_row(row: Sequence[str], game_key: str) -> CreateMatchRequest:
    """Turn one CSV row into a create request; raises ValueError when malformed"""
    if len(row) < MIN_COLUMNS:
        raise ValueError(f"expected {MIN_COLUMNS} columns, got {len(row)}")

    cells = [cell.strip() for cell in row]
    rank, _account, my_main, my_sub, result, play_order = cells[:6]
    opp_main, opp_sub, note, raw_date, season_code = cells[6:11]

    return CreateMatchRequest(
        game_key=game_key,
        season_code=season_code,
        date=normalize_date(raw_date),
        rank=normalize_rank(rank),
        my_deck=DeckRef(main=my_main, sub=my_sub or NO_SUB),
        opp_deck=DeckRef(main=opp_main, sub=opp_sub or NO_SUB),
        play_order=play_order,
        result=normalize_result(result),
        note=note or None,
    )


@dataclass
class ImportResult:
    success_count: int = 0
    error_count: int = 0
    errors: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.success_count + self.error_count


class ImportService:
    """Row-by-row importer; a bad row is logged and skipped"""

    def __init__(self, db: Session, user_id: str, game_key: str):
        self.db = db
        self.game_key = game_key
        self.matches = MatchService(db, user_id)

    def import_rows(self, rows: Iterable[Sequence[str]], dry_run: bool = False) -> ImportResult:
        result = ImportResult()
        for line_no, row in enumerate(rows, start=1):
            try:
                request = parse_row(row, self.game_key)
                if dry_run:
                    self.matches.validate(request)
                else:
                    self.matches.create(request)
            except (DuelLogError, ValueError) as e:
                result.error_count += 1
                result.errors.append(f"[{line_no}] {e}")
                logger.warning("Row %d skipped: %s", line_no, e)
                continue

            result.success_count += 1
            if result.success_count % 100 == 0:
                logger.info("Imported %d rows...", result.success_count)

        logger.info(
            "Import finished: %d succeeded, %d failed", result.success_count, result.error_count
        )
        return result

    def import_file(self, path: Path, dry_run: bool = False) -> ImportResult:
        with open(path, newline="", encoding="utf-8-sig") as f:
            reader = csv.reader(f)
            header = next(reader, None)
            if header is None:
                raise ValueError(f"{path} is empty")
            logger.info("CSV columns: %s", header)
            return self.import_rows(reader, dry_run=dry_run)

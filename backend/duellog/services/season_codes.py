"""
Season code helpers

Two code families exist:
- year-month codes ("2026-01") used by older records
- monthly ranked seasons ("S49"), one per calendar month, S32 = 2024-08
"""
import calendar
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional, Tuple

BASE_YEAR = 2024
BASE_MONTH = 8
BASE_SEASON = 32

_SEASON_NUMBER_RE = re.compile(r"^S(\d+)$", re.IGNORECASE)
_YEAR_MONTH_RE = re.compile(r"^\d{4}-\d{2}$")


@dataclass(frozen=True)
class SeasonInfo:
    """Calendar span of a monthly season"""
    code: str
    season_number: int
    year: int
    month: int
    start: date
    end: date


def month_range(year: int, month: int) -> Tuple[date, date]:
    """First and last day of a calendar month"""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def parse_year_month(code: str) -> Optional[Tuple[date, date]]:
    """
    Start/end dates for a "YYYY-MM" code.

    Returns None for anything else, including "S49".
    """
    if not _YEAR_MONTH_RE.match(code.strip()):
        return None
    try:
        parsed = datetime.strptime(code.strip(), "%Y-%m")
    except ValueError:
        return None
    return month_range(parsed.year, parsed.month)


def season_number(code: str) -> Optional[int]:
    match = _SEASON_NUMBER_RE.match(code.strip())
    if not match:
        return None
    return int(match.group(1))


def _add_months(year: int, month: int, delta: int) -> Tuple[int, int]:
    total = year * 12 + (month - 1) + delta
    return total // 12, total % 12 + 1


def season_info(code: str) -> Optional[SeasonInfo]:
    """Resolve an "S<n>" code to its calendar month"""
    number = season_number(code)
    if number is None:
        return None
    year, month = _add_months(BASE_YEAR, BASE_MONTH, number - BASE_SEASON)
    try:
        start, end = month_range(year, month)
    except (ValueError, OverflowError):
        # Beyond the calendar datetime can represent
        return None
    return SeasonInfo(
        code=f"S{number}",
        season_number=number,
        year=year,
        month=month,
        start=start,
        end=end,
    )


def season_code_for_date(day: date) -> str:
    months_diff = (day.year - BASE_YEAR) * 12 + (day.month - BASE_MONTH)
    return f"S{BASE_SEASON + months_diff}"


def current_season_code(today: Optional[date] = None) -> str:
    return season_code_for_date(today or date.today())


def recent_season_codes(count: int, from_code: Optional[str] = None) -> List[str]:
    """The `count` most recent season codes, newest first"""
    number = season_number(from_code or current_season_code())
    if number is None or count <= 0:
        return []
    return [f"S{number - i}" for i in range(count)]

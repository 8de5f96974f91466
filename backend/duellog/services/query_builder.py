"""
Query Filter Builder

Composes a parameterized SELECT from an open set of optional criteria.
Clauses are kept as ordered (predicate template, value) pairs and only
rendered at the end, for whichever placeholder convention the target
driver uses.
"""
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from duellog.schemas.match import MatchFilter


class PlaceholderStyle(str, Enum):
    """Placeholder conventions (PEP 249 paramstyle names)"""
    QMARK = "qmark"      # ?
    NUMERIC = "numeric"  # $1, $2, ...
    NAMED = "named"      # :p1, :p2, ... (SQLAlchemy text())


@dataclass(frozen=True)
class Clause:
    """One predicate; `template` holds a single {} slot for its placeholder"""
    template: str
    value: Any


@dataclass
class RenderedQuery:
    sql: str
    params: Union[List[Any], Dict[str, Any]]


class QueryFilterBuilder:
    """
    Ordered predicate accumulator.

    Every appended clause carries exactly one bound value, so placeholders
    and parameters can never drift apart.
    """

    def __init__(self, base_sql: str, order_by: Optional[str] = None):
        self.base_sql = base_sql.rstrip()
        self.order_by = order_by
        self._clauses: List[Clause] = []

    def add(self, template: str, value: Any) -> "QueryFilterBuilder":
        """Append `template` unless `value` is absent (None or empty string)"""
        if value is None or value == "":
            return self
        return self.add_if(True, template, value)

    def add_if(self, condition: bool, template: str, value: Any) -> "QueryFilterBuilder":
        if template.count("{}") != 1:
            raise ValueError(f"predicate template needs exactly one placeholder slot: {template!r}")
        if condition:
            self._clauses.append(Clause(template, value))
        return self

    @property
    def clauses(self) -> List[Clause]:
        return list(self._clauses)

    def __len__(self) -> int:
        return len(self._clauses)

    @staticmethod
    def placeholder(style: PlaceholderStyle, position: int) -> str:
        """Placeholder text for the clause at 1-based `position`"""
        if style == PlaceholderStyle.QMARK:
            return "?"
        if style == PlaceholderStyle.NUMERIC:
            return f"${position}"
        return f":p{position}"

    def render(self, style: PlaceholderStyle = PlaceholderStyle.QMARK) -> RenderedQuery:
        predicates = []
        positional: List[Any] = []
        named: Dict[str, Any] = {}

        for position, clause in enumerate(self._clauses, start=1):
            predicates.append(clause.template.format(self.placeholder(style, position)))
            if style == PlaceholderStyle.NAMED:
                named[f"p{position}"] = clause.value
            else:
                positional.append(clause.value)

        sql = self.base_sql
        if predicates:
            sql += "\nWHERE " + "\n  AND ".join(predicates)
        if self.order_by:
            sql += f"\nORDER BY {self.order_by}"

        params = named if style == PlaceholderStyle.NAMED else positional
        return RenderedQuery(sql=sql, params=params)


MATCH_DETAILS_SELECT = """
    SELECT
        m.id,
        m.date,
        m.mode,
        m.rank,
        m.play_order,
        m.result,
        m.note,
        m.created_at,
        m.updated_at,
        s.code AS season_code,
        my_deck.id AS my_deck_id,
        my_deck.main AS my_deck_main,
        my_deck.sub AS my_deck_sub,
        opp_deck.id AS opp_deck_id,
        opp_deck.main AS opp_deck_main,
        opp_deck.sub AS opp_deck_sub
    FROM matches m
    JOIN seasons s ON m.season_id = s.id
    JOIN decks my_deck ON m.my_deck_id = my_deck.id
    JOIN decks opp_deck ON m.opp_deck_id = opp_deck.id
"""

MATCH_ORDER_BY = "m.date DESC, m.created_at DESC"


def _bind(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, date):
        return value.isoformat()
    return value


def build_match_query(
    filters: MatchFilter,
    style: PlaceholderStyle = PlaceholderStyle.QMARK,
) -> RenderedQuery:
    """Match-with-details query; criteria are appended in a fixed order"""
    builder = QueryFilterBuilder(MATCH_DETAILS_SELECT, order_by=MATCH_ORDER_BY)
    builder.add("s.code = {}", _bind(filters.season_code))
    builder.add("m.mode = {}", _bind(filters.mode))
    builder.add("my_deck.main = {}", _bind(filters.my_deck_main))
    builder.add("opp_deck.main = {}", _bind(filters.opp_deck_main))
    builder.add("m.result = {}", _bind(filters.result))
    builder.add("m.play_order = {}", _bind(filters.play_order))
    builder.add("m.date >= {}", _bind(filters.date_from))
    builder.add("m.date <= {}", _bind(filters.date_to))
    return builder.render(style)


def build_match_by_id_query(
    match_id: str,
    style: PlaceholderStyle = PlaceholderStyle.QMARK,
) -> RenderedQuery:
    builder = QueryFilterBuilder(MATCH_DETAILS_SELECT)
    builder.add("m.id = {}", match_id)
    return builder.render(style)

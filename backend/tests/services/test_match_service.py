"""
Match Service Tests

Recording, reading, updating and deleting matches.
"""
import pytest
from datetime import date
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from duellog.exceptions import InvalidInputError, NotFoundError, StoreFailureError
from duellog.models import Deck, DeckTemplate, Match, Season
from duellog.schemas.common import MatchMode
from duellog.schemas.deck import DeckRef
from duellog.schemas.match import (
    CreateMatchRequest,
    MatchFilter,
    RelinkDecksRequest,
    UpdateMatchRequest,
)


class TestCreateMatch:
    """Tests for MatchService.create"""

    def test_end_to_end_ranked_match(self, match_service, make_match, db_session):
        """S49 蛇眼/天盃 vs 閃刀姬 is stored with every reference resolved."""
        match_id = make_match()

        match = match_service.get(match_id)
        assert match.season_code == "S49"
        assert match.date == date(2025, 12, 31)
        assert match.mode == "Ranked"
        assert match.rank == "鑽石 II"
        assert match.my_deck.main == "蛇眼"
        assert match.my_deck.sub == "天盃"
        assert match.opp_deck.main == "閃刀姬"
        assert match.opp_deck.sub is None
        assert match.play_order == "先攻"
        assert match.result == "W"

        assert db_session.execute(select(func.count(Season.id))).scalar() == 1
        assert db_session.execute(select(func.count(Deck.id))).scalar() == 2

    def test_reuses_season_and_decks(self, make_match, db_session):
        make_match()
        make_match(result="L")
        assert db_session.execute(select(func.count(Season.id))).scalar() == 1
        assert db_session.execute(select(func.count(Deck.id))).scalar() == 2
        assert db_session.execute(select(func.count(Match.id))).scalar() == 2

    def test_mode_defaults_to_ranked(self, match_service, make_match):
        match_id = make_match(mode=None)
        assert match_service.get(match_id).mode == "Ranked"

    def test_non_ranked_without_rank_gets_placeholder(self, match_service, make_match):
        match_id = make_match(mode=MatchMode.RATING, rank=None)
        match = match_service.get(match_id)
        assert match.mode == "Rating"
        assert match.rank == "—"

    def test_non_ranked_keeps_supplied_rank(self, match_service, make_match):
        match_id = make_match(mode=MatchMode.DC, rank="12000")
        assert match_service.get(match_id).rank == "12000"

    def test_minimal_request_creates_ranked_match(self, match_service, db_session):
        """No mode and no rank: a Ranked match plus its season, decks and templates."""
        def counts():
            return tuple(
                db_session.execute(select(func.count(model.id))).scalar()
                for model in (Season, Deck, DeckTemplate)
            )

        seasons_before, decks_before, templates_before = counts()

        match_id = match_service.create(
            CreateMatchRequest(
                game_key="master_duel",
                season_code="S49",
                date=date(2025, 12, 31),
                my_deck=DeckRef(main="蛇眼"),
                opp_deck=DeckRef(main="天盃"),
                result="W",
            )
        )

        seasons_after, decks_after, templates_after = counts()
        assert seasons_after - seasons_before == 1
        assert decks_after - decks_before == 2
        assert templates_after - templates_before == 2

        themes = dict(
            db_session.execute(
                select(DeckTemplate.main, DeckTemplate.theme)
                .where(DeckTemplate.main.in_(["蛇眼", "天盃"]))
            ).all()
        )
        assert themes == {"蛇眼": "無", "天盃": "無"}

        match = match_service.get(match_id)
        assert match.mode == "Ranked"
        assert match.rank == ""
        assert match.season_code == "S49"
        assert match.result == "W"

    def test_ranked_without_rank_stores_empty_rank(self, match_service, make_match):
        match_id = make_match(rank=None)
        assert match_service.get(match_id).rank == ""

    def test_validate_writes_nothing(self, match_service, db_session):
        request = CreateMatchRequest(
            game_key="master_duel",
            season_code="S49",
            date=date(2025, 12, 31),
            mode=MatchMode.RATING,
            my_deck=DeckRef(main="蛇眼"),
            opp_deck=DeckRef(main="天盃"),
        )
        game, mode, rank = match_service.validate(request)

        assert game.key == "master_duel"
        assert (mode, rank) == ("Rating", "—")
        assert db_session.execute(select(func.count(Season.id))).scalar() == 0
        assert db_session.execute(select(func.count(Deck.id))).scalar() == 0

    @pytest.mark.parametrize("missing", ["game_key", "season_code", "date", "my_deck", "opp_deck"])
    def test_missing_required_field(self, match_service, missing):
        fields = {
            "game_key": "master_duel",
            "season_code": "S49",
            "date": date(2025, 12, 31),
            "rank": "鑽石 II",
            "my_deck": DeckRef(main="蛇眼"),
            "opp_deck": DeckRef(main="閃刀姬"),
        }
        fields[missing] = None
        with pytest.raises(InvalidInputError):
            match_service.create(CreateMatchRequest(**fields))

    def test_unknown_game(self, match_service):
        request = CreateMatchRequest(
            game_key="hearthstone",
            season_code="S49",
            date=date(2025, 12, 31),
            rank="鑽石 II",
            my_deck=DeckRef(main="蛇眼"),
            opp_deck=DeckRef(main="閃刀姬"),
        )
        with pytest.raises(NotFoundError):
            match_service.create(request)

    def test_store_failure_is_wrapped(self, make_match, db_session, monkeypatch):
        def failing_commit():
            raise SQLAlchemyError("disk I/O error")

        monkeypatch.setattr(db_session, "commit", failing_commit)
        with pytest.raises(StoreFailureError) as exc_info:
            make_match()
        assert "disk I/O error" in str(exc_info.value)


class TestGetAndListMatches:
    """Tests for MatchService.get / MatchService.list"""

    def test_get_not_found(self, match_service):
        with pytest.raises(NotFoundError):
            match_service.get("no-such-match")

    def test_list_newest_first(self, match_service, make_match):
        older = make_match(day=date(2025, 12, 1))
        newer = make_match(day=date(2025, 12, 20))
        same_day_later = make_match(day=date(2025, 12, 20), result="L")

        ids = [m.id for m in match_service.list(MatchFilter()).matches]
        assert ids == [same_day_later, newer, older]

    def test_list_empty(self, match_service):
        result = match_service.list(MatchFilter(season_code="S49"))
        assert result.matches == []
        assert result.total == 0

    def test_filter_by_season_and_mode(self, match_service, make_match):
        ranked = make_match()
        make_match(mode=MatchMode.RATING, rank=None)
        make_match(season_code="S48", day=date(2025, 11, 30))

        result = match_service.list(MatchFilter(season_code="S49", mode=MatchMode.RANKED))
        assert [m.id for m in result.matches] == [ranked]

    def test_filter_by_decks(self, match_service, make_match):
        target = make_match(opp_deck=("天盃龍", None))
        make_match(opp_deck=("閃刀姬", None))
        make_match(my_deck=("烙印", None), opp_deck=("天盃龍", None))

        result = match_service.list(MatchFilter(my_deck_main="蛇眼", opp_deck_main="天盃龍"))
        assert [m.id for m in result.matches] == [target]

    def test_filter_by_result_and_play_order(self, match_service, make_match):
        target = make_match(result="L", play_order="後攻")
        make_match(result="L", play_order="先攻")
        make_match(result="W", play_order="後攻")

        result = match_service.list(MatchFilter(result="L", play_order="後攻"))
        assert result.total == 1
        assert result.matches[0].id == target

    def test_date_range_is_inclusive(self, match_service, make_match):
        make_match(day=date(2025, 11, 30))
        first = make_match(day=date(2025, 12, 1))
        last = make_match(day=date(2025, 12, 31))

        result = match_service.list(
            MatchFilter(date_from=date(2025, 12, 1), date_to=date(2025, 12, 31))
        )
        assert {m.id for m in result.matches} == {first, last}


class TestUpdateMatch:
    """Tests for MatchService.update"""

    def test_only_supplied_fields_change(self, match_service, sample_match):
        before = match_service.get(sample_match)

        match_service.update(sample_match, UpdateMatchRequest(note="topdecked"))

        after = match_service.get(sample_match)
        assert after.note == "topdecked"
        assert after.rank == before.rank
        assert after.result == before.result
        assert after.date == before.date
        assert after.my_deck == before.my_deck

    def test_updated_at_advances(self, match_service, sample_match):
        before = match_service.get(sample_match)
        match_service.update(sample_match, UpdateMatchRequest(result="L"))
        after = match_service.get(sample_match)
        assert after.updated_at >= before.updated_at
        assert after.created_at == before.created_at

    def test_explicit_null_clears_optional_field(self, match_service, sample_match):
        match_service.update(sample_match, UpdateMatchRequest(play_order=None))
        assert match_service.get(sample_match).play_order is None

    @pytest.mark.parametrize("field_name", ["date", "mode", "rank"])
    def test_explicit_null_on_required_field(self, match_service, sample_match, field_name):
        request = UpdateMatchRequest(**{field_name: None})
        with pytest.raises(InvalidInputError):
            match_service.update(sample_match, request)

    def test_switching_to_rating_without_rank(self, match_service, sample_match):
        match_service.update(sample_match, UpdateMatchRequest(mode=MatchMode.RATING))
        match = match_service.get(sample_match)
        assert match.mode == "Rating"
        assert match.rank == "—"

    def test_switching_mode_with_rank(self, match_service, sample_match):
        match_service.update(
            sample_match, UpdateMatchRequest(mode=MatchMode.DC, rank="15000")
        )
        assert match_service.get(sample_match).rank == "15000"

    def test_empty_update_is_invalid(self, match_service, sample_match):
        with pytest.raises(InvalidInputError):
            match_service.update(sample_match, UpdateMatchRequest())

    def test_update_not_found(self, match_service):
        with pytest.raises(NotFoundError):
            match_service.update("no-such-match", UpdateMatchRequest(note="x"))


class TestRelinkDecks:
    """Tests for MatchService.relink_decks"""

    def test_relink_opponent_deck(self, match_service, sample_match):
        match_service.relink_decks(
            sample_match, RelinkDecksRequest(opp_deck=DeckRef(main="天盃龍", sub="無"))
        )
        match = match_service.get(sample_match)
        assert match.opp_deck.main == "天盃龍"
        assert match.opp_deck.sub == "無"
        assert match.my_deck.main == "蛇眼"

    def test_relink_requires_a_deck(self, match_service, sample_match):
        with pytest.raises(InvalidInputError):
            match_service.relink_decks(sample_match, RelinkDecksRequest())

    def test_relink_not_found(self, match_service):
        with pytest.raises(NotFoundError):
            match_service.relink_decks(
                "no-such-match", RelinkDecksRequest(my_deck=DeckRef(main="蛇眼"))
            )


class TestDeleteMatch:
    """Tests for MatchService.delete"""

    def test_delete_keeps_season_and_decks(self, match_service, sample_match, db_session):
        match_service.delete(sample_match)

        with pytest.raises(NotFoundError):
            match_service.get(sample_match)
        assert db_session.execute(select(func.count(Season.id))).scalar() == 1
        assert db_session.execute(select(func.count(Deck.id))).scalar() == 2

    def test_second_delete_is_not_found(self, match_service, sample_match):
        match_service.delete(sample_match)
        with pytest.raises(NotFoundError):
            match_service.delete(sample_match)

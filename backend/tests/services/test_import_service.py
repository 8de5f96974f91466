"""
CSV Import Service Tests
"""
import pytest
from datetime import date

from duellog.schemas.match import MatchFilter
from duellog.services.import_service import (
    ImportService,
    normalize_date,
    normalize_rank,
    normalize_result,
    parse_row,
)

HEADER = "Rank,Account,my main,my sub,result,play order,opp main,opp sub,note,date,season\n"


@pytest.fixture
def importer(db_session):
    return ImportService(db_session, "user-local", "master_duel")


class TestNormalizers:
    def test_rank_shorthand(self):
        assert normalize_rank("鑽2") == "鑽石 II"
        assert normalize_rank("大師5") == "大師 V"

    def test_rank_passthrough(self):
        assert normalize_rank(" 鑽石 II ") == "鑽石 II"

    @pytest.mark.parametrize("raw, expected", [("O", "W"), ("勝", "W"), ("x", "L"), ("敗", "L"), ("W", "W")])
    def test_result(self, raw, expected):
        assert normalize_result(raw) == expected

    @pytest.mark.parametrize("raw", ["2025/12/31", "2025-12-31", " 2025/12/31 "])
    def test_date(self, raw):
        assert normalize_date(raw) == date(2025, 12, 31)

    def test_short_date(self):
        assert normalize_date("2025/1/2") == date(2025, 1, 2)

    def test_invalid_date(self):
        with pytest.raises(ValueError):
            normalize_date("yesterday")


class TestParseRow:
    def test_full_row(self):
        row = ["鑽2", "main", "蛇眼", "天盃", "O", "先攻", "閃刀姬", "", "", "2025/12/31", "S48"]
        request = parse_row(row, "master_duel")

        assert request.rank == "鑽石 II"
        assert request.my_deck.main == "蛇眼"
        assert request.my_deck.sub == "天盃"
        assert request.opp_deck.sub == "無"
        assert request.result == "W"
        assert request.note is None
        assert request.season_code == "S48"

    def test_short_row(self):
        with pytest.raises(ValueError):
            parse_row(["鑽2", "main"], "master_duel")


class TestImportFile:
    """Tests for ImportService.import_file"""

    def test_imports_rows_and_skips_bad_ones(self, importer, match_service, tmp_path):
        csv_file = tmp_path / "matches.csv"
        csv_file.write_text(
            HEADER
            + "鑽2,main,蛇眼,天盃,O,先攻,閃刀姬,,,2025/12/31,S48\n"
            + "鑽2,main,蛇眼,天盃,X,後攻,天盃龍,,lag,2025/12/30,S48\n"
            + "鑽2,main,蛇眼,天盃,X,後攻,天盃龍,,,not-a-date,S48\n",
            encoding="utf-8-sig",
        )

        result = importer.import_file(csv_file)

        assert result.success_count == 2
        assert result.error_count == 1
        assert result.errors[0].startswith("[3]")
        matches = match_service.list(MatchFilter(season_code="S48")).matches
        assert [m.result for m in matches] == ["W", "L"]
        assert matches[1].note == "lag"

    def test_dry_run_writes_nothing(self, importer, match_service, tmp_path):
        csv_file = tmp_path / "matches.csv"
        csv_file.write_text(
            HEADER + "鑽2,main,蛇眼,天盃,O,先攻,閃刀姬,,,2025/12/31,S48\n",
            encoding="utf-8",
        )

        result = importer.import_file(csv_file, dry_run=True)

        assert result.success_count == 1
        assert match_service.list(MatchFilter()).total == 0

    def test_dry_run_reports_create_time_errors(self, db_session, match_service, tmp_path):
        """Rows the real import would reject are failures in a dry run too."""
        csv_file = tmp_path / "matches.csv"
        csv_file.write_text(
            HEADER + "鑽2,main,蛇眼,天盃,O,先攻,閃刀姬,,,2025/12/31,S48\n",
            encoding="utf-8",
        )
        importer = ImportService(db_session, "user-local", "hearthstone")

        result = importer.import_file(csv_file, dry_run=True)

        assert result.success_count == 0
        assert result.error_count == 1
        assert "game not found" in result.errors[0]
        assert match_service.list(MatchFilter()).total == 0

    def test_empty_rank_cell_imports_ranked_match(self, importer, match_service, tmp_path):
        csv_file = tmp_path / "matches.csv"
        csv_file.write_text(
            HEADER + ",main,蛇眼,天盃,O,先攻,閃刀姬,,,2025/12/31,S48\n",
            encoding="utf-8",
        )

        result = importer.import_file(csv_file)

        assert result.success_count == 1
        match = match_service.list(MatchFilter()).matches[0]
        assert match.mode == "Ranked"
        assert match.rank == ""

    def test_empty_file(self, importer, tmp_path):
        csv_file = tmp_path / "empty.csv"
        csv_file.write_text("", encoding="utf-8")
        with pytest.raises(ValueError):
            importer.import_file(csv_file)

"""Tests for config.py — parsing and loading."""

from datetime import date

import pytest

from drrs.config import load_config, parse_courts, parse_date, parse_player, slugify
from drrs.exceptions import ConfigError, DrrsError
from drrs.models import Court, WinCondition
from drrs.scheduler import generate_tournament


def _write(tmp_path, text):
    path = tmp_path / "event.yaml"
    path.write_text(text)
    return path


class TestParseDate:
    def test_basic(self):
        assert parse_date("2026-10-20") == date(2026, 10, 20)

    def test_whitespace(self):
        assert parse_date(" 2026-03-07 ") == date(2026, 3, 7)

    def test_bad(self):
        with pytest.raises(ConfigError):
            parse_date("10/20/2026")

    def test_impossible_day(self):
        with pytest.raises(ConfigError, match="2026-02-30"):
            parse_date("2026-02-30")

    def test_non_numeric_part(self):
        with pytest.raises(ConfigError):
            parse_date("2026-oct-20")


class TestParsePlayer:
    def test_slugify(self):
        assert slugify("Mary Jo Smith") == "mary-jo-smith"
        assert slugify("  O'Brien ") == "o-brien"

    def test_bare_name(self):
        p = parse_player("Mary Jo Smith", 1)
        assert p.id == "mary-jo-smith"
        assert p.name == "Mary Jo Smith"
        assert p.email == ""

    def test_mapping(self):
        p = parse_player({"id": "mj", "name": "Mary Jo", "email": " mj@example.com "}, 1)
        assert (p.id, p.name, p.email) == ("mj", "Mary Jo", "mj@example.com")

    def test_mapping_without_id(self):
        assert parse_player({"name": "Ann Lee"}, 3).id == "ann-lee"

    def test_name_required(self):
        with pytest.raises(ConfigError, match="needs a name"):
            parse_player({"email": "x@example.com"}, 2)

    def test_unusable_name_gets_index_id(self):
        assert parse_player("!!!", 4).id == "player-4"


class TestParseCourts:
    def test_default_one(self):
        assert parse_courts(None) == [Court("court-1", "Court 1", 1)]

    def test_count(self):
        assert [c.number for c in parse_courts(3)] == [1, 2, 3]

    def test_names(self):
        courts = parse_courts(["East", "West"])
        assert [(c.name, c.number) for c in courts] == [("East", 1), ("West", 2)]

    def test_mappings(self):
        courts = parse_courts([{"name": "Center", "number": 2}, {"name": "Side", "number": 1}])
        assert courts[0] == Court("court-2", "Center", 2)
        assert courts[1] == Court("court-1", "Side", 1)

    def test_mapping_needs_number(self):
        with pytest.raises(ConfigError, match="needs a number"):
            parse_courts([{"name": "Center", "number": 1}, {"name": "Side"}])

    def test_repeated_numbers(self):
        with pytest.raises(ConfigError, match="no repeats"):
            parse_courts([{"name": "A", "number": 1}, {"name": "B", "number": 1}])

    def test_numbers_must_start_at_one(self):
        with pytest.raises(ConfigError, match="must be 1-2"):
            parse_courts([{"name": "A", "number": 2}, {"name": "B", "number": 3}])

    def test_bad_number(self):
        with pytest.raises(ConfigError, match="non-numeric"):
            parse_courts([{"name": "Center", "number": "one"}])

    def test_bad_shape(self):
        with pytest.raises(ConfigError):
            parse_courts("two")


class TestLoadConfig:
    def test_loads_real_config(self):
        config = load_config("config.yaml")

        assert set(config) == {"tournament", "players", "courts"}
        assert len(config["players"]) == 9
        assert config["players"][0].id == "alice"
        assert config["players"][0].email == "alice@example.com"
        assert [c.name for c in config["courts"]] == ["North Court", "South Court"]

    def test_tournament_settings(self):
        t = load_config("config.yaml")["tournament"]
        assert t["name"] == "Tuesday Night Doubles"
        assert t["date"] == date(2026, 10, 20)
        assert t["win_condition"] == WinCondition.first_to_target
        assert t["target_score"] == 11

    def test_defaults(self, tmp_path, capsys):
        path = _write(tmp_path, "players: [Ann, Bo, Cy, Di]\n")
        config = load_config(path)
        t = config["tournament"]
        assert t["name"] == "event"
        assert t["date"] is None
        assert t["win_condition"] == WinCondition.first_to_target
        assert t["target_score"] == 11
        assert len(config["courts"]) == 1
        assert "Warning: player Ann has no email" in capsys.readouterr().out

    def test_win_by_2(self, tmp_path):
        path = _write(tmp_path, (
            "tournament: {win_condition: win-by-2, target_score: 15}\n"
            "players: [Ann, Bo, Cy, Di]\n"
        ))
        t = load_config(path)["tournament"]
        assert t["win_condition"] == WinCondition.win_by_2
        assert t["target_score"] == 15

    def test_unknown_win_condition(self, tmp_path):
        path = _write(tmp_path, (
            "tournament: {win_condition: sudden_death}\n"
            "players: [Ann, Bo, Cy, Di]\n"
        ))
        with pytest.raises(ConfigError, match="Unknown win_condition"):
            load_config(path)

    def test_bad_target_score(self, tmp_path):
        path = _write(tmp_path, (
            "tournament: {target_score: 0}\n"
            "players: [Ann, Bo, Cy, Di]\n"
        ))
        with pytest.raises(ConfigError, match="target_score"):
            load_config(path)

    def test_players_required(self, tmp_path):
        with pytest.raises(ConfigError, match="'players' list"):
            load_config(_write(tmp_path, "courts: 2\n"))

    def test_top_level_mapping(self, tmp_path):
        with pytest.raises(ConfigError, match="mapping"):
            load_config(_write(tmp_path, "- Ann\n- Bo\n"))

    def test_invalid_yaml(self, tmp_path):
        with pytest.raises(ConfigError, match="invalid YAML"):
            load_config(_write(tmp_path, "players: [Ann, Bo\n"))

    def test_duplicate_ids(self, tmp_path):
        path = _write(tmp_path, "players: [Ann, ann, Bo, Cy]\n")
        with pytest.raises(ConfigError, match="Duplicate player id 'ann'"):
            load_config(path)

    def test_roster_size_not_checked(self, tmp_path):
        config = load_config(_write(tmp_path, "players: [Ann, Bo]\ncourts: 9\n"))
        assert len(config["players"]) == 2
        assert len(config["courts"]) == 9

    def test_impossible_date(self, tmp_path):
        path = _write(tmp_path, (
            "tournament: {date: '2026-02-30'}\n"
            "players: [Ann, Bo, Cy, Di]\n"
        ))
        with pytest.raises(ConfigError, match="Bad date"):
            load_config(path)

    def test_impossible_unquoted_date(self, tmp_path):
        path = _write(tmp_path, (
            "tournament: {date: 2026-02-30}\n"
            "players: [Ann, Bo, Cy, Di]\n"
        ))
        with pytest.raises(ConfigError):
            load_config(path)

    def test_repeated_court_numbers(self, tmp_path):
        path = _write(tmp_path, (
            "players: [Ann, Bo, Cy, Di]\n"
            "courts: [{name: A, number: 1}, {name: B, number: 1}]\n"
        ))
        with pytest.raises(ConfigError, match="Court numbers"):
            load_config(path)

    def test_hyphenated_names_get_distinct_partnerships(self, tmp_path):
        path = _write(tmp_path, "players: [Mary Jo, Ann, Mary, Jo Ann]\n")
        config = load_config(path)
        assert [p.id for p in config["players"]] == ["mary-jo", "ann", "mary", "jo-ann"]
        result = generate_tournament(config["players"], config["courts"])
        assert len({p.id for p in result["partnerships"]}) == 6
        assert result["validation"]["valid"], result["validation"]["errors"]

    def test_reserved_player_id(self, tmp_path):
        path = _write(tmp_path, (
            "players:\n"
            "  - {id: a+b, name: Ann}\n"
            "  - Bo\n  - Cy\n  - Di\n"
        ))
        with pytest.raises(ConfigError, match="may not contain"):
            load_config(path)

    def test_config_error_is_drrs_error(self, tmp_path):
        with pytest.raises(DrrsError):
            load_config(_write(tmp_path, "players: 4\n"))

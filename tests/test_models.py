"""Tests for models.py — data classes and enums."""

import pytest

from drrs.models import (
    MAX_COURTS, MAX_PLAYERS, MIN_COURTS, MIN_PLAYERS,
    Court, Match, Partnership, Player, Round, WinCondition,
)


def _player(pid, name=None):
    return Player(id=pid, name=name or pid.upper(), email=f"{pid}@example.com")


def _partnership(a, b):
    return Partnership(id=f"{a}-{b}", player1=_player(a), player2=_player(b))


class TestBounds:
    def test_constants(self):
        assert (MIN_PLAYERS, MAX_PLAYERS) == (4, 16)
        assert (MIN_COURTS, MAX_COURTS) == (1, 4)


class TestWinCondition:
    def test_from_str(self):
        assert WinCondition.from_str("first_to_target") == WinCondition.first_to_target
        assert WinCondition.from_str("win_by_2") == WinCondition.win_by_2

    def test_from_str_loose(self):
        assert WinCondition.from_str("Win-By-2") == WinCondition.win_by_2
        assert WinCondition.from_str(" first to target ") == WinCondition.first_to_target

    def test_unknown(self):
        with pytest.raises(ValueError):
            WinCondition.from_str("sudden_death")

    def test_describe(self):
        assert WinCondition.first_to_target.describe(11) == "first to 11"
        assert WinCondition.win_by_2.describe(15) == "first to 15, win by 2"


class TestPlayer:
    def test_equality_by_id(self):
        assert Player("p1", "Alice", "a@x.com") == Player("p1", "Alicia", "")
        assert Player("p1", "Alice") != Player("p2", "Alice")

    def test_hashable(self):
        assert len({Player("p1", "A"), Player("p1", "B"), Player("p2", "A")}) == 2

    def test_immutable(self):
        p = Player("p1", "Alice")
        with pytest.raises(AttributeError):
            p.name = "Bob"


class TestPartnership:
    def test_key_is_order_independent(self):
        assert _partnership("a", "b").key == _partnership("b", "a").key

    def test_involves_and_partner(self):
        p = _partnership("a", "b")
        assert p.involves("a")
        assert not p.involves("c")
        assert p.partner_of("a").id == "b"
        assert p.partner_of("b").id == "a"

    def test_label_uses_names(self):
        p = Partnership("x-y", Player("x", "Xena"), Player("y", ""))
        assert p.label == "Xena & y"


class TestMatch:
    def test_player_ids_and_pair_key(self):
        ab = _partnership("a", "b")
        cd = _partnership("c", "d")
        m1 = Match("m1", ab, cd)
        m2 = Match("m2", cd, ab)
        assert m1.player_ids == ("a", "b", "c", "d")
        assert m1.pair_key == m2.pair_key == ("a-b", "c-d")

    def test_opponent_and_partnership_of(self):
        ab = _partnership("a", "b")
        cd = _partnership("c", "d")
        m = Match("m", ab, cd, round_number=2, court=1)
        assert m.opponent("a-b") == cd
        assert m.opponent("c-d") == ab
        assert m.partnership_of("d") == cd
        assert m.partnership_of("z") is None
        assert m.involves("a-b")
        assert not m.involves("a-c")

    def test_defaults(self):
        m = Match("m", _partnership("a", "b"), _partnership("c", "d"))
        assert m.round_number == 0
        assert m.court is None


class TestRound:
    def test_playing_ids(self):
        rnd = Round(1, [
            Match("m1", _partnership("a", "b"), _partnership("c", "d")),
            Match("m2", _partnership("e", "f"), _partnership("g", "h")),
        ])
        assert rnd.playing_ids == set("abcdefgh")
        assert rnd.bye_partnership is None

    def test_empty(self):
        assert Round(3).playing_ids == set()


class TestCourt:
    def test_fields(self):
        c = Court(id="c1", name="North", number=1)
        assert c.number == 1
        assert c == Court(id="c1", name="North", number=1)

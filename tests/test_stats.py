"""Tests for stats.py — schedule statistics and report."""

from drrs.courts import make_courts
from drrs.models import Match, Partnership, Player, Round
from drrs.scheduler import generate_tournament
from drrs.stats import compute_stats, format_stats_report


def _roster(n):
    return [Player(f"p{i}", f"Player {i}", f"p{i}@example.com") for i in range(1, n + 1)]


def _stats(n, courts=1):
    players = _roster(n)
    result = generate_tournament(players, make_courts(courts))
    stats = compute_stats(players, result["partnerships"], result["rounds"], courts)
    return players, result["partnerships"], stats


class TestComputeStats:
    def test_four_players(self):
        _, _, stats = _stats(4)
        assert stats["player_count"] == 4
        assert stats["partnership_count"] == 6
        assert stats["round_count"] == 3
        assert stats["total_matches"] == 3
        assert set(stats["matches_per_player"].values()) == {3}
        assert set(stats["matches_per_partnership"].values()) == {1}
        assert set(stats["sat_out"].values()) == {0}
        assert set(stats["back_to_back"].values()) == {2}
        assert set(stats["longest_wait"].values()) == {0}
        assert stats["court_usage"] == {1: 3}
        assert stats["max_matches_in_round"] == 1

    def test_match_totals(self):
        _, _, stats = _stats(8, courts=2)
        assert stats["total_matches"] == 210
        assert sum(stats["matches_per_player"].values()) == 4 * 210
        # Each partnership meets every pair drawn from the other six players
        assert set(stats["matches_per_partnership"].values()) == {15}
        assert sum(stats["court_usage"].values()) == 210
        assert stats["max_matches_in_round"] == 2

    def test_byes_for_odd_roster(self):
        _, _, stats = _stats(7, courts=1)
        assert sum(stats["bye_counts"].values()) == stats["round_count"]

    def test_waits(self):
        a, b, c, d = (Player(x) for x in "abcd")
        ab, cd = Partnership("a-b", a, b), Partnership("c-d", c, d)
        rounds = [
            Round(1, [Match("m1", ab, cd, 1, 1)]),
            Round(2),
            Round(3),
            Round(4, [Match("m2", ab, cd, 4, 1)]),
            Round(5, [Match("m3", ab, cd, 5, 1)]),
        ]
        stats = compute_stats([a, b, c, d], [ab, cd], rounds, 1)
        assert stats["longest_wait"]["a"] == 2
        assert stats["back_to_back"]["a"] == 1
        assert stats["sat_out"]["a"] == 2

    def test_player_who_never_plays(self):
        players = _roster(4) + [Player("idle")]
        stats = compute_stats(players, [], [Round(1)], 1)
        assert stats["matches_per_player"]["idle"] == 0
        assert stats["sat_out"]["idle"] == 1
        assert stats["longest_wait"]["idle"] == 0


class TestFormatStatsReport:
    def test_sections(self):
        players, partnerships, stats = _stats(5)
        text = format_stats_report(stats, players, partnerships)
        assert "SCHEDULE STATISTICS" in text
        assert "--- PLAYERS ---" in text
        assert "--- PARTNERSHIPS ---" in text
        assert "--- COURTS ---" in text
        assert "Player 1 & Player 2" in text
        assert "Court 1: 15 matches" in text

    def test_bye_range_only_when_byes(self):
        players, partnerships, stats = _stats(4)
        assert "Byes per partnership" not in format_stats_report(stats, players, partnerships)
        players, partnerships, stats = _stats(7)
        assert "Byes per partnership" in format_stats_report(stats, players, partnerships)

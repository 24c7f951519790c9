"""Statistics and balance reporting for doubles round-robin schedules."""

from collections import defaultdict

from drrs.byes import bye_counts
from drrs.courts import court_utilization
from drrs.models import Partnership, Player, Round


def compute_stats(players: list[Player], partnerships: list[Partnership],
                  rounds: list[Round], court_count: int) -> dict:
    """Compute statistics for a schedule.

    Player waits are measured in rounds between consecutive matches; a
    back-to-back is two matches in adjacent rounds.
    """
    matches_per_partnership = {p.id: 0 for p in partnerships}
    matches_per_player = {p.id: 0 for p in players}
    rounds_played: dict[str, list[int]] = defaultdict(list)
    total_matches = 0

    for rnd in rounds:
        for m in rnd.matches:
            total_matches += 1
            for pid in (m.partnership1.id, m.partnership2.id):
                matches_per_partnership[pid] = matches_per_partnership.get(pid, 0) + 1
            for pid in m.player_ids:
                matches_per_player[pid] = matches_per_player.get(pid, 0) + 1
                rounds_played[pid].append(rnd.number)

    sat_out = {}
    back_to_back = {}
    longest_wait = {}
    for p in players:
        played = rounds_played.get(p.id, [])
        sat_out[p.id] = len(rounds) - len(played)
        gaps = [b - a for a, b in zip(played, played[1:])]
        back_to_back[p.id] = sum(1 for g in gaps if g == 1)
        # rounds sat out between two matches
        longest_wait[p.id] = max(gaps) - 1 if gaps else 0

    return {
        "player_count": len(players),
        "partnership_count": len(partnerships),
        "round_count": len(rounds),
        "total_matches": total_matches,
        "matches_per_partnership": matches_per_partnership,
        "matches_per_player": matches_per_player,
        "bye_counts": bye_counts(partnerships, rounds),
        "sat_out": sat_out,
        "back_to_back": back_to_back,
        "longest_wait": longest_wait,
        "court_usage": court_utilization(rounds, court_count),
        "max_matches_in_round": max((len(r.matches) for r in rounds), default=0),
    }


def format_stats_report(stats: dict, players: list[Player],
                        partnerships: list[Partnership]) -> str:
    """Format statistics into a human-readable report."""
    lines = []
    lines.append("=" * 70)
    lines.append("SCHEDULE STATISTICS")
    lines.append("=" * 70)

    lines.append(f"\nPlayers: {stats['player_count']}   "
                 f"Partnerships: {stats['partnership_count']}   "
                 f"Rounds: {stats['round_count']}   "
                 f"Matches: {stats['total_matches']}")

    # Players
    lines.append("\n--- PLAYERS ---")
    lines.append(f"{'Player':<20} {'Games':>5} {'Out':>5} {'B2B':>5} {'Wait':>5}")
    lines.append("-" * 44)
    for p in players:
        lines.append(
            f"{(p.name or p.id)[:20]:<20} "
            f"{stats['matches_per_player'].get(p.id, 0):>5} "
            f"{stats['sat_out'].get(p.id, 0):>5} "
            f"{stats['back_to_back'].get(p.id, 0):>5} "
            f"{stats['longest_wait'].get(p.id, 0):>5}"
        )

    # Partnerships
    lines.append("\n--- PARTNERSHIPS ---")
    lines.append(f"{'Partnership':<32} {'Games':>5} {'Byes':>5}")
    lines.append("-" * 44)
    for p in partnerships:
        games = stats["matches_per_partnership"].get(p.id, 0)
        byes = stats["bye_counts"].get(p.id, 0)
        lines.append(f"{p.label[:32]:<32} {games:>5} {byes:>5}")

    counts = list(stats["matches_per_partnership"].values())
    if counts:
        lines.append(f"\nGames per partnership: {min(counts)}-{max(counts)}")
    byes = list(stats["bye_counts"].values())
    if byes and max(byes) > 0:
        lines.append(f"Byes per partnership: {min(byes)}-{max(byes)}")

    # Courts
    lines.append("\n--- COURTS ---")
    for number, used in sorted(stats["court_usage"].items()):
        lines.append(f"  Court {number}: {used} matches")

    return "\n".join(lines)

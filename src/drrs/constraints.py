"""Constraint validation for doubles round-robin schedules.

Audits any set of rounds against the roster, independent of how the rounds
were produced. Problems are returned as data, never raised.
"""

from collections import defaultdict

from drrs.byes import bye_counts, find_consecutive_byes
from drrs.courts import court_violations
from drrs.models import MAX_PLAYERS, MIN_PLAYERS, Match, Partnership, Player, Round
from drrs.partnerships import validate_partnerships
from drrs.roundrobin import verify_round_robin


def validate_match(match: Match) -> bool:
    """A match needs two different partnerships with no player in common."""
    if match.partnership1.id == match.partnership2.id:
        return False
    return match.partnership1.key.isdisjoint(match.partnership2.key)


def validate_tournament(players: list[Player], partnerships: list[Partnership],
                        rounds: list[Round], court_count: int) -> dict:
    """Validate a complete tournament against all constraints.

    Returns dict with:
    - valid: bool (True if no errors)
    - errors: list of blocking problems
    - warnings: list of fairness issues
    """
    errors = []
    warnings = []

    # Roster
    if len(players) < MIN_PLAYERS:
        errors.append(f"Minimum {MIN_PLAYERS} players required (got {len(players)})")
    if len(players) > MAX_PLAYERS:
        errors.append(f"Maximum {MAX_PLAYERS} players allowed (got {len(players)})")

    names = set()
    emails = set()
    for player in players:
        if player.name in names:
            errors.append(f"Duplicate player name: {player.name}")
        names.add(player.name)
        email = player.email.strip().lower()
        if email:
            if email in emails:
                errors.append(f"Duplicate email: {player.email}")
            emails.add(email)

    if not validate_partnerships(players, partnerships):
        errors.append(
            f"Invalid partnership generation: expected "
            f"{len(players) * (len(players) - 1) // 2} partnerships with each "
            f"player in {len(players) - 1}, got {len(partnerships)}"
        )

    # Round numbering
    numbers = [rnd.number for rnd in rounds]
    if numbers != list(range(1, len(rounds) + 1)):
        errors.append(
            f"Rounds are not numbered 1-{len(rounds)} in order: {numbers}"
        )

    # Per-round checks
    match_ids = set()
    matchup_rounds: dict[tuple[str, str], list[int]] = defaultdict(list)
    for rnd in rounds:
        players_in_round = set()
        for m in rnd.matches:
            if m.round_number != rnd.number:
                errors.append(
                    f"Match {m.id} is in round {rnd.number} but numbered "
                    f"{m.round_number}"
                )
            if not validate_match(m):
                errors.append(
                    f"Round {rnd.number}: {m.partnership1.id} vs "
                    f"{m.partnership2.id} share a player"
                )
            if m.id in match_ids:
                errors.append(f"Duplicate match id: {m.id}")
            match_ids.add(m.id)
            matchup_rounds[m.pair_key].append(rnd.number)

            for pid in m.player_ids:
                if pid in players_in_round:
                    errors.append(
                        f"Player {pid} scheduled twice in round {rnd.number}"
                    )
                players_in_round.add(pid)

        bye = rnd.bye_partnership
        if bye is not None and not players_in_round.isdisjoint(bye.player_ids):
            errors.append(
                f"Round {rnd.number}: bye partnership {bye.id} also plays "
                f"that round"
            )

    for (a, b), in_rounds in matchup_rounds.items():
        if len(in_rounds) > 1:
            errors.append(
                f"Duplicate matchup: {a} vs {b} in rounds "
                f"{', '.join(str(n) for n in in_rounds)}"
            )

    # Completeness
    coverage = verify_round_robin(partnerships, rounds)
    if not coverage["valid"]:
        errors.append("Incomplete or invalid match schedule")
        errors.extend(coverage["errors"])

    # Courts
    errors.extend(court_violations(rounds, court_count))

    # Fairness
    if len(players) % 2 == 1:
        counts = bye_counts(partnerships, rounds)
        if counts:
            lo, hi = min(counts.values()), max(counts.values())
            if hi - lo > 1:
                warnings.append(
                    f"Uneven bye distribution: {lo}-{hi} byes per partnership"
                )
        for pid, first, second in find_consecutive_byes(rounds):
            warnings.append(
                f"Partnership {pid} has consecutive byes in rounds "
                f"{first} and {second}"
            )

    match_counts = {p.id: 0 for p in partnerships}
    for rnd in rounds:
        for m in rnd.matches:
            for pid in (m.partnership1.id, m.partnership2.id):
                match_counts[pid] = match_counts.get(pid, 0) + 1
    if match_counts:
        lo, hi = min(match_counts.values()), max(match_counts.values())
        if hi - lo > 2:
            warnings.append(
                f"Uneven match distribution: {lo}-{hi} matches per partnership"
            )

    return {
        "valid": len(errors) == 0,
        "errors": errors,
        "warnings": warnings,
    }


def format_validation_report(result: dict) -> str:
    """Format validation results as text."""
    lines = []
    lines.append("=" * 60)
    lines.append("SCHEDULE VALIDATION REPORT")
    lines.append("=" * 60)

    if result["valid"]:
        lines.append("\nRESULT: VALID (no errors)")
    else:
        lines.append(f"\nRESULT: INVALID ({len(result['errors'])} errors)")

    if result["errors"]:
        lines.append(f"\n--- ERRORS ({len(result['errors'])}) ---")
        for e in result["errors"]:
            lines.append(f"  ERROR: {e}")

    if result["warnings"]:
        lines.append(f"\n--- WARNINGS ({len(result['warnings'])}) ---")
        for w in result["warnings"]:
            lines.append(f"  WARN: {w}")

    return "\n".join(lines)

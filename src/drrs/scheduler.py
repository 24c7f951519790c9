"""Tournament generation pipeline.

Stages:
1. Partnerships — every pair of players (partnerships.py)
2. Rounds — greedy packing of non-conflicting matches (roundrobin.py)
3. Byes — fair rotation, odd rosters only (byes.py)
4. Courts — longest-waiting players get courts first (courts.py)
5. Validation — independent audit of the result (constraints.py)

Roster and court counts are checked up front, so a bad request fails before
any partnership is built. Validation findings are returned, not raised.
"""

from drrs.byes import assign_byes
from drrs.constraints import validate_tournament
from drrs.courts import check_court_count, optimize_court_assignments
from drrs.models import MAX_COURTS, MAX_PLAYERS, MIN_COURTS, MIN_PLAYERS, Court, Player
from drrs.partnerships import check_roster_size, generate_partnerships
from drrs.roundrobin import generate_round_robin


def can_generate_tournament(player_count: int, court_count: int) -> bool:
    """Cheap precondition check for roster and court counts."""
    return (MIN_PLAYERS <= player_count <= MAX_PLAYERS
            and MIN_COURTS <= court_count <= MAX_COURTS)


def generate_tournament(players: list[Player], courts: list[Court]) -> dict:
    """Generate partnerships, rounds, byes and courts, then validate.

    Returns dict with:
    - partnerships: list[Partnership]
    - rounds: list[Round] with courts (and byes for odd rosters)
    - validation: dict from validate_tournament; check validation["valid"]
    """
    check_roster_size(len(players))
    check_court_count(courts)

    partnerships = generate_partnerships(players)
    rounds = generate_round_robin(partnerships)

    if len(players) % 2 == 1:
        rounds = assign_byes(partnerships, rounds)

    rounds = optimize_court_assignments(rounds, courts)

    validation = validate_tournament(players, partnerships, rounds, len(courts))

    return {
        "partnerships": partnerships,
        "rounds": rounds,
        "validation": validation,
    }

"""Round-robin match generation for doubles partnerships."""

from math import comb

from drrs.models import OPPONENT_SEP, Match, Partnership, Round
from drrs.partnerships import has_shared_player


def match_id(partnership1_id: str, partnership2_id: str) -> str:
    return f"{partnership1_id}{OPPONENT_SEP}{partnership2_id}"


def build_candidate_matches(partnerships: list[Partnership]) -> list[Match]:
    """Every pair of partnerships that share no player, in index order."""
    matches = []
    for i, p1 in enumerate(partnerships):
        for p2 in partnerships[i + 1:]:
            if has_shared_player(p1, p2):
                continue
            matches.append(Match(
                id=match_id(p1.id, p2.id),
                partnership1=p1,
                partnership2=p2,
            ))
    return matches


def generate_round_robin(partnerships: list[Partnership]) -> list[Round]:
    """Pack every candidate match into conflict-free rounds.

    Greedy round filling: each round scans the unscheduled matches in
    candidate order and takes any match whose four players are all still free
    this round. No byes are assigned here.

    The first unscheduled match always fits an empty round, so every round
    makes progress and all candidate matches end up scheduled. Round count is
    not minimized.
    """
    remaining = build_candidate_matches(partnerships)
    all_players = {pid for p in partnerships for pid in p.player_ids}

    rounds = []
    while remaining:
        number = len(rounds) + 1
        committed: set[str] = set()
        picked = []
        left = []
        for idx, match in enumerate(remaining):
            # Fewer than four free players: nothing else can fit
            if len(all_players) - len(committed) < 4:
                left.extend(remaining[idx:])
                break
            players = match.player_ids
            if committed.isdisjoint(players):
                picked.append(match)
                committed.update(players)
            else:
                left.append(match)

        if not picked:
            break

        rounds.append(Round(
            number=number,
            matches=[
                Match(m.id, m.partnership1, m.partnership2, round_number=number)
                for m in picked
            ],
        ))
        remaining = left

    return rounds


def expected_match_count(player_count: int) -> int:
    """Size of the candidate set: partnerships x disjoint partnerships / 2."""
    if player_count < 4:
        return 0
    return comb(player_count, 2) * comb(player_count - 2, 2) // 2


def get_matches_for_partnership(rounds: list[Round],
                                partnership_id: str) -> list[Match]:
    return [m for rnd in rounds for m in rnd.matches if m.involves(partnership_id)]


def verify_round_robin(partnerships: list[Partnership],
                       rounds: list[Round]) -> dict:
    """Verify every partnership met exactly the partnerships it can play.

    Expected opponents are derived from the partnerships alone, not from
    the scheduler's candidate list.

    Returns dict with:
    - valid: bool
    - errors: list of error strings
    - opponents: dict of partnership id -> set of opponent ids met
    """
    errors = []
    opponents: dict[str, set[str]] = {p.id: set() for p in partnerships}
    by_id = {p.id: p for p in partnerships}

    for rnd in rounds:
        for m in rnd.matches:
            a, b = m.partnership1.id, m.partnership2.id
            for pid in (a, b):
                if pid not in by_id:
                    errors.append(
                        f"Round {rnd.number}: unknown partnership {pid}"
                    )
            if a in opponents:
                opponents[a].add(b)
            if b in opponents:
                opponents[b].add(a)

    for p in partnerships:
        expected = {
            q.id for q in partnerships
            if q.id != p.id and not has_shared_player(p, q)
        }
        met = opponents[p.id]
        missing = expected - met
        illegal = met - expected
        if missing:
            errors.append(
                f"Partnership {p.id} never plays {len(missing)} opponent(s): "
                f"{', '.join(sorted(missing))}"
            )
        if illegal:
            errors.append(
                f"Partnership {p.id} plays ineligible opponent(s): "
                f"{', '.join(sorted(illegal))}"
            )

    return {
        "valid": len(errors) == 0,
        "errors": errors,
        "opponents": opponents,
    }

"""Court assignment for scheduled rounds.

Matches within a round are spread over at most four courts. The main
strategy gives the lowest-numbered free court to the match whose players
have waited longest since they last played.
"""

from dataclasses import replace
from math import ceil

from drrs.exceptions import CourtNumberingError, NoCourtsError, TooManyCourtsError
from drrs.models import MAX_COURTS, MIN_COURTS, Court, Match, Round

# Wait credited to a player who has not played yet, on top of the round index
NEVER_PLAYED_WAIT = 10


def make_courts(count: int) -> list[Court]:
    return [Court(id=f"court-{n}", name=f"Court {n}", number=n)
            for n in range(1, count + 1)]


def check_court_count(courts: list[Court]) -> None:
    if len(courts) < MIN_COURTS:
        raise NoCourtsError("At least one court is required")
    if len(courts) > MAX_COURTS:
        raise TooManyCourtsError(
            f"Maximum {MAX_COURTS} courts allowed (got {len(courts)})"
        )
    numbers = sorted(c.number for c in courts)
    if numbers != list(range(1, len(courts) + 1)):
        raise CourtNumberingError(
            f"Court numbers must be 1-{len(courts)} with no repeats, got {numbers}"
        )


def assign_courts(rounds: list[Round], courts: list[Court]) -> list[Round]:
    """Simple block layout: consecutive matches share a court."""
    check_court_count(courts)
    ordered = sorted(courts, key=lambda c: c.number)

    result = []
    for rnd in rounds:
        per_court = max(1, ceil(len(rnd.matches) / len(ordered)))
        matches = [
            replace(m, court=ordered[(i // per_court) % len(ordered)].number)
            for i, m in enumerate(rnd.matches)
        ]
        result.append(replace(rnd, matches=matches))
    return result


def match_priority(match: Match, history: dict[str, list[int]],
                   round_index: int) -> float:
    """Average rounds waited by the match's four players.

    Higher means the match should get a court sooner.
    """
    total = 0
    for pid in match.player_ids:
        played = history.get(pid)
        if played:
            total += round_index - played[-1]
        else:
            total += round_index + NEVER_PLAYED_WAIT
    return total / 4


def optimize_court_assignments(rounds: list[Round],
                               courts: list[Court]) -> list[Round]:
    """Assign courts so players who waited longest play first.

    Per round, while there are free courts, the unassigned match with the
    highest priority (earliest match on ties) takes the next court in number
    order. Matches beyond the court count are dealt round-robin over the
    courts. The player history is carried from round to round.
    """
    check_court_count(courts)
    ordered = sorted(courts, key=lambda c: c.number)
    history: dict[str, list[int]] = {}

    result = []
    for round_index, rnd in enumerate(rounds):
        unassigned = list(rnd.matches)
        assigned: dict[str, int] = {}

        for court in ordered:
            if not unassigned:
                break
            best = max(unassigned,
                       key=lambda m: match_priority(m, history, round_index))
            assigned[best.id] = court.number
            unassigned.remove(best)
            _record(history, best, round_index)

        for i, m in enumerate(unassigned):
            assigned[m.id] = ordered[i % len(ordered)].number
            _record(history, m, round_index)

        result.append(replace(rnd, matches=[
            replace(m, court=assigned[m.id]) for m in rnd.matches
        ]))

    return result


def _record(history: dict[str, list[int]], match: Match, round_index: int):
    for pid in match.player_ids:
        history.setdefault(pid, []).append(round_index)


def court_violations(rounds: list[Round], court_count: int) -> list[str]:
    """Describe every court problem in the rounds.

    A match needs a court in 1..court_count, the courts used in a round must
    run from 1 without gaps, and no court may host more than its share
    (ceil(matches / court_count)) of a round's matches.
    """
    problems = []
    for rnd in rounds:
        used: dict[int, int] = {}
        for m in rnd.matches:
            if m.court is None:
                problems.append(f"Round {rnd.number}: match {m.id} has no court")
                continue
            if m.court < 1 or m.court > court_count:
                problems.append(
                    f"Round {rnd.number}: match {m.id} on court {m.court} "
                    f"(valid courts 1-{court_count})"
                )
            used[m.court] = used.get(m.court, 0) + 1
        if used and sorted(used) != list(range(1, len(used) + 1)):
            problems.append(
                f"Round {rnd.number}: courts used {sorted(used)} are not "
                f"contiguous from 1"
            )
        share = ceil(len(rnd.matches) / court_count) if court_count > 0 else 0
        for court, count in sorted(used.items()):
            if count > share:
                problems.append(
                    f"Round {rnd.number}: court {court} hosts {count} matches "
                    f"(at most {share} with {court_count} courts)"
                )
    return problems


def validate_court_assignments(rounds: list[Round], court_count: int) -> bool:
    return not court_violations(rounds, court_count)


def court_utilization(rounds: list[Round], court_count: int) -> dict[int, int]:
    """Matches played on each court number."""
    usage = {n: 0 for n in range(1, court_count + 1)}
    for rnd in rounds:
        for m in rnd.matches:
            if m.court is not None:
                usage[m.court] = usage.get(m.court, 0) + 1
    return usage

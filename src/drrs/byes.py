"""Bye rotation for rosters with an odd number of players.

A bye goes to a partnership whose two players both sit out the round.
Assignment is a fold over the rounds carrying the bye counts and the
previous round's bye holder, followed by a rebalancing pass that hands
byes along chains of eligible partnerships.
"""

from collections import defaultdict, deque
from dataclasses import replace
from typing import Optional

from drrs.models import Partnership, Round


def _player_count(partnerships: list[Partnership]) -> int:
    return len({pid for p in partnerships for pid in p.player_ids})


def _eligible(partnerships: list[Partnership], rnd: Round) -> list[Partnership]:
    playing = rnd.playing_ids
    return [p for p in partnerships if playing.isdisjoint(p.player_ids)]


def assign_byes(partnerships: list[Partnership],
                rounds: list[Round]) -> list[Round]:
    """Give each round at most one bye, spreading byes evenly.

    For each round the eligible partnerships are those with neither player
    playing, excluding last round's bye holder. The one with the fewest byes
    so far wins; ties go to the earlier partnership. Rounds where nobody is
    eligible get no bye. Even rosters are returned as they are.
    """
    if _player_count(partnerships) % 2 == 0:
        return [replace(rnd, matches=list(rnd.matches)) for rnd in rounds]

    counts = {p.id: 0 for p in partnerships}
    previous: Optional[str] = None
    result = []

    for rnd in rounds:
        chosen = None
        for p in _eligible(partnerships, rnd):
            if p.id == previous:
                continue
            if chosen is None or counts[p.id] < counts[chosen.id]:
                chosen = p

        if chosen is not None:
            counts[chosen.id] += 1
        previous = chosen.id if chosen is not None else None
        result.append(replace(rnd, matches=list(rnd.matches),
                              bye_partnership=chosen))

    return rebalance_byes(partnerships, result)


def rebalance_byes(partnerships: list[Partnership],
                   rounds: list[Round]) -> list[Round]:
    """Move byes from over-served to under-served partnerships.

    While the bye spread exceeds 1, look for a chain of hand-overs starting
    at a partnership with the most byes: it gives one of its bye rounds to
    another partnership eligible in that round, which may in turn give up one
    of its own, until the chain reaches a partnership at least two byes
    behind. Intermediate counts are unchanged. Failing that, an empty round's
    bye goes straight to such a partnership. No hand-over may create
    back-to-back byes. Each chain lowers the sum of squared counts and each
    fill uses up an empty round, so the search terminates.
    """
    if not partnerships:
        return list(rounds)

    order = [p.id for p in partnerships]
    by_id = {p.id: p for p in partnerships}
    eligible = [[p.id for p in _eligible(partnerships, rnd)] for rnd in rounds]
    holder = [rnd.bye_partnership.id if rnd.bye_partnership else None
              for rnd in rounds]
    index_of = {rnd.number: i for i, rnd in enumerate(rounds)}

    counts = {pid: 0 for pid in order}
    for h in holder:
        if h in counts:
            counts[h] += 1

    def clashes(i: int, pid: str, changing: set[int]) -> bool:
        number = rounds[i].number
        for n in (number - 1, number + 1):
            j = index_of.get(n)
            if j is None:
                continue
            if j in changing or holder[j] == pid:
                return True
        return False

    def find_chain(top: int) -> Optional[tuple[tuple[int, str], ...]]:
        held: dict[str, list[int]] = defaultdict(list)
        for i, h in enumerate(holder):
            if h is not None:
                held[h].append(i)

        start = [pid for pid in order if counts[pid] == top]
        seen = set(start)
        queue = deque((pid, ()) for pid in start)
        while queue:
            pid, chain = queue.popleft()
            changing = {i for i, _ in chain}
            for i in held[pid]:
                if i in changing:
                    continue
                for q in eligible[i]:
                    if q in seen or clashes(i, q, changing):
                        continue
                    step = chain + ((i, q),)
                    if counts[q] <= top - 2:
                        return step
                    seen.add(q)
                    queue.append((q, step))

        for i, h in enumerate(holder):
            if h is not None:
                continue
            for q in eligible[i]:
                if counts[q] <= top - 2 and not clashes(i, q, set()):
                    return ((i, q),)
        return None

    while True:
        top = max(counts.values())
        if top - min(counts.values()) <= 1:
            break
        chain = find_chain(top)
        if chain is None:
            break
        source = holder[chain[0][0]]
        for i, pid in chain:
            holder[i] = pid
        if source is not None:
            counts[source] -= 1
        counts[chain[-1][1]] += 1

    return [
        replace(rnd, matches=list(rnd.matches),
                bye_partnership=by_id[h] if h in by_id else rnd.bye_partnership)
        for rnd, h in zip(rounds, holder)
    ]


def bye_statistics(partnerships: list[Partnership],
                   rounds: list[Round]) -> dict[str, list[int]]:
    """Round numbers in which each partnership had its byes."""
    stats: dict[str, list[int]] = {p.id: [] for p in partnerships}
    for rnd in rounds:
        if rnd.bye_partnership is not None:
            stats.setdefault(rnd.bye_partnership.id, []).append(rnd.number)
    return stats


def bye_counts(partnerships: list[Partnership],
               rounds: list[Round]) -> dict[str, int]:
    return {pid: len(nums) for pid, nums in bye_statistics(partnerships, rounds).items()}


def validate_bye_distribution(partnerships: list[Partnership],
                              rounds: list[Round]) -> bool:
    counts = bye_counts(partnerships, rounds)
    if not counts:
        return True
    return max(counts.values()) - min(counts.values()) <= 1


def find_consecutive_byes(rounds: list[Round]) -> list[tuple[str, int, int]]:
    """(partnership id, round, next round) for byes in adjacent rounds."""
    holder = {rnd.number: rnd.bye_partnership.id
              for rnd in rounds if rnd.bye_partnership is not None}
    found = []
    for number in sorted(holder):
        if holder.get(number + 1) == holder[number]:
            found.append((holder[number], number, number + 1))
    return found


def validate_no_consecutive_byes(rounds: list[Round]) -> bool:
    return not find_consecutive_byes(rounds)


def expected_byes(player_count: int, round_count: int) -> int:
    """Byes each partnership can expect, rounded down."""
    if player_count % 2 == 0:
        return 0
    partnership_count = player_count * (player_count - 1) // 2
    return round_count // partnership_count

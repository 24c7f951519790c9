"""Partnership generation: every unordered pair of players."""

from collections import defaultdict
from typing import Optional

from drrs.exceptions import InvalidPlayerIdError, RosterTooLargeError, RosterTooSmallError
from drrs.models import (
    MAX_PLAYERS, MIN_PLAYERS, PARTNER_SEP, RESERVED_ID_CHARS, Partnership, Player,
)


def check_roster_size(player_count: int) -> None:
    if player_count < MIN_PLAYERS:
        raise RosterTooSmallError(
            f"Minimum {MIN_PLAYERS} players required for a tournament "
            f"(got {player_count})"
        )
    if player_count > MAX_PLAYERS:
        raise RosterTooLargeError(
            f"Maximum {MAX_PLAYERS} players allowed per tournament "
            f"(got {player_count})"
        )


def check_player_ids(players: list[Player]) -> None:
    """Player ids must be unique and free of the id separators."""
    seen = set()
    for player in players:
        bad = [ch for ch in RESERVED_ID_CHARS if ch in player.id]
        if bad:
            raise InvalidPlayerIdError(
                f"Player id {player.id!r} contains reserved character {bad[0]!r}"
            )
        if player.id in seen:
            raise InvalidPlayerIdError(f"Duplicate player id {player.id!r}")
        seen.add(player.id)


def partnership_id(player1_id: str, player2_id: str) -> str:
    return f"{player1_id}{PARTNER_SEP}{player2_id}"


def generate_partnerships(players: list[Player]) -> list[Partnership]:
    """Generate all C(n,2) partnerships for a roster of 4-16 players.

    Pairs are enumerated by roster index (i < j), which fixes the ids:
    partnership "{a.id}+{b.id}" always lists the earlier rostered player first.
    Player ids are unique and never contain "+", so the partnership ids are
    unique too.
    """
    check_roster_size(len(players))
    check_player_ids(players)

    partnerships = []
    for i, p1 in enumerate(players):
        for p2 in players[i + 1:]:
            partnerships.append(Partnership(
                id=partnership_id(p1.id, p2.id),
                player1=p1,
                player2=p2,
            ))
    return partnerships


def has_shared_player(p1: Partnership, p2: Partnership) -> bool:
    return bool(p1.key & p2.key)


def get_partnership(partnerships: list[Partnership], player1_id: str,
                    player2_id: str) -> Optional[Partnership]:
    """Find the partnership of two players, in either order."""
    key = frozenset((player1_id, player2_id))
    for p in partnerships:
        if p.key == key:
            return p
    return None


def get_partnerships_for_player(partnerships: list[Partnership],
                                player_id: str) -> list[Partnership]:
    return [p for p in partnerships if p.involves(player_id)]


def partnership_counts(partnerships: list[Partnership]) -> dict[str, int]:
    """Number of partnerships each player id appears in."""
    counts: dict[str, int] = defaultdict(int)
    for p in partnerships:
        counts[p.player1.id] += 1
        counts[p.player2.id] += 1
    return dict(counts)


def validate_partnerships(players: list[Player],
                          partnerships: list[Partnership]) -> bool:
    """Check each player is in exactly n-1 partnerships and there are C(n,2)."""
    n = len(players)
    counts = partnership_counts(partnerships)
    for player in players:
        if counts.get(player.id, 0) != n - 1:
            return False
    if len(counts) != n:
        return False
    if len({p.key for p in partnerships}) != len(partnerships):
        return False
    return len(partnerships) == n * (n - 1) // 2

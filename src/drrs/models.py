"""Data models for the doubles round-robin scheduler."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


MIN_PLAYERS = 4
MAX_PLAYERS = 16
MIN_COURTS = 1
MAX_COURTS = 4

# Partnership ids join player ids with PARTNER_SEP, match ids join partnership
# ids with OPPONENT_SEP. Player ids may contain neither.
PARTNER_SEP = "+"
OPPONENT_SEP = "/"
RESERVED_ID_CHARS = PARTNER_SEP + OPPONENT_SEP


class WinCondition(Enum):
    first_to_target = "first_to_target"
    win_by_2 = "win_by_2"

    @classmethod
    def from_str(cls, s: str) -> "WinCondition":
        return cls(s.strip().lower().replace("-", "_").replace(" ", "_"))

    def describe(self, target_score: int) -> str:
        if self is WinCondition.win_by_2:
            return f"first to {target_score}, win by 2"
        return f"first to {target_score}"


@dataclass(frozen=True)
class Player:
    """A rostered player. Identity is the id alone."""
    id: str
    name: str = field(default="", compare=False)
    email: str = field(default="", compare=False)


@dataclass(frozen=True)
class Partnership:
    """A fixed two-player doubles team."""
    id: str
    player1: Player
    player2: Player

    @property
    def player_ids(self) -> tuple[str, str]:
        return (self.player1.id, self.player2.id)

    @property
    def key(self) -> frozenset[str]:
        """Order-independent lookup key."""
        return frozenset(self.player_ids)

    @property
    def label(self) -> str:
        return f"{self.player1.name or self.player1.id} & {self.player2.name or self.player2.id}"

    def involves(self, player_id: str) -> bool:
        return player_id in self.player_ids

    def partner_of(self, player_id: str) -> Player:
        if player_id == self.player1.id:
            return self.player2
        return self.player1


@dataclass
class Match:
    """A game between two partnerships that share no player."""
    id: str
    partnership1: Partnership
    partnership2: Partnership
    round_number: int = 0
    court: Optional[int] = None

    @property
    def player_ids(self) -> tuple[str, str, str, str]:
        return self.partnership1.player_ids + self.partnership2.player_ids

    @property
    def pair_key(self) -> tuple[str, str]:
        """Unordered (partnership, partnership) key, normalized by id."""
        a, b = self.partnership1.id, self.partnership2.id
        return (a, b) if a < b else (b, a)

    def involves(self, partnership_id: str) -> bool:
        return partnership_id in (self.partnership1.id, self.partnership2.id)

    def opponent(self, partnership_id: str) -> Partnership:
        if partnership_id == self.partnership1.id:
            return self.partnership2
        return self.partnership1

    def partnership_of(self, player_id: str) -> Optional[Partnership]:
        if self.partnership1.involves(player_id):
            return self.partnership1
        if self.partnership2.involves(player_id):
            return self.partnership2
        return None


@dataclass
class Round:
    """A set of matches where each player plays at most once."""
    number: int
    matches: list[Match] = field(default_factory=list)
    bye_partnership: Optional[Partnership] = None

    @property
    def playing_ids(self) -> set[str]:
        ids = set()
        for m in self.matches:
            ids.update(m.player_ids)
        return ids


@dataclass(frozen=True)
class Court:
    """A physical court. Numbers run from 1."""
    id: str
    name: str
    number: int

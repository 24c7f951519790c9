"""Config loading for the doubles round-robin scheduler."""

import re
from datetime import date
from pathlib import Path

import yaml

from drrs.courts import make_courts
from drrs.exceptions import ConfigError
from drrs.models import RESERVED_ID_CHARS, Court, Player, WinCondition

DEFAULT_TARGET_SCORE = 11


def parse_date(s: str) -> date:
    """Parse date string YYYY-MM-DD."""
    parts = s.strip().split("-")
    if len(parts) != 3:
        raise ConfigError(f"Bad date {s!r}, expected YYYY-MM-DD")
    try:
        return date(int(parts[0]), int(parts[1]), int(parts[2]))
    except ValueError as exc:
        raise ConfigError(f"Bad date {s!r}: {exc}") from exc


def slugify(name: str) -> str:
    """'Mary Jo Smith' -> 'mary-jo-smith'."""
    return re.sub(r"[^a-z0-9]+", "-", name.strip().lower()).strip("-")


def parse_player(entry, index: int) -> Player:
    """Build a Player from a bare name or a {id, name, email} mapping."""
    if isinstance(entry, str):
        name = entry.strip()
        return Player(id=slugify(name) or f"player-{index}", name=name, email="")

    if not isinstance(entry, dict) or "name" not in entry:
        raise ConfigError(f"Player #{index} needs a name: {entry!r}")

    name = str(entry["name"]).strip()
    pid = str(entry.get("id") or slugify(name) or f"player-{index}")
    return Player(id=pid, name=name, email=str(entry.get("email") or "").strip())


def parse_courts(raw) -> list[Court]:
    """Courts are a count, or a list of bare names or {name, number} entries.

    Bare names are numbered by position. Mapping entries must carry their
    number, and the numbers must come out as exactly 1..len(courts).
    """
    if raw is None:
        return make_courts(1)
    if isinstance(raw, bool) or not isinstance(raw, (int, list)):
        raise ConfigError(f"courts must be a number or a list, got {raw!r}")
    if isinstance(raw, int):
        return make_courts(raw)

    courts = []
    for i, entry in enumerate(raw, 1):
        if isinstance(entry, str):
            courts.append(Court(id=f"court-{i}", name=entry, number=i))
            continue
        if not isinstance(entry, dict):
            raise ConfigError(f"Court #{i} is not understood: {entry!r}")
        if "number" not in entry:
            raise ConfigError(f"Court #{i} needs a number: {entry!r}")
        number = entry["number"]
        if isinstance(number, bool) or not isinstance(number, int):
            raise ConfigError(f"Court #{i} has a non-numeric number: {number!r}")
        courts.append(Court(
            id=str(entry.get("id", f"court-{number}")),
            name=str(entry.get("name", f"Court {number}")),
            number=number,
        ))

    numbers = sorted(c.number for c in courts)
    if numbers != list(range(1, len(courts) + 1)):
        raise ConfigError(
            f"Court numbers must be 1-{len(courts)} with no repeats, got {numbers}"
        )
    return courts


def load_config(path: str | Path) -> dict:
    """Load a roster/courts YAML file, returning structured data.

    Returns dict with:
    - tournament: {name, date, win_condition, target_score}
    - players: list[Player] in roster order
    - courts: list[Court]

    Roster and court counts are left for the scheduler to check.
    """
    path = Path(path)
    with open(path) as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigError(f"{path}: invalid YAML ({exc})") from exc
        except ValueError as exc:
            # unquoted impossible dates fail inside the YAML timestamp loader
            raise ConfigError(f"{path}: bad value ({exc})") from exc

    if not isinstance(raw, dict):
        raise ConfigError(f"{path}: expected a mapping at the top level")
    if "players" not in raw or not isinstance(raw["players"], list):
        raise ConfigError(f"{path}: a 'players' list is required")

    # Tournament
    traw = raw.get("tournament") or {}
    try:
        win_condition = WinCondition.from_str(
            str(traw.get("win_condition", WinCondition.first_to_target.value))
        )
    except ValueError as exc:
        raise ConfigError(
            f"Unknown win_condition {traw.get('win_condition')!r} "
            f"(use first_to_target or win_by_2)"
        ) from exc

    target_score = traw.get("target_score", DEFAULT_TARGET_SCORE)
    if not isinstance(target_score, int) or target_score <= 0:
        raise ConfigError(f"target_score must be a positive integer, got {target_score!r}")

    play_date = traw.get("date")
    tournament = {
        "name": str(traw.get("name", path.stem)),
        "date": parse_date(str(play_date)) if play_date else None,
        "win_condition": win_condition,
        "target_score": target_score,
    }

    # Players
    players = [parse_player(entry, i) for i, entry in enumerate(raw["players"], 1)]

    errors = []
    seen: set[str] = set()
    for p in players:
        if p.id in seen:
            errors.append(f"Duplicate player id {p.id!r}")
        seen.add(p.id)
        if any(ch in p.id for ch in RESERVED_ID_CHARS):
            errors.append(
                f"Player id {p.id!r} may not contain any of {RESERVED_ID_CHARS!r}"
            )
    if errors:
        raise ConfigError("Config validation errors: " + "; ".join(errors))

    for p in players:
        if not p.email:
            print(f"Warning: player {p.name} has no email")

    return {
        "tournament": tournament,
        "players": players,
        "courts": parse_courts(raw.get("courts")),
    }

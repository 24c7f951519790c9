"""Standalone verifier for doubles round-robin schedules.

Re-imports a schedule CSV (as written by drrs-schedule) and audits it
against the roster in a config file.
Usage: drrs-verify <schedule.csv> [config.yaml]
"""

import csv
import sys
from pathlib import Path

from drrs.config import load_config
from drrs.constraints import format_validation_report, validate_tournament
from drrs.exceptions import ConfigError, DrrsError
from drrs.models import Match, Partnership, Player, Round
from drrs.partnerships import generate_partnerships
from drrs.roundrobin import match_id
from drrs.stats import compute_stats, format_stats_report


def _int_cell(row: dict, column: str, line: int):
    value = (row.get(column) or "").strip()
    if not value:
        return None
    try:
        return int(value)
    except ValueError as exc:
        raise ConfigError(f"Line {line}: {column} is not a number: {value!r}") from exc


def parse_csv_schedule(csv_path: str | Path, players: list[Player],
                       ) -> tuple[list[Partnership], list[Round]]:
    """Parse a schedule CSV back into partnerships and rounds.

    Partnerships come from the roster; each row's player ids are matched to
    them in either order. Rounds appear in the order their numbers are first
    seen.
    """
    partnerships = generate_partnerships(players)
    by_key = {p.key: p for p in partnerships}
    known = {p.id for p in players}

    def lookup(a: str, b: str, line: int) -> Partnership:
        for pid in (a, b):
            if pid not in known:
                raise ConfigError(f"Line {line}: unknown player id {pid!r}")
        p = by_key.get(frozenset((a, b)))
        if p is None:
            raise ConfigError(f"Line {line}: {a!r} and {b!r} are not a partnership")
        return p

    rounds: dict[int, Round] = {}
    with open(csv_path, newline="") as f:
        reader = csv.DictReader(f)
        missing = [c for c in ("Round", "Team1_Player1", "Team1_Player2")
                   if c not in (reader.fieldnames or [])]
        if missing:
            raise ConfigError(f"{csv_path}: missing columns {', '.join(missing)}")

        for line, row in enumerate(reader, 2):
            number = _int_cell(row, "Round", line)
            if number is None:
                continue
            rnd = rounds.setdefault(number, Round(number=number))

            team1 = lookup(row["Team1_Player1"].strip(),
                           row["Team1_Player2"].strip(), line)
            if (row.get("Bye") or "").strip():
                rnd.bye_partnership = team1
                continue

            team2 = lookup((row.get("Team2_Player1") or "").strip(),
                           (row.get("Team2_Player2") or "").strip(), line)
            mid = (row.get("Match_ID") or "").strip() or match_id(team1.id, team2.id)
            rnd.matches.append(Match(
                id=mid,
                partnership1=team1,
                partnership2=team2,
                round_number=number,
                court=_int_cell(row, "Court", line),
            ))

    return partnerships, list(rounds.values())


def main():
    if len(sys.argv) < 2:
        print("Usage: drrs-verify <schedule.csv> [config.yaml]")
        print("  Validates a schedule CSV against the roster and courts in config.")
        sys.exit(1)

    csv_path = sys.argv[1]
    config_path = sys.argv[2] if len(sys.argv) > 2 else "config.yaml"

    if not Path(csv_path).exists():
        print(f"Error: {csv_path} not found")
        sys.exit(1)
    if not Path(config_path).exists():
        print(f"Error: {config_path} not found")
        sys.exit(1)

    try:
        print(f"Loading config from {config_path}...")
        config = load_config(config_path)
        players = config["players"]
        court_count = len(config["courts"])

        print(f"Parsing schedule from {csv_path}...")
        partnerships, rounds = parse_csv_schedule(csv_path, players)
    except DrrsError as exc:
        print(f"Error: {exc}")
        sys.exit(1)

    print(f"Loaded {sum(len(r.matches) for r in rounds)} matches "
          f"in {len(rounds)} rounds")

    result = validate_tournament(players, partnerships, rounds, court_count)
    print(format_validation_report(result))

    stats = compute_stats(players, partnerships, rounds, court_count)
    print("\n" + format_stats_report(stats, players, partnerships))

    sys.exit(0 if result["valid"] else 1)


if __name__ == "__main__":
    main()

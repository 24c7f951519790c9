#!/usr/bin/env python3
"""Scan roster sizes and court counts to check every combination validates.

Usage: drrs-scan [--min-players N] [--max-players N] [--courts 1 2 3 4]
"""

import argparse
import sys

from drrs.byes import bye_counts
from drrs.courts import make_courts
from drrs.models import MAX_COURTS, MAX_PLAYERS, MIN_COURTS, MIN_PLAYERS, Player
from drrs.scheduler import can_generate_tournament, generate_tournament


def make_roster(count: int) -> list[Player]:
    return [Player(id=f"p{i}", name=f"Player {i}", email=f"player{i}@example.com")
            for i in range(1, count + 1)]


def scan_size(player_count: int, court_count: int) -> dict:
    """Run a single roster/court combination and return summary info."""
    result = generate_tournament(make_roster(player_count), make_courts(court_count))
    rounds = result["rounds"]
    validation = result["validation"]
    byes = list(bye_counts(result["partnerships"], rounds).values())

    return {
        "players": player_count,
        "courts": court_count,
        "ok": validation["valid"],
        "rounds": len(rounds),
        "matches": sum(len(r.matches) for r in rounds),
        "byes": (min(byes), max(byes)) if byes else (0, 0),
        "errors": len(validation["errors"]),
        "warnings": len(validation["warnings"]),
    }


def main():
    parser = argparse.ArgumentParser(
        description="Generate and validate schedules for a range of roster "
                    "sizes and court counts",
    )
    parser.add_argument(
        "--min-players", type=int, default=MIN_PLAYERS,
        help=f"Smallest roster to try (default: {MIN_PLAYERS})"
    )
    parser.add_argument(
        "--max-players", type=int, default=MAX_PLAYERS,
        help=f"Largest roster to try (default: {MAX_PLAYERS})"
    )
    parser.add_argument(
        "--courts", type=int, nargs="+",
        default=list(range(MIN_COURTS, MAX_COURTS + 1)),
        help="Court counts to try (default: 1 2 3 4)"
    )
    args = parser.parse_args()

    if not (can_generate_tournament(args.min_players, min(args.courts))
            and can_generate_tournament(args.max_players, max(args.courts))):
        print(f"Error: players must be {MIN_PLAYERS}-{MAX_PLAYERS} and courts "
              f"{MIN_COURTS}-{MAX_COURTS}")
        sys.exit(1)

    print(f"{'Players':>7}  {'Courts':>6}  {'Rounds':>6}  {'Matches':>7}  "
          f"{'Byes':>5}  {'Err':>3}  {'Warn':>4}  Result")
    print("-" * 60)

    failures = 0
    for n in range(args.min_players, args.max_players + 1):
        for c in args.courts:
            result = scan_size(n, c)
            status = "OK" if result["ok"] else "FAIL"
            lo, hi = result["byes"]
            print(f"{n:>7}  {c:>6}  {result['rounds']:>6}  {result['matches']:>7}  "
                  f"{f'{lo}-{hi}':>5}  {result['errors']:>3}  "
                  f"{result['warnings']:>4}  {status}", flush=True)
            if not result["ok"]:
                failures += 1

    print("-" * 60)
    if failures:
        print(f"\n{failures} combination(s) failed validation")
    else:
        print("\nAll combinations valid")

    sys.exit(1 if failures else 0)


if __name__ == "__main__":
    main()

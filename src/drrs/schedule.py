#!/usr/bin/env python3
"""Doubles Round-Robin Schedule Builder.

Generate mode (default):
    drrs-schedule [config.yaml] [-o OUTDIR]

    Generates a schedule from the YAML roster and writes:
      {OUTDIR}/schedule.txt  - Round-by-round + per-player schedule
      {OUTDIR}/schedule.csv  - One row per match/bye, re-importable
      {OUTDIR}/stats.txt     - Validation report + statistics

Verify mode:
    drrs-schedule --verify <schedule.csv> [config.yaml]

    Re-imports a schedule CSV and checks all constraints against the roster.
    Exit code 0 if valid, 1 if errors found.

Examples:
    drrs-schedule                           # default config.yaml
    drrs-schedule tuesday.yaml -o tuesday   # custom roster and output dir
    drrs-schedule --verify output/schedule.csv
"""

import argparse
import sys
from pathlib import Path

from drrs.config import load_config
from drrs.constraints import format_validation_report, validate_tournament
from drrs.exceptions import DrrsError
from drrs.output import write_schedule
from drrs.scheduler import generate_tournament
from drrs.stats import compute_stats, format_stats_report
from drrs.verify import parse_csv_schedule


def main():
    parser = argparse.ArgumentParser(
        description="Doubles Round-Robin Schedule Builder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Output files (generate mode):
  {outdir}/schedule.txt   Human-readable schedule (rounds + per-player)
  {outdir}/schedule.csv   Re-importable schedule CSV
  {outdir}/stats.txt      Validation report + balance statistics

Exit codes:
  0  Schedule valid
  1  Validation errors, bad roster/court count, or config error
""",
    )
    parser.add_argument(
        "config", nargs="?", default="config.yaml",
        help="Path to config YAML file (default: config.yaml)"
    )
    parser.add_argument(
        "--output-prefix", "-o", default="output",
        help="Output directory for generated files (default: output/)"
    )
    parser.add_argument(
        "--verify", metavar="CSV",
        help="Verify an existing schedule CSV instead of generating"
    )
    args = parser.parse_args()

    config_path = args.config
    if not Path(config_path).exists():
        print(f"Error: config file {config_path} not found")
        sys.exit(1)

    try:
        print(f"Loading config from {config_path}...")
        config = load_config(config_path)
        players = config["players"]
        courts = config["courts"]

        if args.verify:
            # Verification mode
            print(f"Verifying schedule from {args.verify}...")
            partnerships, rounds = parse_csv_schedule(args.verify, players)
            result = validate_tournament(players, partnerships, rounds, len(courts))
        else:
            # Generation mode
            print(f"Generating schedule ({len(players)} players, "
                  f"{len(courts)} courts)...")
            generated = generate_tournament(players, courts)
            partnerships = generated["partnerships"]
            rounds = generated["rounds"]
            result = generated["validation"]
    except DrrsError as exc:
        print(f"Error: {exc}")
        sys.exit(1)

    print(f"  {len(partnerships)} partnerships, {len(rounds)} rounds, "
          f"{sum(len(r.matches) for r in rounds)} matches")

    report = format_validation_report(result)
    print("\n" + report)

    stats = compute_stats(players, partnerships, rounds, len(courts))
    stats_text = format_stats_report(stats, players, partnerships)
    print("\n" + stats_text)

    if args.verify:
        sys.exit(0 if result["valid"] else 1)

    # Write outputs
    print("\nWriting output files...")
    write_schedule(players, rounds, config["tournament"],
                   output_prefix=args.output_prefix)

    stats_path = Path(args.output_prefix) / "stats.txt"
    stats_path.write_text(report + "\n\n" + stats_text)
    print(f"Written: {stats_path}")

    if result["valid"]:
        print("\nSchedule generated successfully!")
    else:
        print(f"\nSchedule has {len(result['errors'])} errors.")
        print("Review errors above before using this schedule.")
        sys.exit(1)


if __name__ == "__main__":
    main()

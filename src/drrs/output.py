"""Output formatters for doubles round-robin schedules."""

import csv
from io import StringIO
from pathlib import Path
from typing import Optional

from drrs.models import Player, Round, WinCondition

CSV_HEADER = [
    "Round", "Court", "Match_ID",
    "Team1_Player1", "Team1_Player2",
    "Team2_Player1", "Team2_Player2",
    "Bye",
]


def _tournament_header(tournament: Optional[dict]) -> list[str]:
    if not tournament:
        return ["DOUBLES ROUND-ROBIN SCHEDULE"]
    lines = [tournament.get("name") or "DOUBLES ROUND-ROBIN SCHEDULE"]
    if tournament.get("date"):
        lines.append(tournament["date"].strftime("%A %m/%d/%Y"))
    win_condition = tournament.get("win_condition")
    if isinstance(win_condition, WinCondition):
        lines.append("Games: " + win_condition.describe(tournament.get("target_score", 11)))
    return lines


def format_schedule(players: list[Player], rounds: list[Round],
                    tournament: Optional[dict] = None) -> str:
    """Format schedule as human-readable text, round by round."""
    lines = []
    lines.append("=" * 80)
    lines.extend(_tournament_header(tournament))
    lines.append("=" * 80)

    for rnd in rounds:
        lines.append(f"\n--- ROUND {rnd.number} ---")
        for m in sorted(rnd.matches, key=lambda x: (x.court or 0, x.id)):
            court = f"Court {m.court}" if m.court is not None else "Court ?"
            lines.append(
                f"  {court:<8}  {m.partnership1.label:<28} vs  {m.partnership2.label}"
            )
        if rnd.bye_partnership is not None:
            lines.append(f"  {'BYE':<8}  {rnd.bye_partnership.label}")

    # Per-player schedule
    lines.append("\n" + "=" * 80)
    lines.append("PER-PLAYER SCHEDULES")
    lines.append("=" * 80)

    for player in players:
        lines.append(f"\n{player.name or player.id}:")
        for rnd in rounds:
            entry = None
            for m in rnd.matches:
                own = m.partnership_of(player.id)
                if own is None:
                    continue
                partner = own.partner_of(player.id)
                opp = m.opponent(own.id)
                entry = (f"Court {m.court}  with {partner.name or partner.id:<12} "
                         f"vs {opp.label}")
                break
            if entry is None:
                bye = rnd.bye_partnership
                entry = "BYE" if bye is not None and bye.involves(player.id) else "sits out"
            lines.append(f"  R{rnd.number:>3}. {entry}")

    return "\n".join(lines)


def format_schedule_csv(rounds: list[Round]) -> str:
    """Format schedule as CSV, one row per match plus one per bye."""
    output = StringIO()
    writer = csv.writer(output)
    writer.writerow(CSV_HEADER)

    for rnd in rounds:
        for m in sorted(rnd.matches, key=lambda x: (x.court or 0, x.id)):
            writer.writerow([
                rnd.number, m.court if m.court is not None else "", m.id,
                m.partnership1.player1.id, m.partnership1.player2.id,
                m.partnership2.player1.id, m.partnership2.player2.id,
                "",
            ])
        if rnd.bye_partnership is not None:
            bye = rnd.bye_partnership
            writer.writerow([
                rnd.number, "", "",
                bye.player1.id, bye.player2.id,
                "", "",
                "yes",
            ])

    return output.getvalue()


def write_schedule(players: list[Player], rounds: list[Round],
                   tournament: Optional[dict] = None,
                   output_prefix: str = "output"):
    """Write schedule.txt and schedule.csv into {output_prefix}/ directory."""
    out_dir = Path(output_prefix)
    out_dir.mkdir(parents=True, exist_ok=True)

    schedule_path = out_dir / "schedule.txt"
    schedule_path.write_text(format_schedule(players, rounds, tournament))
    print(f"Written: {schedule_path}")

    csv_path = out_dir / "schedule.csv"
    csv_path.write_text(format_schedule_csv(rounds))
    print(f"Written: {csv_path}")

"""Text formats for saving and exporting a standings table."""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterable
from pathlib import Path

from domain.standings.errors import MalformedRowError
from domain.standings.team import TeamRecord

logger = logging.getLogger(__name__)

EXPORT_HEADER = (
    "Team,WIN,T W,SCORED DRAW,T S D,SCORELESSDRAW,T SL D,LOSS,"
    "G scored, G scored Against,G D,TOTAL,RANK"
)
ENCODING = "utf-8"


def parse_table_line(line: str, line_number: int | None = None) -> TeamRecord:
    """Parse one ``name,wins,losses,scored_draws,no_score_draws,gs,ga`` line."""
    return TeamRecord.from_fields(line.rstrip("\r\n").split(","), line_number=line_number)


def read_table(path: Path) -> list[TeamRecord]:
    """Read every team line from a saved table file; blank lines are skipped."""
    teams: list[TeamRecord] = []
    with Path(path).open("r", encoding=ENCODING) as file:
        for line_number, line in enumerate(file, start=1):
            if not line.strip():
                continue
            try:
                teams.append(parse_table_line(line, line_number))
            except MalformedRowError:
                logger.warning("Malformed table row in %s at line %d", path, line_number)
                raise
    logger.debug("Read %d teams from %s", len(teams), path)
    return teams


def write_table(path: Path, teams: Iterable[TeamRecord]) -> None:
    with Path(path).open("w", encoding=ENCODING, newline="") as file:
        for team in teams:
            file.write(team.to_line() + "\n")


def write_ranked_csv(path: Path, ranked: Iterable[tuple[int, TeamRecord]]) -> None:
    """Write the export header followed by one row per ``(rank, team)`` pair."""
    with Path(path).open("w", encoding=ENCODING, newline="") as file:
        file.write(EXPORT_HEADER + "\n")
        writer = csv.writer(file, lineterminator="\n")
        for rank, team in ranked:
            writer.writerow(team.to_export_row(rank))


__all__ = [
    "ENCODING",
    "EXPORT_HEADER",
    "parse_table_line",
    "read_table",
    "write_ranked_csv",
    "write_table",
]

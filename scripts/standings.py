#!/usr/bin/env python3
"""Record match results and inspect league standings stored in a database."""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from sqlalchemy.orm import Session

from db import DEFAULT_DB_URL, session_scope
from domain.common import Fixture, MatchOutcome, MatchResultBatch
from domain.config import load_league_config
from domain.standings import (
    MalformedRowError,
    RankingPolicy,
    StandingsLedger,
    TeamNotFoundError,
    parse_ranking_policy,
)
from repositories import (
    LeagueNotFoundError,
    ensure_standings_schema,
    league_exists,
    list_leagues,
    load_ledger,
    save_ledger,
)

DNP_MARKERS = {"dnp", "-"}

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="League standings ledger commands.",
)

DbUrlOption = Annotated[
    str,
    typer.Option("--db-url", help="Database URL. Defaults to a local SQLite file."),
]
LeagueArgument = Annotated[str, typer.Argument(help="League name.")]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@contextmanager
def _session(db_url: str) -> Iterator[Session]:
    with session_scope(db_url, ensure_schema=ensure_standings_schema) as session:
        yield session


def _load(session: Session, league: str) -> StandingsLedger:
    try:
        return load_ledger(session, league)
    except LeagueNotFoundError as exc:
        raise typer.BadParameter(str(exc), param_hint="league") from exc


def _store(session: Session, league: str, ledger: StandingsLedger) -> None:
    save_ledger(session, league, ledger)
    session.commit()
    ledger.mark_saved()


def parse_result(value: str) -> MatchOutcome:
    """Parse ``TEAM:SCORED:AGAINST`` or ``TEAM:dnp``."""
    team_name, _, marker = value.rpartition(":")
    if team_name and marker.strip().lower() in DNP_MARKERS:
        return MatchOutcome.not_played(team_name)

    parts = value.rsplit(":", 2)
    if len(parts) != 3 or not parts[0]:
        raise typer.BadParameter(
            f"Invalid result '{value}'. Expected TEAM:SCORED:AGAINST or TEAM:dnp.",
            param_hint="results",
        )
    try:
        return MatchOutcome(parts[0], int(parts[1]), int(parts[2]))
    except ValueError as exc:
        raise typer.BadParameter(
            f"Invalid goal counts in '{value}'.",
            param_hint="results",
        ) from exc


def _describe_batch(batch: MatchResultBatch) -> str:
    parts = []
    for outcome in batch:
        if outcome.did_not_play:
            parts.append(f"{outcome.team_name}=dnp")
        else:
            parts.append(f"{outcome.team_name}={outcome.goals_scored}-{outcome.goals_against}")
    return " ".join(parts) if parts else "(empty)"


def _apply_batch(db_url: str, league: str, batch: MatchResultBatch) -> None:
    with _session(db_url) as session:
        ledger = _load(session, league)
        try:
            ledger.apply_match_result_batch(batch)
        except TeamNotFoundError as exc:
            raise typer.BadParameter(str(exc), param_hint="results") from exc
        _store(session, league, ledger)
    typer.echo(f"league={league} recorded {_describe_batch(batch)} history={len(ledger.history)}")


@app.command()
def init(
    league: LeagueArgument,
    team: Annotated[
        list[str] | None,
        typer.Option("--team", "-t", help="Team name (repeatable)."),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option("--config", help="League TOML file providing roster and ranking."),
    ] = None,
    ranking: Annotated[
        str | None,
        typer.Option(
            "--ranking",
            help="Ranking policy (wins, points). Overrides the config file's ranking.",
        ),
    ] = None,
    db_url: DbUrlOption = DEFAULT_DB_URL,
) -> None:
    """Create a new league from team names or a league config file."""
    policy = None
    if ranking is not None:
        try:
            policy = parse_ranking_policy(ranking)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--ranking") from exc

    description = None
    try:
        if config is not None:
            league_config = load_league_config(config)
            ledger = league_config.create_ledger()
            description = league_config.description
            if policy is not None:
                ledger.ranking = policy
        else:
            ledger = StandingsLedger.from_names(team or [], ranking=policy or RankingPolicy.WINS)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--team/--config") from exc

    with _session(db_url) as session:
        if league_exists(session, league):
            raise typer.BadParameter(f"League '{league}' already exists.", param_hint="league")
        save_ledger(session, league, ledger, description=description)
        session.commit()
    typer.echo(f"league={league} teams={ledger.team_count} ranking={ledger.ranking.value}")


@app.command()
def add_teams(
    league: LeagueArgument,
    names: Annotated[list[str], typer.Argument(help="Team names to add.")],
    db_url: DbUrlOption = DEFAULT_DB_URL,
) -> None:
    """Add teams with empty statistics to a league."""
    with _session(db_url) as session:
        ledger = _load(session, league)
        try:
            ledger.add_teams(names)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="names") from exc
        _store(session, league, ledger)
    typer.echo(f"league={league} teams={ledger.team_count}")


@app.command()
def record(
    league: LeagueArgument,
    results: Annotated[
        list[str],
        typer.Argument(help="Results as TEAM:SCORED:AGAINST or TEAM:dnp; one call is one round."),
    ],
    db_url: DbUrlOption = DEFAULT_DB_URL,
) -> None:
    """Apply one round of results as a single undoable batch."""
    _apply_batch(db_url, league, tuple(parse_result(value) for value in results))


@app.command()
def fixture(
    league: LeagueArgument,
    home: Annotated[str, typer.Argument(help="Home team.")],
    away: Annotated[str, typer.Argument(help="Away team.")],
    home_goals: Annotated[int, typer.Argument(help="Goals scored by the home team.")],
    away_goals: Annotated[int, typer.Argument(help="Goals scored by the away team.")],
    db_url: DbUrlOption = DEFAULT_DB_URL,
) -> None:
    """Record one match between two teams as a single undoable batch."""
    try:
        batch = Fixture(home, away, home_goals, away_goals).outcomes()
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="away") from exc
    _apply_batch(db_url, league, batch)


@app.command()
def undo(league: LeagueArgument, db_url: DbUrlOption = DEFAULT_DB_URL) -> None:
    """Reverse the most recently recorded batch."""
    with _session(db_url) as session:
        ledger = _load(session, league)
        batch = ledger.undo_match_result_batch()
        if batch is None:
            typer.echo(f"league={league} nothing to undo")
            return
        _store(session, league, ledger)
    typer.echo(f"league={league} undid {_describe_batch(batch)} history={len(ledger.history)}")


@app.command()
def show(league: LeagueArgument, db_url: DbUrlOption = DEFAULT_DB_URL) -> None:
    """Print the ranked table."""
    with _session(db_url) as session:
        ledger = _load(session, league)

    typer.echo(f"league={league} ranking={ledger.ranking.value} teams={ledger.team_count}")
    for rank, team in ledger.ranked():
        typer.echo(
            f"{rank:2d}. {team.name:<20} "
            f"w={team.wins:3d} d={team.scored_draws + team.no_score_draws:3d} l={team.losses:3d} "
            f"gf={team.goals_scored:3d} ga={team.goals_against:3d} gd={team.goal_difference:+4d} "
            f"pts={team.points:3d}"
        )


@app.command()
def export(
    league: LeagueArgument,
    path: Annotated[Path, typer.Argument(help="Destination CSV file.")],
    db_url: DbUrlOption = DEFAULT_DB_URL,
) -> None:
    """Write the ranked table as CSV."""
    with _session(db_url) as session:
        ledger = _load(session, league)
    ledger.export_csv(path)
    typer.echo(f"league={league} exported={path}")


@app.command()
def save_table(
    league: LeagueArgument,
    path: Annotated[Path, typer.Argument(help="Destination table file.")],
    db_url: DbUrlOption = DEFAULT_DB_URL,
) -> None:
    """Write the league's team lines to a table file (history is not included)."""
    with _session(db_url) as session:
        ledger = _load(session, league)
    ledger.save(path)
    typer.echo(f"league={league} saved={path} teams={ledger.team_count}")


@app.command()
def import_table(
    league: LeagueArgument,
    path: Annotated[Path, typer.Argument(help="Table file to import.")],
    ranking: Annotated[
        str,
        typer.Option("--ranking", help="Ranking policy (wins, points)."),
    ] = RankingPolicy.WINS.value,
    replace: Annotated[
        bool,
        typer.Option("--replace", help="Overwrite an existing league of the same name."),
    ] = False,
    db_url: DbUrlOption = DEFAULT_DB_URL,
) -> None:
    """Create a league from a saved table file."""
    try:
        policy = parse_ranking_policy(ranking)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--ranking") from exc
    try:
        ledger = StandingsLedger.load(path, ranking=policy)
    except MalformedRowError as exc:
        typer.echo(f"Could not import {path}: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    with _session(db_url) as session:
        if league_exists(session, league) and not replace:
            raise typer.BadParameter(
                f"League '{league}' already exists. Use --replace to overwrite.",
                param_hint="league",
            )
        _store(session, league, ledger)
    typer.echo(f"league={league} imported={path} teams={ledger.team_count}")


@app.command("list-leagues")
def list_leagues_command(db_url: DbUrlOption = DEFAULT_DB_URL) -> None:
    """Print all stored leagues."""
    with _session(db_url) as session:
        names = list_leagues(session)
    if not names:
        typer.echo("no leagues")
        return
    for name in names:
        typer.echo(name)


if __name__ == "__main__":
    app()

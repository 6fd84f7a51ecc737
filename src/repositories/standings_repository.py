"""Persistence helpers for standings ledgers using SQLAlchemy."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from sqlalchemy import delete, insert, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from domain.common import MatchOutcome, MatchResultBatch
from domain.standings.errors import StandingsError
from domain.standings.ledger import StandingsLedger
from domain.standings.team import TeamRecord
from models import Base, League, LeagueTeam, ResultBatch, ResultBatchEntry

logger = logging.getLogger(__name__)

_STANDINGS_TABLES = (League, LeagueTeam, ResultBatch, ResultBatchEntry)


class LeagueNotFoundError(StandingsError, LookupError):
    def __init__(self, league_name: str) -> None:
        super().__init__(f"League not found: {league_name!r}")
        self.league_name = league_name


def ensure_standings_schema(engine: Engine) -> None:
    """Create the standings tables if they do not exist."""
    Base.metadata.create_all(bind=engine, tables=[model.__table__ for model in _STANDINGS_TABLES])


def _get_league(session: Session, league_name: str) -> League | None:
    return session.execute(select(League).where(League.name == league_name)).scalar_one_or_none()


def league_exists(session: Session, league_name: str) -> bool:
    return _get_league(session, league_name) is not None


def list_leagues(session: Session) -> list[str]:
    return list(session.scalars(select(League.name).order_by(League.name)))


def _delete_league_rows(session: Session, league_id: int) -> None:
    batch_ids = select(ResultBatch.id).where(ResultBatch.league_id == league_id)
    session.execute(delete(ResultBatchEntry).where(ResultBatchEntry.batch_id.in_(batch_ids)))
    session.execute(delete(ResultBatch).where(ResultBatch.league_id == league_id))
    session.execute(delete(LeagueTeam).where(LeagueTeam.league_id == league_id))


def save_ledger(
    session: Session,
    league_name: str,
    ledger: StandingsLedger,
    *,
    description: str | None = None,
) -> League:
    """Replace the stored snapshot (table order, counters, undo history) for a league.

    The caller commits; call ``ledger.mark_saved()`` afterwards.
    """
    league = _get_league(session, league_name)
    if league is None:
        league = League(name=league_name, description=description, ranking=ledger.ranking.value)
        session.add(league)
    else:
        if description is not None:
            league.description = description
        league.ranking = ledger.ranking.value
        league.updated_at = datetime.now(UTC).replace(tzinfo=None)
    session.flush()

    _delete_league_rows(session, league.id)

    teams = ledger.teams
    if teams:
        session.execute(
            insert(LeagueTeam),
            [
                {
                    "league_id": league.id,
                    "position": position,
                    "name": team.name,
                    "wins": team.wins,
                    "losses": team.losses,
                    "scored_draws": team.scored_draws,
                    "no_score_draws": team.no_score_draws,
                    "goals_scored": team.goals_scored,
                    "goals_against": team.goals_against,
                }
                for position, team in enumerate(teams)
            ],
        )

    history = ledger.history
    for sequence, batch in enumerate(history):
        batch_row = ResultBatch(league_id=league.id, sequence=sequence)
        session.add(batch_row)
        session.flush()
        if not batch:
            continue
        session.execute(
            insert(ResultBatchEntry),
            [
                {
                    "batch_id": batch_row.id,
                    "entry_index": entry_index,
                    "team_name": outcome.team_name,
                    "goals_scored": outcome.goals_scored,
                    "goals_against": outcome.goals_against,
                    "did_not_play": outcome.did_not_play,
                }
                for entry_index, outcome in enumerate(batch)
            ],
        )

    logger.info(
        "Stored league %s: teams=%d batches=%d",
        league_name,
        len(teams),
        len(history),
    )
    return league


def _load_history(session: Session, league_id: int) -> list[MatchResultBatch]:
    batch_rows = session.scalars(
        select(ResultBatch).where(ResultBatch.league_id == league_id).order_by(ResultBatch.sequence)
    ).all()
    history: list[MatchResultBatch] = []
    for batch_row in batch_rows:
        entries = session.scalars(
            select(ResultBatchEntry)
            .where(ResultBatchEntry.batch_id == batch_row.id)
            .order_by(ResultBatchEntry.entry_index)
        ).all()
        history.append(
            tuple(
                MatchOutcome(
                    team_name=entry.team_name,
                    goals_scored=entry.goals_scored,
                    goals_against=entry.goals_against,
                    did_not_play=entry.did_not_play,
                )
                for entry in entries
            )
        )
    return history


def load_ledger(session: Session, league_name: str) -> StandingsLedger:
    """Rebuild a ledger, including its undo history, from the stored snapshot."""
    league = _get_league(session, league_name)
    if league is None:
        raise LeagueNotFoundError(league_name)

    team_rows = session.scalars(
        select(LeagueTeam).where(LeagueTeam.league_id == league.id).order_by(LeagueTeam.position)
    ).all()
    teams = [
        TeamRecord(
            name=row.name,
            wins=row.wins,
            losses=row.losses,
            scored_draws=row.scored_draws,
            no_score_draws=row.no_score_draws,
            goals_scored=row.goals_scored,
            goals_against=row.goals_against,
        )
        for row in team_rows
    ]
    history = _load_history(session, league.id)
    logger.debug("Loaded league %s: teams=%d batches=%d", league_name, len(teams), len(history))
    return StandingsLedger(teams, history=history, ranking=league.ranking)


def delete_league(session: Session, league_name: str) -> None:
    league = _get_league(session, league_name)
    if league is None:
        raise LeagueNotFoundError(league_name)
    _delete_league_rows(session, league.id)
    session.delete(league)


__all__ = [
    "LeagueNotFoundError",
    "delete_league",
    "ensure_standings_schema",
    "league_exists",
    "list_leagues",
    "load_ledger",
    "save_ledger",
]

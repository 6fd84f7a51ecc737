"""Tests for storing standings ledgers in a SQL database."""

from __future__ import annotations

import pytest
from sqlalchemy.orm import Session, sessionmaker

from db import create_db_engine, create_session_factory
from domain.common import Fixture, MatchOutcome
from domain.standings import RankingPolicy, StandingsLedger
from repositories import (
    LeagueNotFoundError,
    delete_league,
    ensure_standings_schema,
    league_exists,
    list_leagues,
    load_ledger,
    save_ledger,
)


@pytest.fixture
def session_factory() -> sessionmaker[Session]:
    engine = create_db_engine("sqlite://")
    ensure_standings_schema(engine)
    return create_session_factory(engine)


def test_save_and_load_restores_table_and_history(session_factory: sessionmaker[Session]) -> None:
    ledger = StandingsLedger.from_names(["A", "B", "C"], ranking=RankingPolicy.POINTS)
    first = Fixture("A", "B", 2, 0).outcomes() + (MatchOutcome.not_played("C"),)
    second = Fixture("B", "C", 1, 1).outcomes()
    ledger.apply_match_result_batch(first)
    ledger.apply_match_result_batch(second)
    ledger.sort()

    with session_factory() as session:
        save_ledger(session, "premier", ledger, description="test league")
        session.commit()

    with session_factory() as session:
        loaded = load_ledger(session, "premier")

    assert [team.name for team in loaded] == [team.name for team in ledger]
    assert [team.counters() for team in loaded] == [team.counters() for team in ledger]
    assert loaded.history == (first, second)
    assert loaded.ranking is RankingPolicy.POINTS
    assert not loaded.is_modified()


def test_undo_after_reload(session_factory: sessionmaker[Session]) -> None:
    ledger = StandingsLedger.from_names(["A", "B"])
    ledger.apply_match_result_batch(Fixture("A", "B", 3, 1).outcomes())

    with session_factory() as session:
        save_ledger(session, "cup", ledger)
        session.commit()

    with session_factory() as session:
        loaded = load_ledger(session, "cup")
        loaded.undo_match_result_batch()
        save_ledger(session, "cup", loaded)
        session.commit()

    with session_factory() as session:
        reloaded = load_ledger(session, "cup")

    assert reloaded.history == ()
    assert all(team.counters() == (0, 0, 0, 0, 0, 0) for team in reloaded)


def test_empty_batch_survives_round_trip(session_factory: sessionmaker[Session]) -> None:
    ledger = StandingsLedger.from_names(["A"])
    ledger.apply_match_result_batch([])

    with session_factory() as session:
        save_ledger(session, "empty", ledger)
        session.commit()
        assert load_ledger(session, "empty").history == ((),)


def test_list_and_delete_leagues(session_factory: sessionmaker[Session]) -> None:
    with session_factory() as session:
        save_ledger(session, "beta", StandingsLedger.from_names(["X"]))
        save_ledger(session, "alpha", StandingsLedger())
        session.commit()

        assert list_leagues(session) == ["alpha", "beta"]
        assert league_exists(session, "beta")

        delete_league(session, "beta")
        session.commit()

        assert list_leagues(session) == ["alpha"]
        assert not league_exists(session, "beta")


def test_load_unknown_league_raises(session_factory: sessionmaker[Session]) -> None:
    with session_factory() as session:
        with pytest.raises(LeagueNotFoundError, match="nowhere"):
            load_ledger(session, "nowhere")

"""Persistence repositories."""

from repositories.standings_repository import (
    LeagueNotFoundError,
    delete_league,
    ensure_standings_schema,
    league_exists,
    list_leagues,
    load_ledger,
    save_ledger,
)

__all__ = [
    "LeagueNotFoundError",
    "delete_league",
    "ensure_standings_schema",
    "league_exists",
    "list_leagues",
    "load_ledger",
    "save_ledger",
]

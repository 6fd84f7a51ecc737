"""Standings ledger modules."""

from domain.standings.errors import MalformedRowError, StandingsError, TeamNotFoundError
from domain.standings.ledger import StandingsLedger
from domain.standings.ranking import RankingPolicy, parse_ranking_policy, ranking_key
from domain.standings.team import TeamRecord, classify_outcome

__all__ = [
    "MalformedRowError",
    "RankingPolicy",
    "StandingsError",
    "StandingsLedger",
    "TeamNotFoundError",
    "TeamRecord",
    "classify_outcome",
    "parse_ranking_policy",
    "ranking_key",
]
